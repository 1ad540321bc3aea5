"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.
"""
from storefront.domain.product import Product
from storefront.domain.catalog import Category, ShippingMethod
from storefront.domain.inquiry import Inquiry
from storefront.domain.order import Order, OrderItem, OrderStatus
from storefront.domain.cart import Cart, CartQuote
from storefront.domain.user import User

__all__ = [
    'Product',
    'Category',
    'ShippingMethod',
    'Inquiry',
    'Order',
    'OrderItem',
    'OrderStatus',
    'Cart',
    'CartQuote',
    'User',
]
