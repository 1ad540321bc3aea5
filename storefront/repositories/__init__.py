"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.category_repository import CategoryRepository
from storefront.repositories.shipping_repository import ShippingMethodRepository
from storefront.repositories.inquiry_repository import InquiryRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.user_repository import UserRepository

__all__ = [
    'ProductRepository',
    'CategoryRepository',
    'ShippingMethodRepository',
    'InquiryRepository',
    'OrderRepository',
    'UserRepository',
]
