"""
Order Domain Models

Represents customer orders placed through the storefront or entered by staff.
Line items are embedded in the order (stored as a JSONB document).
"""
from enum import Enum
from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


DEFAULT_PAYMENT_METHOD = "cash_on_delivery"


class OrderItem(BaseModel):
    """
    Order line item - a snapshot of the product at order time

    Fields:
        product_id: Reference to product catalog (None for ad-hoc lines)
        name: Product name at order time
        quantity: Number of units ordered
        price: Unit price at order time
    """

    product_id: Optional[int] = Field(None, description="Product catalog ID")
    name: str = Field(..., description="Product name at order time")
    quantity: int = Field(..., description="Quantity ordered", ge=1)
    price: Decimal = Field(..., description="Unit price", ge=0)

    model_config = ConfigDict(from_attributes=True)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['price'] = float(self.price)
        data['line_total'] = float(self.line_total)
        return data

    def to_document(self) -> dict:
        """JSON-safe form stored in the orders.items column"""
        return {
            'product_id': self.product_id,
            'name': self.name,
            'quantity': self.quantity,
            'price': str(self.price),
        }


class Order(BaseModel):
    """
    Order domain model - represents a customer order

    Fields:
        id: Internal order ID (primary key)
        order_number: Human-readable order number (ORD-YYYYMMDD-XXXXXX)

        # Customer
        customer_name, phone, email, address, city

        # Contents and money
        items: Embedded line items
        shipping_method_id / shipping_method_name: Chosen delivery option
        shipping_cost: Delivery charge
        subtotal: Sum of line totals
        total: subtotal + shipping_cost
        payment_method: How the customer pays (cash on delivery by default)

        # Status tracking
        status: pending, processing, shipped, delivered, cancelled
        notes: Customer or staff notes

        # Dates
        order_date: Date order was placed
        created_at / updated_at: Row timestamps
    """

    id: int = Field(..., description="Internal order ID")
    order_number: str = Field(..., description="Order number")

    customer_name: str = Field(..., description="Customer name")
    phone: str = Field(..., description="Customer phone")
    email: Optional[str] = Field(None, description="Customer email")
    address: str = Field(..., description="Delivery address")
    city: Optional[str] = Field(None, description="Delivery city")

    items: List[OrderItem] = Field(default_factory=list, description="Order items")
    shipping_method_id: Optional[int] = Field(None, description="Shipping method ID")
    shipping_method_name: Optional[str] = Field(None, description="Shipping method name at order time")
    shipping_cost: Decimal = Field(Decimal('0'), description="Shipping cost", ge=0)
    subtotal: Decimal = Field(..., description="Subtotal before shipping", ge=0)
    total: Decimal = Field(..., description="Total order amount", ge=0)
    payment_method: str = Field(DEFAULT_PAYMENT_METHOD, description="Payment method")

    status: OrderStatus = Field(OrderStatus.PENDING, description="Order status")
    notes: Optional[str] = Field(None, description="Notes")

    order_date: date = Field(..., description="Order date")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    # Computed properties
    @property
    def item_count(self) -> int:
        """Number of line items in order"""
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        """Total quantity of all items"""
        return sum(item.quantity for item in self.items)

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus computed properties
        """
        data = self.model_dump()

        data['item_count'] = self.item_count
        data['total_quantity'] = self.total_quantity
        data['is_cancelled'] = self.is_cancelled

        # Convert Decimal to float for JSON compatibility
        for field in ['shipping_cost', 'subtotal', 'total']:
            data[field] = float(data[field])

        data['order_date'] = self.order_date.isoformat()
        data['created_at'] = self.created_at.isoformat()
        if self.updated_at:
            data['updated_at'] = self.updated_at.isoformat()

        data['items'] = [item.to_dict() for item in self.items]

        return data


class OrderItemCreate(BaseModel):
    product_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0)


class OrderCreate(BaseModel):
    """Schema for creating a new order"""
    customer_name: str = Field(..., min_length=2)
    phone: str = Field(..., min_length=6)
    email: Optional[EmailStr] = None
    address: str = Field(..., min_length=2)
    city: Optional[str] = None
    items: List[OrderItemCreate] = Field(..., min_length=1)
    shipping_method_id: Optional[int] = None
    shipping_method_name: Optional[str] = None
    shipping_cost: Decimal = Field(Decimal('0'), ge=0)
    payment_method: str = DEFAULT_PAYMENT_METHOD
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None
    order_date: Optional[date] = None


class OrderUpdate(BaseModel):
    """Schema for updating an existing order"""
    status: Optional[OrderStatus] = None
    customer_name: Optional[str] = Field(None, min_length=2)
    phone: Optional[str] = Field(None, min_length=6)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, min_length=2)
    city: Optional[str] = None
    shipping_cost: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None
