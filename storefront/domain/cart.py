"""
Cart and checkout models

The cart itself lives in the browser; these models describe what the
storefront sends when it asks for a priced quote or places an order.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from decimal import Decimal


class CartLine(BaseModel):
    product_id: int
    quantity: int = Field(..., ge=1)


class Cart(BaseModel):
    items: List[CartLine] = Field(..., min_length=1)
    shipping_method_id: Optional[int] = None


class CheckoutRequest(Cart):
    """Cart plus the customer's delivery details"""
    customer_name: str = Field(..., min_length=2)
    phone: str = Field(..., min_length=6)
    email: Optional[EmailStr] = None
    address: str = Field(..., min_length=2)
    city: Optional[str] = None
    notes: Optional[str] = None


class QuoteLine(BaseModel):
    product_id: int
    name: str
    quantity: int
    price: Decimal
    line_total: Decimal
    available_stock: int

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['price'] = float(self.price)
        data['line_total'] = float(self.line_total)
        return data


class CartQuote(BaseModel):
    """Server-priced cart"""
    lines: List[QuoteLine] = Field(default_factory=list)
    shipping_method_id: Optional[int] = None
    shipping_method_name: Optional[str] = None
    subtotal: Decimal = Decimal('0')
    shipping_cost: Decimal = Decimal('0')
    total: Decimal = Decimal('0')
    issues: List[str] = Field(default_factory=list)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def to_dict(self) -> dict:
        return {
            'lines': [line.to_dict() for line in self.lines],
            'shipping_method_id': self.shipping_method_id,
            'shipping_method_name': self.shipping_method_name,
            'subtotal': float(self.subtotal),
            'shipping_cost': float(self.shipping_cost),
            'total': float(self.total),
            'item_count': self.item_count,
            'issues': self.issues,
            'is_valid': self.is_valid,
        }
