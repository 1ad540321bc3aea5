"""
Catalog configuration models: categories and shipping methods
"""
import re
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, Literal
from datetime import datetime
from decimal import Decimal


def slugify(name: str) -> str:
    """Category slug: lower-cased name with whitespace runs replaced by '-'"""
    return re.sub(r"\s+", "-", name.strip().lower())


def reject_null(value):
    """Update schemas: a field may be left out but not set to null"""
    if value is None:
        raise ValueError("may not be null")
    return value


class Category(BaseModel):
    """Product category, keyed by its slug"""

    id: str = Field(..., description="Category slug")
    name: str = Field(..., description="Display name")
    description: Optional[str] = Field(None, description="Category description")
    image: Optional[str] = Field(None, description="Category image URL")
    product_count: int = Field(0, description="Products in this category (listings only)")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        data = self.model_dump()
        for field in ['created_at', 'updated_at']:
            if data.get(field):
                data[field] = data[field].isoformat()
        return data


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=2)
    description: Optional[str] = None
    image: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, value):
        # Length is checked on the stripped name the slug is built from
        return value.strip() if isinstance(value, str) else value


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    description: Optional[str] = None
    image: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator('name')
    @classmethod
    def name_not_null(cls, value):
        return reject_null(value)


ShippingStatus = Literal['active', 'inactive']


class ShippingMethod(BaseModel):
    """Delivery option offered at checkout"""

    id: int = Field(..., description="Shipping method ID")
    name: str = Field(..., description="Name shown at checkout")
    cost: Decimal = Field(..., description="Delivery charge", ge=0)
    estimated_time: str = Field(..., description="Estimated delivery time, e.g. '24-48 hours'")
    status: ShippingStatus = Field('active', description="active or inactive")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_active(self) -> bool:
        return self.status == 'active'

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['cost'] = float(data['cost'])
        for field in ['created_at', 'updated_at']:
            if data.get(field):
                data[field] = data[field].isoformat()
        return data


class ShippingMethodCreate(BaseModel):
    name: str = Field(..., min_length=2)
    cost: Decimal = Field(..., ge=0)
    estimated_time: str = Field(..., min_length=2)
    status: ShippingStatus = 'active'


class ShippingMethodUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    cost: Optional[Decimal] = Field(None, ge=0)
    estimated_time: Optional[str] = Field(None, min_length=2)
    status: Optional[ShippingStatus] = None

    @field_validator('name', 'cost', 'estimated_time', 'status')
    @classmethod
    def fields_not_null(cls, value):
        return reject_null(value)
