"""
Product Domain Model

Represents a product in the storefront catalog.
This is the single source of truth for product data structure.
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from storefront.core.config import settings
from storefront.domain.catalog import reject_null


class Product(BaseModel):
    """
    Product domain model - represents a product in our catalog

    Fields:
        id: Internal product ID (primary key)
        name: Product name
        description: Long product description
        highlights: Short selling points shown above the description
        price: Selling price
        stock: Units available for sale
        category: Category slug this product belongs to

        # Media
        image: Main product image URL
        image_hint: Short hint describing the image (alt text)
        gallery_images: Additional image URLs

        # Sizing
        size: Available sizes (free text, e.g. "S, M, L")
        size_guide: Size guide text or image URL

        # Metadata
        created_at: When product was created
        updated_at: When product was last updated
    """

    # Primary identification
    id: int = Field(..., description="Internal product ID")
    name: str = Field(..., description="Product name")

    # Details
    description: str = Field("", description="Product description")
    highlights: Optional[str] = Field(None, description="Short highlights")
    category: str = Field(..., description="Category slug")

    # Pricing and inventory
    price: Decimal = Field(..., description="Selling price", ge=0)
    stock: int = Field(0, description="Units in stock")

    # Media
    image: Optional[str] = Field(None, description="Main image URL")
    image_hint: Optional[str] = Field(None, description="Image hint / alt text")
    gallery_images: List[str] = Field(default_factory=list, description="Gallery image URLs")

    # Sizing
    size: Optional[str] = Field(None, description="Available sizes")
    size_guide: Optional[str] = Field(None, description="Size guide")

    # Metadata
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    # Computed properties
    @property
    def is_out_of_stock(self) -> bool:
        """Check if product is out of stock"""
        return self.stock <= 0

    @property
    def is_low_stock(self) -> bool:
        """Check if product is in stock but at or below the low-stock threshold"""
        return 0 < self.stock <= settings.LOW_STOCK_THRESHOLD

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus computed properties
        """
        data = self.model_dump()

        data['is_out_of_stock'] = self.is_out_of_stock
        data['is_low_stock'] = self.is_low_stock

        # Convert Decimal to float for JSON compatibility
        data['price'] = float(data['price'])

        if data.get('created_at'):
            data['created_at'] = data['created_at'].isoformat()
        if data.get('updated_at'):
            data['updated_at'] = data['updated_at'].isoformat()

        return data


class ProductCreate(BaseModel):
    """Schema for creating a new product"""
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    highlights: Optional[str] = None
    price: Decimal = Field(..., gt=0)
    stock: int = Field(0, ge=0)
    category: str = Field(..., min_length=1)
    image: Optional[str] = None
    image_hint: Optional[str] = None
    gallery_images: List[str] = Field(default_factory=list)
    size: Optional[str] = None
    size_guide: Optional[str] = None


class ProductUpdate(BaseModel):
    """Schema for updating an existing product"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    highlights: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = None
    image_hint: Optional[str] = None
    gallery_images: Optional[List[str]] = None
    size: Optional[str] = None
    size_guide: Optional[str] = None

    @field_validator('name', 'description', 'price', 'stock', 'category', 'gallery_images')
    @classmethod
    def fields_not_null(cls, value):
        return reject_null(value)
