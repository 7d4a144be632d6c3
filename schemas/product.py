from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: Optional[str] = Field(None, max_length=2000, description="Product description")
    price: Decimal = Field(..., ge=0, description="Product price must be non-negative")
    category: Optional[str] = Field(None, max_length=100, description="Catalog category")
    stock: int = Field(default=0, ge=0, description="Stock quantity must be non-negative")
    unit: Optional[str] = Field(None, max_length=30, description="Unit label, e.g. kg or bag")
    image: Optional[str] = Field(None, max_length=500, description="Product image reference")

    @validator('name')
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Product name cannot be empty')
        return v.strip()

    @validator('category')
    def validate_category(cls, v):
        if v is not None:
            v = v.strip().lower()
            return v or None
        return v

class ProductCreate(ProductBase):
    pass

class StockUpdate(BaseModel):
    delta: int = Field(..., description="Signed change applied to the stock count")

class ProductResponse(BaseModel):
    id: str
    shop_id: str
    name: str
    description: Optional[str]
    price: Decimal
    category: Optional[str]
    stock: int
    unit: Optional[str]
    image: Optional[str]
    is_available: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
