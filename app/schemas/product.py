"""Product schemas"""

from datetime import datetime
from typing import Optional, List, Literal
from uuid import UUID
from pydantic import BaseModel, Field

Category = Literal[
    "pizza",
    "burgers",
    "salads",
    "desserts",
    "drinks",
    "sides",
    "asian",
    "mexican",
    "italian",
    "seafood",
]


class ProductCreate(BaseModel):
    """Create product request"""
    restaurant_id: UUID
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price_cents: int = Field(..., ge=0)
    image_url: Optional[str] = None
    category: Category
    ingredients: List[str] = []
    is_available: bool = True
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    spice_level: int = Field(0, ge=0, le=5)
    preparation_time_minutes: int = Field(15, ge=0)


class ProductUpdate(BaseModel):
    """Update product request"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price_cents: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = None
    category: Optional[Category] = None
    ingredients: Optional[List[str]] = None
    is_available: Optional[bool] = None
    is_vegetarian: Optional[bool] = None
    is_vegan: Optional[bool] = None
    is_gluten_free: Optional[bool] = None
    spice_level: Optional[int] = Field(None, ge=0, le=5)
    preparation_time_minutes: Optional[int] = Field(None, ge=0)


class ProductResponse(BaseModel):
    """Product response"""
    id: UUID
    restaurant_id: UUID
    name: str
    description: Optional[str]
    price_cents: int
    image_url: Optional[str]
    category: str
    ingredients: List[str]
    is_available: bool
    is_vegetarian: bool
    is_vegan: bool
    is_gluten_free: bool
    spice_level: int
    preparation_time_minutes: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
