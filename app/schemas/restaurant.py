"""Restaurant schemas"""

from datetime import datetime
from typing import Optional, Dict, Any, List
from uuid import UUID
from pydantic import BaseModel, Field, field_validator


class RestaurantCreate(BaseModel):
    """Create restaurant request"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    cuisine: List[str] = Field(..., min_length=1)
    address: Dict[str, Any]
    contact: Dict[str, Any]
    hours: Dict[str, Any] = {}
    delivery_fee_cents: int = Field(299, ge=0)
    min_order_cents: int = Field(1000, ge=0)
    delivery_time_minutes: int = Field(30, ge=0)
    delivery_radius_miles: int = Field(5, ge=0)
    images: List[str] = []


class RestaurantUpdate(BaseModel):
    """Update restaurant request"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    cuisine: Optional[List[str]] = None
    address: Optional[Dict[str, Any]] = None
    contact: Optional[Dict[str, Any]] = None
    hours: Optional[Dict[str, Any]] = None
    delivery_fee_cents: Optional[int] = Field(None, ge=0)
    min_order_cents: Optional[int] = Field(None, ge=0)
    delivery_time_minutes: Optional[int] = Field(None, ge=0)
    delivery_radius_miles: Optional[int] = Field(None, ge=0)
    images: Optional[List[str]] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None

    @field_validator(
        "name",
        "cuisine",
        "address",
        "contact",
        "hours",
        "images",
        "delivery_fee_cents",
        "min_order_cents",
        "delivery_time_minutes",
        "is_active",
        "is_featured",
        mode="before",
    )
    @classmethod
    def not_null(cls, value):
        # Omitted fields stay unchanged; null is not a valid value
        if value is None:
            raise ValueError("must not be null")
        return value


class RestaurantResponse(BaseModel):
    """Restaurant response"""
    id: UUID
    owner_id: UUID
    name: str
    description: Optional[str]
    cuisine: List[str]
    address: Dict[str, Any]
    contact: Dict[str, Any]
    hours: Dict[str, Any]
    delivery_fee_cents: int
    min_order_cents: int
    delivery_time_minutes: int
    delivery_radius_miles: Optional[int]
    rating: float
    num_reviews: int
    images: List[str]
    is_active: bool
    is_featured: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
