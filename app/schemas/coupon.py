"""Coupon schemas"""

from datetime import datetime
from typing import Optional, List, Literal
from uuid import UUID
from pydantic import BaseModel, Field, field_validator, model_validator

from app.models.product import PRODUCT_CATEGORIES


def check_categories(value: List[str]) -> List[str]:
    unknown = [category for category in value if category not in PRODUCT_CATEGORIES]
    if unknown:
        raise ValueError(f"Unknown categories: {', '.join(unknown)}")
    return value


def check_discount(discount_type: str, discount_value: int) -> None:
    """Percentage coupons are capped at 100 percent"""
    if discount_type == "percentage" and discount_value > 100:
        raise ValueError("Percentage discount cannot exceed 100")


class CouponCreate(BaseModel):
    """Create coupon request"""
    code: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    discount_type: Literal["percentage", "fixed"]
    discount_value: int = Field(..., ge=0)  # percent or cents
    max_discount_cents: Optional[int] = Field(None, ge=0)
    applicable_restaurants: List[UUID] = []
    applicable_categories: List[str] = []
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    usage_limit: Optional[int] = Field(None, ge=0)
    is_active: bool = True

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("applicable_categories")
    @classmethod
    def known_categories(cls, value: List[str]) -> List[str]:
        return check_categories(value)

    @model_validator(mode="after")
    def discount_in_range(self) -> "CouponCreate":
        check_discount(self.discount_type, self.discount_value)
        return self


class CouponUpdate(BaseModel):
    """Update coupon request"""
    description: Optional[str] = None
    discount_value: Optional[int] = Field(None, ge=0)
    max_discount_cents: Optional[int] = Field(None, ge=0)
    applicable_restaurants: Optional[List[UUID]] = None
    applicable_categories: Optional[List[str]] = None
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    usage_limit: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @field_validator(
        "discount_value",
        "applicable_restaurants",
        "applicable_categories",
        "is_active",
        mode="before",
    )
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("applicable_categories")
    @classmethod
    def known_categories(cls, value: List[str]) -> List[str]:
        return check_categories(value)


class CouponResponse(BaseModel):
    """Coupon response"""
    id: UUID
    code: str
    description: Optional[str]
    discount_type: str
    discount_value: int
    max_discount_cents: Optional[int]
    applicable_restaurants: List[str]
    applicable_categories: List[str]
    valid_from: Optional[datetime]
    valid_until: Optional[datetime]
    usage_limit: Optional[int]
    used_count: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
