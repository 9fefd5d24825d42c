"""Order schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field

from app.services.lifecycle import OrderStatus, PaymentMethod, PaymentStatus


class OrderItemCreate(BaseModel):
    """Cart line"""
    product_id: UUID
    quantity: int = Field(1, ge=1)
    special_instructions: Optional[str] = Field(None, max_length=200)


class DeliveryAddress(BaseModel):
    """Delivery address captured on the order"""
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    country: str = "United States"
    instructions: Optional[str] = None


class ContactInfo(BaseModel):
    """Contact details captured on the order"""
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: EmailStr


class OrderCreate(BaseModel):
    """Create order request"""
    restaurant_id: UUID
    items: List[OrderItemCreate] = Field(..., min_length=1)
    delivery_address: DeliveryAddress
    contact_info: ContactInfo
    payment_method: PaymentMethod
    coupon_code: Optional[str] = None
    special_instructions: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    """Restaurant-side status change"""
    status: OrderStatus
    cancellation_reason: Optional[str] = None


class OrderCancel(BaseModel):
    """Customer cancellation"""
    reason: Optional[str] = None


class OrderRate(BaseModel):
    """Customer feedback on a delivered order"""
    rating: int = Field(..., ge=1, le=5)
    review: Optional[str] = None


class PaymentUpdate(BaseModel):
    """Externally determined payment state"""
    payment_status: PaymentStatus
    payment_id: Optional[str] = None


class OrderItemResponse(BaseModel):
    """Order item in response"""
    product_id: UUID
    name: str
    price_cents: int
    quantity: int
    category: Optional[str] = None
    special_instructions: Optional[str] = None


class RestaurantSummary(BaseModel):
    """Restaurant details shown alongside an order"""
    id: UUID
    name: str
    cuisine: List[str] = []
    delivery_fee_cents: int
    min_order_cents: int
    delivery_time_minutes: int

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    """Customer details shown alongside an order"""
    id: UUID
    name: str
    email: str

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    """Order response"""
    id: UUID
    user_id: UUID
    restaurant_id: UUID
    coupon_id: Optional[UUID]
    items: List[OrderItemResponse]
    subtotal_cents: int
    discount_cents: int
    tax_cents: int
    delivery_fee_cents: int
    total_cents: int
    delivery_address: DeliveryAddress
    contact_info: ContactInfo
    payment_method: str
    payment_status: str
    payment_id: Optional[str]
    order_status: str
    special_instructions: Optional[str]
    estimated_delivery: Optional[datetime]
    delivered_at: Optional[datetime]
    cancelled_at: Optional[datetime]
    cancellation_reason: Optional[str]
    rating: Optional[int]
    review: Optional[str]
    restaurant: Optional[RestaurantSummary] = None
    user: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RatingSummary(BaseModel):
    """Result of a rating recomputation"""
    restaurant_id: UUID
    rating: float
    num_reviews: int
