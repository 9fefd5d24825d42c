"""Pydantic schemas for request/response validation"""

from app.schemas.auth import (
    Token,
    TokenPayload,
    RefreshRequest,
    UserCreate,
    UserResponse,
)
from app.schemas.restaurant import (
    RestaurantCreate,
    RestaurantUpdate,
    RestaurantResponse,
)
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)
from app.schemas.coupon import (
    CouponCreate,
    CouponUpdate,
    CouponResponse,
)
from app.schemas.order import (
    OrderCreate,
    OrderItemCreate,
    DeliveryAddress,
    ContactInfo,
    OrderStatusUpdate,
    OrderCancel,
    OrderRate,
    PaymentUpdate,
    OrderResponse,
    RatingSummary,
)

__all__ = [
    "Token",
    "TokenPayload",
    "RefreshRequest",
    "UserCreate",
    "UserResponse",
    "RestaurantCreate",
    "RestaurantUpdate",
    "RestaurantResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "CouponCreate",
    "CouponUpdate",
    "CouponResponse",
    "OrderCreate",
    "OrderItemCreate",
    "DeliveryAddress",
    "ContactInfo",
    "OrderStatusUpdate",
    "OrderCancel",
    "OrderRate",
    "PaymentUpdate",
    "OrderResponse",
    "RatingSummary",
]
