"""Database models"""

from app.models.user import User, UserRole
from app.models.restaurant import Restaurant
from app.models.product import Product, PRODUCT_CATEGORIES
from app.models.coupon import Coupon
from app.models.order import Order

__all__ = [
    "User",
    "UserRole",
    "Restaurant",
    "Product",
    "PRODUCT_CATEGORIES",
    "Coupon",
    "Order",
]
