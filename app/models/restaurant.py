"""Restaurant model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, ForeignKey, JSON, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base


class Restaurant(Base):
    """Restaurants listed on the marketplace"""
    __tablename__ = "restaurants"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    cuisine = Column(JSON, default=list)  # ["italian", "pizza"]

    # Location and contact
    address = Column(JSON, default=dict)  # {"street": ..., "city": ..., "state": ..., "zip_code": ..., "country": ...}
    contact = Column(JSON, default=dict)  # {"phone": ..., "email": ..., "website": ...}

    # Operating hours (JSON: {"monday": {"open": "09:00", "close": "21:00"}, ...})
    hours = Column(JSON, default=dict)

    # Delivery settings
    delivery_fee_cents = Column(Integer, nullable=False, default=299)
    min_order_cents = Column(Integer, nullable=False, default=1000)
    delivery_time_minutes = Column(Integer, nullable=False, default=30)
    delivery_radius_miles = Column(Integer, default=5)

    # Aggregate rating, maintained incrementally and reconciled from orders
    rating = Column(Float, nullable=False, default=0.0)
    num_reviews = Column(Integer, nullable=False, default=0)
    rating_total = Column(Integer, nullable=False, default=0)

    images = Column(JSON, default=list)
    is_active = Column(Boolean, default=True)
    is_featured = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="restaurants")
    products = relationship("Product", back_populates="restaurant")
    orders = relationship("Order", back_populates="restaurant")

    @property
    def delivery_info(self) -> dict:
        return {
            "delivery_fee_cents": self.delivery_fee_cents,
            "min_order_cents": self.min_order_cents,
            "delivery_time_minutes": self.delivery_time_minutes,
            "delivery_radius_miles": self.delivery_radius_miles,
        }
