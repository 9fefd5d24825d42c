"""Coupon model"""

import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base


class Coupon(Base):
    """Discount codes redeemable at checkout"""
    __tablename__ = "coupons"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(50), unique=True, nullable=False)  # Stored upper-case
    description = Column(String(255))

    # "percentage" or "fixed"
    discount_type = Column(String(20), nullable=False, default="percentage")
    # Percent for percentage coupons, cents for fixed coupons
    discount_value = Column(Integer, nullable=False)
    max_discount_cents = Column(Integer)

    # Scoping (empty means unrestricted)
    applicable_restaurants = Column(JSON, default=list)  # ["<restaurant uuid>", ...]
    applicable_categories = Column(JSON, default=list)  # ["pizza", ...]

    # Validity
    valid_from = Column(DateTime)
    valid_until = Column(DateTime)
    usage_limit = Column(Integer)
    used_count = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """Check whether the coupon can currently be redeemed"""
        now = now or datetime.utcnow()
        if not self.is_active:
            return False
        if self.valid_from and now < self.valid_from:
            return False
        if self.valid_until and now > self.valid_until:
            return False
        if self.usage_limit is not None and (self.used_count or 0) >= self.usage_limit:
            return False
        return True
