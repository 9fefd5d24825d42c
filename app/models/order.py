"""Order model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Text, Integer
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.database import Base


class Order(Base):
    """Delivery orders, priced once at checkout"""
    __tablename__ = "orders"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    restaurant_id = Column(UUID(as_uuid=True), ForeignKey("restaurants.id"), nullable=False)
    coupon_id = Column(UUID(as_uuid=True), ForeignKey("coupons.id"))

    # Line item snapshots
    # [{"product_id": "...", "name": "...", "price_cents": 1500, "quantity": 1,
    #   "category": "pizza", "special_instructions": "..."}, ...]
    items = Column(JSON, nullable=False)

    # Pricing
    subtotal_cents = Column(Integer, nullable=False, default=0)
    discount_cents = Column(Integer, nullable=False, default=0)
    tax_cents = Column(Integer, nullable=False, default=0)
    delivery_fee_cents = Column(Integer, nullable=False, default=0)
    total_cents = Column(Integer, nullable=False, default=0)

    # Captured copies of customer data
    delivery_address = Column(JSON, nullable=False)
    contact_info = Column(JSON, nullable=False)

    # Payment
    payment_method = Column(String(20), nullable=False)  # credit_card, debit_card, paypal, cash
    payment_status = Column(String(20), nullable=False, default="pending")  # pending, completed, failed, refunded
    payment_id = Column(String(255))

    # Status
    order_status = Column(String(50), nullable=False, default="pending")  # pending, confirmed, preparing, out_for_delivery, delivered, cancelled

    special_instructions = Column(Text)

    # Timing
    estimated_delivery = Column(DateTime)
    delivered_at = Column(DateTime)
    cancelled_at = Column(DateTime)
    cancellation_reason = Column(Text)

    # Feedback
    rating = Column(Integer)
    review = Column(Text)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="orders")
    restaurant = relationship("Restaurant", back_populates="orders")
    coupon = relationship("Coupon")
