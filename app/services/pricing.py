"""Checkout pricing and coupon eligibility.

Everything here is pure: callers pass in the restaurant settings, the line
item snapshots and the coupon they looked up, and get back an immutable price
breakdown. Amounts are integer cents; intermediate products are computed with
``Decimal`` and rounded half-up to the cent.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.coupon import Coupon

DEFAULT_TAX_RATE = Decimal("0.08")


class LineItem(BaseModel):
    """Snapshot of one product as it was priced at checkout"""
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    name: str
    price_cents: int = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    category: Optional[str] = None
    special_instructions: Optional[str] = Field(None, max_length=200)

    @property
    def line_total_cents(self) -> int:
        return self.price_cents * self.quantity

    def to_document(self) -> dict:
        return self.model_dump(mode="json")


class CouponOutcome(BaseModel):
    """Result of evaluating a coupon against a cart"""
    model_config = ConfigDict(frozen=True)

    discount_cents: int = 0
    applied: bool = False
    reason: Optional[str] = None


class PriceBreakdown(BaseModel):
    """Immutable order totals"""
    model_config = ConfigDict(frozen=True)

    subtotal_cents: int
    discount_cents: int
    tax_cents: int
    delivery_fee_cents: int
    total_cents: int


def to_cents(amount: Decimal) -> int:
    """Round a Decimal amount of cents half-up to a whole cent"""
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def subtotal_of(items: Iterable[LineItem]) -> int:
    return sum(item.line_total_cents for item in items)


def evaluate_coupon(
    coupon: Optional[Coupon],
    subtotal_cents: int,
    restaurant_id: UUID,
    items: List[LineItem],
    now=None,
) -> CouponOutcome:
    """Compute the discount a coupon grants for this cart.

    An unknown, expired or out-of-scope coupon is not an error: the outcome is
    simply a zero discount with ``applied=False`` and a reason for logging.
    """
    if coupon is None:
        return CouponOutcome(reason="not_found")

    if not coupon.is_valid(now):
        return CouponOutcome(reason="invalid")

    restaurants = [str(r) for r in (coupon.applicable_restaurants or [])]
    if restaurants and str(restaurant_id) not in restaurants:
        return CouponOutcome(reason="restaurant_not_eligible")

    categories = coupon.applicable_categories or []
    if categories and not any(item.category in categories for item in items):
        return CouponOutcome(reason="category_not_eligible")

    if coupon.discount_type == "percentage":
        discount = to_cents(Decimal(subtotal_cents) * Decimal(coupon.discount_value) / 100)
        if coupon.max_discount_cents is not None and discount > coupon.max_discount_cents:
            discount = coupon.max_discount_cents
    else:
        discount = coupon.discount_value

    # Discount can't push the taxable amount below zero
    discount = max(0, min(discount, subtotal_cents))

    return CouponOutcome(discount_cents=discount, applied=True)


def price_order(
    subtotal_cents: int,
    delivery_fee_cents: int,
    discount_cents: int = 0,
    tax_rate: Decimal = DEFAULT_TAX_RATE,
) -> PriceBreakdown:
    """Compute tax and total; tax applies after discount and before delivery"""
    taxable = subtotal_cents - discount_cents
    tax_cents = to_cents(Decimal(taxable) * Decimal(str(tax_rate)))
    total_cents = subtotal_cents - discount_cents + delivery_fee_cents + tax_cents

    return PriceBreakdown(
        subtotal_cents=subtotal_cents,
        discount_cents=discount_cents,
        tax_cents=tax_cents,
        delivery_fee_cents=delivery_fee_cents,
        total_cents=total_cents,
    )
