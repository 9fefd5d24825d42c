"""Tests for checkout pricing and coupon evaluation"""

from datetime import datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from app.models.coupon import Coupon
from app.services.pricing import (
    LineItem,
    evaluate_coupon,
    price_order,
    subtotal_of,
    to_cents,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)
RESTAURANT_ID = uuid4()


def _coupon(**fields):
    defaults = {
        "code": "SAVE10",
        "discount_type": "percentage",
        "discount_value": 10,
        "applicable_restaurants": [],
        "applicable_categories": [],
        "used_count": 0,
        "is_active": True,
    }
    defaults.update(fields)
    return Coupon(**defaults)


def _items(*specs):
    return [
        LineItem(product_id=uuid4(), name=name, price_cents=price, quantity=qty, category=category)
        for name, price, qty, category in specs
    ]


CART = _items(("Margherita Pizza", 1000, 2, "pizza"))


def test_no_coupon_scenario():
    """subtotal 20.00, fee 2.99 => tax 1.60, total 24.59"""
    breakdown = price_order(subtotal_of(CART), 299)

    assert breakdown.subtotal_cents == 2000
    assert breakdown.discount_cents == 0
    assert breakdown.tax_cents == 160
    assert breakdown.total_cents == 2459


def test_capped_percentage_coupon_scenario():
    """10% off capped at 1.50 => discount 1.50, tax 1.48, total 22.97"""
    coupon = _coupon(max_discount_cents=150)
    outcome = evaluate_coupon(coupon, 2000, RESTAURANT_ID, CART, now=NOW)

    assert outcome.applied
    assert outcome.discount_cents == 150

    breakdown = price_order(2000, 299, discount_cents=outcome.discount_cents)
    assert breakdown.tax_cents == 148
    assert breakdown.total_cents == 2297


@pytest.mark.parametrize("subtotal", [1000, 2000, 15000, 1_000_000])
def test_percentage_cap_never_exceeded(subtotal):
    coupon = _coupon(discount_value=25, max_discount_cents=500)
    outcome = evaluate_coupon(coupon, subtotal, RESTAURANT_ID, CART, now=NOW)

    assert outcome.discount_cents <= 500
    assert outcome.discount_cents == min(subtotal // 4, 500)


def test_uncapped_percentage_coupon():
    coupon = _coupon(discount_value=15)
    outcome = evaluate_coupon(coupon, 2000, RESTAURANT_ID, CART, now=NOW)

    assert outcome.discount_cents == 300


def test_fixed_coupon():
    coupon = _coupon(discount_type="fixed", discount_value=300)
    outcome = evaluate_coupon(coupon, 2000, RESTAURANT_ID, CART, now=NOW)

    assert outcome.applied
    assert outcome.discount_cents == 300


def test_fixed_coupon_never_exceeds_subtotal():
    coupon = _coupon(discount_type="fixed", discount_value=5000)
    outcome = evaluate_coupon(coupon, 2000, RESTAURANT_ID, CART, now=NOW)
    breakdown = price_order(2000, 299, discount_cents=outcome.discount_cents)

    assert outcome.discount_cents == 2000
    assert breakdown.tax_cents == 0
    assert breakdown.total_cents == 299


def test_missing_coupon_is_soft_failure():
    outcome = evaluate_coupon(None, 2000, RESTAURANT_ID, CART, now=NOW)

    assert not outcome.applied
    assert outcome.discount_cents == 0
    assert outcome.reason == "not_found"


@pytest.mark.parametrize(
    "fields",
    [
        {"is_active": False},
        {"valid_until": NOW - timedelta(days=1)},
        {"valid_from": NOW + timedelta(days=1)},
        {"usage_limit": 5, "used_count": 5},
    ],
)
def test_invalid_coupon_gives_no_discount(fields):
    outcome = evaluate_coupon(_coupon(**fields), 2000, RESTAURANT_ID, CART, now=NOW)

    assert not outcome.applied
    assert outcome.discount_cents == 0
    assert outcome.reason == "invalid"


def test_coupon_scoped_to_other_restaurant_is_voided():
    coupon = _coupon(applicable_restaurants=[str(uuid4())])
    outcome = evaluate_coupon(coupon, 2000, RESTAURANT_ID, CART, now=NOW)

    assert not outcome.applied
    assert outcome.discount_cents == 0
    assert outcome.reason == "restaurant_not_eligible"


def test_coupon_scoped_to_this_restaurant_applies():
    coupon = _coupon(applicable_restaurants=[str(RESTAURANT_ID)])
    outcome = evaluate_coupon(coupon, 2000, RESTAURANT_ID, CART, now=NOW)

    assert outcome.applied
    assert outcome.discount_cents == 200


def test_category_scope_requires_matching_item():
    coupon = _coupon(applicable_categories=["desserts"])
    outcome = evaluate_coupon(coupon, 2000, RESTAURANT_ID, CART, now=NOW)

    assert not outcome.applied
    assert outcome.reason == "category_not_eligible"


def test_category_scope_matches_any_line():
    items = _items(("Caesar Salad", 500, 1, "salads"), ("Tiramisu", 800, 2, "desserts"))
    coupon = _coupon(applicable_categories=["desserts"])
    outcome = evaluate_coupon(coupon, subtotal_of(items), RESTAURANT_ID, items, now=NOW)

    assert outcome.applied
    assert outcome.discount_cents == 210


def test_tax_rounds_half_up_to_cent():
    # 1999 * 0.08 = 159.92
    assert price_order(1999, 0).tax_cents == 160
    assert to_cents(Decimal("12.5")) == 13
    assert to_cents(Decimal("12.49")) == 12


@pytest.mark.parametrize("subtotal,discount,fee", [(2000, 0, 299), (3157, 315, 0), (1234, 1234, 499)])
def test_total_identity(subtotal, discount, fee):
    breakdown = price_order(subtotal, fee, discount_cents=discount)

    assert breakdown.total_cents == (
        breakdown.subtotal_cents
        - breakdown.discount_cents
        + breakdown.delivery_fee_cents
        + breakdown.tax_cents
    )


def test_custom_tax_rate():
    breakdown = price_order(2000, 299, tax_rate=Decimal("0.10"))

    assert breakdown.tax_cents == 200
    assert breakdown.total_cents == 2499


def test_line_item_snapshot_document():
    item = CART[0]
    doc = item.to_document()

    assert doc["product_id"] == str(item.product_id)
    assert doc["price_cents"] == 1000
    assert doc["quantity"] == 2
    assert item.line_total_cents == 2000
