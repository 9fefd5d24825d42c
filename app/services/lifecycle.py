"""Order status lifecycle.

A single transition table decides which status changes are possible and who
may make them. Both the restaurant-side status update and the customer
self-service cancel go through ``apply_transition``.
"""

import enum
from datetime import datetime
from typing import Dict, FrozenSet, Optional

from app.errors import InvalidTransition, Unauthorized
from app.models.order import Order


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, enum.Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PAYPAL = "paypal"
    CASH = "cash"


class ActorKind(str, enum.Enum):
    """Who is acting on an order, relative to that order"""
    CUSTOMER = "customer"  # the user who placed it
    RESTAURANT = "restaurant"  # the restaurant owner, or an admin


_RESTAURANT = frozenset({ActorKind.RESTAURANT})
_ANYONE = frozenset({ActorKind.RESTAURANT, ActorKind.CUSTOMER})

TRANSITIONS: Dict[OrderStatus, Dict[OrderStatus, FrozenSet[ActorKind]]] = {
    OrderStatus.PENDING: {
        OrderStatus.CONFIRMED: _RESTAURANT,
        OrderStatus.CANCELLED: _ANYONE,
    },
    OrderStatus.CONFIRMED: {
        OrderStatus.PREPARING: _RESTAURANT,
        OrderStatus.CANCELLED: _ANYONE,
    },
    OrderStatus.PREPARING: {
        OrderStatus.OUT_FOR_DELIVERY: _RESTAURANT,
    },
    OrderStatus.OUT_FOR_DELIVERY: {
        OrderStatus.DELIVERED: _RESTAURANT,
    },
    OrderStatus.DELIVERED: {},
    OrderStatus.CANCELLED: {},
}


def allowed_next(current: OrderStatus, actor: Optional[ActorKind] = None) -> FrozenSet[OrderStatus]:
    """Statuses reachable from ``current``, optionally limited to one actor kind"""
    targets = TRANSITIONS[OrderStatus(current)]
    if actor is None:
        return frozenset(targets)
    return frozenset(status for status, actors in targets.items() if actor in actors)


def check_transition(current: str, requested: str, actor: ActorKind) -> None:
    """Raise unless ``actor`` may move an order from ``current`` to ``requested``"""
    current_status = OrderStatus(current)
    requested_status = OrderStatus(requested)

    actors = TRANSITIONS[current_status].get(requested_status)
    if actors is None:
        raise InvalidTransition(current_status.value, requested_status.value)
    if actor not in actors:
        raise Unauthorized(f"move this order to {requested_status.value}")


def apply_transition(
    order: Order,
    requested: str,
    actor: ActorKind,
    now: datetime,
    reason: Optional[str] = None,
) -> Order:
    """Validate and apply a status change, stamping the matching timestamp"""
    check_transition(order.order_status, requested, actor)
    requested_status = OrderStatus(requested)

    order.order_status = requested_status.value

    if requested_status == OrderStatus.DELIVERED and order.delivered_at is None:
        order.delivered_at = now
    elif requested_status == OrderStatus.CANCELLED and order.cancelled_at is None:
        order.cancelled_at = now
        order.cancellation_reason = reason

    return order
