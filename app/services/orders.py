"""Order engine: checkout, status changes, cancellation, feedback.

Every operation receives an ``OrderStore`` and an ``Actor`` that has
already been authenticated; only ownership and role are checked here.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, List, Optional
from uuid import UUID

import structlog
from pydantic import BaseModel

from app.config import settings
from app.errors import (
    BelowMinimumOrder,
    CrossRestaurantOrder,
    InvalidTransition,
    ItemNotAvailable,
    NotAvailable,
    NotFound,
    Unauthorized,
    ValidationFailed,
)
from app.models.order import Order
from app.models.restaurant import Restaurant
from app.models.user import User, UserRole
from app.schemas.order import ContactInfo, DeliveryAddress, OrderItemCreate
from app.services import ratings
from app.services.lifecycle import (
    ActorKind,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    apply_transition,
)
from app.services.pricing import LineItem, evaluate_coupon, price_order, subtotal_of
from app.services.store import OrderStore

logger = structlog.get_logger()


class Actor(BaseModel):
    """Authenticated caller"""
    id: UUID
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(id=user.id, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def _is_restaurant_staff(restaurant: Optional[Restaurant], actor: Actor) -> bool:
    if actor.is_admin:
        return True
    return restaurant is not None and restaurant.owner_id == actor.id


class OrderService:
    """Order workflows over an injected store"""

    def __init__(
        self,
        store: OrderStore,
        tax_rate: Optional[float] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.store = store
        self.tax_rate = Decimal(str(settings.tax_rate if tax_rate is None else tax_rate))
        self.clock = clock

    async def create_order(
        self,
        user_id: UUID,
        restaurant_id: UUID,
        items: List[OrderItemCreate],
        delivery_address: DeliveryAddress,
        contact_info: ContactInfo,
        payment_method: str,
        coupon_code: Optional[str] = None,
        special_instructions: Optional[str] = None,
    ) -> Order:
        """Validate a cart, price it and persist the order"""
        restaurant = await self.store.find_restaurant_by_id(restaurant_id)
        if not restaurant or not restaurant.is_active:
            raise NotAvailable(restaurant_id=str(restaurant_id))

        line_items: List[LineItem] = []
        for item in items:
            if item.quantity < 1:
                raise ValidationFailed(
                    "Quantity must be at least 1",
                    field="quantity",
                    product_id=str(item.product_id),
                )

            product = await self.store.find_product_by_id(item.product_id)
            if not product or not product.is_available:
                raise ItemNotAvailable(item.product_id)

            if product.restaurant_id != restaurant.id:
                raise CrossRestaurantOrder(product.id, restaurant.id)

            line_items.append(
                LineItem(
                    product_id=product.id,
                    name=product.name,
                    price_cents=product.price_cents,
                    quantity=item.quantity,
                    category=product.category,
                    special_instructions=item.special_instructions,
                )
            )

        subtotal = subtotal_of(line_items)
        if subtotal < restaurant.min_order_cents:
            raise BelowMinimumOrder(restaurant.min_order_cents, subtotal)

        now = self.clock()

        coupon = None
        discount = 0
        if coupon_code:
            coupon = await self.store.find_coupon_by_code(coupon_code)
            outcome = evaluate_coupon(coupon, subtotal, restaurant.id, line_items, now=now)
            if outcome.applied:
                discount = outcome.discount_cents
            else:
                logger.info("Coupon not applied", code=coupon_code, reason=outcome.reason)
                coupon = None

        breakdown = price_order(
            subtotal,
            restaurant.delivery_fee_cents,
            discount_cents=discount,
            tax_rate=self.tax_rate,
        )

        order = Order(
            user_id=user_id,
            restaurant_id=restaurant.id,
            coupon_id=coupon.id if coupon else None,
            items=[line.to_document() for line in line_items],
            subtotal_cents=breakdown.subtotal_cents,
            discount_cents=breakdown.discount_cents,
            tax_cents=breakdown.tax_cents,
            delivery_fee_cents=breakdown.delivery_fee_cents,
            total_cents=breakdown.total_cents,
            delivery_address=delivery_address.model_dump(),
            contact_info=contact_info.model_dump(),
            payment_method=PaymentMethod(payment_method).value,
            payment_status=PaymentStatus.PENDING.value,
            order_status=OrderStatus.PENDING.value,
            special_instructions=special_instructions,
            estimated_delivery=now + timedelta(minutes=restaurant.delivery_time_minutes),
            created_at=now,
            updated_at=now,
        )

        # Order insert and coupon usage commit together
        try:
            await self.store.create_order(order)
            if coupon:
                await self.store.increment_coupon_usage(coupon.id)
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        logger.info(
            "Order created",
            order_id=str(order.id),
            restaurant_id=str(restaurant.id),
            user_id=str(user_id),
            total_cents=breakdown.total_cents,
            coupon_id=str(coupon.id) if coupon else None,
        )

        return await self.store.find_order_by_id(order.id)

    async def get_order(self, order_id: UUID, actor: Actor) -> Order:
        """Fetch an order visible to its customer, the restaurant owner, or an admin"""
        order = await self._load(order_id)
        if order.user_id != actor.id and not _is_restaurant_staff(order.restaurant, actor):
            raise Unauthorized("view this order")
        return order

    async def list_user_orders(self, actor: Actor) -> List[Order]:
        return await self.store.find_orders_by_user(actor.id)

    async def list_restaurant_orders(
        self,
        restaurant_id: UUID,
        actor: Actor,
        status: Optional[str] = None,
    ) -> List[Order]:
        restaurant = await self.store.find_restaurant_by_id(restaurant_id)
        if not restaurant:
            raise NotFound("restaurant", restaurant_id)
        if not _is_restaurant_staff(restaurant, actor):
            raise Unauthorized("view these orders")
        return await self.store.find_orders_by_restaurant(restaurant_id, status=status)

    async def update_status(
        self,
        order_id: UUID,
        new_status: str,
        actor: Actor,
        cancellation_reason: Optional[str] = None,
    ) -> Order:
        """Restaurant owner or admin moves an order along the lifecycle"""
        order = await self._load(order_id)
        if not _is_restaurant_staff(order.restaurant, actor):
            raise Unauthorized("update this order")

        previous = order.order_status
        apply_transition(
            order,
            new_status,
            ActorKind.RESTAURANT,
            now=self.clock(),
            reason=cancellation_reason,
        )
        await self._save(order)

        logger.info(
            "Order status updated",
            order_id=str(order.id),
            from_status=previous,
            to_status=order.order_status,
            actor_id=str(actor.id),
        )
        return await self.store.find_order_by_id(order.id)

    async def cancel(self, order_id: UUID, actor: Actor, reason: Optional[str] = None) -> Order:
        """Customer cancels their own order while it is pending or confirmed"""
        order = await self._load(order_id)
        if order.user_id != actor.id:
            raise Unauthorized("cancel this order")

        previous = order.order_status
        apply_transition(
            order,
            OrderStatus.CANCELLED.value,
            ActorKind.CUSTOMER,
            now=self.clock(),
            reason=reason,
        )
        await self._save(order)

        logger.info("Order cancelled", order_id=str(order.id), from_status=previous)
        return await self.store.find_order_by_id(order.id)

    async def rate(
        self,
        order_id: UUID,
        actor: Actor,
        rating: int,
        review: Optional[str] = None,
    ) -> Order:
        """Customer rates a delivered order once; the restaurant aggregate follows"""
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationFailed("Rating must be an integer from 1 to 5", field="rating")

        order = await self._load(order_id)
        if order.user_id != actor.id:
            raise Unauthorized("rate this order")

        if order.order_status != OrderStatus.DELIVERED.value:
            raise InvalidTransition(
                order.order_status,
                "rated",
                message="Only delivered orders can be rated",
            )

        if order.rating:
            raise InvalidTransition(
                order.order_status,
                "rated",
                message="Order has already been rated",
            )

        order.rating = rating
        order.review = review

        restaurant = await self.store.find_restaurant_by_id(order.restaurant_id)
        if restaurant:
            ratings.record_rating(restaurant, rating)

        await self._save(order)

        logger.info(
            "Order rated",
            order_id=str(order.id),
            restaurant_id=str(order.restaurant_id),
            rating=rating,
        )
        return await self.store.find_order_by_id(order.id)

    async def update_payment(
        self,
        order_id: UUID,
        payment_status: str,
        actor: Actor,
        payment_id: Optional[str] = None,
    ) -> Order:
        """Record payment state reported by an external processor"""
        order = await self._load(order_id)
        if not _is_restaurant_staff(order.restaurant, actor):
            raise Unauthorized("update payment for this order")

        order.payment_status = PaymentStatus(payment_status).value
        if payment_id is not None:
            order.payment_id = payment_id
        await self._save(order)

        logger.info(
            "Order payment updated",
            order_id=str(order.id),
            payment_status=order.payment_status,
        )
        return await self.store.find_order_by_id(order.id)

    async def _load(self, order_id: UUID) -> Order:
        order = await self.store.find_order_by_id(order_id)
        if not order:
            raise NotFound("order", order_id)
        return order

    async def _save(self, order: Order) -> None:
        order.updated_at = self.clock()
        try:
            await self.store.save_order(order)
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise
