"""Order API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.schemas.order import (
    OrderCreate,
    OrderStatusUpdate,
    OrderCancel,
    OrderRate,
    PaymentUpdate,
    OrderResponse,
)
from app.services.orders import Actor, OrderService
from app.services.store import OrderStore
from app.api.auth import get_current_active_user

router = APIRouter()


async def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    """Order engine bound to the request's session"""
    return OrderService(OrderStore(db))


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    order_data: OrderCreate,
    current_user: User = Depends(get_current_active_user),
    service: OrderService = Depends(get_order_service),
):
    """Create a new order from a cart"""
    return await service.create_order(
        user_id=current_user.id,
        restaurant_id=order_data.restaurant_id,
        items=order_data.items,
        delivery_address=order_data.delivery_address,
        contact_info=order_data.contact_info,
        payment_method=order_data.payment_method,
        coupon_code=order_data.coupon_code,
        special_instructions=order_data.special_instructions,
    )


@router.get("", response_model=List[OrderResponse])
async def list_my_orders(
    current_user: User = Depends(get_current_active_user),
    service: OrderService = Depends(get_order_service),
):
    """List the current user's orders, newest first"""
    return await service.list_user_orders(Actor.from_user(current_user))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    current_user: User = Depends(get_current_active_user),
    service: OrderService = Depends(get_order_service),
):
    """Get order details"""
    return await service.get_order(order_id, Actor.from_user(current_user))


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: UUID,
    status_data: OrderStatusUpdate,
    current_user: User = Depends(get_current_active_user),
    service: OrderService = Depends(get_order_service),
):
    """Move an order along its lifecycle (restaurant owner or admin)"""
    return await service.update_status(
        order_id,
        status_data.status.value,
        Actor.from_user(current_user),
        cancellation_reason=status_data.cancellation_reason,
    )


@router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: UUID,
    cancel_data: OrderCancel,
    current_user: User = Depends(get_current_active_user),
    service: OrderService = Depends(get_order_service),
):
    """Cancel one of your own orders while it is pending or confirmed"""
    return await service.cancel(order_id, Actor.from_user(current_user), reason=cancel_data.reason)


@router.post("/{order_id}/rate", response_model=OrderResponse)
async def rate_order(
    order_id: UUID,
    rate_data: OrderRate,
    current_user: User = Depends(get_current_active_user),
    service: OrderService = Depends(get_order_service),
):
    """Rate a delivered order"""
    return await service.rate(
        order_id,
        Actor.from_user(current_user),
        rating=rate_data.rating,
        review=rate_data.review,
    )


@router.put("/{order_id}/payment", response_model=OrderResponse)
async def update_payment(
    order_id: UUID,
    payment_data: PaymentUpdate,
    current_user: User = Depends(get_current_active_user),
    service: OrderService = Depends(get_order_service),
):
    """Record payment status reported by the payment provider"""
    return await service.update_payment(
        order_id,
        payment_data.payment_status.value,
        Actor.from_user(current_user),
        payment_id=payment_data.payment_id,
    )
