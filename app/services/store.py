"""Persistence handle passed to the order engine"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.coupon import Coupon
from app.models.order import Order
from app.models.product import Product
from app.models.restaurant import Restaurant
from app.models.user import User


class OrderStore:
    """Reads and targeted writes the order engine needs, over one session.

    Writes are staged on the session; nothing is durable until ``commit``.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # Reads

    async def find_restaurant_by_id(self, restaurant_id: UUID) -> Optional[Restaurant]:
        result = await self.db.execute(select(Restaurant).where(Restaurant.id == restaurant_id))
        return result.scalar_one_or_none()

    async def find_product_by_id(self, product_id: UUID) -> Optional[Product]:
        result = await self.db.execute(select(Product).where(Product.id == product_id))
        return result.scalar_one_or_none()

    async def find_coupon_by_code(self, code: str) -> Optional[Coupon]:
        result = await self.db.execute(
            select(Coupon).where(func.upper(Coupon.code) == code.strip().upper())
        )
        return result.scalar_one_or_none()

    async def find_user_by_id(self, user_id: UUID) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_order_by_id(self, order_id: UUID) -> Optional[Order]:
        result = await self.db.execute(
            select(Order)
            .where(Order.id == order_id)
            .options(selectinload(Order.restaurant), selectinload(Order.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_orders_by_restaurant(
        self,
        restaurant_id: UUID,
        rated_only: bool = False,
        status: Optional[str] = None,
    ) -> List[Order]:
        query = select(Order).where(Order.restaurant_id == restaurant_id)

        if rated_only:
            query = query.where(Order.rating.is_not(None), Order.rating > 0)

        if status:
            query = query.where(Order.order_status == status)

        query = query.options(selectinload(Order.restaurant), selectinload(Order.user))
        query = query.order_by(Order.created_at.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_orders_by_user(self, user_id: UUID) -> List[Order]:
        result = await self.db.execute(
            select(Order)
            .where(Order.user_id == user_id)
            .options(selectinload(Order.restaurant), selectinload(Order.user))
            .order_by(Order.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_restaurant_ids(self, active_only: bool = True) -> List[UUID]:
        query = select(Restaurant.id)
        if active_only:
            query = query.where(Restaurant.is_active == True)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    # Writes

    async def create_order(self, order: Order) -> Order:
        self.db.add(order)
        await self.db.flush()
        return order

    async def save_order(self, order: Order) -> Order:
        self.db.add(order)
        await self.db.flush()
        return order

    async def increment_coupon_usage(self, coupon_id: UUID) -> None:
        """Bump ``used_count`` in SQL so concurrent checkouts don't lose updates"""
        await self.db.execute(
            update(Coupon)
            .where(Coupon.id == coupon_id)
            .values(used_count=Coupon.used_count + 1)
        )

    async def update_restaurant(self, restaurant_id: UUID, **fields) -> bool:
        result = await self.db.execute(
            update(Restaurant).where(Restaurant.id == restaurant_id).values(**fields)
        )
        return result.rowcount > 0

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()
