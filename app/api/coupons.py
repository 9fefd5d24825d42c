"""Coupon management API endpoints (admin only)"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.coupon import Coupon
from app.models.user import User, UserRole
from app.schemas.coupon import CouponCreate, CouponUpdate, CouponResponse, check_discount
from app.api.auth import require_role

router = APIRouter()


async def get_coupon_or_404(coupon_id: UUID, db: AsyncSession) -> Coupon:
    result = await db.execute(select(Coupon).where(Coupon.id == coupon_id))
    coupon = result.scalar_one_or_none()

    if not coupon:
        raise HTTPException(status_code=404, detail="Coupon not found")

    return coupon


@router.get("", response_model=List[CouponResponse])
async def list_coupons(
    current_user: User = Depends(require_role(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """List all coupons"""
    result = await db.execute(select(Coupon).order_by(Coupon.created_at.desc()))
    return result.scalars().all()


@router.post("", response_model=CouponResponse, status_code=status.HTTP_201_CREATED)
async def create_coupon(
    coupon_data: CouponCreate,
    current_user: User = Depends(require_role(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Create a coupon; codes are unique regardless of case"""
    existing = await db.execute(
        select(Coupon).where(func.upper(Coupon.code) == coupon_data.code)
    )
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Coupon code already exists")

    coupon_dict = coupon_data.model_dump()
    coupon_dict["applicable_restaurants"] = [str(r) for r in coupon_data.applicable_restaurants]
    coupon = Coupon(**coupon_dict)
    db.add(coupon)
    await db.commit()
    await db.refresh(coupon)

    return coupon


@router.put("/{coupon_id}", response_model=CouponResponse)
async def update_coupon(
    coupon_id: UUID,
    coupon_data: CouponUpdate,
    current_user: User = Depends(require_role(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Update a coupon"""
    coupon = await get_coupon_or_404(coupon_id, db)

    updates = coupon_data.model_dump(exclude_unset=True)
    if "discount_value" in updates:
        try:
            check_discount(coupon.discount_type, updates["discount_value"])
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    if "applicable_restaurants" in updates:
        updates["applicable_restaurants"] = [str(r) for r in updates["applicable_restaurants"]]

    for field, value in updates.items():
        setattr(coupon, field, value)

    await db.commit()
    await db.refresh(coupon)

    return coupon


@router.delete("/{coupon_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_coupon(
    coupon_id: UUID,
    current_user: User = Depends(require_role(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Deactivate a coupon"""
    coupon = await get_coupon_or_404(coupon_id, db)
    coupon.is_active = False
    await db.commit()
