"""Restaurant management API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.product import Product
from app.models.restaurant import Restaurant
from app.models.user import User, UserRole
from app.schemas.order import OrderResponse, RatingSummary
from app.schemas.product import ProductResponse
from app.schemas.restaurant import RestaurantCreate, RestaurantUpdate, RestaurantResponse
from app.services import ratings
from app.services.lifecycle import OrderStatus
from app.services.orders import Actor, OrderService
from app.services.store import OrderStore
from app.api.auth import get_current_active_user, require_role

router = APIRouter()


async def get_restaurant_or_404(restaurant_id: UUID, db: AsyncSession) -> Restaurant:
    result = await db.execute(select(Restaurant).where(Restaurant.id == restaurant_id))
    restaurant = result.scalar_one_or_none()

    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")

    return restaurant


def verify_restaurant_owner(restaurant: Restaurant, current_user: User) -> None:
    """Only the owner of a restaurant, or an admin, may manage it"""
    if current_user.role == UserRole.ADMIN:
        return

    if restaurant.owner_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to manage this restaurant",
        )


@router.get("", response_model=List[RestaurantResponse])
async def list_restaurants(
    q: Optional[str] = None,
    city: Optional[str] = None,
    cuisine: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """List active restaurants, optionally filtered by name, city or cuisine"""
    query = select(Restaurant).where(Restaurant.is_active == True)

    if q:
        query = query.where(Restaurant.name.ilike(f"%{q}%"))

    query = query.order_by(Restaurant.is_featured.desc(), Restaurant.rating.desc(), Restaurant.name)

    result = await db.execute(query)
    restaurants = result.scalars().all()

    # address and cuisine are embedded documents; filter them here
    if city:
        restaurants = [
            r for r in restaurants
            if ((r.address or {}).get("city") or "").lower() == city.lower()
        ]

    if cuisine:
        restaurants = [
            r for r in restaurants
            if cuisine.lower() in [c.lower() for c in (r.cuisine or [])]
        ]

    return restaurants[skip:skip + limit]


@router.post("", response_model=RestaurantResponse, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    restaurant_data: RestaurantCreate,
    current_user: User = Depends(require_role(UserRole.RESTAURANT_OWNER)),
    db: AsyncSession = Depends(get_db),
):
    """Create a restaurant owned by the current user"""
    restaurant = Restaurant(owner_id=current_user.id, **restaurant_data.model_dump())
    db.add(restaurant)
    await db.commit()
    await db.refresh(restaurant)

    return restaurant


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get restaurant details"""
    return await get_restaurant_or_404(restaurant_id, db)


@router.get("/{restaurant_id}/menu", response_model=List[ProductResponse])
async def get_restaurant_menu(
    restaurant_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """List the restaurant's available products grouped by category"""
    await get_restaurant_or_404(restaurant_id, db)

    result = await db.execute(
        select(Product)
        .where(Product.restaurant_id == restaurant_id, Product.is_available == True)
        .order_by(Product.category, Product.name)
    )
    return result.scalars().all()


@router.put("/{restaurant_id}", response_model=RestaurantResponse)
async def update_restaurant(
    restaurant_id: UUID,
    restaurant_data: RestaurantUpdate,
    current_user: User = Depends(require_role(UserRole.RESTAURANT_OWNER)),
    db: AsyncSession = Depends(get_db),
):
    """Update restaurant"""
    restaurant = await get_restaurant_or_404(restaurant_id, db)
    verify_restaurant_owner(restaurant, current_user)

    for field, value in restaurant_data.model_dump(exclude_unset=True).items():
        setattr(restaurant, field, value)

    await db.commit()
    await db.refresh(restaurant)

    return restaurant


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_restaurant(
    restaurant_id: UUID,
    current_user: User = Depends(require_role(UserRole.RESTAURANT_OWNER)),
    db: AsyncSession = Depends(get_db),
):
    """Delete restaurant (soft delete)"""
    restaurant = await get_restaurant_or_404(restaurant_id, db)
    verify_restaurant_owner(restaurant, current_user)

    restaurant.is_active = False
    await db.commit()


@router.get("/{restaurant_id}/orders", response_model=List[OrderResponse])
async def list_restaurant_orders(
    restaurant_id: UUID,
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """List orders placed with a restaurant (owner or admin)"""
    service = OrderService(OrderStore(db))
    return await service.list_restaurant_orders(
        restaurant_id,
        Actor.from_user(current_user),
        status=order_status.value if order_status else None,
    )


@router.post("/{restaurant_id}/rating/recompute", response_model=RatingSummary)
async def recompute_restaurant_rating(
    restaurant_id: UUID,
    current_user: User = Depends(require_role(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Rebuild the restaurant's rating from all rated orders (admin)"""
    return await ratings.recompute_rating(OrderStore(db), restaurant_id)
