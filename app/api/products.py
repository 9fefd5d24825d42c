"""Product management API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.product import Product
from app.models.user import User, UserRole
from app.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from app.api.auth import require_role
from app.api.restaurants import get_restaurant_or_404, verify_restaurant_owner

router = APIRouter()


async def get_product_or_404(product_id: UUID, db: AsyncSession) -> Product:
    result = await db.execute(select(Product).where(Product.id == product_id))
    product = result.scalar_one_or_none()

    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return product


@router.get("", response_model=List[ProductResponse])
async def list_products(
    restaurant_id: Optional[UUID] = None,
    category: Optional[str] = None,
    q: Optional[str] = Query(None, min_length=1),
    is_available: Optional[bool] = True,
    limit: int = Query(50, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """List products, optionally by restaurant, category or search term"""
    query = select(Product)

    if restaurant_id:
        query = query.where(Product.restaurant_id == restaurant_id)

    if category:
        query = query.where(Product.category == category)

    if is_available is not None:
        query = query.where(Product.is_available == is_available)

    if q:
        search_term = f"%{q.lower()}%"
        query = query.where(
            or_(
                Product.name.ilike(search_term),
                Product.description.ilike(search_term),
            )
        )

    query = query.order_by(Product.category, Product.name).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    product_data: ProductCreate,
    current_user: User = Depends(require_role(UserRole.RESTAURANT_OWNER)),
    db: AsyncSession = Depends(get_db),
):
    """Add a product to one of your restaurants"""
    restaurant = await get_restaurant_or_404(product_data.restaurant_id, db)
    verify_restaurant_owner(restaurant, current_user)

    product = Product(**product_data.model_dump())
    db.add(product)
    await db.commit()
    await db.refresh(product)

    return product


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific product"""
    return await get_product_or_404(product_id, db)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    product_data: ProductUpdate,
    current_user: User = Depends(require_role(UserRole.RESTAURANT_OWNER)),
    db: AsyncSession = Depends(get_db),
):
    """Update a product; existing orders keep the price they were placed at"""
    product = await get_product_or_404(product_id, db)
    restaurant = await get_restaurant_or_404(product.restaurant_id, db)
    verify_restaurant_owner(restaurant, current_user)

    for field, value in product_data.model_dump(exclude_unset=True).items():
        setattr(product, field, value)

    await db.commit()
    await db.refresh(product)

    return product


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: UUID,
    current_user: User = Depends(require_role(UserRole.RESTAURANT_OWNER)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a product (soft delete: marks it unavailable)"""
    product = await get_product_or_404(product_id, db)
    restaurant = await get_restaurant_or_404(product.restaurant_id, db)
    verify_restaurant_owner(restaurant, current_user)

    product.is_available = False
    await db.commit()
