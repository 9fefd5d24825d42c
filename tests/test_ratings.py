"""Tests for restaurant rating aggregation"""

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.database import Base
from app.errors import NotFound
from app.models.order import Order
from app.models.restaurant import Restaurant
from app.models.user import User, UserRole
from app.services import ratings
from app.services.orders import Actor


@pytest.mark.asyncio
async def test_recompute_averages_rated_orders(test_db, store, customer, restaurant, make_order):
    """Ratings {5, 3, 4} => 4.0 over 3 reviews"""
    for score in (5, 3, 4):
        await make_order(customer, restaurant, status="delivered", rating=score)
    # Unrated orders don't count
    await make_order(customer, restaurant, status="delivered")
    await make_order(customer, restaurant, status="pending")

    summary = await ratings.recompute_rating(store, restaurant.id)

    assert summary == {"restaurant_id": restaurant.id, "rating": 4.0, "num_reviews": 3}

    await test_db.refresh(restaurant)
    assert restaurant.rating == 4.0
    assert restaurant.num_reviews == 3
    assert restaurant.rating_total == 12


@pytest.mark.asyncio
async def test_recompute_is_idempotent(test_db, store, customer, restaurant, make_order):
    for score in (2, 5):
        await make_order(customer, restaurant, status="delivered", rating=score)

    first = await ratings.recompute_rating(store, restaurant.id)
    second = await ratings.recompute_rating(store, restaurant.id)

    assert first == second
    assert second["rating"] == 3.5


@pytest.mark.asyncio
async def test_recompute_without_ratings_resets_to_zero(test_db, store, restaurant):
    restaurant.rating = 4.5
    restaurant.num_reviews = 2
    restaurant.rating_total = 9
    await test_db.commit()

    summary = await ratings.recompute_rating(store, restaurant.id)

    assert summary["rating"] == 0.0
    assert summary["num_reviews"] == 0

    await test_db.refresh(restaurant)
    assert restaurant.rating == 0.0
    assert restaurant.num_reviews == 0


@pytest.mark.asyncio
async def test_recompute_missing_restaurant(store):
    with pytest.raises(NotFound):
        await ratings.recompute_rating(store, uuid4())


@pytest.mark.asyncio
async def test_recompute_only_counts_own_orders(
    test_db, store, customer, restaurant, other_restaurant, make_order
):
    await make_order(customer, restaurant, status="delivered", rating=5)
    await make_order(customer, other_restaurant, status="delivered", rating=1)

    summary = await ratings.recompute_rating(store, restaurant.id)

    assert summary["rating"] == 5.0
    assert summary["num_reviews"] == 1


@pytest.mark.asyncio
async def test_incremental_matches_recompute(
    test_db, service, store, customer, restaurant, make_order
):
    actor = Actor.from_user(customer)
    for score in (5, 4, 4, 2):
        order = await make_order(customer, restaurant, status="delivered")
        await service.rate(order.id, actor, score)

    await test_db.refresh(restaurant)
    incremental = (restaurant.rating, restaurant.num_reviews)

    summary = await ratings.recompute_rating(store, restaurant.id)

    assert incremental == (3.75, 4)
    assert (summary["rating"], summary["num_reviews"]) == incremental


@pytest.mark.asyncio
async def test_reconcile_all_skips_inactive(
    test_db, store, customer, restaurant, other_restaurant, make_order
):
    other_restaurant.is_active = False
    await test_db.commit()
    await make_order(customer, restaurant, status="delivered", rating=3)

    count = await ratings.reconcile_all(store)

    assert count == 1
    await test_db.refresh(restaurant)
    assert restaurant.rating == 3.0


def test_record_rating_folds_into_running_sum():
    restaurant = Restaurant(rating=4.5, rating_total=9, num_reviews=2)

    ratings.record_rating(restaurant, 3)

    assert restaurant.rating_total == 12
    assert restaurant.num_reviews == 3
    assert restaurant.rating == 4.0


def test_reconcile_task_releases_connections_between_runs(tmp_path, monkeypatch):
    """Each run has its own event loop; no pooled connection may outlive it"""
    from app.jobs import tasks

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'jobs.db'}")
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _seed():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with session_factory() as db:
            owner = User(
                email="owner@example.com",
                hashed_password="not-a-real-hash",
                name="Night Owner",
                role=UserRole.RESTAURANT_OWNER,
            )
            db.add(owner)
            await db.flush()

            restaurant = Restaurant(owner_id=owner.id, name="Night Owl Diner", is_active=True)
            db.add(restaurant)
            await db.flush()

            db.add(
                Order(
                    user_id=owner.id,
                    restaurant_id=restaurant.id,
                    items=[],
                    delivery_address={},
                    contact_info={},
                    payment_method="cash",
                    order_status="delivered",
                    rating=4,
                )
            )
            await db.commit()
            restaurant_id = restaurant.id

        await engine.dispose()
        return restaurant_id

    async def _read_rating(restaurant_id):
        async with session_factory() as db:
            result = await db.execute(select(Restaurant).where(Restaurant.id == restaurant_id))
            rating = result.scalar_one().rating
        await engine.dispose()
        return rating

    restaurant_id = asyncio.run(_seed())

    monkeypatch.setattr("app.database.engine", engine)
    monkeypatch.setattr("app.database.SessionLocal", session_factory)

    for _ in range(2):
        assert tasks.reconcile_restaurant_ratings() == 1
        assert engine.sync_engine.pool.checkedin() == 0

    assert asyncio.run(_read_rating(restaurant_id)) == 4.0
