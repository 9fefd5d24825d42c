"""Restaurant rating aggregation"""

from typing import Dict, Any
from uuid import UUID

import structlog

from app.errors import NotFound
from app.models.restaurant import Restaurant
from app.services.store import OrderStore

logger = structlog.get_logger()


def record_rating(restaurant: Restaurant, rating: int) -> Restaurant:
    """Fold one new rating into the restaurant's running sum and count"""
    restaurant.rating_total = (restaurant.rating_total or 0) + rating
    restaurant.num_reviews = (restaurant.num_reviews or 0) + 1
    restaurant.rating = restaurant.rating_total / restaurant.num_reviews
    return restaurant


async def recompute_rating(store: OrderStore, restaurant_id: UUID) -> Dict[str, Any]:
    """Rebuild a restaurant's rating from every rated order.

    Used to repair drift in the incremental counters. Running it twice with no
    new ratings writes the same values.
    """
    orders = await store.find_orders_by_restaurant(restaurant_id, rated_only=True)

    num_reviews = len(orders)
    rating_total = sum(order.rating for order in orders)
    rating = rating_total / num_reviews if num_reviews else 0.0

    found = await store.update_restaurant(
        restaurant_id,
        rating=rating,
        num_reviews=num_reviews,
        rating_total=rating_total,
    )
    if not found:
        raise NotFound("restaurant", restaurant_id)

    await store.commit()

    logger.info(
        "Restaurant rating recomputed",
        restaurant_id=str(restaurant_id),
        rating=rating,
        num_reviews=num_reviews,
    )

    return {
        "restaurant_id": restaurant_id,
        "rating": rating,
        "num_reviews": num_reviews,
    }


async def reconcile_all(store: OrderStore) -> int:
    """Recompute ratings for every active restaurant; returns how many ran"""
    restaurant_ids = await store.list_restaurant_ids()
    for restaurant_id in restaurant_ids:
        await recompute_rating(store, restaurant_id)
    return len(restaurant_ids)
