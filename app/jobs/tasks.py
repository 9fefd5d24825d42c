"""Background job tasks"""

import asyncio
import structlog

from app.jobs.celery_app import celery_app

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async functions in sync context"""
    return asyncio.run(coro)


@celery_app.task(name="reconcile_restaurant_ratings")
def reconcile_restaurant_ratings():
    """Repair drift between incremental rating counters and order history"""
    logger.info("Reconciling restaurant ratings")

    async def _reconcile():
        from app.database import SessionLocal, engine
        from app.services.ratings import reconcile_all
        from app.services.store import OrderStore

        try:
            async with SessionLocal() as db:
                return await reconcile_all(OrderStore(db))
        finally:
            # Pooled connections belong to this run's event loop
            await engine.dispose()

    count = run_async(_reconcile())
    logger.info("Reconciled restaurant ratings", restaurant_count=count)
    return count
