#!/usr/bin/env python3
"""
Seed script to create a demo restaurant, menu, coupon and users
"""

import asyncio
import uuid
from datetime import datetime, timedelta

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


async def seed_demo_data():
    """Seed demo data for development"""
    from app.database import SessionLocal, engine, Base
    from app.models.user import User, UserRole
    from app.models.restaurant import Restaurant
    from app.models.product import Product
    from app.models.coupon import Coupon

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo restaurant already exists
        from sqlalchemy import select
        result = await db.execute(
            select(Restaurant).where(Restaurant.name == "Mario's Italian Kitchen")
        )
        existing = result.scalar_one_or_none()

        if existing:
            print("Demo data already exists. Skipping...")
            return

        print("Creating demo users...")

        admin_user = User(
            id=uuid.uuid4(),
            email="admin@foodiehub.dev",
            hashed_password=pwd_context.hash("admin123"),
            name="System Admin",
            role=UserRole.ADMIN,
        )
        db.add(admin_user)

        owner = User(
            id=uuid.uuid4(),
            email="mario@marios-kitchen.com",
            hashed_password=pwd_context.hash("mario123"),
            name="Mario Rossi",
            role=UserRole.RESTAURANT_OWNER,
        )
        db.add(owner)

        customer = User(
            id=uuid.uuid4(),
            email="jane@example.com",
            hashed_password=pwd_context.hash("jane123"),
            name="Jane Doe",
            phone="5551234567",
            address={
                "street": "42 Elm Street",
                "city": "New York",
                "state": "NY",
                "zip_code": "10002",
                "country": "United States",
            },
            role=UserRole.USER,
        )
        db.add(customer)
        await db.flush()

        print("Creating demo restaurant...")

        restaurant = Restaurant(
            id=uuid.uuid4(),
            owner_id=owner.id,
            name="Mario's Italian Kitchen",
            description="Wood-fired pizza and fresh pasta since 1987",
            cuisine=["italian", "pizza"],
            address={
                "street": "123 Main Street",
                "city": "New York",
                "state": "NY",
                "zip_code": "10001",
                "country": "United States",
            },
            contact={"phone": "5559876543", "email": "hello@marios-kitchen.com"},
            hours={
                "monday": {"open": "11:00", "close": "22:00"},
                "tuesday": {"open": "11:00", "close": "22:00"},
                "wednesday": {"open": "11:00", "close": "22:00"},
                "thursday": {"open": "11:00", "close": "22:00"},
                "friday": {"open": "11:00", "close": "23:00"},
                "saturday": {"open": "12:00", "close": "23:00"},
                "sunday": {"open": "12:00", "close": "21:00"},
            },
            delivery_fee_cents=299,
            min_order_cents=1000,
            delivery_time_minutes=30,
            is_featured=True,
        )
        db.add(restaurant)
        await db.flush()

        print("Creating products...")

        products = [
            {"name": "Margherita Pizza", "description": "Fresh mozzarella, tomato sauce, and basil", "price_cents": 1499, "category": "pizza", "is_vegetarian": True},
            {"name": "Pepperoni Pizza", "description": "Classic pepperoni with mozzarella cheese", "price_cents": 1699, "category": "pizza"},
            {"name": "BBQ Chicken Pizza", "description": "Grilled chicken, BBQ sauce, red onions, and cilantro", "price_cents": 1799, "category": "pizza"},
            {"name": "Spaghetti Bolognese", "description": "Spaghetti with rich meat sauce", "price_cents": 1599, "category": "italian"},
            {"name": "Fettuccine Alfredo", "description": "Fettuccine in creamy parmesan sauce", "price_cents": 1499, "category": "italian", "is_vegetarian": True},
            {"name": "Caesar Salad", "description": "Romaine, parmesan, croutons, caesar dressing", "price_cents": 1099, "category": "salads"},
            {"name": "Garlic Knots", "description": "Baked knots with garlic butter and herbs", "price_cents": 599, "category": "sides", "is_vegetarian": True},
            {"name": "Tiramisu", "description": "Classic Italian coffee-flavored dessert", "price_cents": 899, "category": "desserts"},
            {"name": "Italian Soda", "description": "Sparkling water with your choice of flavor", "price_cents": 399, "category": "drinks", "is_vegan": True},
        ]

        for product_data in products:
            db.add(Product(restaurant_id=restaurant.id, **product_data))

        print("Creating coupons...")

        db.add(
            Coupon(
                code="WELCOME10",
                description="10% off your first order, up to $5",
                discount_type="percentage",
                discount_value=10,
                max_discount_cents=500,
                valid_until=datetime.utcnow() + timedelta(days=90),
            )
        )
        db.add(
            Coupon(
                code="PIZZA3",
                description="$3 off any order with a pizza",
                discount_type="fixed",
                discount_value=300,
                applicable_categories=["pizza"],
                applicable_restaurants=[str(restaurant.id)],
                usage_limit=100,
            )
        )

        await db.commit()

        print(f"""
Demo data created successfully!

Restaurant: Mario's Italian Kitchen
  ID: {restaurant.id}

Users:
  Admin:
    Email: admin@foodiehub.dev
    Password: admin123

  Restaurant Owner:
    Email: mario@marios-kitchen.com
    Password: mario123

  Customer:
    Email: jane@example.com
    Password: jane123

Menu: {len(products)} products created
Coupons: WELCOME10, PIZZA3
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
