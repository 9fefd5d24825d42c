"""Test configuration and fixtures"""

from datetime import datetime
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from uuid import uuid4

from app.main import app
from app.database import Base, get_db
from app.models.user import User, UserRole
from app.models.restaurant import Restaurant
from app.models.product import Product
from app.models.coupon import Coupon
from app.models.order import Order
from app.api.auth import create_access_token, get_password_hash
from app.services.orders import OrderService
from app.services.store import OrderStore


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "testpass123"
HASHED_PASSWORD = get_password_hash(TEST_PASSWORD)

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0)

ADDRESS = {
    "street": "42 Elm Street",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
}

CONTACT = {
    "name": "Jane Doe",
    "phone": "5551234567",
    "email": "jane@example.com",
}


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


async def _make_user(db, email, name, role):
    user = User(
        id=uuid4(),
        email=email,
        hashed_password=HASHED_PASSWORD,
        name=name,
        role=role,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def customer(test_db):
    """A regular customer"""
    return await _make_user(test_db, "jane@example.com", "Jane Doe", UserRole.USER)


@pytest.fixture
async def other_customer(test_db):
    """A second customer who doesn't own the test orders"""
    return await _make_user(test_db, "bob@example.com", "Bob Smith", UserRole.USER)


@pytest.fixture
async def owner(test_db):
    """Owner of the test restaurant"""
    return await _make_user(test_db, "mario@example.com", "Mario Rossi", UserRole.RESTAURANT_OWNER)


@pytest.fixture
async def other_owner(test_db):
    """Owner of a different restaurant"""
    return await _make_user(test_db, "luigi@example.com", "Luigi Verdi", UserRole.RESTAURANT_OWNER)


@pytest.fixture
async def admin(test_db):
    """A marketplace admin"""
    return await _make_user(test_db, "admin@example.com", "Admin User", UserRole.ADMIN)


@pytest.fixture
async def restaurant(test_db, owner):
    """Restaurant with minOrder 10.00, deliveryFee 2.99, deliveryTime 30"""
    restaurant = Restaurant(
        id=uuid4(),
        owner_id=owner.id,
        name="Test Pizzeria",
        cuisine=["italian", "pizza"],
        address={"street": "1 Main St", "city": "Springfield", "state": "IL", "zip_code": "62701"},
        contact={"phone": "5559876543"},
        delivery_fee_cents=299,
        min_order_cents=1000,
        delivery_time_minutes=30,
        is_active=True,
    )
    test_db.add(restaurant)
    await test_db.commit()
    return restaurant


@pytest.fixture
async def other_restaurant(test_db, other_owner):
    """A second restaurant"""
    restaurant = Restaurant(
        id=uuid4(),
        owner_id=other_owner.id,
        name="Sushi Place",
        cuisine=["asian"],
        address={"street": "9 Side St", "city": "Shelbyville", "state": "IL", "zip_code": "62565"},
        contact={"phone": "5550001111"},
        delivery_fee_cents=399,
        min_order_cents=1500,
        delivery_time_minutes=45,
        is_active=True,
    )
    test_db.add(restaurant)
    await test_db.commit()
    return restaurant


async def _make_product(db, restaurant, name, price_cents, category, is_available=True):
    product = Product(
        id=uuid4(),
        restaurant_id=restaurant.id,
        name=name,
        description=f"{name} description",
        price_cents=price_cents,
        category=category,
        is_available=is_available,
    )
    db.add(product)
    await db.commit()
    return product


@pytest.fixture
async def pizza(test_db, restaurant):
    return await _make_product(test_db, restaurant, "Margherita Pizza", 1000, "pizza")


@pytest.fixture
async def salad(test_db, restaurant):
    return await _make_product(test_db, restaurant, "Caesar Salad", 500, "salads")


@pytest.fixture
async def sold_out(test_db, restaurant):
    return await _make_product(test_db, restaurant, "Seasonal Special", 1200, "pizza", is_available=False)


@pytest.fixture
async def sushi(test_db, other_restaurant):
    return await _make_product(test_db, other_restaurant, "Salmon Roll", 900, "asian")


@pytest.fixture
def make_coupon(test_db):
    """Factory for coupons; defaults to an active, unrestricted coupon"""
    async def _make(code, discount_type="percentage", discount_value=10, **fields):
        coupon = Coupon(
            id=uuid4(),
            code=code.upper(),
            discount_type=discount_type,
            discount_value=discount_value,
            applicable_restaurants=fields.pop("applicable_restaurants", []),
            applicable_categories=fields.pop("applicable_categories", []),
            used_count=fields.pop("used_count", 0),
            is_active=fields.pop("is_active", True),
            **fields,
        )
        test_db.add(coupon)
        await test_db.commit()
        return coupon
    return _make


@pytest.fixture
def make_order(test_db):
    """Factory for orders already in a given lifecycle state"""
    async def _make(user, restaurant, status="pending", **fields):
        order = Order(
            id=uuid4(),
            user_id=user.id,
            restaurant_id=restaurant.id,
            items=[{
                "product_id": str(uuid4()),
                "name": "Margherita Pizza",
                "price_cents": 1000,
                "quantity": 2,
                "category": "pizza",
                "special_instructions": None,
            }],
            subtotal_cents=2000,
            discount_cents=0,
            tax_cents=160,
            delivery_fee_cents=299,
            total_cents=2459,
            delivery_address=dict(ADDRESS, country="United States", instructions=None),
            contact_info=dict(CONTACT),
            payment_method="credit_card",
            payment_status="pending",
            order_status=status,
            created_at=fields.pop("created_at", FIXED_NOW),
            **fields,
        )
        test_db.add(order)
        await test_db.commit()
        return order
    return _make


@pytest.fixture
def store(test_db):
    return OrderStore(test_db)


@pytest.fixture
def service(store):
    """Order engine with a fixed clock"""
    return OrderService(store, tax_rate=0.08, clock=lambda: FIXED_NOW)


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user"""
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user)}"}
    return _headers
