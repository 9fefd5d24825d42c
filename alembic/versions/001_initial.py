"""Initial migration

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('phone', sa.String(20)),
        sa.Column('address', postgresql.JSON()),
        sa.Column('role', sa.Enum('USER', 'RESTAURANT_OWNER', 'ADMIN', name='userrole'), default='USER'),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('refresh_token', sa.String(500)),
        sa.Column('last_login', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create restaurants table
    op.create_table(
        'restaurants',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('cuisine', postgresql.JSON()),
        sa.Column('address', postgresql.JSON()),
        sa.Column('contact', postgresql.JSON()),
        sa.Column('hours', postgresql.JSON()),
        sa.Column('delivery_fee_cents', sa.Integer(), nullable=False, server_default='299'),
        sa.Column('min_order_cents', sa.Integer(), nullable=False, server_default='1000'),
        sa.Column('delivery_time_minutes', sa.Integer(), nullable=False, server_default='30'),
        sa.Column('delivery_radius_miles', sa.Integer(), server_default='5'),
        sa.Column('rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('num_reviews', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('rating_total', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('images', postgresql.JSON()),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('is_featured', sa.Boolean(), default=False),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create products table
    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('price_cents', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(500)),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('ingredients', postgresql.JSON()),
        sa.Column('is_available', sa.Boolean(), default=True),
        sa.Column('is_vegetarian', sa.Boolean(), default=False),
        sa.Column('is_vegan', sa.Boolean(), default=False),
        sa.Column('is_gluten_free', sa.Boolean(), default=False),
        sa.Column('spice_level', sa.Integer(), default=0),
        sa.Column('preparation_time_minutes', sa.Integer(), default=15),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create coupons table
    op.create_table(
        'coupons',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('code', sa.String(50), unique=True, nullable=False),
        sa.Column('description', sa.String(255)),
        sa.Column('discount_type', sa.String(20), nullable=False),
        sa.Column('discount_value', sa.Integer(), nullable=False),
        sa.Column('max_discount_cents', sa.Integer()),
        sa.Column('applicable_restaurants', postgresql.JSON()),
        sa.Column('applicable_categories', postgresql.JSON()),
        sa.Column('valid_from', sa.DateTime()),
        sa.Column('valid_until', sa.DateTime()),
        sa.Column('usage_limit', sa.Integer()),
        sa.Column('used_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create orders table
    op.create_table(
        'orders',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('coupon_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('coupons.id')),
        sa.Column('items', postgresql.JSON(), nullable=False),
        sa.Column('subtotal_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('discount_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('tax_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('delivery_fee_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('delivery_address', postgresql.JSON(), nullable=False),
        sa.Column('contact_info', postgresql.JSON(), nullable=False),
        sa.Column('payment_method', sa.String(20), nullable=False),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('payment_id', sa.String(255)),
        sa.Column('order_status', sa.String(50), nullable=False, server_default='pending'),
        sa.Column('special_instructions', sa.Text()),
        sa.Column('estimated_delivery', sa.DateTime()),
        sa.Column('delivered_at', sa.DateTime()),
        sa.Column('cancelled_at', sa.DateTime()),
        sa.Column('cancellation_reason', sa.Text()),
        sa.Column('rating', sa.Integer()),
        sa.Column('review', sa.Text()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create indexes
    op.create_index('ix_restaurants_owner_id', 'restaurants', ['owner_id'])
    op.create_index('ix_products_restaurant_category', 'products', ['restaurant_id', 'category'])
    op.create_index('ix_orders_user_created', 'orders', ['user_id', 'created_at'])
    op.create_index('ix_orders_restaurant_created', 'orders', ['restaurant_id', 'created_at'])
    op.create_index('ix_orders_order_status', 'orders', ['order_status'])


def downgrade() -> None:
    op.drop_table('orders')
    op.drop_table('coupons')
    op.drop_table('products')
    op.drop_table('restaurants')
    op.drop_table('users')
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
