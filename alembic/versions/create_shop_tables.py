"""Create shop, catalog, review and opening hours tables

Revision ID: create_shop_tables
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = 'create_shop_tables'
down_revision = None
branch_labels = None
depends_on = None

SHOP_TYPES = ('feed', 'equipment', 'medicine', 'general')
WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

def upgrade():
    # Create shops table
    op.create_table('shops',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('owner_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.Enum(*SHOP_TYPES, name='shop_type'), nullable=False),
        sa.Column('street', sa.String(), nullable=True),
        sa.Column('city', sa.String(), nullable=True),
        sa.Column('state', sa.String(), nullable=True),
        sa.Column('country', sa.String(), nullable=True),
        sa.Column('postal_code', sa.String(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=False, server_default='0'),
        sa.Column('latitude', sa.Float(), nullable=False, server_default='0'),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), default=False),
        sa.Column('is_open', sa.Boolean(), default=True),
        sa.Column('payment_methods', sa.JSON(), nullable=False),
        sa.Column('has_delivery', sa.Boolean(), default=False),
        sa.Column('delivery_radius', sa.Float(), default=0.0),
        sa.Column('delivery_fee', sa.Float(), default=0.0),
        sa.Column('average_rating', sa.Float(), default=0.0),
        sa.Column('total_reviews', sa.Integer(), default=0),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_shops_id'), 'shops', ['id'], unique=False)
    op.create_index(op.f('ix_shops_email'), 'shops', ['email'], unique=True)
    op.create_index(op.f('ix_shops_owner_id'), 'shops', ['owner_id'], unique=False)
    op.create_index(op.f('ix_shops_type'), 'shops', ['type'], unique=False)
    op.create_index(op.f('ix_shops_is_open'), 'shops', ['is_open'], unique=False)
    op.create_index('ix_shops_location', 'shops', ['longitude', 'latitude'], unique=False)

    # Create opening hours table
    op.create_table('shop_opening_hours',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('shop_id', sa.String(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('day', sa.Enum(*WEEKDAYS, name='weekday'), nullable=False),
        sa.Column('open_time', sa.String(length=8), nullable=True),
        sa.Column('close_time', sa.String(length=8), nullable=True),
        sa.Column('is_closed', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE')
    )
    op.create_index(op.f('ix_shop_opening_hours_id'), 'shop_opening_hours', ['id'], unique=False)
    op.create_index(op.f('ix_shop_opening_hours_shop_id'), 'shop_opening_hours', ['shop_id'], unique=False)

    # Create products table
    op.create_table('shop_products',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('shop_id', sa.String(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('unit', sa.String(), nullable=True),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE')
    )
    op.create_index(op.f('ix_shop_products_id'), 'shop_products', ['id'], unique=False)
    op.create_index(op.f('ix_shop_products_shop_id'), 'shop_products', ['shop_id'], unique=False)
    op.create_index(op.f('ix_shop_products_category'), 'shop_products', ['category'], unique=False)

    # Create reviews table
    op.create_table('shop_reviews',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('shop_id', sa.String(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('reviewer_id', sa.String(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['shop_id'], ['shops.id'], ondelete='CASCADE'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_shop_reviews_rating_range')
    )
    op.create_index(op.f('ix_shop_reviews_id'), 'shop_reviews', ['id'], unique=False)
    op.create_index(op.f('ix_shop_reviews_shop_id'), 'shop_reviews', ['shop_id'], unique=False)
    op.create_index(op.f('ix_shop_reviews_reviewer_id'), 'shop_reviews', ['reviewer_id'], unique=False)

def downgrade():
    # Drop indexes and tables in reverse order
    op.drop_index(op.f('ix_shop_reviews_reviewer_id'), table_name='shop_reviews')
    op.drop_index(op.f('ix_shop_reviews_shop_id'), table_name='shop_reviews')
    op.drop_index(op.f('ix_shop_reviews_id'), table_name='shop_reviews')
    op.drop_table('shop_reviews')

    op.drop_index(op.f('ix_shop_products_category'), table_name='shop_products')
    op.drop_index(op.f('ix_shop_products_shop_id'), table_name='shop_products')
    op.drop_index(op.f('ix_shop_products_id'), table_name='shop_products')
    op.drop_table('shop_products')

    op.drop_index(op.f('ix_shop_opening_hours_shop_id'), table_name='shop_opening_hours')
    op.drop_index(op.f('ix_shop_opening_hours_id'), table_name='shop_opening_hours')
    op.drop_table('shop_opening_hours')

    op.drop_index('ix_shops_location', table_name='shops')
    op.drop_index(op.f('ix_shops_is_open'), table_name='shops')
    op.drop_index(op.f('ix_shops_type'), table_name='shops')
    op.drop_index(op.f('ix_shops_owner_id'), table_name='shops')
    op.drop_index(op.f('ix_shops_email'), table_name='shops')
    op.drop_index(op.f('ix_shops_id'), table_name='shops')
    op.drop_table('shops')
