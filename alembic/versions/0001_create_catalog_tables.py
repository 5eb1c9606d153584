"""Create customers, products and orders tables

Revision ID: 0001_create_catalog_tables
Revises:
Create Date: 2024-01-15 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_create_catalog_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'customers',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_customers_created_at', 'customers', ['created_at'])

    op.create_table(
        'products',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False, unique=True),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('min_stock_level', sa.Integer(), server_default='10'),
        sa.Column('max_stock_level', sa.Integer(), server_default='100'),
        sa.Column('vendor', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    op.create_table(
        'orders',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('customer', sa.String(length=255), nullable=False),
        sa.Column('product', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('vendor', sa.String(length=255), nullable=True),
        sa.Column('customer_type', sa.String(length=100), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])
    op.create_index('idx_orders_date', 'orders', ['date'])
    op.create_index('idx_orders_status', 'orders', ['status'])
    op.create_index('idx_orders_product', 'orders', ['product'])
    op.create_index('idx_orders_customer', 'orders', ['customer'])


def downgrade():
    op.drop_table('orders')
    op.drop_table('products')
    op.drop_table('customers')
