# backend/modules/catalog/models/catalog_models.py

from datetime import date
from enum import Enum
from functools import partial

from sqlalchemy import Column, Date, Float, Index, Integer, String

from core.database import Base
from core.mixins import CreatedAtMixin, generate_id


class OrderStatus(str, Enum):
    """Statuses the dashboard knows about (stored as plain strings)"""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Customer(Base, CreatedAtMixin):
    __tablename__ = "customers"

    id = Column(String(32), primary_key=True, default=partial(generate_id, "cust"))
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)

    def __repr__(self):
        return f"<Customer(id={self.id}, name={self.name})>"


class Product(Base, CreatedAtMixin):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=partial(generate_id, "prod"))
    name = Column(String(255), nullable=False, unique=True)
    category = Column(String(100), nullable=False)
    price = Column(Float, nullable=False)
    stock = Column(Integer, nullable=False)
    min_stock_level = Column(Integer, default=10)
    max_stock_level = Column(Integer, default=100)
    vendor = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name}, stock={self.stock})>"


class Order(Base, CreatedAtMixin):
    """
    A single sale. ``customer`` and ``product`` hold names, not ids:
    the row is the historical record of who bought what.
    """

    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=partial(generate_id, "ord"))
    customer = Column(String(255), nullable=False)
    product = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)
    status = Column(String(20), nullable=False)
    date = Column(Date, nullable=False, default=date.today)
    vendor = Column(String(255), nullable=True)
    customer_type = Column(String(100), nullable=True)
    category = Column(String(100), nullable=True)

    __table_args__ = (
        Index("idx_orders_date", "date"),
        Index("idx_orders_status", "status"),
        Index("idx_orders_product", "product"),
        Index("idx_orders_customer", "customer"),
    )

    def __repr__(self):
        return f"<Order(id={self.id}, product={self.product}, amount={self.amount})>"
