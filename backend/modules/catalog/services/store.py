# backend/modules/catalog/services/store.py

"""
Store accessor for the dashboard.

Every read used by the reporting layer goes through ``DashboardStore``.
Reads return plain dict rows restricted to the requested fields; apart
from an optional row limit and ordering, no filtering is pushed down to
the database. Writes are single statements committed individually.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import Base, get_db
from core.exceptions import NotFoundError, UniqueConstraintError

from ..models.catalog_models import Customer, Order, Product

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

ORDER_FIELDS = (
    "id",
    "customer",
    "product",
    "amount",
    "status",
    "date",
    "vendor",
    "customer_type",
    "category",
    "created_at",
)
PRODUCT_FIELDS = (
    "id",
    "name",
    "category",
    "price",
    "stock",
    "min_stock_level",
    "max_stock_level",
    "vendor",
    "created_at",
)
CUSTOMER_FIELDS = ("id", "name", "email", "phone", "created_at")

_FIELDS = {Order: ORDER_FIELDS, Product: PRODUCT_FIELDS, Customer: CUSTOMER_FIELDS}

# Orderings the accessor accepts, per table
_ORDERINGS = {
    Order: {
        "recent": lambda: (Order.created_at.desc(),),
        "date": lambda: (Order.date.desc(), Order.created_at.desc()),
        "amount": lambda: (Order.amount.desc(),),
    },
    Product: {
        "recent": lambda: (Product.created_at.desc(),),
        "stock": lambda: (Product.stock.asc(),),
    },
    Customer: {
        "recent": lambda: (Customer.created_at.desc(),),
    },
}

DUPLICATE_PRODUCT_MESSAGE = "Product name must be unique"


class DashboardStore:
    """Parameterized access to the customers, products and orders tables"""

    def __init__(self, db: Session):
        self.db = db

    # Reads

    def list_orders(
        self,
        fields: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
    ) -> List[Row]:
        return self._list(Order, fields, limit, order_by)

    def list_products(
        self,
        fields: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
    ) -> List[Row]:
        return self._list(Product, fields, limit, order_by)

    def list_customers(
        self,
        fields: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
    ) -> List[Row]:
        return self._list(Customer, fields, limit, order_by)

    def order_stats(
        self, product: Optional[str] = None, customer: Optional[str] = None
    ) -> Tuple[int, float]:
        """Order count and summed amount for one product and/or customer name"""
        query = self.db.query(
            func.count(Order.id), func.coalesce(func.sum(Order.amount), 0.0)
        )
        if product is not None:
            query = query.filter(Order.product == product)
        if customer is not None:
            query = query.filter(Order.customer == customer)
        count, total = query.one()
        return int(count), float(total)

    def _list(
        self,
        model: Type[Base],
        fields: Optional[Iterable[str]],
        limit: Optional[int],
        order_by: Optional[str],
    ) -> List[Row]:
        allowed = _FIELDS[model]
        names = list(fields) if fields is not None else list(allowed)
        unknown = [name for name in names if name not in allowed]
        if unknown:
            raise ValueError(f"Unknown {model.__tablename__} fields: {', '.join(unknown)}")

        query = self.db.query(*[getattr(model, name) for name in names])

        if order_by is not None:
            orderings = _ORDERINGS[model]
            if order_by not in orderings:
                raise ValueError(f"Unsupported ordering '{order_by}' for {model.__tablename__}")
            query = query.order_by(*orderings[order_by]())

        if limit is not None:
            query = query.limit(limit)

        return [dict(row._mapping) for row in query.all()]

    # Writes

    def get(self, model: Type[Base], entity_id: str):
        return self.db.query(model).filter(model.id == entity_id).first()

    def insert(self, entity):
        self.db.add(entity)
        self._commit(entity)
        self.db.refresh(entity)
        logger.info(f"Created {entity.__tablename__} row {entity.id}")
        return entity

    def update(self, model: Type[Base], entity_id: str, changes: Dict[str, Any]):
        entity = self.get(model, entity_id)
        if entity is None:
            raise NotFoundError(f"{model.__name__} {entity_id} not found")

        for field, value in changes.items():
            setattr(entity, field, value)

        self._commit(entity)
        self.db.refresh(entity)
        logger.info(f"Updated {model.__tablename__} row {entity_id}: {sorted(changes)}")
        return entity

    def delete(self, model: Type[Base], entity_id: str) -> bool:
        """Delete by id; deleting a missing row is not an error"""
        deleted = self.db.query(model).filter(model.id == entity_id).delete()
        self.db.commit()
        if deleted:
            logger.info(f"Deleted {model.__tablename__} row {entity_id}")
        return bool(deleted)

    def _commit(self, entity):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error writing {entity.__tablename__}: {e.orig}")
            if isinstance(entity, Product):
                raise UniqueConstraintError(DUPLICATE_PRODUCT_MESSAGE)
            raise


def get_store(db: Session = Depends(get_db)) -> DashboardStore:
    """FastAPI dependency providing a request-scoped store"""
    return DashboardStore(db)
