# backend/modules/catalog/services/catalog_service.py

import logging
from collections import Counter, defaultdict
from datetime import date
from typing import Dict, List, Optional

from core.config import Settings, get_settings
from core.formatting import round_half_up

from ..models.catalog_models import Customer, Order, Product
from ..schemas.catalog_schemas import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    OrderCreate,
    OrderResponse,
    OrderUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from .store import DashboardStore

logger = logging.getLogger(__name__)


class CatalogService:
    """CRUD for orders, products and customers plus their derived totals"""

    def __init__(self, store: DashboardStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or get_settings()

    # Orders

    def list_orders(self, limit: Optional[int] = None) -> List[OrderResponse]:
        rows = self.store.list_orders(
            limit=limit or self.settings.default_list_limit, order_by="recent"
        )
        return [OrderResponse.model_validate(row) for row in rows]

    def recent_orders(self, limit: Optional[int] = None) -> List[OrderResponse]:
        return self.list_orders(limit or self.settings.recent_orders_limit)

    def create_order(self, payload: OrderCreate) -> OrderResponse:
        order = Order(
            customer=payload.customer,
            product=payload.product,
            amount=payload.amount,
            status=payload.status,
            date=payload.date or date.today(),
            vendor=payload.vendor or self.settings.default_vendor,
            customer_type=payload.customer_type or self.settings.default_customer_type,
            category=payload.category or self.settings.default_order_category,
        )
        return OrderResponse.model_validate(self.store.insert(order))

    def update_order(self, order_id: str, payload: OrderUpdate) -> OrderResponse:
        changes = payload.model_dump(exclude_none=True)
        existing = self.store.get(Order, order_id)
        if existing is not None:
            # Rows written before defaults existed pick them up on edit
            for field, default in self._order_defaults().items():
                if field not in changes and not getattr(existing, field):
                    changes[field] = default
        order = self.store.update(Order, order_id, changes)
        return OrderResponse.model_validate(order)

    def delete_order(self, order_id: str) -> None:
        self.store.delete(Order, order_id)

    def _order_defaults(self) -> Dict[str, str]:
        return {
            "vendor": self.settings.default_vendor,
            "customer_type": self.settings.default_customer_type,
            "category": self.settings.default_order_category,
        }

    # Products

    def list_products(self, limit: Optional[int] = None) -> List[ProductResponse]:
        products = self.store.list_products(
            limit=limit or self.settings.default_list_limit, order_by="recent"
        )
        sold = Counter(row["product"] for row in self.store.list_orders(fields=["product"]))
        return [ProductResponse(**row, sold=sold.get(row["name"], 0)) for row in products]

    def create_product(self, payload: ProductCreate) -> ProductResponse:
        product = Product(
            name=payload.name,
            category=payload.category,
            price=payload.price,
            stock=payload.stock,
            min_stock_level=payload.min_stock_level or self.settings.default_min_stock_level,
            max_stock_level=payload.max_stock_level or self.settings.default_max_stock_level,
            vendor=payload.vendor or self.settings.default_vendor,
        )
        product = self.store.insert(product)
        return self._product_response(product, sold=0)

    def update_product(self, product_id: str, payload: ProductUpdate) -> ProductResponse:
        changes = payload.model_dump(exclude_none=True)
        existing = self.store.get(Product, product_id)
        if existing is not None:
            fallbacks = {
                "min_stock_level": self.settings.default_min_stock_level,
                "max_stock_level": self.settings.default_max_stock_level,
                "vendor": self.settings.default_vendor,
            }
            for field, default in fallbacks.items():
                if field not in changes and not getattr(existing, field):
                    changes[field] = default

        product = self.store.update(Product, product_id, changes)
        sold, _ = self.store.order_stats(product=product.name)
        return self._product_response(product, sold=sold)

    def delete_product(self, product_id: str) -> None:
        self.store.delete(Product, product_id)

    @staticmethod
    def _product_response(product: Product, sold: int) -> ProductResponse:
        return ProductResponse(
            id=product.id,
            name=product.name,
            category=product.category,
            price=product.price,
            stock=product.stock,
            min_stock_level=product.min_stock_level,
            max_stock_level=product.max_stock_level,
            vendor=product.vendor,
            sold=sold,
        )

    # Customers

    def list_customers(self, limit: Optional[int] = None) -> List[CustomerResponse]:
        customers = self.store.list_customers(
            fields=["id", "name", "email", "phone"],
            limit=limit or self.settings.default_list_limit,
            order_by="recent",
        )
        order_counts: Counter = Counter()
        spent: Dict[str, float] = defaultdict(float)
        for row in self.store.list_orders(fields=["customer", "amount"]):
            order_counts[row["customer"]] += 1
            spent[row["customer"]] += row["amount"]

        return [
            CustomerResponse(
                **row,
                total_orders=order_counts.get(row["name"], 0),
                total_spent=round_half_up(spent.get(row["name"], 0.0)),
            )
            for row in customers
        ]

    def create_customer(self, payload: CustomerCreate) -> CustomerResponse:
        customer = self.store.insert(
            Customer(name=payload.name, email=payload.email, phone=payload.phone)
        )
        return CustomerResponse(
            id=customer.id, name=customer.name, email=customer.email, phone=customer.phone
        )

    def update_customer(self, customer_id: str, payload: CustomerUpdate) -> CustomerResponse:
        customer = self.store.update(
            Customer, customer_id, payload.model_dump(exclude_none=True)
        )
        count, total = self.store.order_stats(customer=customer.name)
        return CustomerResponse(
            id=customer.id,
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            total_orders=count,
            total_spent=round_half_up(total),
        )

    def delete_customer(self, customer_id: str) -> None:
        self.store.delete(Customer, customer_id)
