# backend/modules/catalog/tests/test_store.py

from datetime import date

import pytest

from core.exceptions import NotFoundError, UniqueConstraintError
from modules.catalog.models.catalog_models import Order, Product
from tests.factories import OrderFactory, ProductFactory


class TestReads:
    def test_rows_are_restricted_to_requested_fields(self, store):
        OrderFactory(amount=12.5, date=date(2024, 3, 1))

        rows = store.list_orders(fields=["amount", "date"])

        assert rows == [{"amount": 12.5, "date": date(2024, 3, 1)}]

    def test_unknown_field_is_rejected(self, store):
        with pytest.raises(ValueError):
            store.list_orders(fields=["amount", "password"])

    def test_unknown_ordering_is_rejected(self, store):
        with pytest.raises(ValueError):
            store.list_customers(order_by="amount")

    def test_order_by_date_and_amount(self, store):
        OrderFactory(amount=5.0, date=date(2024, 1, 1))
        OrderFactory(amount=50.0, date=date(2023, 1, 1))
        OrderFactory(amount=20.0, date=date(2024, 6, 1))

        by_date = store.list_orders(fields=["date"], order_by="date")
        by_amount = store.list_orders(fields=["amount"], order_by="amount", limit=1)

        assert [r["date"].year for r in by_date] == [2024, 2024, 2023]
        assert by_date[0]["date"] == date(2024, 6, 1)
        assert by_amount == [{"amount": 50.0}]

    def test_products_by_stock_ascending(self, store):
        ProductFactory(name="A", stock=9)
        ProductFactory(name="B", stock=2)

        rows = store.list_products(fields=["name"], order_by="stock")

        assert [r["name"] for r in rows] == ["B", "A"]

    def test_order_stats(self, store):
        OrderFactory(product="Tea", customer="Asha", amount=10.0)
        OrderFactory(product="Tea", customer="Ravi", amount=15.0)
        OrderFactory(product="Cake", customer="Asha", amount=99.0)

        assert store.order_stats(product="Tea") == (2, 25.0)
        assert store.order_stats(customer="Asha") == (2, 109.0)
        assert store.order_stats(product="Nothing") == (0, 0.0)


class TestWrites:
    def test_insert_generates_prefixed_id(self, store):
        order = store.insert(
            Order(customer="Asha", product="Tea", amount=10.0, status="pending")
        )

        assert order.id.startswith("ord-")
        assert len(order.id) == len("ord-") + 8
        assert order.date == date.today()

    def test_duplicate_product_name(self, store):
        ProductFactory(name="Tea")

        with pytest.raises(UniqueConstraintError) as exc_info:
            store.insert(Product(name="Tea", category="Drinks", price=1.0, stock=1))

        assert exc_info.value.detail == "Product name must be unique"
        # Session is usable again after the failed write
        assert len(store.list_products()) == 1

    def test_update_missing_row(self, store):
        with pytest.raises(NotFoundError):
            store.update(Order, "ord-missing", {"status": "completed"})

    def test_delete_reports_whether_a_row_was_removed(self, store):
        order = OrderFactory()

        assert store.delete(Order, order.id) is True
        assert store.delete(Order, order.id) is False
