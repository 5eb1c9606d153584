# backend/modules/analytics/tests/test_dashboard_api.py

from datetime import date

import pytest

from modules.analytics.utils.periods import month_start
from tests.factories import CustomerFactory, OrderFactory, ProductFactory


class TestDashboardMetricsAPI:
    def test_metrics_shape_and_camel_case(self, client):
        CustomerFactory(name="Asha")
        ProductFactory(name="Tea", stock=10)
        OrderFactory(customer="Asha", product="Tea", amount=100.0, status="completed")

        response = client.get("/api/dashboard/metrics")

        assert response.status_code == 200
        body = response.json()
        assert body["totalRevenue"] == 100
        assert body["totalOrders"] == 1
        assert body["productsSold"] == 1
        assert body["avgOrderValue"] == 100
        assert body["revenueChange"] == "0%"
        assert body["orderFulfillmentRate"] == {
            "value": "100%",
            "completed": 1,
            "total": 1,
            "rate": 100.0,
        }
        assert body["inventoryTurnover"] == {
            "value": "0.10",
            "totalProducts": 1,
            "validProducts": 1,
        }
        assert body["customerRetention"]["totalCustomers"] == 1

    def test_metrics_with_empty_store(self, client):
        body = client.get("/api/dashboard/metrics").json()

        assert body["totalRevenue"] == 0
        assert body["orderFulfillmentRate"]["value"] == "0%"
        assert body["inventoryTurnover"]["value"] == "0.00"

    def test_revenue_growth_month_over_month(self, client):
        today = date.today()
        OrderFactory(amount=100.0, date=month_start(today))
        OrderFactory(amount=50.0, date=month_start(today, -1))

        body = client.get("/api/dashboard/metrics").json()

        assert body["revenueChange"] == "+100%"
        assert body["revenueGrowth"]["value"] == "+100%"


class TestSeriesAPI:
    def test_sales_series_has_twelve_months(self, client):
        OrderFactory(amount=250.0, date=month_start(date.today()))

        series = client.get("/api/dashboard/sales").json()

        assert len(series) == 12
        assert series[-1]["revenue"] == 250
        assert set(series[0]) == {"month", "revenue"}

    def test_order_status_series(self, client):
        OrderFactory(status="processing", date=month_start(date.today()))

        series = client.get("/api/dashboard/orders-status").json()

        assert len(series) == 12
        assert series[-1] == {
            "month": series[-1]["month"],
            "completed": 0,
            "pending": 1,
            "cancelled": 0,
        }


class TestRecentOrdersAPI:
    def test_defaults_to_ten(self, client):
        OrderFactory.create_batch(12)

        assert len(client.get("/api/dashboard/recent-orders").json()) == 10

    def test_limit_parameter(self, client):
        OrderFactory.create_batch(4)

        assert len(client.get("/api/dashboard/recent-orders", params={"limit": 3}).json()) == 3

    @pytest.mark.parametrize("limit", ["0", "abc"])
    def test_unusable_limit_falls_back_to_ten(self, client, limit):
        OrderFactory.create_batch(12)

        response = client.get("/api/dashboard/recent-orders", params={"limit": limit})

        assert response.status_code == 200
        assert len(response.json()) == 10


class TestTopProductsAPI:
    def test_top_products(self, client):
        today = date.today()
        for i in range(7):
            OrderFactory(product=f"P{i}", amount=10.0 * (i + 1), date=month_start(today))

        top = client.get("/api/dashboard/top-products").json()

        assert len(top) == 5
        assert [p["revenue"] for p in top] == [70, 60, 50, 40, 30]
        assert top[0] == {"name": "P6", "sales": 1, "revenue": 70, "change": "0%"}

    def test_no_orders(self, client):
        assert client.get("/api/dashboard/top-products").json() == []
