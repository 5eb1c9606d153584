# backend/modules/analytics/tests/test_aggregation_service.py

from datetime import date, datetime

import pytest

from modules.analytics.services.aggregation_service import (
    AggregationService,
    compute_metrics,
    compute_order_status_series,
    compute_sales_series,
    customer_retention,
    inventory_turnover,
)
from tests.factories import CustomerFactory, OrderFactory, ProductFactory

NOW = datetime(2024, 3, 20, 10, 30)


def order(amount, day, status="completed", customer="Asha", product="Tea"):
    return {
        "amount": amount,
        "date": day,
        "status": status,
        "customer": customer,
        "product": product,
    }


class TestComputeMetrics:
    def test_revenue_growth_against_previous_month(self):
        orders = [order(100, date(2024, 3, 2)), order(50, date(2024, 2, 10))]

        metrics = compute_metrics(orders, [], [], NOW)

        assert metrics.revenue_change == "+100%"
        assert metrics.revenue_growth.value == "+100%"
        assert metrics.revenue_growth.current == 100
        assert metrics.revenue_growth.previous == 50
        assert metrics.total_revenue == 150
        assert metrics.total_orders == 2
        assert metrics.orders_change == "+0%"

    def test_empty_previous_month_reports_zero_percent(self):
        metrics = compute_metrics([order(100, date(2024, 3, 2))], [], [], NOW)

        assert metrics.revenue_change == "0%"
        assert metrics.orders_change == "0%"
        assert metrics.avg_order_change == "0%"

    def test_average_order_change_uses_bucket_means(self):
        orders = [
            order(100, date(2024, 3, 1)),
            order(300, date(2024, 3, 2)),
            order(100, date(2024, 2, 1)),
        ]

        metrics = compute_metrics(orders, [], [], NOW)

        assert metrics.avg_order_value == 167
        assert metrics.avg_order_change == "+100%"

    def test_orders_outside_both_buckets_only_count_towards_totals(self):
        orders = [order(100, date(2023, 3, 20)), order(40, date(2024, 1, 31))]

        metrics = compute_metrics(orders, [], [], NOW)

        assert metrics.total_revenue == 140
        assert metrics.revenue_growth.current == 0
        assert metrics.revenue_growth.previous == 0

    def test_products_sold_equals_order_count(self):
        orders = [order(10, date(2024, 3, 1)) for _ in range(4)]

        metrics = compute_metrics(orders, [], [], NOW)

        assert metrics.products_sold == metrics.total_orders == 4
        assert metrics.products_sold_change == metrics.orders_change

    def test_no_data_at_all(self):
        metrics = compute_metrics([], [], [], NOW)

        assert metrics.total_revenue == 0
        assert metrics.avg_order_value == 0
        assert metrics.order_fulfillment_rate.value == "0%"
        assert metrics.order_fulfillment_rate.rate == 0
        assert metrics.inventory_turnover.value == "0.00"
        assert metrics.customer_retention.value == "0%"


class TestFulfillmentRate:
    @pytest.mark.parametrize(
        "statuses,expected",
        [
            (["completed", "completed"], "100%"),
            (["completed", "pending", "cancelled"], "33%"),
            (["pending", "processing"], "0%"),
            (["completed", "pending"], "50%"),
        ],
    )
    def test_completed_share_of_all_orders(self, statuses, expected):
        orders = [order(10, date(2022, 1, 1), status=s) for s in statuses]

        rate = compute_metrics(orders, [], [], NOW).order_fulfillment_rate

        assert rate.value == expected
        assert rate.total == len(statuses)
        assert 0 <= rate.rate <= 100


class TestInventoryTurnover:
    def test_zero_stock_products_are_excluded(self):
        products = [{"name": "A", "stock": 0}, {"name": "B", "stock": 10}]
        orders = [order(10, date(2024, 3, 1), product="B")]

        turnover = inventory_turnover(orders, products)

        assert turnover.value == "0.10"
        assert turnover.valid_products == 1
        assert turnover.total_products == 2

    def test_average_over_stocked_products(self):
        products = [{"name": "A", "stock": 4}, {"name": "B", "stock": 2}]
        orders = [order(1, date(2024, 3, 1), product="A") for _ in range(2)]

        assert inventory_turnover(orders, products).value == "0.25"


class TestCustomerRetention:
    def test_repeat_customers_over_customer_count(self):
        orders = [
            order(1, date(2024, 3, 1), customer="Asha"),
            order(1, date(2024, 3, 2), customer="Asha"),
            order(1, date(2024, 3, 3), customer="Ravi"),
        ]
        customers = [{"id": "c1", "name": "Asha"}, {"id": "c2", "name": "Ravi"},
                     {"id": "c3", "name": "Meera"}]

        retention = customer_retention(orders, customers)

        assert retention.repeat_customers == 1
        assert retention.total_customers == 3
        assert retention.value == "33%"

    def test_no_customers_is_zero(self):
        retention = customer_retention([order(1, date(2024, 3, 1))] * 2, [])

        assert retention.rate == 0
        assert retention.value == "0%"


class TestSeries:
    def test_sales_series_always_has_twelve_months(self):
        series = compute_sales_series([order(99.6, date(2024, 3, 1))], NOW)

        assert len(series) == 12
        assert series[0].month == "Apr"
        assert series[-1].month == "Mar"
        assert series[-1].revenue == 100
        assert all(point.revenue == 0 for point in series[:-1])

    def test_sales_series_with_no_orders(self):
        series = compute_sales_series([], NOW)

        assert [p.revenue for p in series] == [0] * 12

    def test_orders_older_than_window_are_ignored(self):
        series = compute_sales_series([order(500, date(2023, 3, 31))], NOW)

        assert sum(p.revenue for p in series) == 0

    def test_status_series_folds_processing_into_pending(self):
        orders = [
            order(1, date(2024, 3, 1), status="completed"),
            order(1, date(2024, 3, 1), status="pending"),
            order(1, date(2024, 3, 1), status="processing"),
            order(1, date(2024, 3, 1), status="cancelled"),
            order(1, date(2024, 3, 1), status="refunded"),
            order(1, date(2024, 2, 1), status="completed"),
        ]

        series = compute_order_status_series(orders, NOW)

        assert len(series) == 12
        march, february = series[-1], series[-2]
        assert (march.completed, march.pending, march.cancelled) == (1, 2, 1)
        assert (february.completed, february.pending, february.cancelled) == (1, 0, 0)

    def test_status_series_serializes_month_names(self):
        payload = compute_order_status_series([], NOW)[0].model_dump(by_alias=True)

        assert payload == {"month": "Apr", "completed": 0, "pending": 0, "cancelled": 0}


class TestAggregationService:
    def test_metrics_read_through_the_store(self, store):
        CustomerFactory(name="Asha")
        ProductFactory(name="Tea", stock=10)
        OrderFactory(customer="Asha", product="Tea", amount=100.0, date=date(2024, 3, 5))
        OrderFactory(customer="Asha", product="Tea", amount=50.0, date=date(2024, 2, 5),
                     status="pending")

        metrics = AggregationService(store).get_dashboard_metrics(now=NOW)

        assert metrics.total_revenue == 150
        assert metrics.revenue_change == "+100%"
        assert metrics.order_fulfillment_rate.value == "50%"
        assert metrics.inventory_turnover.value == "0.20"
        assert metrics.customer_retention.value == "100%"

    def test_series_read_through_the_store(self, store):
        OrderFactory(amount=80.0, date=date(2024, 1, 15), status="cancelled")

        service = AggregationService(store)
        sales = service.get_sales_series(now=NOW)
        statuses = service.get_order_status_series(now=NOW)

        assert sales[-3].month == "Jan"
        assert sales[-3].revenue == 80
        assert statuses[-3].cancelled == 1
