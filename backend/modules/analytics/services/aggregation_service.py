# backend/modules/analytics/services/aggregation_service.py

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from core.formatting import round_half_up
from core.query_logger import log_query_performance
from modules.catalog.services.store import DashboardStore

from ..constants import (
    CANCELLED_STATUSES,
    COMPLETED_STATUSES,
    OPEN_STATUSES,
    REPEAT_CUSTOMER_MIN_ORDERS,
    SERIES_MONTHS,
)
from ..schemas.dashboard_schemas import (
    CustomerRetention,
    DashboardMetrics,
    FulfillmentRate,
    InventoryTurnover,
    OrderStatusPoint,
    RevenueGrowth,
    SalesPoint,
)
from ..utils.periods import month_key, pct_change, previous_month_key, trailing_months

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

METRIC_ORDER_FIELDS = ["amount", "date", "status", "customer", "product"]
METRIC_PRODUCT_FIELDS = ["id", "name", "stock", "min_stock_level"]
METRIC_CUSTOMER_FIELDS = ["id", "name"]


@dataclass
class MonthTotals:
    """Revenue and order count for one calendar month"""

    revenue: float = 0.0
    orders: int = 0

    def add(self, amount: float):
        self.revenue += amount
        self.orders += 1

    @property
    def average_order_value(self) -> float:
        return self.revenue / self.orders if self.orders else 0.0


def compute_metrics(
    orders: Sequence[Row],
    products: Sequence[Row],
    customers: Sequence[Row],
    now: datetime,
) -> DashboardMetrics:
    """Derive the dashboard KPI block from full table snapshots."""
    current_key = month_key(now)
    previous_key = previous_month_key(now)

    total_revenue = 0.0
    current = MonthTotals()
    previous = MonthTotals()

    for order in orders:
        amount = order["amount"] or 0.0
        total_revenue += amount
        key = month_key(order["date"])
        if key == current_key:
            current.add(amount)
        elif key == previous_key:
            previous.add(amount)

    total_orders = len(orders)

    # Fulfillment is all-time, not month scoped
    completed = sum(1 for order in orders if order["status"] in COMPLETED_STATUSES)
    fulfillment_rate = completed / total_orders * 100 if total_orders else 0.0

    turnover = inventory_turnover(orders, products)
    retention = customer_retention(orders, customers)

    revenue_change = pct_change(current.revenue, previous.revenue)
    orders_change = pct_change(current.orders, previous.orders)

    return DashboardMetrics(
        total_revenue=round_half_up(total_revenue),
        revenue_change=revenue_change,
        total_orders=total_orders,
        orders_change=orders_change,
        # One unit per order row: orders carry no quantity
        products_sold=total_orders,
        products_sold_change=orders_change,
        avg_order_value=round_half_up(total_revenue / total_orders if total_orders else 0),
        avg_order_change=pct_change(
            current.average_order_value, previous.average_order_value
        ),
        revenue_growth=RevenueGrowth(
            value=revenue_change, current=current.revenue, previous=previous.revenue
        ),
        order_fulfillment_rate=FulfillmentRate(
            value=f"{round_half_up(fulfillment_rate)}%",
            completed=completed,
            total=total_orders,
            rate=fulfillment_rate,
        ),
        inventory_turnover=turnover,
        customer_retention=retention,
    )


def inventory_turnover(orders: Sequence[Row], products: Sequence[Row]) -> InventoryTurnover:
    """
    Average of units sold / units in stock across stocked products.

    Products with no stock are left out of the average entirely rather
    than counted as infinite turnover.
    """
    sold = Counter(order["product"] for order in orders)

    ratios = [
        sold.get(product["name"], 0) / product["stock"]
        for product in products
        if (product["stock"] or 0) > 0
    ]
    average = sum(ratios) / len(ratios) if ratios else 0.0

    return InventoryTurnover(
        value=f"{average:.2f}",
        total_products=len(products),
        valid_products=len(ratios),
    )


def customer_retention(orders: Sequence[Row], customers: Sequence[Row]) -> CustomerRetention:
    """
    Distinct order customer names with repeat orders, over the customer count.

    Names on orders are not checked against the customers table, so the
    rate can exceed 100% when orders reference removed customers.
    """
    orders_per_name = Counter(order["customer"] for order in orders)

    repeat = sum(1 for count in orders_per_name.values() if count >= REPEAT_CUSTOMER_MIN_ORDERS)
    total = len(customers)
    rate = repeat / total * 100 if total else 0.0

    return CustomerRetention(
        value=f"{round_half_up(rate)}%",
        repeat_customers=repeat,
        total_customers=total,
        rate=rate,
    )


def compute_sales_series(
    orders: Sequence[Row], now: datetime, months: int = SERIES_MONTHS
) -> List[SalesPoint]:
    """Monthly revenue, oldest first; months without orders stay at zero."""
    window = trailing_months(now, months)
    revenue = {key: 0.0 for key, _ in window}

    for order in orders:
        key = month_key(order["date"])
        if key in revenue:
            revenue[key] += order["amount"] or 0.0

    return [
        SalesPoint(month=label, revenue=round_half_up(revenue[key])) for key, label in window
    ]


def compute_order_status_series(
    orders: Sequence[Row], now: datetime, months: int = SERIES_MONTHS
) -> List[OrderStatusPoint]:
    """Monthly completed / open / cancelled order counts, oldest first."""
    window = trailing_months(now, months)
    points = {key: OrderStatusPoint(month=label) for key, label in window}

    for order in orders:
        point = points.get(month_key(order["date"]))
        if point is None:
            continue
        status = order["status"]
        if status in COMPLETED_STATUSES:
            point.completed += 1
        elif status in OPEN_STATUSES:
            point.pending += 1
        elif status in CANCELLED_STATUSES:
            point.cancelled += 1

    return [points[key] for key, _ in window]


class AggregationService:
    """Dashboard KPIs and monthly series, recomputed from the store per call"""

    def __init__(self, store: DashboardStore):
        self.store = store

    def get_dashboard_metrics(self, now: Optional[datetime] = None) -> DashboardMetrics:
        now = now or datetime.now()
        with log_query_performance("dashboard_metrics"):
            orders = self.store.list_orders(fields=METRIC_ORDER_FIELDS)
            products = self.store.list_products(fields=METRIC_PRODUCT_FIELDS)
            customers = self.store.list_customers(fields=METRIC_CUSTOMER_FIELDS)

        metrics = compute_metrics(orders, products, customers, now)
        logger.debug(
            f"Dashboard metrics computed over {len(orders)} orders, "
            f"{len(products)} products, {len(customers)} customers"
        )
        return metrics

    def get_sales_series(self, now: Optional[datetime] = None) -> List[SalesPoint]:
        orders = self.store.list_orders(fields=["amount", "date"])
        return compute_sales_series(orders, now or datetime.now())

    def get_order_status_series(
        self, now: Optional[datetime] = None
    ) -> List[OrderStatusPoint]:
        orders = self.store.list_orders(fields=["status", "date"])
        return compute_order_status_series(orders, now or datetime.now())
