# backend/modules/analytics/schemas/dashboard_schemas.py

"""
Response schemas for the dashboard endpoints.

Field names are snake_case in Python and camelCase on the wire.
Currency figures are whole major units; percentage changes are
pre-formatted signed strings such as ``"+12%"``.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DashboardModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConfidenceLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class RevenueGrowth(DashboardModel):
    value: str
    current: float
    previous: float


class FulfillmentRate(DashboardModel):
    value: str
    completed: int
    total: int
    rate: float


class InventoryTurnover(DashboardModel):
    value: str = Field(..., description="Average units sold per unit in stock, 2 decimals")
    total_products: int
    valid_products: int = Field(..., description="Products with stock above zero")


class CustomerRetention(DashboardModel):
    value: str
    repeat_customers: int
    total_customers: int
    rate: float


class DashboardMetrics(DashboardModel):
    """KPI block for the dashboard header"""

    total_revenue: int
    revenue_change: str
    total_orders: int
    orders_change: str
    products_sold: int
    products_sold_change: str
    avg_order_value: int
    avg_order_change: str

    revenue_growth: RevenueGrowth
    order_fulfillment_rate: FulfillmentRate
    inventory_turnover: InventoryTurnover
    customer_retention: CustomerRetention


class SalesPoint(DashboardModel):
    month: str
    revenue: int


class OrderStatusPoint(DashboardModel):
    month: str
    completed: int = 0
    pending: int = Field(0, description="Pending and processing orders")
    cancelled: int = 0


class TopProduct(DashboardModel):
    name: str
    sales: int
    revenue: int
    change: str


class Prediction(DashboardModel):
    metric: str
    predicted: str
    confidence: ConfidenceLevel
    trend: str
    description: str
    trend_direction: TrendDirection
