# backend/modules/analytics/services/ranking_service.py

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from core.config import get_settings
from core.formatting import round_half_up
from modules.catalog.services.store import DashboardStore

from ..schemas.dashboard_schemas import TopProduct
from ..utils.periods import as_date, month_end, month_start, pct_change
from .aggregation_service import Row

logger = logging.getLogger(__name__)


class _ProductTally:
    __slots__ = ("name", "sales", "revenue")

    def __init__(self, name: str):
        self.name = name
        self.sales = 0
        self.revenue = 0.0


def rank_top_products(orders: Sequence[Row], now: datetime, limit: int) -> List[TopProduct]:
    """
    Rank products by revenue from the first of this month through today.

    Change is measured against the whole previous calendar month. Only
    products sold this month are ranked, and ties keep the order in which
    products first sold this month.
    """
    today = as_date(now)
    current_start = month_start(today)
    previous_start = month_start(today, -1)
    previous_end = month_end(today, -1)

    current: Dict[str, _ProductTally] = {}
    previous_revenue: Dict[str, float] = defaultdict(float)

    for order in orders:
        day = as_date(order["date"])
        amount = order["amount"] or 0.0

        if current_start <= day <= today:
            tally = current.setdefault(order["product"], _ProductTally(order["product"]))
            tally.sales += 1
            tally.revenue += amount
        elif previous_start <= day <= previous_end:
            previous_revenue[order["product"]] += amount

    ranked = sorted(current.values(), key=lambda t: t.revenue, reverse=True)

    return [
        TopProduct(
            name=tally.name,
            sales=tally.sales,
            revenue=round_half_up(tally.revenue),
            change=pct_change(tally.revenue, previous_revenue.get(tally.name, 0.0)),
        )
        for tally in ranked[:limit]
    ]


class RankingService:
    """Top-product ranking for the dashboard"""

    def __init__(self, store: DashboardStore, limit: Optional[int] = None):
        self.store = store
        self.limit = limit or get_settings().top_products_limit

    def get_top_products(self, now: Optional[datetime] = None) -> List[TopProduct]:
        orders = self.store.list_orders(fields=["product", "amount", "date"])
        top = rank_top_products(orders, now or datetime.now(), self.limit)
        logger.debug(f"Ranked {len(top)} top products from {len(orders)} orders")
        return top
