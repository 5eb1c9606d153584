# backend/modules/analytics/services/trend_service.py

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from core.config import get_settings
from core.formatting import group_indian, round_half_up
from modules.catalog.services.store import DashboardStore

from ..constants import (
    HIGH_CONFIDENCE_MAX_CV,
    MEDIUM_CONFIDENCE_MAX_CV,
    PROJECTION_MONTHS,
    ZERO_MEAN_CV,
)
from ..schemas.dashboard_schemas import ConfidenceLevel, Prediction, TrendDirection
from ..utils.periods import month_key, month_start, percent_change
from .aggregation_service import Row

logger = logging.getLogger(__name__)


@dataclass
class TrendPoint:
    """Projection for one monthly series"""

    predicted: int
    trend_percentage: int
    confidence: ConfidenceLevel

    @property
    def direction(self) -> TrendDirection:
        return TrendDirection.UP if self.trend_percentage >= 0 else TrendDirection.DOWN

    @property
    def trend(self) -> str:
        sign = "+" if self.trend_percentage >= 0 else ""
        return f"{sign}{self.trend_percentage}% vs last month"


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def population_stdev(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    m = mean(values)
    return math.sqrt(mean([(v - m) ** 2 for v in values]))


def confidence_for(values: Sequence[float]) -> ConfidenceLevel:
    """Label a series by its coefficient of variation."""
    m = mean(values)
    cv = population_stdev(values) / m if m > 0 else ZERO_MEAN_CV

    if cv <= HIGH_CONFIDENCE_MAX_CV:
        return ConfidenceLevel.HIGH
    if cv <= MEDIUM_CONFIDENCE_MAX_CV:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def project(series: Sequence[float]) -> TrendPoint:
    """
    Project the next value as the rounded mean of ``series``.

    ``series`` is newest first; the trend compares the projection with
    ``series[1]`` (last month).
    """
    predicted = round_half_up(mean(series))
    last = series[1] if len(series) > 1 else 0
    return TrendPoint(
        predicted=predicted,
        trend_percentage=percent_change(predicted, last),
        confidence=confidence_for(series),
    )


class TrendProjector:
    """Three-month moving-average projection of revenue and order volume"""

    def __init__(self, store: DashboardStore, currency_symbol: Optional[str] = None):
        self.store = store
        self.currency_symbol = currency_symbol or get_settings().currency_symbol

    def predict(self, now: Optional[datetime] = None) -> List[Prediction]:
        orders = self.store.list_orders(fields=["amount", "date"])
        return self.project_orders(orders, now or datetime.now())

    def project_orders(self, orders: Sequence[Row], now: datetime) -> List[Prediction]:
        if not orders:
            return []

        # Newest first: this month, last month, two months ago
        keys = [month_key(month_start(now, -offset)) for offset in range(PROJECTION_MONTHS)]
        revenue = dict.fromkeys(keys, 0.0)
        counts = dict.fromkeys(keys, 0)

        for order in orders:
            key = month_key(order["date"])
            if key in revenue:
                revenue[key] += order["amount"] or 0.0
                counts[key] += 1

        revenue_trend = project([revenue[k] for k in keys])
        volume_trend = project([counts[k] for k in keys])
        logger.debug(
            f"Projected revenue {revenue_trend.predicted} ({revenue_trend.confidence.value}), "
            f"orders {volume_trend.predicted} ({volume_trend.confidence.value})"
        )

        return [
            self._prediction(
                "Next Month Revenue",
                f"{self.currency_symbol}{group_indian(revenue_trend.predicted)}",
                revenue_trend,
                "Projected based on 3-month average revenue",
            ),
            self._prediction(
                "Next Month Order Volume",
                group_indian(volume_trend.predicted),
                volume_trend,
                "Projected based on 3-month average order count",
            ),
        ]

    @staticmethod
    def _prediction(metric: str, predicted: str, point: TrendPoint, description: str) -> Prediction:
        return Prediction(
            metric=metric,
            predicted=predicted,
            confidence=point.confidence,
            trend=point.trend,
            description=description,
            trend_direction=point.direction,
        )
