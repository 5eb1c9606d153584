# backend/modules/analytics/routers/dashboard_router.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from core.exceptions import APIError
from modules.catalog.routers.catalog_router import get_catalog_service, parse_limit
from modules.catalog.schemas.catalog_schemas import OrderResponse
from modules.catalog.services.catalog_service import CatalogService
from modules.catalog.services.store import DashboardStore, get_store

from ..schemas.dashboard_schemas import (
    DashboardMetrics,
    OrderStatusPoint,
    SalesPoint,
    TopProduct,
)
from ..services.aggregation_service import AggregationService
from ..services.ranking_service import RankingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


def get_aggregation_service(store: DashboardStore = Depends(get_store)) -> AggregationService:
    return AggregationService(store)


def get_ranking_service(store: DashboardStore = Depends(get_store)) -> RankingService:
    return RankingService(store)


@router.get("/metrics", response_model=DashboardMetrics)
def get_dashboard_metrics(service: AggregationService = Depends(get_aggregation_service)):
    """
    Headline KPIs for the dashboard.

    Month-over-month changes compare the current calendar month with the
    previous one; totals, fulfillment, turnover and retention are all-time.
    """
    try:
        return service.get_dashboard_metrics()
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Error computing dashboard metrics: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute dashboard metrics",
        )


@router.get("/sales", response_model=List[SalesPoint])
def get_sales_series(service: AggregationService = Depends(get_aggregation_service)):
    """Revenue for each of the last 12 months, oldest first."""
    try:
        return service.get_sales_series()
    except Exception as e:
        logger.error(f"Error building sales series: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build sales series",
        )


@router.get("/orders-status", response_model=List[OrderStatusPoint])
def get_order_status_series(service: AggregationService = Depends(get_aggregation_service)):
    """Completed, pending and cancelled order counts for the last 12 months."""
    try:
        return service.get_order_status_series()
    except Exception as e:
        logger.error(f"Error building order status series: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build order status series",
        )


@router.get("/recent-orders", response_model=List[OrderResponse])
def get_recent_orders(
    limit: Optional[int] = Depends(parse_limit),
    service: CatalogService = Depends(get_catalog_service),
):
    try:
        return service.recent_orders(limit)
    except Exception as e:
        logger.error(f"Error fetching recent orders: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch recent orders",
        )


@router.get("/top-products", response_model=List[TopProduct])
def get_top_products(service: RankingService = Depends(get_ranking_service)):
    """Best sellers this month by revenue, with change against last month."""
    try:
        return service.get_top_products()
    except Exception as e:
        logger.error(f"Error ranking top products: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to rank top products",
        )
