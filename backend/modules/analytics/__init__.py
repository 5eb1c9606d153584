# backend/modules/analytics/__init__.py

"""
Analytics Module - Dashboard Reporting & Assistant

Derives everything the dashboard shows from the raw catalog rows on
each request; nothing is cached or pre-aggregated.

Key Features:
- KPI metrics with month-over-month changes
- 12-month revenue and order-status series
- Top products for the current month
- 3-month moving-average projections with a confidence label
- Keyword-driven assistant answering business questions

Components:
- Services: AggregationService, RankingService, TrendProjector, QueryResponder
- Schemas: Pydantic response models
- Routers: /api/dashboard/*, /api/predictions, /api/ai-assistant
"""

__version__ = "1.0.0"
