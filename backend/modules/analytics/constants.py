# backend/modules/analytics/constants.py

"""
Constants for analytics module.

Centralizes the fixed windows and thresholds used by the dashboard
reports. Tunables that deployments may change live in core.config.
"""

from modules.catalog.models.catalog_models import OrderStatus

# Series windows
SERIES_MONTHS = 12  # Length of the revenue and order-status series
PROJECTION_MONTHS = 3  # Buckets averaged by the trend projector

# Month-over-month comparison: the previous bucket is resolved from this
# day of the previous calendar month
PREVIOUS_MONTH_REFERENCE_DAY = 15

# Projection confidence (coefficient of variation thresholds)
HIGH_CONFIDENCE_MAX_CV = 0.15
MEDIUM_CONFIDENCE_MAX_CV = 0.35
ZERO_MEAN_CV = 1.0  # CV assumed when the series mean is zero

# Order status groups
COMPLETED_STATUSES = frozenset({OrderStatus.COMPLETED.value})
OPEN_STATUSES = frozenset({OrderStatus.PENDING.value, OrderStatus.PROCESSING.value})
CANCELLED_STATUSES = frozenset({OrderStatus.CANCELLED.value})

# Repeat-customer threshold for retention
REPEAT_CUSTOMER_MIN_ORDERS = 2

# Assistant list sizes
ASSISTANT_TOP_N = 5
