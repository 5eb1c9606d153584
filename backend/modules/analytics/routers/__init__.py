# backend/modules/analytics/routers/__init__.py

from .dashboard_router import router as dashboard_router
from .assistant_router import router as assistant_router

__all__ = ["dashboard_router", "assistant_router"]
