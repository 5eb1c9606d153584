import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.startup import run_startup_checks
from core.config import get_settings
from core.exceptions import register_exception_handlers
from core.query_logger import query_logger_instance

from modules.analytics.routers import assistant_router, dashboard_router
from modules.catalog.routers.catalog_router import router as catalog_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="BizPulse - Business Dashboard API",
    description="""
    Sales dashboard backend for small businesses.

    ## Features

    * **Catalog** - Orders, products and customers with derived sales totals
    * **Dashboard** - Monthly KPIs, 12-month revenue and order-status series
    * **Top Products** - This month's best sellers against last month
    * **Predictions** - Three-month moving-average projections
    * **Assistant** - Keyword-driven answers to common business questions
    """,
    version="1.0.0",
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health", tags=["Health"])
def health():
    return {"ok": True}


app.include_router(catalog_router)
app.include_router(dashboard_router)
app.include_router(assistant_router)


@app.on_event("startup")
def startup_event():
    """Create tables and validate configuration before serving"""
    run_startup_checks()


@app.on_event("shutdown")
def shutdown_event():
    query_logger_instance.log_query_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
