"""
Application startup validation and initialization.

Creates missing tables and checks that the store is reachable before
the API starts serving requests.
"""

import logging
import sys
from typing import List, Tuple

import sqlalchemy as sa
from sqlalchemy import text

from core.config import get_settings
from core.database import engine, init_db

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("customers", "products", "orders")


class StartupValidator:
    """Validates application startup requirements"""

    def __init__(self):
        self.settings = get_settings()
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def check_database_connection(self) -> bool:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection successful")
            return True
        except Exception as e:
            self.errors.append(f"Database connection failed: {str(e)}")
            return False

    def check_schema(self) -> bool:
        """Create missing tables, then confirm the catalog tables exist"""
        try:
            init_db()
            existing = set(sa.inspect(engine).get_table_names())
        except Exception as e:
            self.errors.append(f"Could not prepare database tables: {str(e)}")
            return False

        missing = [t for t in REQUIRED_TABLES if t not in existing]
        if missing:
            self.errors.append(f"Missing database tables: {', '.join(missing)}")
            return False
        return True

    def check_environment_config(self) -> bool:
        if self.settings.is_production and self.settings.debug:
            self.warnings.append("DEBUG is enabled in production")
        if self.settings.is_production and "*" in self.settings.cors_origins:
            self.warnings.append("CORS allows any origin in production")
        return True

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        checks = [
            ("Environment Configuration", self.check_environment_config),
            ("Database Connection", self.check_database_connection),
            ("Database Tables", self.check_schema),
        ]

        all_passed = True

        for check_name, check_func in checks:
            logger.info(f"Running check: {check_name}")
            if not check_func():
                all_passed = False

        return all_passed, self.errors, self.warnings


def run_startup_checks():
    """Run all startup validation checks"""
    settings = get_settings()
    logger.info(f"Starting BizPulse backend ({settings.environment})")

    validator = StartupValidator()
    passed, errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning(f"Startup warning: {warning}")
    for error in errors:
        logger.error(f"Startup error: {error}")

    if not passed and settings.is_production:
        logger.error("Cannot start in production with errors!")
        sys.exit(1)
    elif not passed:
        logger.warning("Starting in development mode despite errors")
    else:
        logger.info("All startup checks passed")

    return passed, warnings
