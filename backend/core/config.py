"""
Configuration management for the BizPulse backend.

Settings are read from environment variables (and an optional .env file)
so deployments can override the database location, logging and the
dashboard tuning knobs without code changes.
"""

from functools import lru_cache
from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Database Configuration
    database_url: str = "sqlite:///./data/app.db"
    db_pool_size: int = 10
    db_max_overflow: int = 20

    # Environment Settings
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    log_sql_queries: bool = False
    slow_query_threshold_seconds: float = 1.0

    # HTTP
    port: int = 4001
    cors_origins: Union[List[str], str] = ["*"]

    # Listing defaults
    default_list_limit: int = Field(default=20, ge=1)
    recent_orders_limit: int = Field(default=10, ge=1)

    # Reporting
    top_products_limit: int = Field(default=5, ge=1)
    low_stock_threshold: int = 10
    currency_symbol: str = "₹"

    # Catalog defaults
    default_vendor: str = "Default Vendor"
    default_customer_type: str = "Restaurant"
    default_order_category: str = "Food & Beverage"
    default_min_stock_level: int = 10
    default_max_stock_level: int = 100

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Returns:
        Settings instance with environment variables loaded
    """
    return Settings()


settings = get_settings()
