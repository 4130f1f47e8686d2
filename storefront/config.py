"""
Configuration settings for the storefront client.

Uses Pydantic Settings to load environment variables for the backend location,
resource paths, logging, and presentation defaults (page size, countdown
duration, best-seller thresholds).
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Backend
    api_base_url: str = Field("http://localhost:8000", alias="API_BASE_URL")
    api_token: Optional[str] = Field(None, alias="API_TOKEN")
    request_timeout_seconds: float = Field(10.0, alias="REQUEST_TIMEOUT_SECONDS")
    request_retry_attempts: int = Field(3, alias="REQUEST_RETRY_ATTEMPTS")
    request_retry_wait_seconds: float = Field(1.0, alias="REQUEST_RETRY_WAIT_SECONDS")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Resources, in priority order where several describe the same entity
    user_endpoints: List[str] = Field(
        default_factory=lambda: ["/clients", "/users", "/admin/users"],
        alias="USER_ENDPOINTS",
    )
    products_path: str = Field("/client/v1/products", alias="PRODUCTS_PATH")
    product_detail_path: str = Field(
        "/client/v1/productDetails/{product_id}", alias="PRODUCT_DETAIL_PATH"
    )
    categories_path: str = Field("/client/v1/categories", alias="CATEGORIES_PATH")
    featured_products_path: str = Field(
        "/client/v1/featureProducts", alias="FEATURED_PRODUCTS_PATH"
    )

    # Listing and dashboard
    items_per_page: int = Field(10, alias="ITEMS_PER_PAGE")
    page_window_size: int = Field(5, alias="PAGE_WINDOW_SIZE")
    recent_window_days: int = Field(30, alias="RECENT_WINDOW_DAYS")

    # Home page
    best_seller_min_rating: float = Field(4.0, alias="BEST_SELLER_MIN_RATING")
    best_seller_limit: int = Field(6, alias="BEST_SELLER_LIMIT")
    home_category_limit: int = Field(6, alias="HOME_CATEGORY_LIMIT")
    home_product_limit: int = Field(8, alias="HOME_PRODUCT_LIMIT")

    # Flash-sale countdown
    countdown_days: int = Field(2, alias="COUNTDOWN_DAYS")
    countdown_hours: int = Field(14, alias="COUNTDOWN_HOURS")
    countdown_minutes: int = Field(30, alias="COUNTDOWN_MINUTES")
    countdown_seconds: int = Field(45, alias="COUNTDOWN_SECONDS")
    tick_interval_seconds: float = Field(1.0, alias="TICK_INTERVAL_SECONDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
