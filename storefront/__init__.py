"""
Storefront - client-side data aggregation for a catalog/admin backend of uncertain shape.

This package provides the logic layer behind a storefront and admin dashboard:

- Resilient multi-candidate fetching with soft failure
- Dashboard metrics derived from account snapshots
- Client-side search, pagination and page-number windows
- A tick-driven flash-sale countdown
- Price and discount formatting

Presentation is a rich-rendered CLI; the HTTP transport is httpx.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from storefront.config import Settings, get_settings
from storefront.domain.models import (
    CategoryRecord,
    DashboardStats,
    PaginationState,
    ProductRecord,
    TimeRemaining,
    UserRecord,
)
from storefront.fetching import (
    EndpointStrategy,
    FetchOutcome,
    FetchReport,
    FetchStrategy,
    ResilientFetcher,
)
from storefront.infrastructure.api_client import ApiClient, ApiRequestError
from storefront.services import (
    CountdownClock,
    compute_stats,
    discount_percent,
    filter_records,
    format_currency,
    paginate,
    visible_page_window,
)
from storefront.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "CategoryRecord",
    "DashboardStats",
    "PaginationState",
    "ProductRecord",
    "TimeRemaining",
    "UserRecord",
    # Fetching
    "ApiClient",
    "ApiRequestError",
    "EndpointStrategy",
    "FetchOutcome",
    "FetchReport",
    "FetchStrategy",
    "ResilientFetcher",
    # Services
    "CountdownClock",
    "compute_stats",
    "discount_percent",
    "filter_records",
    "format_currency",
    "paginate",
    "visible_page_window",
    # Logging
    "configure_logging",
    "get_logger",
]
