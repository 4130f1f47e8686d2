"""
Services package for the storefront client.

Synchronous, side-effect-free computations over record snapshots (metrics,
search/pagination, pricing) plus the countdown clock.
"""

from storefront.services.countdown import CountdownClock, tick
from storefront.services.metrics import compute_stats, parse_timestamp
from storefront.services.pricing import (
    best_sellers,
    discount_badge,
    discount_percent,
    display_price,
    format_currency,
    format_short_date,
    parse_rating,
    struck_price,
)
from storefront.services.search import (
    build_pagination,
    clamp_page,
    filter_records,
    page_bounds,
    paginate,
    visible_page_window,
)

__all__ = [
    "CountdownClock",
    "best_sellers",
    "build_pagination",
    "clamp_page",
    "compute_stats",
    "discount_badge",
    "discount_percent",
    "display_price",
    "filter_records",
    "format_currency",
    "format_short_date",
    "page_bounds",
    "paginate",
    "parse_rating",
    "parse_timestamp",
    "struck_price",
    "tick",
    "visible_page_window",
]
