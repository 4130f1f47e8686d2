"""
Price, discount and display formatting for catalog and account records.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from storefront.domain.models import ProductRecord
from storefront.services.metrics import parse_timestamp

_CENT = Decimal("0.01")
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)")


def _decimal(value: float) -> Decimal:
    return Decimal(str(value))


def format_currency(amount: float) -> str:
    """Render ``amount`` as US dollars, e.g. ``$1,234.50`` or ``-$3.00``."""
    cents = _decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents):,.2f}"


def discount_percent(original: float, final: float) -> int:
    """
    Whole-percent discount from ``original`` to ``final``, within ``[0, 100]``.

    Zero when there is no original price or no reduction. Halves round up.
    """
    if original <= 0 or final >= original:
        return 0
    ratio = (_decimal(original) - _decimal(final)) / _decimal(original) * 100
    percent = int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return min(max(percent, 0), 100)


def display_price(product: ProductRecord) -> float:
    """Price shown to the shopper: the final price when set, else the original."""
    return product.final_price if product.final_price > 0 else product.original_price


def struck_price(product: ProductRecord) -> Optional[float]:
    """Original price to show struck through, only when it was actually reduced."""
    if product.final_price > 0 and product.original_price > product.final_price:
        return product.original_price
    return None


def discount_badge(product: ProductRecord) -> Optional[str]:
    percent = discount_percent(product.original_price, product.final_price)
    return f"-{percent}%" if percent > 0 else None


def parse_rating(rating: Optional[str]) -> float:
    """Read the leading decimal of a string-encoded rating; 0.0 when there is none."""
    if not rating:
        return 0.0
    match = _LEADING_NUMBER.match(rating)
    return float(match.group(0)) if match else 0.0


def best_sellers(
    products: Iterable[ProductRecord], min_rating: float = 4.0, limit: int = 6
) -> List[ProductRecord]:
    """First ``limit`` products rated at least ``min_rating``, in listing order."""
    rated = [product for product in products if parse_rating(product.rating) >= min_rating]
    return rated[:limit]


def format_short_date(value: Optional[str]) -> str:
    """Short US date (``M/D/YYYY``) for a timestamp string, ``N/A`` when unusable."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return "N/A"
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


__all__ = [
    "best_sellers",
    "discount_badge",
    "discount_percent",
    "display_price",
    "format_currency",
    "format_short_date",
    "parse_rating",
    "struck_price",
]
