"""
Domain package for the storefront client.

Exports the record models received from the backend and the derived,
non-persisted structures computed from them.
"""

from storefront.domain.models import (
    Brand,
    CategoryRecord,
    CategoryRef,
    DashboardStats,
    Discount,
    PaginationState,
    ProductRecord,
    TimeRemaining,
    UserRecord,
)

__all__ = [
    "Brand",
    "CategoryRecord",
    "CategoryRef",
    "DashboardStats",
    "Discount",
    "PaginationState",
    "ProductRecord",
    "TimeRemaining",
    "UserRecord",
]
