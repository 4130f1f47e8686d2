"""
View-models for the storefront client.

Each view owns the snapshot for one page, its load state and the derived
values the presentation layer renders.
"""

from storefront.views.catalog import HomeView, ProductDetailView, ProductListView
from storefront.views.dashboard import DashboardView
from storefront.views.state import LoadState, LoadStatus, RequestGeneration

__all__ = [
    "DashboardView",
    "HomeView",
    "LoadState",
    "LoadStatus",
    "ProductDetailView",
    "ProductListView",
    "RequestGeneration",
]
