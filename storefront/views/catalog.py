"""
Catalog view-models: home page, product listing and product detail.

Catalog resources have no fallback candidates, so any failure here is fatal
for the view: it moves to ``LoadStatus.ERROR`` with a message and offers
``retry()``. Nothing is raised to the caller.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional
from urllib.parse import quote

from storefront.config import Settings, get_settings
from storefront.domain.models import CategoryRecord, ProductRecord
from storefront.fetching.endpoint import EndpointStrategy, record_list, record_object
from storefront.infrastructure.api_client import ApiClient
from storefront.services.countdown import CountdownClock
from storefront.services.pricing import best_sellers
from storefront.utils.logging import get_logger
from storefront.views.state import LoadState, LoadStatus, RequestGeneration

log = get_logger(__name__)

PRODUCT_NOT_FOUND = "Product not found"


class ProductListView:
    """Plain catalog listing."""

    def __init__(self, client: ApiClient, path: str) -> None:
        self.strategy = EndpointStrategy(
            client, path, record_list(ProductRecord, empty_envelope_ok=True)
        )
        self.products: List[ProductRecord] = []
        self.state = LoadState()
        self._generation = RequestGeneration()

    @classmethod
    def from_settings(cls, client: ApiClient, settings: Optional[Settings] = None) -> "ProductListView":
        settings = settings or get_settings()
        return cls(client, settings.products_path)

    async def load(self) -> LoadState:
        token = self._generation.begin()
        self.state = LoadState(LoadStatus.LOADING)
        outcome = await self.strategy.fetch()
        if not self._generation.is_current(token):
            return self.state
        if outcome.ok:
            self.products = list(outcome.payload)
            self.state = LoadState(LoadStatus.READY)
        else:
            log.error(
                f"[PRODUCTS FAILED] {outcome.source}",
                extra={"candidate": outcome.source, "error": outcome.error},
            )
            self.products = []
            self.state = LoadState(LoadStatus.ERROR, outcome.error or "Failed to load products")
        return self.state

    async def retry(self) -> LoadState:
        return await self.load()


class ProductDetailView:
    """
    Detail page for one product.

    Selecting another product while a lookup is in flight supersedes it; the
    older response is dropped when it arrives.
    """

    def __init__(self, client: ApiClient, path_template: str) -> None:
        self.client = client
        self.path_template = path_template
        self.product_id: Optional[str] = None
        self.product: Optional[ProductRecord] = None
        self.state = LoadState()
        self._generation = RequestGeneration()

    @classmethod
    def from_settings(
        cls, client: ApiClient, settings: Optional[Settings] = None
    ) -> "ProductDetailView":
        settings = settings or get_settings()
        return cls(client, settings.product_detail_path)

    def path_for(self, product_id: str) -> str:
        return self.path_template.format(product_id=quote(product_id, safe=""))

    async def load(self, product_id: str) -> LoadState:
        token = self._generation.begin()
        self.product_id = product_id
        self.product = None
        if not product_id:
            self.state = LoadState()
            return self.state

        self.state = LoadState(LoadStatus.LOADING)
        strategy = EndpointStrategy(self.client, self.path_for(product_id), record_object(ProductRecord))
        outcome = await strategy.fetch()
        if not self._generation.is_current(token):
            log.debug(
                "Discarding superseded product response",
                extra={"product_id": product_id, "token": token},
            )
            return self.state

        if not outcome.ok:
            log.error(
                f"[PRODUCT FAILED] {product_id}",
                extra={"product_id": product_id, "error": outcome.error},
            )
            self.state = LoadState(LoadStatus.ERROR, outcome.error or "Failed to load product details")
        elif outcome.payload is None:
            self.state = LoadState(LoadStatus.ERROR, PRODUCT_NOT_FOUND)
        else:
            self.product = outcome.payload
            self.state = LoadState(LoadStatus.READY)
        return self.state

    async def retry(self) -> LoadState:
        return await self.load(self.product_id or "")


class HomeView:
    """
    Storefront landing page: categories, featured products, best sellers and
    the flash-sale countdown.

    ``mount()`` starts the countdown subscription and loads data; ``unmount()``
    cancels the subscription. Mounting twice keeps a single subscription.
    """

    def __init__(
        self,
        client: ApiClient,
        categories_path: str,
        featured_path: str,
        clock: CountdownClock,
        category_limit: int = 6,
        product_limit: int = 8,
        best_seller_min_rating: float = 4.0,
        best_seller_limit: int = 6,
    ) -> None:
        self.categories_strategy = EndpointStrategy(
            client, categories_path, record_list(CategoryRecord, empty_envelope_ok=True)
        )
        self.featured_strategy = EndpointStrategy(
            client, featured_path, record_list(ProductRecord, empty_envelope_ok=True)
        )
        self.clock = clock
        self.category_limit = category_limit
        self.product_limit = product_limit
        self.best_seller_min_rating = best_seller_min_rating
        self.best_seller_limit = best_seller_limit

        self.categories: List[CategoryRecord] = []
        self.products: List[ProductRecord] = []
        self.state = LoadState()
        self._generation = RequestGeneration()

    @classmethod
    def from_settings(
        cls,
        client: ApiClient,
        settings: Optional[Settings] = None,
        clock: Optional[CountdownClock] = None,
    ) -> "HomeView":
        settings = settings or get_settings()
        return cls(
            client,
            categories_path=settings.categories_path,
            featured_path=settings.featured_products_path,
            clock=clock or CountdownClock.from_settings(settings),
            category_limit=settings.home_category_limit,
            product_limit=settings.home_product_limit,
            best_seller_min_rating=settings.best_seller_min_rating,
            best_seller_limit=settings.best_seller_limit,
        )

    async def load(self) -> LoadState:
        token = self._generation.begin()
        self.state = LoadState(LoadStatus.LOADING)
        categories, featured = await asyncio.gather(
            self.categories_strategy.fetch(), self.featured_strategy.fetch()
        )
        if not self._generation.is_current(token):
            return self.state

        failed = [outcome for outcome in (categories, featured) if not outcome.ok]
        if failed:
            for outcome in failed:
                log.error(
                    f"[HOME FAILED] {outcome.source}",
                    extra={"candidate": outcome.source, "error": outcome.error},
                )
            self.state = LoadState(LoadStatus.ERROR, failed[0].error or "Failed to load data")
            return self.state

        self.categories = list(categories.payload)
        self.products = list(featured.payload)
        self.state = LoadState(LoadStatus.READY)
        return self.state

    async def retry(self) -> LoadState:
        return await self.load()

    async def mount(self) -> LoadState:
        self.clock.start()
        return await self.load()

    async def unmount(self) -> None:
        self._generation.invalidate()
        await self.clock.stop()

    @property
    def shown_categories(self) -> List[CategoryRecord]:
        return self.categories[: self.category_limit]

    @property
    def shown_products(self) -> List[ProductRecord]:
        return self.products[: self.product_limit]

    @property
    def best_sellers(self) -> List[ProductRecord]:
        return best_sellers(
            self.products, min_rating=self.best_seller_min_rating, limit=self.best_seller_limit
        )


__all__ = ["HomeView", "PRODUCT_NOT_FOUND", "ProductDetailView", "ProductListView"]
