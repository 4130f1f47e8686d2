from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from storefront.fetching.resilient import FetchReport, ResilientFetcher, user_candidates
from storefront.services.countdown import CountdownClock
from storefront.views import (
    DashboardView,
    HomeView,
    LoadStatus,
    ProductDetailView,
    ProductListView,
    RequestGeneration,
)
from storefront.views.catalog import PRODUCT_NOT_FOUND
from storefront.views.dashboard import USER_DATA_UNAVAILABLE

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def _dashboard(client, settings) -> DashboardView:
    fetcher = ResilientFetcher(user_candidates(client, settings.user_endpoints), label="users")
    return DashboardView(fetcher, items_per_page=10, now=lambda: NOW)


def _many_users(count: int):
    return [
        {"id": str(i), "name": f"User {i}", "email": f"user{i}@example.com"}
        for i in range(1, count + 1)
    ]


class _BrokenFetcher:
    async def fetch(self) -> FetchReport:
        raise RuntimeError("boom")


class _GatedClient:
    """Answers each path only once its gate is opened."""

    def __init__(self, bodies: Dict[str, Any]) -> None:
        self.bodies = bodies
        self.gates = {path: asyncio.Event() for path in bodies}

    async def get_json(self, path: str) -> Any:
        await self.gates[path].wait()
        return self.bodies[path]


def test_request_generation_tracks_latest_token() -> None:
    generation = RequestGeneration()
    first = generation.begin()
    second = generation.begin()
    assert not generation.is_current(first)
    assert generation.is_current(second)
    generation.invalidate()
    assert not generation.is_current(second)


# ----------------------------------------------------------------------
# Dashboard
# ----------------------------------------------------------------------
@pytest.mark.asyncio
async def test_dashboard_loads_from_first_working_candidate(
    backend, make_client, test_settings, sample_users
) -> None:
    backend.add("/users", json={"data": sample_users})

    async with make_client() as client:
        view = _dashboard(client, test_settings)
        state = await view.load()

    assert state.status is LoadStatus.READY
    assert view.source == "/users"
    assert backend.calls == ["/clients", "/users"]
    assert view.stats.total_users == 4
    assert view.stats.active_users == 3
    assert view.stats.recent_users == 1
    assert view.stats.users_with_email == 2
    assert view.page_summary is None
    assert view.page_window == [1]


@pytest.mark.asyncio
async def test_dashboard_without_any_endpoint_is_an_advisory(make_client, test_settings) -> None:
    async with make_client() as client:
        view = _dashboard(client, test_settings)
        state = await view.load()

    assert state.status is LoadStatus.EMPTY
    assert state.is_advisory and not state.is_error
    assert state.message == USER_DATA_UNAVAILABLE
    assert view.users == []
    assert view.stats.total_users == 0
    assert view.page_items == []
    assert view.page_window == []
    assert view.current_page == 1


@pytest.mark.asyncio
async def test_dashboard_search_and_navigation(backend, make_client, test_settings) -> None:
    backend.add("/clients", json=_many_users(23))

    async with make_client() as client:
        view = _dashboard(client, test_settings)
        await view.load()

    assert view.pagination.total_pages == 3
    assert view.page_summary == "Showing 1 to 10 of 23 users"
    assert view.next_page() == 2
    assert [u.id for u in view.page_items][0] == "11"
    assert view.go_to_page(9) == 3
    assert len(view.page_items) == 3
    assert view.page_summary == "Showing 21 to 23 of 23 users"
    assert view.previous_page() == 2
    assert view.go_to_page(-4) == 1

    view.go_to_page(3)
    view.set_search("USER 1")
    assert view.current_page == 1
    # "User 1" and "User 10" through "User 19"
    assert len(view.filtered_users) == 11
    assert view.page_window == [1, 2]

    view.set_search("nobody")
    assert view.page_items == []
    assert view.pagination.total_pages == 0


@pytest.mark.asyncio
async def test_dashboard_reload_clamps_current_page(backend, make_client, test_settings) -> None:
    backend.add("/clients", json=_many_users(35))

    async with make_client() as client:
        view = _dashboard(client, test_settings)
        await view.load()
        view.go_to_page(4)
        backend.add("/clients", json=_many_users(12))
        await view.load()

    assert view.current_page == 2
    assert view.stats.total_users == 12


@pytest.mark.asyncio
async def test_dashboard_unexpected_failure_is_fatal_with_retry(
    backend, make_client, test_settings
) -> None:
    view = DashboardView(_BrokenFetcher(), now=lambda: NOW)
    state = await view.load()

    assert state.is_error
    assert state.message == "boom"

    backend.add("/clients", json=[{"id": "1"}])
    async with make_client() as client:
        view.fetcher = ResilientFetcher(user_candidates(client, test_settings.user_endpoints))
        state = await view.retry()

    assert state.status is LoadStatus.READY
    assert view.stats.total_users == 1


# ----------------------------------------------------------------------
# Catalog
# ----------------------------------------------------------------------
@pytest.mark.asyncio
async def test_product_list_error_then_retry(
    backend, make_client, test_settings, sample_products
) -> None:
    backend.add(test_settings.products_path, status=503, json={})

    async with make_client() as client:
        view = ProductListView.from_settings(client, test_settings)
        state = await view.load()
        assert state.is_error
        assert "503" in state.message
        assert view.products == []

        backend.add(test_settings.products_path, json={"data": sample_products})
        state = await view.retry()

    assert state.status is LoadStatus.READY
    assert [p.product_id for p in view.products] == ["P1", "P2", "P3", "P4"]


@pytest.mark.asyncio
async def test_product_detail_found(backend, make_client, test_settings, sample_products) -> None:
    backend.add("/client/v1/productDetails/P1", json={"data": sample_products[0]})

    async with make_client() as client:
        view = ProductDetailView.from_settings(client, test_settings)
        state = await view.load("P1")

    assert state.status is LoadStatus.READY
    assert view.product is not None and view.product.name == "Phone"


@pytest.mark.asyncio
async def test_product_detail_not_found(backend, make_client, test_settings) -> None:
    backend.add("/client/v1/productDetails/P9", json={"data": {}})

    async with make_client() as client:
        view = ProductDetailView.from_settings(client, test_settings)
        state = await view.load("P9")

    assert state.is_error
    assert state.message == PRODUCT_NOT_FOUND
    assert view.product is None


@pytest.mark.asyncio
async def test_product_detail_error_then_retry(
    backend, make_client, test_settings, sample_products
) -> None:
    path = "/client/v1/productDetails/P2"
    backend.fail_connect(path)

    async with make_client() as client:
        view = ProductDetailView.from_settings(client, test_settings)
        assert (await view.load("P2")).is_error

        backend.add(path, json=sample_products[1])
        state = await view.retry()

    assert state.status is LoadStatus.READY
    assert view.product.product_id == "P2"


@pytest.mark.asyncio
async def test_product_detail_without_id_stays_idle(backend, make_client, test_settings) -> None:
    async with make_client() as client:
        view = ProductDetailView.from_settings(client, test_settings)
        state = await view.load("")

    assert state.status is LoadStatus.IDLE
    assert backend.calls == []


def test_product_detail_path_quotes_identifier(test_settings) -> None:
    view = ProductDetailView(client=None, path_template=test_settings.product_detail_path)
    assert view.path_for("a/b c") == "/client/v1/productDetails/a%2Fb%20c"


@pytest.mark.asyncio
async def test_product_detail_discards_superseded_response() -> None:
    client = _GatedClient(
        {
            "/p/old": {"productId": "old", "productName": "Old"},
            "/p/new": {"productId": "new", "productName": "New"},
        }
    )
    view = ProductDetailView(client, "/p/{product_id}")

    first = asyncio.create_task(view.load("old"))
    await asyncio.sleep(0)
    second = asyncio.create_task(view.load("new"))
    await asyncio.sleep(0)

    client.gates["/p/new"].set()
    await second
    assert view.product.product_id == "new"

    client.gates["/p/old"].set()
    await first
    assert view.product.product_id == "new"
    assert view.product_id == "new"
    assert view.state.status is LoadStatus.READY


def _categories(count: int):
    return [{"categoryId": i, "categoryName": f"Category {i}"} for i in range(1, count + 1)]


@pytest.mark.asyncio
async def test_home_view_loads_sections(backend, make_client, test_settings, sample_products) -> None:
    backend.add(test_settings.categories_path, json={"data": _categories(8)})
    backend.add(test_settings.featured_products_path, json={"data": sample_products * 3})

    async with make_client() as client:
        view = HomeView.from_settings(client, test_settings)
        state = await view.load()

    assert state.status is LoadStatus.READY
    assert len(view.shown_categories) == 6
    assert len(view.shown_products) == 8
    assert [p.product_id for p in view.best_sellers] == ["P1", "P3", "P1", "P3", "P1", "P3"]


@pytest.mark.asyncio
async def test_home_view_failure_is_fatal(backend, make_client, test_settings, sample_products) -> None:
    backend.add(test_settings.categories_path, status=500, json={})
    backend.add(test_settings.featured_products_path, json={"data": sample_products})

    async with make_client() as client:
        view = HomeView.from_settings(client, test_settings)
        state = await view.load()

    assert state.is_error
    assert "500" in state.message


@pytest.mark.asyncio
async def test_home_view_mount_keeps_single_countdown_subscription(
    backend, make_client, test_settings
) -> None:
    backend.add(test_settings.categories_path, json=[])
    backend.add(test_settings.featured_products_path, json=[])
    clock = CountdownClock.from_settings(test_settings)

    async with make_client() as client:
        view = HomeView.from_settings(client, test_settings, clock=clock)
        await view.mount()
        task = clock._task
        await view.mount()
        assert clock._task is task
        assert clock.running

        await view.unmount()

    assert not clock.running
    assert view.state.status is LoadStatus.READY


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"success": True, "data": None}, {}])
async def test_product_list_empty_envelope_is_an_empty_listing(
    backend, make_client, test_settings, payload
) -> None:
    backend.add(test_settings.products_path, json=payload)

    async with make_client() as client:
        view = ProductListView.from_settings(client, test_settings)
        state = await view.load()

    assert state.status is LoadStatus.READY
    assert view.products == []


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"success": True, "data": None}, {}])
async def test_home_view_empty_envelopes_render_empty_sections(
    backend, make_client, test_settings, payload
) -> None:
    backend.add(test_settings.categories_path, json=payload)
    backend.add(test_settings.featured_products_path, json=payload)

    async with make_client() as client:
        view = HomeView.from_settings(client, test_settings)
        state = await view.load()

    assert state.status is LoadStatus.READY
    assert view.shown_categories == []
    assert view.best_sellers == []


@pytest.mark.asyncio
async def test_product_list_tolerates_null_fields(backend, make_client, test_settings) -> None:
    backend.add(
        test_settings.products_path,
        json=[
            {"id": "1", "name": "A", "price": 5, "rating": None},
            {"id": "2", "name": None, "price": None, "originalPrice": None},
        ],
    )

    async with make_client() as client:
        view = ProductListView.from_settings(client, test_settings)
        state = await view.load()

    assert state.status is LoadStatus.READY
    assert [p.rating for p in view.products] == ["0", "0"]
    assert view.products[1].final_price == 0.0
