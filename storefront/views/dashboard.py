"""
Admin dashboard view-model.

Loads the account snapshot through a ResilientFetcher, derives the dashboard
counts, and exposes a searchable, paginated listing. All derived values are
recomputed from the current snapshot; a reload replaces the snapshot wholesale.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional

from storefront.config import Settings, get_settings
from storefront.domain.models import DashboardStats, PaginationState, UserRecord
from storefront.fetching.resilient import FetchReport, ResilientFetcher, user_candidates
from storefront.infrastructure.api_client import ApiClient
from storefront.services.metrics import RECENT_WINDOW_DAYS, compute_stats
from storefront.services.search import (
    DEFAULT_WINDOW_SIZE,
    build_pagination,
    clamp_page,
    filter_records,
    page_bounds,
    paginate,
    visible_page_window,
)
from storefront.utils.logging import get_logger
from storefront.views.state import LoadState, LoadStatus, RequestGeneration

log = get_logger(__name__)

USER_DATA_UNAVAILABLE = "User data endpoint not available"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DashboardView:
    """
    Parameters
    ----------
    fetcher : ResilientFetcher
        Account listing candidates in priority order.
    items_per_page : int
        Fixed page size of the listing.
    window_size : int
        Number of page buttons to show.
    recent_window_days : int
        Rolling window for the "recent users" count.
    now : callable
        Clock used when computing stats; injectable for tests.
    """

    def __init__(
        self,
        fetcher: ResilientFetcher,
        items_per_page: int = 10,
        window_size: int = DEFAULT_WINDOW_SIZE,
        recent_window_days: int = RECENT_WINDOW_DAYS,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.fetcher = fetcher
        self.items_per_page = items_per_page
        self.window_size = window_size
        self.recent_window_days = recent_window_days
        self._now = now
        self._generation = RequestGeneration()

        self.users: List[UserRecord] = []
        self.stats = DashboardStats()
        self.source: Optional[str] = None
        self.state = LoadState()
        self.search_term = ""
        self.current_page = 1

    @classmethod
    def from_settings(cls, client: ApiClient, settings: Optional[Settings] = None) -> "DashboardView":
        settings = settings or get_settings()
        fetcher = ResilientFetcher(user_candidates(client, settings.user_endpoints), label="users")
        return cls(
            fetcher,
            items_per_page=settings.items_per_page,
            window_size=settings.page_window_size,
            recent_window_days=settings.recent_window_days,
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    async def load(self) -> LoadState:
        token = self._generation.begin()
        self.state = LoadState(LoadStatus.LOADING)
        try:
            report = await self.fetcher.fetch()
            if not self._generation.is_current(token):
                log.debug("Discarding superseded dashboard response", extra={"token": token})
                return self.state
            self._apply(report)
        except Exception as exc:  # noqa: BLE001 - the view must stay mounted
            log.exception("[DASHBOARD FAILED] could not build dashboard")
            self.state = LoadState(LoadStatus.ERROR, str(exc) or "Failed to load dashboard data")
        return self.state

    async def retry(self) -> LoadState:
        return await self.load()

    def _apply(self, report: FetchReport) -> None:
        self.users = list(report.records)
        self.source = report.source
        self.stats = compute_stats(self.users, self._now(), window_days=self.recent_window_days)
        self.current_page = clamp_page(self.current_page, self.pagination.total_pages)
        if report.available:
            self.state = LoadState(LoadStatus.READY)
        else:
            self.state = LoadState(LoadStatus.EMPTY, USER_DATA_UNAVAILABLE)

    # ------------------------------------------------------------------
    # Search and navigation
    # ------------------------------------------------------------------
    def set_search(self, term: str) -> None:
        self.search_term = term
        self.current_page = 1

    def go_to_page(self, page: int) -> int:
        self.current_page = clamp_page(page, self.pagination.total_pages)
        return self.current_page

    def next_page(self) -> int:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.current_page - 1)

    # ------------------------------------------------------------------
    # Derived listing
    # ------------------------------------------------------------------
    @property
    def filtered_users(self) -> List[UserRecord]:
        return filter_records(self.users, self.search_term)

    @property
    def pagination(self) -> PaginationState:
        return build_pagination(len(self.filtered_users), self.current_page, self.items_per_page)

    @property
    def page_items(self) -> List[UserRecord]:
        state = self.pagination
        items, _ = paginate(self.filtered_users, state.current_page, self.items_per_page)
        return items

    @property
    def page_window(self) -> List[int]:
        state = self.pagination
        return visible_page_window(state.current_page, state.total_pages, self.window_size)

    @property
    def page_summary(self) -> Optional[str]:
        state = self.pagination
        if state.total_pages <= 1:
            return None
        first, last = page_bounds(state)
        return f"Showing {first} to {last} of {state.total_items} users"


__all__ = ["DashboardView", "USER_DATA_UNAVAILABLE"]
