"""
Resilient multi-candidate fetcher.

Usage:
    from storefront.fetching.resilient import ResilientFetcher, user_candidates

    fetcher = ResilientFetcher(user_candidates(client, ["/clients", "/users"]))
    report = await fetcher.fetch()
    if not report.available:
        ...  # soft failure: render the advisory, keep the view usable

Candidates are attempted strictly in order, one at a time; the first success
wins and no later candidate is contacted. When every candidate fails the
fetcher reports an empty, unavailable result instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from storefront.domain.models import UserRecord
from storefront.fetching.abstract import FetchOutcome, FetchStrategy
from storefront.fetching.endpoint import EndpointStrategy, record_list
from storefront.infrastructure.api_client import ApiClient
from storefront.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class FetchReport:
    """
    Result of a resilient fetch.

    ``source`` names the winning candidate, or is None when all failed.
    ``attempts`` lists every outcome in the order tried.
    """

    records: List[Any] = field(default_factory=list)
    source: Optional[str] = None
    attempts: Tuple[FetchOutcome, ...] = ()

    @property
    def available(self) -> bool:
        return self.source is not None

    @property
    def failures(self) -> List[FetchOutcome]:
        return [outcome for outcome in self.attempts if not outcome.ok]


class ResilientFetcher:
    """
    Evaluate an ordered list of fetch strategies, short-circuiting on success.
    """

    def __init__(self, strategies: Sequence[FetchStrategy], label: str = "records") -> None:
        self.strategies = list(strategies)
        self.label = label

    async def _attempt(self, strategy: FetchStrategy) -> FetchOutcome:
        try:
            return await strategy.fetch()
        except Exception as exc:  # noqa: BLE001 - a misbehaving strategy still counts as a failed candidate
            return FetchOutcome.failure(strategy.name, f"{type(exc).__name__}: {exc}")

    async def fetch(self) -> FetchReport:
        attempts: List[FetchOutcome] = []
        for strategy in self.strategies:
            outcome = await self._attempt(strategy)
            attempts.append(outcome)
            if outcome.ok:
                records = outcome.payload if outcome.payload is not None else []
                log.info(
                    f"[FETCH SUCCESS] {self.label} from {strategy.name}",
                    extra={"candidate": strategy.name, "records": len(records)},
                )
                return FetchReport(records=records, source=strategy.name, attempts=tuple(attempts))
            log.warning(
                f"[CANDIDATE FAILED] {self.label} from {strategy.name}",
                extra={"candidate": strategy.name, "error": outcome.error},
            )

        log.warning(
            f"[NO DATA] all {len(attempts)} candidate(s) for {self.label} failed",
            extra={"candidates": [outcome.source for outcome in attempts]},
        )
        return FetchReport(records=[], source=None, attempts=tuple(attempts))


def user_candidates(client: ApiClient, paths: Iterable[str]) -> List[EndpointStrategy]:
    """Build account-listing strategies, one per resource path, in priority order."""
    return [
        EndpointStrategy(client, path, record_list(UserRecord), description=f"accounts via {path}")
        for path in paths
    ]


__all__ = ["FetchReport", "ResilientFetcher", "user_candidates"]
