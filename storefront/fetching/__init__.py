"""
Fetching package for the storefront client.

Re-exports the strategy abstractions, the single-endpoint strategy and the
resilient multi-candidate fetcher.
"""

from storefront.fetching.abstract import AbstractFetchStrategy, FetchOutcome, FetchStrategy
from storefront.fetching.endpoint import (
    EndpointStrategy,
    record_list,
    record_object,
    unwrap_envelope,
)
from storefront.fetching.resilient import FetchReport, ResilientFetcher, user_candidates

__all__ = [
    # Abstracts
    "AbstractFetchStrategy",
    "FetchOutcome",
    "FetchStrategy",
    # Concrete
    "EndpointStrategy",
    "FetchReport",
    "ResilientFetcher",
    # Helpers
    "record_list",
    "record_object",
    "unwrap_envelope",
    "user_candidates",
]
