"""
Fetch strategy interfaces and result contracts for the storefront client.

A fetch strategy reads one data-source candidate and reports the result as a
FetchOutcome instead of raising. Strategies are composed by the
ResilientFetcher, which evaluates them in priority order.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class FetchOutcome:
    """
    Success/failure result of a single candidate attempt.

    ``payload`` holds the parsed value on success; ``error`` holds a
    human-readable reason on failure.
    """

    source: str
    ok: bool
    payload: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, source: str, payload: Any) -> "FetchOutcome":
        return cls(source=source, ok=True, payload=payload)

    @classmethod
    def failure(cls, source: str, error: str) -> "FetchOutcome":
        return cls(source=source, ok=False, error=error)


@runtime_checkable
class FetchStrategy(Protocol):
    """
    Common interface all fetch strategies must implement.

    Attributes
    ----------
    name : str
        A short identifier, typically the resource path.
    description : str
        A human-friendly summary of the data source.
    """

    name: str
    description: str

    async def fetch(self) -> FetchOutcome:
        """
        Read the data source once.

        Returns
        -------
        FetchOutcome
            Success with the parsed payload, or failure with a reason. Must not raise.
        """
        ...


class AbstractFetchStrategy(abc.ABC):
    """
    Optional ABC helper for class-based implementations.

    Subclasses should set `name` and `description` and implement `fetch`.
    """

    name: str
    description: str

    @abc.abstractmethod
    async def fetch(self) -> FetchOutcome:  # pragma: no cover - interface only
        """Read the data source and return an outcome."""
        raise NotImplementedError


__all__ = [
    "AbstractFetchStrategy",
    "FetchOutcome",
    "FetchStrategy",
]
