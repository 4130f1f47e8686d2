"""
Load-state bookkeeping shared by the view-models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    # Soft failure: no data available, view stays usable.
    EMPTY = "empty"
    # Fatal failure: blocking error with a retry action.
    ERROR = "error"


@dataclass(frozen=True)
class LoadState:
    status: LoadStatus = LoadStatus.IDLE
    message: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.status is LoadStatus.ERROR

    @property
    def is_advisory(self) -> bool:
        return self.status is LoadStatus.EMPTY


class RequestGeneration:
    """
    Monotonic request counter.

    Each load takes a token from ``begin()``; a response is applied only while
    its token is still current, so a slow response for a superseded request
    cannot overwrite newer state.
    """

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def begin(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current

    def invalidate(self) -> None:
        self._current += 1


__all__ = ["LoadState", "LoadStatus", "RequestGeneration"]
