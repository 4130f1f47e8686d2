"""
Flash-sale countdown clock.

The clock is a pure countdown: it decrements by one second per tick and does
not track a wall-clock deadline, so time spent while ticking is suspended is
not caught up. Once every field reaches zero the state freezes; ticks keep
arriving but change nothing.

Usage:
    clock = CountdownClock(TimeRemaining(days=2, hours=14, minutes=30, seconds=45))
    async with clock:        # mount: exactly one tick subscription
        ...
    # unmount: subscription cancelled
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import Callable, Optional

from storefront.config import Settings, get_settings
from storefront.domain.models import TimeRemaining
from storefront.utils.logging import get_logger

log = get_logger(__name__)

TickListener = Callable[[TimeRemaining], None]


def tick(state: TimeRemaining) -> TimeRemaining:
    """Advance ``state`` by one second, borrowing from larger units as needed."""
    if state.seconds > 0:
        return state.model_copy(update={"seconds": state.seconds - 1})
    if state.minutes > 0:
        return state.model_copy(update={"minutes": state.minutes - 1, "seconds": 59})
    if state.hours > 0:
        return state.model_copy(update={"hours": state.hours - 1, "minutes": 59, "seconds": 59})
    if state.days > 0:
        return TimeRemaining(days=state.days - 1, hours=23, minutes=59, seconds=59)
    return state


class CountdownClock:
    """
    Tick-driven holder of a TimeRemaining state.

    Parameters
    ----------
    initial : TimeRemaining
        Configured starting duration.
    interval_seconds : float
        Delay between ticks of the background subscription.
    on_tick : callable | None
        Called with the new state after every tick. Errors it raises inside the
        background subscription are logged and the clock keeps ticking.
    """

    def __init__(
        self,
        initial: TimeRemaining,
        interval_seconds: float = 1.0,
        on_tick: Optional[TickListener] = None,
    ) -> None:
        self._remaining = initial
        self.interval_seconds = interval_seconds
        self.on_tick = on_tick
        self._task: asyncio.Task[None] | None = None

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, on_tick: Optional[TickListener] = None
    ) -> "CountdownClock":
        settings = settings or get_settings()
        initial = TimeRemaining(
            days=settings.countdown_days,
            hours=settings.countdown_hours,
            minutes=settings.countdown_minutes,
            seconds=settings.countdown_seconds,
        )
        return cls(initial, interval_seconds=settings.tick_interval_seconds, on_tick=on_tick)

    @property
    def remaining(self) -> TimeRemaining:
        return self._remaining

    @property
    def expired(self) -> bool:
        return self._remaining.is_zero

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> TimeRemaining:
        """Apply one tick and notify the listener."""
        self._remaining = tick(self._remaining)
        if self.on_tick is not None:
            self.on_tick(self._remaining)
        return self._remaining

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.tick()
            except Exception:  # noqa: BLE001 - a failing listener must not end the subscription
                log.exception(
                    "Countdown listener failed",
                    extra={"remaining": self._remaining.total_seconds},
                )

    def start(self) -> None:
        """
        Subscribe to the periodic tick. Idempotent: a running subscription is kept.

        Must be called from within a running event loop.
        """
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        log.debug("Countdown started", extra={"remaining": self._remaining.total_seconds})

    async def stop(self) -> None:
        """Cancel the tick subscription, if any."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        log.debug("Countdown stopped", extra={"remaining": self._remaining.total_seconds})

    async def __aenter__(self) -> "CountdownClock":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()


__all__ = ["CountdownClock", "tick"]
