"""Update cadence and the cooperative tick loop.

The update level from the settings store selects how often the clock label
is re-rendered: level 0 once a minute at idle priority, levels 1-15 that
many times per second. UpdateLoop drives a tick callback at that cadence on
an asyncio event loop; each tick completes before the next is scheduled.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

from datemenu.constants import (
    MAX_UPDATE_LEVEL,
    MIN_UPDATE_LEVEL,
    MINUTE_INTERVAL_MS,
    SECOND_INTERVAL_MS,
)

__all__ = ["Priority", "UpdateLoop", "UpdateRate", "update_level", "update_level_to_string"]

logger = logging.getLogger(__name__)

_HIGH_PRIORITY_FROM = 8


class Priority(IntEnum):
    """Main-loop source priorities (lower runs first)."""

    HIGH = -100
    DEFAULT = 0
    DEFAULT_IDLE = 200


@dataclass(frozen=True, slots=True)
class UpdateRate:
    """Resolved update cadence.

    Attributes:
        level: Effective update level
        priority: Scheduling priority for the host timer
        interval_ms: Milliseconds between ticks
    """

    level: float
    priority: Priority
    interval_ms: float

    @property
    def interval(self) -> float:
        """Seconds between ticks."""
        return self.interval_ms / 1000


def _valid_level(level: object) -> float | None:
    if isinstance(level, bool) or not isinstance(level, int | float):
        return None
    if math.isnan(level):
        return None
    return level


def update_level(level: object) -> UpdateRate:
    """Map an update level to a cadence.

    Anything outside 0-15 (or not a number) falls back to level 1.

    Example:
        >>> update_level(4).interval_ms
        250.0
        >>> update_level(0).priority
        <Priority.DEFAULT_IDLE: 200>
    """
    value = _valid_level(level)
    if value is not None:
        if value == MIN_UPDATE_LEVEL:
            return UpdateRate(value, Priority.DEFAULT_IDLE, MINUTE_INTERVAL_MS)
        if MIN_UPDATE_LEVEL < value < _HIGH_PRIORITY_FROM:
            return UpdateRate(value, Priority.DEFAULT, SECOND_INTERVAL_MS / value)
        if _HIGH_PRIORITY_FROM <= value <= MAX_UPDATE_LEVEL:
            return UpdateRate(value, Priority.HIGH, SECOND_INTERVAL_MS / value)
    return UpdateRate(1, Priority.DEFAULT, SECOND_INTERVAL_MS)


def update_level_to_string(level: object) -> str:
    """Human-readable cadence, e.g. "every minute" or "4 times in a second"."""
    value = _valid_level(level)
    if value is not None:
        if value == MIN_UPDATE_LEVEL:
            return "every minute"
        if value == 1:
            return "every second"
        if 1 < value <= MAX_UPDATE_LEVEL:
            return f"{value:g} times in a second"
    return "every second"


class UpdateLoop:
    """Call tick() at a fixed cadence until it returns False or stop() is called.

    Example:
        >>> ticks = []
        >>> loop = UpdateLoop(lambda: ticks.append(1) or len(ticks) < 3, update_level(15))
        >>> asyncio.run(loop.run())
        >>> len(ticks)
        3
    """

    __slots__ = ("_rate", "_running", "_stop_event", "_stopped", "_tick")

    def __init__(self, tick: Callable[[], bool], rate: UpdateRate) -> None:
        """Initialize loop.

        Args:
            tick: Callback; returning False ends the loop
            rate: Cadence between ticks
        """
        self._tick = tick
        self._rate = rate
        self._stopped = False
        self._running = False
        self._stop_event: asyncio.Event | None = None

    @property
    def rate(self) -> UpdateRate:
        """Cadence between ticks."""
        return self._rate

    @property
    def running(self) -> bool:
        """True while run() is active."""
        return self._running

    @property
    def stopped(self) -> bool:
        """True once stop() was called."""
        return self._stopped

    async def run(self) -> None:
        """Tick immediately, then once per interval.

        Returns when tick() returns False or stop() is called. A stopped loop
        does not run again.
        """
        if self._stopped:
            return
        self._stop_event = asyncio.Event()
        self._running = True
        logger.debug("Update loop started (every %.1f ms)", self._rate.interval_ms)
        try:
            while not self._stopped:
                if not self._tick():
                    break
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self._rate.interval)
                except TimeoutError:
                    continue
        finally:
            self._running = False
            logger.debug("Update loop stopped")

    def stop(self) -> None:
        """Stop the loop before its next tick. Idempotent."""
        self._stopped = True
        if self._stop_event is not None:
            self._stop_event.set()
