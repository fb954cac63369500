"""Clock providers for ``Vertex.created_at`` stamping.

A clock is any zero-argument callable returning a non-decreasing int.

INVARIANT: Successive calls never return a smaller value.
"""

from __future__ import annotations

import time
from collections.abc import Callable

type Clock = Callable[[], int]

CLOCK_KINDS = ("logical", "wall")


class LogicalClock:
    """Counter clock: 1, 2, 3, ... one tick per call."""

    def __init__(self, start: int = 0) -> None:
        self._last = start

    @property
    def last(self) -> int:
        return self._last

    def __call__(self) -> int:
        self._last += 1
        return self._last


class WallClock:
    """Unix seconds, clamped so a system clock step back never shows."""

    def __init__(self, source: Callable[[], float] = time.time) -> None:
        self._source = source
        self._last = 0

    def __call__(self) -> int:
        self._last = max(self._last, int(self._source()))
        return self._last


def make_clock(kind: str, *, start: int = 0) -> Clock:
    """Build a clock by config name (``"logical"`` or ``"wall"``).

    Raises:
        ValueError: If *kind* is not a known clock.
    """
    if kind == "logical":
        return LogicalClock(start)
    if kind == "wall":
        return WallClock()
    msg = f"Unknown clock kind: {kind!r}. Expected one of {list(CLOCK_KINDS)}"
    raise ValueError(msg)
