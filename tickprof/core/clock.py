"""Cost clock and tick source collaborators."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class CostClock(Protocol):
    """Cost counter in milliseconds since the current host tick started."""

    def start_cycle(self) -> None: ...

    def now(self) -> float: ...


@runtime_checkable
class TickSource(Protocol):
    """Monotonically non-decreasing execution cycle number."""

    def current(self) -> int: ...


@dataclass(slots=True)
class PerfCounterClock:
    """Wall-clock cost in milliseconds since the last ``start_cycle`` (or creation)."""

    timer: Callable[[], float] = time.perf_counter
    _origin: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self._origin = self.timer()

    def start_cycle(self) -> None:
        self._origin = self.timer()

    def now(self) -> float:
        return (self.timer() - self._origin) * 1000.0


@dataclass(slots=True)
class TickCounter:
    """In-process tick source advanced by the host loop."""

    start: int = 0
    _tick: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self._tick = int(self.start)

    def current(self) -> int:
        return self._tick

    def advance(self, steps: int = 1) -> int:
        if steps < 0:
            raise ValueError("Tick counter cannot move backwards.")
        self._tick += steps
        return self._tick
