"""Profiler data model: call records, session state and wrapper identity."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Callable, Literal, get_args

import numpy as np

from tickprof.core.exceptions import ConfigurationError

SessionType = Literal["stream", "email", "profile", "background", "callgrind"]
SESSION_TYPES: tuple[str, ...] = get_args(SessionType)

ROOT_CALLER = "root"
CALLER_KEY_PREFIX = "by "


def caller_key(caller: str) -> str:
    """Key under which a caller breakdown is stored on a callee record."""

    return f"{CALLER_KEY_PREFIX}{caller}"


def to_builtin(value: Any) -> Any:
    """Convert numpy/dataclass values into JSON-serializable builtins."""

    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_builtin(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {str(k): to_builtin(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_builtin(v) for v in value]
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    return value


@dataclass(slots=True)
class CallerStats:
    """Calls of one function made from one specific caller."""

    caller: str
    calls: int = 0
    durations: list[float] = field(default_factory=list)

    def add(self, cost: float) -> None:
        self.calls += 1
        self.durations.append(cost)


@dataclass(slots=True)
class CallRecord:
    """Accumulated samples of one function, with a one-level caller breakdown."""

    calls: int = 0
    durations: list[float] = field(default_factory=list)
    callers: dict[str, CallerStats] = field(default_factory=dict)

    def add(self, cost: float) -> None:
        self.calls += 1
        self.durations.append(cost)

    def by_caller(self, caller: str) -> CallerStats:
        key = caller_key(caller)
        entry = self.callers.get(key)
        if entry is None:
            entry = self.callers[key] = CallerStats(caller=caller)
        return entry


@dataclass(slots=True)
class SessionState:
    """Everything one armed session accumulates between cycles."""

    type: SessionType
    enabled_tick: int
    disable_tick: int | None = None
    filter: str | None = None
    map: dict[str, CallRecord] = field(default_factory=dict)
    total_time: float = 0.0
    init_time: float = 0.0
    time_spend: float = 0.0
    last_total: float = 0.0
    last_sum: float = 0.0
    last_init: float = 0.0

    def __post_init__(self) -> None:
        if self.type not in SESSION_TYPES:
            raise ConfigurationError(
                f"Unsupported session type '{self.type}'. Expected one of: {', '.join(SESSION_TYPES)}."
            )
        if self.disable_tick is not None and self.disable_tick < self.enabled_tick:
            raise ConfigurationError(
                f"disable_tick ({self.disable_tick}) precedes enabled_tick ({self.enabled_tick})."
            )

    @property
    def bounded(self) -> bool:
        return self.disable_tick is not None

    def elapsed_ticks(self, tick: int) -> int:
        return tick - self.enabled_tick + 1

    def to_dict(self) -> dict[str, Any]:
        return to_builtin(self)


@dataclass(frozen=True, slots=True)
class WrapperIdentity:
    """Marker attached to every profiling proxy."""

    display_name: str
    original: Callable[..., Any]
    properties: dict[str, Any]
    text: str
