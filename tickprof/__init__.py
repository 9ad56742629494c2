"""Call-tree profiler for cycle-driven Python programs."""

from __future__ import annotations

from typing import Any, Callable

from tickprof.core.exceptions import (
    ConfigurationError,
    DoubleWrapError,
    InvalidTargetError,
    MissingNameError,
    TickProfError,
)
from tickprof.profiler import Profiler, get_default_profiler, set_default_profiler


def enable() -> None:
    get_default_profiler().enable()


def wrap_cycle(callback: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    return get_default_profiler().wrap_cycle(callback, *args, **kwargs)


def register_function(fn: Callable[..., Any], name: str | None = None) -> Callable[..., Any]:
    return get_default_profiler().register_function(fn, name)


def register_object(obj: Any, label: str | None = None) -> Any:
    return get_default_profiler().register_object(obj, label)


def register_class(cls: Any, label: str | None = None) -> Any:
    return get_default_profiler().register_class(cls, label)


def stream(duration: int | None = None, filter: str | None = None) -> None:
    get_default_profiler().stream(duration, filter)


def email(duration: int | None = None, filter: str | None = None) -> None:
    get_default_profiler().email(duration, filter)


def profile(duration: int | None = None, filter: str | None = None) -> None:
    get_default_profiler().profile(duration, filter)


def background(filter: str | None = None) -> None:
    get_default_profiler().background(filter)


def callgrind(duration: int | None = None, filter: str | None = None) -> None:
    get_default_profiler().callgrind(duration, filter)


def reset() -> None:
    get_default_profiler().reset()


def restart() -> bool:
    return get_default_profiler().restart()


def output(max_chars: int | None = None, *, limit: int | None = None) -> str:
    return get_default_profiler().output(max_chars, limit=limit)


def callgrind_output() -> str:
    return get_default_profiler().callgrind_output()


__all__ = [
    "ConfigurationError",
    "DoubleWrapError",
    "InvalidTargetError",
    "MissingNameError",
    "Profiler",
    "TickProfError",
    "background",
    "callgrind",
    "callgrind_output",
    "email",
    "enable",
    "get_default_profiler",
    "output",
    "profile",
    "register_class",
    "register_function",
    "register_object",
    "reset",
    "restart",
    "set_default_profiler",
    "stream",
    "wrap_cycle",
]
