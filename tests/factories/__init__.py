"""Shared test factories."""

from .module_factory import TARGET_MODULE_SOURCE, write_target_module
from .profiler_factory import (
    FakeClock,
    ListSink,
    activate,
    build_profiler,
    build_profiler_cfg,
)

__all__ = [
    "TARGET_MODULE_SOURCE",
    "FakeClock",
    "ListSink",
    "activate",
    "build_profiler",
    "build_profiler_cfg",
    "write_target_module",
]
