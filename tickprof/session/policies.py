"""Per-session-type reporting policies evaluated at the end of each cycle."""

from __future__ import annotations

from typing import Callable, Literal

from tickprof.core.registry import Registry
from tickprof.core.types import SessionState

ReportAction = Literal["print", "notify"]
ReportPolicy = Callable[[SessionState, int], "ReportAction | None"]

POLICY_REGISTRY: Registry[ReportPolicy] = Registry(namespace="session type")


def on_ending_tick(state: SessionState, tick: int) -> bool:
    return state.disable_tick == tick


@POLICY_REGISTRY.entry("stream")
def _stream_policy(state: SessionState, tick: int) -> ReportAction | None:
    return "print"


@POLICY_REGISTRY.entry("profile")
def _profile_policy(state: SessionState, tick: int) -> ReportAction | None:
    return "print" if on_ending_tick(state, tick) else None


@POLICY_REGISTRY.entry("email")
def _email_policy(state: SessionState, tick: int) -> ReportAction | None:
    return "notify" if on_ending_tick(state, tick) else None


@POLICY_REGISTRY.entry("background")
def _background_policy(state: SessionState, tick: int) -> ReportAction | None:
    # Accumulates silently; read on demand with output().
    return None


@POLICY_REGISTRY.entry("callgrind")
def _callgrind_policy(state: SessionState, tick: int) -> ReportAction | None:
    # Pulled on demand with callgrind_output().
    return None


def resolve_report_action(state: SessionState, tick: int) -> ReportAction | None:
    return POLICY_REGISTRY.get(state.type)(state, tick)
