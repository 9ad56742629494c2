"""Callgrind call-graph export, readable by KCachegrind/QCachegrind."""

from __future__ import annotations

from tickprof.core.types import CallerStats, SessionState
from tickprof.reporting.table import NOT_ACTIVE, summarize_durations

EVENTS = "ns"


def to_ns(cost_ms: float) -> int:
    return int(round(cost_ms * 1_000_000))


def collect_edges(state: SessionState) -> dict[str, dict[str, CallerStats]]:
    """Invert the per-callee caller breakdowns into caller -> callee edges."""

    edges: dict[str, dict[str, CallerStats]] = {}
    for callee, record in state.map.items():
        for entry in record.callers.values():
            edges.setdefault(entry.caller, {})[callee] = entry
    return edges


def render_callgrind(state: SessionState | None) -> str:
    """Emit one ``fn=`` block per function followed by its ``cfn=`` calls.

    Recorded samples already exclude nested profiled calls, so a function's
    recorded total is its self cost and each call line carries the callee's
    cost attributed to this caller.
    """

    if state is None:
        return NOT_ACTIVE
    edges = collect_edges(state)
    # Callers never recorded themselves (the root frame, filtered-out parents) go first.
    names = [name for name in edges if name not in state.map] + list(state.map)

    lines = [f"events: {EVENTS}", f"summary: {to_ns(state.time_spend)}"]
    for name in names:
        record = state.map.get(name)
        self_cost = summarize_durations(record.durations)[0] if record is not None else 0.0
        lines.extend(["", f"fn={name}", f"1 {to_ns(self_cost)}"])
        for callee, entry in edges.get(name, {}).items():
            cost = summarize_durations(entry.durations)[0]
            lines.extend([f"cfn={callee}", f"calls={entry.calls} 1", f"1 {to_ns(cost)}"])
    return "\n".join(lines) + "\n"
