"""Caller-attributed call statistics."""

from __future__ import annotations

from tickprof.core.store import StateStore
from tickprof.core.types import CallRecord, SessionState


class CallTreeRecorder:
    """Writes timed invocations into the session held by a state store."""

    def __init__(self, store: StateStore) -> None:
        self._store = store

    def record(self, caller: str | None, callee: str, cost: float) -> None:
        state = self._store.get()
        if state is None:
            return
        record_call(state, caller, callee, cost)


def record_call(state: SessionState, caller: str | None, callee: str, cost: float) -> CallRecord:
    """Add one sample for ``callee`` and its ``caller`` breakdown.

    ``cost`` is stored as given; negative values come from clock skew and are
    left visible in reports.
    """

    record = state.map.get(callee)
    if record is None:
        record = state.map[callee] = CallRecord()
    record.add(cost)
    state.time_spend += cost
    if caller is not None:
        record.by_caller(caller).add(cost)
    return record
