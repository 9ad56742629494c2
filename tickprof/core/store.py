"""Session state persistence slot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from tickprof.core.types import SessionState


@runtime_checkable
class StateStore(Protocol):
    """Single mutable slot holding the current session, or None."""

    def get(self) -> SessionState | None: ...

    def set(self, state: SessionState | None) -> None: ...


@dataclass(slots=True)
class MemoryStateStore:
    """Keeps the session in process memory for the lifetime of the run."""

    state: SessionState | None = None

    def get(self) -> SessionState | None:
        return self.state

    def set(self, state: SessionState | None) -> None:
        self.state = state
