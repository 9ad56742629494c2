"""Execution context shared by every proxy of one profiler."""

from __future__ import annotations

from dataclasses import dataclass

from tickprof.core.types import ROOT_CALLER


@dataclass(slots=True)
class ExecutionContext:
    """Current caller slot and filter recursion depth of the single call stack."""

    caller: str = ROOT_CALLER
    depth: int = 0

    def reset(self) -> None:
        self.caller = ROOT_CALLER
        self.depth = 0

    def enter(self, name: str, *, filtered: bool) -> str:
        """Make ``name`` the current caller and return the one it replaces."""

        parent = self.caller
        self.caller = name
        if filtered:
            self.depth += 1
        return parent

    def leave(self, parent: str, *, filtered: bool) -> None:
        self.caller = parent
        if filtered:
            self.depth -= 1
