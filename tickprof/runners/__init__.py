"""Host-loop runners."""

from tickprof.runners.cycles import run_profiled_cycles

__all__ = ["run_profiled_cycles"]
