"""Run a callable for a number of profiled cycles and export the reports."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig

from tickprof.profiler import Profiler
from tickprof.utils.hydra import select_profiler_config
from tickprof.utils.imports import resolve_import_path
from tickprof.utils.io import save_json, save_text


def run_profiled_cycles(cfg: DictConfig) -> dict[str, Any]:
    """Arm ``cfg.session``, run ``cfg.target`` for ``cfg.run.cycles`` cycles, export."""

    profiler = Profiler(select_profiler_config(cfg))
    for path in cfg.get("register", []):
        target, label = resolve_import_path(path)
        profiler.register_object(target, label)
    entry, _ = resolve_import_path(cfg.target)
    profiler.enable()

    session = cfg.session
    # Sessions start on the tick after the command, so arm inside a cycle of its own.
    profiler.wrap_cycle(
        profiler.controller.arm,
        str(session.type),
        session.get("duration"),
        session.get("filter"),
    )
    cycles = int(cfg.run.cycles)
    for _ in range(cycles):
        profiler.wrap_cycle(entry)

    out_dir = Path(cfg.paths.output_dir)
    table_path = save_text(out_dir / cfg.paths.table_filename, profiler.output())
    callgrind_path = save_text(
        out_dir / cfg.paths.callgrind_filename, profiler.callgrind_output()
    )
    stats_path = save_json(out_dir / cfg.paths.stats_filename, profiler.snapshot() or {})
    return {
        "session_type": str(session.type),
        "cycles": cycles,
        "functions": len(profiler.stats()),
        "table_path": str(table_path),
        "callgrind_path": str(callgrind_path),
        "stats_path": str(stats_path),
    }
