"""Tabular digest of the accumulated call statistics."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Union

import numpy as np

from tickprof.core.types import CallerStats, CallRecord, SessionState, to_builtin

NOT_ACTIVE = "Profiler not active."
HEADER = "calls\ttime\tavg\tmax\tfunction"
INDENT = "  "


@dataclass(slots=True)
class FunctionStats:
    """Aggregated timings of one function or one caller breakdown entry."""

    name: str
    calls: int
    total_time: float
    average_time: float
    max_time: float
    sub_stats: list[FunctionStats] | None = None

    def to_dict(self) -> dict:
        return to_builtin(self)


def summarize_durations(durations: Sequence[float]) -> tuple[float, float, float]:
    """Return (total, average, max) of a sample list."""

    arr = np.asarray(durations, dtype=np.float64)
    if arr.size == 0:
        return 0.0, 0.0, 0.0
    total = float(arr.sum())
    return total, total / arr.size, float(arr.max())


def build_stats(records: Mapping[str, Union[CallRecord, CallerStats]]) -> list[FunctionStats]:
    """Sort records by total time, expanding caller breakdowns of two or more."""

    stats: list[FunctionStats] = []
    for name, record in records.items():
        total, average, maximum = summarize_durations(record.durations)
        callers = getattr(record, "callers", None)
        # One caller says nothing the parent line doesn't.
        sub_stats = build_stats(callers) if callers and len(callers) >= 2 else None
        stats.append(
            FunctionStats(
                name=name,
                calls=record.calls,
                total_time=total,
                average_time=average,
                max_time=maximum,
                sub_stats=sub_stats,
            )
        )
    stats.sort(key=lambda entry: entry.total_time, reverse=True)
    return stats


def format_lines(stats: Sequence[FunctionStats], depth: int = 0) -> list[str]:
    lines: list[str] = []
    for entry in stats:
        lines.append(
            "\t".join(
                [
                    str(entry.calls),
                    f"{entry.total_time:.1f}",
                    f"{entry.average_time:.3f}",
                    f"{entry.max_time:.3f}",
                    f"{INDENT * depth}{entry.name}",
                ]
            )
        )
        if entry.sub_stats is not None:
            lines.extend(format_lines(entry.sub_stats, depth + 1))
    return lines


def fit_lines(header: str, body: Sequence[str], footer: str, max_chars: int | None) -> list[str]:
    """Keep whole body lines, top first, while the joined text fits ``max_chars``."""

    if max_chars is None:
        return [header, *body, footer]
    used = len(header) + 1 + len(footer)
    if used > max_chars:
        return [header] if len(header) <= max_chars else []
    kept: list[str] = []
    for line in body:
        if used + len(line) + 1 > max_chars:
            break
        kept.append(line)
        used += len(line) + 1
    return [header, *kept, footer]


def build_footer(state: SessionState, tick: int, time_sum: float) -> str:
    elapsed = state.elapsed_ticks(tick)
    average = state.total_time / elapsed if elapsed > 0 else 0.0
    return "\t".join(
        [
            f"Avg: {average:.2f}",
            f"Sum: {time_sum:.2f} {time_sum - state.last_sum:+.2f}",
            f"Init: {state.init_time:.2f} {state.init_time - state.last_init:+.2f}",
            f"Total: {state.total_time:.2f} {state.total_time - state.last_total:+.2f}",
            f"Ticks: {max(elapsed, 0)}",
        ]
    )


def render_table(
    state: SessionState | None,
    tick: int,
    *,
    limit: int = 20,
    max_chars: int | None = None,
) -> str:
    """Render the digest and move the ``last_*`` snapshots forward."""

    if state is None:
        return NOT_ACTIVE
    stats = build_stats(state.map)
    time_sum = sum(entry.total_time for entry in stats)
    footer = build_footer(state, tick, time_sum)

    state.last_total = state.total_time
    state.last_sum = time_sum
    state.last_init = state.init_time

    body = format_lines(stats[:limit])
    return "\n".join(fit_lines(HEADER, body, footer, max_chars))
