from __future__ import annotations

import pytest

from tests.factories import activate
from tickprof.core.exceptions import ConfigurationError
from tickprof.core.types import SessionState
from tickprof.recording.recorder import record_call
from tickprof.reporting.callgrind import render_callgrind, to_ns
from tickprof.reporting.table import (
    HEADER,
    NOT_ACTIVE,
    build_stats,
    fit_lines,
    render_table,
)


def _state_with_breakdown() -> SessionState:
    state = SessionState(type="background", enabled_tick=1)
    record_call(state, "root", "a", 1.0)
    record_call(state, "root", "a", 2.0)
    record_call(state, "x", "b", 4.0)
    record_call(state, "y", "b", 1.0)
    return state


def test_build_stats_sorts_and_expands_multi_caller_breakdowns() -> None:
    stats = build_stats(_state_with_breakdown().map)

    assert [entry.name for entry in stats] == ["b", "a"]
    b, a = stats
    assert b.calls == 2
    assert b.total_time == pytest.approx(5.0)
    assert b.average_time == pytest.approx(2.5)
    assert b.max_time == pytest.approx(4.0)
    assert [sub.name for sub in b.sub_stats] == ["by x", "by y"]
    assert b.sub_stats[0].sub_stats is None
    # A single caller duplicates the parent line.
    assert a.sub_stats is None


def test_render_table_without_session() -> None:
    assert render_table(None, 10) == NOT_ACTIVE


def test_output_before_any_session(profiler) -> None:
    assert profiler.output() == NOT_ACTIVE


def test_output_with_no_profiled_functions(profiler) -> None:
    profiler.profile(10)
    text = profiler.output()

    lines = text.split("\n")
    assert lines[0] == HEADER
    assert lines[-1].startswith("Avg: ")
    assert "Ticks: 0" in lines[-1]
    assert len(lines) == 2


def test_table_lines_are_tab_separated_and_indent_breakdowns() -> None:
    state = _state_with_breakdown()
    lines = render_table(state, tick=2).split("\n")

    assert lines[1] == "2\t5.0\t2.500\t4.000\tb"
    assert lines[2] == "1\t4.0\t4.000\t4.000\t  by x"
    assert lines[3] == "1\t1.0\t1.000\t1.000\t  by y"
    assert lines[4] == "2\t3.0\t1.500\t2.000\ta"


def test_output_limits_length(profiler) -> None:
    activate(profiler)
    for index in range(1000):
        profiler.register_function(lambda: None, f"someFakeName{index}")()

    text = profiler.output()
    assert 500 < len(text) <= 1000

    smaller = profiler.output(300)
    assert 100 < len(smaller) <= 300
    body = smaller.split("\n")[1:-1]
    assert body
    assert all(len(line.split("\t")) == 5 for line in body)


def test_output_limit_counts_top_level_functions(profiler) -> None:
    activate(profiler)
    for index in range(5):
        profiler.register_function(lambda: None, f"fn{index}")()

    assert len(profiler.output(limit=3).split("\n")) == 5


def test_falsy_output_bounds_fall_back_to_config(profiler) -> None:
    activate(profiler)
    for index in range(25):
        profiler.register_function(lambda: None, f"fn{index}")()

    # Header, the configured 20 functions and the footer.
    assert len(profiler.output(0, limit=0).split("\n")) == 22
    assert len(profiler.output(None).split("\n")) == 22


@pytest.mark.parametrize(
    "kwargs",
    [
        pytest.param({"max_chars": -1}, id="negative-budget"),
        pytest.param({"limit": -1}, id="negative-limit"),
        pytest.param({"limit": 2.5}, id="fractional-limit"),
    ],
)
def test_invalid_output_bounds_raise(profiler, kwargs) -> None:
    activate(profiler)
    with pytest.raises(ConfigurationError):
        profiler.output(**kwargs)


def test_fit_lines_never_exceeds_budget() -> None:
    body = ["x" * 10] * 5
    assert fit_lines("head", body, "foot", None) == ["head", *body, "foot"]
    assert len("\n".join(fit_lines("head", body, "foot", 40))) <= 40
    assert fit_lines("head", body, "foot", 6) == ["head"]
    assert fit_lines("head", body, "foot", 2) == []


def test_footer_reports_deltas_since_last_output(profiler) -> None:
    activate(profiler)
    work = profiler.register_function(lambda: None, "work")
    work()
    work()

    first_footer = profiler.output().split("\n")[-1]
    work()
    second_footer = profiler.output().split("\n")[-1]

    assert "Sum: 2.00 +2.00" in first_footer
    assert "Sum: 3.00 +1.00" in second_footer
    assert "Ticks: 1" in second_footer
    assert profiler.controller.state.last_sum == pytest.approx(3.0)


def test_callgrind_format_pairs_callers_with_callees(profiler) -> None:
    profiler.callgrind(10)
    profiler.ticks.advance()
    some_fake_function = profiler.register_function(lambda: None, "someFakeFunction")
    some_fake_parent = profiler.register_function(lambda: some_fake_function(), "someFakeParent")
    for _ in range(5):
        some_fake_function()
        some_fake_parent()

    text = profiler.callgrind_output()
    lines = text.splitlines()

    assert "fn=someFakeParent" in lines
    assert "cfn=someFakeFunction" in lines
    assert "fn=someFakeFunction" in lines
    assert lines[:2] == ["events: ns", f"summary: {to_ns(20.0)}"]

    start = lines.index("fn=someFakeParent")
    assert lines[start : start + 5] == [
        "fn=someFakeParent",
        f"1 {to_ns(10.0)}",
        "cfn=someFakeFunction",
        "calls=5 1",
        f"1 {to_ns(5.0)}",
    ]
    root = lines.index("fn=root")
    assert root < lines.index("fn=someFakeFunction")
    assert lines[root + 1] == "1 0"


def test_callgrind_leaf_block_has_no_calls() -> None:
    state = SessionState(type="callgrind", enabled_tick=1, disable_tick=5)
    record_call(state, "root", "leaf", 0.5)

    lines = render_callgrind(state).splitlines()
    leaf = lines.index("fn=leaf")
    assert lines[leaf + 1] == f"1 {to_ns(0.5)}"
    assert len(lines) == leaf + 2


def test_callgrind_without_session() -> None:
    assert render_callgrind(None) == NOT_ACTIVE


@pytest.mark.parametrize(
    ("cost_ms", "expected"),
    [
        pytest.param(1.0, 1_000_000, id="one-ms"),
        pytest.param(0.0000004, 0, id="rounds-down"),
        pytest.param(-0.5, -500_000, id="negative"),
    ],
)
def test_to_ns(cost_ms: float, expected: int) -> None:
    assert to_ns(cost_ms) == expected
