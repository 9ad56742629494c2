"""Public profiler facade wiring clock, store, controller, wrapper and renderers."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from tickprof.config import ConfigOverrides, load_profiler_config
from tickprof.core.clock import CostClock, PerfCounterClock, TickCounter, TickSource
from tickprof.core.exceptions import ConfigurationError
from tickprof.core.store import MemoryStateStore, StateStore
from tickprof.core.types import SessionState
from tickprof.instrument.members import DEFAULT_BLACKLIST, register_class, register_object
from tickprof.instrument.wrapper import wrap_function
from tickprof.reporting.callgrind import render_callgrind
from tickprof.reporting.sinks import LoggingSink, ReportSink, StreamSink
from tickprof.reporting.table import FunctionStats, build_stats, render_table
from tickprof.session.controller import SessionController
from tickprof.session.policies import ReportAction
from tickprof.utils.env import env_enabled
from tickprof.utils.imports import resolve_import_path

logger = logging.getLogger(__name__)

R = TypeVar("R")


class Profiler:
    """Call-tree profiler for cycle-driven programs.

    Typical host loop::

        profiler = Profiler()
        profiler.register_class(Worker)
        profiler.enable()
        profiler.profile(50)
        while running:
            profiler.wrap_cycle(main_loop)
    """

    def __init__(
        self,
        config: ConfigOverrides = None,
        *,
        clock: CostClock | None = None,
        ticks: TickSource | None = None,
        store: StateStore | None = None,
        console: ReportSink | None = None,
        notifier: ReportSink | None = None,
    ) -> None:
        self.config = load_profiler_config(config)
        self.clock = clock if clock is not None else PerfCounterClock()
        self.ticks = ticks if ticks is not None else TickCounter(start=int(self.config.cycles.start))
        self.store = store if store is not None else MemoryStateStore()
        self.console = console if console is not None else StreamSink()
        self.notifier = notifier if notifier is not None else LoggingSink("tickprof.notify")
        self.controller = SessionController(
            clock=self.clock,
            ticks=self.ticks,
            store=self.store,
            config=self.config,
        )
        self.blacklist = DEFAULT_BLACKLIST | frozenset(self.config.instrument.blacklist)
        # Only tick sources that can be advanced (TickCounter) are stepped by wrap_cycle.
        self._advance: Callable[[], Any] | None = (
            getattr(self.ticks, "advance", None) if self.config.cycles.auto_advance else None
        )
        self._targets_registered = False
        if self.config.enabled:
            self.enable()

    # -- lifecycle -----------------------------------------------------------

    def enable(self) -> None:
        """Turn measurement on and register the configured default targets."""

        self.controller.enabled = True
        if not self._targets_registered:
            for path in self.config.targets:
                target, label = resolve_import_path(path)
                self.register_object(target, label)
            self._targets_registered = True

    def disable(self) -> None:
        self.controller.enabled = False

    def is_profiling(self) -> bool:
        return self.controller.is_active()

    def wrap_cycle(self, callback: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Run one execution cycle, measuring it when a session is active."""

        controller = self.controller
        controller.begin_cycle()
        try:
            state = controller.state
            if state is None or not controller.is_active():
                return callback(*args, **kwargs)
            # Host cost spent in this tick before the callback.
            state.init_time += self.clock.now()
            result = callback(*args, **kwargs)
            self._deliver(controller.end_cycle())
            return result
        finally:
            # The next tick is measured from here.
            self.clock.start_cycle()
            if self._advance is not None:
                self._advance()

    # -- registration --------------------------------------------------------

    def register_function(self, fn: Callable[..., Any], name: str | None = None) -> Callable[..., Any]:
        return wrap_function(fn, name, controller=self.controller)

    def register_object(self, obj: Any, label: str | None = None) -> Any:
        return register_object(obj, label, controller=self.controller, blacklist=self.blacklist)

    def register_class(self, cls: Any, label: str | None = None) -> Any:
        return register_class(cls, label, controller=self.controller, blacklist=self.blacklist)

    # -- session commands ----------------------------------------------------

    def stream(self, duration: int | None = None, filter: str | None = None) -> SessionState:
        return self.controller.arm("stream", duration, filter)

    def email(self, duration: int | None = None, filter: str | None = None) -> SessionState:
        return self.controller.arm("email", duration, filter)

    def profile(self, duration: int | None = None, filter: str | None = None) -> SessionState:
        return self.controller.arm("profile", duration, filter)

    def background(self, filter: str | None = None) -> SessionState:
        return self.controller.arm("background", None, filter)

    def callgrind(self, duration: int | None = None, filter: str | None = None) -> SessionState:
        return self.controller.arm("callgrind", duration, filter)

    def reset(self) -> None:
        self.controller.reset()

    def restart(self) -> bool:
        return self.controller.restart()

    # -- reports -------------------------------------------------------------

    def output(self, max_chars: int | None = None, *, limit: int | None = None) -> str:
        """Tabular digest no longer than ``max_chars`` characters.

        ``limit`` caps the number of top-level functions. A falsy bound falls
        back to the ``report`` config.
        """

        report_cfg = self.config.report
        return render_table(
            self.controller.state,
            self.controller.tick(),
            limit=int(_report_bound("limit", limit, report_cfg.limit)),
            max_chars=_report_bound("max_chars", max_chars, report_cfg.max_chars),
        )

    def callgrind_output(self) -> str:
        return render_callgrind(self.controller.state)

    def stats(self) -> list[FunctionStats]:
        state = self.controller.state
        return build_stats(state.map) if state is not None else []

    def snapshot(self) -> dict[str, Any] | None:
        state = self.controller.state
        return state.to_dict() if state is not None else None

    def print_profile(self) -> None:
        self.console.emit(self.output())

    def email_profile(self) -> None:
        self.notifier.emit(self.output())

    def _deliver(self, action: ReportAction | None) -> None:
        if action == "print":
            self.print_profile()
        elif action == "notify":
            self.email_profile()


def _report_bound(name: str, value: int | None, default: Any) -> Any:
    if not value:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"output() {name} must be a positive integer, got {value!r}.")
    return value


_DEFAULT_PROFILER: Profiler | None = None


def get_default_profiler() -> Profiler:
    """Process-wide profiler used by the module-level API; honours TICKPROF_ENABLED."""

    global _DEFAULT_PROFILER
    if _DEFAULT_PROFILER is None:
        _DEFAULT_PROFILER = Profiler({"enabled": env_enabled()})
    return _DEFAULT_PROFILER


def set_default_profiler(profiler: Profiler | None) -> None:
    global _DEFAULT_PROFILER
    _DEFAULT_PROFILER = profiler
