"""Session state machine: arming, activity windows and end-of-cycle reporting."""

from __future__ import annotations

import logging

from omegaconf import DictConfig

from tickprof.config import default_duration, load_profiler_config
from tickprof.core.clock import CostClock, TickSource
from tickprof.core.context import ExecutionContext
from tickprof.core.exceptions import ConfigurationError
from tickprof.core.store import StateStore
from tickprof.core.types import SessionState
from tickprof.recording.recorder import CallTreeRecorder
from tickprof.session.policies import POLICY_REGISTRY, ReportAction, resolve_report_action

logger = logging.getLogger(__name__)

UNBOUNDED_TYPES = frozenset({"background"})


def _validate_duration(duration: object) -> int:
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise ConfigurationError(f"Session duration must be an integer tick count, got {duration!r}.")
    if duration < 1:
        raise ConfigurationError(f"Session duration must be at least one tick, got {duration}.")
    return duration


class SessionController:
    """Decides per cycle whether instrumentation is active.

    Lifecycle: no state (uninitialized) -> ``arm`` -> armed until
    ``enabled_tick`` -> active through ``disable_tick`` -> lapsed. ``arm`` and
    ``reset`` may be called from any state and always discard the previous
    statistics.
    """

    def __init__(
        self,
        *,
        clock: CostClock,
        ticks: TickSource,
        store: StateStore,
        config: DictConfig | None = None,
    ) -> None:
        self.clock = clock
        self.ticks = ticks
        self.store = store
        self.config = config if config is not None else load_profiler_config()
        self.context = ExecutionContext()
        self.recorder = CallTreeRecorder(store)
        self.enabled = False

    @property
    def state(self) -> SessionState | None:
        return self.store.get()

    def tick(self) -> int:
        return int(self.ticks.current())

    def arm(
        self,
        session_type: str,
        duration: int | None = None,
        filter: str | None = None,
    ) -> SessionState:
        """Start a new session; measurement begins on the next tick."""

        if session_type not in POLICY_REGISTRY:
            raise ConfigurationError(
                f"Unsupported session type '{session_type}'. "
                f"Expected one of: {POLICY_REGISTRY.describe()}."
            )
        if session_type in UNBOUNDED_TYPES:
            duration = None
        elif duration is None:
            duration = default_duration(self.config, session_type)
        else:
            duration = _validate_duration(duration)

        self.reset()
        tick = self.tick()
        state = SessionState(
            type=session_type,  # type: ignore[arg-type]
            enabled_tick=tick + 1,
            disable_tick=tick + duration if duration is not None else None,
            filter=filter or None,
        )
        self.store.set(state)
        logger.info(
            "Armed %s session at tick %d (window %d..%s, filter=%s).",
            session_type,
            tick,
            state.enabled_tick,
            state.disable_tick if state.bounded else "unbounded",
            state.filter,
        )
        return state

    def reset(self) -> None:
        if self.store.get() is not None:
            logger.info("Discarding profiler session statistics.")
        self.store.set(None)

    def restart(self) -> bool:
        """Re-arm the active session with the same type, filter and window length."""

        if not self.is_active():
            logger.debug("restart() ignored: no active session.")
            return False
        state = self.state
        assert state is not None
        duration = None
        if state.disable_tick is not None:
            # Activation is deferred by one tick, so the original length is one more.
            duration = state.disable_tick - state.enabled_tick + 1
        self.arm(state.type, duration, state.filter)
        return True

    def is_active(self) -> bool:
        if not self.enabled:
            return False
        state = self.state
        if state is None:
            return False
        tick = self.tick()
        if tick < state.enabled_tick:
            return False
        return state.disable_tick is None or tick <= state.disable_tick

    def begin_cycle(self) -> None:
        # The call stack never survives a cycle boundary.
        self.context.reset()

    def end_cycle(self) -> ReportAction | None:
        """Account the cycle's cost and return the report the session asks for."""

        state = self.state
        if state is None:
            return None
        tick = self.tick()
        if tick < state.enabled_tick:
            return None
        state.total_time += self.clock.now()
        return resolve_report_action(state, tick)
