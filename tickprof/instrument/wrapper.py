"""Behaviour-preserving timing proxies for single callables."""

from __future__ import annotations

import functools
import logging
import types
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Iterator

from tickprof.core.exceptions import DoubleWrapError, InvalidTargetError, MissingNameError
from tickprof.core.types import WrapperIdentity

if TYPE_CHECKING:
    from tickprof.session.controller import SessionController

logger = logging.getLogger(__name__)

IDENTITY_ATTR = "__tickprof__"
ANONYMOUS_NAMES = frozenset({"", "<lambda>"})


def get_identity(obj: object) -> WrapperIdentity | None:
    identity = getattr(obj, IDENTITY_ATTR, None)
    return identity if isinstance(identity, WrapperIdentity) else None


def is_wrapped(obj: object) -> bool:
    return get_identity(obj) is not None


def derive_display_name(fn: Callable[..., Any], name: str | None = None) -> str:
    if name:
        return name
    candidate = getattr(fn, "__name__", None)
    if not isinstance(candidate, str) or candidate in ANONYMOUS_NAMES:
        raise MissingNameError(f"Couldn't find a function name for {fn!r}.")
    return candidate


@contextmanager
def measure_call(controller: SessionController, name: str) -> Iterator[None]:
    """Time the enclosed call and record it against the current caller.

    Accounting runs on every exit path. Cost spent recording nested calls is
    subtracted, which assumes that overhead is additive; with a skewed clock the
    result can go negative.
    """

    state = controller.state
    assert state is not None
    clock = controller.clock
    context = controller.context
    filtered = state.filter is not None and name == state.filter

    start = clock.now()
    initial_spend = state.time_spend
    parent = context.enter(name, filtered=filtered)
    try:
        yield
    finally:
        try:
            end = clock.now()
            end_spend = state.time_spend
            # A reset or re-arm inside the call leaves nothing to record into.
            if controller.state is state and (context.depth > 0 or state.filter is None):
                controller.recorder.record(
                    parent, name, (end - start) - (end_spend - initial_spend)
                )
        finally:
            context.leave(parent, filtered=filtered)


class TimedFunction:
    """Callable proxy that times ``__wrapped__`` while a session is active."""

    def __init__(
        self,
        fn: Callable[..., Any],
        display_name: str,
        controller: SessionController,
    ) -> None:
        is_class = isinstance(fn, type)
        # A class namespace is not an attribute bag; instances still come from fn.
        functools.update_wrapper(self, fn, updated=() if is_class else functools.WRAPPER_UPDATES)
        properties = {} if is_class else dict(getattr(fn, "__dict__", {}))
        self._tp_name = display_name
        self._tp_controller = controller
        setattr(
            self,
            IDENTITY_ATTR,
            WrapperIdentity(
                display_name=display_name,
                original=fn,
                properties=properties,
                text=repr(fn),
            ),
        )

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        controller = self._tp_controller
        if not controller.is_active():
            return self.__wrapped__(*args, **kwargs)
        with measure_call(controller, self._tp_name):
            return self.__wrapped__(*args, **kwargs)

    def __get__(self, instance: object, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __getattr__(self, item: str) -> Any:
        wrapped = self.__dict__.get("__wrapped__")
        if wrapped is None:
            raise AttributeError(item)
        return getattr(wrapped, item)

    def __repr__(self) -> str:
        identity = get_identity(self)
        text = identity.text if identity is not None else "?"
        return f"<profiled {self._tp_name}: {text}>"


def wrap_function(
    fn: Callable[..., Any],
    name: str | None = None,
    *,
    controller: SessionController,
) -> Callable[..., Any]:
    """Return a timing proxy for ``fn``, or ``fn`` itself when it has no name."""

    if not callable(fn):
        raise InvalidTargetError(f"Cannot profile non-callable {fn!r}.")
    identity = get_identity(fn)
    if identity is not None:
        raise DoubleWrapError(f"'{identity.display_name}' is already profiled.")
    try:
        display_name = derive_display_name(fn, name)
    except MissingNameError as exc:
        logger.warning("%s Will not profile this function.", exc)
        return fn
    return TimedFunction(fn, display_name, controller)
