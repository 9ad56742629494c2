"""Member enumeration: wrap every callable member of a class, module or object."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Literal

from tickprof.core.exceptions import InvalidTargetError
from tickprof.instrument.wrapper import is_wrapped, wrap_function

if TYPE_CHECKING:
    from tickprof.session.controller import SessionController

logger = logging.getLogger(__name__)

MemberKind = Literal["function", "static", "class", "accessor"]

# Members never wrapped: the cost query itself and construction hooks.
DEFAULT_BLACKLIST: frozenset[str] = frozenset(
    {"now", "__init__", "__new__", "__init_subclass__", "__class_getitem__"}
)
PRIMITIVE_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
)
ACCESSOR_SUFFIXES = (":get", ":set", ":delete")


@dataclass(frozen=True, slots=True)
class Member:
    """One wrappable member as seen by an enumeration adapter."""

    name: str
    kind: MemberKind
    getter: Callable[..., Any] | None
    setter: Callable[..., Any] | None = None
    deleter: Callable[..., Any] | None = None
    raw: Any = None


def classify_member(name: str, value: Any) -> Member | None:
    """Describe ``value`` as a member, or None when it is not wrappable."""

    if isinstance(value, staticmethod):
        return Member(name, "static", value.__func__, raw=value)
    if isinstance(value, classmethod):
        return Member(name, "class", value.__func__, raw=value)
    if isinstance(value, property):
        return Member(name, "accessor", value.fget, value.fset, value.fdel, raw=value)
    if isinstance(value, type):
        return None
    if is_wrapped(value) or (inspect.isroutine(value) and callable(value)):
        return Member(name, "function", value, raw=value)
    return None


def iter_class_members(cls: type) -> Iterator[Member]:
    for name, value in list(vars(cls).items()):
        member = classify_member(name, value)
        if member is not None:
            yield member


def iter_object_members(obj: object) -> Iterator[Member]:
    names = list(vars(obj)) if hasattr(obj, "__dict__") else dir(obj)
    for name in names:
        try:
            member = classify_member(name, getattr(obj, name))
        except Exception as exc:  # noqa: BLE001
            logger.debug("Skipping member %r: probing raised %s.", name, exc)
            continue
        if member is not None:
            yield member


def default_label(target: object) -> str:
    if inspect.ismodule(target):
        return target.__name__
    owner = target if isinstance(target, type) else type(target)
    return getattr(owner, "__qualname__", owner.__name__)


def ensure_target(target: object) -> None:
    if isinstance(target, PRIMITIVE_TYPES):
        raise InvalidTargetError(
            f"Cannot register {target!r}: expected a class, module or object."
        )


def _wrap_accessor(
    member: Member,
    display_name: str,
    controller: SessionController,
) -> property | None:
    parts = (member.getter, member.setter, member.deleter)
    if all(part is None or is_wrapped(part) for part in parts):
        return None
    wrapped = [
        part if part is None or is_wrapped(part) else wrap_function(
            part, display_name + suffix, controller=controller
        )
        for part, suffix in zip(parts, ACCESSOR_SUFFIXES)
    ]
    accessor: property = member.raw
    # getter()/setter()/deleter() copy the property and keep its subclass and doc.
    return accessor.getter(wrapped[0]).setter(wrapped[1]).deleter(wrapped[2])


def wrap_member(
    member: Member,
    label: str,
    controller: SessionController,
) -> Any | None:
    """Return the replacement for ``member``, or None to leave it untouched."""

    display_name = f"{label}.{member.name}"
    if member.kind == "accessor":
        return _wrap_accessor(member, display_name, controller)
    if member.getter is None or is_wrapped(member.getter):
        logger.debug("Skipping %s: already profiled.", display_name)
        return None
    wrapped = wrap_function(member.getter, display_name, controller=controller)
    if member.kind == "static":
        return staticmethod(wrapped)
    if member.kind == "class":
        return classmethod(wrapped)
    return wrapped


def register_members(
    target: object,
    label: str,
    members: Iterable[Member],
    *,
    controller: SessionController,
    blacklist: Iterable[str] = DEFAULT_BLACKLIST,
) -> int:
    """Replace each member on ``target`` in place; returns how many were wrapped."""

    skipped = frozenset(blacklist)
    wrapped = 0
    for member in members:
        if member.name in skipped:
            continue
        replacement = wrap_member(member, label, controller)
        if replacement is None:
            continue
        try:
            setattr(target, member.name, replacement)
        except (AttributeError, TypeError) as exc:
            logger.debug("Cannot replace %s.%s: %s", label, member.name, exc)
            continue
        wrapped += 1
    return wrapped


def register_class(
    cls: Any,
    label: str | None = None,
    *,
    controller: SessionController,
    blacklist: Iterable[str] = DEFAULT_BLACKLIST,
) -> Any:
    """Wrap instance, static and class methods and accessors of ``cls``."""

    ensure_target(cls)
    if not isinstance(cls, type):
        return register_object(cls, label, controller=controller, blacklist=blacklist)
    label = label or default_label(cls)
    count = register_members(
        cls, label, iter_class_members(cls), controller=controller, blacklist=blacklist
    )
    logger.debug("Registered %d members of class %s.", count, label)
    return cls


def register_object(
    obj: Any,
    label: str | None = None,
    *,
    controller: SessionController,
    blacklist: Iterable[str] = DEFAULT_BLACKLIST,
) -> Any:
    """Wrap the callable members of a module, namespace or instance in place."""

    ensure_target(obj)
    if isinstance(obj, type):
        return register_class(obj, label, controller=controller, blacklist=blacklist)
    label = label or default_label(obj)
    count = register_members(
        obj, label, iter_object_members(obj), controller=controller, blacklist=blacklist
    )
    logger.debug("Registered %d members of %s.", count, label)
    return obj
