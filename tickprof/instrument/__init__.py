"""Function wrapping and member enumeration."""

from tickprof.instrument.members import (
    DEFAULT_BLACKLIST,
    Member,
    iter_class_members,
    iter_object_members,
    register_class,
    register_object,
)
from tickprof.instrument.wrapper import TimedFunction, get_identity, is_wrapped, wrap_function

__all__ = [
    "DEFAULT_BLACKLIST",
    "Member",
    "TimedFunction",
    "get_identity",
    "is_wrapped",
    "iter_class_members",
    "iter_object_members",
    "register_class",
    "register_object",
    "wrap_function",
]
