"""Resolve ``package.module[:Attribute.path]`` strings to live objects."""

from __future__ import annotations

import importlib
from typing import Any

from tickprof.core.exceptions import ConfigurationError


def resolve_import_path(path: str) -> tuple[Any, str]:
    """Return the object named by ``path`` and a label for it."""

    module_name, _, attribute = str(path).strip().partition(":")
    if not module_name:
        raise ConfigurationError(f"Empty import path {path!r}.")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import module '{module_name}' from {path!r}.") from exc
    if not attribute:
        return target, module_name
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigurationError(f"'{module_name}' has no attribute '{attribute}'.") from exc
    return target, attribute
