"""Environment variable loading helpers."""

from __future__ import annotations

import os

from dotenv import load_dotenv

ENABLE_ENV_VAR = "TICKPROF_ENABLED"
TRUTHY = frozenset({"1", "true", "yes", "on"})


def load_env_file() -> None:
    """Load local .env without overriding existing process variables."""

    load_dotenv(override=False)


def env_enabled(default: bool = False) -> bool:
    """Read the profiler master switch from ``TICKPROF_ENABLED``."""

    raw = os.environ.get(ENABLE_ENV_VAR)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY
