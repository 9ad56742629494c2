from __future__ import annotations

import importlib
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from types import ModuleType

import pytest

from tests.factories.module_factory import write_target_module
from tests.factories.profiler_factory import build_profiler
from tickprof.profiler import Profiler, set_default_profiler


@pytest.fixture(autouse=True)
def _clear_default_profiler() -> Iterator[None]:
    set_default_profiler(None)
    yield
    set_default_profiler(None)


@pytest.fixture
def make_profiler() -> Callable[..., Profiler]:
    return build_profiler


@pytest.fixture
def profiler() -> Profiler:
    return build_profiler()


@pytest.fixture
def import_target_module(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Callable[[str], ModuleType]]:
    monkeypatch.syspath_prepend(str(tmp_path))
    imported: list[str] = []

    def _import(name: str) -> ModuleType:
        write_target_module(tmp_path, name)
        imported.append(name)
        importlib.invalidate_caches()
        return importlib.import_module(name)

    yield _import
    for name in imported:
        sys.modules.pop(name, None)
