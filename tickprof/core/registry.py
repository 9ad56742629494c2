"""String-keyed registry used for session type policies."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from tickprof.core.exceptions import RegistryError

T = TypeVar("T")


@dataclass
class Registry(Generic[T]):
    """Stores named objects with strict duplicate protection."""

    namespace: str
    _items: dict[str, T] = field(default_factory=dict)

    def register(self, name: str, value: T) -> T:
        if name in self._items:
            raise RegistryError(f"{self.namespace} registry already has item '{name}'.")
        self._items[name] = value
        return value

    def entry(self, name: str) -> Callable[[T], T]:
        """Decorator form of :meth:`register`."""

        def _register(value: T) -> T:
            return self.register(name, value)

        return _register

    def get(self, name: str) -> T:
        try:
            return self._items[name]
        except KeyError as exc:
            raise RegistryError(
                f"Unknown {self.namespace} '{name}'. Available: {self.describe()}."
            ) from exc

    def describe(self) -> str:
        return ", ".join(self.keys()) or "<empty>"

    def keys(self) -> tuple[str, ...]:
        return tuple(sorted(self._items))

    def __contains__(self, name: object) -> bool:
        return name in self._items
