from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    key: Hashable
    value: V


class StageCache(Generic[V]):
    """Single-slot memo for one pipeline stage.

    The stage recomputes only when its key differs from the last one seen.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.hits = 0
        self.misses = 0
        self._entry: CacheEntry[V] | None = None

    def get_or_compute(self, key: Hashable, compute: Callable[[], V]) -> V:
        entry = self._entry
        if entry is not None and entry.key == key:
            self.hits += 1
            return entry.value
        self.misses += 1
        value = compute()
        self._entry = CacheEntry(key=key, value=value)
        return value

    @property
    def key(self) -> Hashable | None:
        return self._entry.key if self._entry else None

    def clear(self) -> None:
        self._entry = None
