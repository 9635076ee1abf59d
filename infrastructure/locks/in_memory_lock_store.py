from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Set


@dataclass
class InMemoryLockStore:
    _lock: Lock = field(default_factory=Lock, init=False)
    _held: Set[str] = field(default_factory=set, init=False)

    def acquire(self, key: str) -> bool:
        with self._lock:
            if key in self._held:
                return False
            self._held.add(key)
            return True

    def release(self, key: str) -> None:
        with self._lock:
            self._held.discard(key)

    def is_held(self, key: str) -> bool:
        with self._lock:
            return key in self._held
