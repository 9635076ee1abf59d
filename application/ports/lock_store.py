from __future__ import annotations

from typing import Protocol


class LockStorePort(Protocol):
    def acquire(self, key: str) -> bool:
        ...

    def release(self, key: str) -> None:
        ...
