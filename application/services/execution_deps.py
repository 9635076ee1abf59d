from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from application.ports.lock_store import LockStorePort
from application.ports.logger import LoggerPort


@dataclass(frozen=True)
class ExecutionDeps:
    logger: LoggerPort
    lock_store: Optional[LockStorePort] = None

    def with_logger(self, logger: LoggerPort) -> "ExecutionDeps":
        return replace(self, logger=logger)
