# infrastructure/logging/console_logger.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict

from application.ports.logger import LoggerPort

_LEVELS = {"DEBUG": 10, "INFO": 20, "ERROR": 40}


@dataclass(frozen=True)
class ConsoleLogger(LoggerPort):
    level: str = "DEBUG"
    bound: Dict[str, Any] = field(default_factory=dict)

    def bind(self, **fields: Any) -> "ConsoleLogger":
        merged = dict(self.bound)
        merged.update(fields)
        return ConsoleLogger(level=self.level, bound=merged)

    def debug(self, event: str, **fields: Any) -> None:
        self._emit("DEBUG", event, fields)

    def info(self, event: str, **fields: Any) -> None:
        self._emit("INFO", event, fields)

    def error(self, event: str, **fields: Any) -> None:
        self._emit("ERROR", event, fields)

    def _emit(self, level: str, event: str, fields: Dict[str, Any]) -> None:
        if _LEVELS[level] < _LEVELS.get(self.level, 0):
            return
        payload = dict(self.bound)
        payload.update(fields)
        payload.setdefault("type", event)
        print(f"{event} {json.dumps(payload, ensure_ascii=False, default=str)}")
