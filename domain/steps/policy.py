from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from domain.results import ResultKey
from domain.steps.base import Step


@dataclass(frozen=True, kw_only=True)
class PolicyStep(Step):
    check: Callable[[Any], bool]
    name: str = "default"
    reason: Optional[str] = None

    @property
    def result_key(self) -> ResultKey:
        return ("result", "policy", self.name)
