from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from domain.results import ResultKey
from domain.steps.base import Step


@dataclass(frozen=True, kw_only=True)
class ModelStep(Step):
    fetch: Callable[[Any], Any]
    name: str = "model"
    optional: bool = False
    validate: Optional[Callable[[Any], Iterable[str]]] = None

    @property
    def result_key(self) -> ResultKey:
        return ("result", "model", self.name)
