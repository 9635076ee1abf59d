from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from domain.results import ResultKey
from domain.steps.base import Step


@dataclass(frozen=True, kw_only=True)
class CallStep(Step):
    """
    Runs ``fn(ctx)``. A returned mapping is published into the result
    fragments. Raising StepFailure marks the step as failed.
    """
    fn: Callable[[Any], Optional[Mapping[str, Any]]]

    @property
    def result_key(self) -> ResultKey:
        return ("result", "step", self.name)
