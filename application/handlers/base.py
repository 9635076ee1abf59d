from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Type

from application.outcome import StepOutcome
from domain.steps.base import Step

if TYPE_CHECKING:
    from domain.run import RunContext
    from application.services.execution_deps import ExecutionDeps


class StepHandler(ABC):
    """Executes one kind of leaf step and reports its outcome. Never records nodes itself."""

    step_type: ClassVar[Type[Step]] = Step

    def supports(self, step: Step) -> bool:
        return isinstance(step, self.step_type)

    @abstractmethod
    def handle(self, step: Step, ctx: "RunContext", deps: "ExecutionDeps") -> StepOutcome: ...
