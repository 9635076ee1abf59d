from __future__ import annotations

from collections.abc import Mapping

from application.handlers.base import StepHandler
from application.outcome import StepOutcome
from application.services.execution_deps import ExecutionDeps
from domain.exceptions import StepFailure
from domain.run import RunContext
from domain.steps.call import CallStep


class CallStepHandler(StepHandler):
    step_type = CallStep

    def handle(self, step: CallStep, ctx: RunContext, deps: ExecutionDeps) -> StepOutcome:
        try:
            produced = step.fn(ctx)
        except StepFailure as e:
            deps.logger.error("step.failed", step=step.name, error=str(e))
            return StepOutcome(ok=False, error_message=str(e) or f"Step failed: {step.name}")

        if isinstance(produced, Mapping):
            for name, value in produced.items():
                ctx.publish(name, value)
        return StepOutcome(ok=True)
