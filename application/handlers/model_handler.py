from __future__ import annotations

from application.handlers.base import StepHandler
from application.outcome import StepOutcome
from application.services.execution_deps import ExecutionDeps
from domain.results import ModelReference
from domain.run import RunContext
from domain.steps.model import ModelStep


class ModelStepHandler(StepHandler):
    step_type = ModelStep

    def handle(self, step: ModelStep, ctx: RunContext, deps: ExecutionDeps) -> StepOutcome:
        value = step.fetch(ctx)
        ctx.publish(step.name, value)

        if value is None:
            if step.optional:
                return StepOutcome(ok=True, payload=ModelReference(value=None))
            return StepOutcome(
                ok=False,
                error_message=f"Model not found: {step.name}",
                payload=ModelReference(value=None, not_found=True),
            )

        errors = tuple(step.validate(value)) if step.validate is not None else ()
        if errors:
            deps.logger.info("model.invalid", model=step.name, errors=list(errors))
            return StepOutcome(
                ok=False,
                error_message="; ".join(errors),
                payload=ModelReference(value=value, invalid=True, errors=errors),
            )

        return StepOutcome(ok=True, payload=ModelReference(value=value))
