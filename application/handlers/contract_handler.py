from __future__ import annotations

from pydantic import ValidationError

from application.handlers.base import StepHandler
from application.outcome import StepOutcome
from application.services.execution_deps import ExecutionDeps
from domain.run import RunContext
from domain.steps.contract import ContractStep


class ContractStepHandler(StepHandler):
    """
    Validates raw input with the step's pydantic model.
    Validation errors are reported as a failed contract, never raised.
    """

    step_type = ContractStep

    def handle(self, step: ContractStep, ctx: RunContext, deps: ExecutionDeps) -> StepOutcome:
        raw = ctx.get(step.source)
        if raw is None:
            raw = {}

        try:
            contract = step.schema.model_validate(raw)
        except ValidationError as e:
            messages = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            deps.logger.info("contract.invalid", contract=step.name, errors=messages)
            return StepOutcome(ok=False, error_message="; ".join(messages))

        ctx.publish(step.publish_as, contract)
        return StepOutcome(ok=True)
