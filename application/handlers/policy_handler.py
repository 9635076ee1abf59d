from __future__ import annotations

from application.handlers.base import StepHandler
from application.outcome import StepOutcome
from application.services.execution_deps import ExecutionDeps
from domain.run import RunContext
from domain.steps.policy import PolicyStep


class PolicyStepHandler(StepHandler):
    step_type = PolicyStep

    def handle(self, step: PolicyStep, ctx: RunContext, deps: ExecutionDeps) -> StepOutcome:
        if step.check(ctx):
            return StepOutcome(ok=True)

        reason = step.reason or f"Policy not satisfied: {step.name}"
        deps.logger.info("policy.denied", policy=step.name, reason=reason)
        return StepOutcome(ok=False, error_message=reason)
