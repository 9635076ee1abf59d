from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
import time
import uuid

from application.executor.handler_registry import HandlerRegistry
from application.outcome import StepOutcome
from application.services.execution_deps import ExecutionDeps
from domain.results import ExceptionReference, ResultKey
from domain.run import RunContext
from domain.steps.base import Step
from domain.steps.control import LockStep, TryStep


@dataclass(frozen=True)
class ExecutionResult:
    ok: bool
    failed_key: Optional[ResultKey] = None
    error_message: Optional[str] = None


class StepExecutor:
    """
    Runs steps in order and records one node per executed step.
    Stops at the first failure; steps after it leave no node behind.
    """

    def __init__(self, registry: HandlerRegistry):
        self._registry = registry

    def execute(self, steps: List[Step], ctx: RunContext, deps: ExecutionDeps) -> ExecutionResult:
        if not getattr(ctx, "run_id", ""):
            ctx.run_id = uuid.uuid4().hex

        deps = deps.with_logger(deps.logger.bind(run_id=ctx.run_id))
        return self._run(steps, ctx, deps)

    def _run(self, steps: List[Step], ctx: RunContext, deps: ExecutionDeps) -> ExecutionResult:
        for step in steps:
            if getattr(step, "enabled", True) is False:
                continue

            if isinstance(step, TryStep):
                result = self._run_try(step, ctx, deps)
            elif isinstance(step, LockStep):
                result = self._run_locked(step, ctx, deps)
            else:
                result = self._run_leaf(step, ctx, deps)

            if not result.ok:
                return result

        return ExecutionResult(ok=True)

    def _run_leaf(self, step: Step, ctx: RunContext, deps: ExecutionDeps) -> ExecutionResult:
        handler = self._registry.get_handler(step)

        deps.logger.info("step.start", step=step.name, step_type=type(step).__name__)
        t0 = time.perf_counter()

        outcome: StepOutcome = handler.handle(step, ctx, deps)

        if outcome is None:
            raise RuntimeError(
                f"Handler returned None: handler={type(handler).__name__}, step={step.name} ({type(step).__name__})"
            )

        deps.logger.info(
            "step.end",
            step=step.name,
            ok=outcome.ok,
            elapsed_ms=int((time.perf_counter() - t0) * 1000),
        )

        ctx.builder.record(step.result_key, outcome.ok, outcome.payload, outcome.error_message)
        if outcome.ok:
            return ExecutionResult(ok=True)
        return ExecutionResult(ok=False, failed_key=step.result_key, error_message=outcome.error_message)

    def _run_try(self, step: TryStep, ctx: RunContext, deps: ExecutionDeps) -> ExecutionResult:
        catchable = tuple(step.exceptions) or (Exception,)
        try:
            result = self._run(step.steps, ctx, deps)
        except catchable as e:
            deps.logger.error("try.caught", exception=type(e).__name__, error=str(e))
            ctx.builder.record(step.result_key, False, ExceptionReference(e), str(e))
            return ExecutionResult(ok=False, failed_key=step.result_key, error_message=str(e))

        # a nested try with the same name may already hold the caught exception
        if ctx.builder.lookup(step.result_key) is None:
            ctx.builder.record(step.result_key, True)
        return result

    def _run_locked(self, step: LockStep, ctx: RunContext, deps: ExecutionDeps) -> ExecutionResult:
        if deps.lock_store is None:
            raise RuntimeError(f"No lock store configured for lock: {step.lock_name}")

        if not deps.lock_store.acquire(step.lock_name):
            message = f"Lock not acquired: {step.lock_name}"
            deps.logger.info("lock.not_acquired", lock=step.lock_name)
            ctx.builder.record(step.result_key, False, message=message)
            return ExecutionResult(ok=False, failed_key=step.result_key, error_message=message)

        ctx.builder.record(step.result_key, True)
        try:
            return self._run(step.steps, ctx, deps)
        finally:
            deps.lock_store.release(step.lock_name)
