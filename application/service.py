# application/service.py
from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional

from application.executor.handler_registry import HandlerRegistry, default_registry
from application.executor.step_executor import StepExecutor
from application.ports.lock_store import LockStorePort
from application.ports.logger import LoggerPort, NullLogger
from application.services.execution_deps import ExecutionDeps
from domain.results import ResultTree
from domain.run import RunContext
from domain.steps.base import Step


class Service:
    """
    A named, ordered list of steps.

    ``execute`` runs the steps once and returns the frozen ResultTree.
    ``call`` with a ``register`` callable runs the service through a Runner
    and dispatches to the first matching handler.
    """

    def __init__(
        self,
        name: str,
        steps: List[Step],
        *,
        lock_store: Optional[LockStorePort] = None,
        logger: Optional[LoggerPort] = None,
        registry: Optional[HandlerRegistry] = None,
    ):
        self.name = name
        self._steps = list(steps)
        self._lock_store = lock_store
        self._logger = logger or NullLogger()
        self._executor = StepExecutor(registry=registry or default_registry())

    def execute(self, dependencies: Mapping[str, Any]) -> ResultTree:
        ctx = RunContext()
        for key, value in dependencies.items():
            ctx.publish(key, value)

        deps = ExecutionDeps(
            logger=self._logger.bind(service=self.name),
            lock_store=self._lock_store,
        )
        result = self._executor.execute(self._steps, ctx, deps)
        return ctx.builder.freeze(result.ok, result.error_message)

    def call(
        self,
        dependencies: Optional[Mapping[str, Any]] = None,
        register: Optional[Callable[..., Any]] = None,
    ):
        if register is None:
            return self.execute(dependencies or {})

        from application.runner.runner import run_service

        return run_service(self, register, dependencies=dependencies, logger=self._logger)
