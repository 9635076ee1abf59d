# application/runner/runner.py
"""
Runs a service once and reacts to its outcome.

    def register(actions):
        actions.on_success(lambda _: redirect("/done"))
        actions.on_failed_policy("can_edit", handler=lambda policy: deny(policy.message))
        actions.on_failure(lambda _: render_form())

    run_service(UpdatePost, register, dependencies={"params": params})

Actions are evaluated in the order they were registered and only the first
one whose condition holds is invoked. ``on_failure`` is always evaluated
last, so a more specific action registered after it still wins.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from application.ports.logger import LoggerPort, NullLogger
from application.ports.service import ServicePort
from application.runner.action_registry import ActionRegistry
from application.runner.registered_action import ActionIdentity, RegisteredAction
from domain.exceptions import RunnerStateError
from domain.results import ResultTree


class RunnerState(str, Enum):
    CREATED = "created"
    SERVICE_EXECUTED = "service_executed"
    REGISTERING = "registering"
    ACTIONS_REGISTERED = "actions_registered"
    DISPATCHED = "dispatched"


@dataclass(frozen=True)
class DispatchOutcome:
    matched: Optional[ActionIdentity] = None
    value: Any = None

    @property
    def dispatched(self) -> bool:
        return self.matched is not None


def evaluation_order(actions: List[RegisteredAction]) -> List[RegisteredAction]:
    regular = [a for a in actions if not a.is_fallback]
    fallback = [a for a in actions if a.is_fallback]
    return regular + fallback


class Runner:
    def __init__(
        self,
        service: ServicePort,
        dependencies: Optional[Mapping[str, Any]] = None,
        logger: Optional[LoggerPort] = None,
    ):
        self._service = service
        self._dependencies: Dict[str, Any] = dict(dependencies or {})
        self._logger = (logger or NullLogger()).bind(service=_service_name(service))
        self._result: Optional[ResultTree] = None
        self._state = RunnerState.CREATED

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def result(self) -> ResultTree:
        if self._result is None:
            self._result = self._service.execute(self._dependencies)
            self._state = RunnerState.SERVICE_EXECUTED
            self._logger.info("runner.service.executed", succeeded=self._result.succeeded)
        return self._result

    def run(self, register: Callable[[ActionRegistry], Any]) -> DispatchOutcome:
        if self._state not in (RunnerState.CREATED, RunnerState.SERVICE_EXECUTED):
            raise RunnerStateError(f"Runner already used (state={self._state.value})")

        tree = self.result
        registry = ActionRegistry(tree, self._logger)
        # a failed or nested registration leaves the runner unusable
        self._state = RunnerState.REGISTERING
        register(registry)
        self._state = RunnerState.ACTIONS_REGISTERED

        ordered = evaluation_order(registry.actions())
        self._logger.debug("runner.dispatch.order", actions=[str(a.identity) for a in ordered])

        for action in ordered:
            if not action.condition():
                continue
            self._logger.info("runner.dispatch.matched", action=str(action.identity))
            self._state = RunnerState.DISPATCHED
            return DispatchOutcome(matched=action.identity, value=action.invoke(tree))

        self._state = RunnerState.DISPATCHED
        self._logger.info("runner.dispatch.unmatched", succeeded=tree.succeeded)
        return DispatchOutcome()


def run_service(
    service: ServicePort,
    register: Callable[[ActionRegistry], Any],
    dependencies: Optional[Mapping[str, Any]] = None,
    logger: Optional[LoggerPort] = None,
) -> DispatchOutcome:
    return Runner(service, dependencies, logger).run(register)


def _service_name(service: ServicePort) -> str:
    return getattr(service, "name", None) or type(service).__name__
