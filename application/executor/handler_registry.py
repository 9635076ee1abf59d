from __future__ import annotations

from typing import List

from application.handlers.base import StepHandler
from domain.steps.base import Step


class HandlerRegistry:
    def __init__(self, handlers: List[StepHandler]):
        self._handlers = handlers

    def get_handler(self, step: Step) -> StepHandler:
        for h in self._handlers:
            if h.supports(step):
                return h
        raise RuntimeError(f"No handler found for step: {type(step).__name__} ({step.name})")


def default_registry() -> HandlerRegistry:
    from application.handlers.call_handler import CallStepHandler
    from application.handlers.contract_handler import ContractStepHandler
    from application.handlers.model_handler import ModelStepHandler
    from application.handlers.policy_handler import PolicyStepHandler

    return HandlerRegistry(
        handlers=[
            CallStepHandler(),
            PolicyStepHandler(),
            ContractStepHandler(),
            ModelStepHandler(),
        ]
    )
