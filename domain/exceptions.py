from __future__ import annotations


class RunnerConfigurationError(Exception):
    """Caller-side mistake while registering actions. Fatal to the current run."""


class UnknownActionError(RunnerConfigurationError, AttributeError):
    def __init__(self, name: str):
        super().__init__(f"Unknown action: {name}")
        self.name = name


class UnresolvableHandlerInputError(RunnerConfigurationError):
    def __init__(self, action: str, input_name: str):
        super().__init__(
            f"Handler for {action} requests input '{input_name}' which is not present in the result"
        )
        self.action = action
        self.input_name = input_name


class RunnerStateError(RuntimeError):
    pass


class ResultTreeFrozenError(RuntimeError):
    pass


class StepFailure(Exception):
    """Raised from a step body to mark the step as failed."""
