from __future__ import annotations

import pytest

from application.ports.logger import NullLogger
from application.runner.action_registry import ActionRegistry
from application.runner.registered_action import ActionIdentity
from application.runner.runner import evaluation_order
from domain.actions import ActionKind
from domain.exceptions import RunnerConfigurationError, UnknownActionError, UnresolvableHandlerInputError
from tests.fake_service import RecordingLogger, build_tree


def _registry(tree=None) -> ActionRegistry:
    return ActionRegistry(tree or build_tree(True), NullLogger())


def test_actions_keep_declaration_order() -> None:
    registry = _registry()
    registry.on_failed_step("a", handler=lambda _: None)
    registry.on_failed_policy(handler=lambda _: None)
    registry.on_exceptions(handler=lambda _: None)

    kinds = [a.identity.kind for a in registry.actions()]

    assert kinds == [ActionKind.ON_FAILED_STEP, ActionKind.ON_FAILED_POLICY, ActionKind.ON_EXCEPTIONS]


def test_decorator_form_registers_and_returns_function() -> None:
    registry = _registry()

    @registry.on_failed_step("save")
    def handle(node):
        return node

    assert registry.actions()[0].handler is handle
    assert registry.actions()[0].identity == ActionIdentity(ActionKind.ON_FAILED_STEP, ("save",))


def test_identity_uses_supplied_arguments() -> None:
    registry = _registry()
    registry.on_failed_policy(handler=lambda _: None)
    registry.on_failed_policy("default", handler=lambda _: None)

    assert [str(a.identity) for a in registry.actions()] == ["on_failed_policy", "on_failed_policy(default)"]


def test_exception_identity_names_classes() -> None:
    registry = _registry()
    registry.on_exceptions(KeyError, ValueError, handler=lambda _: None)
    assert str(registry.actions()[0].identity) == "on_exceptions(KeyError, ValueError)"


def test_overwrite_keeps_original_position() -> None:
    registry = _registry()
    first = lambda _: "first"
    registry.on_failed_step("a", handler=first)
    registry.on_failed_step("b", handler=lambda _: None)
    registry.on_failed_step("a", handler=lambda _: "again")

    actions = registry.actions()

    assert [a.identity.args for a in actions] == [("a",), ("b",)]
    assert actions[0].handler is not first


def test_generic_register_by_name() -> None:
    registry = _registry()
    registry.register("on_lock_not_acquired", "post", 1, handler=lambda _: None)
    assert registry.actions()[0].identity.args == ("post", 1)


def test_generic_register_unknown_name() -> None:
    with pytest.raises(UnknownActionError):
        _registry().register("on_explode", handler=lambda _: None)


def test_unknown_on_method_raises_unknown_action() -> None:
    registry = _registry()
    with pytest.raises(UnknownActionError, match="on_timeout"):
        registry.on_timeout(handler=lambda _: None)


def test_unknown_plain_attribute_raises_attribute_error() -> None:
    registry = _registry()
    with pytest.raises(AttributeError) as excinfo:
        registry.something_else
    assert not isinstance(excinfo.value, UnknownActionError)


def test_invalid_input_names_rejected_at_registration() -> None:
    registry = _registry()
    with pytest.raises(UnresolvableHandlerInputError):
        registry.on_success(lambda _: None, inputs=("not valid",))


def test_missing_step_name_is_configuration_error() -> None:
    with pytest.raises(RunnerConfigurationError):
        _registry().register(ActionKind.ON_FAILED_STEP, handler=lambda _: None)


def test_non_exception_argument_rejected() -> None:
    with pytest.raises(RunnerConfigurationError):
        _registry().on_exceptions("KeyError", handler=lambda _: None)


def test_evaluation_order_moves_fallback_last() -> None:
    registry = _registry()
    registry.on_failure(lambda _: None)
    registry.on_success(lambda _: None)
    registry.on_failed_step("save", handler=lambda _: None)

    ordered = [a.identity.kind for a in evaluation_order(registry.actions())]

    assert ordered == [ActionKind.ON_SUCCESS, ActionKind.ON_FAILED_STEP, ActionKind.ON_FAILURE]


def test_registration_is_logged() -> None:
    logger = RecordingLogger()
    registry = ActionRegistry(build_tree(True), logger)
    registry.on_success(lambda _: None)
    assert logger.events == [("debug", "runner.action.registered", {"action": "on_success", "inputs": []})]


def test_unhashable_qualifier_is_configuration_error() -> None:
    with pytest.raises(RunnerConfigurationError, match="hashable"):
        _registry().on_failed_step(["save"], handler=lambda _: None)


def test_none_step_name_is_rejected() -> None:
    with pytest.raises(RunnerConfigurationError, match="requires a name"):
        _registry().on_failed_step(None, handler=lambda _: None)
    with pytest.raises(RunnerConfigurationError, match="requires a name"):
        _registry().on_lock_not_acquired("post", None, handler=lambda _: None)
