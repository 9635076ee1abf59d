# domain/actions.py
"""
Catalog of the outcome shapes a caller can react to after a service ran.

Each entry knows how to test a ResultTree for its shape, which node the
matched handler receives, and which part of that node is handed over.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, Union

from domain.exceptions import RunnerConfigurationError, UnknownActionError
from domain.results import ROOT_KEY, ResultKey, ResultNode, ResultTree


class ActionKind(str, Enum):
    ON_SUCCESS = "on_success"
    ON_FAILURE = "on_failure"
    ON_FAILED_STEP = "on_failed_step"
    ON_FAILED_POLICY = "on_failed_policy"
    ON_FAILED_CONTRACT = "on_failed_contract"
    ON_MODEL_NOT_FOUND = "on_model_not_found"
    ON_MODEL_ERRORS = "on_model_errors"
    ON_EXCEPTIONS = "on_exceptions"
    ON_LOCK_NOT_ACQUIRED = "on_lock_not_acquired"


class PayloadSelector(str, Enum):
    ITSELF = "itself"
    MODEL = "model"
    EXCEPTION = "exception"


Check = Callable[[ResultTree, ResultKey, Tuple[Any, ...]], bool]


def _root_succeeded(tree: ResultTree, _key: ResultKey, _args: Tuple[Any, ...]) -> bool:
    return tree.succeeded


def _root_failed(tree: ResultTree, _key: ResultKey, _args: Tuple[Any, ...]) -> bool:
    return tree.failed


def _node_failed(tree: ResultTree, key: ResultKey, _args: Tuple[Any, ...]) -> bool:
    return tree.is_failure(key)


def _model_not_found(tree: ResultTree, key: ResultKey, _args: Tuple[Any, ...]) -> bool:
    node = tree.lookup(key)
    return node is not None and node.failed and node.not_found


def _model_invalid(tree: ResultTree, key: ResultKey, _args: Tuple[Any, ...]) -> bool:
    node = tree.lookup(key)
    return node is not None and node.failed and node.invalid


def _exception_caught(tree: ResultTree, key: ResultKey, args: Tuple[Any, ...]) -> bool:
    node = tree.lookup(key)
    exc = node.exception if node is not None else None
    if exc is None:
        return False
    if not args:
        return True
    return any(isinstance(exc, exc_type) for exc_type in args)


@dataclass(frozen=True)
class ActionSpec:
    kind: ActionKind
    check: Check
    key_prefix: ResultKey = ()
    default_qualifier: Optional[str] = None
    fixed_qualifier: Optional[str] = None
    payload: PayloadSelector = PayloadSelector.ITSELF
    max_args: Optional[int] = 1           # None => variadic
    requires_qualifier: bool = False
    joins_arguments: bool = False         # lock keys => "a:b"
    exception_types: bool = False         # arguments must be exception classes

    @property
    def name(self) -> str:
        return self.kind.value

    def validate_args(self, args: Tuple[Any, ...]) -> None:
        for arg in args:
            try:
                hash(arg)
            except TypeError:
                raise RunnerConfigurationError(
                    f"{self.name} arguments must be hashable, got {arg!r}"
                ) from None
        if self.max_args is not None and len(args) > self.max_args:
            raise RunnerConfigurationError(
                f"{self.name} accepts at most {self.max_args} argument(s), got {len(args)}"
            )
        if self.requires_qualifier and (not args or any(a is None for a in args)):
            raise RunnerConfigurationError(f"{self.name} requires a name")
        if self.exception_types:
            for arg in args:
                if not (isinstance(arg, type) and issubclass(arg, BaseException)):
                    raise RunnerConfigurationError(
                        f"{self.name} expects exception classes, got {arg!r}"
                    )

    def resolve_key(self, args: Tuple[Any, ...]) -> ResultKey:
        if not self.key_prefix:
            return ROOT_KEY
        if self.fixed_qualifier is not None:
            qualifier = self.fixed_qualifier
        elif self.joins_arguments:
            qualifier = ":".join(str(a) for a in args)
        elif args:
            qualifier = str(args[0])
        else:
            qualifier = self.default_qualifier or ""
        return self.key_prefix + (qualifier,)

    def condition(self, tree: ResultTree, args: Tuple[Any, ...]) -> Callable[[], bool]:
        key = self.resolve_key(args)
        return lambda: bool(self.check(tree, key, args))

    def select_payload(self, node: ResultNode) -> Any:
        if self.payload is PayloadSelector.MODEL:
            return node.model
        if self.payload is PayloadSelector.EXCEPTION:
            return node.exception
        return node


_CATALOG = {
    ActionKind.ON_SUCCESS: ActionSpec(ActionKind.ON_SUCCESS, _root_succeeded, max_args=0),
    ActionKind.ON_FAILURE: ActionSpec(ActionKind.ON_FAILURE, _root_failed, max_args=0),
    ActionKind.ON_FAILED_STEP: ActionSpec(
        ActionKind.ON_FAILED_STEP,
        _node_failed,
        key_prefix=("result", "step"),
        requires_qualifier=True,
    ),
    ActionKind.ON_FAILED_POLICY: ActionSpec(
        ActionKind.ON_FAILED_POLICY,
        _node_failed,
        key_prefix=("result", "policy"),
        default_qualifier="default",
    ),
    ActionKind.ON_FAILED_CONTRACT: ActionSpec(
        ActionKind.ON_FAILED_CONTRACT,
        _node_failed,
        key_prefix=("result", "contract"),
        default_qualifier="default",
    ),
    ActionKind.ON_MODEL_NOT_FOUND: ActionSpec(
        ActionKind.ON_MODEL_NOT_FOUND,
        _model_not_found,
        key_prefix=("result", "model"),
        default_qualifier="model",
    ),
    # receives the model itself, not the node
    ActionKind.ON_MODEL_ERRORS: ActionSpec(
        ActionKind.ON_MODEL_ERRORS,
        _model_invalid,
        key_prefix=("result", "model"),
        default_qualifier="model",
        payload=PayloadSelector.MODEL,
    ),
    ActionKind.ON_EXCEPTIONS: ActionSpec(
        ActionKind.ON_EXCEPTIONS,
        _exception_caught,
        key_prefix=("result", "try"),
        fixed_qualifier="default",
        payload=PayloadSelector.EXCEPTION,
        max_args=None,
        exception_types=True,
    ),
    ActionKind.ON_LOCK_NOT_ACQUIRED: ActionSpec(
        ActionKind.ON_LOCK_NOT_ACQUIRED,
        _node_failed,
        key_prefix=("result", "lock"),
        max_args=None,
        requires_qualifier=True,
        joins_arguments=True,
    ),
}

ACTION_CATALOG: Mapping[ActionKind, ActionSpec] = MappingProxyType(_CATALOG)

FALLBACK_ACTION = ActionKind.ON_FAILURE


def lookup_action(name: Union[str, ActionKind]) -> ActionSpec:
    try:
        kind = ActionKind(name)
    except ValueError:
        raise UnknownActionError(str(name)) from None
    return ACTION_CATALOG[kind]


def action_names() -> Sequence[str]:
    return [kind.value for kind in ACTION_CATALOG]
