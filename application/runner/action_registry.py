from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, Type, Union

from application.ports.logger import LoggerPort
from application.runner.registered_action import ActionIdentity, RegisteredAction
from domain.actions import ActionKind, lookup_action
from domain.exceptions import UnknownActionError, UnresolvableHandlerInputError
from domain.results import ResultTree

Handler = Callable[..., Any]


class ActionRegistry:
    """
    Collects the actions a caller wants to react to for one run.

    Every method registers one action. Pass the reaction as ``handler=`` or
    use the method as a decorator::

        @actions.on_failed_step("save")
        def _(node):
            ...

    A handler receives the matched payload positionally, plus the result
    fragments named in ``inputs`` as keyword arguments. Registering the same
    action with the same arguments again replaces the earlier handler.
    """

    def __init__(self, tree: ResultTree, logger: LoggerPort):
        self._tree = tree
        self._logger = logger
        self._actions: Dict[ActionIdentity, RegisteredAction] = {}

    def register(
        self,
        name: Union[str, ActionKind],
        *args: Any,
        handler: Optional[Handler] = None,
        inputs: Iterable[str] = (),
    ):
        spec = lookup_action(name)
        spec.validate_args(args)
        identity = ActionIdentity(spec.kind, tuple(args))

        inputs = tuple(inputs)
        for input_name in inputs:
            # presence in the tree is checked when the handler is invoked
            if not isinstance(input_name, str) or not input_name.isidentifier():
                raise UnresolvableHandlerInputError(str(identity), str(input_name))

        def add(fn: Handler) -> Handler:
            self._actions[identity] = RegisteredAction(
                identity=identity,
                spec=spec,
                condition=spec.condition(self._tree, identity.args),
                handler=fn,
                inputs=inputs,
            )
            self._logger.debug("runner.action.registered", action=str(identity), inputs=list(inputs))
            return fn

        if handler is None:
            return add
        return add(handler)

    def actions(self) -> List[RegisteredAction]:
        return list(self._actions.values())

    def on_success(self, handler: Optional[Handler] = None, *, inputs: Iterable[str] = ()):
        return self.register(ActionKind.ON_SUCCESS, handler=handler, inputs=inputs)

    def on_failure(self, handler: Optional[Handler] = None, *, inputs: Iterable[str] = ()):
        return self.register(ActionKind.ON_FAILURE, handler=handler, inputs=inputs)

    def on_failed_step(self, name: str, *, handler: Optional[Handler] = None, inputs: Iterable[str] = ()):
        return self.register(ActionKind.ON_FAILED_STEP, name, handler=handler, inputs=inputs)

    def on_failed_policy(
        self, name: Optional[str] = None, *, handler: Optional[Handler] = None, inputs: Iterable[str] = ()
    ):
        args = () if name is None else (name,)
        return self.register(ActionKind.ON_FAILED_POLICY, *args, handler=handler, inputs=inputs)

    def on_failed_contract(
        self, name: Optional[str] = None, *, handler: Optional[Handler] = None, inputs: Iterable[str] = ()
    ):
        args = () if name is None else (name,)
        return self.register(ActionKind.ON_FAILED_CONTRACT, *args, handler=handler, inputs=inputs)

    def on_model_not_found(
        self, name: Optional[str] = None, *, handler: Optional[Handler] = None, inputs: Iterable[str] = ()
    ):
        args = () if name is None else (name,)
        return self.register(ActionKind.ON_MODEL_NOT_FOUND, *args, handler=handler, inputs=inputs)

    def on_model_errors(
        self, name: Optional[str] = None, *, handler: Optional[Handler] = None, inputs: Iterable[str] = ()
    ):
        args = () if name is None else (name,)
        return self.register(ActionKind.ON_MODEL_ERRORS, *args, handler=handler, inputs=inputs)

    def on_exceptions(
        self,
        *exception_types: Type[BaseException],
        handler: Optional[Handler] = None,
        inputs: Iterable[str] = (),
    ):
        return self.register(ActionKind.ON_EXCEPTIONS, *exception_types, handler=handler, inputs=inputs)

    def on_lock_not_acquired(self, *keys: str, handler: Optional[Handler] = None, inputs: Iterable[str] = ()):
        return self.register(ActionKind.ON_LOCK_NOT_ACQUIRED, *keys, handler=handler, inputs=inputs)

    def __getattr__(self, name: str):
        # only reached for attributes that do not exist
        if name.startswith("on_"):
            raise UnknownActionError(name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
