from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from domain.actions import ActionKind, ActionSpec
from domain.exceptions import UnresolvableHandlerInputError
from domain.results import ResultTree


def _describe(arg: Any) -> str:
    if isinstance(arg, type):
        return arg.__name__
    return str(arg)


@dataclass(frozen=True)
class ActionIdentity:
    kind: ActionKind
    args: Tuple[Any, ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.kind.value
        return f"{self.kind.value}({', '.join(_describe(a) for a in self.args)})"


@dataclass(frozen=True)
class RegisteredAction:
    identity: ActionIdentity
    spec: ActionSpec
    condition: Callable[[], bool]
    handler: Callable[..., Any]
    inputs: Tuple[str, ...] = ()

    @property
    def is_fallback(self) -> bool:
        return self.identity.kind is ActionKind.ON_FAILURE

    def invoke(self, tree: ResultTree) -> Any:
        node = tree.lookup(self.spec.resolve_key(self.identity.args))
        payload = self.spec.select_payload(node) if node is not None else None

        kwargs: Dict[str, Any] = {}
        for name in self.inputs:
            if not tree.has_fragment(name):
                raise UnresolvableHandlerInputError(str(self.identity), name)
            kwargs[name] = tree.fragment(name)

        return self.handler(payload, **kwargs)
