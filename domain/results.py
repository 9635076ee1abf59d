# domain/results.py
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

from domain.exceptions import ResultTreeFrozenError

ResultKey = Tuple[str, ...]

ROOT_KEY: ResultKey = ()


def result_key(*segments: str) -> ResultKey:
    return tuple(str(s) for s in segments)


@dataclass(frozen=True)
class ModelReference:
    value: Any
    not_found: bool = False
    invalid: bool = False
    errors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExceptionReference:
    exception: BaseException


Payload = Union[ModelReference, ExceptionReference, None]


@dataclass(frozen=True)
class ResultNode:
    key: ResultKey
    succeeded: bool
    payload: Payload = None
    message: Optional[str] = None

    @property
    def failed(self) -> bool:
        return not self.succeeded

    @property
    def model(self) -> Any:
        if isinstance(self.payload, ModelReference):
            return self.payload.value
        return None

    @property
    def exception(self) -> Optional[BaseException]:
        if isinstance(self.payload, ExceptionReference):
            return self.payload.exception
        return None

    @property
    def not_found(self) -> bool:
        return isinstance(self.payload, ModelReference) and self.payload.not_found

    @property
    def invalid(self) -> bool:
        return isinstance(self.payload, ModelReference) and self.payload.invalid


@dataclass(frozen=True)
class ResultTree:
    """
    Read-only record of one service execution.

    Nodes are addressed by segment tuples such as ("result", "step", "save").
    The root node sits at the empty key and carries the overall outcome.
    Named fragments are the values the service published while running
    (params, the loaded model, ...).
    """
    nodes: Mapping[ResultKey, ResultNode]
    fragments: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))
        object.__setattr__(self, "fragments", MappingProxyType(dict(self.fragments)))

    @property
    def root(self) -> ResultNode:
        return self.nodes[ROOT_KEY]

    @property
    def succeeded(self) -> bool:
        return self.root.succeeded

    @property
    def failed(self) -> bool:
        return not self.succeeded

    def lookup(self, key: Sequence[str]) -> Optional[ResultNode]:
        return self.nodes.get(tuple(key))

    def is_failure(self, key: Sequence[str]) -> bool:
        node = self.lookup(key)
        return node is not None and not node.succeeded

    def has_fragment(self, name: str) -> bool:
        return name in self.fragments

    def fragment(self, name: str) -> Any:
        return self.fragments[name]

    def keys(self) -> Iterator[ResultKey]:
        return iter(self.nodes)


class ResultTreeBuilder:
    def __init__(self) -> None:
        self._nodes: Dict[ResultKey, ResultNode] = {}
        self._fragments: Dict[str, Any] = {}
        self._frozen = False

    def record(
        self,
        key: Sequence[str],
        succeeded: bool,
        payload: Payload = None,
        message: Optional[str] = None,
    ) -> ResultNode:
        self._ensure_open()
        node = ResultNode(key=tuple(key), succeeded=succeeded, payload=payload, message=message)
        self._nodes[node.key] = node
        return node

    def publish(self, name: str, value: Any) -> None:
        self._ensure_open()
        self._fragments[name] = value

    def lookup(self, key: Sequence[str]) -> Optional[ResultNode]:
        return self._nodes.get(tuple(key))

    def get_fragment(self, name: str, default: Any = None) -> Any:
        return self._fragments.get(name, default)

    def fragments(self) -> Dict[str, Any]:
        return dict(self._fragments)

    def freeze(self, succeeded: bool, message: Optional[str] = None) -> ResultTree:
        self._ensure_open()
        self.record(ROOT_KEY, succeeded, message=message)
        self._frozen = True
        return ResultTree(nodes=self._nodes, fragments=self._fragments)

    def _ensure_open(self) -> None:
        if self._frozen:
            raise ResultTreeFrozenError("Result tree is already finalized")
