from __future__ import annotations

from typing import Any, Mapping, Protocol

from domain.results import ResultTree


class ServicePort(Protocol):
    """Anything the Runner can execute once to obtain a finished ResultTree."""

    def execute(self, dependencies: Mapping[str, Any]) -> ResultTree:
        ...
