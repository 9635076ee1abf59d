# domain/run.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from domain.results import ResultTreeBuilder


@dataclass
class RunContext:
    """What a step body sees: the dependencies plus everything published so far."""
    run_id: str = ""
    builder: ResultTreeBuilder = field(default_factory=ResultTreeBuilder)

    def get(self, name: str, default: Any = None) -> Any:
        return self.builder.get_fragment(name, default)

    def __getitem__(self, name: str) -> Any:
        missing = object()
        value = self.builder.get_fragment(name, missing)
        if value is missing:
            raise KeyError(name)
        return value

    def __contains__(self, name: str) -> bool:
        return name in self.builder.fragments()

    def publish(self, name: str, value: Any) -> None:
        self.builder.publish(name, value)
