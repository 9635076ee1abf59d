from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from domain.results import ResultKey
from domain.steps.base import Step


@dataclass(frozen=True, kw_only=True)
class ContractStep(Step):
    """
    Validates the ``source`` fragment against a pydantic model class.
    On success the parsed contract replaces the fragment named ``publish_as``.
    """
    schema: Any
    name: str = "default"
    source: str = "params"
    publish_as: str = "params"

    @property
    def result_key(self) -> ResultKey:
        return ("result", "contract", self.name)
