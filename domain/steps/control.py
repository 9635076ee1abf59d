from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Type

from domain.results import ResultKey
from domain.steps.base import Step


@dataclass(frozen=True, kw_only=True)
class TryStep(Step):
    """Runs nested steps and records any caught exception instead of raising it."""
    steps: List[Step]
    exceptions: Tuple[Type[BaseException], ...] = ()
    name: str = "default"

    @property
    def result_key(self) -> ResultKey:
        return ("result", "try", self.name)


@dataclass(frozen=True, kw_only=True)
class LockStep(Step):
    keys: Tuple[str, ...]
    steps: List[Step]
    name: str = "lock"

    @property
    def lock_name(self) -> str:
        return ":".join(str(k) for k in self.keys)

    @property
    def result_key(self) -> ResultKey:
        return ("result", "lock", self.lock_name)
