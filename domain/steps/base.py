from __future__ import annotations

from dataclasses import dataclass, field

from domain.results import ResultKey


@dataclass(frozen=True)
class Step:
    name: str
    enabled: bool = field(default=True, kw_only=True)

    @property
    def result_key(self) -> ResultKey:
        raise NotImplementedError
