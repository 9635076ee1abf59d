# application/outcome.py
from dataclasses import dataclass
from typing import Optional

from domain.results import Payload


@dataclass(frozen=True)
class StepOutcome:
    ok: bool
    error_message: Optional[str] = None
    payload: Payload = None
