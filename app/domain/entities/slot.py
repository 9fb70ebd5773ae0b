from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SlotStatus(str, Enum):
    empty = "empty"
    answered = "answered"
    declined = "declined"
    ambiguous = "ambiguous"
    invalid = "invalid"


@dataclass(frozen=True)
class Slot:
    key: str
    status: SlotStatus = SlotStatus.empty
    raw: str | None = None
    normalized: Any = None
    confidence: float = 0.0
    asked_count: int = 0
    clarified_once: bool = False
    validation_errors: tuple[str, ...] = ()
    options: tuple[str, ...] = ()

    @property
    def is_resolved(self) -> bool:
        return self.status in (SlotStatus.answered, SlotStatus.declined)

    @property
    def has_issue(self) -> bool:
        return self.status in (SlotStatus.ambiguous, SlotStatus.invalid)
