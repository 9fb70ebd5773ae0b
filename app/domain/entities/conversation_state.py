from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.domain.entities.question import Question
from app.domain.entities.slot import Slot


@dataclass(frozen=True)
class EngineOptions:
    default_currency: str = "INR"
    duration_units: tuple[str, ...] = ("weeks", "months")


@dataclass(frozen=True)
class ConversationState:
    service: str
    questions: tuple[Question, ...] = ()
    slots: dict[str, Slot] = field(default_factory=dict)
    # Derived from slots on every turn
    collected_data: dict[str, str] = field(default_factory=dict)
    missing_required: tuple[str, ...] = ()
    missing_optional: tuple[str, ...] = ()
    current_step: int = 0
    pending_question_key: str | None = None  # key the last assistant turn was waiting on
    meta: dict[str, Any] = field(default_factory=dict)  # was_question, low_budget_pending, allow_low_budget, ...
    options: EngineOptions = EngineOptions()

    @property
    def is_complete(self) -> bool:
        return (
            not self.missing_required
            and not self.missing_optional
            and not self.meta.get("low_budget_pending", False)
        )

    def question(self, key: str | None) -> Question | None:
        if not key:
            return None
        for question in self.questions:
            if question.key == key:
                return question
        return None

    def slot(self, key: str) -> Slot:
        return self.slots.get(key) or Slot(key=key)

    def has_question(self, key: str) -> bool:
        return self.question(key) is not None
