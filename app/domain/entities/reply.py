from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class QuestionPrompt:
    text: str
    question_key: str
    suggestions: tuple[str, ...] | None = None
    multi_select: bool = False
    max_select: int | None = None


@dataclass(frozen=True)
class TurnReply:
    text: str
    question_key: str | None
    suggestions: tuple[str, ...] | None
    multi_select: bool
    max_select: int | None
    is_complete: bool
    proposal: str | None = None
    collected_data: dict[str, str] = field(default_factory=dict)
    missing_required: tuple[str, ...] = ()
