from __future__ import annotations

import re
from dataclasses import dataclass

from app.domain.entities.reply import QuestionPrompt

_QUESTION_KEY_RE = re.compile(r"\[QUESTION_KEY:\s*([^\]]+)\]", re.IGNORECASE)
_CHIPS_RE = re.compile(r"\[(SUGGESTIONS|MULTI_SELECT):\s*([^\]]*)\]", re.IGNORECASE)
_MAX_SELECT_RE = re.compile(r"\[MAX_SELECT:\s*(\d+)\s*\]", re.IGNORECASE)
_ANY_TAG_RE = re.compile(r"\[(?:QUESTION_KEY|SUGGESTIONS|MULTI_SELECT|MAX_SELECT):[^\]]*\]", re.IGNORECASE)


@dataclass(frozen=True)
class DecodedMessage:
    text: str
    question_key: str | None = None
    suggestions: tuple[str, ...] | None = None
    multi_select: bool = False
    max_select: int | None = None


def encode_prompt(prompt: QuestionPrompt) -> str:
    """Render a prompt as display text followed by its control tags, one per line."""
    lines = [prompt.text.rstrip()]
    if prompt.suggestions:
        tag = "MULTI_SELECT" if prompt.multi_select else "SUGGESTIONS"
        lines.append(f"[{tag}: {' | '.join(prompt.suggestions)}]")
        if prompt.multi_select and prompt.max_select:
            lines.append(f"[MAX_SELECT: {prompt.max_select}]")
    lines.append(f"[QUESTION_KEY: {prompt.question_key}]")
    return "\n".join(lines)


def strip_tags(text: str) -> str:
    cleaned = _ANY_TAG_RE.sub("", text or "")
    return re.sub(r"\n{3,}", "\n\n", cleaned).strip()


def decode_message(text: str) -> DecodedMessage:
    raw = text or ""
    key_match = _QUESTION_KEY_RE.search(raw)
    chips_match = _CHIPS_RE.search(raw)
    max_match = _MAX_SELECT_RE.search(raw)

    suggestions = None
    multi_select = False
    if chips_match:
        values = tuple(part.strip() for part in chips_match.group(2).split("|") if part.strip())
        suggestions = values or None
        multi_select = chips_match.group(1).upper() == "MULTI_SELECT"

    return DecodedMessage(
        text=strip_tags(raw),
        question_key=key_match.group(1).strip() if key_match else None,
        suggestions=suggestions,
        multi_select=multi_select,
        max_select=int(max_match.group(1)) if max_match else None,
    )
