from dataclasses import dataclass


@dataclass(frozen=True)
class ChatTurn:
    role: str  # "user" | "assistant"
    content: str
    question_key: str | None = None  # structured alternative to the embedded [QUESTION_KEY] tag
