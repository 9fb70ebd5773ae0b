from enum import Enum
from pydantic import BaseModel, Field


class Role(str, Enum):
    user = "user"
    assistant = "assistant"


class ChatTurnSchema(BaseModel):
    role: Role
    content: str
    question_key: str | None = None


class ChatTurnRequestSchema(BaseModel):
    service: str = Field(min_length=1)
    history: list[ChatTurnSchema] = Field(default_factory=list)
    locale: str | None = None


class ChatReplySchema(BaseModel):
    text: str
    question_key: str | None = None
    suggestions: list[str] | None = None
    multi_select: bool = False
    max_select: int | None = None
    is_complete: bool = False
    proposal: str | None = None
    collected_data: dict[str, str] = Field(default_factory=dict)
    missing_required: list[str] = Field(default_factory=list)


class ServicesResponseSchema(BaseModel):
    services: list[str]
