from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.schemas import (
    ChatReplySchema,
    ChatTurnRequestSchema,
    ServicesResponseSchema,
)
from app.wiring.dependencies import get_chat_turn_use_case
from app.application.use_cases.handle_chat_turn import HandleChatTurnUseCase
from app.application.exceptions import UnknownServiceError
from app.domain.entities.message import ChatTurn
from app.domain.entities.reply import TurnReply

router = APIRouter()


def _to_schema(reply: TurnReply) -> ChatReplySchema:
    return ChatReplySchema(
        text=reply.text,
        question_key=reply.question_key,
        suggestions=list(reply.suggestions) if reply.suggestions else None,
        multi_select=reply.multi_select,
        max_select=reply.max_select,
        is_complete=reply.is_complete,
        proposal=reply.proposal,
        collected_data=reply.collected_data,
        missing_required=list(reply.missing_required),
    )


@router.get("/services", response_model=ServicesResponseSchema)
def list_services(uc: HandleChatTurnUseCase = Depends(get_chat_turn_use_case)):
    return ServicesResponseSchema(services=uc.list_services())


@router.get("/services/{service}/opening", response_model=ChatReplySchema)
def opening(
    service: str,
    locale: str | None = None,
    uc: HandleChatTurnUseCase = Depends(get_chat_turn_use_case),
):
    try:
        reply = uc.opening(service, locale)
    except UnknownServiceError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _to_schema(reply)


@router.post("/chat/turn", response_model=ChatReplySchema)
def chat_turn(
    req: ChatTurnRequestSchema,
    uc: HandleChatTurnUseCase = Depends(get_chat_turn_use_case),
):
    history = [
        ChatTurn(role=turn.role.value, content=turn.content, question_key=turn.question_key)
        for turn in req.history
    ]
    try:
        reply = uc.execute(req.service, history, req.locale)
    except UnknownServiceError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _to_schema(reply)
