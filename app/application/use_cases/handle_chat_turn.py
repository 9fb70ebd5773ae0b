from __future__ import annotations

import logging
from typing import Iterable

from app.application.exceptions import UnknownServiceError
from app.application.ports.question_source import QuestionSourcePort
from app.application.use_cases.conversation_engine import build_conversation_state, new_state
from app.application.use_cases.proposal import generate_proposal_from_state
from app.application.use_cases.question_selection import get_next_humanized_question
from app.domain.entities.conversation_state import ConversationState, EngineOptions
from app.domain.entities.message import ChatTurn
from app.domain.entities.reply import QuestionPrompt, TurnReply
from app.domain.entities.service_catalog import ServiceDefinition
from app.infrastructure.transport.tag_codec import encode_prompt

COMPLETE_MESSAGE = "Thanks! I have everything I need. Here is your proposal draft."


class HandleChatTurnUseCase:
    def __init__(
        self,
        questions: QuestionSourcePort,
        options: EngineOptions,
        default_locale: str = "en",
        embed_tags: bool = True,
    ) -> None:
        self._questions = questions
        self._options = options
        self._default_locale = default_locale
        self._embed_tags = embed_tags
        self._logger = logging.getLogger(__name__)

    def list_services(self) -> list[str]:
        return self._questions.list_services()

    def resolve(self, service: str) -> ServiceDefinition:
        definition = self._questions.get_definition(service)
        if definition is None:
            self._logger.info("Unknown service requested", extra={"service": service})
            raise UnknownServiceError(service)
        return definition

    def opening(self, service: str, locale: str | None = None) -> TurnReply:
        """Opening message for a fresh conversation, followed by the first question."""
        definition = self.resolve(service)
        state = new_state(definition, self._options)
        prompt = get_next_humanized_question(state, locale or self._default_locale)
        intro = definition.opening_message or f"Let's get your {definition.display_name} project started."
        if prompt is None:
            return self._reply(state, intro, None)
        return self._reply(state, f"{intro}\n\n{prompt.text}", prompt)

    def execute(self, service: str, history: Iterable[ChatTurn], locale: str | None = None) -> TurnReply:
        definition = self.resolve(service)
        turns = list(history)
        state = build_conversation_state(turns, definition, self._options)

        prompt = get_next_humanized_question(state, locale or self._default_locale)
        if prompt is not None:
            self._logger.info(
                "Next question selected",
                extra={
                    "service": definition.display_name,
                    "question_key": prompt.question_key,
                    "answered": ",".join(state.meta.get("answered_keys", ())),
                    "turns": len(turns),
                },
            )
            return self._reply(state, prompt.text, prompt)

        proposal = generate_proposal_from_state(state)
        self._logger.info(
            "Conversation complete",
            extra={"service": definition.display_name, "turns": len(turns), "proposal": proposal is not None},
        )
        return self._reply(state, COMPLETE_MESSAGE, None, proposal)

    def _reply(
        self,
        state: ConversationState,
        text: str,
        prompt: QuestionPrompt | None,
        proposal: str | None = None,
    ) -> TurnReply:
        if prompt is not None and self._embed_tags:
            text = encode_prompt(
                QuestionPrompt(
                    text=text,
                    question_key=prompt.question_key,
                    suggestions=prompt.suggestions,
                    multi_select=prompt.multi_select,
                    max_select=prompt.max_select,
                )
            )
        return TurnReply(
            text=text,
            question_key=prompt.question_key if prompt else None,
            suggestions=prompt.suggestions if prompt else None,
            multi_select=prompt.multi_select if prompt else False,
            max_select=prompt.max_select if prompt else None,
            is_complete=prompt is None and state.is_complete,
            proposal=proposal,
            collected_data=dict(state.collected_data),
            missing_required=tuple(state.missing_required),
        )
