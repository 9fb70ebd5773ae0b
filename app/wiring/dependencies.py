from functools import lru_cache

from app.core.config import settings
from app.application.ports.question_source import QuestionSourcePort
from app.application.use_cases.handle_chat_turn import HandleChatTurnUseCase
from app.domain.entities.conversation_state import EngineOptions
from app.infrastructure.knowledge.composite_source import CompositeQuestionSource
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from app.infrastructure.knowledge.service_registry import ServiceRegistry


@lru_cache
def get_service_registry() -> ServiceRegistry:
    return ServiceRegistry()


@lru_cache
def get_service_catalog() -> ServiceCatalogStore:
    return ServiceCatalogStore(settings.SERVICE_CATALOG_DIR)


@lru_cache
def get_question_source() -> QuestionSourcePort:
    return CompositeQuestionSource(get_service_catalog(), get_service_registry())


def get_engine_options() -> EngineOptions:
    return EngineOptions(
        default_currency=settings.DEFAULT_CURRENCY.upper(),
        duration_units=tuple(settings.DURATION_UNITS),
    )


@lru_cache
def get_chat_turn_use_case() -> HandleChatTurnUseCase:
    return HandleChatTurnUseCase(
        questions=get_question_source(),
        options=get_engine_options(),
        default_locale=settings.DEFAULT_LOCALE,
        embed_tags=settings.EMBED_PROTOCOL_TAGS,
    )
