from __future__ import annotations

from app.application.ports.question_source import QuestionSourcePort
from app.domain.entities.service_catalog import ServiceDefinition


class CompositeQuestionSource(QuestionSourcePort):
    """Ask each source in order; the first definition found wins."""

    def __init__(self, *sources: QuestionSourcePort) -> None:
        self._sources = sources

    def get_definition(self, service: str) -> ServiceDefinition | None:
        for source in self._sources:
            definition = source.get_definition(service)
            if definition is not None:
                return definition
        return None

    def list_services(self) -> list[str]:
        names: list[str] = []
        seen: set[str] = set()
        for source in self._sources:
            for name in source.list_services():
                if name.lower() not in seen:
                    seen.add(name.lower())
                    names.append(name)
        return names
