from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.service_catalog import ServiceDefinition


class QuestionSourcePort(ABC):
    @abstractmethod
    def get_definition(self, service: str) -> ServiceDefinition | None:
        """Resolve a service name or slug to its question bank. Returns None if unknown."""
        raise NotImplementedError

    @abstractmethod
    def list_services(self) -> list[str]:
        """Display names of every service this source can serve."""
        raise NotImplementedError
