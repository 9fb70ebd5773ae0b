from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Mapping

from app.application.ports.question_source import QuestionSourcePort
from app.application.use_cases.question_flow import build_question_list
from app.domain.entities.service_catalog import ServiceDefinition
from app.infrastructure.knowledge.service_registry_data import DEFAULT_SERVICE, SERVICE_BANKS


def normalize_service_key(value: str) -> str:
    text = (value or "").strip().lower().replace("&", "and")
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")


def build_definition(service: str, bank: Mapping[str, Any]) -> ServiceDefinition:
    return ServiceDefinition(
        service_key=normalize_service_key(service),
        display_name=service,
        questions=build_question_list(list(bank.get("questions") or [])),
        opening_message=bank.get("opening_message", ""),
        details=bank.get("details"),
        source="registry",
    )


class ServiceRegistry(QuestionSourcePort):
    """Static question banks, built once and exposed read-only."""

    def __init__(self, banks: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        banks = SERVICE_BANKS if banks is None else banks
        definitions: dict[str, ServiceDefinition] = {}
        lookup: dict[str, str] = {}
        for service, bank in banks.items():
            definition = build_definition(service, bank)
            definitions[service] = definition
            for alias in [service, *bank.get("aliases", [])]:
                lookup.setdefault(normalize_service_key(alias), service)
        self._definitions = MappingProxyType(definitions)
        self._lookup = MappingProxyType(lookup)

    def get_definition(self, service: str) -> ServiceDefinition | None:
        name = self._lookup.get(normalize_service_key(service))
        return self._definitions.get(name) if name else None

    def list_services(self) -> list[str]:
        return [name for name in self._definitions if name != DEFAULT_SERVICE]
