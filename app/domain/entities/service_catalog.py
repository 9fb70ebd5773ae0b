from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.question import Question


@dataclass(frozen=True)
class ServiceDefinition:
    service_key: str
    display_name: str
    questions: tuple[Question, ...]
    opening_message: str = ""
    details: str | None = None
    source: str = "registry"  # "registry" or "catalog"
    required_labels: tuple[str, ...] = ()
    optional_labels: tuple[str, ...] = ()

    @property
    def from_catalog(self) -> bool:
        return self.source == "catalog"
