from __future__ import annotations

import logging
import re
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from app.application.exceptions import ServiceCatalogError
from app.application.ports.question_source import QuestionSourcePort
from app.application.use_cases.question_flow import (
    build_question_list,
    infer_examples,
    infer_expected_type,
    infer_key_from_prompt,
    infer_tags_from_key,
    infer_tags_from_label,
    infer_tags_from_prompt,
    match_label_to_question,
    slugify,
)
from app.domain.entities.service_catalog import ServiceDefinition
from app.infrastructure.knowledge.service_registry import normalize_service_key

_HEADING_RE = re.compile(r"^#\s+(.+)")
_SECTION_RE = re.compile(r"^##\s+(.*)")
_NUMBERED_RE = re.compile(r"^\s*\d+\.\s+(.*)$")
_BULLET_RE = re.compile(r"^\s*-\s+(.+)")
_CHIPS_RE = re.compile(r"\[(SUGGESTIONS|MULTI_SELECT):\s*(.+)\]", re.IGNORECASE)


def _clean(value: str) -> str:
    return re.sub(r"\s+", " ", value or "").strip()


def _split_chips(value: str) -> list[str]:
    return [_clean(part) for part in value.split("|") if _clean(part)]


def parse_service_document(text: str, slug: str) -> ServiceDefinition:
    """
    Parse a markdown service document:

        # Service Name - tagline
        ## Questions
        1. What's your name?
        2. Which platforms? [MULTI_SELECT: Instagram | YouTube]
        ## Required Fields
        - Name
        ## Optional Fields
        - References

    Keys come from the matching field label, else from the prompt wording.
    A question is required when its label is required, or when it shares a tag with a
    required label and is not explicitly optional.
    """
    service_name: str | None = None
    section: str | None = None
    prompts: list[dict[str, Any]] = []
    required_labels: list[str] = []
    optional_labels: list[str] = []

    for line in text.splitlines():
        heading = _HEADING_RE.match(line)
        if heading and service_name is None:
            service_name = heading.group(1).split(" - ")[0].strip()
            continue

        header = _SECTION_RE.match(line)
        if header:
            title = header.group(1).strip().lower()
            if title.startswith("questions"):
                section = "questions"
            elif title.startswith("required fields"):
                section = "required"
            elif title.startswith("optional fields"):
                section = "optional"
            else:
                section = None
            continue

        if section == "questions":
            chips = _CHIPS_RE.search(line)
            numbered = _NUMBERED_RE.match(line)
            if numbered:
                prompt = _clean(_CHIPS_RE.sub("", numbered.group(1)))
                prompts.append({"prompt": prompt, "suggestions": None, "multi_select": False})
            elif chips is None and _clean(line) and prompts:
                prompts[-1]["prompt"] = _clean(f"{prompts[-1]['prompt']} {line}")
            if chips and prompts:
                values = _split_chips(chips.group(2))
                prompts[-1]["suggestions"] = values or None
                prompts[-1]["multi_select"] = chips.group(1).upper() == "MULTI_SELECT"
        elif section in ("required", "optional"):
            bullet = _BULLET_RE.match(line)
            if bullet:
                (required_labels if section == "required" else optional_labels).append(_clean(bullet.group(1)))

    if not prompts:
        raise ServiceCatalogError(f"Service document {slug!r} has no questions")

    required_tags = {tag for label in required_labels for tag in infer_tags_from_label(label)}
    used_keys: set[str] = set()
    configs: list[dict[str, Any]] = []
    for index, entry in enumerate(prompts):
        prompt = entry["prompt"] or f"Question {index + 1}"
        required_label = match_label_to_question(required_labels, prompt)
        optional_label = match_label_to_question(optional_labels, prompt)
        label = required_label or optional_label
        key = slugify(label) if label else infer_key_from_prompt(prompt)
        if key in used_keys:
            counter = 2
            while f"{key}_{counter}" in used_keys:
                counter += 1
            key = f"{key}_{counter}"
        used_keys.add(key)

        tags = infer_tags_from_prompt(prompt) | infer_tags_from_key(key)
        required = bool(required_label) or (bool(tags & required_tags) and not optional_label)
        expected_type = infer_expected_type(prompt, tags, entry["suggestions"], entry["multi_select"])
        suggestions = tuple(entry["suggestions"]) if entry["suggestions"] else None
        configs.append(
            {
                "key": key,
                "templates": [prompt],
                "suggestions": entry["suggestions"],
                "multi_select": entry["multi_select"],
                "tags": sorted(tags),
                "required": required,
                "expected_type": expected_type.value,
                "examples": list(infer_examples(expected_type, suggestions)),
            }
        )

    name = service_name or slug
    return ServiceDefinition(
        service_key=normalize_service_key(name),
        display_name=name,
        questions=build_question_list(configs, include_brief=False),
        source="catalog",
        required_labels=tuple(required_labels),
        optional_labels=tuple(optional_labels),
    )


def parse_service_file(path: Path) -> ServiceDefinition:
    with open(path, "r", encoding="utf-8") as f:
        return parse_service_document(f.read(), path.stem)


class ServiceCatalogStore(QuestionSourcePort):
    """Markdown service documents from a directory; re-parsed only when a file changes."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._lock = threading.Lock()
        self._signature: tuple[tuple[str, int], ...] | None = None
        self._catalog: Mapping[str, ServiceDefinition] = MappingProxyType({})
        self._logger = logging.getLogger(__name__)

    def _signature_of(self, files: list[Path]) -> tuple[tuple[str, int], ...]:
        return tuple((path.name, path.stat().st_mtime_ns) for path in files)

    def catalog(self) -> Mapping[str, ServiceDefinition]:
        if not self._directory.is_dir():
            return MappingProxyType({})

        files = sorted(self._directory.glob("*.md"))
        signature = self._signature_of(files)
        with self._lock:
            if self._signature == signature:
                return self._catalog

            catalog: dict[str, ServiceDefinition] = {}
            for path in files:
                try:
                    definition = parse_service_file(path)
                except (OSError, ServiceCatalogError) as exc:
                    self._logger.warning(
                        "Skipping service document",
                        extra={"path": str(path), "error": str(exc)},
                    )
                    continue
                catalog.setdefault(normalize_service_key(definition.display_name), definition)
                catalog.setdefault(normalize_service_key(path.stem), definition)

            self._catalog = MappingProxyType(catalog)
            self._signature = signature
            self._logger.info(
                "Service catalog loaded",
                extra={"directory": str(self._directory), "documents": len(files)},
            )
            return self._catalog

    def get_definition(self, service: str) -> ServiceDefinition | None:
        key = normalize_service_key(service)
        if not key:
            return None
        return self.catalog().get(key)

    def list_services(self) -> list[str]:
        seen: list[str] = []
        for definition in self.catalog().values():
            if definition.display_name not in seen:
                seen.append(definition.display_name)
        return seen
