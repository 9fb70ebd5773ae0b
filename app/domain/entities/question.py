from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class ExpectedType(str, Enum):
    money = "money"
    duration = "duration"
    enum = "enum"
    list = "list"
    number_range = "number_range"
    text = "text"


@dataclass(frozen=True)
class Question:
    key: str
    id: str
    templates: tuple[str, ...] = ()
    templates_by_locale: Mapping[str, tuple[str, ...]] | None = None
    patterns: tuple[str, ...] = ()
    suggestions: tuple[str, ...] | None = None
    multi_select: bool = False
    max_select: int | None = None
    expected_type: ExpectedType = ExpectedType.text
    required: bool = True
    tags: frozenset[str] = field(default_factory=frozenset)
    next_id: str | None = None
    start: bool = False
    examples: tuple[str, ...] = ()

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def templates_for(self, locale: str = "en") -> tuple[str, ...]:
        """Resolve prompt templates for a locale, falling back to English and then the plain list."""
        if self.templates_by_locale:
            locale_key = (locale or "en").strip()
            candidates = [locale_key, locale_key.lower(), locale_key.replace("_", "-")]
            if "-" in locale_key:
                base = locale_key.split("-")[0]
                candidates.extend([base, base.lower()])
            candidates.extend(["en", "en-us", "en-gb"])
            for candidate in candidates:
                value = self.templates_by_locale.get(candidate)
                if value:
                    return tuple(value)
        return self.templates
