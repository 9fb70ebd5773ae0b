from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Money:
    min: float | None = None
    max: float | None = None
    currency: str = "INR"
    period: str | None = None  # "month", "year", "week" or None for one-time
    flexible: bool = False
    label: str | None = None  # user wording for flexible budgets ("Not sure yet")

    @property
    def upper_bound(self) -> float | None:
        if self.flexible:
            return None
        return self.max


@dataclass(frozen=True)
class Duration:
    value: float | None = None
    min: float | None = None
    max: float | None = None
    unit: str | None = None  # "days", "weeks", "months", "years"
    flexible: bool = False
    label: str | None = None
    kind: str | None = None  # "date", "asap" or None for numeric

    @property
    def is_range(self) -> bool:
        return self.min is not None and self.max is not None


@dataclass(frozen=True)
class NumberRange:
    min: float | None = None
    max: float | None = None


@dataclass(frozen=True)
class NormalizeResult:
    status: str  # "ok", "ambiguous", "invalid"
    normalized: Any = None
    confidence: float = 0.0
    options: tuple[str, ...] = ()
    error: str | None = None

    @staticmethod
    def ok(normalized: Any, confidence: float = 1.0) -> "NormalizeResult":
        return NormalizeResult(status="ok", normalized=normalized, confidence=confidence)

    @staticmethod
    def ambiguous(options: list[str] | tuple[str, ...], confidence: float = 0.4) -> "NormalizeResult":
        return NormalizeResult(status="ambiguous", options=tuple(options), confidence=confidence)

    @staticmethod
    def invalid(error: str) -> "NormalizeResult":
        return NormalizeResult(status="invalid", error=error)

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"
