from __future__ import annotations

import math
import re
from typing import Callable

from app.application.utils.entity_extraction import (
    extract_company_answer,
    extract_name,
)
from app.application.utils.suggestion_matching import (
    find_other_option,
    match_exact_selections,
    match_suggestions_in_message,
)
from app.application.utils.text_rules import (
    NUMBER_WORDS,
    is_bare_budget_answer,
    is_bare_timeline_answer,
    is_greeting_message,
    is_user_question,
    normalize_text,
    strip_duration_expressions,
    strip_markdown,
    strip_trailing_question_sentence,
)
from app.domain.entities.conversation_state import EngineOptions
from app.domain.entities.question import ExpectedType, Question
from app.domain.entities.values import Duration, Money, NormalizeResult, NumberRange

# A normalizer may return None when it declines to judge the message at all
# (for example a bare budget figure sent while a free-text question is active).
Normalizer = Callable[[str, Question, EngineOptions], "NormalizeResult | None"]

CURRENCY_PATTERNS = (
    (r"₹|\binr\b|\brs\b|\brupees?\b", "INR"),
    (r"\$|\busd\b|\bdollars?\b", "USD"),
    (r"€|\beur\b|\beuros?\b", "EUR"),
    (r"£|\bgbp\b|\bpounds?\b", "GBP"),
)

AMOUNT_MULTIPLIERS = {
    "k": 1_000,
    "thousand": 1_000,
    "l": 100_000,
    "lakh": 100_000,
    "lakhs": 100_000,
    "lac": 100_000,
    "lacs": 100_000,
    "cr": 10_000_000,
    "crore": 10_000_000,
    "crores": 10_000_000,
    "m": 1_000_000,
    "mn": 1_000_000,
    "million": 1_000_000,
}

_AMOUNT = r"\d[\d,]*(?:\.\d+)?\s*(?:k|thousand|lakhs?|lacs?|l|crores?|cr|million|mn|m)?\b"
_CURRENCY = r"(?:₹|\$|€|£|\b(?:inr|rs|rupees?|usd|dollars?|eur|euros?|gbp|pounds?)\b\.?)"
_AMOUNT_RE = re.compile(r"(?P<num>\d[\d,]*(?:\.\d+)?)\s*(?P<suffix>k|thousand|lakhs?|lacs?|l|crores?|cr|million|mn|m)?\b")
_RANGE_RE = re.compile(
    r"(?P<low>" + _AMOUNT + r")\s*" + _CURRENCY + r"?\s*(?:-|–|to)\s*" + _CURRENCY + r"?\s*(?P<high>" + _AMOUNT + r")"
)
_BETWEEN_RE = re.compile(
    r"\bbetween\s+"
    + _CURRENCY
    + r"?\s*(?P<low>"
    + _AMOUNT
    + r")\s*"
    + _CURRENCY
    + r"?\s*and\s+"
    + _CURRENCY
    + r"?\s*(?P<high>"
    + _AMOUNT
    + r")"
)
_UPPER_RE = re.compile(
    r"\b(?:under|below|upto|up\s+to|less\s+than|max(?:imum)?|within|not\s+more\s+than)\s+"
    + _CURRENCY
    + r"?\s*(?P<amount>"
    + _AMOUNT
    + r")"
)
_LOWER_RE = re.compile(
    r"\b(?:above|over|more\s+than|at\s+least|min(?:imum)?|starting\s+(?:at|from))\s+"
    + _CURRENCY
    + r"?\s*(?P<amount>"
    + _AMOUNT
    + r")"
)
_PLUS_RE = re.compile(r"(?P<amount>" + _AMOUNT + r")\s*" + _CURRENCY + r"?\s*\+")

_FLEXIBLE_MONEY_RE = re.compile(
    r"^(?:flexible|negotiable|open|not\s+sure(?:\s+yet)?|no\s+idea|don'?t\s+know|tbd|custom\s+amount)$",
    re.IGNORECASE,
)

_UNIT_ALIASES = {
    "day": "days",
    "days": "days",
    "week": "weeks",
    "weeks": "weeks",
    "wk": "weeks",
    "wks": "weeks",
    "month": "months",
    "months": "months",
    "mo": "months",
    "mos": "months",
    "year": "years",
    "years": "years",
    "yr": "years",
    "yrs": "years",
}
_UNIT = r"(?P<unit>days?|weeks?|wks?|months?|mos?|years?|yrs?)"
_NUMBER_WORD = r"(?:" + "|".join(sorted(NUMBER_WORDS, key=len, reverse=True)) + r")"
_DURATION_RANGE_RE = re.compile(
    r"\b(?P<low>\d+(?:\.\d+)?)\s*(?:-|–|to)\s*(?P<high>\d+(?:\.\d+)?)\s*" + _UNIT + r"\b", re.IGNORECASE
)
_DURATION_SINGLE_RE = re.compile(r"\b(?P<value>\d+(?:\.\d+)?)\s*" + _UNIT + r"\b", re.IGNORECASE)
_DURATION_WORD_RE = re.compile(r"\b(?P<word>" + _NUMBER_WORD + r")\s+(?:of\s+)?" + _UNIT + r"\b", re.IGNORECASE)
_FLEXIBLE_DURATION_RE = re.compile(
    r"^(?:flexible|ongoing|open|no\s+rush|not\s+sure(?:\s+yet)?|no\s+deadline|whenever)$", re.IGNORECASE
)
_ASAP_RE = re.compile(r"\b(?:asap|urgent(?:ly)?|immediately|right\s+away|as\s+soon\s+as\s+possible)\b", re.IGNORECASE)
_CALENDAR_RE = re.compile(
    r"\b(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|jun(?:e)?|jul(?:y)?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\b"
    r"|\b(?:this|next)\s+(?:week|month|quarter|year)\b|\bend\s+of\b|\bby\s+(?:the\s+)?\w+|\bq[1-4]\b",
    re.IGNORECASE,
)

MAX_BARE_DURATION = 52
# Anything longer is noise, and float() turns very long digit runs into inf
MAX_AMOUNT_DIGITS = 15

_BARE_DURATION_RE = re.compile(
    r"(?:(?:in|about|around|roughly|approx(?:imately)?|maybe|within|say)\s+)*"
    r"(?P<low>\d+(?:\.\d+)?)(?:\s*(?:-|–|to)\s*(?P<high>\d+(?:\.\d+)?))?",
    re.IGNORECASE,
)


def _bounded(number: float) -> float | None:
    if not math.isfinite(number) or abs(number) >= 10**MAX_AMOUNT_DIGITS:
        return None
    return number


def detect_currency(text: str, default: str) -> str:
    lower = text.lower()
    for pattern, code in CURRENCY_PATTERNS:
        if re.search(pattern, lower):
            return code
    return default


def detect_period(text: str) -> str | None:
    lower = text.lower()
    if re.search(r"\b(?:per|a|each|every)\s+month\b|/\s*(?:month|mo)\b|\bmonthly\b|\bp\.?m\.?\b", lower):
        return "month"
    if re.search(r"\b(?:per|a|each|every)\s+year\b|/\s*(?:year|yr)\b|\bannual(?:ly)?\b|\byearly\b|\bp\.?a\.?\b", lower):
        return "year"
    if re.search(r"\b(?:per|a|each|every)\s+week\b|/\s*(?:week|wk)\b|\bweekly\b", lower):
        return "week"
    return None


def parse_amount(token: str) -> float | None:
    match = _AMOUNT_RE.search(token.lower())
    if not match:
        return None
    try:
        number = float(match.group("num").replace(",", ""))
    except ValueError:
        return None
    suffix = match.group("suffix")
    if suffix:
        number *= AMOUNT_MULTIPLIERS[suffix]
    return _bounded(number)


def _strip_period_phrases(text: str) -> str:
    return re.sub(
        r"\b(?:per|a|each|every)\s+(?:month|year|week)\b|/\s*(?:month|mo|year|yr|week|wk)\b|\b(?:monthly|annually|yearly|weekly)\b",
        " ",
        text,
        flags=re.IGNORECASE,
    )


def normalize_money(raw: str, question: Question, options: EngineOptions) -> NormalizeResult | None:
    text = strip_markdown(raw).replace("?", "").strip()
    if not text:
        return NormalizeResult.invalid("empty")
    currency = detect_currency(text, options.default_currency)
    if _FLEXIBLE_MONEY_RE.match(text):
        return NormalizeResult.ok(Money(currency=currency, flexible=True, label=text), confidence=0.9)

    # "50k" answering "What is your ad budget per month?" is a monthly figure
    period = detect_period(text) or (detect_period(" ".join(question.templates)) if question else None)
    working = strip_duration_expressions(_strip_period_phrases(text)).lower()
    has_cue = currency != options.default_currency or re.search(_CURRENCY, working) is not None
    confidence = 0.95 if has_cue or is_bare_budget_answer(text) else 0.75

    match = _BETWEEN_RE.search(working) or _RANGE_RE.search(working)
    if match:
        low = parse_amount(match.group("low"))
        high = parse_amount(match.group("high"))
        if low is None or high is None:
            return NormalizeResult.invalid("money_format")
        if high > 0:
            # "50-80k" shares the trailing suffix
            low_suffix = _AMOUNT_RE.search(match.group("low")).group("suffix")
            high_suffix = _AMOUNT_RE.search(match.group("high")).group("suffix")
            if high_suffix and not low_suffix and low < high / AMOUNT_MULTIPLIERS[high_suffix] * 10:
                low *= AMOUNT_MULTIPLIERS[high_suffix]
            return NormalizeResult.ok(
                Money(min=min(low, high), max=max(low, high), currency=currency, period=period), confidence
            )

    match = _UPPER_RE.search(working)
    if match:
        amount = parse_amount(match.group("amount"))
        if amount:
            return NormalizeResult.ok(Money(min=None, max=amount, currency=currency, period=period), confidence)

    match = _LOWER_RE.search(working) or _PLUS_RE.search(working)
    if match:
        amount = parse_amount(match.group("amount"))
        if amount:
            return NormalizeResult.ok(Money(min=amount, max=None, currency=currency, period=period), confidence)

    amount = parse_amount(working)
    if amount:
        return NormalizeResult.ok(Money(min=amount, max=amount, currency=currency, period=period), confidence)
    return NormalizeResult.invalid("money_format")


def _unit(value: str) -> str:
    return _UNIT_ALIASES.get(value.lower(), value.lower())


def _number(value: str) -> float | None:
    number = _bounded(float(value))
    if number is None:
        return None
    return int(number) if number.is_integer() else number


def _unit_label(value: float, unit: str) -> str:
    if value == 1:
        return f"1 {unit[:-1]}"
    return f"{format_number(value)} {unit}"


def _bare_duration(text: str, options: EngineOptions) -> NormalizeResult | None:
    """Unit-less answers such as 3, 3-4 or "in about 3"; None when the text is something else."""
    match = _BARE_DURATION_RE.fullmatch(text)
    if not match:
        return None
    low = _number(match.group("low"))
    high = _number(match.group("high")) if match.group("high") else low
    if low is None or high is None:
        return NormalizeResult.invalid("duration_format")
    low, high = min(low, high), max(low, high)
    if low <= 0 or high > MAX_BARE_DURATION:
        return NormalizeResult.invalid("duration_format")
    if low == high:
        return NormalizeResult.ambiguous([_unit_label(low, unit) for unit in options.duration_units])
    return NormalizeResult.ambiguous(
        [f"{format_number(low)}-{format_number(high)} {unit}" for unit in options.duration_units]
    )


def normalize_duration(raw: str, question: Question, options: EngineOptions) -> NormalizeResult | None:
    text = re.sub(r"[?？؟]", "", strip_markdown(raw)).strip()
    if not text:
        return NormalizeResult.invalid("empty")
    if _FLEXIBLE_DURATION_RE.match(text):
        return NormalizeResult.ok(Duration(flexible=True, label=text), confidence=0.9)

    match = _DURATION_RANGE_RE.search(text)
    if match:
        low, high = _number(match.group("low")), _number(match.group("high"))
        if low is None or high is None:
            return NormalizeResult.invalid("duration_format")
        return NormalizeResult.ok(
            Duration(min=min(low, high), max=max(low, high), unit=_unit(match.group("unit"))), confidence=0.95
        )

    match = _DURATION_SINGLE_RE.search(text)
    if match:
        value = _number(match.group("value"))
        if value is None:
            return NormalizeResult.invalid("duration_format")
        return NormalizeResult.ok(Duration(value=value, unit=_unit(match.group("unit"))), confidence=0.95)

    match = _DURATION_WORD_RE.search(text)
    if match:
        value = NUMBER_WORDS[match.group("word").lower()]
        return NormalizeResult.ok(Duration(value=value, unit=_unit(match.group("unit"))), confidence=0.85)

    if _ASAP_RE.search(text):
        return NormalizeResult.ok(Duration(label=text, kind="asap"), confidence=0.8)

    bare = _bare_duration(text, options)
    if bare is not None:
        return bare

    if _CALENDAR_RE.search(text):
        return NormalizeResult.ok(Duration(label=text, kind="date"), confidence=0.7)
    return NormalizeResult.invalid("duration_format")


def _limit(question: Question, picks: list[str]) -> list[str]:
    if question.max_select and question.max_select > 0:
        return picks[: question.max_select]
    return picks


def _selection_result(question: Question, picks: list[str], confidence: float) -> NormalizeResult:
    if question.expected_type == ExpectedType.list or question.multi_select:
        return NormalizeResult.ok(tuple(_limit(question, picks)), confidence)
    return NormalizeResult.ok(picks[0], confidence)


def normalize_choice(raw: str, question: Question, options: EngineOptions) -> NormalizeResult | None:
    text = strip_markdown(raw)
    if not text:
        return NormalizeResult.invalid("empty")
    if is_greeting_message(text):
        return NormalizeResult.invalid("greeting_only")
    if not question.suggestions:
        return normalize_text_answer(raw, question, options)

    exact = match_exact_selections(question.suggestions, text)
    if exact:
        return _selection_result(question, exact, 1.0)

    matches = match_suggestions_in_message(question.suggestions, text)
    if matches:
        return _selection_result(question, matches, 0.8)

    other = find_other_option(question.suggestions)
    if other and len(text) <= 120 and not is_user_question(text):
        return _selection_result(question, [f"{other}: {text}"], 0.6)
    return NormalizeResult.invalid("enum_mismatch")


_NUMBER_RANGE_RE = re.compile(r"(?P<low>\d[\d,]*(?:\.\d+)?\s*k?)\s*(?:-|–|to)\s*(?P<high>\d[\d,]*(?:\.\d+)?\s*k?)", re.IGNORECASE)


def normalize_number_range(raw: str, question: Question, options: EngineOptions) -> NormalizeResult | None:
    text = strip_markdown(raw).replace("?", "").strip().lower()
    if not text:
        return NormalizeResult.invalid("empty")
    match = _NUMBER_RANGE_RE.search(text)
    if match:
        low, high = parse_amount(match.group("low")), parse_amount(match.group("high"))
        if low is None or high is None:
            return NormalizeResult.invalid("number_format")
        return NormalizeResult.ok(NumberRange(min=min(low, high), max=max(low, high)), confidence=0.95)
    match = re.search(r"(\d[\d,]*(?:\.\d+)?\s*k?)\s*\+", text) or re.search(
        r"\b(?:above|over|more\s+than|at\s+least)\s+(\d[\d,]*(?:\.\d+)?\s*k?)", text
    )
    if match:
        value = parse_amount(match.group(1))
        if value is None:
            return NormalizeResult.invalid("number_format")
        return NormalizeResult.ok(NumberRange(min=value), confidence=0.9)
    match = re.search(r"\b(?:under|below|upto|up\s+to|less\s+than)\s+(\d[\d,]*(?:\.\d+)?\s*k?)", text)
    if match:
        value = parse_amount(match.group(1))
        if value is None:
            return NormalizeResult.invalid("number_format")
        return NormalizeResult.ok(NumberRange(max=value), confidence=0.9)
    match = re.search(r"\d[\d,]*(?:\.\d+)?\s*k?", text)
    if match:
        value = parse_amount(match.group(0))
        if value is not None:
            return NormalizeResult.ok(NumberRange(min=value, max=value), confidence=0.85)
    return NormalizeResult.invalid("number_format")


def normalize_text_answer(raw: str, question: Question, options: EngineOptions) -> NormalizeResult | None:
    text = strip_markdown(raw)
    if not text:
        return NormalizeResult.invalid("empty")
    if is_greeting_message(text):
        return NormalizeResult.invalid("greeting_only")

    if question.has_tag("name"):
        name = extract_name(text)
        return NormalizeResult.ok(name, confidence=0.9) if name else None
    if question.has_tag("company"):
        if is_bare_budget_answer(text) or is_bare_timeline_answer(text):
            return None
        company = extract_company_answer(text)
        return NormalizeResult.ok(company, confidence=0.8) if company else None

    if is_bare_budget_answer(text) or is_bare_timeline_answer(text):
        return None
    if is_user_question(text):
        head = strip_trailing_question_sentence(text)
        if head == text or is_user_question(head):
            return None
        text = head
    return NormalizeResult.ok(normalize_text(text), confidence=0.9 if len(text) >= 3 else 0.5)


NORMALIZERS: dict[ExpectedType, Normalizer] = {
    ExpectedType.money: normalize_money,
    ExpectedType.duration: normalize_duration,
    ExpectedType.enum: normalize_choice,
    ExpectedType.list: normalize_choice,
    ExpectedType.number_range: normalize_number_range,
    ExpectedType.text: normalize_text_answer,
}


def normalize_answer(raw: str, question: Question, options: EngineOptions | None = None) -> NormalizeResult | None:
    normalizer = NORMALIZERS.get(question.expected_type, normalize_text_answer)
    return normalizer(raw, question, options or EngineOptions())


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def group_digits(amount: float, currency: str = "INR") -> str:
    """Thousands grouping; INR uses the lakh/crore layout (1,00,000)."""
    whole = int(round(amount))
    sign = "-" if whole < 0 else ""
    digits = str(abs(whole))
    if currency != "INR" or len(digits) <= 3:
        return f"{sign}{abs(whole):,}"
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail])


def format_amount(amount: float, currency: str = "INR") -> str:
    return f"{currency} {group_digits(amount, currency)}"


def format_inr(amount: float) -> str:
    return f"₹{group_digits(amount, 'INR')}"


def format_money(money: Money) -> str:
    if money.flexible:
        return money.label or "Flexible"
    if money.min is not None and money.max is not None:
        if money.min == money.max:
            text = format_amount(money.min, money.currency)
        else:
            text = f"{format_amount(money.min, money.currency)} - {format_amount(money.max, money.currency)}"
    elif money.max is not None:
        text = f"Under {format_amount(money.max, money.currency)}"
    elif money.min is not None:
        text = f"{format_amount(money.min, money.currency)}+"
    else:
        return money.label or ""
    if money.period:
        text = f"{text} per {money.period}"
    return text


def format_duration(duration: Duration) -> str:
    if duration.flexible or duration.kind in ("date", "asap"):
        return duration.label or "Flexible"
    if duration.is_range and duration.unit:
        return f"{format_number(duration.min)}-{format_number(duration.max)} {duration.unit}"
    if duration.value is not None and duration.unit:
        return _unit_label(duration.value, duration.unit)
    return duration.label or ""


def format_number_range(value: NumberRange) -> str:
    if value.min is not None and value.max is not None:
        if value.min == value.max:
            return format_number(value.min)
        return f"{format_number(value.min)}-{format_number(value.max)}"
    if value.min is not None:
        return f"{format_number(value.min)}+"
    if value.max is not None:
        return f"Under {format_number(value.max)}"
    return ""


def format_value(value: object) -> str:
    """Display string for any normalized slot value."""
    if isinstance(value, Money):
        return format_money(value)
    if isinstance(value, Duration):
        return format_duration(value)
    if isinstance(value, NumberRange):
        return format_number_range(value)
    if isinstance(value, (tuple, list)):
        return ", ".join(str(item) for item in value)
    if value is None:
        return ""
    return str(value)


def duration_in_weeks(duration: Duration | None) -> float | None:
    """Upper-bound length in weeks; None for flexible, calendar and ASAP answers."""
    if duration is None or duration.flexible or duration.kind or not duration.unit:
        return None
    amount = duration.max if duration.is_range else duration.value
    if amount is None:
        return None
    factor = {"days": 1 / 7, "weeks": 1, "months": 4, "years": 52}.get(duration.unit)
    return amount * factor if factor else None


def duration_in_months(duration: Duration | None) -> float | None:
    weeks = duration_in_weeks(duration)
    return weeks / 4 if weeks is not None else None
