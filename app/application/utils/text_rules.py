from __future__ import annotations

import re
import unicodedata

CURRENCY_CUE = r"(?:₹|\$|€|£|\b(?:inr|rs|rupees?|usd|dollars?|eur|euros?|gbp|pounds?)\b)"
AMOUNT_SUFFIX = r"(?:k|l|lakhs?|lacs?|cr|crores?|mn|m|million|thousand)"
DURATION_UNIT = r"(?:days?|weeks?|wks?|months?|mos?|years?|yrs?)"

NUMBER_WORDS = {
    "a": 1,
    "an": 1,
    "one": 1,
    "two": 2,
    "couple": 2,
    "three": 3,
    "few": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
}
NUMBER_WORD_PATTERN = r"(?:" + "|".join(sorted(NUMBER_WORDS, key=len, reverse=True)) + r")"

SKIP_PHRASES = ("skip", "done", "na", "n/a")

TAG_KEYWORDS = {
    "budget": r"\b(?:budget|cost|price|pricing|spend|investment)\b",
    "timeline": r"\b(?:timeline|deadline|duration|delivery\s+date|go\s*live|launch\s+date)\b",
    "name": r"\bmy\s+name\b|\bname\s*(?:is|:)|\bcall\s+me\b",
    "company": r"\b(?:company|business|brand|project)\s*(?:name\s*)?(?:is|:|called|named)\b",
    "location": r"\b(?:based|located)\s+(?:in|at|out\s+of)\b",
    "audience": r"\b(?:audience|target\s+users?|customers\s+are)\b",
    "goal": r"\b(?:goal|objective|purpose)\b",
}


def normalize_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def collapse_whitespace(value: str) -> str:
    return re.sub(r"\s+", " ", value or "").strip()


def strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def canonicalize(value: object) -> str:
    """Case-fold, accent-normalize and drop everything that is not a letter or digit."""
    text = strip_accents(normalize_text(value)).lower()
    return re.sub(r"[^a-z0-9]", "", text)


def strip_markdown(value: object) -> str:
    text = normalize_text(value)
    if not text:
        return text
    text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)
    text = re.sub(r"[*`~]", "", text)
    text = re.sub(r"_{1,2}", "", text)
    return collapse_whitespace(text)


def is_greeting_message(value: object) -> bool:
    """True only when the message is basically just a greeting ("hi", "hello there")."""
    raw = normalize_text(value)
    if not raw:
        return False
    text = re.sub(r"[^a-z0-9'\s]", " ", raw.lower())
    text = re.sub(r"\s+", " ", text).strip()
    if len(text) > 20:
        return False
    compact = text.replace(" ", "")
    if re.fullmatch(r"(hi|hey|yo|sup|hii+|hola|namaste)(there|all|team)?", compact):
        return True
    if re.fullmatch(r"(what'?sup|whatsup)(there)?", compact):
        return True
    if re.fullmatch(r"(hell+o+w*|helo+|hlo+|hlw+)(there|all|team)?", compact):
        return True
    if re.fullmatch(r"good(morning|afternoon|evening)", compact):
        return True
    return False


def is_skip_message(value: object) -> bool:
    text = normalize_text(value).lower().strip(" .!")
    if text in SKIP_PHRASES:
        return True
    return re.search(r"\bskip", text) is not None


def is_bare_budget_answer(value: object) -> bool:
    text = normalize_text(value).replace("?", "").strip().lower()
    if not text:
        return False
    if text in ("flexible", "not sure", "not sure yet"):
        return True
    pattern = (
        r"(?:(?:under|below|upto|up\s+to|less\s+than|above|over|around|about)\s+)?"
        + CURRENCY_CUE
        + r"?\s*\d[\d,]*(?:\.\d+)?\s*"
        + AMOUNT_SUFFIX
        + r"?\s*(?:\+|/-)?\s*(?:"
        + CURRENCY_CUE
        + r")?"
    )
    return re.fullmatch(pattern, text) is not None


def is_bare_timeline_answer(value: object) -> bool:
    text = re.sub(r"[?？؟]", "", normalize_text(value)).strip().lower()
    if not text:
        return False
    if text in ("flexible", "ongoing"):
        return True
    if re.fullmatch(r"asap|urgent|immediately|this week|next week|next month", text):
        return True
    if re.fullmatch(r"\d+\s*(?:-|–|to)\s*\d+\s*" + DURATION_UNIT, text):
        return True
    if re.fullmatch(r"\d+(?:\.\d+)?\s*" + DURATION_UNIT, text):
        return True
    return re.fullmatch(NUMBER_WORD_PATTERN + r"\s+" + DURATION_UNIT, text) is not None


_QUESTION_MARK = re.compile(r"[?？؟](?![^\W_])")


def is_user_question(value: object) -> bool:
    """
    Treat a message as a question only when it carries question-mark punctuation.
    Bare budget/timeline figures typed with a trailing "?" still count as answers.
    """
    text = normalize_text(value)
    if not text or not _QUESTION_MARK.search(text):
        return False
    without_marks = _QUESTION_MARK.sub("", text)
    if is_bare_budget_answer(without_marks) or is_bare_timeline_answer(without_marks):
        return False
    return True


def looks_like_project_brief(value: object) -> bool:
    text = normalize_text(value)
    if not text:
        return False

    lower = text.lower()
    is_long = len(text) >= 140
    has_multiple_sentences = len(re.findall(r"[.!?\n]", text)) >= 2

    signals = 0
    if re.search(r"\bbudget\b", lower) or re.search(CURRENCY_CUE, lower):
        signals += 1
    if re.search(r"\btimeline\b|\bdeadline\b", lower) or re.search(r"\b\d+\s*" + DURATION_UNIT + r"\b", lower):
        signals += 1
    if re.search(
        r"\btech\s*stack\b|\bstack\b|\breact\b|\bnext\b|\bnode\b|\bexpress\b|\bwordpress\b|\bshopify\b"
        r"|\blaravel\b|\bdjango\b|\bmongodb\b|\bpostgres\b|\bmysql\b|\bprisma\b",
        lower,
    ):
        signals += 1
    if re.search(r"\b(i\s+want|i\s+need|looking\s+to|build|create|develop|from\s+scratch)\b", lower):
        signals += 1
    if re.search(r"\b(features?|requirements?|must-?have|include|pages?)\b", lower):
        signals += 1
    if re.search(
        r"\b(website|web\s*app|app|platform|store|shop|marketplace|landing\s*page|portfolio|saas|e-?\s*commerce|ecommerce)\b",
        lower,
    ):
        signals += 1
    if re.search(r"\b(?:users?|customers?|visitors?|people|clients?)\b", lower) and re.search(
        r"\b(?:can|should|able\s+to|must|need\s+to)\b", lower
    ):
        signals += 1

    if is_long or has_multiple_sentences:
        return signals >= 2
    return signals >= 3


def strip_trailing_question_sentence(value: object) -> str:
    """Drop a trailing question sentence from a brief ("... Can you do it?")."""
    text = normalize_text(value)
    matches = list(re.finditer(r"\?(?![a-z0-9])", text, flags=re.IGNORECASE))
    if not matches:
        return text
    before = text[: matches[-1].start()]
    boundary = max(before.rfind("."), before.rfind("!"), before.rfind("\n"))
    if boundary < 0:
        return text
    head = text[: boundary + 1].strip()
    return head or text


def has_tag_keyword(text: str, tag: str) -> bool:
    pattern = TAG_KEYWORDS.get(tag)
    if not pattern:
        return False
    return re.search(pattern, text or "", flags=re.IGNORECASE) is not None


def has_budget_cue(text: str) -> bool:
    return has_tag_keyword(text, "budget") or re.search(CURRENCY_CUE, (text or "").lower()) is not None


_DURATION_EXPRESSION = re.compile(
    r"\b(?:\d+(?:\.\d+)?|(?:one|two|three|four|five|six|seven|eight|nine|ten|eleven|twelve|couple|few))"
    r"\s*(?:(?:-|–|to)\s*\d+(?:\.\d+)?\s*)?(?:of\s+)?"
    + DURATION_UNIT
    + r"\b",
    re.IGNORECASE,
)


def strip_duration_expressions(text: str) -> str:
    """Blank out "2-3 weeks" / "two months" so amount parsing does not pick them up."""
    return _DURATION_EXPRESSION.sub(" ", text or "")


