from __future__ import annotations

import re
from typing import Iterable

from app.application.utils.text_rules import canonicalize, normalize_text

SUGGESTION_ALIASES = (
    (r"\becom(?:m)?\b", "ecommerce"),
    (r"\be-?\s*commerce\b", "ecommerce"),
    (r"\bwish\s*list\b", "wishlist"),
    (r"\breview\b", "reviews"),
    (r"\brating\b", "ratings"),
    (r"\bwhats\s*app\b", "whatsapp"),
    (r"\bwp\b", "wordpress"),
)


def normalize_for_suggestion_matching(value: str) -> str:
    text = normalize_text(value).lower()
    for pattern, replacement in SUGGESTION_ALIASES:
        text = re.sub(pattern, replacement, text)
    return text


def suggestion_aliases(value: str) -> list[str]:
    """
    Alternate spellings for a chip label:
    "Payment Gateway (Razorpay/Stripe)" -> also "Payment Gateway", "Razorpay", "Stripe".
    """
    text = normalize_text(value)
    if not text:
        return []

    aliases = [text]

    def add(alias: str) -> None:
        alias = normalize_text(alias)
        if alias and alias not in aliases:
            aliases.append(alias)

    add(re.sub(r"\s+", " ", re.sub(r"\s*\([^)]*\)\s*", " ", text)))

    for inside in re.findall(r"\(([^)]+)\)", text):
        if re.search(r"[\\/|,]", inside):
            for part in re.split(r"[\\/|,]", inside):
                add(part)

    for part in re.split(r"[\\/|]", text):
        add(part)

    if text.lower().endswith(" yet"):
        add(text[:-4])

    for alias in list(aliases):
        without_js = re.sub(r"\s+", " ", re.sub(r"\.?\bjs\b", "", alias, flags=re.IGNORECASE)).strip()
        if without_js and without_js != alias and len(without_js) >= 5:
            add(without_js)

    return aliases


def _message_tokens(message_lower: str) -> set[str]:
    tokens = [canonicalize(token) for token in re.findall(r"[a-z0-9]+", message_lower)]
    tokens = [token for token in tokens if token]
    token_set = set(tokens)
    for first, second in zip(tokens, tokens[1:]):
        token_set.add(first + second)
    return token_set


def match_suggestions_in_message(suggestions: Iterable[str] | None, raw_message: str) -> list[str]:
    """
    Chip labels mentioned anywhere in a free-text message.
    Single-word labels need a whole-token hit; phrases may match by canonical containment.
    When one match is contained in a longer one, only the longer one is kept.
    """
    message = normalize_text(raw_message)
    if not message or not suggestions:
        return []

    message_lower = normalize_for_suggestion_matching(message)
    message_canon = canonicalize(message_lower)
    token_set = _message_tokens(message_lower)

    matches: list[str] = []
    for option in suggestions:
        option_text = normalize_text(option)
        if not option_text:
            continue

        is_match = False
        if re.search(r"[+&]", option_text):
            parts = [normalize_text(re.sub(r"\([^)]*\)", "", part)) for part in re.split(r"[+&]", option_text)]
            part_canons = [canonicalize(part) for part in parts if part]
            part_canons = [canon for canon in part_canons if len(canon) >= 3]
            if len(part_canons) >= 2 and all(canon in token_set or canon in message_canon for canon in part_canons):
                is_match = True

        if not is_match:
            for alias in suggestion_aliases(option_text):
                alias_lower = normalize_for_suggestion_matching(alias)
                alias_canon = canonicalize(alias_lower)
                if not alias_canon:
                    continue
                if " " not in alias_lower:
                    is_match = alias_canon in token_set
                else:
                    is_match = alias_canon in message_canon or alias_lower in message_lower
                if is_match:
                    break

        if is_match and option_text not in matches:
            matches.append(option_text)

    if len(matches) <= 1:
        return matches

    ranked = sorted(matches, key=lambda option: len(canonicalize(option)), reverse=True)
    kept: list[str] = []
    for option in ranked:
        canon = canonicalize(option)
        if not canon or len(canon) <= 3:
            kept.append(option)
            continue
        if any(len(canonicalize(other)) > len(canon) and canon in canonicalize(other) for other in kept):
            continue
        kept.append(option)
    return [option for option in matches if option in kept]


def match_exact_selections(suggestions: Iterable[str] | None, raw_message: str) -> list[str]:
    """Chip picks sent back verbatim ("Blog, FAQ"); every comma-separated part must be a known option."""
    message = normalize_text(raw_message)
    if not message or not suggestions or len(message) > 180:
        return []

    by_canon = {}
    for option in suggestions:
        canon = canonicalize(option)
        if canon:
            by_canon[canon] = option

    # labels like "₹1,00,000 - ₹4,00,000" contain commas themselves
    whole = by_canon.get(canonicalize(message))
    if whole is not None:
        return [whole]

    parts = [normalize_text(part) for part in re.split(r"[,|]", message)]
    parts = [part for part in parts if part]
    if not parts:
        return []

    picked: list[str] = []
    for part in parts:
        option = by_canon.get(canonicalize(part))
        if option is None:
            return []
        if option not in picked:
            picked.append(option)

    if any(canonicalize(option) == "none" for option in picked):
        return [next(option for option in picked if canonicalize(option) == "none")]
    return picked


def find_other_option(suggestions: Iterable[str] | None) -> str | None:
    for option in suggestions or ():
        if canonicalize(option) in ("other", "others", "somethingelse"):
            return option
    return None
