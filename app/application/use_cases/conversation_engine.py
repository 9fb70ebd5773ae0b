from __future__ import annotations

import re
from dataclasses import replace
from typing import Any, Iterable

from app.application.use_cases.website_rules import (
    is_website_flow,
    should_skip_deployment,
    validate_website_budget,
)
from app.application.utils.entity_extraction import (
    extract_budget,
    extract_description_from_mixed_message,
    extract_explicit_name,
    extract_location,
    extract_name_from_assistant,
    extract_organization_name,
    extract_tech_details,
    extract_timeline,
    infer_pages_from_brief,
    is_change_technology_message,
    question_key_from_text,
)
from app.application.utils.normalizers import format_value, normalize_answer
from app.application.utils.suggestion_matching import (
    match_suggestions_in_message,
    normalize_for_suggestion_matching,
)
from app.application.utils.text_rules import (
    canonicalize,
    has_budget_cue,
    has_tag_keyword,
    is_bare_budget_answer,
    is_bare_timeline_answer,
    is_greeting_message,
    is_skip_message,
    is_user_question,
    looks_like_project_brief,
    normalize_text,
    strip_markdown,
    strip_trailing_question_sentence,
)
from app.domain.entities.conversation_state import ConversationState, EngineOptions
from app.domain.entities.message import ChatTurn
from app.domain.entities.question import ExpectedType, Question
from app.domain.entities.service_catalog import ServiceDefinition
from app.domain.entities.slot import Slot, SlotStatus
from app.domain.entities.values import Money, NormalizeResult

SKIPPED_VALUE = "[skipped]"

# Tags with a dedicated extractor, in the order they are tried for a question.
CAPTURE_TAGS = ("budget", "timeline", "name", "company", "location", "description")

LOW_SIGNAL_CHOICES = frozenset({"notsure", "notsureyet", "nopreference"})

_INCREASE_RE = re.compile(r"\b(?:increase|raise|bump\s+up|higher)\b", re.IGNORECASE)
_CONTINUE_RE = re.compile(r"\b(?:continue|keep|proceed|go\s+ahead|current\s+budget|stick\s+with)\b", re.IGNORECASE)
_FLEXIBLE_ONLY_RE = re.compile(r"(?:flexible|ongoing|not\s+sure(?:\s+yet)?)[.!]?", re.IGNORECASE)
_INTENT_VERB_RE = re.compile(r"(?:need|looking|build|create|develop|want|require|make)\b", re.IGNORECASE)
_IS_A_RE = re.compile(r"\b(?:it\s+is|it's|it’s|this\s+is)\b", re.IGNORECASE)
_PROJECT_NOUN_RE = re.compile(
    r"(?:website|web\s*app|app|platform|tool|manager|system|dashboard|store|marketplace|landing\s*page"
    r"|e-?commerce|portfolio|saas|product)\b",
    re.IGNORECASE,
)
_STACK_WORDS_RE = re.compile(r"\b(?:budget|tech|timeline)\b", re.IGNORECASE)
_DEPLOYMENT_CONTEXT_RE = re.compile(r"\b(?:deploy|deployment|host(?:ed|ing)?)\b", re.IGNORECASE)
_LIST_SEPARATORS_RE = re.compile(r"[,|\n]")


def new_state(definition: ServiceDefinition, options: EngineOptions | None = None) -> ConversationState:
    state = ConversationState(
        service=definition.display_name,
        questions=tuple(definition.questions),
        slots={question.key: Slot(key=question.key) for question in definition.questions},
        options=options or EngineOptions(),
    )
    return recompute_state(state)


def build_conversation_state(
    history: Iterable[ChatTurn],
    definition: ServiceDefinition,
    options: EngineOptions | None = None,
) -> ConversationState:
    """Fold the full transcript into a fresh state; the same history always yields the same state."""
    state = new_state(definition, options)
    for turn in history:
        if turn.role == "assistant":
            state = apply_assistant_turn(state, turn.content, turn.question_key)
        elif turn.role == "user":
            state = apply_message_to_state(state, turn.content)
    return state


def is_applicable(state: ConversationState, question: Question) -> bool:
    if question.key == "deployment" and not question.required:
        return not should_skip_deployment(state)
    return True


def active_question(state: ConversationState) -> Question | None:
    """The question the next user message answers: the one last asked, else the first unresolved one."""
    pending = state.question(state.pending_question_key)
    if pending is not None and is_applicable(state, pending):
        return pending
    for question in state.questions:
        if is_applicable(state, question) and not state.slot(question.key).is_resolved:
            return question
    return None


def apply_assistant_turn(state: ConversationState, text: str, question_key: str | None = None) -> ConversationState:
    key = question_key or question_key_from_text(text)
    if not state.has_question(key):
        key = None

    if key:
        slot = state.slot(key)
        state = _with_slot(
            state,
            replace(
                slot,
                asked_count=slot.asked_count + 1,
                clarified_once=slot.clarified_once or slot.has_issue,
            ),
        )

    name_question = next((question for question in state.questions if question.has_tag("name")), None)
    if name_question is not None and state.slot(name_question.key).status != SlotStatus.answered:
        name = extract_name_from_assistant(text)
        if name:
            state = _with_slot(state, _answered(state.slot(name_question.key), name, name, 0.7))

    return recompute_state(replace(state, pending_question_key=key))


def apply_message_to_state(state: ConversationState, message: str) -> ConversationState:
    text = normalize_text(message)
    if not text:
        return state

    brief = looks_like_project_brief(text)
    reads_as_question = is_user_question(text) and not brief
    state = _with_meta(state, was_question=reads_as_question, answered_keys=())

    if state.meta.get("low_budget_pending"):
        decided = _resolve_low_budget_decision(state, text)
        if decided is not None:
            return recompute_state(decided)

    active = active_question(state)

    if active is not None and active.has_tag("budget") and is_change_technology_message(text):
        if state.has_question("tech"):
            return recompute_state(_clear_slots(state, "tech", active.key))

    if active is not None and is_skip_message(text) and not _answers_despite_skip(state, active, text, brief):
        return recompute_state(_apply_skip(state, active))

    parse_text = strip_trailing_question_sentence(text) if brief else text

    forced: NormalizeResult | None = None
    if active is not None and not reads_as_question:
        forced = _parse_for_active(state, active, parse_text, brief)

    captures = _capture_out_of_order(state, parse_text, active, brief, reads_as_question)

    before = {key: slot.status for key, slot in state.slots.items()}
    for key, (raw, result) in captures.items():
        state = _with_slot(state, _answered(state.slot(key), raw, result.normalized, result.confidence))

    if active is not None and forced is not None:
        state = _apply_forced_result(state, active, parse_text, forced, captured=bool(captures))

    if not reads_as_question:
        state = _append_tech_details(state, parse_text)
        state = _infer_pages(state, parse_text, brief)
    state = _merge_inferred_pages(state)

    answered_keys = tuple(
        key
        for key, slot in state.slots.items()
        if slot.status == SlotStatus.answered and before.get(key) != SlotStatus.answered
    )
    return recompute_state(_with_meta(state, answered_keys=answered_keys))


def recompute_state(state: ConversationState) -> ConversationState:
    collected: dict[str, str] = {}
    missing_required: list[str] = []
    missing_optional: list[str] = []
    current_step: int | None = None

    for index, question in enumerate(state.questions):
        slot = state.slot(question.key)
        if slot.status == SlotStatus.answered:
            collected[question.key] = format_value(slot.normalized)
        elif slot.status == SlotStatus.declined:
            collected[question.key] = SKIPPED_VALUE

        if not is_applicable(state, question):
            continue
        if question.required and slot.status != SlotStatus.answered:
            missing_required.append(question.key)
        elif not question.required and not slot.is_resolved:
            missing_optional.append(question.key)
        else:
            continue
        if current_step is None:
            current_step = index

    state = replace(
        state,
        collected_data=collected,
        missing_required=tuple(missing_required),
        missing_optional=tuple(missing_optional),
        current_step=len(state.questions) if current_step is None else current_step,
    )
    return _with_meta(state, low_budget_pending=is_low_budget_pending(state))


def is_low_budget_pending(state: ConversationState) -> bool:
    if state.meta.get("allow_low_budget") or not is_website_flow(state):
        return False
    if state.slot("budget").status != SlotStatus.answered:
        return False
    if not state.slot("tech").is_resolved:
        return False
    return not validate_website_budget(state).is_valid


def should_capture_out_of_order(
    state: ConversationState,
    question: Question,
    text: str,
    *,
    brief: bool = False,
    reads_as_question: bool = False,
) -> str | None:
    """
    Raw answer for a question that is not being asked right now, or None.

    Only strong signals count: money or duration expressions with a cue, explicit
    "my name is" / "company called" phrasing, a project description, or chip labels
    mentioned in a short or list-shaped message. Resolved slots are only revisited
    when the message names the same topic ("budget is now 2 lakh").
    """
    slot = state.slot(question.key)
    tag = next((tag for tag in CAPTURE_TAGS if question.has_tag(tag)), None)

    if slot.is_resolved and not (tag and has_tag_keyword(text, tag)):
        return None
    if reads_as_question and tag not in ("budget", "timeline", "name", "company", "location"):
        return None

    if tag == "budget" or (tag is None and question.expected_type == ExpectedType.money):
        raw = extract_budget(text)
        if not raw or _is_flexible_only(text):
            return None
        if has_budget_cue(text) or is_bare_budget_answer(text):
            return raw
        return None

    if tag == "timeline" or (tag is None and question.expected_type == ExpectedType.duration):
        raw = extract_timeline(text)
        if not raw or _is_flexible_only(text):
            return None
        return raw

    if tag == "name":
        return extract_explicit_name(text)
    if tag == "company":
        return extract_organization_name(text)
    if tag == "location":
        return extract_location(text)
    if tag == "description":
        return _description_candidate(text, brief)

    if question.key == "pages" or not question.suggestions:
        return None
    if question.key == "website_type" and _looks_like_ecommerce(text):
        ecommerce = next((option for option in question.suggestions if canonicalize(option) == "ecommerce"), None)
        if ecommerce:
            return ecommerce
    return _suggestion_candidate(question, text)


def _description_candidate(text: str, brief: bool) -> str | None:
    looks_descriptive = len(text) >= 25 and (
        _INTENT_VERB_RE.search(text) is not None
        or (_IS_A_RE.search(text) is not None and _PROJECT_NOUN_RE.search(text) is not None)
    )
    if not (looks_descriptive or brief):
        return None
    refined = extract_description_from_mixed_message(text)
    if refined:
        return refined
    if not _STACK_WORDS_RE.search(text) and len(text) <= 240:
        return text
    return None


def _looks_like_ecommerce(text: str) -> bool:
    lower = normalize_for_suggestion_matching(text)
    score = 0
    for pattern, weight in (
        (r"\becommerce\b", 4),
        (r"\bmarketplace\b", 3),
        (r"\bonline\b[\s\S]{0,40}\b(?:store|shop|boutique)\b", 3),
        (r"\b(?:store|shop|boutique)\b", 1),
        (r"\b(?:sell|selling|buy|purchase|purchases)\b", 2),
        (r"\b(?:products?|catalog(?:ue)?|collections?)\b", 1),
        (r"\b(?:cart|checkout)\b", 2),
        (r"\b(?:payments?|pay|razorpay|stripe)\b", 2),
        (r"\borders?\b", 1),
        (r"\b(?:tracking|track)\b", 1),
        (r"\b(?:inventory|stock|sku|discount|coupon|wishlist)\b", 1),
    ):
        if re.search(pattern, lower):
            score += weight
    if score >= 3:
        return True
    return bool(re.search(r"\b(?:cart|checkout)\b", lower) and re.search(r"\b(?:products?|shop|store|boutique)\b", lower))


def _suggestion_candidate(question: Question, text: str) -> str | None:
    matches = match_suggestions_in_message(question.suggestions, text)
    if not matches:
        return None
    if question.key == "website_type" and not question.multi_select:
        return matches[0]

    text_canon = canonicalize(text)
    is_short = len(text) <= 90
    has_separators = _LIST_SEPARATORS_RE.search(text) is not None
    has_patterns = any(canonicalize(pattern) and canonicalize(pattern) in text_canon for pattern in question.patterns)
    if question.key == "deployment":
        has_deployment_context = _DEPLOYMENT_CONTEXT_RE.search(text) is not None
        has_patterns = has_patterns or has_deployment_context
    several = question.multi_select and len(matches) >= 2

    low_signal = len(matches) == 1 and canonicalize(matches[0]) in LOW_SIGNAL_CHOICES
    if low_signal and not is_short and not has_patterns:
        return None
    if question.key == "deployment" and not is_short and not has_patterns and not several:
        return None
    if not is_short and not has_separators and not has_patterns and not several:
        return None

    if question.multi_select:
        if question.max_select and question.max_select > 0:
            matches = matches[: question.max_select]
        return ", ".join(matches)
    return matches[0]


def _is_flexible_only(text: str) -> bool:
    return _FLEXIBLE_ONLY_RE.fullmatch(normalize_text(text)) is not None


def _capture_out_of_order(
    state: ConversationState,
    text: str,
    active: Question | None,
    brief: bool,
    reads_as_question: bool,
) -> dict[str, tuple[str, NormalizeResult]]:
    if is_greeting_message(text):
        return {}
    parsing_text = strip_markdown(text)
    description_key = next((question.key for question in state.questions if question.has_tag("description")), None)
    captures: dict[str, tuple[str, NormalizeResult]] = {}
    for question in state.questions:
        if active is not None and question.key == active.key:
            continue
        if question.has_tag("description") and question.key != description_key:
            continue
        if not is_applicable(state, question) or state.slot(question.key).status == SlotStatus.declined:
            continue
        raw = should_capture_out_of_order(
            state, question, parsing_text, brief=brief, reads_as_question=reads_as_question
        )
        if not raw:
            continue
        result = normalize_answer(raw, question, state.options)
        if result is not None and result.is_ok:
            captures[question.key] = (raw, result)
    return captures


def _parse_for_active(state: ConversationState, question: Question, text: str, brief: bool) -> NormalizeResult | None:
    slot = state.slot(question.key)
    if slot.status == SlotStatus.ambiguous and slot.options:
        picked = _pick_option(slot.options, text)
        if picked is not None:
            result = normalize_answer(picked, question, state.options)
            if result is not None and result.is_ok:
                return result

    if question.has_tag("description") and brief:
        description = extract_description_from_mixed_message(text)
        if description:
            return NormalizeResult.ok(description, confidence=0.85)

    if question.expected_type in (ExpectedType.enum, ExpectedType.list) and (
        is_bare_budget_answer(text) or is_bare_timeline_answer(text)
    ):
        # "50k" sent to a chip question belongs to budget; "Not sure" may still be a chip
        if not match_suggestions_in_message(question.suggestions, text):
            return None

    return normalize_answer(text, question, state.options)


def _pick_option(options: tuple[str, ...], text: str) -> str | None:
    canon = canonicalize(text)
    if not canon:
        return None
    for option in options:
        if canonicalize(option) == canon:
            return option
    for option in options:
        if canonicalize(option).endswith(canon):
            return option
    return None


def _apply_forced_result(
    state: ConversationState,
    question: Question,
    raw: str,
    result: NormalizeResult,
    captured: bool,
) -> ConversationState:
    slot = state.slot(question.key)
    if result.is_ok:
        return _with_slot(state, _answered(slot, raw, result.normalized, result.confidence))
    if slot.status == SlotStatus.answered:
        return state
    if result.status == "ambiguous":
        return _with_slot(
            state,
            replace(
                slot,
                status=SlotStatus.ambiguous,
                raw=raw,
                normalized=None,
                confidence=result.confidence,
                options=result.options,
                validation_errors=(),
            ),
        )
    if captured:
        # the message answered something else
        return state
    return _with_slot(
        state,
        replace(
            slot,
            status=SlotStatus.invalid,
            raw=raw,
            normalized=None,
            confidence=0.0,
            options=(),
            validation_errors=(result.error,) if result.error else (),
        ),
    )


def _answers_despite_skip(state: ConversationState, question: Question, text: str, brief: bool) -> bool:
    """A typed answer that mentions skipping ("skip the blog, Home and About") still counts; free text never does."""
    if question.expected_type == ExpectedType.text:
        return False
    result = _parse_for_active(state, question, text, brief)
    return result is not None and result.is_ok and result.confidence >= 0.75


def _apply_skip(state: ConversationState, question: Question) -> ConversationState:
    slot = state.slot(question.key)
    if question.required:
        skipped = replace(
            slot,
            status=SlotStatus.invalid,
            normalized=None,
            confidence=0.0,
            options=(),
            validation_errors=("required",),
        )
    else:
        skipped = replace(
            slot,
            status=SlotStatus.declined,
            normalized=None,
            confidence=1.0,
            options=(),
            validation_errors=(),
        )
    return _with_slot(state, skipped)


def _resolve_low_budget_decision(state: ConversationState, text: str) -> ConversationState | None:
    """Handle the reply to the low-budget warning; None means the message is not a decision."""
    if is_change_technology_message(text):
        return _clear_slots(state, "tech", "budget")

    budget_question = state.question("budget")
    raw = extract_budget(text)
    if budget_question is not None and raw:
        result = normalize_answer(raw, budget_question, state.options)
        if result is not None and result.is_ok and isinstance(result.normalized, Money):
            return _with_slot(state, _answered(state.slot("budget"), raw, result.normalized, result.confidence))

    if _INCREASE_RE.search(text):
        return _clear_slots(state, "budget")
    if _CONTINUE_RE.search(text):
        return _with_meta(state, allow_low_budget=True)
    return None


def _append_tech_details(state: ConversationState, text: str) -> ConversationState:
    if not state.has_question("tech"):
        return state
    slot = state.slot("tech")
    if slot.status != SlotStatus.answered or not slot.normalized:
        return state

    base = slot.normalized
    base_items = list(base) if isinstance(base, (tuple, list)) else [str(base)]
    base_canon = canonicalize(" ".join(base_items))
    extras = [
        item
        for item in extract_tech_details(text)
        if canonicalize(item) and canonicalize(item) not in base_canon
    ]
    if not extras:
        return state
    if isinstance(base, (tuple, list)):
        combined: Any = tuple(base_items + extras)
    else:
        combined = ", ".join(base_items + extras)
    return _with_slot(state, replace(slot, normalized=combined))


def _infer_pages(state: ConversationState, text: str, brief: bool) -> ConversationState:
    pages = state.question("pages")
    if pages is None or not brief:
        return state
    if state.slot("pages").status == SlotStatus.answered or state.meta.get("pages_inferred"):
        return state
    hint = state.collected_data.get("website_type", "")
    website_type = state.slot("website_type")
    if website_type.status == SlotStatus.answered:
        hint = format_value(website_type.normalized)
    inferred = infer_pages_from_brief(pages.suggestions, text, hint)
    if not inferred:
        return state
    return _with_meta(state, pages_inferred=tuple(inferred))


def _merge_inferred_pages(state: ConversationState) -> ConversationState:
    inferred = state.meta.get("pages_inferred")
    slot = state.slot("pages")
    if not inferred or slot.status != SlotStatus.answered:
        return state

    picked = slot.normalized if isinstance(slot.normalized, (tuple, list)) else (slot.normalized,)
    merged: list[str] = []
    seen: set[str] = set()
    for item in list(inferred) + [str(item) for item in picked if item]:
        canon = canonicalize(item)
        if not canon or canon == "none" or canon in seen:
            continue
        seen.add(canon)
        merged.append(item)
    if not merged or tuple(merged) == tuple(picked):
        return state
    return _with_slot(state, replace(slot, normalized=tuple(merged)))


def _answered(slot: Slot, raw: str, normalized: Any, confidence: float) -> Slot:
    return replace(
        slot,
        status=SlotStatus.answered,
        raw=raw,
        normalized=normalized,
        confidence=confidence,
        options=(),
        validation_errors=(),
    )


def _clear_slots(state: ConversationState, *keys: str) -> ConversationState:
    for key in keys:
        if state.has_question(key):
            state = _with_slot(state, Slot(key=key, asked_count=state.slot(key).asked_count))
    return state


def _with_slot(state: ConversationState, slot: Slot) -> ConversationState:
    return replace(state, slots={**state.slots, slot.key: slot})


def _with_meta(state: ConversationState, **changes: Any) -> ConversationState:
    return replace(state, meta={**state.meta, **changes})
