from __future__ import annotations

import re

from app.application.use_cases.website_rules import (
    build_website_budget_suggestions,
    filter_timeline_suggestions,
    is_website_flow,
    resolve_minimum_timeline,
    resolve_minimum_website_budget,
    validate_website_budget,
)
from app.application.utils.normalizers import format_inr, format_value
from app.application.utils.text_rules import canonicalize
from app.domain.entities.conversation_state import ConversationState
from app.domain.entities.question import ExpectedType, Question
from app.domain.entities.reply import QuestionPrompt
from app.domain.entities.slot import SlotStatus

LOW_BUDGET_CHOICES = ("Increase budget", "Continue with current budget")

FALLBACK_CHOICES = {
    ExpectedType.money: (
        "Under ₹50,000",
        "₹50,000 - ₹1,00,000",
        "₹1,00,000 - ₹3,00,000",
        "₹3,00,000+",
        "Not sure yet",
    ),
    ExpectedType.duration: ("1-2 weeks", "2-4 weeks", "1-2 months", "3-6 months", "Flexible"),
}

ERROR_HINTS = {
    "money_format": "Please share an amount or a range, for example ₹50,000 - ₹1,00,000.",
    "duration_format": "Please share a rough duration, for example 2-4 weeks or 3 months.",
    "number_format": "A number or a range works, for example 100-500.",
    "enum_mismatch": "Please pick from the options below.",
    "required": "I need this one to put your proposal together.",
}
DEFAULT_HINT = "Could you be a bit more specific?"

PAGES_PREVIEW_LIMIT = 10

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def get_next_humanized_question(state: ConversationState, locale: str = "en") -> QuestionPrompt | None:
    """
    Next prompt for the conversation, or None once every applicable question is resolved.

    Order: the low-budget decision, then clarification of required answers that did not
    parse, then the first unresolved question. A second failed attempt at the same
    question narrows the reply to fixed choices.
    """
    if state.meta.get("low_budget_pending") and state.has_question("budget"):
        return _low_budget_prompt(state)

    question = _next_question(state)
    if question is None:
        return None

    slot = state.slot(question.key)
    prompt = _render_prompt(state, question, locale, slot.asked_count)
    suggestions = question.suggestions
    multi_select = question.multi_select

    if is_website_flow(state):
        prompt, suggestions = _apply_website_rules(state, question, prompt, suggestions)

    if slot.status == SlotStatus.ambiguous and slot.options:
        return QuestionPrompt(
            text=f"Just to confirm, did you mean {' or '.join(slot.options)}?",
            question_key=question.key,
            suggestions=slot.options,
        )

    if slot.status == SlotStatus.invalid:
        error = slot.validation_errors[0] if slot.validation_errors else None
        if not slot.clarified_once:
            if error == "greeting_only":
                text = f"Hi there! {prompt}"
            else:
                text = f"{prompt}\n{ERROR_HINTS.get(error or '', DEFAULT_HINT)}"
            return _prompt(question, text, suggestions, multi_select)

        choices = suggestions or FALLBACK_CHOICES.get(question.expected_type)
        if choices:
            return _prompt(
                question,
                f"Let's keep it simple. {prompt}\nPlease choose one of the options below.",
                choices,
                multi_select and bool(suggestions),
            )
        return _prompt(question, f"{prompt}\n{ERROR_HINTS.get(error or '', DEFAULT_HINT)}", None, False)

    if slot.asked_count > 0:
        prompt = f"Quick check: {prompt}"
    return _prompt(question, prompt, suggestions, multi_select)


def render_template(template: str, state: ConversationState) -> str:
    """Fill {name}, {tech}, {min_budget} and any collected key; an unknown {name} is dropped."""
    name = _known_name(state)
    text = template
    if name:
        text = text.replace("{name}", name)
    else:
        text = re.sub(r"[ \t]*,?[ \t]*\{name\}", "", text)
        text = re.sub(r"\s+([!?.,])", r"\1", text)
        text = re.sub(r"([!?.,])[,]+", r"\1", text)
        text = re.sub(r"^[,!.\s]+", "", text)
        text = text[:1].upper() + text[1:]

    def substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key == "min_budget":
            return format_inr(resolve_minimum_website_budget(state).min)
        return state.collected_data.get(key, "")

    text = _PLACEHOLDER_RE.sub(substitute, text)
    return re.sub(r"[ \t]{2,}", " ", text).strip()


def _known_name(state: ConversationState) -> str | None:
    for question in state.questions:
        if not question.has_tag("name"):
            continue
        slot = state.slot(question.key)
        if slot.status == SlotStatus.answered and slot.normalized:
            return str(slot.normalized)
    return None


def _next_question(state: ConversationState) -> Question | None:
    for key in state.missing_required:
        if state.slot(key).has_issue:
            return state.question(key)
    if state.current_step < len(state.questions):
        return state.questions[state.current_step]
    return None


def _render_prompt(state: ConversationState, question: Question, locale: str, asked_count: int) -> str:
    templates = question.templates_for(locale)
    if not templates:
        return f"Could you share your {question.key.replace('_', ' ')}?"
    return render_template(templates[asked_count % len(templates)], state)


def _prompt(
    question: Question,
    text: str,
    suggestions: tuple[str, ...] | None,
    multi_select: bool,
) -> QuestionPrompt:
    return QuestionPrompt(
        text=text,
        question_key=question.key,
        suggestions=tuple(suggestions) if suggestions else None,
        multi_select=multi_select,
        max_select=question.max_select if multi_select else None,
    )


def _low_budget_prompt(state: ConversationState) -> QuestionPrompt:
    check = validate_website_budget(state)
    requirement = check.requirement
    label = f"{requirement.base_label} + 3D" if requirement.base_label and requirement.wants_3d else requirement.label
    provided = format_value(check.budget) if check.budget else state.collected_data.get("budget", "")
    text = (
        f"Your budget of {provided} is below the minimum for {label} "
        f"(minimum: {format_inr(requirement.min)}). "
        "Would you like to increase your budget or continue with the current one?"
    )
    if requirement.range:
        text += f" 3D custom websites typically range {format_inr(requirement.range[0])} - {format_inr(requirement.range[1])}."
    return QuestionPrompt(text=text, question_key="budget", suggestions=LOW_BUDGET_CHOICES)


def _apply_website_rules(
    state: ConversationState,
    question: Question,
    prompt: str,
    suggestions: tuple[str, ...] | None,
) -> tuple[str, tuple[str, ...] | None]:
    if question.key == "budget":
        requirement = resolve_minimum_website_budget(state)
        minimum = format_inr(requirement.min)
        if minimum not in prompt:
            label = f"{requirement.base_label} + 3D" if requirement.base_label and requirement.wants_3d else requirement.label
            prompt = f"{prompt} Minimum for {label} is {minimum}."
        if requirement.range:
            prompt += (
                f" 3D projects typically range {format_inr(requirement.range[0])}"
                f" - {format_inr(requirement.range[1])}."
            )
        return prompt, build_website_budget_suggestions(requirement)

    if question.key == "timeline" and suggestions:
        requirement = resolve_minimum_timeline(state)
        if requirement is not None:
            return prompt, filter_timeline_suggestions(suggestions, requirement.min_weeks, state.options)
        return prompt, suggestions

    if question.key == "pages":
        inferred = [
            item
            for item in state.meta.get("pages_inferred") or ()
            if canonicalize(item) not in ("none", "skipped")
        ]
        if not inferred:
            return prompt, suggestions
        inferred_canons = {canonicalize(item) for item in inferred}
        remaining = tuple(
            option
            for option in suggestions or ()
            if canonicalize(option) == "none" or canonicalize(option) not in inferred_canons
        )
        preview = ", ".join(inferred[:PAGES_PREVIEW_LIMIT])
        extra = len(inferred) - PAGES_PREVIEW_LIMIT
        if extra > 0:
            preview = f"{preview} +{extra} more"
        text = (
            f"I've already captured these pages/features from your brief: {preview}."
            "\nDo you want to add anything else? (Select all that apply)"
        )
        return text, remaining or ("None",)

    return prompt, suggestions
