"""
Tests for the conversation state machine: slot filling, out-of-order capture,
skip semantics, the low-budget gate and replay idempotence.
"""

from __future__ import annotations

from app.application.use_cases.conversation_engine import (
    SKIPPED_VALUE,
    apply_assistant_turn,
    apply_message_to_state,
    build_conversation_state,
    new_state,
)
from app.application.use_cases.question_selection import LOW_BUDGET_CHOICES, get_next_humanized_question
from app.application.use_cases.website_rules import validate_website_budget
from app.domain.entities.message import ChatTurn
from app.domain.entities.slot import SlotStatus
from app.domain.entities.values import Duration, Money
from app.infrastructure.knowledge.service_registry import ServiceRegistry, build_definition
from app.infrastructure.transport.tag_codec import encode_prompt

REGISTRY = ServiceRegistry()
WEBSITE = REGISTRY.get_definition("Website Development")
GENERAL = REGISTRY.get_definition("General Services")

CONSULTING = build_definition(
    "Consulting",
    {
        "questions": [
            {"id": "Q1", "next_id": "Q2", "key": "name", "templates": ["What's your name?"]},
            {"id": "Q2", "next_id": "Q3", "key": "budget", "templates": ["What's your budget?"]},
            {"id": "Q3", "key": "timeline", "templates": ["When do you need it?"]},
        ]
    },
)


def ask(state, key):
    return apply_assistant_turn(state, f"Question\n[QUESTION_KEY: {key}]")


def answer(state, key, text):
    return apply_message_to_state(ask(state, key), text)


def website_until_budget():
    state = new_state(WEBSITE)
    for key, text in (
        ("name", "Rahul"),
        ("company", "skip"),
        ("website_type", "Business Website"),
        ("description", "We need a site to showcase our interior design services and capture leads"),
        ("pages", "Home, About, Contact"),
        ("integrations", "None"),
        ("tech", "Next.js"),
        ("deployment", "Vercel"),
    ):
        state = answer(state, key, text)
    return state


def test_registry_bank_without_flow_gets_a_brief_question():
    """Banks without a flow graph get a brief question after the first one."""
    keys = [question.key for question in GENERAL.questions]
    assert keys == ["name", "brief", "service_type", "audience", "budget", "timeline"]
    assert [question.key for question in WEBSITE.questions][0] == "name"
    assert "brief" not in [question.key for question in WEBSITE.questions]


def test_new_state_lists_every_required_question():
    """A fresh state lists every question as missing."""
    state = new_state(GENERAL)
    assert state.missing_required == ("name", "brief", "service_type", "budget", "timeline")
    assert state.missing_optional == ("audience",)
    assert state.current_step == 0


def test_several_answers_in_one_message():
    """One message can fill several slots out of order."""
    history = [
        ChatTurn(role="assistant", content="Hi! Let's get started."),
        ChatTurn(role="user", content="My name is Priya, budget is 60000, need it done in 2 weeks"),
    ]
    state = build_conversation_state(history, CONSULTING)

    assert state.slot("name").normalized == "Priya"
    assert state.slot("budget").normalized == Money(min=60_000, max=60_000, currency="INR")
    assert state.slot("timeline").normalized == Duration(value=2, unit="weeks")
    assert state.missing_required == ()
    assert state.is_complete


def test_bare_number_for_timeline_is_ambiguous():
    """A bare number for a duration asks which unit was meant."""
    state = answer(new_state(GENERAL), "timeline", "3")
    slot = state.slot("timeline")
    assert slot.status == SlotStatus.ambiguous
    assert slot.options == ("3 weeks", "3 months")

    prompt = get_next_humanized_question(state)
    assert prompt.question_key == "timeline"
    assert prompt.suggestions == ("3 weeks", "3 months")

    state = answer(state, "timeline", "3 months")
    assert state.slot("timeline").status == SlotStatus.answered
    assert state.slot("timeline").normalized == Duration(value=3, unit="months")


def test_skipping_optional_and_required_questions():
    """Optional questions can be skipped; required ones cannot."""
    state = new_state(GENERAL)
    state = answer(state, "name", "Priya")
    state = answer(state, "brief", "I need a logo and packaging design for my home bakery")
    state = answer(state, "service_type", "Logo design")
    state = answer(state, "audience", "skip")

    assert state.slot("audience").status == SlotStatus.declined
    assert state.collected_data["audience"] == SKIPPED_VALUE
    assert "audience" not in state.missing_required
    assert "audience" not in state.missing_optional

    state = answer(state, "budget", "skip")
    assert state.slot("budget").status == SlotStatus.invalid
    assert state.slot("budget").validation_errors == ("required",)
    assert "budget" in state.missing_required


def test_required_slots_missing_until_answered():
    """Every unanswered required question stays missing."""
    state = answer(new_state(GENERAL), "name", "hello")
    for question in state.questions:
        if question.required and state.slot(question.key).status != SlotStatus.answered:
            assert question.key in state.missing_required
    assert state.slot("name").validation_errors == ("greeting_only",)


def test_low_budget_gate_and_continue():
    """A budget below the stack minimum asks for a decision before moving on."""
    state = website_until_budget()
    assert state.slot("deployment").status == SlotStatus.answered

    state = answer(state, "budget", "₹50,000")
    assert state.slot("budget").normalized == Money(min=50_000, max=50_000, currency="INR")
    assert validate_website_budget(state).reason == "too_low"
    assert state.meta["low_budget_pending"] is True
    assert not state.is_complete

    prompt = get_next_humanized_question(state)
    assert prompt.question_key == "budget"
    assert prompt.suggestions == LOW_BUDGET_CHOICES
    assert "₹1,75,000" in prompt.text

    state = apply_assistant_turn(state, encode_prompt(prompt))
    state = apply_message_to_state(state, "Continue with current budget")
    assert state.meta["allow_low_budget"] is True
    assert state.meta["low_budget_pending"] is False
    assert state.slot("budget").status == SlotStatus.answered
    assert get_next_humanized_question(state).question_key == "timeline"


def test_low_budget_increase_clears_budget():
    """Choosing to increase the budget asks for it again."""
    state = answer(website_until_budget(), "budget", "₹50,000")
    state = apply_message_to_state(ask(state, "budget"), "Increase budget")
    assert state.slot("budget").status == SlotStatus.empty
    assert state.meta["low_budget_pending"] is False
    assert get_next_humanized_question(state).question_key == "budget"


def test_low_budget_new_amount_is_revalidated():
    """A new amount in reply to the warning is checked again."""
    state = answer(website_until_budget(), "budget", "₹50,000")
    state = apply_message_to_state(ask(state, "budget"), "Ok, 2 lakh then")
    assert state.slot("budget").normalized == Money(min=200_000, max=200_000, currency="INR")
    assert state.meta["low_budget_pending"] is False


def test_change_technology_clears_stack_and_budget():
    """Changing technology re-asks the stack and the budget."""
    state = answer(website_until_budget(), "budget", "₹50,000")
    state = apply_message_to_state(ask(state, "budget"), "Change technology")
    assert state.slot("tech").status == SlotStatus.empty
    assert state.slot("budget").status == SlotStatus.empty
    assert get_next_humanized_question(state).question_key == "tech"


def test_deployment_is_skipped_for_managed_hosting():
    """Managed-hosting stacks skip the deployment question."""
    state = new_state(WEBSITE)
    for key, text in (
        ("name", "Rahul"),
        ("company", "skip"),
        ("website_type", "E-commerce"),
        ("description", "An online store for handmade candles and gift boxes"),
        ("pages", "Home, Shop/Store, Cart/Checkout"),
        ("integrations", "None"),
        ("tech", "Shopify"),
    ):
        state = answer(state, key, text)
    assert "deployment" not in state.missing_optional
    assert get_next_humanized_question(state).question_key == "budget"


def test_one_shot_brief_fills_several_slots():
    """A one-shot brief fills every slot it mentions."""
    state = ask(new_state(WEBSITE), "name")
    state = apply_message_to_state(
        state,
        "Hi, I'm Priya. I want an ecommerce website for my candle brand with cart, payments and wishlist. "
        "Budget is 2 lakh and timeline 6 weeks.",
    )

    assert state.collected_data["name"] == "Priya"
    assert state.collected_data["website_type"] == "E-commerce"
    assert state.collected_data["budget"] == "INR 2,00,000"
    assert state.collected_data["timeline"] == "6 weeks"
    assert state.slot("description").status == SlotStatus.answered
    assert "Shop/Store" in state.meta["pages_inferred"]
    assert set(state.meta["answered_keys"]) >= {"name", "website_type", "budget", "timeline"}

    prompt = get_next_humanized_question(state)
    assert prompt.question_key == "company"
    assert "Priya" in prompt.text


def test_answered_slots_survive_unrelated_turns():
    """Answered slots are not lost on later turns."""
    state = answer(new_state(GENERAL), "name", "Priya")
    state = answer(state, "brief", "I need a logo and packaging design for my home bakery")
    state = answer(state, "budget", "50000")
    before = {key: slot.normalized for key, slot in state.slots.items() if slot.status == SlotStatus.answered}

    state = answer(state, "service_type", "Logo design")
    state = answer(state, "timeline", "no idea honestly")

    for key, value in before.items():
        assert state.slot(key).status == SlotStatus.answered
        assert state.slot(key).normalized == value


def test_budget_keyword_overwrites_answered_budget():
    """Naming the budget again replaces the earlier amount."""
    state = answer(new_state(GENERAL), "budget", "50000")
    state = answer(state, "timeline", "2 weeks, and the budget is now 80k")
    assert state.slot("budget").normalized == Money(min=80_000, max=80_000, currency="INR")
    assert state.slot("timeline").normalized == Duration(value=2, unit="weeks")


def test_replaying_history_is_idempotent():
    """Replaying the same history gives the same state."""
    history = [
        ChatTurn(role="assistant", content="What's your name?", question_key="name"),
        ChatTurn(role="user", content="Rahul"),
        ChatTurn(role="assistant", content="What's your company called?\n[QUESTION_KEY: company]"),
        ChatTurn(role="user", content="skip"),
        ChatTurn(role="assistant", content="What kind of website?", question_key="website_type"),
        ChatTurn(role="user", content="I want an online store with cart and checkout, budget 1 lakh"),
    ]
    first = build_conversation_state(history, WEBSITE)
    second = build_conversation_state(history, WEBSITE)
    assert first == second
    assert first.collected_data["company"] == SKIPPED_VALUE


def test_long_skip_sentence_declines_optional_question():
    """A skip request phrased as a full sentence still declines the question."""
    state = answer(new_state(GENERAL), "name", "Priya")
    state = answer(state, "brief", "I need a logo and packaging design for my home bakery")
    state = answer(state, "service_type", "Logo design")
    state = answer(state, "audience", "I would rather skip this question for now")

    assert state.slot("audience").status == SlotStatus.declined
    assert state.collected_data["audience"] == SKIPPED_VALUE


def test_typed_answer_mentioning_skip_is_kept():
    """A parseable typed answer wins over the word skip."""
    state = answer(new_state(CONSULTING), "name", "Priya")
    state = answer(state, "budget", "let's skip the haggling, 80k")

    assert state.slot("budget").status == SlotStatus.answered
    assert state.slot("budget").normalized == Money(min=80_000, max=80_000, currency="INR")


def test_oversized_budget_is_reported_and_history_still_replays():
    """An absurdly long figure is an invalid answer, and later turns keep working."""
    history = [
        ChatTurn(role="assistant", content="What's your name?", question_key="name"),
        ChatTurn(role="user", content="Priya"),
        ChatTurn(role="assistant", content="What's your budget?", question_key="budget"),
        ChatTurn(role="user", content="9" * 400),
    ]
    state = build_conversation_state(history, CONSULTING)

    assert state.slot("budget").status == SlotStatus.invalid
    assert state.slot("budget").validation_errors == ("money_format",)
    assert "budget" in state.missing_required
    assert get_next_humanized_question(state).question_key == "budget"

    state = build_conversation_state(
        [
            *history,
            ChatTurn(role="assistant", content="What's your budget?", question_key="budget"),
            ChatTurn(role="user", content="80k"),
        ],
        CONSULTING,
    )
    assert state.slot("budget").normalized == Money(min=80_000, max=80_000, currency="INR")
