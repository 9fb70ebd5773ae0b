"""
Tests for picking and phrasing the next question.
"""

from __future__ import annotations

from app.application.use_cases.conversation_engine import (
    apply_assistant_turn,
    apply_message_to_state,
    build_conversation_state,
    new_state,
)
from app.application.use_cases.question_selection import (
    ERROR_HINTS,
    FALLBACK_CHOICES,
    get_next_humanized_question,
    render_template,
)
from app.application.use_cases.website_rules import filter_timeline_suggestions
from app.domain.entities.conversation_state import EngineOptions
from app.domain.entities.message import ChatTurn
from app.domain.entities.question import ExpectedType
from app.infrastructure.knowledge.service_registry import ServiceRegistry, build_definition

REGISTRY = ServiceRegistry()
WEBSITE = REGISTRY.get_definition("Website Development")
GENERAL = REGISTRY.get_definition("General Services")


def answer(state, key, text):
    state = apply_assistant_turn(state, f"Question\n[QUESTION_KEY: {key}]")
    return apply_message_to_state(state, text)


def answer_all(state, answers):
    for key, text in answers:
        state = answer(state, key, text)
    return state


def test_unknown_name_placeholder_is_dropped():
    """Templates read naturally before the client's name is known."""
    state = new_state(GENERAL)
    assert render_template("Nice to meet you, {name}! What kind of service are you looking for?", state) == (
        "Nice to meet you! What kind of service are you looking for?"
    )
    assert render_template("{name}, what's your budget?", state) == "What's your budget?"

    state = answer(state, "name", "Priya")
    assert render_template("Nice to meet you, {name}! What do you need?", state) == (
        "Nice to meet you, Priya! What do you need?"
    )


def test_first_prompt_follows_question_order():
    """A fresh conversation starts with the first question of the bank."""
    prompt = get_next_humanized_question(new_state(WEBSITE))
    assert prompt.question_key == "name"
    assert prompt.text == "What's your name?"
    assert prompt.suggestions is None


def test_prompt_is_none_once_everything_is_collected():
    """No prompt is produced after the last question is resolved."""
    state = answer_all(new_state(GENERAL), [
        ("name", "Priya"),
        ("brief", "I need a logo and packaging design for my home bakery"),
        ("service_type", "Logo design"),
        ("audience", "skip"),
        ("budget", "50000"),
        ("timeline", "2 weeks"),
    ])
    assert state.is_complete
    assert get_next_humanized_question(state) is None


def test_website_budget_prompt_names_the_minimum():
    """The budget question quotes the stack minimum and offers matching chips."""
    state = answer_all(new_state(WEBSITE), [
        ("name", "Rahul"),
        ("company", "skip"),
        ("website_type", "Business Website"),
        ("description", "We need a site to showcase our interior design services and capture leads"),
        ("pages", "Home, About, Contact"),
        ("integrations", "None"),
        ("tech", "Next.js"),
        ("deployment", "Vercel"),
    ])
    prompt = get_next_humanized_question(state)
    assert prompt.question_key == "budget"
    assert "₹1,75,000" in prompt.text
    assert prompt.suggestions == ("₹1,75,000+", "Change technology")


def test_minimum_budget_without_a_stack():
    """Without a chosen stack the general website minimum applies."""
    assert render_template("The minimum for this scope is {min_budget}.", new_state(WEBSITE)) == (
        "The minimum for this scope is ₹30,000."
    )


def test_timeline_chips_respect_the_feature_set():
    """Chips shorter than the minimum build time are hidden."""
    chips = ("2-3 weeks", "1 month", "1-2 months", "2-3 months", "Flexible")
    assert filter_timeline_suggestions(chips, 4, EngineOptions()) == ("1 month", "1-2 months", "2-3 months", "Flexible")

    state = answer_all(new_state(WEBSITE), [
        ("name", "Rahul"),
        ("company", "skip"),
        ("website_type", "E-commerce"),
        ("description", "An online store for handmade candles and gift boxes"),
        ("pages", "Home, Shop/Store, Cart/Checkout"),
        ("integrations", "None"),
        ("tech", "Shopify"),
        ("budget", "50k"),
    ])
    prompt = get_next_humanized_question(state)
    assert prompt.question_key == "timeline"
    assert "2-3 weeks" not in prompt.suggestions
    assert "1 month" in prompt.suggestions


def test_first_clarification_repeats_prompt_with_hint():
    """An unparsable required answer is asked again with a hint."""
    state = answer(new_state(GENERAL), "budget", "a reasonable amount")
    prompt = get_next_humanized_question(state)
    assert prompt.question_key == "budget"
    assert prompt.text == f"What's your budget for this?\n{ERROR_HINTS['money_format']}"
    assert prompt.suggestions is None


def test_second_clarification_offers_fixed_choices():
    """A second failure narrows the reply to fixed choices."""
    state = answer(new_state(GENERAL), "budget", "a reasonable amount")
    state = answer(state, "budget", "whatever works")
    prompt = get_next_humanized_question(state)
    assert prompt.question_key == "budget"
    assert prompt.text.startswith("Let's keep it simple.")
    assert prompt.suggestions == FALLBACK_CHOICES[ExpectedType.money]
    assert prompt.multi_select is False


def test_required_skip_and_greeting_reprompts():
    """Skipping a required question or only greeting gets a targeted re-prompt."""
    prompt = get_next_humanized_question(answer(new_state(GENERAL), "name", "skip"))
    assert prompt.text == f"What's your name?\n{ERROR_HINTS['required']}"

    prompt = get_next_humanized_question(answer(new_state(GENERAL), "name", "hello"))
    assert prompt.text == "Hi there! What's your name?"


def test_revisited_question_gets_quick_check_prefix():
    """A question asked before without an answer is marked as a revisit."""
    state = answer(new_state(GENERAL), "name", "What do you charge?")
    assert state.meta["was_question"] is True
    prompt = get_next_humanized_question(state)
    assert prompt.question_key == "name"
    assert prompt.text == "Quick check: What's your name?"


def test_localized_templates():
    """Prompts use the requested locale and fall back to English."""
    definition = build_definition(
        "Tutoring",
        {
            "questions": [
                {"id": "T1", "key": "name", "templates": {"en": ["What's your name?"], "hi": ["Aapka naam kya hai?"]}},
            ]
        },
    )
    state = new_state(definition)
    assert get_next_humanized_question(state, "hi").text == "Aapka naam kya hai?"
    assert get_next_humanized_question(state, "hi-IN").text == "Aapka naam kya hai?"
    assert get_next_humanized_question(state, "fr").text == "What's your name?"


def test_pages_prompt_lists_features_from_the_brief():
    """Pages already inferred from a brief are previewed and removed from the chips."""
    history = [
        ChatTurn(role="assistant", content="What's your name?", question_key="name"),
        ChatTurn(
            role="user",
            content=(
                "Hi, I'm Priya. I want an ecommerce website for my candle brand with cart, payments and wishlist. "
                "Budget is 2 lakh and timeline 6 weeks."
            ),
        ),
        ChatTurn(role="assistant", content="What's your company called?", question_key="company"),
        ChatTurn(role="user", content="skip"),
    ]
    state = build_conversation_state(history, WEBSITE)
    prompt = get_next_humanized_question(state)

    assert prompt.question_key == "pages"
    assert prompt.text.startswith("I've already captured these pages/features from your brief:")
    assert "Wishlist" in prompt.text
    assert "Wishlist" not in prompt.suggestions
    assert "Blog" in prompt.suggestions
    assert "None" in prompt.suggestions
