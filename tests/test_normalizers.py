"""
Tests for the typed answer normalizers and their display formatting.
"""

from __future__ import annotations

from app.application.use_cases.question_flow import question_from_config
from app.application.utils.normalizers import (
    duration_in_weeks,
    format_inr,
    format_money,
    format_value,
    group_digits,
    normalize_answer,
    normalize_duration,
    normalize_money,
)
from app.domain.entities.conversation_state import EngineOptions
from app.domain.entities.values import Duration, Money, NumberRange

OPTIONS = EngineOptions()

BUDGET = question_from_config({"key": "budget", "templates": ["What's your budget?"]})
AD_BUDGET = question_from_config(
    {"key": "ad_budget", "templates": ["What is your ad budget per month?"], "expected_type": "money"}
)
TIMELINE = question_from_config({"key": "timeline", "templates": ["When do you need it?"]})
TECH = question_from_config(
    {
        "key": "tech",
        "templates": ["Preferred stack?"],
        "suggestions": ["WordPress", "Shopify", "React.js", "Next.js", "React.js + Node.js (MERN)", "Not sure yet"],
    }
)
PAGES = question_from_config(
    {
        "key": "pages",
        "templates": ["Which pages?"],
        "suggestions": ["Home", "About", "Contact", "Blog", "None"],
        "multi_select": True,
        "max_select": 2,
    }
)
FOOTAGE = question_from_config(
    {
        "key": "footage",
        "templates": ["What footage do you have?"],
        "suggestions": ["Raw clips", "Screen recordings", "Other"],
    }
)
USERS = question_from_config({"key": "users", "templates": ["How many users?"], "expected_type": "number_range"})
NAME = question_from_config({"key": "name", "templates": ["What's your name?"]})
SERVICE_TYPE = question_from_config({"key": "service_type", "templates": ["What do you need?"]})


def test_money_range_with_rupee_symbols():
    result = normalize_money("₹50,000 - ₹1,00,000", BUDGET, OPTIONS)
    assert result.is_ok
    assert result.normalized == Money(min=50_000, max=100_000, currency="INR")
    assert format_money(result.normalized) == "INR 50,000 - INR 1,00,000"


def test_money_suffixes_and_bounds():
    assert normalize_money("2 lakh", BUDGET, OPTIONS).normalized == Money(min=200_000, max=200_000)
    assert normalize_money("1.5 lakh", BUDGET, OPTIONS).normalized == Money(min=150_000, max=150_000)
    assert normalize_money("under 1 lakh", BUDGET, OPTIONS).normalized == Money(min=None, max=100_000)
    assert normalize_money("50k+", BUDGET, OPTIONS).normalized == Money(min=50_000, max=None)


def test_money_detects_currency_and_falls_back_to_default():
    assert normalize_money("$5,000", BUDGET, OPTIONS).normalized.currency == "USD"
    assert normalize_money("5000", BUDGET, EngineOptions(default_currency="EUR")).normalized.currency == "EUR"


def test_money_flexible_answer():
    result = normalize_money("Not sure yet", BUDGET, OPTIONS)
    assert result.is_ok
    assert result.normalized.flexible is True
    assert result.normalized.upper_bound is None


def test_money_period_from_answer_or_question_wording():
    assert normalize_money("30k per month", BUDGET, OPTIONS).normalized.period == "month"
    assert normalize_money("50k", AD_BUDGET, OPTIONS).normalized.period == "month"
    assert normalize_money("50k", BUDGET, OPTIONS).normalized.period is None


def test_money_without_digits_is_invalid():
    result = normalize_money("a reasonable amount", BUDGET, OPTIONS)
    assert result.status == "invalid"
    assert result.error == "money_format"


def test_duration_range_and_words():
    assert normalize_duration("2-3 weeks", TIMELINE, OPTIONS).normalized == Duration(min=2, max=3, unit="weeks")
    assert normalize_duration("two months", TIMELINE, OPTIONS).normalized == Duration(value=2, unit="months")


def test_bare_number_duration_is_ambiguous_over_allowed_units():
    result = normalize_duration("3", TIMELINE, OPTIONS)
    assert result.status == "ambiguous"
    assert result.options == ("3 weeks", "3 months")

    result = normalize_duration("1", TIMELINE, EngineOptions(duration_units=("days", "weeks")))
    assert result.options == ("1 day", "1 week")


def test_duration_special_forms():
    assert normalize_duration("flexible", TIMELINE, OPTIONS).normalized.flexible is True
    assert normalize_duration("asap", TIMELINE, OPTIONS).normalized.kind == "asap"
    assert normalize_duration("by March", TIMELINE, OPTIONS).normalized.kind == "date"
    assert normalize_duration("100", TIMELINE, OPTIONS).error == "duration_format"


def test_enum_picks_a_single_option():
    result = normalize_answer("React.js + Node.js (MERN)", TECH, OPTIONS)
    assert result.is_ok
    assert result.normalized == "React.js + Node.js (MERN)"

    result = normalize_answer("I'd go with Next.js", TECH, OPTIONS)
    assert result.normalized == "Next.js"


def test_list_keeps_every_pick_up_to_max_select():
    result = normalize_answer("Home, About, Contact", PAGES, OPTIONS)
    assert result.is_ok
    assert result.normalized == ("Home", "About")


def test_choice_falls_back_to_other_option():
    result = normalize_answer("Drone shots", FOOTAGE, OPTIONS)
    assert result.is_ok
    assert result.normalized == "Other: Drone shots"


def test_choice_mismatch_and_greeting():
    assert normalize_answer("banana", TECH, OPTIONS).error == "enum_mismatch"
    assert normalize_answer("hi", TECH, OPTIONS).error == "greeting_only"


def test_number_range_forms():
    assert normalize_answer("100-500", USERS, OPTIONS).normalized == NumberRange(min=100, max=500)
    assert normalize_answer("50+", USERS, OPTIONS).normalized == NumberRange(min=50)
    assert normalize_answer("12", USERS, OPTIONS).normalized == NumberRange(min=12, max=12)
    assert normalize_answer("lots", USERS, OPTIONS).error == "number_format"


def test_text_answers():
    assert normalize_answer("My name is Priya", NAME, OPTIONS).normalized == "Priya"
    assert normalize_answer("hello", SERVICE_TYPE, OPTIONS).error == "greeting_only"
    assert normalize_answer("Logo design for my bakery", SERVICE_TYPE, OPTIONS).normalized == (
        "Logo design for my bakery"
    )


def test_bare_budget_on_free_text_question_gets_no_judgement():
    assert normalize_answer("50000", SERVICE_TYPE, OPTIONS) is None


def test_indian_digit_grouping():
    assert group_digits(12_345_678) == "1,23,45,678"
    assert group_digits(5_000, "USD") == "5,000"
    assert format_inr(175_000) == "₹1,75,000"


def test_money_display():
    assert format_money(Money(min=150_000, max=300_000)) == "INR 1,50,000 - INR 3,00,000"
    assert format_money(Money(min=None, max=100_000)) == "Under INR 1,00,000"
    assert format_money(Money(min=30_000, max=30_000, period="month")) == "INR 30,000 per month"
    assert format_value(("Home", "Blog")) == "Home, Blog"


def test_duration_in_weeks():
    assert duration_in_weeks(Duration(value=2, unit="months")) == 8
    assert duration_in_weeks(Duration(min=2, max=3, unit="weeks")) == 3
    assert duration_in_weeks(Duration(flexible=True, label="Flexible")) is None


def test_money_between_phrasing_shares_the_suffix():
    """Money given as "between 40 and 60k" is a range, not a bare 40."""
    result = normalize_money("between 40 and 60k", BUDGET, OPTIONS)
    assert result.is_ok
    assert result.normalized == Money(min=40_000, max=60_000)
    assert normalize_money("between ₹40,000 and ₹60,000", BUDGET, OPTIONS).normalized == Money(
        min=40_000, max=60_000
    )


def test_oversized_numbers_are_rejected_not_raised():
    """Digit runs too long to be real figures come back as format errors."""
    huge = "9" * 400
    assert normalize_money(huge, BUDGET, OPTIONS).error == "money_format"
    assert normalize_money(f"50k - {huge}", BUDGET, OPTIONS).error == "money_format"
    assert normalize_duration(f"{huge} weeks", TIMELINE, OPTIONS).error == "duration_format"
    assert normalize_duration(huge, TIMELINE, OPTIONS).error == "duration_format"
    assert normalize_answer(huge, USERS, OPTIONS).error == "number_format"
    assert normalize_answer(f"{huge}+", USERS, OPTIONS).error == "number_format"


def test_unitless_duration_range_and_fillers_offer_units():
    """A range or hedged number without a unit asks which unit was meant."""
    result = normalize_duration("3-4", TIMELINE, OPTIONS)
    assert result.status == "ambiguous"
    assert result.options == ("3-4 weeks", "3-4 months")

    result = normalize_duration("in about 3", TIMELINE, OPTIONS)
    assert result.status == "ambiguous"
    assert result.options == ("3 weeks", "3 months")

    assert normalize_duration("10-60", TIMELINE, OPTIONS).error == "duration_format"
