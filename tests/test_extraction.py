"""
Tests for free-text rules, entity extraction and suggestion matching.
"""

from __future__ import annotations

from app.application.utils.entity_extraction import (
    extract_budget,
    extract_description_from_mixed_message,
    extract_explicit_name,
    extract_location,
    extract_name,
    extract_name_from_assistant,
    extract_organization_name,
    extract_tech_details,
    extract_timeline,
    infer_pages_from_brief,
    is_change_technology_message,
    question_key_from_text,
)
from app.application.utils.suggestion_matching import (
    match_exact_selections,
    match_suggestions_in_message,
)
from app.application.utils.text_rules import (
    canonicalize,
    is_bare_budget_answer,
    is_greeting_message,
    is_skip_message,
    is_user_question,
    looks_like_project_brief,
)
from app.infrastructure.knowledge.service_registry_data import WEBSITE_PAGES


def test_canonicalize_drops_case_accents_and_punctuation():
    assert canonicalize("Café Déjà-Vu!") == "cafedejavu"
    assert canonicalize("React.js + Node.js") == "reactjsnodejs"


def test_greeting_and_skip_detection():
    assert is_greeting_message("Hello there")
    assert not is_greeting_message("Hello, I need a website for my bakery")
    assert is_skip_message("skip")
    assert is_skip_message("Skip this one.")
    assert is_skip_message("I would rather skip this question for now")
    assert not is_skip_message("Home, About and Contact")


def test_bare_figures_with_question_mark_are_answers():
    assert is_bare_budget_answer("50k")
    assert not is_user_question("50k?")
    assert not is_user_question("2 weeks?")
    assert is_user_question("Can you do it in React?")


def test_names():
    assert extract_name("Priya") == "Priya"
    assert extract_name("hi, I'm Arjun Mehta") == "Arjun Mehta"
    assert extract_name("I need a website") is None
    assert extract_explicit_name("Hey, my name is Priya and I need an app") == "Priya"
    assert extract_explicit_name("Priya") is None
    assert extract_name_from_assistant("Nice to meet you, Priya! What's your company called?") == "Priya"


def test_organization_and_location():
    assert extract_organization_name("Our company is called Bloom Bakes") == "Bloom Bakes"
    assert extract_organization_name("It's an ecommerce website") is None
    assert extract_location("We're based in Pune, India") == "Pune"


def test_budget_and_timeline_expressions():
    assert extract_budget("budget is around ₹80,000 for this") == "₹80,000"
    assert extract_budget("somewhere between 50k to 80k") == "50k to 80k"
    assert extract_budget("we want it in 3 weeks") is None
    assert extract_timeline("we want it in 3 weeks") == "3 weeks"
    assert extract_timeline("launch in 2-3 months please") == "2-3 months"
    assert extract_timeline("no rush at all") is None


def test_description_from_one_shot_brief():
    text = "My name is Priya. I want an online store for handmade candles with a blog. Budget is 80k."
    description = extract_description_from_mixed_message(text)
    assert description is not None
    assert "online store for handmade candles" in description
    assert "Budget" not in description
    assert "Priya" not in description


def test_tech_details_from_brief():
    details = extract_tech_details("Tech stack: React, Node and PostgreSQL. Budget 2 lakh.")
    assert details[:3] == ["React.js", "Node.js", "PostgreSQL"]


def test_change_technology_chip():
    assert is_change_technology_message("Change technology")
    assert not is_change_technology_message("I want to change the colours")


def test_question_key_tag():
    assert question_key_from_text("What's your budget?\n[QUESTION_KEY: budget]") == "budget"
    assert question_key_from_text("What's your budget?") is None


def test_suggestions_keep_the_most_specific_match():
    options = ["React.js", "Next.js", "React.js + Node.js (MERN)"]
    assert match_suggestions_in_message(options, "We'd like react js with node js") == ["React.js + Node.js (MERN)"]
    assert match_suggestions_in_message(options, "react please") == ["React.js"]


def test_suggestions_use_aliases():
    options = ["Payment Gateway (Razorpay/Stripe)", "WhatsApp", "CRM"]
    assert match_suggestions_in_message(options, "we take payments through razorpay") == [
        "Payment Gateway (Razorpay/Stripe)"
    ]
    assert match_suggestions_in_message(options, "whats app integration") == ["WhatsApp"]


def test_exact_selections():
    options = ["Home", "About", "Blog", "None"]
    assert match_exact_selections(options, "Home, Blog") == ["Home", "Blog"]
    assert match_exact_selections(options, "Home, Careers") == []
    assert match_exact_selections(options, "Home, None") == ["None"]


def test_project_brief_detection():
    brief = "I need an ecommerce website with cart and payments. Budget 2 lakh, timeline 6 weeks."
    assert looks_like_project_brief(brief)
    assert not looks_like_project_brief("Priya")


def test_pages_inferred_from_brief():
    pages = infer_pages_from_brief(
        WEBSITE_PAGES,
        "An online store with search, wishlist and an admin panel to manage products",
    )
    assert "Shop/Store" in pages
    assert "Search" in pages
    assert "Wishlist" in pages
    assert "Admin Dashboard" in pages
    assert infer_pages_from_brief(WEBSITE_PAGES, "a simple site with a blog") == []
