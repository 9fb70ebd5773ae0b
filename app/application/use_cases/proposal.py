from __future__ import annotations

import re

from app.application.use_cases.website_rules import (
    format_weeks_label,
    is_website_flow,
    page_selections,
    resolve_minimum_timeline,
    selections,
    timeline_is_too_short,
    validate_website_budget,
)
from app.application.utils.normalizers import (
    duration_in_months,
    duration_in_weeks,
    format_inr,
    format_money,
    format_number,
    format_value,
)
from app.application.utils.text_rules import canonicalize, normalize_text, strip_markdown
from app.domain.entities.conversation_state import ConversationState
from app.domain.entities.slot import SlotStatus
from app.domain.entities.values import Duration, Money

PROPOSAL_START = "[PROPOSAL_DATA]"
PROPOSAL_END = "[/PROPOSAL_DATA]"

LABELS = {
    "name": "Client Name",
    "company": "Project Name",
    "project": "Project Name",
    "project_name": "Project Name",
    "brand": "Brand",
    "business_name": "Business Name",
    "website_type": "Website Type",
    "service_type": "Service Type",
    "project_stage": "Project Stage",
    "brief": "Brief",
    "summary": "Summary",
    "description": "Summary",
    "goal": "Primary Goal",
    "goals": "Goals",
    "objective": "Primary Objective",
    "audience": "Target Audience",
    "platform": "Platform",
    "platforms": "Platforms",
    "deliverables": "Deliverables",
    "core_features": "Core Features",
    "design_assets": "Design Assets",
    "backend": "Backend/Admin",
    "integrations": "Integrations",
    "deployment": "Deployment",
    "pages": "Pages/Features",
    "tech": "Preferred Tech Stack",
    "modules": "Modules/Features",
    "users": "User Seats",
    "current_crm": "Current CRM/ERP",
    "bot_type": "Bot Type",
    "flow_count": "Conversation Flow Count",
    "languages": "Languages",
    "posts_per_month": "Posts per Month",
    "ad_budget": "Ad budget (per month)",
    "location": "Location",
    "notes": "Notes",
}

PROJECT_NAME_KEYS = ("project_name", "company", "project", "brand", "business_name")

ECOMMERCE_MILESTONES = (
    "Week 1: Setup, DB schema, auth, UI foundation",
    "Week 2: Product catalog + categories, search & filters",
    "Week 3: Product pages + reviews, cart + wishlist",
    "Week 4: Checkout, payments + webhooks, order flow",
    "Week 5: Order management + notifications, refinements",
    "Week 6: QA, deployment (domain+SSL), handover",
)
ECOMMERCE_ADMIN_WEEK = "Week 5: Admin panel, coupons, order tracking, email notifications"
WEBSITE_MILESTONES = (
    "Week 1: Discovery, design direction, setup",
    "Week 2: Core pages + content structure",
    "Week 3: Forms/integrations, responsive polish",
    "Week 4: QA, deployment (domain+SSL), handover",
)
DEFAULT_ROADMAP_WEEKS = 6

ECOMMERCE_COST_SPLIT = (
    ("Setup", 0.15),
    ("Catalog+PDP", 0.25),
    ("Checkout+Payments", 0.30),
    ("Admin/Ops", 0.20),
    ("QA+Deploy", 0.10),
)
WEBSITE_COST_SPLIT = (
    ("Discovery+Design", 0.25),
    ("Build", 0.45),
    ("Integrations", 0.15),
    ("QA+Deploy", 0.15),
)

NEXT_STEPS = (
    "1. Review and confirm this proposal",
    "2. Sign agreement and pay deposit",
    "3. Kickoff meeting to begin work",
)

_AR_RE = re.compile(
    r"\b(?:virtual\s*try\s*-?\s*on|try\s*-?\s*on|augmented\s+reality|ar|shade\s*(?:match|test))\b", re.IGNORECASE
)
_NOISY_DESCRIPTION_RE = re.compile(r"\b(?:budget|timeline|deadline|tech\s*stack|stack)\b", re.IGNORECASE)


def generate_proposal_from_state(state: ConversationState) -> str | None:
    """Proposal text wrapped in [PROPOSAL_DATA] markers; None while questions remain."""
    if state.missing_required or state.missing_optional:
        return None
    if is_website_flow(state):
        body = generate_roadmap_from_state(state)
    else:
        body = _render_generic(state)
    return f"{PROPOSAL_START}\n{body}\n{PROPOSAL_END}"


def label_for(key: str) -> str:
    return LABELS.get(key) or " ".join(part.capitalize() for part in key.split("_") if part)


def _value(state: ConversationState, key: str) -> str:
    value = normalize_text(state.collected_data.get(key, ""))
    return "" if value == "[skipped]" else strip_markdown(value)


def _tagged_slot_value(state: ConversationState, tag: str, kind: type):
    for question in state.questions:
        if not question.has_tag(tag):
            continue
        slot = state.slot(question.key)
        if slot.status == SlotStatus.answered and isinstance(slot.normalized, kind):
            return question.key, slot.normalized
    return None, None


def _tagged_values(state: ConversationState, tag: str) -> list[tuple[str, str]]:
    return [
        (question.key, _value(state, question.key))
        for question in state.questions
        if question.has_tag(tag) and _value(state, question.key)
    ]


def _summarize(value: str, max_len: int = 180) -> str:
    text = re.sub(r"\s+", " ", normalize_text(value)).strip()
    if len(text) <= max_len:
        return text
    head = text[:max_len]
    boundary = max(head.rfind("."), head.rfind("!"))
    trimmed = head[: boundary + 1] if boundary >= 60 else head
    return f"{trimmed.strip()}..."


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    unique = []
    for item in items:
        canon = canonicalize(item)
        if canon and canon not in seen:
            seen.add(canon)
            unique.append(item)
    return unique


def build_roadmap_milestones(weeks: float | None, is_ecommerce: bool, has_admin: bool) -> list[str]:
    total = int(round(weeks)) if weeks and weeks > 0 else DEFAULT_ROADMAP_WEEKS
    if is_ecommerce:
        milestones = list(ECOMMERCE_MILESTONES)
        if has_admin:
            milestones[4] = ECOMMERCE_ADMIN_WEEK
    else:
        milestones = list(WEBSITE_MILESTONES)

    # short timelines keep the final stretch
    if total <= 4:
        return milestones[-max(3, total):]
    if total < len(milestones):
        return milestones[:total]
    return milestones


def generate_roadmap_from_state(state: ConversationState) -> str:
    project_name = next((_value(state, key) for key in PROJECT_NAME_KEYS if _value(state, key)), "Your project")
    website_type = _value(state, "website_type") or "Website"
    tech = _value(state, "tech") or "To be confirmed"

    _, budget = _tagged_slot_value(state, "budget", Money)
    _, timeline = _tagged_slot_value(state, "timeline", Duration)
    budget_display = format_money(budget) if budget else ""
    timeline_display = format_value(timeline) if timeline else ""

    pages = _dedupe(page_selections(state))
    integrations = _dedupe(selections(state, "integrations"))
    feature_canons = {canonicalize(item) for item in pages + integrations}

    def has_feature(label: str) -> bool:
        return canonicalize(label) in feature_canons

    is_ecommerce = "commerce" in website_type.lower() or has_feature("Shop/Store") or has_feature("Cart/Checkout")
    has_admin = has_feature("Admin Dashboard")
    milestones = build_roadmap_milestones(duration_in_weeks(timeline), is_ecommerce, has_admin)

    description = next((value for _, value in _tagged_values(state, "description")), "")
    summary = _summarize(description)
    if not summary or len(summary) > 140 or _NOISY_DESCRIPTION_RE.search(description):
        base = "E-commerce website" if is_ecommerce else f"{website_type} website"
        highlights = []
        if _AR_RE.search(description):
            highlights.append("virtual try-on/AR")
        for label, highlight in (
            ("Products", "product catalog"),
            ("Search", "search & filters"),
            ("Cart/Checkout", "cart & checkout"),
            ("Payment Gateway (Razorpay/Stripe)", "payments"),
            ("Admin Dashboard", "admin panel"),
            ("Order Tracking", "order tracking"),
            ("Notifications", "notifications"),
            ("Reviews/Ratings", "reviews"),
            ("Wishlist", "wishlist"),
        ):
            if has_feature(label) or (label == "Products" and has_feature("Shop/Store")):
                highlights.append(highlight)
        summary = f"{base} with {', '.join(highlights[:6])}" if highlights else base

    check = validate_website_budget(state)
    requirement = check.requirement
    below_minimum = not check.is_valid and check.reason == "too_low"
    if below_minimum:
        cost_base: float | None = requirement.min
    elif budget and not budget.flexible and budget.currency == "INR":
        cost_base = budget.max if budget.max is not None else budget.min
    else:
        cost_base = None

    buckets = ECOMMERCE_COST_SPLIT if is_ecommerce else WEBSITE_COST_SPLIT
    if cost_base:
        cost_split = " | ".join(f"{label} ~{format_inr(round(cost_base * share))}" for label, share in buckets)
        basis = f"minimum {format_inr(cost_base)}" if below_minimum else format_inr(cost_base)
        cost_title = f"Cost split (rough, based on {basis})"
    else:
        cost_split = " | ".join(f"{label} {round(share * 100)}%" for label, share in buckets)
        cost_title = "Cost split (rough)"

    title_bits = [bit for bit in (budget_display, timeline_display) if bit]
    title = "Roadmap + Estimate" + (f" ({', '.join(title_bits)})" if title_bits else "")

    lines = [
        title,
        f"Project: {project_name} ({website_type})",
        f"Stack: {tech}",
        f"Summary: {summary}",
        f"Pages/features: {', '.join(pages) if pages else 'To be finalized from requirements'}",
        f"Integrations: {', '.join(integrations) if integrations else 'None specified yet'}",
        "",
        "Milestones:",
        *[f"- {milestone}" for milestone in milestones],
        "",
        f"{cost_title}: {cost_split}",
    ]

    if below_minimum:
        minimum = format_inr(requirement.min)
        lines += [
            "",
            f"Feasibility: {budget_display} is below the minimum for {requirement.label} ({minimum}+).",
            "Options:",
            f"- Increase budget to {minimum}+",
            "- Keep budget and reduce scope / phase delivery",
            "- Switch to a lower-cost stack (e.g., WordPress/Shopify)",
        ]

    if timeline_is_too_short(state):
        minimum_timeline = resolve_minimum_timeline(state)
        lines += [
            "",
            f"Timeline note: a fully functional build of this feature set usually needs at least "
            f"{format_weeks_label(minimum_timeline.min_weeks)}; expect a phased launch.",
        ]
    return "\n".join(lines).strip()


def _estimated_total(budget: Money | None, timeline: Duration | None) -> str:
    if budget is None or budget.flexible or budget.period != "month":
        return ""
    months = duration_in_months(timeline)
    if not months:
        return ""
    total = Money(
        min=budget.min * months if budget.min is not None else None,
        max=budget.max * months if budget.max is not None else None,
        currency=budget.currency,
    )
    return f"{format_money(total)} ({format_number(months)} months)"


def _render_generic(state: ConversationState) -> str:
    used: set[str] = set()

    def take(tag: str) -> list[tuple[str, str]]:
        values = [(key, value) for key, value in _tagged_values(state, tag) if key not in used]
        used.update(key for key, _ in values)
        return values

    names = take("name")
    client_name = names[0][1] if names else "Client"
    project_name = next((_value(state, key) for key in PROJECT_NAME_KEYS if _value(state, key)), "")
    used.update(key for key in PROJECT_NAME_KEYS if _value(state, key))
    service = state.service if state.service and state.service.lower() != "default" else "General Services"

    budget_key, budget = _tagged_slot_value(state, "budget", Money)
    _, timeline = _tagged_slot_value(state, "timeline", Duration)
    budget_keys = [key for key, _ in take("budget")]
    timeline_keys = [key for key, _ in take("timeline")]

    sections = ["PROJECT PROPOSAL", "", "CLIENT DETAILS", f"Client Name: {client_name}"]
    if project_name:
        sections.append(f"Project Name: {project_name}")
    sections += [f"Service: {service}", ""]

    brief_lines = [f"Summary: {_summarize(value, 400)}" for _, value in take("description")[:1]]
    brief_lines += [f"{label_for(key)}: {value}" for key, value in take("goal")]
    brief_lines += [f"{label_for(key)}: {value}" for key, value in take("audience")]

    scope_lines = [f"{label_for(key)}: {value}" for tag in ("deliverables", "platforms") for key, value in take(tag)]

    for question in state.questions:
        key = question.key
        value = _value(state, key)
        if not value or key in used:
            continue
        used.add(key)
        brief_lines.append(f"{label_for(key)}: {value}")

    if brief_lines:
        sections += ["CONFIRMED BRIEF", *brief_lines, ""]

    assumptions = []
    if budget is not None and budget.flexible:
        assumptions.append(f"- Budget is {format_money(budget).lower()}; we'll recommend a scope that fits it.")
    if timeline is not None and timeline.flexible:
        assumptions.append(f"- Timeline is {format_value(timeline).lower()}; we'll propose a schedule after kickoff.")
    if assumptions:
        sections += ["ASSUMPTIONS", *assumptions, ""]

    if scope_lines:
        sections += ["SCOPE & DELIVERABLES", *scope_lines, ""]

    if timeline_keys:
        timeline_text = format_value(timeline) if timeline is not None else _value(state, timeline_keys[0])
        sections += ["TIMELINE", f"Timeline (with buffer): {timeline_text}", ""]

    if budget_keys:
        key = budget_key or budget_keys[0]
        budget_text = format_money(budget) if budget is not None else _value(state, key)
        sections += ["BUDGET", f"{'Budget' if key == 'budget' else label_for(key)}: {budget_text}"]
        estimate = _estimated_total(budget, timeline)
        if estimate:
            sections.append(f"Estimated total: {estimate}")
        sections.append("")

    sections += ["NEXT STEPS", *NEXT_STEPS]
    return "\n".join(sections).strip()
