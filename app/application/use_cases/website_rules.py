from __future__ import annotations

import re
from dataclasses import dataclass

from app.application.utils.normalizers import duration_in_weeks, format_inr, normalize_duration
from app.application.utils.text_rules import canonicalize
from app.domain.entities.conversation_state import ConversationState, EngineOptions
from app.domain.entities.slot import SlotStatus
from app.domain.entities.values import Duration, Money

DEFAULT_WEBSITE_MINIMUM = 30_000
WORDPRESS_3D_MINIMUM = 45_000
CUSTOM_3D_RANGE = (100_000, 400_000)
COMPLEX_MIN_WEEKS = 4

# (detector, key, label, minimum in INR)
TECH_MINIMUMS = (
    (lambda tech: "wordpress" in tech, "wordpress", "WordPress", 30_000),
    (lambda tech: "react.js" in tech, "react", "React.js", 60_000),
    (lambda tech: "hydrogen" in tech, "custom_shopify", "Custom Shopify", 80_000),
    (lambda tech: "shopify" in tech, "shopify", "Shopify", 30_000),
    (lambda tech: "next.js" in tech, "nextjs", "Next.js", 175_000),
    (
        lambda tech: "react.js + node.js" in tech or "mern" in tech or "pern" in tech,
        "custom_react_node",
        "Custom React.js + Node.js",
        150_000,
    ),
)

MANAGED_HOSTING_TECH = frozenset({"shopify"})

_AR_RE = re.compile(
    r"\b(?:3d|virtual\s*try\s*-?\s*on|try\s*-?\s*on|augmented\s+reality|ar|face\s*filter|shade\s*(?:match|test))\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class BudgetRequirement:
    key: str
    label: str
    min: int
    wants_3d: bool = False
    range: tuple[int, int] | None = None
    base_label: str | None = None


@dataclass(frozen=True)
class BudgetCheck:
    is_valid: bool
    reason: str | None
    requirement: BudgetRequirement
    budget: Money | None = None


@dataclass(frozen=True)
class TimelineRequirement:
    min_weeks: int
    label: str = "this feature set"


def is_website_flow(state: ConversationState) -> bool:
    return state.has_question("tech") and state.has_question("pages")


def selections(state: ConversationState, key: str) -> list[str]:
    """Resolved choices of a slot as a list of labels; empty for skipped/unanswered slots."""
    slot = state.slot(key)
    if slot.status != SlotStatus.answered or slot.normalized is None:
        return []
    value = slot.normalized
    items = list(value) if isinstance(value, (tuple, list)) else [str(value)]
    return [item for item in items if item and item.strip().lower() not in ("none", "[skipped]")]


def page_selections(state: ConversationState) -> list[str]:
    picked = selections(state, "pages")
    if picked:
        return picked
    return list(state.meta.get("pages_inferred") or ())


def resolve_minimum_website_budget(state: ConversationState) -> BudgetRequirement:
    tech = " ".join(selections(state, "tech")).lower()
    pages = " ".join(page_selections(state)).lower()
    description = " ".join(selections(state, "description") or selections(state, "brief")).lower()

    wants_3d = pages.startswith("3d") or " 3d" in pages or _AR_RE.search(description) is not None

    matched = [
        BudgetRequirement(key=key, label=label, min=minimum)
        for detector, key, label, minimum in TECH_MINIMUMS
        if detector(tech)
    ]
    base = (
        max(matched, key=lambda item: item.min)
        if matched
        else BudgetRequirement(key="website", label="Website", min=DEFAULT_WEBSITE_MINIMUM)
    )
    if not wants_3d:
        return base
    if base.key == "wordpress":
        return BudgetRequirement(key="wordpress_3d", label="3D WordPress", min=WORDPRESS_3D_MINIMUM, wants_3d=True)
    return BudgetRequirement(
        key="custom_3d",
        label="3D Custom Website",
        min=max(base.min, CUSTOM_3D_RANGE[0]),
        wants_3d=True,
        range=CUSTOM_3D_RANGE,
        base_label=base.label,
    )


def validate_website_budget(state: ConversationState) -> BudgetCheck:
    requirement = resolve_minimum_website_budget(state)
    slot = state.slot("budget")
    if slot.status != SlotStatus.answered or not isinstance(slot.normalized, Money):
        return BudgetCheck(is_valid=True, reason=None, requirement=requirement)
    budget: Money = slot.normalized
    upper = budget.upper_bound
    if budget.flexible or upper is None:
        return BudgetCheck(is_valid=True, reason=None, requirement=requirement, budget=budget)
    if budget.currency != "INR":
        # minimums are INR figures; other currencies are never gated
        return BudgetCheck(is_valid=True, reason=None, requirement=requirement, budget=budget)
    if upper < requirement.min:
        return BudgetCheck(is_valid=False, reason="too_low", requirement=requirement, budget=budget)
    return BudgetCheck(is_valid=True, reason=None, requirement=requirement, budget=budget)


def build_website_budget_suggestions(requirement: BudgetRequirement) -> tuple[str, ...]:
    if requirement.range:
        low = max(requirement.min, requirement.range[0])
        chips = [f"{format_inr(low)} - {format_inr(requirement.range[1])}"]
    else:
        chips = [f"{format_inr(requirement.min)}+"]
    chips.append("Change technology")
    return tuple(chips)


def should_skip_deployment(state: ConversationState) -> bool:
    tech = canonicalize(" ".join(selections(state, "tech")))
    return bool(tech) and any(platform in tech for platform in MANAGED_HOSTING_TECH)


def resolve_minimum_timeline(state: ConversationState) -> TimelineRequirement | None:
    pages = page_selections(state)
    integrations = selections(state, "integrations")
    if not pages and not integrations:
        return None

    website_type = " ".join(selections(state, "website_type")).lower()
    page_canons = {canonicalize(page) for page in pages}
    integration_canons = {canonicalize(item) for item in integrations}

    def has_page(label: str) -> bool:
        return canonicalize(label) in page_canons

    is_ecommerce = (
        "commerce" in website_type
        or has_page("Shop/Store")
        or has_page("Cart/Checkout")
        or canonicalize("Payment Gateway (Razorpay/Stripe)") in integration_canons
    )
    is_web_app = "web app" in website_type or "webapp" in website_type
    is_complex = (
        is_ecommerce
        or is_web_app
        or any(has_page(label) for label in ("Admin Dashboard", "User Dashboard", "Analytics Dashboard"))
        or any(has_page(label) for label in ("Account/Login", "Order Tracking"))
        or any(has_page(label) for label in ("Wishlist", "Reviews/Ratings"))
        or any(has_page(label) for label in ("Notifications", "Chat/Support Widget", "Search"))
        or any(has_page(label) for label in ("3D Animations", "3D Model Viewer"))
        or len(integrations) >= 2
        or len(pages) + len(integrations) >= 4
    )
    return TimelineRequirement(min_weeks=COMPLEX_MIN_WEEKS) if is_complex else None


def format_weeks_label(weeks: float) -> str:
    rounded = max(1, round(weeks))
    if rounded % 4 == 0:
        months = max(1, rounded // 4)
        return "1 month" if months == 1 else f"{months} months"
    return "1 week" if rounded == 1 else f"{rounded} weeks"


def timeline_is_too_short(state: ConversationState) -> bool:
    requirement = resolve_minimum_timeline(state)
    slot = state.slot("timeline")
    if requirement is None or not isinstance(slot.normalized, Duration):
        return False
    weeks = duration_in_weeks(slot.normalized)
    return weeks is not None and weeks < requirement.min_weeks


def filter_timeline_suggestions(
    suggestions: tuple[str, ...], min_weeks: int, options: EngineOptions
) -> tuple[str, ...]:
    """Drop timeline chips shorter than the minimum; flexible/non-numeric chips are kept."""
    kept = []
    for chip in suggestions:
        result = normalize_duration(chip, None, options)
        weeks = duration_in_weeks(result.normalized) if result is not None and result.is_ok else None
        if weeks is None or weeks >= min_weeks:
            kept.append(chip)
    return tuple(kept) or suggestions
