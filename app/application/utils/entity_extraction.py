from __future__ import annotations

import re

from app.application.utils.suggestion_matching import normalize_for_suggestion_matching
from app.application.utils.text_rules import (
    CURRENCY_CUE,
    canonicalize,
    is_greeting_message,
    is_user_question,
    normalize_text,
    strip_duration_expressions,
)

NON_NAME_SINGLE_TOKENS = frozenset(
    {
        "there",
        "bro",
        "buddy",
        "sir",
        "madam",
        "maam",
        "mam",
        "boss",
        "team",
        "everyone",
        "guys",
        "all",
        "friend",
        "mate",
        "pal",
        "dude",
        "help",
        "support",
        "please",
        "plz",
        "thanks",
        "thankyou",
        "thx",
        "ok",
        "okay",
        "sure",
        "yes",
        "yep",
        "no",
        "nope",
        "nah",
        "none",
    }
)

NON_NAME_FIRST_TOKENS = frozenset(
    {
        "thinking",
        "looking",
        "planning",
        "trying",
        "working",
        "building",
        "creating",
        "developing",
        "here",
        "from",
        "based",
        "not",
        "fine",
        "good",
        "interested",
    }
)

SERVICE_DOMAIN_WORDS = (
    r"(budget|timeline|website|web\s*app|app|project|proposal|quote|pricing|price|cost|estimate|generate"
    r"|need|want|build|looking|landing|page|portfolio|e-?commerce|ecommerce|shopify|wordpress|react|next"
    r"|mern|pern|saas|dashboard|crm|erp|chatbot|bot|marketing|seo)\b"
)

GENERIC_PROJECT_CANONS = frozenset(
    {
        "ecomm",
        "ecom",
        "ecommerce",
        "ecommercewebsite",
        "website",
        "webapp",
        "webapplication",
        "app",
        "application",
        "mobileapp",
        "mobileapplication",
        "landingpage",
        "portfolio",
        "businesswebsite",
        "informationalwebsite",
        "saas",
        "dashboard",
        "platform",
        "marketplace",
        "store",
        "shop",
        "onlinestore",
        "crm",
        "erp",
        "chatbot",
    }
)

CHANGE_TECH_CANONS = frozenset(
    {
        "changetechnology",
        "changetech",
        "switchtechnology",
        "switchtech",
        "differenttechnology",
        "chooseanothertechnology",
        "chooseanothertech",
        "changestack",
        "switchstack",
        "changeplatform",
        "switchplatform",
    }
)

_TAG_RE = re.compile(r"\[(?:QUESTION_KEY|SUGGESTIONS|MULTI_SELECT|MAX_SELECT):[\s\S]*?\]", re.IGNORECASE)
_QUESTION_KEY_RE = re.compile(r"\[QUESTION_KEY:\s*([^\]]+)\]", re.IGNORECASE)

_MONTH_NAMES = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*"


def trim_entity(value: str) -> str:
    """Keep the leading clause of an entity mention ("Priya and I need..." -> "Priya")."""
    text = normalize_text(value)
    if not text:
        return ""
    for separator in (r"\s+and\s+", r"\s+but\s+", r"\s+so\s+", r"\s+because\s+", r"\s+with\s+"):
        text = re.split(separator, text, maxsplit=1, flags=re.IGNORECASE)[0]
    text = re.split(r"[,.!;\n]", text, maxsplit=1)[0]
    return re.sub(r"\s+", " ", text).strip()


def _word_tokens(text: str) -> list[str]:
    cleaned = re.sub(r"[^a-z'\s]", " ", text.lower())
    return [token for token in cleaned.split() if token]


def is_likely_name(value: str) -> bool:
    text = normalize_text(value).replace("?", "")
    if not text or len(text) > 40:
        return False
    if is_greeting_message(text) or is_user_question(text):
        return False
    if re.search(r"\bhttps?://", text, flags=re.IGNORECASE) or re.search(r"\bwww\.", text, flags=re.IGNORECASE):
        return False
    if "@" in text or re.search(r"\d", text):
        return False
    tokens = _word_tokens(text)
    if len(tokens) == 1 and tokens[0] in NON_NAME_SINGLE_TOKENS:
        return False
    if re.search(SERVICE_DOMAIN_WORDS, text, flags=re.IGNORECASE):
        return False
    return re.search(r"[a-zA-Z]", text) is not None


def starts_with_non_name_intro(value: str) -> bool:
    tokens = _word_tokens(normalize_text(value))
    if not tokens:
        return False
    if tokens[0] in NON_NAME_FIRST_TOKENS:
        return True
    if len(tokens) > 1 and tokens[0] in ("a", "an", "the"):
        return True
    if len(tokens) <= 3 and re.search(
        r"\b(developer|designer|founder|owner|student|freelancer|agency|team|company)\b", value, flags=re.IGNORECASE
    ):
        return True
    return False


_EXPLICIT_NAME_PATTERNS = (
    re.compile(r"\bmy\s+name\s*(?:is|:)?\s+(.+)", re.IGNORECASE),
    re.compile(r"^\s*name\s*(?:is|:)?\s+(.+)", re.IGNORECASE),
    re.compile(r"\bcall\s+me\s+(.+)", re.IGNORECASE),
    re.compile(r"\b(?:i\s+am|i['’]m|im|this\s+is)\s+(.+)", re.IGNORECASE),
)


def _name_from_match(candidate: str) -> str | None:
    limited = " ".join(trim_entity(candidate).split()[:3])
    if not limited or starts_with_non_name_intro(limited):
        return None
    return limited if is_likely_name(limited) else None


def extract_explicit_name(value: str) -> str | None:
    """Only "my name is X" / "I'm X" / "call me X" style mentions."""
    text = normalize_text(value).replace("?", "")
    if not text:
        return None
    for pattern in _EXPLICIT_NAME_PATTERNS:
        match = pattern.search(text)
        if match:
            return _name_from_match(match.group(1))
    return None


def extract_name(value: str) -> str | None:
    """Name for an active name question: explicit phrasing, else the whole (short) reply."""
    text = normalize_text(value).replace("?", "")
    if not text or is_greeting_message(text):
        return None

    leading_greeting = re.match(
        r"^(?:hi|hey|yo|sup|hii+|hello|hell+o+w*|helo+|hlo+|hlw+)\b[\s,!.]+(.+)$", text, flags=re.IGNORECASE
    )
    if leading_greeting:
        text = normalize_text(leading_greeting.group(1))
        if not text or is_greeting_message(text):
            return None

    for pattern in _EXPLICIT_NAME_PATTERNS:
        match = pattern.search(text)
        if match:
            return _name_from_match(match.group(1))

    if starts_with_non_name_intro(text):
        return None
    return trim_entity(text) if is_likely_name(text) else None


def strip_internal_tags(value: str) -> str:
    return _TAG_RE.sub("", normalize_text(value)).strip()


def question_key_from_text(value: str) -> str | None:
    match = _QUESTION_KEY_RE.search(value or "")
    if not match:
        return None
    return match.group(1).strip() or None


def extract_name_from_assistant(value: str) -> str | None:
    text = strip_internal_tags(value)
    if not text:
        return None
    match = re.search(r"\bnice\s+to\s+meet\s+you,?\s+(.+?)(?:[!.,\n]|$)", text, flags=re.IGNORECASE)
    if not match:
        return None
    limited = " ".join(trim_entity(match.group(1)).split()[:3])
    if not limited or is_greeting_message(limited):
        return None
    return limited if is_likely_name(limited) else None


def _trim_at_markers(candidate: str) -> str:
    refined = normalize_text(candidate)
    lower = refined.lower()
    ends = [
        match.start()
        for match in (
            re.search(r"\bbudget\b", lower),
            re.search(r"\btech(?:nology)?\b|\bstack\b", lower),
            re.search(r"\btimeline\b|\bdeadline\b", lower),
            re.search(r"\bdeploy(?:ment)?\b|\bhost(?:ing|ed)?\b", lower),
            re.search(r"\bdomain\b", lower),
        )
        if match
    ]
    if ends:
        refined = refined[: min(ends)]
    return re.sub(r"[\s,.;:-]+$", "", refined).strip()


def _looks_like_generic_project_label(candidate: str) -> bool:
    cleaned = re.sub(r"^\s*(?:a|an|the|my|our|this|that|its)\b\s*", "", candidate.replace("?", ""), flags=re.IGNORECASE)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    canon = canonicalize(cleaned)
    if not canon or canon in GENERIC_PROJECT_CANONS:
        return True
    return " " in cleaned and (
        re.search(
            r"\b(website|web\s*app|app|application|store|shop|platform|marketplace|dashboard|landing\s*page|portfolio|saas|e-?\s*commerce)\b",
            cleaned,
            flags=re.IGNORECASE,
        )
        is not None
    )


_ORGANIZATION_PATTERNS = (
    re.compile(
        r"\b(?:the\s+)?name\s+(?:i['’]?m|i\s+am)\s+thinking\s+of\s*(?:is|:)?\s*([a-z0-9][a-z0-9&._' -]{1,80})",
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:the\s+)?name\s+i\s+have\s+in\s+mind\s*(?:is|:)?\s*([a-z0-9][a-z0-9&._' -]{1,80})", re.IGNORECASE),
    re.compile(r"\bfor\s+(?:my\s+)?(?:company|business|brand)\s+([a-z0-9][a-z0-9&._' -]{1,80})", re.IGNORECASE),
    re.compile(
        r"\b(?:company|business|brand|project)\s*(?:name\s*)?(?:is\s+(?:called|named)|is|:|called|named)\s*([a-z0-9][a-z0-9&._' -]{1,80})",
        re.IGNORECASE,
    ),
)


def extract_organization_name(value: str) -> str | None:
    text = normalize_text(value)
    if not text:
        return None

    for pattern in _ORGANIZATION_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        candidate = _trim_at_markers(trim_entity(match.group(1)))
        if candidate and len(candidate) <= 60 and not _looks_like_generic_project_label(candidate):
            return candidate

    if re.search(r"\b(?:called|named)\b", text, flags=re.IGNORECASE) and re.search(
        r"\b(company|business|brand|project|app|website|platform|product|tool|system|dashboard|store|marketplace|saas)\b",
        text,
        flags=re.IGNORECASE,
    ):
        match = re.search(r"\b(?:called|named)\s+([a-z0-9][a-z0-9&._' -]{1,80})", text, flags=re.IGNORECASE)
        if match:
            candidate = _trim_at_markers(trim_entity(match.group(1)))
            if candidate and len(candidate) <= 60 and not _looks_like_generic_project_label(candidate):
                return candidate
    return None


def extract_company_answer(value: str) -> str | None:
    """Company name for an active company question (short bare replies are accepted as-is)."""
    organization = extract_organization_name(value)
    if organization:
        return organization
    text = normalize_text(value).replace("?", "")
    if not text or len(text) > 60 or is_greeting_message(text):
        return None
    if re.search(r"\bhttps?://|@", text):
        return None
    candidate = trim_entity(text)
    if not candidate or _looks_like_generic_project_label(candidate):
        return None
    if len(candidate.split()) > 6:
        return None
    return candidate


def extract_description_from_mixed_message(value: str) -> str | None:
    """Pull the project description out of a one-shot brief, dropping the name and trailing budget/tech chatter."""
    text = normalize_text(value)
    if not text:
        return None

    org_pattern = re.compile(
        r"\b(?:my\s+)?(?:company|business|brand|project)\s*(?:name\s*)?(?:is|:|called|named)\s+[^\n,.;]{1,80}?"
        r"(?=(?:\s+(?:and|with|budget|tech|timeline)\b)|[,.!\n]|$)",
        re.IGNORECASE,
    )
    start = 0
    match = org_pattern.search(text)
    if match:
        start = match.end()

    tail = text[start:]
    tail_lower = tail.lower()
    ends = [
        found.start()
        for found in (
            re.search(r"\bbudget\b", tail_lower),
            re.search(r"\btech(?:nology)?\s*stack\b", tail_lower),
            re.search(r"\btimeline\b", tail_lower),
            re.search(r"\bdeploy(?:ment)?\b|\bhost(?:ed|ing)\b", tail_lower),
        )
        if found
    ]
    candidate = tail[: min(ends)] if ends else tail
    candidate = re.sub(r"^[\s,.;:-]+", "", candidate)
    candidate = re.sub(r"^\s*(?:and\s+)?(?:it\s+is|it's|its)\s+", "", candidate, flags=re.IGNORECASE)
    candidate = re.sub(r"^\s*(?:and|also|plus)\b\s*", "", candidate, flags=re.IGNORECASE)

    if start == 0:
        candidate = re.sub(r"^(?:hi|hello|hey)\b[!,.\s-]*", "", candidate, flags=re.IGNORECASE)
        candidate = re.sub(
            r"^(?:my\s+name|name)\s*(?:is|:)?\s+(?!and\b|i\b|im\b|i'm\b|we\b)[a-z][a-z'.-]*"
            r"(?:\s+(?!and\b|i\b|im\b|i'm\b|we\b)[a-z][a-z'.-]*){0,2}\b[!,.\s-]*",
            "",
            candidate,
            flags=re.IGNORECASE,
        )
        candidate = re.sub(r"^\s*(?:and|so)\b\s*", "", candidate, flags=re.IGNORECASE)

    candidate = re.sub(r"[\s,;:-]+$", "", re.sub(r"\s+", " ", candidate)).strip()
    if len(candidate) < 20:
        return None
    return candidate


def extract_location(value: str) -> str | None:
    text = normalize_text(value)
    match = re.search(
        r"\b(?:based|located|operating)\s+(?:in|at|out\s+of)\s+([A-Za-z][A-Za-z .'-]{1,60})", text, flags=re.IGNORECASE
    )
    if not match:
        match = re.search(r"\bfrom\s+([A-Z][A-Za-z.'-]+(?:\s+[A-Z][A-Za-z.'-]+){0,2})\b", text)
    if not match:
        return None
    candidate = trim_entity(match.group(1))
    candidate = re.split(r"\s+(?:budget|timeline|tech|need|want|looking)\b", candidate, maxsplit=1, flags=re.IGNORECASE)[0]
    return candidate.strip() or None


def extract_budget(value: str) -> str | None:
    """Raw money expression found in free text, or None; the money normalizer does the parsing."""
    text = normalize_text(value).replace("?", "")
    if not text:
        return None
    if re.fullmatch(r"flexible|not\s+sure(?:\s+yet)?", text, flags=re.IGNORECASE):
        return text
    text = strip_duration_expressions(text)
    lower = text.lower()
    amount = r"\d[\d,]*(?:\.\d+)?\s*(?:k|l|lakhs?|lacs?|cr|crores?|mn|m|million|thousand)?\b"
    patterns = (
        CURRENCY_CUE + r"?\s*" + amount + r"\s*(?:-|–|to)\s*" + CURRENCY_CUE + r"?\s*" + amount,
        r"(?:under|below|upto|up\s+to|less\s+than|max(?:imum)?)\s+" + CURRENCY_CUE + r"?\s*" + amount,
        r"(?:above|over|at\s+least|min(?:imum)?)\s+" + CURRENCY_CUE + r"?\s*" + amount,
        CURRENCY_CUE + r"\s*" + amount + r"(?:\s*\+)?",
        amount + r"\s*" + CURRENCY_CUE,
        r"\b\d+(?:\.\d+)?\s*(?:k|l|lakhs?|lacs?|cr|crores?|mn|million)\b(?:\s*\+)?",
    )
    for pattern in patterns:
        match = re.search(pattern, lower)
        if match:
            return text[match.start() : match.end()].strip()

    match = re.search(r"\b(?:budget|cost|price|spend)\b[^0-9]{0,24}(\d[\d,]{2,}(?:\s*\+)?)", lower)
    if match:
        return text[match.start(1) : match.end(1)].strip()
    return None


def extract_timeline(value: str) -> str | None:
    """Raw duration expression found in free text, or None."""
    text = normalize_text(value).replace("?", "")
    if not text:
        return None
    if re.fullmatch(r"flexible|ongoing|not\s+sure(?:\s+yet)?", text, flags=re.IGNORECASE):
        return text
    unit = r"(?:day|week|wk|month|mo|year|yr)s?"
    match = re.search(r"\b\d+(?:\.\d+)?\s*(?:-|–|to)\s*\d+(?:\.\d+)?\s*" + unit + r"\b", text, flags=re.IGNORECASE)
    if match:
        return match.group(0)
    match = re.search(r"\b\d+(?:\.\d+)?\s*" + unit + r"\b", text, flags=re.IGNORECASE)
    if match:
        return match.group(0)
    match = re.search(
        r"\b(?:a|an|one|two|three|four|five|six|seven|eight|nine|ten|eleven|twelve|couple(?:\s+of)?|few)\s+" + unit + r"\b",
        text,
        flags=re.IGNORECASE,
    )
    if match:
        return match.group(0)
    match = re.search(r"\b(?:asap|urgent(?:ly)?|immediately|right\s+away)\b", text, flags=re.IGNORECASE)
    if match:
        return match.group(0)
    match = re.search(r"\b(?:by|before|until|end\s+of)\s+(?:the\s+)?(?:" + _MONTH_NAMES + r"|next\s+\w+)\b[\w ]{0,12}", text, flags=re.IGNORECASE)
    if match:
        return match.group(0).strip()
    return None


_COMMON_TECH = (
    (r"\bexpress\b", "Express"),
    (r"\bmongo\s*db\b|\bmongodb\b", "MongoDB"),
    (r"\bpostgres(?:ql)?\b|\bpostgre\s*sql\b", "PostgreSQL"),
    (r"\bmysql\b", "MySQL"),
    (r"\bredis\b", "Redis"),
    (r"\bdocker\b", "Docker"),
    (r"\bprisma\b", "Prisma"),
    (r"\bneon\s*db\b", "Neon DB"),
    (r"\bfirebase\b", "Firebase"),
    (r"\bsupabase\b", "Supabase"),
)

_TECH_CANONICAL = (
    (r"\breact(?:\.?js)?\b", "React.js"),
    (r"\bnext(?:\.?js)?\b", "Next.js"),
    (r"\bnode(?:\.?js)?\b", "Node.js"),
    (r"\bprisma\b", "Prisma"),
    (r"\bneon\b", "Neon DB"),
    (r"\bpostgres(?:ql)?\b", "PostgreSQL"),
    (r"\bmongo(?:db)?\b", "MongoDB"),
    (r"\bmysql\b", "MySQL"),
)


def extract_tech_details(value: str) -> list[str]:
    """Stack components mentioned in a brief ("tech stack: react, node and postgres")."""
    text = normalize_text(value)
    if not text:
        return []
    lower = text.lower()
    scanned = [label for pattern, label in _COMMON_TECH if re.search(pattern, lower)]

    items: list[str] = []
    marker = re.search(r"\btech(?:nology)?\s*stack\b\s*(?:is|:)?\s*", lower)
    if marker:
        tail = text[marker.end() :]
        tail_lower = tail.lower()
        ends = [
            found.start()
            for found in (
                re.search(r"\bbudget\b", tail_lower),
                re.search(r"\btimeline\b|\bdeadline\b", tail_lower),
                re.search(r"\bdeploy(?:ment)?\b|\bhost(?:ing|ed)?\b", tail_lower),
                re.search(r"\bdomain\b", tail_lower),
                re.search(r"\b\d+\s*(?:day|week|month|year)s?\b", tail_lower),
                re.search(r"[.!\n]", tail_lower),
            )
            if found
        ]
        segment = tail[: min(ends)] if ends else tail
        for part in re.split(r"\s*(?:,|/|&|\+|\band\b)\s*", segment, flags=re.IGNORECASE):
            part = re.sub(r"^\s*(?:some\s+of\s+the|some|the|a|an)\b\s*", "", part.strip(" ,.;:-"), flags=re.IGNORECASE)
            if not part:
                continue
            for pattern, label in _TECH_CANONICAL:
                if re.search(pattern, part, flags=re.IGNORECASE):
                    part = label
                    break
            items.append(part)

    seen: set[str] = set()
    unique: list[str] = []
    for item in items + scanned:
        canon = canonicalize(item)
        if canon and canon not in seen:
            seen.add(canon)
            unique.append(item)
    return unique


def is_change_technology_message(value: str) -> bool:
    return canonicalize(value) in CHANGE_TECH_CANONS


_PAGE_SIGNALS = (
    (r"\bproducts?\b|\bproduct\s+categor|\bcatalog(?:ue)?\b|\binventory\b|\bsku\b", "Products"),
    (r"\bsearch\b|\bfilters?\b|\bsort(?:ing)?\b", "Search"),
    (r"\breviews?\b|\bratings?\b", "Reviews/Ratings"),
    (r"\bwishlist\b|\bfavou?rites?\b|\bsave\s+for\s+later\b", "Wishlist"),
    (r"\bcart\b|\bcheckout\b|\bpayments?\b|\brazorpay\b|\bstripe\b", "Cart/Checkout"),
    (r"\border\s*tracking\b|\btrack\s*orders?\b", "Order Tracking"),
    (r"\bsign\s*up\b|\bsignup\b|\bregister\b|\blog\s*in\b|\blogin\b|\bauth(?:entication)?\b", "Account/Login"),
    (
        r"\badmin\s*(?:panel|dashboard|portal|console)\b|\bmanage\s+(?:products?|orders?|users?|inventory|stock)\b"
        r"|\b(?:product|order|user|inventory)\s+management\b|\b(?:coupons?|discounts?|promo\s*codes?)\b",
        "Admin Dashboard",
    ),
    (r"\banalytics\b|\breports?\b|\bmetrics\b|\binsights?\b", "Analytics Dashboard"),
    (r"\bnotifications?\b|\balerts?\b|\bsms\b", "Notifications"),
    (r"\blive\s+chat\b|\bchat\s+widget\b|\bsupport\s+widget\b|\bwhatsapp\b", "Chat/Support Widget"),
    (r"\bfaq\b|\bfrequently\s+asked\b", "FAQ"),
    (r"\bblog\b|\barticles?\b", "Blog"),
    (r"\btestimonials?\b|\bcustomer\s+stories\b", "Testimonials"),
    (r"\bpricing\b|\bsubscription\s+plans?\b|\bprice\s*plans?\b", "Pricing"),
    (r"\bportfolio\b|\bgallery\b|\blookbook\b", "Portfolio/Gallery"),
    (r"\bbook\s*now\b|\bbooking\b|\bappointments?\b", "Book Now"),
    (r"\bcontact\s+(?:us|page|form)\b", "Contact"),
    (r"\babout\s+(?:us|page)\b", "About"),
)

_ECOMMERCE_RE = re.compile(r"\becommerce\b|\bonline\s+(?:store|shop)\b", re.IGNORECASE)


def infer_pages_from_brief(
    suggestions: tuple[str, ...] | list[str] | None, raw_text: str, website_type_hint: str = ""
) -> list[str]:
    """
    Pick page/feature chips implied by a one-shot brief.
    Only trusted when at least two chips fire, or the brief is clearly an online store.
    """
    if not suggestions:
        return []
    text = normalize_for_suggestion_matching(raw_text)
    if not text:
        return []

    by_canon = {canonicalize(option): option for option in suggestions if canonicalize(option)}
    picked: set[str] = set()

    def add(label: str) -> None:
        option = by_canon.get(canonicalize(label))
        if option and canonicalize(option) != "none":
            picked.add(option)

    hint = normalize_for_suggestion_matching(website_type_hint)
    is_ecommerce = bool(_ECOMMERCE_RE.search(text) or _ECOMMERCE_RE.search(hint))
    if is_ecommerce:
        add("Shop/Store")

    for pattern, label in _PAGE_SIGNALS:
        if re.search(pattern, text, flags=re.IGNORECASE):
            add(label)

    if re.search(r"\b3d\b", text):
        if re.search(r"\banimations?\b", text):
            add("3D Animations")
        if re.search(r"\b(?:model\s+viewer|3d\s+viewer|viewer)\b", text):
            add("3D Model Viewer")

    ordered = [option for option in suggestions if option in picked]
    if len(ordered) < 2 and not is_ecommerce:
        return []
    return ordered
