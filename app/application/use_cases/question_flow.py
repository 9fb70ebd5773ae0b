from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from app.domain.entities.question import ExpectedType, Question

REQUIRED_TAGS = frozenset({"name", "budget", "timeline", "description", "service_type"})

BRIEF_KEYS = frozenset({"brief", "summary", "description", "problem", "use_case", "business_info", "vision"})

BRIEF_QUESTION: dict[str, Any] = {
    "key": "brief",
    "patterns": ["brief", "summary", "overview", "requirements"],
    "templates": ["Please share a short brief of what you need (2-3 lines)."],
    "suggestions": None,
    "tags": ["description"],
    "required": True,
}

KEY_TAGS = (
    (r"^(?:name|full_name|first_name|client_name|your_name)$", "name"),
    (r"company|business_name|^business$|brand|organization|^project$|project_name", "company"),
    (r"budget|price|cost|spend", "budget"),
    (r"timeline|deadline|delivery|launch_date", "timeline"),
    (r"^(?:brief|summary|description|problem|use_case|business_info|vision|idea|about)$", "description"),
    (r"goal|objective|purpose", "goal"),
    (r"audience", "audience"),
    (r"location|city|country", "location"),
    (r"(?:service|website|app|project|bot|video|content|campaign)_type|^service$|^services$", "service_type"),
    (r"deliverable|output_format|formats?$", "deliverables"),
    (r"platform|channel", "platforms"),
    (r"style|tone|mood|design", "style"),
    (r"notes|requests|additional|anything_else", "notes"),
)

STOP_WORDS = frozenset(
    {
        "a",
        "an",
        "and",
        "are",
        "be",
        "do",
        "for",
        "from",
        "get",
        "have",
        "how",
        "i",
        "in",
        "is",
        "it",
        "me",
        "my",
        "of",
        "on",
        "or",
        "please",
        "provide",
        "share",
        "the",
        "to",
        "we",
        "what",
        "when",
        "where",
        "will",
        "would",
        "you",
        "your",
    }
)

PROMPT_KEY_RULES = (
    (r"\bfirst name\b", "first_name"),
    (r"\bfull name\b", "full_name"),
    (r"\bcompany\b|\bbrand\b|\bproject name\b", "company_name"),
    (r"\byour name\b|^name$", "name"),
    (r"\blocation\b|\bbased\b|\bcity\b|\bcountry\b", "location"),
    (r"\bvideo\b.*\btype\b", "video_type"),
    (r"\baudio\b.*\btype\b", "audio_service_type"),
    (r"\bservice\b.*\btype\b", "service_type"),
    (r"\bprimary goal\b|\bgoal\b|\bpurpose\b", "goal"),
    (r"\bfootage\b", "footage"),
    (r"\bplatforms?\b|\bused\b|\bpublished\b", "platforms"),
    (r"\bduration\b|\blength\b", "duration"),
    (r"\bstyle\b|\btone\b|\bmood\b", "style"),
    (r"\bbudget\b", "budget"),
    (r"\btimeline\b|\bdelivery\b|\bcompleted\b|\bstart\b", "timeline"),
    (r"\bdeliverables?\b", "deliverables"),
    (r"\btarget audience\b", "target_audience"),
    (r"\bword count\b", "word_count"),
    (r"\boutput format\b", "output_format"),
    (r"\breferences?\b|\bportfolio\b|\binspiration\b", "references"),
    (r"\bspecial requests?\b|\bnotes?\b", "notes"),
)


def normalize_label(value: str) -> str:
    text = re.sub(r"\s+", " ", value or "").strip().lower().replace("&", "and")
    text = re.sub(r"[^\w\s]", " ", text)
    return re.sub(r"\s+", " ", text).strip()


def slugify(value: str) -> str:
    return normalize_label(value).replace(" ", "_")


def tokenize_label(value: str) -> list[str]:
    return [token for token in normalize_label(value).split(" ") if token and token not in STOP_WORDS]


def _tokens_match(label_tokens: list[str], prompt_tokens: list[str]) -> bool:
    if not label_tokens:
        return False
    for token in label_tokens:
        matched = any(
            prompt_token == token
            or (len(prompt_token) >= 4 and len(token) >= 4 and (prompt_token.startswith(token) or token.startswith(prompt_token)))
            for prompt_token in prompt_tokens
        )
        if not matched:
            return False
    return True


def match_label_to_question(labels: Iterable[str], prompt: str) -> str | None:
    """First label whose meaningful tokens all appear (prefix-tolerant) in the prompt."""
    if not prompt:
        return None
    prompt_tokens = tokenize_label(prompt)
    for label in labels:
        if _tokens_match(tokenize_label(label), prompt_tokens):
            return label
    return None


def infer_key_from_prompt(prompt: str) -> str:
    text = normalize_label(prompt)
    for pattern, key in PROMPT_KEY_RULES:
        if re.search(pattern, text):
            return key
    return slugify(" ".join(text.split(" ")[:6]))


def infer_tags_from_key(key: str) -> set[str]:
    return {tag for pattern, tag in KEY_TAGS if re.search(pattern, key or "")}


def infer_tags_from_prompt(prompt: str) -> set[str]:
    text = normalize_label(prompt)
    tags: set[str] = set()
    has_name = re.search(r"\bname\b", text) is not None
    is_notes = re.search(r"\bspecial\b|\bnotes?\b|\brequests?\b", text) is not None
    is_company = has_name and re.search(r"\b(company|brand|business|organization|project)\b", text) is not None

    if has_name:
        tags.add("company" if is_company else "name")
    if re.search(r"\bbased\b|\blocation\b|\bcity\b|\bcountry\b", text):
        tags.add("location")
    if re.search(r"\bbudget\b|\bprice\b|\bcost\b|\bspend\b", text):
        tags.add("budget")
    if re.search(r"\btimeline\b|\bdeadline\b|\bdelivery\b|\bcompleted\b|\bwhen\b", text):
        tags.add("timeline")
    if re.search(r"\bgoal\b|\bpurpose\b|\bobjective\b", text):
        tags.add("goal")
    if re.search(r"\baudience\b|\btarget\b", text):
        tags.add("audience")
    if not is_notes and (
        re.search(r"\bdescribe\b|\bbriefly\b|\bsummary\b|\bvision\b|\btell us\b", text)
        or (re.search(r"\babout your\b", text) and re.search(r"\b(business|industry|company|brand|project|product|idea)\b", text))
    ):
        tags.add("description")
    if re.search(r"\bservices?\b", text) and re.search(r"\btype\b|\binterested\b", text):
        tags.add("service_type")
    if re.search(r"\btype\b", text) and re.search(
        r"\b(video|audio|support|development|design|marketing|content|writing|website|app|software)\b", text
    ):
        tags.add("service_type")
    if re.search(r"\bdeliverables?\b|\bformats?\b|\boutput\b", text):
        tags.add("deliverables")
    if re.search(r"\bplatforms?\b|\bchannels?\b|\bpublished\b", text):
        tags.add("platforms")
    if re.search(r"\bhow many\b|\bnumber of\b|\bword count\b|\bvolume\b", text):
        tags.add("quantity")
    if re.search(r"\bstyle\b|\btone\b|\bmood\b", text):
        tags.add("style")
    if is_notes:
        tags.add("notes")
    return tags


def infer_tags_from_label(label: str) -> set[str]:
    """Tags implied by a "Required Fields" / "Optional Fields" bullet."""
    text = normalize_label(label)
    tags: set[str] = set()
    has_company = re.search(r"\bcompany\b|\bbrand\b|\bbusiness\b|\borganization\b", text) is not None
    if re.search(r"\bname\b", text):
        tags.add("company" if has_company or re.search(r"\bproject\b", text) else "name")
    elif has_company:
        tags.add("company")
    if re.search(r"\blocation\b|\bcity\b|\bcountry\b|\bbased\b", text):
        tags.add("location")
    if re.search(r"\bgoal\b|\bpurpose\b|\bobjective\b", text):
        tags.add("goal")
    if re.search(r"\btimeline\b|\bdate\b|\bdelivery\b|\bcompletion\b", text):
        tags.add("timeline")
    if re.search(r"\bbudget\b", text):
        tags.add("budget")
    if re.search(r"\bformat\b|\bdeliverables?\b", text):
        tags.add("deliverables")
    if re.search(r"\bplatforms?\b|\bchannels?\b|\busage\b", text):
        tags.add("platforms")
    if re.search(r"\bservice\b", text) and re.search(r"\btype\b", text):
        tags.add("service_type")
    if re.search(r"\btone\b|\bmood\b|\bstyle\b", text):
        tags.add("style")
    if re.search(r"\bdescription\b|\bsummary\b|\bbrief\b|\bvision\b|\bidea\b", text):
        tags.add("description")
    return tags


def infer_expected_type(
    prompt: str, tags: Iterable[str], suggestions: Iterable[str] | None, multi_select: bool
) -> ExpectedType:
    tag_set = set(tags)
    # budget and timeline chips are shortcuts for typed values
    if "budget" in tag_set:
        return ExpectedType.money
    if "timeline" in tag_set:
        return ExpectedType.duration
    if suggestions:
        return ExpectedType.list if multi_select else ExpectedType.enum
    text = normalize_label(prompt)
    if re.search(r"\bword count\b|\bhow many\b|\bnumber of\b|\bvolume\b", text):
        return ExpectedType.number_range
    return ExpectedType.text


def infer_required(tags: Iterable[str]) -> bool:
    return bool(REQUIRED_TAGS.intersection(tags))


def infer_examples(expected_type: ExpectedType, suggestions: tuple[str, ...] | None) -> tuple[str, ...]:
    if suggestions:
        return tuple(suggestions[:2])
    if expected_type == ExpectedType.money:
        return ("INR 100000", "INR 150000-300000")
    if expected_type == ExpectedType.duration:
        return ("2 weeks", "1 month")
    if expected_type == ExpectedType.number_range:
        return ("100", "100-500")
    return ()


def _templates(config: Mapping[str, Any]) -> tuple[tuple[str, ...], dict[str, tuple[str, ...]] | None]:
    templates = config.get("templates")
    by_locale = config.get("templates_by_locale")
    if isinstance(templates, Mapping):
        by_locale, templates = templates, None
    if isinstance(templates, str):
        templates = [templates]
    if not templates:
        for fallback in ("text", "question", "prompt"):
            if isinstance(config.get(fallback), str):
                templates = [config[fallback]]
                break
    locale_map = None
    if by_locale:
        locale_map = {
            locale: (value,) if isinstance(value, str) else tuple(value) for locale, value in by_locale.items() if value
        }
        if not templates:
            templates = locale_map.get("en") or next(iter(locale_map.values()), ())
    return tuple(templates or ()), locale_map


def question_from_config(config: Mapping[str, Any], index: int = 0) -> Question:
    key = str(config.get("key") or config.get("field") or config.get("id") or f"q{index + 1}")
    templates, by_locale = _templates(config)
    prompt = templates[0] if templates else key.replace("_", " ")

    suggestions = config.get("suggestions")
    suggestions = tuple(str(item) for item in suggestions) if suggestions else None
    multi_select = bool(config.get("multi_select", False))

    tags = set(config.get("tags") or ())
    if not tags:
        tags = infer_tags_from_key(key) or infer_tags_from_prompt(prompt)

    raw_type = config.get("expected_type")
    expected_type = (
        ExpectedType(raw_type) if raw_type else infer_expected_type(prompt, tags, suggestions, multi_select)
    )
    required = config.get("required")
    if required is None:
        required = infer_required(tags)

    max_select = config.get("max_select")
    next_id = config.get("next_id")
    return Question(
        key=key,
        id=str(config.get("id") or key),
        templates=templates,
        templates_by_locale=by_locale,
        patterns=tuple(config.get("patterns") or ()),
        suggestions=suggestions,
        multi_select=multi_select,
        max_select=int(max_select) if max_select else None,
        expected_type=expected_type,
        required=bool(required),
        tags=frozenset(tags),
        next_id=str(next_id).strip() or None if next_id is not None else None,
        start=bool(config.get("start", False)),
        examples=tuple(config.get("examples") or infer_examples(expected_type, suggestions)),
    )


def has_explicit_flow(configs: Iterable[Mapping[str, Any]]) -> bool:
    return any(config.get("id") or config.get("next_id") or config.get("start") for config in configs)


def with_mandatory_brief(configs: list[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    """Insert a "brief" question after the first one unless the bank has a flow graph or already asks for one."""
    if has_explicit_flow(configs):
        return list(configs)
    if any(config.get("key") in BRIEF_KEYS for config in configs):
        return list(configs)
    if not configs:
        return [BRIEF_QUESTION]
    insert_at = min(1, len(configs))
    return [*configs[:insert_at], BRIEF_QUESTION, *configs[insert_at:]]


def dedupe_questions(questions: Iterable[Question]) -> list[Question]:
    seen: set[str] = set()
    unique = []
    for question in questions:
        if question.key in seen:
            continue
        seen.add(question.key)
        unique.append(question)
    return unique


def order_questions_by_flow(questions: list[Question]) -> list[Question]:
    """Walk next_id edges from the start node; questions off the chain keep their listed order after it."""
    if not questions:
        return []
    by_id: dict[str, Question] = {}
    for question in questions:
        by_id.setdefault(question.id, question)
    targets = {question.next_id for question in questions if question.next_id}

    start = next((q for q in questions if q.start), None) or next(
        (q for q in questions if q.id not in targets), questions[0]
    )
    ordered: list[Question] = []
    visited: set[str] = set()
    current: Question | None = start
    while current is not None and current.id not in visited:
        ordered.append(current)
        visited.add(current.id)
        current = by_id.get(current.next_id) if current.next_id else None
    ordered.extend(question for question in questions if question.id not in visited)
    return ordered


def build_question_list(configs: list[Mapping[str, Any]], include_brief: bool = True) -> tuple[Question, ...]:
    source = with_mandatory_brief(configs) if include_brief else list(configs)
    questions = [question_from_config(config, index) for index, config in enumerate(source)]
    return tuple(dedupe_questions(order_questions_by_flow(questions)))
