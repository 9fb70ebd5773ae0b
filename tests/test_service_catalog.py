"""
Tests for markdown service documents and the question-source chain.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

from app.application.exceptions import ServiceCatalogError
from app.domain.entities.question import ExpectedType
from app.infrastructure.knowledge.composite_source import CompositeQuestionSource
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore, parse_service_document
from app.infrastructure.knowledge.service_registry import ServiceRegistry

VIDEO_DOCUMENT = (Path(__file__).resolve().parents[1] / "data" / "services" / "video-services.md").read_text(
    encoding="utf-8"
)


def test_video_document_keys_and_required_flags():
    """Field labels name the keys; required-ness follows the labels."""
    definition = parse_service_document(VIDEO_DOCUMENT, "video-services")

    assert definition.display_name == "Video Services"
    assert definition.from_catalog
    assert [question.key for question in definition.questions] == [
        "name",
        "video_type",
        "platforms",
        "project_brief",
        "budget",
        "timeline",
        "special_requests",
    ]
    required = {question.key: question.required for question in definition.questions}
    assert required == {
        "name": True,
        "video_type": True,
        "platforms": False,
        "project_brief": True,
        "budget": True,
        "timeline": False,
        "special_requests": False,
    }


def test_video_document_types_and_chips():
    """Chips become choice questions; budget and timeline stay typed."""
    questions = {question.key: question for question in parse_service_document(VIDEO_DOCUMENT, "video").questions}

    assert questions["video_type"].expected_type == ExpectedType.enum
    assert questions["video_type"].suggestions[-1] == "Other"
    assert questions["platforms"].expected_type == ExpectedType.list
    assert questions["platforms"].multi_select is True
    assert questions["budget"].expected_type == ExpectedType.money
    assert questions["timeline"].expected_type == ExpectedType.duration
    assert questions["project_brief"].has_tag("description")
    assert questions["budget"].examples == ("INR 100000", "INR 150000-300000")


def test_inline_chips_continuation_lines_and_duplicate_keys():
    """Chips may sit on the question line, prompts may wrap, repeated keys get a suffix."""
    definition = parse_service_document(
        "# Branding\n"
        "## Questions\n"
        "1. What's your\n"
        "   name?\n"
        "2. Preferred style? [SUGGESTIONS: Minimal | Bold | Playful]\n"
        "3. What's your budget?\n"
        "4. What's your budget for printing?\n",
        "branding",
    )
    questions = definition.questions

    assert definition.display_name == "Branding"
    assert questions[0].templates == ("What's your name?",)
    assert questions[0].key == "name"
    assert questions[1].suggestions == ("Minimal", "Bold", "Playful")
    assert questions[1].templates == ("Preferred style?",)
    assert [question.key for question in questions[2:]] == ["budget", "budget_2"]
    assert "brief" not in [question.key for question in questions]


def test_document_without_questions_is_rejected():
    """A document with no numbered questions cannot be used."""
    with pytest.raises(ServiceCatalogError):
        parse_service_document("# Empty\n## Required Fields\n- Name\n", "empty")


def test_store_reads_directory_and_skips_broken_documents():
    """Every readable document is served by display name and by file name."""
    with tempfile.TemporaryDirectory() as tmpdir:
        directory = Path(tmpdir)
        (directory / "video-services.md").write_text(VIDEO_DOCUMENT, encoding="utf-8")
        (directory / "broken.md").write_text("# Broken\nno questions here\n", encoding="utf-8")

        store = ServiceCatalogStore(directory)

        assert store.list_services() == ["Video Services"]
        assert store.get_definition("Video Services").display_name == "Video Services"
        assert store.get_definition("video-services") is store.get_definition("video services")
        assert store.get_definition("broken") is None
        assert store.get_definition("") is None


def test_store_reloads_only_when_files_change():
    """The parsed catalog is reused until a document's mtime changes."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "video-services.md"
        path.write_text(VIDEO_DOCUMENT, encoding="utf-8")
        store = ServiceCatalogStore(tmpdir)

        first = store.catalog()
        assert store.catalog() is first

        path.write_text(VIDEO_DOCUMENT.replace("# Video Services", "# Video Production"), encoding="utf-8")
        stat = path.stat()
        os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

        second = store.catalog()
        assert second is not first
        assert store.list_services() == ["Video Production"]


def test_missing_directory_is_an_empty_catalog():
    """A catalog directory that does not exist serves nothing."""
    store = ServiceCatalogStore("/nonexistent/services")
    assert dict(store.catalog()) == {}
    assert store.list_services() == []


def test_catalog_takes_precedence_over_registry():
    """The first source that knows a service wins; listings are merged."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "website.md").write_text(
            "# Website Development\n## Questions\n1. What's your name?\n2. What's your budget?\n",
            encoding="utf-8",
        )
        source = CompositeQuestionSource(ServiceCatalogStore(tmpdir), ServiceRegistry())

        assert source.get_definition("Website Development").source == "catalog"
        assert source.get_definition("App Development").source == "registry"
        assert source.get_definition("Underwater Basket Weaving") is None

        services = source.list_services()
        assert services[0] == "Website Development"
        assert services.count("Website Development") == 1
        assert "App Development" in services


def test_registry_serves_every_built_in_service():
    """Every built-in bank is listed and reachable by name or alias."""
    registry = ServiceRegistry()
    services = registry.list_services()

    for name in (
        "AI Automation",
        "Creative & Design",
        "Customer Support",
        "Influencer/UGC Marketing",
        "Lead Generation",
        "SEO Optimization",
        "Video Services",
        "Writing & Content",
    ):
        assert name in services
    assert registry.get_definition("seo").display_name == "SEO Optimization"
    assert registry.get_definition("influencer-ugc-marketing").display_name == "Influencer/UGC Marketing"
    assert registry.get_definition("copywriting").display_name == "Writing & Content"


def test_ported_banks_keep_their_question_types():
    """Flow order, injected briefs and typed budget/timeline questions come out of the bank config."""
    registry = ServiceRegistry()

    automation = registry.get_definition("AI Automation")
    assert [question.key for question in automation.questions] == [
        "automation_process",
        "brief",
        "integrations",
        "automation_type",
        "complexity",
        "timeline",
        "budget",
    ]
    assert automation.questions[0].required is True

    seo = {question.key: question for question in registry.get_definition("SEO Optimization").questions}
    assert not seo["website"].has_tag("name")
    assert seo["website"].required is False
    assert seo["budget"].expected_type == ExpectedType.money
    assert seo["timeline"].expected_type == ExpectedType.duration

    leads = [question.key for question in registry.get_definition("Lead Generation").questions]
    assert leads[:3] == ["name", "brief", "business"]
