"""
Tests for the HTTP surface.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.application.use_cases.handle_chat_turn import COMPLETE_MESSAGE, HandleChatTurnUseCase
from app.domain.entities.conversation_state import EngineOptions
from app.infrastructure.knowledge.composite_source import CompositeQuestionSource
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from app.infrastructure.knowledge.service_registry import ServiceRegistry
from app.main import app
from app.wiring.dependencies import get_chat_turn_use_case


@pytest.fixture
def client():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "voiceover.md").write_text(
            "# Voiceover - Narration for ads and explainers\n"
            "## Questions\n"
            "1. What's your name?\n"
            "2. Which language? [SUGGESTIONS: English | Hindi | Other]\n"
            "## Required Fields\n"
            "- Name\n"
            "- Language\n",
            encoding="utf-8",
        )
        use_case = HandleChatTurnUseCase(
            questions=CompositeQuestionSource(ServiceCatalogStore(tmpdir), ServiceRegistry()),
            options=EngineOptions(),
        )
        app.dependency_overrides[get_chat_turn_use_case] = lambda: use_case
        try:
            yield TestClient(app)
        finally:
            app.dependency_overrides.clear()


def test_health(client):
    """Health check responds."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_services(client):
    """Catalog documents are listed before the built-in banks."""
    response = client.get("/api/v1/services")
    assert response.status_code == 200
    services = response.json()["services"]
    assert services[0] == "Voiceover"
    assert "Website Development" in services
    assert "General Services" not in services


def test_opening_message(client):
    """The opening carries the intro, the first question and its tags."""
    response = client.get("/api/v1/services/website-development/opening")
    assert response.status_code == 200
    data = response.json()
    assert data["question_key"] == "name"
    assert data["text"].startswith("Hey! Ready to build your website?")
    assert data["text"].endswith("[QUESTION_KEY: name]")
    assert data["is_complete"] is False
    assert "name" in data["missing_required"]


def test_opening_unknown_service(client):
    """Unknown services are reported as 404."""
    response = client.get("/api/v1/services/underwater-basket-weaving/opening")
    assert response.status_code == 404


def test_chat_turn_asks_next_question(client):
    """A reply to the first question moves the conversation on."""
    payload = {
        "service": "Website Development",
        "history": [
            {"role": "assistant", "content": "What's your name?\n[QUESTION_KEY: name]"},
            {"role": "user", "content": "Rahul"},
        ],
    }
    response = client.post("/api/v1/chat/turn", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["question_key"] == "company"
    assert data["collected_data"]["name"] == "Rahul"
    assert "Rahul" in data["text"]


def test_chat_turn_completes_catalog_service(client):
    """Answering every catalog question returns the proposal."""
    payload = {
        "service": "voiceover",
        "history": [
            {"role": "assistant", "content": "What's your name?", "question_key": "name"},
            {"role": "user", "content": "Priya"},
            {"role": "assistant", "content": "Which language?", "question_key": "language"},
            {"role": "user", "content": "Hindi"},
        ],
    }
    response = client.post("/api/v1/chat/turn", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["is_complete"] is True
    assert data["text"] == COMPLETE_MESSAGE
    assert data["question_key"] is None
    assert "[PROPOSAL_DATA]" in data["proposal"]
    assert "Client Name: Priya" in data["proposal"]
    assert data["collected_data"] == {"name": "Priya", "language": "Hindi"}


def test_chat_turn_validation(client):
    """Malformed requests are rejected before reaching the engine."""
    assert client.post("/api/v1/chat/turn", json={"service": ""}).status_code == 422
    response = client.post(
        "/api/v1/chat/turn",
        json={"service": "Website Development", "history": [{"role": "system", "content": "hi"}]},
    )
    assert response.status_code == 422
    assert client.post("/api/v1/chat/turn", json={"service": "nope"}).status_code == 404
