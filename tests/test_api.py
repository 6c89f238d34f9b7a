"""
Tests for the HTTP surface: question endpoint, capabilities, health and
middleware headers.
"""

import pytest
from fastapi.testclient import TestClient

from askrexi.config import settings
from askrexi.main import app


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(settings, "database_url", None)
    with TestClient(app) as test_client:
        yield test_client


class TestAskEndpoint:
    def test_fda_question(self, client):
        response = client.post(
            "/askrexi",
            json={"question": "What are the FDA guidelines for AI in drug development?"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["agent_used"] == "regulatory"
        assert body["data"]["sub_agent_used"] == "fda"
        assert body["data"]["confidence"] == 1.0
        assert body["data"]["sources"][0]["type"] == "regulation"

    def test_empty_body_gets_clarification(self, client):
        response = client.post("/askrexi", json={})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["agent_used"] == "general"
        assert data["subcategory"] == "clarification"
        assert data["confidence"] == 0.5

    def test_context_personalizes(self, client):
        response = client.post(
            "/askrexi",
            json={
                "question": "How do I complete the data governance assessment?",
                "context": {"preferences": {"expertise_level": "beginner"}},
            },
        )

        assert response.status_code == 200
        assert "managing and protecting data properly" in response.json()["data"]["answer"]

    def test_unknown_expertise_is_rejected(self, client):
        response = client.post(
            "/askrexi",
            json={"question": "Hi", "context": {"preferences": {"expertise_level": "guru"}}},
        )

        assert response.status_code == 422

    def test_correlation_id_is_echoed(self, client):
        response = client.post(
            "/askrexi",
            json={"question": "What is our current compliance score?"},
            headers={"X-Correlation-ID": "req-42"},
        )

        assert response.headers["X-Correlation-ID"] == "req-42"
        assert "X-Response-Time" in response.headers

    def test_correlation_id_is_generated(self, client):
        response = client.post("/askrexi", json={"question": "How do I get started?"})

        assert response.headers["X-Correlation-ID"]


class TestCapabilitiesEndpoint:
    def test_lists_every_domain(self, client):
        response = client.get("/askrexi/capabilities")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [item["domain"] for item in data] == ["regulatory", "assessment", "analytics", "general"]

        regulatory = data[0]
        assert [s["name"] for s in regulatory["specialists"]] == ["fda", "ema", "ich", "general-regulatory"]
        assert all(item["specialists"] == [] for item in data[1:])


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"]["knowledge_store"] == "in-memory"
        assert body["checks"]["domains"] == ["regulatory", "assessment", "analytics", "general"]

    def test_root(self, client):
        response = client.get("/")

        assert response.json()["service"] == "AskRexi"
