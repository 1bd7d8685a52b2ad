"""
Tests for the companion chat API.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from companion.responses import QUICK_PROMPTS, WELCOME_MESSAGE


class TestCompanionRoutes:
    def test_prompts(self, client: TestClient) -> None:
        resp = client.get("/api/v1/companion/prompts")
        assert resp.status_code == 200
        assert resp.json() == {"prompts": list(QUICK_PROMPTS)}

    def test_empty_conversation(self, client: TestClient) -> None:
        data = client.get("/api/v1/companion/u1/messages").json()
        assert data["user_id"] == "u1"
        assert data["total"] == 1
        assert data["messages"][0]["content"] == WELCOME_MESSAGE

    def test_send_message(self, client: TestClient) -> None:
        resp = client.post("/api/v1/companion/u1/messages", json={"text": "I'm feeling anxious"})
        assert resp.status_code == 201
        body = resp.json()
        assert body["role"] == "ai"
        assert body["category"] == "anxiety"

        data = client.get("/api/v1/companion/u1/messages").json()
        assert data["total"] == 3

    def test_blank_message_rejected(self, client: TestClient) -> None:
        resp = client.post("/api/v1/companion/u1/messages", json={"text": "   "})
        assert resp.status_code == 422

    def test_missing_text_rejected(self, client: TestClient) -> None:
        resp = client.post("/api/v1/companion/u1/messages", json={})
        assert resp.status_code == 422

    def test_clear(self, client: TestClient) -> None:
        client.post("/api/v1/companion/u1/messages", json={"text": "hello"})
        resp = client.delete("/api/v1/companion/u1/messages")
        assert resp.status_code == 204
        assert client.get("/api/v1/companion/u1/messages").json()["total"] == 1


class TestCompanionHealth:
    def test_health_with_memory_store(self, client: TestClient) -> None:
        data = client.get("/health").json()
        assert data == {"status": "ok", "service": "companion", "storage": "healthy"}

    def test_health_degraded_when_store_unhealthy(self, client: TestClient, store) -> None:
        async def _down() -> bool:
            return False

        store.health_check = _down
        data = client.get("/health").json()
        assert data["status"] == "degraded"
        assert data["storage"] == "unhealthy"
