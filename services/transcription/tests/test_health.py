"""
Tests for the transcription proxy health endpoint.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from transcription.health import _backend_status, get_backend_status, router, set_backend_status


def _make_app() -> FastAPI:
    """Minimal FastAPI app with just the health router."""
    app = FastAPI()
    app.include_router(router)
    return app


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def setup_method(self) -> None:
        _backend_status.clear()

    def teardown_method(self) -> None:
        _backend_status.clear()

    def test_no_backend_degraded(self) -> None:
        data = TestClient(_make_app()).get("/health").json()
        assert data == {"status": "degraded", "service": "transcription", "backends": {}}

    def test_backend_ready(self) -> None:
        set_backend_status("assemblyai", True)
        data = TestClient(_make_app()).get("/health").json()
        assert data["status"] == "ok"
        assert data["backends"] == {"assemblyai": True}

    def test_backend_not_ready(self) -> None:
        set_backend_status("assemblyai", False)
        data = TestClient(_make_app()).get("/health").json()
        assert data["status"] == "degraded"

    def test_get_backend_status_is_a_copy(self) -> None:
        set_backend_status("proxy", True)
        status = get_backend_status()
        status["proxy"] = False
        assert get_backend_status() == {"proxy": True}
