"""Tests for the shared HTTP middleware."""

from __future__ import annotations

from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from mindease_common.middleware import LoggingMiddleware, add_cors


def _make_app(origins: list[str]) -> FastAPI:
    app = FastAPI()

    @app.get("/ping")
    async def ping() -> dict[str, str]:
        return {"pong": "ok"}

    app.add_middleware(LoggingMiddleware)
    add_cors(app, origins)
    return app


class TestLoggingMiddleware:
    def test_logs_request(self) -> None:
        with patch("mindease_common.middleware.logger") as mock_logger:
            resp = TestClient(_make_app(["*"])).get("/ping")
        assert resp.status_code == 200
        mock_logger.info.assert_called_once()
        args, kwargs = mock_logger.info.call_args
        assert args == ("http_request",)
        assert kwargs["path"] == "/ping"
        assert kwargs["status"] == 200


class TestCors:
    def test_wildcard_without_credentials(self) -> None:
        resp = TestClient(_make_app(["*"])).get("/ping", headers={"Origin": "http://app.test"})
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-credentials" not in resp.headers

    def test_explicit_origin_with_credentials(self) -> None:
        app = _make_app(["http://localhost:5173"])
        resp = TestClient(app).get("/ping", headers={"Origin": "http://localhost:5173"})
        assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert resp.headers["access-control-allow-credentials"] == "true"
