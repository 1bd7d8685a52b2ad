"""
Transcription proxy entry point for MindEase.

Creates the AssemblyAI backend, exposes the ``/transcribe`` and
``/transcription/{id}`` relay endpoints plus health and metrics, and
runs under Uvicorn.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from mindease_common.config import get_settings
from mindease_common.logging import configure_logging
from mindease_common.middleware import LoggingMiddleware, add_cors

from transcription.backend_base import TranscriptionBackend
from transcription.backend_registry import create_backend
from transcription.health import router as health_router
from transcription.health import set_backend_status
from transcription.routes import router as transcription_router

logger = structlog.get_logger()

# The proxy always talks to the upstream collaborator directly.
UPSTREAM_BACKEND = "assemblyai"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: create the upstream backend, close it on shutdown."""
    backend: TranscriptionBackend | None = getattr(app.state, "backend", None)
    owns_backend = backend is None
    if backend is None:
        backend = create_backend(UPSTREAM_BACKEND)
        app.state.backend = backend

    ready = await backend.health_check()
    set_backend_status(backend.name, ready)
    if not ready:
        logger.warning("proxy_backend_not_ready", backend=backend.name)
    logger.info("proxy_startup", backend=backend.name)

    yield

    logger.info("proxy_shutdown")
    if owns_backend:
        await backend.close()


def create_app(backend: TranscriptionBackend | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        backend: Backend to relay to; created from settings at startup
            when omitted.
    """
    app = FastAPI(title="MindEase Transcription Proxy", lifespan=lifespan)
    if backend is not None:
        app.state.backend = backend

    app.include_router(transcription_router)
    app.include_router(health_router)
    app.mount("/metrics", make_asgi_app())

    app.add_middleware(LoggingMiddleware)
    add_cors(app)
    return app


def main() -> None:
    """Run the transcription proxy with Uvicorn."""
    settings = get_settings()
    configure_logging("transcription-proxy")
    uvicorn.run(
        create_app(),
        host=settings.proxy_host,
        port=settings.proxy_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
