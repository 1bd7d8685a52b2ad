"""
Companion service entry point for MindEase.

Opens the key-value store, wires the conversation manager, registers
the chat and health routers, and exposes Prometheus metrics.
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
from mindease_common.storage import KeyValueStore, create_store

from companion import health, routes
from companion.conversation import CompanionConversation

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    store: KeyValueStore = app.state.store
    await store.connect()
    app.state.conversation = CompanionConversation(store)
    logger.info("companion_startup", storage=type(store).__name__)

    yield

    logger.info("companion_shutdown")
    await store.close()


def create_app(store: KeyValueStore | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    Args:
        store: Key-value store; created from ``Settings.storage_backend``
            when omitted.
    """
    app = FastAPI(title="MindEase Companion", version="0.1.0", lifespan=lifespan)
    app.state.store = store if store is not None else create_store()

    app.include_router(routes.router, prefix="/api/v1")
    app.include_router(health.router)
    app.mount("/metrics", make_asgi_app())

    app.add_middleware(LoggingMiddleware)
    add_cors(app)
    return app


def main() -> None:
    """Run the companion service with Uvicorn."""
    settings = get_settings()
    configure_logging("companion")
    uvicorn.run(
        create_app(),
        host=settings.companion_host,
        port=settings.companion_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
