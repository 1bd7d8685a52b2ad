"""
Health check endpoint for the MindEase companion service.

Reports the key-value store's connectivity alongside the service name.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """Return service health including storage connectivity."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        storage = "not_configured"
    else:
        try:
            storage = "healthy" if await store.health_check() else "unhealthy"
        except Exception:  # noqa: BLE001
            storage = "unhealthy"

    status = "ok" if storage in ("healthy", "not_configured") else "degraded"
    return {"status": status, "service": "companion", "storage": storage}
