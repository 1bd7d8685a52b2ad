"""
Health check endpoint for the MindEase transcription proxy.

Exposes a ``/health`` endpoint returning service status and the
readiness of the configured transcription backend.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()

# Populated by main.py after backend initialisation.
_backend_status: dict[str, bool] = {}


def set_backend_status(name: str, ready: bool) -> None:
    """Update the readiness flag for a backend."""
    _backend_status[name] = ready


def get_backend_status() -> dict[str, bool]:
    """Return the current backend readiness map."""
    return dict(_backend_status)


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Return service health including backend readiness.

    Returns:
        Dict with ``status``, ``service``, and ``backends`` keys.
    """
    all_ok = bool(_backend_status) and any(_backend_status.values())
    status = "ok" if all_ok else "degraded"
    return {
        "status": status,
        "service": "transcription",
        "backends": dict(_backend_status),
    }
