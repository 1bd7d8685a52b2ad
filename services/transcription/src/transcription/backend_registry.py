"""
Transcription backend registry for MindEase.

Maintains a registry of available transcription backend
implementations, enabling instantiation of the configured backend by
identifier string.
"""

from __future__ import annotations

import structlog

from mindease_common.config import get_settings

from transcription.backend_base import TranscriptionBackend
from transcription.backends import AssemblyAIBackend, ProxyBackend

logger = structlog.get_logger()

# Global mapping of backend name → backend class.
_REGISTRY: dict[str, type[TranscriptionBackend]] = {}


def register_backend(name: str, cls: type[TranscriptionBackend]) -> None:
    """Register a backend class under *name*.

    Raises:
        TypeError: If *cls* is not a subclass of :class:`TranscriptionBackend`.
    """
    if not (isinstance(cls, type) and issubclass(cls, TranscriptionBackend)):
        raise TypeError(f"{cls!r} is not a subclass of TranscriptionBackend")
    _REGISTRY[name] = cls
    logger.debug("transcription_backend_registered", backend=name)


def get_backend_class(name: str) -> type[TranscriptionBackend]:
    """Look up a registered backend class by *name*.

    Raises:
        KeyError: If *name* is not registered.
    """
    if name not in _REGISTRY:
        available = list(_REGISTRY.keys())
        raise KeyError(f"Unknown transcription backend '{name}'. Available: {available}")
    return _REGISTRY[name]


def list_backends() -> list[str]:
    """Return the names of all registered backends."""
    return list(_REGISTRY.keys())


def clear_registry() -> None:
    """Remove all registered backends (useful in tests)."""
    _REGISTRY.clear()


def register_default_backends() -> None:
    """Register the built-in backend classes."""
    register_backend("assemblyai", AssemblyAIBackend)
    register_backend("proxy", ProxyBackend)


def create_backend(name: str | None = None) -> TranscriptionBackend:
    """Instantiate the backend identified by *name* from settings.

    Args:
        name: Backend identifier; defaults to ``Settings.transcription_backend``.
    """
    settings = get_settings()
    name = name or settings.transcription_backend
    if not _REGISTRY:
        register_default_backends()
    cls = get_backend_class(name)

    if cls is AssemblyAIBackend:
        return AssemblyAIBackend(
            settings.assemblyai_api_key,
            base_url=settings.assemblyai_base_url,
            timeout=settings.http_timeout_s,
        )
    if cls is ProxyBackend:
        return ProxyBackend(settings.proxy_url, timeout=settings.http_timeout_s)
    return cls()  # type: ignore[call-arg]
