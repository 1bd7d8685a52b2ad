"""
mindease-common: Shared library for MindEase.

Provides common data models, configuration management, key-value
storage, structured logging, HTTP middleware, and Prometheus metrics
used across the MindEase services.
"""

from mindease_common.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
