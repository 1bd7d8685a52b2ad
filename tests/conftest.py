"""Shared pytest fixtures for integration tests.

Sets the MindEase environment before any service module is imported so
every test runs against in-memory storage and console logging.
"""

import os

import pytest

os.environ.setdefault("ME_STORAGE_BACKEND", "memory")
os.environ.setdefault("ME_LOG_JSON", "false")


@pytest.fixture(scope="session")
def proxy_base_url() -> str:
    """Base URL the proxy client uses against the in-process proxy app."""
    return "http://proxy.test"
