"""Shared fixtures for companion service tests."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

# Set env vars before any mindease_common import.
os.environ.setdefault("ME_STORAGE_BACKEND", "memory")
os.environ.setdefault("ME_LOG_JSON", "false")

from mindease_common.storage import InMemoryKeyValueStore  # noqa: E402

from companion.conversation import CompanionConversation  # noqa: E402
from companion.main import create_app  # noqa: E402


@pytest.fixture()
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def conversation(store: InMemoryKeyValueStore) -> CompanionConversation:
    return CompanionConversation(store)


@pytest.fixture()
def client(store: InMemoryKeyValueStore) -> Iterator[TestClient]:
    """TestClient with the lifespan running over an in-memory store."""
    with TestClient(create_app(store=store)) as c:
        yield c
