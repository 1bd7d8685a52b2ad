"""Shared fixtures for transcription service tests."""

from __future__ import annotations

import asyncio
import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

# Set env vars before any mindease_common import.
os.environ.setdefault("ME_ASSEMBLYAI_API_KEY", "test-api-key")
os.environ.setdefault("ME_STORAGE_BACKEND", "memory")
os.environ.setdefault("ME_LOG_JSON", "false")

from mindease_common.models import TranscriptionJob  # noqa: E402

from transcription.backend_base import TranscriptionBackend  # noqa: E402
from transcription.controller import TranscriptionController  # noqa: E402
from transcription.errors import SubmissionError  # noqa: E402


class FakeBackend(TranscriptionBackend):
    """Scripted in-memory backend.

    ``statuses`` is consumed one entry per ``get_job`` call (the last
    entry repeats).  Entries are either a status string, a
    ``(status, text)`` tuple, or an exception instance to raise.  When
    ``gate`` is set, every ``get_job`` waits on it before answering;
    ``create_gate`` does the same for ``create_job``.
    """

    def __init__(
        self,
        statuses: list[object] | None = None,
        *,
        create_error: Exception | None = None,
        gate: asyncio.Event | None = None,
        create_gate: asyncio.Event | None = None,
    ) -> None:
        self.statuses = list(statuses or ["processing"])
        self.create_error = create_error
        self.gate = gate
        self.create_gate = create_gate
        self.create_calls: list[bytes] = []
        self.get_calls: list[str] = []
        self.in_flight = asyncio.Event()
        self.closed = False
        self._next_job = 0

    @property
    def name(self) -> str:
        return "fake"

    async def create_job(self, audio: bytes, *, mime_type: str = "audio/webm") -> str:
        self.create_calls.append(audio)
        if self.create_gate is not None:
            await self.create_gate.wait()
        if self.create_error is not None:
            raise self.create_error
        if not audio:
            raise SubmissionError("empty audio")
        self._next_job += 1
        return f"J{self._next_job}"

    async def get_job(self, job_id: str) -> TranscriptionJob:
        self.get_calls.append(job_id)
        index = min(len(self.get_calls), len(self.statuses)) - 1
        entry = self.statuses[index]
        self.in_flight.set()
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, tuple):
            status, text = entry
            return TranscriptionJob(job_id=job_id, status=status, text=text)
        return TranscriptionJob(job_id=job_id, status=str(entry))

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True


@pytest_asyncio.fixture()
async def make_controller() -> AsyncIterator[object]:
    """Factory for controllers over a :class:`FakeBackend` with fast polling.

    Keyword arguments for the backend (``statuses``, ``create_error``,
    ``gate``, ``create_gate``) and the controller (``max_poll_attempts``, ...) are accepted.
    """
    created: list[TranscriptionController] = []

    def _make(
        statuses: list[object] | None = None,
        *,
        create_error: Exception | None = None,
        gate: asyncio.Event | None = None,
        create_gate: asyncio.Event | None = None,
        **kwargs: object,
    ) -> TranscriptionController:
        backend = FakeBackend(
            statuses, create_error=create_error, gate=gate, create_gate=create_gate
        )
        options: dict[str, object] = {
            "poll_interval": 0.01,
            "backoff_factor": 1.0,
            "max_poll_interval": 0.01,
            "max_poll_attempts": 50,
        }
        options.update(kwargs)
        ctl = TranscriptionController(backend, **options)  # type: ignore[arg-type]
        created.append(ctl)
        return ctl

    yield _make

    for ctl in created:
        await ctl.aclose()


@pytest.fixture()
def fake_backend() -> FakeBackend:
    return FakeBackend(["processing", ("completed", "hello world")])
