"""
Remote transcription job model for MindEase.

Normalises the status payload returned by the speech-to-text
collaborator (or the proxy in front of it) into a TranscriptionJob
with a three-way outcome: still in progress, completed, or failed.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, Field

# Remote statuses that mean "keep polling".
IN_PROGRESS_STATUSES = frozenset({"queued", "processing"})
COMPLETED_STATUS = "completed"


class JobOutcome(str, enum.Enum):
    """Controller-level interpretation of a remote job status."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class TranscriptionJob(BaseModel):
    """Snapshot of a remote transcription job.

    Attributes:
        job_id: Remote job identifier.
        status: Raw remote status (``queued``, ``processing``,
            ``completed``, ``error``, …).
        text: Transcript text once completed.
        error: Remote error description, if any.
    """

    job_id: str = Field(..., description="Remote job identifier.")
    status: str = Field(..., description="Raw remote status.")
    text: str | None = Field(default=None, description="Transcript text.")
    error: str | None = Field(default=None, description="Remote error description.")

    @property
    def outcome(self) -> JobOutcome:
        """Map the raw status onto in-progress / completed / failed.

        Anything other than the known in-progress statuses and
        ``completed`` is a terminal failure.
        """
        status = self.status.strip().lower()
        if status in IN_PROGRESS_STATUSES:
            return JobOutcome.IN_PROGRESS
        if status == COMPLETED_STATUS:
            return JobOutcome.COMPLETED
        return JobOutcome.FAILED

    @classmethod
    def from_payload(cls, job_id: str, payload: dict[str, Any]) -> TranscriptionJob:
        """Build a job from a ``{"status", "text", "error"}`` response body."""
        return cls(
            job_id=job_id,
            status=str(payload.get("status") or "unknown"),
            text=payload.get("text"),
            error=payload.get("error"),
        )
