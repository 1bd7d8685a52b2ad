"""
Voice-journal recording model for MindEase.

Defines the Recording model (a captured audio clip plus its
transcription lifecycle) and the TranscriptionState machine that
governs it.  Transitions are enforced here so that every caller sees
the same invariants: transcript text exists only on completed
recordings, and a job id, once assigned, only goes away on an
explicit retry.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def _new_recording_id() -> str:
    """Return a fresh, never-reused recording identifier."""
    return f"rec_{uuid4().hex}"


class TranscriptionState(str, enum.Enum):
    """Transcription lifecycle state of a recording."""

    NOT_SUBMITTED = "not_submitted"
    SUBMITTING = "submitting"
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition happens without a retry."""
        return self in (TranscriptionState.COMPLETED, TranscriptionState.FAILED)


# Allowed forward transitions (retry is handled separately).
_TRANSITIONS: dict[TranscriptionState, frozenset[TranscriptionState]] = {
    TranscriptionState.NOT_SUBMITTED: frozenset({TranscriptionState.SUBMITTING}),
    TranscriptionState.SUBMITTING: frozenset(
        {TranscriptionState.PENDING, TranscriptionState.FAILED}
    ),
    TranscriptionState.PENDING: frozenset(
        {TranscriptionState.COMPLETED, TranscriptionState.FAILED}
    ),
    TranscriptionState.COMPLETED: frozenset(),
    TranscriptionState.FAILED: frozenset(),
}


class InvalidTransitionError(Exception):
    """Raised when a recording is asked to move to a disallowed state."""

    def __init__(
        self,
        recording_id: str,
        current: TranscriptionState,
        target: TranscriptionState,
    ) -> None:
        super().__init__(
            f"Recording {recording_id}: cannot move from {current.value} to {target.value}"
        )
        self.recording_id = recording_id
        self.current = current
        self.target = target


class Recording(BaseModel):
    """A captured audio clip and its transcription lifecycle.

    Attributes:
        recording_id: Unique identifier assigned at capture time.
        user_id: Owner of the recording (None = anonymous).
        audio: Binary audio payload; emptied when the recording is deleted.
        mime_type: MIME type of the payload.
        created_at: Capture timestamp (UTC).
        job_id: Remote transcription job id, once created.
        state: Current transcription state.
        transcript_text: Transcript, present only when completed.
        error: Human-readable failure message, present only when failed.
        poll_attempts: Status polls performed for the current job.
        deleted: Whether the recording has been removed from its store.
    """

    recording_id: str = Field(
        default_factory=_new_recording_id,
        description="Unique identifier.",
    )
    user_id: str | None = Field(default=None, description="Owner of the recording.")
    audio: bytes = Field(default=b"", repr=False, description="Binary audio payload.")
    mime_type: str = Field(default="audio/webm", description="MIME type of the payload.")
    created_at: datetime = Field(
        default_factory=_utc_now,
        description="Capture timestamp (UTC).",
    )
    job_id: str | None = Field(default=None, description="Remote transcription job id.")
    state: TranscriptionState = Field(
        default=TranscriptionState.NOT_SUBMITTED,
        description="Current transcription state.",
    )
    transcript_text: str | None = Field(default=None, description="Completed transcript.")
    error: str | None = Field(default=None, description="Failure message.")
    poll_attempts: int = Field(default=0, ge=0, description="Polls for the current job.")
    deleted: bool = Field(default=False, description="Removed from its store.")

    @property
    def filename(self) -> str:
        """Download filename, e.g. ``mindease-recording-20240101-093000.webm``."""
        return f"mindease-recording-{self.created_at:%Y%m%d-%H%M%S}.webm"

    @property
    def has_audio(self) -> bool:
        return bool(self.audio)

    # ── transitions ──

    def _advance(self, target: TranscriptionState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise InvalidTransitionError(self.recording_id, self.state, target)
        self.state = target

    def mark_submitting(self) -> None:
        """NotSubmitted → Submitting."""
        self._advance(TranscriptionState.SUBMITTING)

    def mark_pending(self, job_id: str) -> None:
        """Submitting → Pending, recording the remote job id."""
        if not job_id:
            raise ValueError("job_id must be a non-empty string")
        self._advance(TranscriptionState.PENDING)
        self.job_id = job_id
        self.poll_attempts = 0

    def mark_completed(self, text: str) -> None:
        """Pending → Completed, storing the transcript exactly once."""
        self._advance(TranscriptionState.COMPLETED)
        self.transcript_text = text

    def mark_failed(self, error: str) -> None:
        """Submitting/Pending → Failed with a human-readable *error*."""
        self._advance(TranscriptionState.FAILED)
        self.error = error

    def reset(self) -> None:
        """Failed → NotSubmitted so the clip can be submitted again."""
        if self.state is not TranscriptionState.FAILED:
            raise InvalidTransitionError(
                self.recording_id, self.state, TranscriptionState.NOT_SUBMITTED
            )
        self.state = TranscriptionState.NOT_SUBMITTED
        self.job_id = None
        self.error = None
        self.poll_attempts = 0

    def release(self) -> None:
        """Drop the audio payload and flag the recording as deleted."""
        self.audio = b""
        self.deleted = True
