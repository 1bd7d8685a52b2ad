"""
Exception hierarchy for the MindEase transcription workflow.

``SubmissionError`` and ``JobFailedError`` end a recording's workflow;
``PollTransportError`` is transient and only costs one poll attempt;
``PollTimeoutError`` is raised once the bounded poll budget is spent.
"""

from __future__ import annotations


class TranscriptionError(Exception):
    """Base class for transcription workflow errors."""


class SubmissionError(TranscriptionError):
    """Audio upload or remote job creation failed."""


class PollTransportError(TranscriptionError):
    """A single status poll failed at the transport level."""


class JobFailedError(TranscriptionError):
    """The remote collaborator reported the job as failed."""

    def __init__(self, job_id: str, status: str, detail: str | None = None) -> None:
        message = f"Transcription job {job_id} ended with status '{status}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.job_id = job_id
        self.status = status
        self.detail = detail


class PollTimeoutError(TranscriptionError):
    """The job did not reach a terminal status within the poll budget."""

    def __init__(self, job_id: str, attempts: int) -> None:
        super().__init__(
            f"Transcription job {job_id} still in progress after {attempts} polls"
        )
        self.job_id = job_id
        self.attempts = attempts


class RecordingNotFoundError(TranscriptionError, KeyError):
    """No recording with the given id exists (or it was deleted)."""

    def __init__(self, recording_id: str) -> None:
        super().__init__(f"Recording not found: {recording_id}")
        self.recording_id = recording_id

    def __str__(self) -> str:
        return str(self.args[0])
