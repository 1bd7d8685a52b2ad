"""
MindEase transcription service.

Voice-journal transcription workflow (submission, polling, cancellation)
and the HTTP proxy that relays audio to the speech-to-text collaborator.
"""

from transcription.controller import TranscriptionController
from transcription.errors import (
    JobFailedError,
    PollTimeoutError,
    PollTransportError,
    RecordingNotFoundError,
    SubmissionError,
    TranscriptionError,
)

__all__ = [
    "JobFailedError",
    "PollTimeoutError",
    "PollTransportError",
    "RecordingNotFoundError",
    "SubmissionError",
    "TranscriptionController",
    "TranscriptionError",
]
