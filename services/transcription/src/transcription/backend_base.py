"""
Abstract base class for transcription backends in MindEase.

Defines the TranscriptionBackend interface that every speech-to-text
collaborator must implement: create a job from binary audio, then
report the job's status (and text, once completed) on request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mindease_common.models import TranscriptionJob


class TranscriptionBackend(ABC):
    """Abstract base class that every transcription backend must implement.

    Subclasses provide :meth:`create_job`, :meth:`get_job`,
    :meth:`health_check`, and :meth:`close`.  The :attr:`name` property
    returns the identifier used by the backend registry.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the backend identifier string (e.g. ``'assemblyai'``)."""
        ...  # pragma: no cover

    @abstractmethod
    async def create_job(self, audio: bytes, *, mime_type: str = "audio/webm") -> str:
        """Upload *audio* and create a remote transcription job.

        Performs exactly one logical job-creation write.

        Args:
            audio: Binary audio payload.
            mime_type: MIME type of *audio*.

        Returns:
            The remote job identifier.

        Raises:
            SubmissionError: If the upload or job creation fails.
        """
        ...  # pragma: no cover

    @abstractmethod
    async def get_job(self, job_id: str) -> TranscriptionJob:
        """Fetch the current status of *job_id* (one network read).

        Raises:
            PollTransportError: If the request fails at the transport level.
        """
        ...  # pragma: no cover

    @abstractmethod
    async def health_check(self) -> bool:
        """Return ``True`` if the backend is configured and usable."""
        ...  # pragma: no cover

    async def close(self) -> None:
        """Release network resources (no-op by default)."""
