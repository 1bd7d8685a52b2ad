"""
Transcription proxy backend for MindEase.

Client side of the transcription proxy service: posts the audio as a
multipart ``audio`` field to ``/transcribe`` and polls
``/transcription/{id}``.  This is how the voice journal reaches the
speech-to-text collaborator without holding its API key.
"""

from __future__ import annotations

import httpx
import structlog

from mindease_common.models import TranscriptionJob

from transcription.backend_base import TranscriptionBackend
from transcription.errors import PollTransportError, SubmissionError

logger = structlog.get_logger()

_EXTENSIONS = {
    "audio/webm": "webm",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/mpeg": "mp3",
    "audio/ogg": "ogg",
    "audio/mp4": "m4a",
}


class ProxyBackend(TranscriptionBackend):
    """Relays jobs through the MindEase transcription proxy.

    Args:
        base_url: Proxy base URL (e.g. ``http://localhost:3001``).
        timeout: Per-request timeout in seconds.
        client: Pre-built ``httpx.AsyncClient`` (tests inject a mock transport).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self._base_url, timeout=timeout)

    @property
    def name(self) -> str:  # noqa: D401
        """Backend identifier."""
        return "proxy"

    async def create_job(self, audio: bytes, *, mime_type: str = "audio/webm") -> str:
        if not audio:
            raise SubmissionError("Cannot submit an empty audio payload")

        filename = f"recording.{_EXTENSIONS.get(mime_type, 'bin')}"
        try:
            resp = await self._client.post(
                "/transcribe",
                files={"audio": (filename, audio, mime_type)},
            )
            resp.raise_for_status()
            job_id = resp.json().get("transcriptId")
        except httpx.HTTPStatusError as exc:
            logger.error("proxy_submit_rejected", status=exc.response.status_code)
            raise SubmissionError(
                f"Transcription proxy rejected the upload ({exc.response.status_code})"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("proxy_submit_failed", error=str(exc))
            raise SubmissionError(f"Transcription proxy request failed: {exc}") from exc

        if not job_id:
            raise SubmissionError("Transcription proxy did not return a transcriptId")
        return str(job_id)

    async def get_job(self, job_id: str) -> TranscriptionJob:
        try:
            resp = await self._client.get(f"/transcription/{job_id}")
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise PollTransportError(f"Polling job {job_id} via proxy failed: {exc}") from exc
        return TranscriptionJob.from_payload(job_id, payload)

    async def health_check(self) -> bool:
        """Return ``True`` if the proxy's ``/health`` endpoint answers."""
        try:
            resp = await self._client.get("/health")
        except httpx.HTTPError:
            return False
        return resp.status_code == 200

    async def close(self) -> None:
        await self._client.aclose()
