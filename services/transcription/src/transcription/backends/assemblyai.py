"""
AssemblyAI transcription backend for MindEase.

Uploads binary audio to AssemblyAI's ``/v2/upload`` endpoint, creates a
transcript job from the returned upload URL, and reads job status from
``/v2/transcript/{id}``.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from mindease_common.models import TranscriptionJob

from transcription.backend_base import TranscriptionBackend
from transcription.errors import PollTransportError, SubmissionError

logger = structlog.get_logger()


class AssemblyAIBackend(TranscriptionBackend):
    """Talks to the AssemblyAI REST API directly.

    Args:
        api_key: AssemblyAI API key (sent as the ``authorization`` header).
        base_url: API base URL.
        timeout: Per-request timeout in seconds.
        client: Pre-built ``httpx.AsyncClient`` (tests inject a mock transport).
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.assemblyai.com",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    # ── TranscriptionBackend interface ──

    @property
    def name(self) -> str:  # noqa: D401
        """Backend identifier."""
        return "assemblyai"

    async def create_job(self, audio: bytes, *, mime_type: str = "audio/webm") -> str:
        """Upload *audio*, then request a transcript for the uploaded file."""
        if not audio:
            raise SubmissionError("Cannot submit an empty audio payload")

        try:
            upload = await self._client.post(
                "/v2/upload",
                content=audio,
                headers={
                    "authorization": self._api_key,
                    "content-type": "application/octet-stream",
                },
            )
            upload.raise_for_status()
            upload_url = self._require(upload.json(), "upload_url")

            created = await self._client.post(
                "/v2/transcript",
                json={"audio_url": upload_url},
                headers={"authorization": self._api_key},
            )
            created.raise_for_status()
            job_id = str(self._require(created.json(), "id"))
        except httpx.HTTPStatusError as exc:
            logger.error(
                "assemblyai_submit_rejected",
                status=exc.response.status_code,
                body=exc.response.text[:500],
            )
            raise SubmissionError(
                f"AssemblyAI rejected the request ({exc.response.status_code})"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("assemblyai_submit_failed", error=str(exc))
            raise SubmissionError(f"AssemblyAI request failed: {exc}") from exc

        logger.info("assemblyai_job_created", job_id=job_id, size_bytes=len(audio))
        return job_id

    async def get_job(self, job_id: str) -> TranscriptionJob:
        """Read the transcript status for *job_id*."""
        try:
            resp = await self._client.get(
                f"/v2/transcript/{job_id}",
                headers={"authorization": self._api_key},
            )
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise PollTransportError(f"Polling job {job_id} failed: {exc}") from exc
        return TranscriptionJob.from_payload(job_id, payload)

    async def health_check(self) -> bool:
        """Return ``True`` when an API key is configured."""
        return bool(self._api_key)

    async def close(self) -> None:
        await self._client.aclose()

    # ── internal helpers ──

    @staticmethod
    def _require(payload: dict[str, Any], field: str) -> Any:
        value = payload.get(field)
        if not value:
            raise ValueError(f"response is missing '{field}'")
        return value
