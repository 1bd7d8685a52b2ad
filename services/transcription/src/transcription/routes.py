"""
Transcription proxy routes for MindEase.

``POST /transcribe`` relays an uploaded audio file to the transcription
backend and answers ``202`` with the remote job id; ``GET
/transcription/{id}`` relays the job's status and text.  The browser
never sees the backend's API key.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, Field

from transcription.backend_base import TranscriptionBackend
from transcription.errors import PollTransportError, SubmissionError

logger = structlog.get_logger()

router = APIRouter(tags=["transcription"])


class TranscribeResponse(BaseModel):
    transcript_id: str = Field(..., serialization_alias="transcriptId")


class TranscriptionStatusResponse(BaseModel):
    status: str
    text: str | None = None


async def get_backend(request: Request) -> TranscriptionBackend:
    """Return the backend stored on ``app.state`` during startup."""
    return request.app.state.backend


@router.post("/transcribe", status_code=status.HTTP_202_ACCEPTED)
async def transcribe(
    audio: UploadFile | None = File(default=None),
    backend: TranscriptionBackend = Depends(get_backend),
) -> Response:
    if audio is None:
        return PlainTextResponse("No audio file uploaded.", status_code=status.HTTP_400_BAD_REQUEST)

    payload = await audio.read()
    if not payload:
        return PlainTextResponse("No audio file uploaded.", status_code=status.HTTP_400_BAD_REQUEST)

    mime_type = audio.content_type or "application/octet-stream"
    try:
        job_id = await backend.create_job(payload, mime_type=mime_type)
    except SubmissionError as exc:
        logger.error("proxy_transcribe_failed", error=str(exc), filename=audio.filename)
        return PlainTextResponse(
            "Error with transcription service.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    finally:
        await audio.close()

    logger.info("proxy_transcribe_accepted", job_id=job_id, size_bytes=len(payload))
    body = TranscribeResponse(transcript_id=job_id).model_dump(by_alias=True)
    return JSONResponse(body, status_code=status.HTTP_202_ACCEPTED)


@router.get("/transcription/{job_id}", response_model=TranscriptionStatusResponse)
async def transcription_status(
    job_id: str,
    backend: TranscriptionBackend = Depends(get_backend),
) -> Response | TranscriptionStatusResponse:
    try:
        job = await backend.get_job(job_id)
    except PollTransportError as exc:
        logger.error("proxy_poll_failed", job_id=job_id, error=str(exc))
        return PlainTextResponse(
            "Error retrieving transcription.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return TranscriptionStatusResponse(status=job.status, text=job.text)
