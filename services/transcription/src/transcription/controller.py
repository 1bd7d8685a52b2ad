"""
Transcription workflow controller for MindEase.

Drives each voice-journal recording through remote transcription:

    NotSubmitted --submit--> Submitting --job created--> Pending
    Submitting --error--> Failed
    Pending --poll: completed--> Completed
    Pending --poll: failed / poll budget spent--> Failed
    Pending --poll: in progress / transport error--> Pending (next poll scheduled)
    Failed --retry--> NotSubmitted

Every recording is advanced only by its own poll chain, keyed by its
job id, so many recordings can be in flight on one event loop without
locking.  Deleting a recording cancels its pending poll; a response
that is already in flight is discarded when it lands.
"""

from __future__ import annotations

import asyncio
import functools

import structlog

from mindease_common.config import get_settings
from mindease_common.metrics import (
    transcription_jobs_in_flight,
    transcription_polls_total,
    transcription_submissions_total,
)
from mindease_common.models import (
    InvalidTransitionError,
    JobOutcome,
    Recording,
    TranscriptionState,
)

from transcription.backend_base import TranscriptionBackend
from transcription.errors import (
    JobFailedError,
    PollTimeoutError,
    PollTransportError,
    RecordingNotFoundError,
    SubmissionError,
)
from transcription.recording_store import RecordingStore
from transcription.scheduler import PollScheduler

logger = structlog.get_logger()


class TranscriptionController:
    """Submits recordings to a transcription backend and polls them to completion.

    Args:
        backend: The speech-to-text collaborator.
        store: Recording store owned by this controller (a new one by default).
        poll_interval: Seconds before the first poll and between polls.
        backoff_factor: Interval multiplier per completed poll (1.0 = fixed).
        max_poll_interval: Upper bound on the interval when backing off.
        max_poll_attempts: Polls allowed per job before it is failed.

    Unset polling parameters fall back to the ``ME_POLL_*`` settings.
    """

    def __init__(
        self,
        backend: TranscriptionBackend,
        *,
        store: RecordingStore | None = None,
        poll_interval: float | None = None,
        backoff_factor: float | None = None,
        max_poll_interval: float | None = None,
        max_poll_attempts: int | None = None,
    ) -> None:
        settings = get_settings()
        self._backend = backend
        self._store = store if store is not None else RecordingStore()
        self._scheduler = PollScheduler()
        self._poll_interval = (
            settings.poll_interval_s if poll_interval is None else poll_interval
        )
        self._backoff_factor = (
            settings.poll_backoff_factor if backoff_factor is None else backoff_factor
        )
        self._max_poll_interval = (
            settings.max_poll_interval_s if max_poll_interval is None else max_poll_interval
        )
        self._max_poll_attempts = (
            settings.max_poll_attempts if max_poll_attempts is None else max_poll_attempts
        )
        # job_id → recording_id for every job still owned by a live recording
        self._jobs: dict[str, str] = {}
        self._terminal: dict[str, asyncio.Event] = {}
        self._closed = False

    # ── recordings ──

    @property
    def backend(self) -> TranscriptionBackend:
        return self._backend

    @property
    def scheduler(self) -> PollScheduler:
        return self._scheduler

    def add_recording(
        self,
        audio: bytes,
        *,
        user_id: str | None = None,
        mime_type: str = "audio/webm",
    ) -> Recording:
        """Capture a finished clip as a new ``NotSubmitted`` recording."""
        recording = self._store.create(audio, user_id=user_id, mime_type=mime_type)
        self._terminal[recording.recording_id] = asyncio.Event()
        logger.info(
            "recording_added",
            recording_id=recording.recording_id,
            user_id=user_id,
            size_bytes=len(recording.audio),
        )
        return recording

    def get(self, recording_id: str) -> Recording:
        """Return a live recording.

        Raises:
            RecordingNotFoundError: If it does not exist or was deleted.
        """
        return self._store.get(recording_id)

    def list_recordings(self, user_id: str | None = None) -> list[Recording]:
        """Return live recordings, newest first."""
        return self._store.list(user_id)

    def delete(self, recording_id: str) -> None:
        """Delete a recording and abandon its poll chain.

        Raises:
            RecordingNotFoundError: If it does not exist.
        """
        recording = self._store.get(recording_id)
        was_pending = recording.state is TranscriptionState.PENDING
        job_id = recording.job_id
        self._store.delete(recording_id)

        if job_id is not None:
            self._scheduler.cancel(job_id)
            self._jobs.pop(job_id, None)
        if was_pending:
            transcription_jobs_in_flight.dec()

        event = self._terminal.pop(recording_id, None)
        if event is not None:
            event.set()
        logger.info("recording_deleted", recording_id=recording_id, job_id=job_id)

    # ── submission ──

    async def submit(self, recording_id: str) -> Recording:
        """Send the recording's audio to the backend and start polling.

        Raises:
            RecordingNotFoundError: If the recording does not exist.
            InvalidTransitionError: If it is not ``NotSubmitted``.
            SubmissionError: If the audio is empty (no network call is
                made) or the upload / job creation fails.
        """
        recording = self._store.get(recording_id)
        log = logger.bind(recording_id=recording_id)

        if recording.state is not TranscriptionState.NOT_SUBMITTED:
            raise InvalidTransitionError(
                recording_id, recording.state, TranscriptionState.SUBMITTING
            )
        if not recording.has_audio:
            transcription_submissions_total.labels(outcome="rejected").inc()
            log.warning("transcription_submit_empty_audio")
            raise SubmissionError(f"Recording {recording_id} has no audio to submit")

        recording.mark_submitting()
        self._terminal[recording_id].clear()
        log.info("transcription_submitting", size_bytes=len(recording.audio))

        try:
            job_id = await self._backend.create_job(
                recording.audio, mime_type=recording.mime_type
            )
        except Exception as exc:  # noqa: BLE001
            error = (
                exc
                if isinstance(exc, SubmissionError)
                else SubmissionError(f"Transcription submission failed: {exc}")
            )
            transcription_submissions_total.labels(outcome="failed").inc()
            if recording.deleted:
                log.info("transcription_submit_result_discarded")
            else:
                recording.mark_failed(str(error))
                self._signal_terminal(recording)
                log.error("transcription_submit_failed", error=str(error))
            if error is exc:
                raise
            raise error from exc

        transcription_submissions_total.labels(outcome="created").inc()
        if recording.deleted:
            log.info("transcription_submit_result_discarded", job_id=job_id)
            return recording

        recording.mark_pending(job_id)
        self._jobs[job_id] = recording_id
        transcription_jobs_in_flight.inc()
        log.info("transcription_pending", job_id=job_id)
        self._schedule_poll(recording)
        return recording

    def retry(self, recording_id: str) -> Recording:
        """Return a failed recording to ``NotSubmitted`` so it can be resubmitted.

        Raises:
            RecordingNotFoundError: If the recording does not exist.
            InvalidTransitionError: If it is not ``Failed``.
        """
        recording = self._store.get(recording_id)
        old_job_id = recording.job_id
        recording.reset()
        if old_job_id is not None:
            self._jobs.pop(old_job_id, None)
            self._scheduler.cancel(old_job_id)
        self._terminal[recording_id].clear()
        logger.info("transcription_retry", recording_id=recording_id, previous_job_id=old_job_id)
        return recording

    # ── polling ──

    async def poll(self, job_id: str) -> TranscriptionState | None:
        """Query the remote status of *job_id* once and apply the result.

        Returns:
            The recording's state after the poll, or ``None`` when the job
            belongs to no live recording (unknown, deleted, or superseded
            by a retry) and the result was discarded.
        """
        recording = self._owner(job_id)
        if recording is None:
            logger.debug("transcription_poll_discarded", job_id=job_id)
            return None
        if recording.state is not TranscriptionState.PENDING:
            return recording.state

        log = logger.bind(recording_id=recording.recording_id, job_id=job_id)
        recording.poll_attempts += 1

        try:
            job = await self._backend.get_job(job_id)
        except Exception as exc:  # noqa: BLE001
            if self._owner(job_id) is not recording:
                log.info("transcription_poll_result_discarded")
                return None
            transcription_polls_total.labels(result="transport_error").inc()
            log.warning(
                "transcription_poll_transport_error",
                attempt=recording.poll_attempts,
                error=str(exc),
                transient=isinstance(exc, PollTransportError),
            )
            return self._continue_or_time_out(recording, job_id)

        if self._owner(job_id) is not recording:
            log.info("transcription_poll_result_discarded", status=job.status)
            return None
        if recording.state is not TranscriptionState.PENDING:
            return recording.state

        outcome = job.outcome
        transcription_polls_total.labels(result=outcome.value).inc()

        if outcome is JobOutcome.COMPLETED:
            recording.mark_completed(job.text or "")
            self._finish(recording, job_id)
            log.info("transcription_completed", attempts=recording.poll_attempts)
        elif outcome is JobOutcome.FAILED:
            error = JobFailedError(job_id, job.status, job.error)
            recording.mark_failed(str(error))
            self._finish(recording, job_id)
            log.error("transcription_job_failed", status=job.status, detail=job.error)
        else:
            log.debug("transcription_in_progress", status=job.status, attempt=recording.poll_attempts)
            return self._continue_or_time_out(recording, job_id)
        return recording.state

    # ── waiting / lifecycle ──

    async def wait(self, recording_id: str, timeout: float | None = None) -> Recording:
        """Wait until the recording is ``Completed`` or ``Failed``.

        Raises:
            RecordingNotFoundError: If the recording does not exist or is
                deleted while waiting.
            asyncio.TimeoutError: If *timeout* elapses first.
        """
        recording = self._store.get(recording_id)
        if recording.state.is_terminal:
            return recording
        event = self._terminal[recording_id]
        await asyncio.wait_for(event.wait(), timeout)
        if recording.deleted:
            raise RecordingNotFoundError(recording_id)
        return recording

    async def transcribe(
        self,
        audio: bytes,
        *,
        user_id: str | None = None,
        mime_type: str = "audio/webm",
        timeout: float | None = None,
    ) -> Recording:
        """Add, submit, and wait for one clip; return the terminal recording."""
        recording = self.add_recording(audio, user_id=user_id, mime_type=mime_type)
        await self.submit(recording.recording_id)
        return await self.wait(recording.recording_id, timeout=timeout)

    async def aclose(self) -> None:
        """Cancel all scheduled polls and close the backend.

        Polls already in flight are left to finish; their results are
        discarded and no further poll is scheduled.
        """
        self._closed = True
        self._scheduler.cancel_all()
        await self._backend.close()

    # ── internal helpers ──

    def _owner(self, job_id: str) -> Recording | None:
        """Return the live recording that currently owns *job_id*."""
        if self._closed:
            return None
        recording_id = self._jobs.get(job_id)
        if recording_id is None or recording_id not in self._store:
            return None
        recording = self._store.get(recording_id)
        if recording.deleted or recording.job_id != job_id:
            return None
        return recording

    def _next_delay(self, attempts: int) -> float:
        cap = max(self._max_poll_interval, self._poll_interval)
        try:
            delay = self._poll_interval * (self._backoff_factor ** attempts)
        except OverflowError:
            return cap
        return min(delay, cap)

    def _schedule_poll(self, recording: Recording) -> None:
        if self._closed:
            return
        job_id = recording.job_id
        assert job_id is not None
        self._scheduler.schedule(
            job_id,
            self._next_delay(recording.poll_attempts),
            functools.partial(self.poll, job_id),
        )

    def _continue_or_time_out(self, recording: Recording, job_id: str) -> TranscriptionState:
        if recording.poll_attempts >= self._max_poll_attempts:
            error = PollTimeoutError(job_id, recording.poll_attempts)
            recording.mark_failed(str(error))
            self._finish(recording, job_id)
            logger.error(
                "transcription_poll_timeout",
                recording_id=recording.recording_id,
                job_id=job_id,
                attempts=recording.poll_attempts,
            )
        else:
            try:
                self._schedule_poll(recording)
            except Exception as exc:  # noqa: BLE001
                recording.mark_failed(f"Could not schedule the next poll for job {job_id}: {exc}")
                self._finish(recording, job_id)
                logger.exception(
                    "transcription_poll_schedule_failed",
                    recording_id=recording.recording_id,
                    job_id=job_id,
                )
        return recording.state

    def _finish(self, recording: Recording, job_id: str) -> None:
        self._scheduler.cancel(job_id)
        transcription_jobs_in_flight.dec()
        self._signal_terminal(recording)

    def _signal_terminal(self, recording: Recording) -> None:
        event = self._terminal.get(recording.recording_id)
        if event is not None:
            event.set()
