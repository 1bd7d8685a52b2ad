"""
In-process recording store for the transcription workflow.

Owns the recordings (and their audio payloads) for one controller.
Deleting a recording releases its audio and flags it as deleted so
that late poll continuations can tell it is gone.
"""

from __future__ import annotations

from collections.abc import Iterator

from mindease_common.models import Recording

from transcription.errors import RecordingNotFoundError


class RecordingStore:
    """Explicit ``create`` / ``get`` / ``delete`` store for recordings."""

    def __init__(self) -> None:
        self._recordings: dict[str, Recording] = {}

    def create(
        self,
        audio: bytes,
        *,
        user_id: str | None = None,
        mime_type: str = "audio/webm",
    ) -> Recording:
        """Capture a new recording holding *audio*."""
        recording = Recording(audio=bytes(audio), user_id=user_id, mime_type=mime_type)
        self._recordings[recording.recording_id] = recording
        return recording

    def get(self, recording_id: str) -> Recording:
        """Return the live recording with *recording_id*.

        Raises:
            RecordingNotFoundError: If no such recording exists.
        """
        try:
            return self._recordings[recording_id]
        except KeyError:
            raise RecordingNotFoundError(recording_id) from None

    def delete(self, recording_id: str) -> Recording:
        """Remove *recording_id*, release its audio, and return it.

        Raises:
            RecordingNotFoundError: If no such recording exists.
        """
        recording = self._recordings.pop(recording_id, None)
        if recording is None:
            raise RecordingNotFoundError(recording_id)
        recording.release()
        return recording

    def list(self, user_id: str | None = None) -> list[Recording]:
        """Return recordings newest first, optionally for one user."""
        items = [
            r for r in self._recordings.values()
            if user_id is None or r.user_id == user_id
        ]
        return sorted(items, key=lambda r: r.created_at, reverse=True)

    def __contains__(self, recording_id: object) -> bool:
        return recording_id in self._recordings

    def __len__(self) -> int:
        return len(self._recordings)

    def __iter__(self) -> Iterator[Recording]:
        return iter(list(self._recordings.values()))
