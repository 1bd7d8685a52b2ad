"""Transcribe a local audio file through the MindEase transcription workflow.

Adds the file as a voice-journal recording, submits it to the configured
backend (the proxy by default), polls until the job finishes, and prints
the transcript.  Optionally classifies the transcript with the companion's
intent rules.

Usage:
    python scripts/transcribe_file.py journal.webm
    python scripts/transcribe_file.py journal.wav --backend assemblyai --classify
"""

from __future__ import annotations

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from mindease_common.logging import configure_logging
from mindease_common.models import TranscriptionState

from companion.intent_classifier import classify
from transcription.backend_registry import create_backend
from transcription.controller import TranscriptionController
from transcription.errors import TranscriptionError


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments for file transcription."""
    parser = argparse.ArgumentParser(description="Transcribe an audio file")
    parser.add_argument("path", type=Path, help="Audio file to transcribe")
    parser.add_argument(
        "--backend",
        type=str,
        default=None,
        help="Backend name (default: ME_TRANSCRIPTION_BACKEND)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up after this many seconds (default: poll budget only)",
    )
    parser.add_argument(
        "--classify",
        action="store_true",
        default=False,
        help="Print the companion intent of the transcript",
    )
    return parser.parse_args()


async def run(args: argparse.Namespace) -> int:
    audio = args.path.read_bytes()
    mime_type = mimetypes.guess_type(args.path.name)[0] or "audio/webm"

    controller = TranscriptionController(create_backend(args.backend))
    try:
        recording = await controller.transcribe(audio, mime_type=mime_type, timeout=args.timeout)
    except TranscriptionError as exc:
        print(f"Transcription error: {exc}", file=sys.stderr)
        return 1
    finally:
        await controller.aclose()

    if recording.state is not TranscriptionState.COMPLETED:
        print(f"Transcription failed: {recording.error}", file=sys.stderr)
        return 1

    print(recording.transcript_text)
    if args.classify:
        print(f"intent: {classify(recording.transcript_text or '').value}")
    return 0


def main() -> None:
    args = parse_args()
    configure_logging("transcribe-file", json=False)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
