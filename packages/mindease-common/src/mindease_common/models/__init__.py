"""
Shared Pydantic data models for MindEase.

This package contains the cross-service data models: voice-journal
recordings, remote transcription jobs, companion intent rules, and
chat messages.
"""

from mindease_common.models.chat import ChatMessage, ChatRole
from mindease_common.models.intent import IntentCategory, IntentMatchType, IntentRule
from mindease_common.models.job import JobOutcome, TranscriptionJob
from mindease_common.models.recording import (
    InvalidTransitionError,
    Recording,
    TranscriptionState,
)

__all__ = [
    "ChatMessage",
    "ChatRole",
    "IntentCategory",
    "IntentMatchType",
    "IntentRule",
    "InvalidTransitionError",
    "JobOutcome",
    "Recording",
    "TranscriptionJob",
    "TranscriptionState",
]
