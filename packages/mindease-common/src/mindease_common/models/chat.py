"""
Companion chat message model for MindEase.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field

from mindease_common.models.intent import IntentCategory


def _utc_now() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


class ChatRole(str, enum.Enum):
    """Author of a chat message."""

    USER = "user"
    AI = "ai"


class ChatMessage(BaseModel):
    """A single message in a companion conversation.

    Attributes:
        message_id: Unique identifier.
        role: Message author.
        content: Message text.
        timestamp: Creation timestamp (UTC).
        category: Intent category answered (AI replies only).
    """

    message_id: str = Field(default_factory=lambda: uuid4().hex, description="Unique identifier.")
    role: ChatRole = Field(..., description="Message author.")
    content: str = Field(..., description="Message text.")
    timestamp: datetime = Field(default_factory=_utc_now, description="Creation timestamp (UTC).")
    category: IntentCategory | None = Field(
        default=None,
        description="Intent category answered (AI replies only).",
    )
