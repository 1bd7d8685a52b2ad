"""
Companion API schemas for MindEase.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from mindease_common.models import ChatMessage


class SendMessageRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)


class ConversationResponse(BaseModel):
    user_id: str
    messages: list[ChatMessage]
    total: int


class QuickPromptsResponse(BaseModel):
    prompts: list[str]
