"""
Companion chat API router for MindEase.

Endpoints for reading, extending, and clearing a user's companion
conversation, plus the quick-start prompts.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from mindease_common.models import ChatMessage

from companion.conversation import CompanionConversation, EmptyMessageError
from companion.responses import QUICK_PROMPTS
from companion.schemas import ConversationResponse, QuickPromptsResponse, SendMessageRequest

router = APIRouter(prefix="/companion", tags=["companion"])


async def get_conversation(request: Request) -> CompanionConversation:
    """Return the conversation manager stored on ``app.state``."""
    return request.app.state.conversation


@router.get("/prompts", response_model=QuickPromptsResponse)
async def quick_prompts() -> QuickPromptsResponse:
    return QuickPromptsResponse(prompts=list(QUICK_PROMPTS))


@router.get("/{user_id}/messages", response_model=ConversationResponse)
async def get_messages(
    user_id: str,
    conversation: CompanionConversation = Depends(get_conversation),
) -> ConversationResponse:
    messages = await conversation.history(user_id)
    return ConversationResponse(user_id=user_id, messages=messages, total=len(messages))


@router.post(
    "/{user_id}/messages",
    response_model=ChatMessage,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    user_id: str,
    body: SendMessageRequest,
    conversation: CompanionConversation = Depends(get_conversation),
) -> ChatMessage:
    try:
        return await conversation.send_message(user_id, body.text)
    except EmptyMessageError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


@router.delete("/{user_id}/messages", status_code=status.HTTP_204_NO_CONTENT)
async def clear_messages(
    user_id: str,
    conversation: CompanionConversation = Depends(get_conversation),
) -> Response:
    await conversation.clear(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
