"""
Companion conversation manager for MindEase.

Keeps each user's chat history in the key-value store under
``ai_chat_<user_id>``, answers every user message with the template of
its classified intent, and seeds new conversations with a welcome
message.
"""

from __future__ import annotations

from typing import Any

import structlog

from mindease_common.metrics import intent_classifications_total
from mindease_common.models import ChatMessage, ChatRole
from mindease_common.storage import KeyValueStore, storage_key

from companion.intent_classifier import IntentClassifier, get_default_classifier
from companion.responses import WELCOME_MESSAGE, get_response

logger = structlog.get_logger()

CHAT_FEATURE = "ai_chat"


class EmptyMessageError(ValueError):
    """Raised when a user message is blank."""


class CompanionConversation:
    """Per-user companion chat backed by a key-value store.

    Args:
        store: Key-value storage collaborator.
        classifier: Intent classifier (the default rule table if omitted).
    """

    def __init__(
        self,
        store: KeyValueStore,
        classifier: IntentClassifier | None = None,
    ) -> None:
        self._store = store
        self._classifier = classifier or get_default_classifier()

    async def history(self, user_id: str) -> list[ChatMessage]:
        """Return the stored conversation, or a fresh welcome message."""
        raw: Any = await self._store.get(storage_key(CHAT_FEATURE, user_id))
        if not raw:
            return [ChatMessage(role=ChatRole.AI, content=WELCOME_MESSAGE)]
        return [ChatMessage.model_validate(item) for item in raw]

    async def send_message(self, user_id: str, text: str) -> ChatMessage:
        """Append *text* and the companion's reply; return the reply.

        Raises:
            EmptyMessageError: If *text* is blank.
        """
        if not text or not text.strip():
            raise EmptyMessageError("message text must not be blank")

        messages = await self.history(user_id)
        user_message = ChatMessage(role=ChatRole.USER, content=text)

        match = self._classifier.match(text)
        reply = ChatMessage(
            role=ChatRole.AI,
            content=get_response(match.category),
            category=match.category,
        )
        intent_classifications_total.labels(category=match.category.value).inc()

        messages.extend([user_message, reply])
        await self._save(user_id, messages)
        logger.info(
            "companion_reply",
            user_id=user_id,
            category=match.category.value,
            rule_index=match.rule_index,
            matched=match.matched,
        )
        return reply

    async def clear(self, user_id: str) -> None:
        """Delete the stored conversation for *user_id*."""
        await self._store.delete(storage_key(CHAT_FEATURE, user_id))
        logger.info("companion_history_cleared", user_id=user_id)

    async def _save(self, user_id: str, messages: list[ChatMessage]) -> None:
        payload = [m.model_dump(mode="json") for m in messages]
        await self._store.set(storage_key(CHAT_FEATURE, user_id), payload)
