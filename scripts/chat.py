"""Chat with the MindEase companion from a terminal.

Uses the configured key-value store (in-memory by default), so history
survives between runs only with ``ME_STORAGE_BACKEND=redis``.

Usage:
    python scripts/chat.py --user alice
    python scripts/chat.py --user alice --clear
"""

from __future__ import annotations

import argparse
import asyncio

from mindease_common.logging import configure_logging
from mindease_common.models import ChatRole
from mindease_common.storage import create_store

from companion.conversation import CompanionConversation
from companion.responses import CRISIS_NOTE, QUICK_PROMPTS


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the chat REPL."""
    parser = argparse.ArgumentParser(description="Chat with the wellness companion")
    parser.add_argument("--user", type=str, default="local", help="User id (default: %(default)s)")
    parser.add_argument(
        "--clear",
        action="store_true",
        default=False,
        help="Clear the stored conversation before starting",
    )
    return parser.parse_args()


async def repl(user_id: str, clear: bool) -> None:
    store = create_store()
    await store.connect()
    conversation = CompanionConversation(store)
    try:
        if clear:
            await conversation.clear(user_id)
        for message in await conversation.history(user_id):
            speaker = "you" if message.role is ChatRole.USER else "companion"
            print(f"{speaker}> {message.content}")
        print(f"(try: {' | '.join(QUICK_PROMPTS)}; empty line quits)")
        print(CRISIS_NOTE)

        while True:
            text = await asyncio.to_thread(input, "you> ")
            if not text.strip():
                break
            reply = await conversation.send_message(user_id, text)
            print(f"companion> {reply.content}")
    finally:
        await store.close()


def main() -> None:
    args = parse_args()
    configure_logging("chat", level="WARNING", json=False)
    try:
        asyncio.run(repl(args.user, args.clear))
    except (EOFError, KeyboardInterrupt):
        print()


if __name__ == "__main__":
    main()
