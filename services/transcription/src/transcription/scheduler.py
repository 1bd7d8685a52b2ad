"""
Cancellable delayed-poll scheduling for the transcription workflow.

Each remote job owns at most one :class:`PollHandle`: an asyncio task
that sleeps for the poll interval and then runs the poll callback.
Cancelling a handle stops a pending delay outright; once the callback
has started, the in-flight request is left to finish and the
callback's own continuation decides whether its result still applies.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import structlog

logger = structlog.get_logger()

PollCallback = Callable[[], Awaitable[object]]


class PollHandle:
    """A single scheduled poll for *key*.

    Args:
        key: Identifier of the chain this poll belongs to (the job id).
        delay: Seconds to wait before running *callback*.
        callback: Zero-argument coroutine function performing the poll.
    """

    def __init__(self, key: str, delay: float, callback: PollCallback) -> None:
        self.key = key
        self.delay = delay
        self._callback = callback
        self._cancelled = False
        self._fired = False
        self._task: asyncio.Task[None] = asyncio.get_running_loop().create_task(
            self._run(), name=f"poll-{key}"
        )

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        """Whether the delay elapsed and the callback started."""
        return self._fired

    @property
    def done(self) -> bool:
        return self._task.done()

    def add_done_callback(self, fn: Callable[[PollHandle], object]) -> None:
        """Call *fn* with this handle once its task has finished or been cancelled."""
        self._task.add_done_callback(lambda _task: fn(self))

    def cancel(self) -> None:
        """Cancel the poll; an already-running callback is not interrupted."""
        self._cancelled = True
        if not self._fired:
            self._task.cancel()

    async def wait(self) -> None:
        """Wait for the handle to finish (cancelled handles return quietly)."""
        try:
            await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        if self._cancelled:
            return
        self._fired = True
        try:
            await self._callback()
        except Exception:  # noqa: BLE001
            logger.exception("poll_callback_failed", key=self.key)


class PollScheduler:
    """Keeps one live :class:`PollHandle` per key.

    Handles drop out of the scheduler once their task finishes.
    """

    def __init__(self) -> None:
        self._handles: dict[str, PollHandle] = {}

    def schedule(self, key: str, delay: float, callback: PollCallback) -> PollHandle:
        """Schedule *callback* after *delay* seconds, replacing any handle for *key*.

        Must be called from within a running event loop.
        """
        previous = self._handles.get(key)
        if previous is not None and not previous.done and not previous.fired:
            previous.cancel()
        handle = PollHandle(key, delay, callback)
        self._handles[key] = handle
        handle.add_done_callback(lambda finished: self.discard(key, finished))
        return handle

    def cancel(self, key: str) -> bool:
        """Cancel the handle for *key*; return ``True`` if one existed."""
        handle = self._handles.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> None:
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()

    def get(self, key: str) -> PollHandle | None:
        return self._handles.get(key)

    def discard(self, key: str, handle: PollHandle) -> None:
        """Forget *handle* if it is still the current one for *key*."""
        if self._handles.get(key) is handle:
            del self._handles[key]

    def __contains__(self, key: object) -> bool:
        return key in self._handles

    def __len__(self) -> int:
        return len(self._handles)
