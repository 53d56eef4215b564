"""
Purpose: Stand-in for a model backend. Produces a deterministic reply after a
fixed delay so the UI can show its pending state.

Each call to simulate() schedules one timer on the asyncio loop and returns
a PendingReply. Cancelling the handle before the timer fires guarantees the
callback never runs.

Extensibility:
- A real client can implement the same ReplySimulator protocol and resolve
  the callback from a streamed or awaited response.

Testing: Run under pytest-asyncio with a tiny delay; assert on the callback.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Optional

from ..interfaces import ReplyCallback
from ..models import DEFAULT_REPLY_TEMPLATE

logger = logging.getLogger(__name__)


class PendingReply:
    """Cancellable handle for one scheduled reply."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._timer: Optional[asyncio.TimerHandle] = None
        self._finished = loop.create_future()

    def _attach(self, timer: asyncio.TimerHandle) -> None:
        self._timer = timer

    def _resolve(self, on_resolve: ReplyCallback, reply_text: str) -> None:
        if self._finished.done():
            return
        self._finished.set_result(None)
        on_resolve(reply_text)

    def cancel(self) -> None:
        if self._finished.done():
            return
        if self._timer is not None:
            self._timer.cancel()
        self._finished.cancel()

    def cancelled(self) -> bool:
        return self._finished.cancelled()

    def done(self) -> bool:
        return self._finished.done()

    async def wait(self) -> None:
        """Wait until the reply fired or was cancelled. Never raises CancelledError
        for a cancelled reply."""
        try:
            await asyncio.shield(self._finished)
        except asyncio.CancelledError:
            if not self._finished.cancelled():
                raise


class EchoReplySimulator:
    def __init__(
        self,
        *,
        delay: float = 2.0,
        template: str = DEFAULT_REPLY_TEMPLATE,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.delay = max(0.0, float(delay))
        self.template = template
        self._loop = loop

    def build_reply(self, original_text: str) -> str:
        return self.template.format(text=original_text)

    def simulate(self, original_text: str, on_resolve: ReplyCallback) -> PendingReply:
        loop = self._loop or asyncio.get_running_loop()
        reply_text = self.build_reply(original_text)
        handle = PendingReply(loop)
        handle._attach(
            loop.call_later(self.delay, handle._resolve, on_resolve, reply_text)
        )
        logger.debug("Reply scheduled in %.2fs", self.delay)
        return handle
