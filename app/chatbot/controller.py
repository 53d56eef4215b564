"""
Purpose: The single orchestration point for a chat session. Owns history,
status and error detail, and is the only thing allowed to change them.
Prevents the UI from knowing how replies are produced.

Key responsibilities:
- Validate submitted text (services.security).
- Append the user message and start one simulated reply
  (services.reply_simulator via the ReplySimulator interface).
- Append the reply when it resolves, unless the session was cleared since.
- clear() wipes history and cancels the pending reply.
- Publish a new immutable SessionSnapshot after every mutation.
- run_turn() drives submit + wait on the caller's loop and never leaves a
  turn stuck in AWAITING_REPLY.

Re-entrant submissions while a reply is pending are rejected: at most one
reply is in flight per session.

Testing: Pure unit tests with a fake ReplySimulator, or the real one with a
tiny delay under pytest-asyncio.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import Callable, Iterable, Optional

from .models import ChatSettings, Role, SessionSnapshot, Status, Message
from .interfaces import InputGuard, ReplyHandle, ReplySimulator, SnapshotListener
from .persistence.session_store import InMemorySessionStore
from .services.reply_simulator import EchoReplySimulator
from .services.security import DefaultSecurity, SimulatedFailureError

logger = logging.getLogger(__name__)


class ChatSessionController:
    def __init__(
        self,
        settings: Optional[ChatSettings] = None,
        *,
        seed: Iterable[tuple[Role, str]] = (),
        simulator: Optional[ReplySimulator] = None,
        security: Optional[InputGuard] = None,
    ):
        self.settings: ChatSettings = settings or ChatSettings()
        self.simulator: ReplySimulator = simulator or EchoReplySimulator(
            delay=self.settings.reply_delay, template=self.settings.reply_template
        )
        self.security: InputGuard = security or DefaultSecurity(
            error_trigger=self.settings.error_trigger,
            error_message=self.settings.error_message,
        )
        self.store = InMemorySessionStore()
        self._pending: Optional[ReplyHandle] = None
        self._listeners: list[SnapshotListener] = []

        seeded = tuple(
            self.store.new_message(Role(role), content) for role, content in seed
        )
        if seeded:
            self.store.set(SessionSnapshot(messages=seeded))

    # Reads

    def snapshot(self) -> SessionSnapshot:
        """Current (messages, status, error), safe to hold on to."""
        return self.store.get()

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.store.get().messages

    @property
    def status(self) -> Status:
        return self.store.get().status

    @property
    def error(self) -> Optional[str]:
        return self.store.get().error

    def is_busy(self) -> bool:
        """True while a reply is pending; the composer should be disabled."""
        return self.status is Status.AWAITING_REPLY

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call listener with every new snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Mutations

    def submit(self, text: str) -> bool:
        """
        Handle one user submission.
        Blank text and text sent while a reply is pending are ignored.
        Text containing the failure trigger moves the session to ERRORED
        without touching history. Anything else is appended and a reply is
        scheduled. Returns True only when a reply was started.
        """
        user_text = self.security.sanitize(text)
        if not user_text:
            return False
        if self.is_busy():
            logger.debug("Submission ignored: a reply is already pending")
            return False

        current = self.store.get()
        try:
            self.security.check_failure_trigger(user_text)
        except SimulatedFailureError as e:
            logger.info("Simulated failure triggered")
            self._publish(replace(current, status=Status.ERRORED, error=str(e)))
            return False

        message = self.store.new_message(Role.USER, user_text)
        self._publish(
            SessionSnapshot(
                messages=current.messages + (message,),
                status=Status.AWAITING_REPLY,
                error=None,
            )
        )

        handle: Optional[ReplyHandle] = None

        def on_resolve(reply_text: str) -> None:
            self._on_reply_resolved(handle, reply_text)

        handle = self.simulator.simulate(user_text, on_resolve)
        self._pending = handle
        return True

    def clear(self) -> None:
        """Empty history, back to IDLE, and drop any reply still in flight."""
        pending, self._pending = self._pending, None
        if pending is not None:
            pending.cancel()
            logger.debug("Pending reply cancelled by clear()")
        elif self.store.get() == SessionSnapshot():
            return
        self.store.reset()
        self._notify(self.store.get())

    async def wait_for_reply(self) -> None:
        """Wait for the pending reply to land (or be cancelled). No-op if idle."""
        if self._pending is not None:
            await self._pending.wait()

    async def run_turn(
        self,
        text: str,
        on_submitted: Optional[SnapshotListener] = None,
    ) -> bool:
        """
        submit() then wait for the reply on the current loop.
        on_submitted gets the snapshot right after submit(), before any wait.
        If the turn is abandoned before the reply lands (an exception in
        on_submitted, or the waiting task being cancelled), the session is
        cleared so it never stays AWAITING_REPLY with a timer whose loop is
        gone.
        """
        started = self.submit(text)
        try:
            if on_submitted is not None:
                on_submitted(self.snapshot())
            if started:
                await self.wait_for_reply()
        finally:
            if started and self.is_busy():
                logger.warning("Turn abandoned before the reply arrived; clearing session")
                self.clear()
        return started

    def _on_reply_resolved(self, handle: Optional[ReplyHandle], reply_text: str) -> None:
        if handle is None or handle is not self._pending:
            logger.debug("Stale reply discarded")
            return
        self._pending = None
        current = self.store.get()
        message = self.store.new_message(Role.AGENT, reply_text)
        self._publish(
            SessionSnapshot(messages=current.messages + (message,), status=Status.IDLE)
        )

    def _publish(self, snapshot: SessionSnapshot) -> None:
        self.store.set(snapshot)
        self._notify(snapshot)

    def _notify(self, snapshot: SessionSnapshot) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener failed")
