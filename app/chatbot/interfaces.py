"""
Abstractions for pluggable services. Inversion of control: the controller
depends on interfaces, not concrete services. Enables fakes in tests and a
real model client later.

Common protocols:
- ReplyHandle.cancel() / done() / wait()
- ReplySimulator.simulate(text, on_resolve) -> ReplyHandle
- InputGuard.sanitize(text) / check_failure_trigger(text)

Testing: Use simple fake implementations to drive the controller without
waiting on real timers.
"""

from __future__ import annotations
from typing import Callable, Protocol

from .models import SessionSnapshot


ReplyCallback = Callable[[str], None]
SnapshotListener = Callable[[SessionSnapshot], None]


class ReplyHandle(Protocol):
    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...

    def done(self) -> bool: ...

    async def wait(self) -> None: ...


class ReplySimulator(Protocol):
    def simulate(self, original_text: str, on_resolve: ReplyCallback) -> ReplyHandle: ...


class InputGuard(Protocol):
    def sanitize(self, text: str) -> str: ...

    def check_failure_trigger(self, text: str) -> None: ...
