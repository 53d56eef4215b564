from __future__ import annotations

import pytest

from chatbot.models import ChatSettings

FAST_DELAY = 0.01


class FakeHandle:
    def __init__(self, text, on_resolve) -> None:
        self.text = text
        self.on_resolve = on_resolve
        self._cancelled = False
        self._done = False

    def cancel(self) -> None:
        if not self._done:
            self._cancelled = True
            self._done = True

    def cancelled(self) -> bool:
        return self._cancelled

    def done(self) -> bool:
        return self._done

    async def wait(self) -> None:
        return None

    def fire(self, reply: str | None = None) -> None:
        """Resolve even if cancelled, to exercise stale-reply suppression."""
        self._done = True
        self.on_resolve(reply if reply is not None else f'Reply to: "{self.text}"')


class FakeSimulator:
    """Records each simulate() call; tests decide when replies fire."""

    def __init__(self) -> None:
        self.handles: list[FakeHandle] = []

    def simulate(self, original_text, on_resolve):
        handle = FakeHandle(original_text, on_resolve)
        self.handles.append(handle)
        return handle


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep a developer's .env and CHATBOT_* variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "CHATBOT_REPLY_DELAY_MS",
        "CHATBOT_ERROR_TRIGGER",
        "CHATBOT_TITLE",
        "CHATBOT_SUBTITLE",
        "CHATBOT_GREETING",
        "CHATBOT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fast_settings() -> ChatSettings:
    return ChatSettings(reply_delay=FAST_DELAY)


@pytest.fixture
def fake_simulator() -> FakeSimulator:
    return FakeSimulator()
