"""
Canonical data shapes, shared truth for typing/validation between layers.

Typical contents:
- Role / Status enums.
- Message (id, role, content).
- SessionSnapshot (messages, status, error) - what the UI renders.
- ChatSettings (reply delay, failure trigger, texts shown by the page).

Testing: Mostly types. SessionSnapshot validates the status/error pairing.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from enum import Enum


DEFAULT_ERROR_MESSAGE = "The assistant could not answer this message. Please try again."
DEFAULT_REPLY_TEMPLATE = 'Reply to: "{text}"'


class Role(str, Enum):
    USER = "user"
    AGENT = "agent"


class Status(str, Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"
    ERRORED = "errored"


@dataclass(frozen=True)
class Message:
    id: str
    role: Role
    content: str

    def __post_init__(self) -> None:
        if not self.content:
            raise ValueError("Message content must be non-empty.")

    def to_dict(self) -> dict[str, str]:
        """Plain shape for renderers."""
        return {"id": self.id, "role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class SessionSnapshot:
    messages: tuple[Message, ...] = ()
    status: Status = Status.IDLE
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.status is Status.ERRORED) != (self.error is not None):
            raise ValueError(
                f"Status {self.status.value!r} is inconsistent with error={self.error!r}"
            )


@dataclass(frozen=True)
class ChatSettings:
    reply_delay: float = 2.0
    error_trigger: str = "error"
    error_message: str = DEFAULT_ERROR_MESSAGE
    reply_template: str = DEFAULT_REPLY_TEMPLATE
    title: str = "Chatbot UI"
    subtitle: str = "a simple chatbot"
    greeting: Optional[str] = "Hi! I'm a chatbot 🙂"
