"""
Purpose: Session snapshot storage (in-memory only; the session lives as long
as the running page).

What is inside:
InMemorySessionStore with get/set/reset over an immutable SessionSnapshot.
Writers replace the whole snapshot, so readers never see a half-applied
mutation.

Testing:
In-memory: simple state tests.
"""

from itertools import count

from chatbot.models import Message, Role, SessionSnapshot


class InMemorySessionStore:
    def __init__(self) -> None:
        self._snapshot = SessionSnapshot()
        self._ids = count(1)

    def get(self) -> SessionSnapshot:
        return self._snapshot

    def set(self, snapshot: SessionSnapshot) -> None:
        self._snapshot = snapshot

    def reset(self) -> None:
        self._snapshot = SessionSnapshot()

    def new_message(self, role: Role, content: str) -> Message:
        """Build a message with the next id in this session ("m1", "m2", ...)."""
        return Message(id=f"m{next(self._ids)}", role=role, content=content)
