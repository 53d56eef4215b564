"""
Purpose: Guardrails for submitted text.
Content: early, predictable failures. Blank input is dropped before it
reaches the history; the failure trigger raises so the controller can
surface it through session state.
"""

from ..models import DEFAULT_ERROR_MESSAGE


class SimulatedFailureError(ValueError):
    """Raised when the submitted text asks for the deterministic failure path."""


class DefaultSecurity:
    def __init__(
        self,
        *,
        error_trigger: str = "error",
        error_message: str = DEFAULT_ERROR_MESSAGE,
    ) -> None:
        self.error_trigger = error_trigger.lower()
        self.error_message = error_message

    def sanitize(self, text: str) -> str:
        return (text or "").strip()

    def check_failure_trigger(self, text: str) -> None:
        t = (text or "").lower()
        if self.error_trigger and self.error_trigger in t:
            raise SimulatedFailureError(self.error_message)
