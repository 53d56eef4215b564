"""
Purpose: Build ChatSettings from the environment (and a local .env file).

Recognised variables:
- CHATBOT_REPLY_DELAY_MS   delay before the simulated reply (default 2000)
- CHATBOT_ERROR_TRIGGER    substring that forces the error path (default "error")
- CHATBOT_TITLE / CHATBOT_SUBTITLE   header texts
- CHATBOT_GREETING         first agent message; empty string disables it
- CHATBOT_LOG_LEVEL        logging level name (default INFO)
"""

from __future__ import annotations
import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .models import ChatSettings

logger = logging.getLogger(__name__)

DEFAULT_REPLY_DELAY_MS = 2000


def _delay_seconds(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_REPLY_DELAY_MS / 1000
    try:
        ms = float(raw)
    except ValueError:
        logger.warning(
            "Invalid CHATBOT_REPLY_DELAY_MS=%r, using %d", raw, DEFAULT_REPLY_DELAY_MS
        )
        return DEFAULT_REPLY_DELAY_MS / 1000
    return max(0.0, ms) / 1000


def load_settings() -> ChatSettings:
    load_dotenv(override=False)
    defaults = ChatSettings()

    greeting = os.getenv("CHATBOT_GREETING", defaults.greeting)
    return ChatSettings(
        reply_delay=_delay_seconds(os.getenv("CHATBOT_REPLY_DELAY_MS")),
        error_trigger=os.getenv("CHATBOT_ERROR_TRIGGER") or defaults.error_trigger,
        title=os.getenv("CHATBOT_TITLE") or defaults.title,
        subtitle=os.getenv("CHATBOT_SUBTITLE") or defaults.subtitle,
        greeting=greeting or None,
    )


def log_level() -> str:
    load_dotenv(override=False)
    return (os.getenv("CHATBOT_LOG_LEVEL") or "INFO").upper()
