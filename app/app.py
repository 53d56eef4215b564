"""
UI layer
Purpose: Streamlit-only glue. Renders the header, the transcript and the
composer, and delegates every state change to the controller. The page keeps
no conversation state of its own, so the logic can be unit tested without
Streamlit.
"""

import asyncio

import streamlit as st

from chatbot.config import load_settings, log_level
from chatbot.controller import ChatSessionController
from chatbot.models import Message, Role, SessionSnapshot, Status
from chatbot.utils.logconfig import setup_logging

ROLE_AVATARS = {Role.USER.value: "user", Role.AGENT.value: "assistant"}
COMPOSER_PLACEHOLDER = "Type a message…"
FALLBACK_ERROR = "Something went wrong."

setup_logging(log_level())
settings = load_settings()

# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title=settings.title,
    page_icon="💬",
    layout="centered",
)

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
if "controller" not in st_session:
    seed = [(Role.AGENT, settings.greeting)] if settings.greeting else []
    st_session.controller = ChatSessionController(settings, seed=seed)


# ---------------------------
# Helpers
# ---------------------------
def get_controller() -> ChatSessionController:
    """Return the controller object."""
    return st_session.controller


def clear_chat():
    """Clear button callback: wipe the transcript and drop any pending reply."""
    try:
        get_controller().clear()
    except Exception as e:
        st.toast(f"Clear failed: {e}", icon="⚠️")


def render_transcript(slot, snapshot: SessionSnapshot) -> None:
    """Draw messages plus the pending/error indicator into a placeholder."""
    with slot.container():
        for msg in map(Message.to_dict, snapshot.messages):
            with st.chat_message(ROLE_AVATARS[msg["role"]]):
                st.text(msg["content"])

        if snapshot.status is Status.AWAITING_REPLY:
            st.caption("Thinking…")
        elif snapshot.status is Status.ERRORED:
            st.error(snapshot.error or FALLBACK_ERROR)


def render_composer(slot, *, busy: bool, key: str = "composer"):
    """Chat input inside its placeholder; disabled while a reply is pending."""
    return slot.chat_input(COMPOSER_PLACEHOLDER, key=key, disabled=busy)


def run_turn(controller: ChatSessionController, text: str, slot, composer_slot) -> None:
    """Submit text, show the pending state, and block this run until the reply lands."""

    def show_submitted(snapshot: SessionSnapshot) -> None:
        render_transcript(slot, snapshot)
        if snapshot.status is Status.AWAITING_REPLY:
            # the first composer was drawn while idle; swap in a locked one
            render_composer(composer_slot, busy=True, key="composer_locked")

    asyncio.run(controller.run_turn(text, show_submitted))


# ---------------------------
# Header
# ---------------------------
head_col, clear_col = st.columns([5, 1], vertical_alignment="center")
with head_col:
    st.markdown(f"### {settings.title}")
    st.caption(settings.subtitle)
with clear_col:
    st.button("Clear", on_click=clear_chat)

# ---------------------------
# Transcript + composer
# ---------------------------
controller = get_controller()
transcript = st.container(height=500, border=True)
slot = transcript.empty()
render_transcript(slot, controller.snapshot())

composer_slot = st.empty()
raw = render_composer(composer_slot, busy=controller.is_busy())
st.caption("Enter to send.")
if raw is not None:
    try:
        run_turn(controller, raw, slot, composer_slot)
    except Exception as e:
        st.toast(f"Chat flow failed: {e}", icon="⚠️")
    st.rerun()
