"""
Recorder component: wires the browser microphone widget to the controller.

States: idle -> recording -> processing -> idle

Microphone permission is negotiated by the browser inside ``st.audio_input``.
When it is denied the widget simply never yields a clip, so Streamlit gives
the server side nothing to react to; the "Microphone Access Denied" notice is
only raised here when the widget hands back an empty clip.
"""

import logging

import streamlit as st

from src.core.config import get_settings
from src.core.models import Notice, NoticeKind
from src.core.utils import transcript_stats
from src.services.audio.sources import ClipAudioSource
from src.ui.api_client import get_api_client
from src.ui.controller import RecorderController

logger = logging.getLogger(__name__)

_NOTICE_ICONS = {
    NoticeKind.success: "✅",
    NoticeKind.info: "\U0001f3a4",
    NoticeKind.warning: "⚠️",
    NoticeKind.error: "❌",
}


def _relay_transcribe(audio_b64: str, mime_type: str) -> dict:
    """Transcriber bound to whatever backend URL the sidebar currently shows."""
    client = get_api_client(st.session_state.api_base_url)
    return client.transcribe(audio_b64, mime_type=mime_type)


def get_controller() -> RecorderController:
    """Return the session's controller, creating it on first use."""
    if st.session_state.get("controller") is None:
        st.session_state.controller = RecorderController(transcriber=_relay_transcribe)
    return st.session_state.controller


def _render_notices(controller: RecorderController) -> None:
    for notice in controller.drain_notices():
        _show_notice(notice)


def _show_notice(notice: Notice) -> None:
    text = f"**{notice.title}** — {notice.message}"
    if notice.kind == NoticeKind.error:
        st.error(text)
    else:
        st.toast(text, icon=_NOTICE_ICONS[notice.kind])


def render_recorder() -> None:
    """Render the recorder widget and transcript for the current session."""
    controller = get_controller()
    settings = get_settings()

    _render_notices(controller)

    # The widget key changes after each clip so a processed clip is not resubmitted.
    audio = st.audio_input(
        "Record audio",
        key=f"recorder_{st.session_state.recorder_nonce}",
        disabled=controller.is_busy,
    )

    if audio is not None:
        source = ClipAudioSource(
            audio.getvalue(),
            content_type=audio.type or "audio/wav",
            chunk_size=settings.fragment_size,
        )
        try:
            if controller.start_recording(source):
                with st.spinner("Processing your audio..."):
                    controller.stop_recording()
        finally:
            st.session_state.recorder_nonce += 1
        st.rerun()

    _render_transcript(controller)


def _render_transcript(controller: RecorderController) -> None:
    st.subheader("Transcript")
    transcript = controller.transcript
    if transcript:
        st.write(transcript)
        words, characters = transcript_stats(transcript)
        st.caption(f"{words} words · {characters} characters")
    else:
        st.info("Your transcription will appear here. Record something to begin.")

    if st.button("Clear", disabled=not transcript):
        controller.clear_transcript()
        st.rerun()
