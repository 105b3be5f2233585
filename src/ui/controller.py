"""
Recorder controller: owns the client-side recording lifecycle.

States: idle -> recording -> processing -> idle

The controller never touches Streamlit; the UI feeds it an ``AudioSource``
and renders the notices it produces.
"""

import logging
from collections.abc import Callable

from src.core.exceptions import (
    GENERIC_TRANSCRIPTION_FAILURE,
    InvalidRecorderStateError,
    MicrophonePermissionError,
    VoiceRelayError,
)
from src.core.models import Notice, NoticeKind, RecorderStatus
from src.core.utils import append_transcript
from src.services.audio.codec import encode_audio
from src.services.audio.recorder import AudioBlob, FragmentBuffer
from src.services.audio.sources import AudioSource
from src.ui.api_client import APIError

logger = logging.getLogger(__name__)

# (audio_b64, mime_type) -> {"transcript": str}
Transcriber = Callable[[str, str], dict]


class RecorderController:
    """Three-state recorder that accumulates a transcript across recordings.

    Args:
        transcriber: Callable that relays base64 audio and returns the
            relay's JSON response (normally ``APIClient.transcribe``).
    """

    def __init__(self, transcriber: Transcriber) -> None:
        self._transcriber = transcriber
        self._status = RecorderStatus.idle
        self._buffer = FragmentBuffer()
        self._source: AudioSource | None = None
        self._transcript = ""
        self._notices: list[Notice] = []

    # -- state --

    @property
    def status(self) -> RecorderStatus:
        return self._status

    @property
    def transcript(self) -> str:
        return self._transcript

    @property
    def is_busy(self) -> bool:
        """True while a transcription request is in flight."""
        return self._status == RecorderStatus.processing

    def _notify(self, kind: NoticeKind, title: str, message: str) -> None:
        self._notices.append(Notice(kind=kind, title=title, message=message))

    def drain_notices(self) -> list[Notice]:
        """Return pending notices and clear the queue."""
        notices, self._notices = self._notices, []
        return notices

    # -- capture --

    def on_fragment(self, fragment: bytes) -> None:
        """Capture callback: buffer one fragment while recording."""
        if self._status != RecorderStatus.recording:
            logger.debug("Dropping fragment received while %s", self._status)
            return
        self._buffer.append(fragment)

    def start_recording(self, source: AudioSource) -> bool:
        """Acquire the microphone and begin accumulating fragments.

        Returns:
            True if recording started, False if microphone access was denied.

        Raises:
            InvalidRecorderStateError: If not idle.
        """
        if self._status != RecorderStatus.idle:
            raise InvalidRecorderStateError("start recording", self._status)

        self._buffer.reset(content_type=source.content_type)
        self._source = source
        self._status = RecorderStatus.recording
        try:
            source.start(self.on_fragment)
        except MicrophonePermissionError as exc:
            logger.warning("Microphone access denied: %s", exc.detail)
            self._abort_capture(source)
            self._notify(
                NoticeKind.error,
                "Microphone Access Denied",
                "Please allow microphone access to use voice input",
            )
            return False
        except Exception:
            self._abort_capture(source)
            raise

        self._notify(NoticeKind.info, "Recording Started", "Speak clearly into your microphone")
        return True

    def _abort_capture(self, source: AudioSource) -> None:
        source.stop()
        self._source = None
        self._buffer.reset()
        self._status = RecorderStatus.idle

    def stop_recording(self) -> AudioBlob | None:
        """Finish the recording and submit it for transcription.

        A no-op returning ``None`` unless currently recording.
        """
        if self._status != RecorderStatus.recording or self._source is None:
            return None

        source = self._source
        try:
            blob = self._buffer.finalize()
        finally:
            source.stop()
            self._source = None

        self._status = RecorderStatus.processing
        self._notify(NoticeKind.info, "Recording Stopped", "Processing your audio...")
        self._submit(blob)
        return blob

    # -- transcription --

    def _submit(self, blob: AudioBlob) -> None:
        """Relay the blob and fold the result in. Always ends idle."""
        try:
            if not blob.data:
                self._notify(
                    NoticeKind.warning,
                    "No Speech Detected",
                    "No audio was captured. Please try again",
                )
                return
            result = self._transcriber(encode_audio(blob.data), blob.content_type)
            self.handle_result(result)
        except (APIError, VoiceRelayError) as exc:
            logger.warning("Transcription failed: %s", exc)
            self._notify(NoticeKind.error, "Transcription Failed", GENERIC_TRANSCRIPTION_FAILURE)
        except Exception:
            logger.exception("Unexpected error while transcribing")
            self._notify(NoticeKind.error, "Transcription Failed", GENERIC_TRANSCRIPTION_FAILURE)
        finally:
            self._status = RecorderStatus.idle

    def handle_result(self, result: dict) -> None:
        """Append a relay result to the transcript or report no speech."""
        text = result.get("transcript") or ""
        if not text.strip():
            self._notify(
                NoticeKind.warning,
                "No Speech Detected",
                "Please try speaking more clearly",
            )
            return

        self._transcript = append_transcript(self._transcript, text)
        self._notify(
            NoticeKind.success,
            "Transcription Complete",
            "Your audio has been transcribed",
        )

    def clear_transcript(self) -> None:
        self._transcript = ""
        self._notify(NoticeKind.info, "Cleared", "Transcript cleared")
