"""
Voice Relay exception hierarchy.

All application-specific exceptions inherit from VoiceRelayError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime

GENERIC_TRANSCRIPTION_FAILURE = "Failed to transcribe audio"


class VoiceRelayError(Exception):
    """Base exception for all Voice Relay errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "VOICE_RELAY_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)

    @property
    def public_message(self) -> str:
        """Message safe to return to API callers."""
        return self.detail


class TranscriptionFailure(VoiceRelayError):
    """Base for relay failures that callers only see as a generic failure.

    The specific cause is kept in ``detail`` for logging, while
    ``public_message`` never leaks it.
    """

    @property
    def public_message(self) -> str:
        return GENERIC_TRANSCRIPTION_FAILURE


class AudioDecodeError(TranscriptionFailure):
    """Raised when the audio payload is not valid base64 or is empty."""

    def __init__(self, detail: str = "Audio payload is not valid base64") -> None:
        super().__init__(
            detail=detail,
            code="AUDIO_DECODE_ERROR",
            status_code=500,
        )


class UpstreamError(TranscriptionFailure):
    """Raised when the provider rejects the request or cannot be reached."""

    def __init__(
        self,
        detail: str = "Transcription provider error",
        upstream_status: int | None = None,
    ) -> None:
        self.upstream_status = upstream_status
        super().__init__(
            detail=detail,
            code="UPSTREAM_ERROR",
            status_code=500,
        )


class ProviderConfigurationError(TranscriptionFailure):
    """Raised when the provider credential or selection is missing/unknown."""

    def __init__(self, detail: str = "Transcription provider is not configured") -> None:
        super().__init__(
            detail=detail,
            code="PROVIDER_NOT_CONFIGURED",
            status_code=500,
        )


class MicrophonePermissionError(VoiceRelayError):
    """Raised when microphone access is denied or produced no audio."""

    def __init__(self, detail: str = "Microphone access denied") -> None:
        super().__init__(
            detail=detail,
            code="MICROPHONE_DENIED",
            status_code=403,
        )


class InvalidRecorderStateError(VoiceRelayError):
    """Raised when a recorder action is requested from the wrong state."""

    def __init__(self, action: str, state: str) -> None:
        super().__init__(
            detail=f"Cannot {action} while {state}",
            code="INVALID_STATE",
            status_code=409,
        )
