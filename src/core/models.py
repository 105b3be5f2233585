"""
Pydantic v2 request / response models used across the API and UI layers.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------


class TranscribeRequest(BaseModel):
    """POST /api/transcribe request body.

    ``audio`` is base64 (optionally a ``data:`` URL). ``mime_type`` declares
    the audio container; the configured default is used when omitted.
    """

    audio: str
    mime_type: str | None = None


class TranscribeResponse(BaseModel):
    """POST /api/transcribe success body. Empty string means no speech."""

    transcript: str = ""


class ErrorResponse(BaseModel):
    """Error envelope returned for every failure path."""

    error: str
    code: str


# ---------------------------------------------------------------------------
# Recorder (client side)
# ---------------------------------------------------------------------------


class RecorderStatus(StrEnum):
    """Lifecycle states of the client recorder."""

    idle = "idle"
    recording = "recording"
    processing = "processing"


class NoticeKind(StrEnum):
    """Severity of a user-facing notice."""

    success = "success"
    info = "info"
    warning = "warning"
    error = "error"


class Notice(BaseModel):
    """A user-facing message describing the outcome of an action."""

    kind: NoticeKind
    title: str
    message: str
