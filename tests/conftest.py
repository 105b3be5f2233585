"""Shared pytest fixtures for the Voice Relay test suite.

Provides mock STT providers, fake audio sources, sample audio payloads,
and builders for provider response bodies.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from src.core.exceptions import MicrophonePermissionError
from src.services.audio.sources import AudioSource

# ---------------------------------------------------------------------------
# Provider response helpers
# ---------------------------------------------------------------------------


def make_deepgram_body(transcript: str = "Hello world.", confidence: float = 0.98) -> dict:
    """Build a minimal Deepgram ``/v1/listen`` success body."""
    return {
        "metadata": {"request_id": "test-request", "channels": 1},
        "results": {
            "channels": [
                {
                    "alternatives": [
                        {"transcript": transcript, "confidence": confidence, "words": []}
                    ]
                }
            ]
        },
    }


def mock_settings(**overrides):
    """Return a fake Settings object with sensible defaults."""
    defaults = {
        "stt_provider": "deepgram",
        "deepgram_api_key": "test-key",
        "deepgram_base_url": "https://deepgram.test",
        "deepgram_model": "nova-2",
        "deepgram_smart_format": True,
        "provider_timeout": 5.0,
        "default_audio_mime_type": "audio/webm",
        "fragment_size": 4,
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


# ---------------------------------------------------------------------------
# Audio sources
# ---------------------------------------------------------------------------


class FakeAudioSource(AudioSource):
    """In-memory source that records start/stop calls.

    Fragments are not delivered on ``start()``; tests push them through
    ``emit()`` to simulate capture callbacks arriving over time.
    """

    def __init__(self, content_type: str = "audio/webm") -> None:
        self.content_type = content_type
        self.start_calls = 0
        self.stop_calls = 0
        self._active = False
        self._callback = None

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self, on_fragment) -> None:
        self.start_calls += 1
        self._active = True
        self._callback = on_fragment

    def emit(self, fragment: bytes) -> None:
        self._callback(fragment)

    def stop(self) -> None:
        self.stop_calls += 1
        self._active = False


class DeniedAudioSource(FakeAudioSource):
    """Source whose microphone permission is always refused."""

    def start(self, on_fragment) -> None:
        self.start_calls += 1
        raise MicrophonePermissionError("Permission denied by user")


@pytest.fixture
def deepgram_body():
    """Factory fixture for Deepgram success bodies."""
    return make_deepgram_body


@pytest.fixture
def settings_factory():
    """Factory fixture for fake Settings objects."""
    return mock_settings


@pytest.fixture
def fake_source():
    return FakeAudioSource()


@pytest.fixture
def denied_source():
    return DeniedAudioSource()


# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface with a
        default transcribe response.
    """
    from src.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = {
        "text": "This is a test transcription.",
        "confidence": 0.95,
        "model": "nova-2",
    }
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_audio_bytes():
    """Bytes standing in for a short WebM recording (EBML magic + payload)."""
    return b"\x1a\x45\xdf\xa3" + bytes(range(256)) * 4
