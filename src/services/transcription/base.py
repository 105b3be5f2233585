"""
Abstract base class for Speech-to-Text providers.

All STT implementations must implement this interface, keeping the relay
endpoint provider-agnostic.
"""

from abc import ABC, abstractmethod


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(self, audio: bytes, content_type: str, **kwargs) -> dict:
        """Transcribe one complete audio recording.

        Args:
            audio: Raw audio bytes in the container named by ``content_type``.
            content_type: MIME type of the audio (e.g. ``audio/webm``).
            **kwargs: Provider-specific options.

        Returns:
            Dict with keys ``text`` (empty string when no speech was
            detected), ``confidence`` and ``model``.
        """
