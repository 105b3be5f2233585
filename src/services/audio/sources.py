"""Audio capture sources feeding the recorder controller.

A source owns the microphone for the duration of one recording: it is
acquired by ``start()``, delivers fragments through a callback, and is
released by ``stop()``.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from src.core.exceptions import MicrophonePermissionError

logger = logging.getLogger(__name__)

FragmentCallback = Callable[[bytes], None]


class AudioSource(ABC):
    """Interface every capture mechanism must implement."""

    content_type: str = "application/octet-stream"

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """True while the underlying device is held."""

    @abstractmethod
    def start(self, on_fragment: FragmentCallback) -> None:
        """Acquire the device and begin delivering fragments.

        Raises:
            MicrophonePermissionError: If access to the device is denied.
        """

    @abstractmethod
    def stop(self) -> None:
        """Release the device. Must be safe to call more than once."""


class ClipAudioSource(AudioSource):
    """Source backed by a clip already captured by the browser widget.

    The browser records the whole clip before handing it to the server side,
    so ``start()`` replays it as ordered fragments of ``chunk_size`` bytes.
    An empty clip means the browser could not capture anything, which is
    reported as a permission failure.
    """

    def __init__(
        self,
        clip: bytes | None,
        content_type: str = "audio/wav",
        chunk_size: int = 32000,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._clip = clip or b""
        self.content_type = content_type
        self._chunk_size = chunk_size
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self, on_fragment: FragmentCallback) -> None:
        if not self._clip:
            raise MicrophonePermissionError("No audio was captured from the microphone")

        self._active = True
        for offset in range(0, len(self._clip), self._chunk_size):
            on_fragment(self._clip[offset : offset + self._chunk_size])
        logger.debug("Replayed %d bytes of captured audio", len(self._clip))

    def stop(self) -> None:
        self._active = False
