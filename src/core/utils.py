"""Shared utility functions for Voice Relay."""

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the server process.

    Unknown level names fall back to INFO.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=_LOG_FORMAT)


def append_transcript(current: str, addition: str) -> str:
    """Append ``addition`` to ``current`` separated by a single space."""
    addition = addition.strip()
    if not addition:
        return current
    return f"{current} {addition}" if current else addition


def transcript_stats(text: str) -> tuple[int, int]:
    """Return ``(word_count, character_count)`` for a transcript."""
    return len(text.split()), len(text)
