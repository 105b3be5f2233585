"""Fragment accumulation for a single recording session.

Captured audio arrives as an ordered sequence of binary fragments; once
recording ends they are joined into one ``AudioBlob``.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AudioBlob:
    """A complete recording ready for transcription."""

    data: bytes
    content_type: str

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class FragmentBuffer:
    """Accumulates audio fragments and finalizes them into an ``AudioBlob``.

    Exactly one writer (the capture callback) and one reader (the
    controller) per session, so no locking is done here.
    """

    def __init__(self, content_type: str = "audio/webm") -> None:
        self.content_type = content_type
        self._fragments: list[bytes] = []

    @property
    def fragment_count(self) -> int:
        """Number of fragments appended since the last reset."""
        return len(self._fragments)

    @property
    def size_bytes(self) -> int:
        """Total number of buffered bytes."""
        return sum(len(f) for f in self._fragments)

    def append(self, fragment: bytes) -> None:
        """Append one fragment. Empty fragments are ignored."""
        if fragment:
            self._fragments.append(bytes(fragment))

    def finalize(self) -> AudioBlob:
        """Join all fragments, in arrival order, into a single blob."""
        return AudioBlob(data=b"".join(self._fragments), content_type=self.content_type)

    def reset(self, content_type: str | None = None) -> None:
        """Drop all fragments, optionally switching the content type."""
        self._fragments.clear()
        if content_type:
            self.content_type = content_type
