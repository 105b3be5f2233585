"""Base64 payload encoding for audio sent between the client and the relay.

The relay accepts either bare base64 or a ``data:<type>;base64,<data>`` URL,
which is what browser ``FileReader.readAsDataURL`` produces.
"""

import base64
import binascii

from src.core.exceptions import AudioDecodeError

_DATA_URL_PREFIX = "data:"
_BASE64_MARKER = ";base64"


def encode_audio(data: bytes) -> str:
    """Encode raw audio bytes as standard base64 text."""
    return base64.b64encode(data).decode("ascii")


def split_data_url(payload: str) -> tuple[str | None, str]:
    """Split a data URL into ``(media_type, base64_data)``.

    Bare base64 strings are returned unchanged with a ``None`` media type.
    """
    payload = payload.strip()
    if not payload.startswith(_DATA_URL_PREFIX) or "," not in payload:
        return None, payload

    header, data = payload.split(",", 1)
    meta = header[len(_DATA_URL_PREFIX) :]
    if meta.endswith(_BASE64_MARKER):
        meta = meta[: -len(_BASE64_MARKER)]
    media_type = meta.split(";", 1)[0].strip() or None
    return media_type, data


def decode_audio(payload: str) -> bytes:
    """Decode a base64 (or data URL) audio payload into raw bytes.

    Raises:
        AudioDecodeError: If the payload is not valid base64 or decodes to
            zero bytes.
    """
    _, data = split_data_url(payload)
    # Browsers may wrap long base64 strings; whitespace is not significant.
    data = "".join(data.split())
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AudioDecodeError(f"Audio payload is not valid base64: {exc}") from exc

    if not raw:
        raise AudioDecodeError("Audio payload is empty")
    return raw
