"""Deepgram STT implementation over the pre-recorded ``/v1/listen`` REST API.

Each call opens its own ``httpx.AsyncClient``; the relay holds no state
between requests and makes exactly one attempt per recording.
"""

import logging

import httpx

from src.core.config import get_settings
from src.core.exceptions import ProviderConfigurationError, UpstreamError
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)

LISTEN_PATH = "/v1/listen"


def _first(items) -> dict:
    """Return the first element of a list of dicts, or an empty dict."""
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def extract_alternative(data) -> dict:
    """Return the first alternative of the first channel, or ``{}``.

    Any missing level (no ``results``, no channels, no alternatives) yields
    an empty dict rather than an error.
    """
    if not isinstance(data, dict):
        return {}
    results = data.get("results")
    if not isinstance(results, dict):
        return {}
    channel = _first(results.get("channels"))
    return _first(channel.get("alternatives"))


def extract_transcript(data) -> str:
    """Pull the transcript string out of a Deepgram response body.

    Returns an empty string when the response carries no speech.
    """
    transcript = extract_alternative(data).get("transcript")
    return transcript if isinstance(transcript, str) else ""


class DeepgramSTT(BaseSTT):
    """Speech-to-text provider backed by Deepgram's hosted models.

    Args:
        api_key: Deepgram API key (falls back to settings).
        base_url: API root, e.g. ``https://api.deepgram.com``.
        model: Recognition model name (e.g. ``nova-2``).
        smart_format: Ask Deepgram to punctuate and format the text.
        timeout: Seconds to wait for the provider.
        transport: Optional httpx transport, used to stub the network in tests.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        smart_format: bool | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.deepgram_api_key
        self._base_url = (base_url or settings.deepgram_base_url).rstrip("/")
        self._model = model or settings.deepgram_model
        self._smart_format = (
            settings.deepgram_smart_format if smart_format is None else smart_format
        )
        self._timeout = timeout or settings.provider_timeout
        self._transport = transport

    def _query_params(self) -> dict[str, str]:
        return {
            "model": self._model,
            "smart_format": "true" if self._smart_format else "false",
        }

    async def _post_audio(self, audio: bytes, content_type: str) -> httpx.Response:
        """Send the audio to Deepgram, translating transport failures."""
        headers = {
            "Authorization": f"Token {self._api_key}",
            "Content-Type": content_type,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                return await client.post(
                    LISTEN_PATH,
                    params=self._query_params(),
                    headers=headers,
                    content=audio,
                )
        except httpx.TimeoutException as exc:
            logger.warning("Deepgram request timed out (%s): %s", self._base_url, exc)
            raise UpstreamError(f"Deepgram request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Deepgram unreachable (%s): %s", self._base_url, exc)
            raise UpstreamError(f"Failed to reach Deepgram: {exc}") from exc

    async def transcribe(self, audio: bytes, content_type: str, **kwargs) -> dict:
        """Transcribe a complete recording.

        Raises:
            ProviderConfigurationError: If no API key is configured.
            UpstreamError: On a non-success status, network failure, or a
                body that is not JSON.
        """
        if not self._api_key:
            raise ProviderConfigurationError("DEEPGRAM_API_KEY is not set")

        response = await self._post_audio(audio, content_type)

        if not response.is_success:
            logger.error(
                "Deepgram API error: %s %s", response.status_code, response.reason_phrase
            )
            raise UpstreamError(
                f"Deepgram API error: {response.status_code} {response.reason_phrase}",
                upstream_status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(f"Deepgram returned invalid JSON: {exc}") from exc

        alternative = extract_alternative(data)
        text = extract_transcript(data)
        confidence = alternative.get("confidence")
        logger.info(
            "Deepgram transcription done (%d bytes in, %d chars out)", len(audio), len(text)
        )
        return {
            "text": text,
            "confidence": float(confidence) if isinstance(confidence, int | float) else 0.0,
            "model": self._model,
        }
