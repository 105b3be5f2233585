"""
Transcription relay endpoint.

Decodes the client's base64 audio and forwards the raw bytes to the
configured STT provider. Every failure is raised as a ``VoiceRelayError``
and rendered by the global error handlers as ``{"error": ...}``.
"""

import logging

from fastapi import APIRouter

from src.core.config import get_settings
from src.core.models import ErrorResponse, TranscribeRequest, TranscribeResponse
from src.services.audio.codec import decode_audio, split_data_url
from src.services.transcription import create_stt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transcribe", tags=["transcription"])


@router.post(
    "",
    response_model=TranscribeResponse,
    responses={500: {"model": ErrorResponse}},
)
async def transcribe(body: TranscribeRequest) -> TranscribeResponse:
    """Relay one recording to the provider and return its transcript."""
    settings = get_settings()

    url_media_type, _ = split_data_url(body.audio)
    content_type = body.mime_type or url_media_type or settings.default_audio_mime_type
    audio = decode_audio(body.audio)

    stt = create_stt(settings.stt_provider)
    result = await stt.transcribe(audio, content_type=content_type)

    transcript = result.get("text") or ""
    if not transcript:
        logger.info("No speech detected in %d bytes of %s", len(audio), content_type)
    return TranscribeResponse(transcript=transcript)
