"""Integration test fixtures for Voice Relay.

Provides an async HTTP client bound to a fresh application and a helper
that routes the relay's provider traffic through ``httpx.MockTransport``.
"""

from unittest.mock import patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.services.transcription.deepgram import DeepgramSTT


@pytest.fixture
def app():
    """Create a fresh FastAPI application instance."""
    return create_app()


@pytest.fixture
async def async_client(app):
    """AsyncClient speaking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def route_settings(settings_factory):
    """Patch the settings seen by the relay route."""
    settings = settings_factory()
    with patch("src.api.routes.transcribe.get_settings", return_value=settings):
        yield settings


@pytest.fixture
def provider(route_settings, settings_factory):
    """Wire the relay to a real DeepgramSTT backed by a scripted transport.

    Yields a dict: set ``provider["handler"]`` to control responses; sent
    requests are collected in ``provider["requests"]``.
    """
    state = {"requests": [], "handler": None}

    def _dispatch(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["handler"](request)

    def _create_stt(provider_name: str, **kwargs):
        assert provider_name == "deepgram"
        with patch(
            "src.services.transcription.deepgram.get_settings",
            return_value=settings_factory(),
        ):
            return DeepgramSTT(transport=httpx.MockTransport(_dispatch))

    with patch("src.api.routes.transcribe.create_stt", side_effect=_create_stt):
        yield state
