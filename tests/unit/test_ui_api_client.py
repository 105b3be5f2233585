"""Unit tests for the APIClient used by the Streamlit UI.

Validates that the client posts the base64 payload to the relay, and that
transport and HTTP failures become categorized ``APIError`` instances
carrying the relay's error message.
"""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from src.ui.api_client import APIClient, APIError


@pytest.fixture
def client():
    """Create an APIClient with a mocked httpx.Client."""
    with patch("src.ui.api_client.httpx.Client") as mock_cls:
        mock_http = MagicMock()
        mock_cls.return_value = mock_http
        api = APIClient(base_url="http://test:8000/")
        api._mock_http = mock_http  # expose for assertions
        yield api


def _status_error(status: int, **response_kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "http://test:8000/api/transcribe")
    response = httpx.Response(status, request=request, **response_kwargs)
    return httpx.HTTPStatusError(f"{status} error", request=request, response=response)


class TestInit:
    def test_base_url_trailing_slash_stripped(self):
        with patch("src.ui.api_client.httpx.Client") as mock_cls:
            APIClient(base_url="http://relay:9000/", timeout=12.0)
        mock_cls.assert_called_once_with(base_url="http://relay:9000", timeout=12.0)


class TestTranscribe:
    """Verify APIClient.transcribe() request construction and error mapping."""

    def test_posts_audio_and_mime_type(self, client):
        resp = MagicMock()
        resp.json.return_value = {"transcript": "hello"}
        client._mock_http.post.return_value = resp

        result = client.transcribe("QUJD", mime_type="audio/wav")

        client._mock_http.post.assert_called_once_with(
            "/api/transcribe",
            json={"audio": "QUJD", "mime_type": "audio/wav"},
        )
        resp.raise_for_status.assert_called_once()
        assert result == {"transcript": "hello"}

    def test_mime_type_omitted_when_none(self, client):
        resp = MagicMock()
        resp.json.return_value = {"transcript": ""}
        client._mock_http.post.return_value = resp

        client.transcribe("QUJD")

        assert client._mock_http.post.call_args[1]["json"] == {"audio": "QUJD"}

    def test_relay_error_message_surfaced(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(
            500, json={"error": "Failed to transcribe audio", "code": "UPSTREAM_ERROR"}
        )
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.transcribe("QUJD")

        assert exc_info.value.category == "http"
        assert exc_info.value.message == "Failed to transcribe audio"

    def test_non_json_error_body(self, client):
        resp = MagicMock()
        resp.raise_for_status.side_effect = _status_error(502, text="Bad Gateway")
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError, match="Bad Gateway"):
            client.transcribe("QUJD")

    def test_non_json_success_body(self, client):
        resp = MagicMock()
        resp.json.side_effect = ValueError("Expecting value")
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.transcribe("QUJD")

        assert exc_info.value.category == "network"

    def test_non_object_success_body(self, client):
        resp = MagicMock()
        resp.json.return_value = ["hello"]
        client._mock_http.post.return_value = resp

        with pytest.raises(APIError) as exc_info:
            client.transcribe("QUJD")

        assert exc_info.value.category == "network"

    def test_connection_error(self, client):
        client._mock_http.post.side_effect = httpx.ConnectError("refused")

        with pytest.raises(APIError) as exc_info:
            client.transcribe("QUJD")

        assert exc_info.value.category == "connection"

    def test_timeout(self, client):
        client._mock_http.post.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(APIError) as exc_info:
            client.transcribe("QUJD")

        assert exc_info.value.category == "timeout"

    def test_other_network_error(self, client):
        client._mock_http.post.side_effect = httpx.RemoteProtocolError("reset")

        with pytest.raises(APIError) as exc_info:
            client.transcribe("QUJD")

        assert exc_info.value.category == "network"


class TestCheckConnection:
    def test_connected(self, client):
        resp = MagicMock()
        resp.json.return_value = {"status": "ok"}
        client._mock_http.get.return_value = resp

        assert client.check_connection() == (True, "Connected")
        client._mock_http.get.assert_called_once_with("/health")

    def test_not_running(self, client):
        client._mock_http.get.side_effect = httpx.ConnectError("refused")

        ok, message = client.check_connection()

        assert ok is False
        assert "not running" in message
