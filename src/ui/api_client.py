"""
Synchronous HTTP client for the Voice Relay backend API.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import logging

import httpx
import streamlit as st

from src.core.config import get_settings

logger = logging.getLogger(__name__)


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "unknown".
    Used by the UI to display appropriate error messages.
    """

    def __init__(self, message: str, category: str = "unknown") -> None:
        self.message = message
        self.category = category
        super().__init__(message)


class APIClient:
    """Thin synchronous wrapper around httpx for calling the relay.

    All methods return parsed JSON dicts or raise ``APIError`` with
    user-friendly messages for display in the UI.
    """

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 90.0) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the Voice Relay FastAPI backend.
            timeout: Seconds to wait for a response; transcription of long
                recordings can take a while.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=timeout)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Args:
            method: HTTP method name ("get", "post").
            path: API endpoint path (e.g. "/api/transcribe").
            **kwargs: Passed through to httpx (json, params, timeout, etc.).

        Returns:
            The httpx Response object with a successful status code.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. "
                "Start it with: `uvicorn src.api.app:app --reload --port 8000`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            try:
                body = exc.response.json()
                detail = body.get("error") or body.get("detail") or exc.response.text
            except Exception:
                detail = exc.response.text or str(exc)
            raise APIError(str(detail), category="http") from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    def _request_json(self, method: str, path: str, **kwargs) -> dict:
        """Like ``_request`` but also requires a JSON object body.

        Raises:
            APIError: With category "network" when a successful response
                is not a JSON object (e.g. an HTML page from a proxy).
        """
        resp = self._request(method, path, **kwargs)
        try:
            body = resp.json()
        except ValueError:
            raise APIError(
                "Backend returned an invalid (non-JSON) response.",
                category="network",
            ) from None
        if not isinstance(body, dict):
            raise APIError("Backend returned an unexpected response.", category="network")
        return body

    # -- health --

    def health_check(self) -> dict:
        return self._request("get", "/health").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- transcription --

    def transcribe(self, audio_b64: str, mime_type: str | None = None) -> dict:
        """Send one base64-encoded recording to the relay.

        Returns:
            Dict with a ``transcript`` key (empty string when no speech).
        """
        body: dict = {"audio": audio_b64}
        if mime_type:
            body["mime_type"] = mime_type
        return self._request_json("post", "/api/transcribe", json=body)


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:8000") -> APIClient:
    """Return a cached APIClient, keyed by base_url.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    When the base URL changes (e.g. user updates sidebar), a new client
    is created automatically because the cache key includes the parameter.
    """
    return APIClient(base_url=base_url, timeout=get_settings().client_timeout)
