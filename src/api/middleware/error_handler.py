"""
Global error handling middleware for the FastAPI application.

Catches VoiceRelayError subclasses, Pydantic validation errors, and
unhandled exceptions, converting them into a consistent JSON envelope
of the form ``{"error": <message>, "code": <code>}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.exceptions import GENERIC_TRANSCRIPTION_FAILURE, VoiceRelayError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    Registers three handlers in priority order:
    1. ``VoiceRelayError``: maps domain errors to structured JSON responses.
    2. ``RequestValidationError``: malformed request bodies (500).
    3. ``Exception``: catch-all for unexpected server errors (500).

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(VoiceRelayError)
    async def voice_relay_error_handler(request: Request, exc: VoiceRelayError) -> JSONResponse:
        """Convert domain errors into the error envelope, hiding internal detail."""
        logger.error(
            "%s %s failed [%s]: %s", request.method, request.url.path, exc.code, exc.detail
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.public_message, "code": exc.code},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors (missing or non-string ``audio``).

        The relay only answers 200 or 500, so a malformed body is reported
        as a generic transcription failure.
        """
        logger.warning("Rejected malformed request: %s", exc.errors())
        return JSONResponse(
            status_code=500,
            content={"error": GENERIC_TRANSCRIPTION_FAILURE, "code": "VALIDATION_ERROR"},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler that prevents stack traces from leaking to clients."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": GENERIC_TRANSCRIPTION_FAILURE, "code": "INTERNAL_ERROR"},
        )
