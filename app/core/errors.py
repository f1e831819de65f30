"""
=============================================================================
CADUAE MAIL RELAY - ERROR HANDLING MODULE
=============================================================================
Domain errors raised while handling a form submission, plus the global
exception handler that guarantees a structured JSON body on every exit path.

Usage:
    # In main.py
    from app.core.errors import register_exception_handlers
    register_exception_handlers(app)
=============================================================================
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.cors import compute_cors_headers

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = (
    "An error occurred while sending your message. Please try again later."
)


class FormValidationError(Exception):
    """The submitted payload does not satisfy the form rules (HTTP 400)."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RelayError(Exception):
    """The SMTP relay failed to accept the message (HTTP 500)."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        return self.message or GENERIC_ERROR_MESSAGE


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all handler for unhandled exceptions.

        Logs the traceback and answers with the same ``{status, message}``
        shape the submit endpoint uses, CORS headers included, so browsers
        can read the failure.
        """
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}:\n"
            f"{traceback.format_exc()}"
        )

        content = {"status": "error", "message": GENERIC_ERROR_MESSAGE}
        if settings.DEBUG:
            content["error_type"] = type(exc).__name__

        return JSONResponse(
            status_code=500,
            content=content,
            headers=compute_cors_headers(request.headers.get("origin")),
        )
