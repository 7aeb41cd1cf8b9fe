"""Error taxonomy and FastAPI exception handlers for the Twilio mock.

Every error is local to the request that raised it: the handler turns it
into a 4xx JSON body and the process keeps serving. Services validate
their inputs before writing, so a failed request leaves the store as it
was.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TwilioMockError(Exception):
    """Base class for errors the mock reports to its caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "bad_request"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "status": self.status_code,
            }
        }


class MalformedTokenError(TwilioMockError):
    """Token cannot be decoded into the expected grants shape."""

    code = "malformed_token"


class MalformedBodyError(TwilioMockError):
    """Request body is not valid JSON or misses a required field."""

    code = "malformed_body"


class NotFoundError(TwilioMockError):
    """A record that must already exist is absent from the store."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


def register_error_handlers(app: FastAPI) -> None:
    """Register the mock's exception handlers on the FastAPI app."""

    @app.exception_handler(TwilioMockError)
    async def twilio_mock_error_handler(request: Request, exc: TwilioMockError):
        logger.warning(
            "%s on %s %s: %s",
            exc.code,
            request.method,
            request.url.path,
            exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
        error = MalformedBodyError(f"Invalid request: {', '.join(fields)}")
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=error.status_code, content=error.to_response())
