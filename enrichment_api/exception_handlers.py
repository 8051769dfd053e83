"""Exception handlers that render enrichment failures as ``{"error": ...}``."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from enrichment_api.errors import EnrichmentError, ValidationError

logger = logging.getLogger(__name__)


def _create_error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the enrichment exception handlers on ``app``."""

    @app.exception_handler(EnrichmentError)
    async def enrichment_exception_handler(
        request: Request,
        exc: EnrichmentError,
    ) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Enrichment error on %s %s: %s (%s, status=%d)",
            request.method,
            request.url.path,
            exc.message,
            type(exc).__name__,
            exc.status_code,
        )
        return _create_error_response(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed or missing request bodies are reported like a missing URL."""
        logger.warning(
            "Invalid request body on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
        )
        return _create_error_response(
            status.HTTP_400_BAD_REQUEST, ValidationError.public_message
        )
