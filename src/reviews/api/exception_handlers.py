"""Map review errors onto HTTP responses.

Protean's own handlers (domain ValidationError and friends) are registered
alongside these by ``register_review_exception_handlers``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from reviews.review.errors import (
    DownstreamCommunicationError,
    InvalidPageRequest,
    InvalidSortField,
    NotFound,
    PersistenceError,
)

logger = structlog.get_logger(__name__)

_STATUS_CODES = {
    NotFound: 404,
    InvalidSortField: 400,
    InvalidPageRequest: 400,
    DownstreamCommunicationError: 503,
    PersistenceError: 500,
}


def _handler_for(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        if status_code >= 500:
            logger.error(
                "Review request failed",
                path=request.url.path,
                error_type=type(exc).__name__,
                error=str(exc),
            )
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    return handler


def register_review_exception_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    for exc_class, status_code in _STATUS_CODES.items():
        app.add_exception_handler(exc_class, _handler_for(status_code))
