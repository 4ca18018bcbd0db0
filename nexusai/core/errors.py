"""
API error type and the handlers that render every failure as {"error": ...}.

The client never sees the underlying store error; it is logged server-side
by the route that caught it.
"""

import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Failure reported to the client with a fixed, human-readable message."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Undecodable bodies go down the same generic 500 path as store failures
    logger.error("Malformed request to %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=500, content={"error": "Malformed request"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


@contextmanager
def api_errors(message: str):
    """
    Turn any failure inside the block into an ApiError with a fixed message.

    Usage:
        with api_errors("Failed to fetch jobs"):
            return repository.list_jobs()
    """
    try:
        yield
    except ApiError:
        raise
    except Exception as e:
        logger.exception(message)
        raise ApiError(message) from e
