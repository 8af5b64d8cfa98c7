"""
Mapping from service error kinds to HTTP responses.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from utils.result import Err, ErrorKind

logger = logging.getLogger(__name__)

STATUS_FOR_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_DETAIL = "Internal server error"


async def read_json(request: Request, status_code: int) -> Any:
    """Decode the request body, answering ``status_code`` when it is not JSON."""
    try:
        return await request.json()
    except ValueError:
        raise HTTPException(status_code=status_code, detail="body must be valid JSON")


def http_error(err: Err) -> HTTPException:
    """Turn an ``Err`` into the single HTTP error its kind maps to."""
    code = STATUS_FOR_KIND[err.kind]
    if err.kind is ErrorKind.INTERNAL:
        detail = INTERNAL_ERROR_DETAIL
    else:
        detail = err.message or err.kind.value
    return HTTPException(status_code=code, detail=detail)


def register_exception_handlers(app: FastAPI) -> None:
    """Catch-all for anything that escaped a route: log it, say nothing."""

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": INTERNAL_ERROR_DETAIL},
        )
