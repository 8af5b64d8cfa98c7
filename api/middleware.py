"""
Access logging and request timing.

Each response carries ``X-Process-Time``.  The access line names the user
that ``get_current_user_id`` resolved (``-`` for anonymous calls) and goes
out at WARNING for server errors, DEBUG otherwise.  Health probes are timed
but not logged.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

QUIET_PATHS = frozenset({"/health"})


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        if request.url.path in QUIET_PATHS:
            return response

        user_id = getattr(request.state, "user_id", None)
        level = logging.WARNING if response.status_code >= 500 else logging.DEBUG
        logger.log(
            level,
            "%s %s %dxx user=%s %.3fs",
            request.method,
            request.url.path,
            response.status_code // 100,
            user_id or "-",
            elapsed,
        )
        return response
