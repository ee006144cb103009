"""
Request logging middleware.

One line per request: method, path, status and elapsed time.  Client errors
log at WARNING and server errors at ERROR so failed calls stand out.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def register_middleware(app: FastAPI) -> None:
    """Attach the request logger and the ``X-Process-Time`` header."""

    @app.middleware("http")
    async def request_logger(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.log(
            _level_for(response.status_code),
            "%s %s %d — %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response
