"""Request context middleware.

Assigns every request a correlation ID, binds it into the structlog
context for the lifetime of the request, logs one access line per
request, and turns anything that escaped the exception handlers into
the standard 500 envelope.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.api.errors import error_content

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlate, log and guard each request.

    The request ID is taken from the X-Request-ID header when the client
    sends one and generated otherwise. It is exposed as
    `request.state.request_id` and echoed on every response, errors
    included.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_content(request, "INTERNAL_ERROR", "An internal error occurred"),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        structlog.contextvars.clear_contextvars()
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install the request context middleware on the application."""
    app.add_middleware(RequestContextMiddleware)
