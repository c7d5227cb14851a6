"""
Per-request logging with a request id bound to every log event.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response

from dispatch_wizard.config.logging import get_logger

logger = get_logger(__name__)


class LoggingMiddleware:
    """Logs each wizard API request and tags the response with its id."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_logging_middleware()

    def add_logging_middleware(self) -> None:
        """Register the http middleware on the app."""

        @self.app.middleware("http")
        async def logging_middleware(request: Request, call_next: Callable) -> Response:
            request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
            structlog.contextvars.clear_contextvars()
            structlog.contextvars.bind_contextvars(request_id=request_id)
            start_time = time.perf_counter()

            logger.info(
                "Request received",
                method=request.method,
                path=request.url.path,
                client_host=request.client.host if request.client else None,
            )
            request.state.request_id = request_id

            try:
                response = await call_next(request)
            except Exception as e:
                process_time = time.perf_counter() - start_time
                logger.error(
                    "Request failed",
                    method=request.method,
                    path=request.url.path,
                    error=str(e),
                    process_time=f"{process_time:.4f}s",
                )
                raise

            process_time = time.perf_counter() - start_time
            logger.info(
                "Request finished",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time=f"{process_time:.4f}s",
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"
            return response
