"""
Error handling middleware.
"""

import traceback

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.exceptions.availability_error import AvailabilityError
from dispatch_wizard.domain.exceptions.commit_error import (
    CommitError,
    CommitStepError,
    SubmissionBlockedError,
)
from dispatch_wizard.domain.exceptions.draft_error import DraftError, DraftNotFoundError
from dispatch_wizard.domain.exceptions.quote_error import QuoteDeliveryError, QuoteNotFoundError
from dispatch_wizard.domain.exceptions.validation_error import ValidationError

logger = get_logger(__name__)


class ErrorHandlerMiddleware:
    """Error handling middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_error_handlers()

    def add_error_handlers(self) -> None:
        """Add custom error handlers to FastAPI app."""
        add_error_handlers(self.app)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=400,
            content={
                "error": "Validation Error",
                "message": str(exc),
                "type": "validation_error",
                "errors": exc.errors,
            },
        )

    @app.exception_handler(SubmissionBlockedError)
    async def submission_blocked_handler(request: Request, exc: SubmissionBlockedError):
        logger.info("Submission blocked", fields=sorted(exc.errors), path=request.url.path)
        return JSONResponse(
            status_code=409,
            content={
                "error": "Submission Blocked",
                "message": str(exc),
                "type": "submission_blocked",
                "errors": exc.errors,
            },
        )

    @app.exception_handler(CommitStepError)
    async def commit_step_error_handler(request: Request, exc: CommitStepError):
        logger.error(
            "Commit stopped part way",
            failed_step=exc.step,
            committed_ids=exc.committed_ids,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=502,
            content={
                "error": "Commit Error",
                "message": str(exc),
                "type": "commit_error",
                "failed_step": exc.step,
                "committed_ids": exc.committed_ids,
                "rolled_back": False,
            },
        )

    @app.exception_handler(CommitError)
    async def commit_error_handler(request: Request, exc: CommitError):
        logger.error("Commit error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=502,
            content={"error": "Commit Error", "message": str(exc), "type": "commit_error"},
        )

    @app.exception_handler(DraftNotFoundError)
    async def draft_not_found_handler(request: Request, exc: DraftNotFoundError):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Draft Not Found",
                "message": str(exc),
                "type": "draft_not_found",
            },
        )

    @app.exception_handler(DraftError)
    async def draft_error_handler(request: Request, exc: DraftError):
        logger.error("Draft store error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=502,
            content={"error": "Draft Error", "message": str(exc), "type": "draft_error"},
        )

    @app.exception_handler(AvailabilityError)
    async def availability_error_handler(request: Request, exc: AvailabilityError):
        logger.error("Availability error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=502,
            content={
                "error": "Availability Error",
                "message": str(exc),
                "type": "availability_error",
            },
        )

    @app.exception_handler(QuoteNotFoundError)
    async def quote_not_found_handler(request: Request, exc: QuoteNotFoundError):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Quote Not Found",
                "message": str(exc),
                "type": "quote_not_found",
            },
        )

    @app.exception_handler(QuoteDeliveryError)
    async def quote_delivery_error_handler(request: Request, exc: QuoteDeliveryError):
        logger.error("Quote delivery error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=502,
            content={
                "error": "Quote Delivery Error",
                "message": str(exc),
                "type": "quote_delivery_error",
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Database Error",
                "message": "A database error occurred",
                "type": "database_error",
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTP Error",
                "message": exc.detail,
                "type": "http_error",
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred",
                "type": "internal_error",
            },
        )
