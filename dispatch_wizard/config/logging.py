"""
Structured logging for the dispatch wizard service.
"""

import logging
import sys

import structlog

from dispatch_wizard.config.settings import settings

# Third-party loggers that are only useful at WARNING and above.
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncio", "httpx", "httpcore", "redis")


def configure_logging() -> None:
    """Configure structlog on top of stdlib logging.

    Request-scoped values bound with ``structlog.contextvars`` (the request id
    set by the logging middleware) are merged into every event.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.ENVIRONMENT == "production"
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = None) -> structlog.BoundLogger:
    return structlog.get_logger(name, service=settings.APP_NAME)
