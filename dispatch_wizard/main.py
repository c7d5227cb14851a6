"""
Main application entry point.
"""

from dispatch_wizard.api.app import create_app
from dispatch_wizard.config.logging import configure_logging, get_logger
from dispatch_wizard.config.settings import settings

configure_logging()
logger = get_logger(__name__)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting dispatch wizard server", host=settings.API_HOST, port=settings.API_PORT)

    uvicorn.run(
        "dispatch_wizard.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )
