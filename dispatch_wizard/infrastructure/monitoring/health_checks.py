"""
Health check implementations for the application.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.config.settings import settings
from dispatch_wizard.infrastructure.drafts.redis_draft_store import RedisDraftStore

logger = get_logger(__name__)


class HealthChecker:
    """Health checker for application components."""

    def __init__(
        self,
        db_session: Optional[AsyncSession] = None,
        draft_store: Optional[RedisDraftStore] = None,
        timeout: Optional[float] = None,
    ):
        self.db_session = db_session
        self.draft_store = draft_store
        self.timeout = timeout or settings.HEALTH_CHECK_TIMEOUT
        self.checks: Dict[str, Callable[[], Awaitable[None]]] = {}
        if db_session is not None:
            self.checks["database"] = self._check_database
        if draft_store is not None:
            self.checks["redis"] = self._check_redis

    async def run_health_checks(self) -> Dict[str, Any]:
        """Run all health checks."""
        results = {}

        for check_name, check_func in self.checks.items():
            start_time = time.time()
            try:
                await asyncio.wait_for(check_func(), timeout=self.timeout)
                results[check_name] = {
                    "status": "healthy",
                    "response_time_ms": round((time.time() - start_time) * 1000, 2),
                }
            except Exception as e:
                logger.error("Health check failed", check_name=check_name, error=str(e))
                results[check_name] = {"status": "unhealthy", "error": str(e) or type(e).__name__}

        return results

    async def get_application_health(self) -> Dict[str, Any]:
        """Overall status plus per-component results."""
        components = await self.run_health_checks()
        healthy = all(result["status"] == "healthy" for result in components.values())
        return {
            "status": "healthy" if healthy else "unhealthy",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "components": components,
        }

    async def _check_database(self) -> None:
        await self.db_session.execute(text("SELECT 1"))

    async def _check_redis(self) -> None:
        if not await self.draft_store.ping():
            raise ConnectionError("Redis did not answer PING")
