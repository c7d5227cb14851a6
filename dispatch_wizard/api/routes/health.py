"""
Health check endpoints for the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_wizard.api.dependencies import get_draft_store
from dispatch_wizard.config.database import get_db_session
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.config.settings import settings
from dispatch_wizard.infrastructure.drafts.redis_draft_store import RedisDraftStore
from dispatch_wizard.infrastructure.monitoring.health_checks import HealthChecker
from dispatch_wizard.infrastructure.monitoring.metrics import (
    get_metrics,
    get_metrics_content_type,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def get_health_checker(
    db: AsyncSession = Depends(get_db_session),
    draft_store: RedisDraftStore = Depends(get_draft_store),
) -> HealthChecker:
    """Get health checker instance."""
    return HealthChecker(db, draft_store)


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check."""
    return {"status": "alive", "timestamp": _now()}


@router.get("/ready")
async def readiness_check(
    health_checker: HealthChecker = Depends(get_health_checker),
):
    """Readiness check: every dependency must answer."""
    health = await health_checker.get_application_health()
    code = status.HTTP_200_OK if health["status"] == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content={**health, "timestamp": _now()})


@router.get("/metrics")
async def prometheus_metrics() -> Response:
    """Prometheus metrics endpoint."""
    if not settings.ENABLE_METRICS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Metrics are disabled")
    try:
        return Response(content=get_metrics(), media_type=get_metrics_content_type())
    except Exception as e:
        logger.error("Failed to generate Prometheus metrics", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate metrics",
        )
