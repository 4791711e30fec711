# site_api/routes/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict, List

import psutil
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from site_api.core.config import settings
from site_api.core.logging import get_structlog_logger
from site_api.db.session import get_session

logger = get_structlog_logger(__name__)

router = APIRouter(tags=["health"])


class HealthCheckResponse(BaseModel):
    status: str
    service: str
    environment: str
    version: str
    timestamp: str
    uptime: float
    checks: Dict[str, Dict[str, str]]
    dependencies: List[str]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def check_database(session: AsyncSession) -> Dict[str, str]:
    """Check database connectivity and that the industry catalog is readable."""
    try:
        start = time.perf_counter()
        result = await session.execute(
            text("SELECT count(*) FROM smb_industries WHERE is_active = TRUE")
        )
        active = result.scalar_one()
        response_time = (time.perf_counter() - start) * 1000

        return {
            "status": "healthy" if active else "degraded",
            "response_time_ms": f"{response_time:.2f}",
            "active_industries": str(active),
        }
    except (SQLAlchemyError, OSError) as e:
        logger.warning("health.database_check_failed", error=str(e))
        return {
            "status": "unhealthy",
            "error": type(e).__name__,
        }


def check_classifier() -> Dict[str, str]:
    """The classifier is only checked for configuration; no paid call is made."""
    if not settings.anthropic_api_key:
        return {"status": "unhealthy", "error": "not_configured"}
    return {
        "status": "healthy",
        "model": settings.anthropic_model,
        "timeout_seconds": str(settings.matcher_timeout_seconds),
    }


@router.get("/health", response_model=HealthCheckResponse, status_code=status.HTTP_200_OK)
async def health_check(session: AsyncSession = Depends(get_session)):
    """Comprehensive health check endpoint."""
    start = time.perf_counter()

    all_checks = {
        "database": await check_database(session),
        "classifier": check_classifier(),
    }

    overall_status = "healthy"
    for service, result in all_checks.items():
        if result.get("status") != "healthy":
            overall_status = "degraded"
            if service == "database" and result.get("status") == "unhealthy":
                overall_status = "unhealthy"
                break

    process = psutil.Process()
    uptime_seconds = time.time() - process.create_time()

    dependencies_list = ["postgresql", "anthropic"]
    if settings.sentry_dsn:
        dependencies_list.append("sentry")

    response = HealthCheckResponse(
        status=overall_status,
        service="site_api",
        environment=settings.environment,
        version=settings.service_version,
        timestamp=_now(),
        uptime=uptime_seconds,
        checks=all_checks,
        dependencies=dependencies_list,
    )

    log = logger.info if overall_status == "healthy" else logger.warning
    log(
        "health.check",
        status=overall_status,
        response_time_ms=(time.perf_counter() - start) * 1000,
        checks=all_checks,
    )

    return response


@router.get("/health/live", status_code=status.HTTP_200_OK)
async def liveness_probe():
    """Simple liveness probe for Kubernetes/containers."""
    return {
        "status": "alive",
        "timestamp": _now(),
    }


@router.get("/health/ready")
async def readiness_probe(session: AsyncSession = Depends(get_session)):
    """Readiness probe that checks critical dependencies."""
    checks = {
        "database": (await check_database(session))["status"],
        "classifier": check_classifier()["status"],
    }
    is_ready = checks["database"] != "unhealthy" and checks["classifier"] == "healthy"

    return JSONResponse(
        status_code=status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if is_ready else "not_ready",
            "timestamp": _now(),
            "checks": checks,
        },
    )
