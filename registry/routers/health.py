"""Health check with database status and registry statistics."""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response, status

from registry import __version__
from registry.errors import DependencyUnavailableError
from registry.schemas.responses import DatabaseStatus, GradeCounts, HealthResponse, RegistryStats
from registry.services import stats_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns status, version, database connectivity and latency, and registry stats. "
    "Responds 503 when the database is not configured or unreachable.",
    operation_id="getHealth",
)
def health(request: Request, response: Response) -> HealthResponse:
    db = getattr(request.app.state, "db", None)
    now = datetime.now(timezone.utc)
    unhealthy = HealthResponse(
        status="unhealthy",
        timestamp=now.isoformat(),
        version=__version__,
        database=DatabaseStatus(configured=db is not None, connected=False),
    )
    if db is None:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return unhealthy

    started = time.perf_counter()
    connected = db.check_connection()
    latency_ms = int((time.perf_counter() - started) * 1000)
    if not connected:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return unhealthy

    try:
        stats = stats_service.registry_stats(db, now=now)
    except DependencyUnavailableError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return unhealthy
    return HealthResponse(
        status="healthy",
        timestamp=now.isoformat(),
        version=__version__,
        database=DatabaseStatus(configured=True, connected=True, latencyMs=latency_ms),
        stats=RegistryStats(
            totalTools=stats["total_tools"],
            totalCategories=stats["total_categories"],
            toolsByGrade=GradeCounts(**stats["tools_by_grade"]),
            recentActivity=stats["recent_activity"],
        ),
    )
