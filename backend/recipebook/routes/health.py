"""
RecipeBook Backend: Health Check Route
=======================================

What:  Liveness/readiness endpoint for process supervisors and load balancers.
How:   Reports the configured storage backend. For the sql backend a
       `SELECT 1` is run; a failure marks the service unhealthy (HTTP 503).
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status
from sqlalchemy import text

from recipebook import __version__
from recipebook.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request, response: Response) -> HealthResponse:
    container = request.app.state.services
    overall = "healthy"

    if container.engine is not None:
        try:
            async with container.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            overall = "unhealthy"
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=container.storage,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
