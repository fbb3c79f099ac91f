"""
Database health endpoints
"""

from fastapi import APIRouter, HTTPException, status
import logging

from campaign_settings.core.database_utils import DatabaseHealthCheck

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def database_health():
    """
    Database health check: connection, schema presence and query timing
    """
    health_status = DatabaseHealthCheck.check_connection()

    if health_status["status"] in ("healthy", "degraded"):
        return health_status

    logger.warning(f"Database reported unhealthy: {health_status['details']}")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=health_status
    )
