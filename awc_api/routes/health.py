"""
Health check endpoints.
"""
import time
import logging
from fastapi import APIRouter, Depends

from awc_api.core.settings import Settings
from awc_api.db import check_database_health
from awc_api.deps import get_settings, get_stores
from awc_api.stores import Stores

logger = logging.getLogger("awc_api.health")
router = APIRouter(prefix="/api/health", tags=["Health"])


@router.get("")
async def health_check():
    """Liveness probe."""
    return {"status": "OK", "message": "AWC Blog API is running!"}


@router.get("/detailed")
def detailed_health_check(
    stores: Stores = Depends(get_stores),
    settings: Settings = Depends(get_settings),
):
    """Health check including the storage backend."""
    start_time = time.time()
    health_status = {
        "status": "OK",
        "timestamp": time.time(),
        "environment": settings.environment,
    }

    if stores.engine is not None:
        storage = check_database_health(stores.engine)
        if storage["status"] != "healthy":
            health_status["status"] = "degraded"
    else:
        storage = {"status": "healthy", "database": "none", "durable": False}
    storage["backend"] = stores.backend
    health_status["storage"] = storage

    try:
        health_status["stats"] = stores.prayers.stats().model_dump()
    except Exception as e:
        logger.error(f"Stats query failed during health check: {e}")
        health_status["status"] = "degraded"

    health_status["response_time_ms"] = round((time.time() - start_time) * 1000, 2)
    return health_status
