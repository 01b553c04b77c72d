"""
Health check endpoints.
"""

import aiosqlite
from fastapi import APIRouter

from canteiro import __version__
from canteiro.application.dto.responses import HealthResponse
from canteiro.config import get_logger, get_settings

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Service health.

    Reports degraded when the database does not answer or the blob
    directory is missing.
    """
    from canteiro.infrastructure.storage.sqlite import get_pool

    database = "unavailable"
    try:
        if await (await get_pool()).ping():
            database = "healthy"
    except (OSError, aiosqlite.Error) as e:
        logger.warning("health_database_failed", error=str(e))

    blob_root = get_settings().blob.root_dir
    blob_storage = "healthy" if blob_root.exists() else "missing"

    return HealthResponse(
        status="healthy" if database == "healthy" and blob_storage == "healthy" else "degraded",
        version=__version__,
        database=database,
        blob_storage=blob_storage,
    )
