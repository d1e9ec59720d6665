"""Health check endpoint."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from cycletrack.config import get_settings
from cycletrack.services.storage import StorageError, get_repository

router = APIRouter(tags=["system"])
logger = logging.getLogger("cycletrack.health")


@router.get("/health")
def health_check() -> dict:
    """Liveness probe. Returns 200 if the API process is up.

    Also checks that stored settings can be read back.
    """
    settings = get_settings()
    storage_ok = False
    try:
        get_repository().get_settings()
        storage_ok = True
    except (RuntimeError, StorageError) as exc:
        logger.warning("Health check storage probe failed: %s", exc)

    return {
        "status": "healthy" if storage_ok else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "storage": "readable" if storage_ok else "unreadable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
