"""CycleTrack API — FastAPI application entry point.

Run locally:
    uvicorn cycletrack.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cycletrack.config import get_settings
from cycletrack.engine.config_loader import get_engine_config
from cycletrack.routers import dashboard, entries, health, insights, settings
from cycletrack.services.storage import StorageError, close_repository, init_repository

# ---------- Logging ----------

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("cycletrack")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    app_settings = get_settings()
    logger.info(
        "Starting CycleTrack API v%s [%s]",
        app_settings.app_version,
        app_settings.environment,
    )
    get_engine_config()
    init_repository(app_settings)
    yield
    close_repository()
    logger.info("CycleTrack API shut down")


# ---------- Error handlers ----------

async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.exception("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": f"Storage error: {exc}"})


# ---------- App factory ----------

def create_app() -> FastAPI:
    app_settings = get_settings()

    app = FastAPI(
        title="CycleTrack API",
        description=(
            "Daily health log viewed against the menstrual cycle: cycle day "
            "and phase, per-cycle metric overlays, symptom heatmap, phase tips."
        ),
        version=app_settings.app_version,
        debug=app_settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_exception_handler(StorageError, storage_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- Health check (outside v1 prefix — always at /health) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    v1_prefix = "/api/v1"

    app.include_router(settings.router, prefix=v1_prefix)
    app.include_router(entries.router, prefix=v1_prefix)
    app.include_router(dashboard.router, prefix=v1_prefix)
    app.include_router(insights.router, prefix=v1_prefix)

    return app


app = create_app()
