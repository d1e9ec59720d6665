"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from cycletrack.config import Settings, get_settings
from cycletrack.engine.config_loader import EngineConfig, get_engine_config
from cycletrack.services.storage import CycleTrackRepository, get_repository

# Annotated shortcuts for route signatures
AppSettings = Annotated[Settings, Depends(get_settings)]
Repository = Annotated[CycleTrackRepository, Depends(get_repository)]
EngineCfg = Annotated[EngineConfig, Depends(get_engine_config)]
