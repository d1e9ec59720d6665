"""Cycle settings: period start and cycle length."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from cycletrack.dependencies import EngineCfg, Repository
from cycletrack.engine.base import CycleSettings
from cycletrack.engine.phases import phase_boundaries
from cycletrack.models.tracking import PhaseBandsRead, PhaseRangeRead, SettingsRead, SettingsUpdate

router = APIRouter(prefix="/settings", tags=["settings"])


def _settings_read(settings: CycleSettings) -> SettingsRead:
    return SettingsRead(
        period_start=settings.period_start,
        cycle_length=settings.cycle_length,
        phase_preview=phase_boundaries(settings.cycle_length).preview(),
    )


@router.get("", response_model=SettingsRead)
def get_cycle_settings(repo: Repository) -> Any:
    return _settings_read(repo.get_settings())


@router.put("", response_model=SettingsRead)
def update_cycle_settings(repo: Repository, cfg: EngineCfg, body: SettingsUpdate) -> Any:
    settings = body.to_settings(cfg.default_cycle_length)
    repo.save_settings(settings)
    return _settings_read(settings)


@router.get("/phase-preview", response_model=PhaseBandsRead)
def get_phase_preview(repo: Repository) -> Any:
    """Phase day ranges for the configured cycle length (chart bands)."""
    boundaries = phase_boundaries(repo.get_settings().cycle_length)
    return PhaseBandsRead(
        cycle_length=boundaries.cycle_length,
        ranges=[
            PhaseRangeRead(phase=r.phase, start=r.start, end=r.end, is_empty=r.is_empty)
            for r in boundaries.ranges
        ],
        preview=boundaries.preview(),
    )
