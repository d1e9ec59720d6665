"""Dashboard data: phase badge, per-cycle metric series, recent averages."""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from cycletrack.dependencies import EngineCfg, Repository
from cycletrack.engine.aggregator import NUMERIC_FIELDS, SortAxis, group_by_cycle, recent_average
from cycletrack.engine.calculator import current_status
from cycletrack.models.tracking import (
    AveragesRead,
    CycleSeriesRead,
    SeriesPointRead,
    SeriesRead,
    StatusRead,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/status", response_model=StatusRead)
def get_status(
    repo: Repository,
    as_of: date | None = Query(default=None),
) -> Any:
    """Current phase and cycle day (default: today)."""
    settings = repo.get_settings()
    status = current_status(settings, as_of or date.today())
    return StatusRead(
        as_of=status.as_of,
        cycle_length=settings.cycle_length,
        cycle_day=status.assignment.cycle_day if status.assignment else None,
        cycle_number=status.assignment.cycle_number if status.assignment else None,
        phase=status.phase,
        label=status.label,
    )


@router.get("/series/{value_field}", response_model=SeriesRead)
def get_series(
    value_field: str,
    repo: Repository,
    sort_by: SortAxis = Query(default=SortAxis.DAY),
) -> Any:
    """One point series per cycle for a numeric field (weight, energy, ...)."""
    if value_field not in NUMERIC_FIELDS:
        raise HTTPException(status_code=404, detail=f"Unknown chart field '{value_field}'")

    settings = repo.get_settings()
    cycles = group_by_cycle(repo.list_entries(), value_field, sort_by=sort_by)
    return SeriesRead(
        value_field=value_field,
        sort_by=sort_by,
        cycle_length=settings.cycle_length,
        cycles=[
            CycleSeriesRead(
                cycle_number=number,
                label=f"Cycle {number}",
                points=[SeriesPointRead(cycle_day=p.cycle_day, value=p.value) for p in points],
            )
            for number, points in cycles.items()
        ],
    )


@router.get("/averages", response_model=AveragesRead)
def get_averages(
    repo: Repository,
    config: EngineCfg,
    window: int | None = Query(default=None, ge=1, le=365),
) -> Any:
    """Averages of each numeric field over the most recent entries."""
    entries = repo.list_entries()
    size = window or config.dashboard.averages_window_entries
    return AveragesRead(
        window=size,
        entries_considered=min(size, len(entries)),
        averages={name: recent_average(entries, name, size) for name in NUMERIC_FIELDS},
    )
