"""Daily entry log: append-only.

New entries get their cycle day and cycle number computed at log time from
the current settings, unless the client already supplied them.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, Query

from cycletrack.dependencies import EngineCfg, Repository
from cycletrack.engine.aggregator import recent_entries
from cycletrack.engine.calculator import compute_cycle, enrich_entry
from cycletrack.models.tracking import CyclePreviewRead, EntryCreate, EntryRead

router = APIRouter(prefix="/entries", tags=["entries"])
logger = logging.getLogger("cycletrack.entries")


@router.get("", response_model=list[EntryRead])
def list_entries(
    repo: Repository,
    config: EngineCfg,
    limit: int | None = Query(default=None, ge=1, le=1000),
) -> Any:
    """Most recent entries, newest first."""
    settings = repo.get_settings()
    rows = recent_entries(repo.list_entries(), limit or config.dashboard.recent_entries)
    return [EntryRead.from_entry(e, settings) for e in rows]


@router.post("", response_model=EntryRead, status_code=201)
def create_entry(repo: Repository, body: EntryCreate) -> Any:
    settings = repo.get_settings()
    entry = enrich_entry(body.to_entry(), settings)
    if entry.cycle_day is None:
        logger.info("Entry for %s logged without a cycle position", entry.date)
    repo.append_entry(entry)
    return EntryRead.from_entry(entry, settings)


@router.get("/cycle-preview", response_model=CyclePreviewRead)
def preview_cycle_position(
    repo: Repository,
    on_date: date | None = Query(default=None),
) -> Any:
    """Cycle day / number the log form would store for ``on_date`` (default today)."""
    target = on_date or date.today()
    assignment = compute_cycle(target, repo.get_settings())
    return CyclePreviewRead(
        entry_date=target,
        cycle_day=assignment.cycle_day if assignment else None,
        cycle_number=assignment.cycle_number if assignment else None,
    )
