"""Insights: symptom-by-phase heatmap and phase tips."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, Query

from cycletrack.dependencies import EngineCfg, Repository
from cycletrack.engine.calculator import current_status
from cycletrack.engine.heatmap import heatmap_counts, heatmap_matrix, total_count
from cycletrack.engine.phases import PHASES
from cycletrack.engine.tips import resolve_tips
from cycletrack.models.tracking import HeatmapRead, TipsRead

router = APIRouter(prefix="/insights", tags=["insights"])
logger = logging.getLogger("cycletrack.insights")


@router.get("/heatmap", response_model=HeatmapRead)
def get_heatmap(repo: Repository, config: EngineCfg) -> Any:
    vocabulary = list(config.symptom_vocabulary)
    counts = heatmap_counts(repo.list_entries(), repo.get_settings(), vocabulary)
    return HeatmapRead(
        phases=list(PHASES),
        symptoms=vocabulary,
        counts=counts,
        matrix=heatmap_matrix(counts, vocabulary),
        total=total_count(counts),
    )


@router.get("/tips", response_model=TipsRead)
def get_tips(
    repo: Repository,
    config: EngineCfg,
    as_of: date | None = Query(default=None),
) -> Any:
    """Tips for the phase on ``as_of`` (default today).

    The latest entry logged for that same day refines the tips.
    """
    target = as_of or date.today()
    status = current_status(repo.get_settings(), target)
    same_day = [e for e in repo.list_entries() if e.date == target]
    latest = same_day[-1] if same_day else None
    if status.phase is None:
        logger.debug("No phase for %s; returning placeholder tips", target)

    tips = resolve_tips(status.phase, latest, config)
    return TipsRead(
        phase=tips.phase,
        training=tips.training,
        nutrition=tips.nutrition,
        life=tips.life,
        extras=list(tips.extras),
    )
