"""CycleTrack cycle computation & aggregation engine.

Pure, synchronous functions over immutable records.  No I/O, no clock reads,
no shared state: callers load a settings/entries snapshot, pass the reference
date explicitly, and render whatever comes back.

Modules:
    base          — CycleSettings, Entry, CycleAssignment records
    calculator    — Date → cycle number / cycle day, status badge, log-time enrichment
    phases        — Phase enum, day classifier, display boundaries
    aggregator    — Per-cycle point series, recent averages and entries
    heatmap       — Symptom counts by phase
    tips          — Phase tip lookup with metric refinements
    config_loader — Load/validate/hot-reload engine_config.yaml
"""

from cycletrack.engine.aggregator import SeriesPoint, SortAxis, group_by_cycle
from cycletrack.engine.base import CycleAssignment, CycleSettings, Entry, InvalidSettingsError
from cycletrack.engine.calculator import CycleStatus, compute_cycle, current_status, enrich_entry
from cycletrack.engine.config_loader import EngineConfig, get_engine_config
from cycletrack.engine.heatmap import heatmap_counts
from cycletrack.engine.phases import Phase, PhaseBoundaries, classify, phase_boundaries
from cycletrack.engine.tips import PhaseTips, resolve_tips

__all__ = [
    "CycleSettings",
    "Entry",
    "CycleAssignment",
    "InvalidSettingsError",
    "CycleStatus",
    "compute_cycle",
    "current_status",
    "enrich_entry",
    "Phase",
    "PhaseBoundaries",
    "classify",
    "phase_boundaries",
    "SeriesPoint",
    "SortAxis",
    "group_by_cycle",
    "heatmap_counts",
    "PhaseTips",
    "resolve_tips",
    "EngineConfig",
    "get_engine_config",
]
