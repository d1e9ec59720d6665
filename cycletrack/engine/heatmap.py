"""Symptom-by-phase counts for the insights heatmap.

Every entry with a cycle day is attributed to a phase, and each of its
symptoms that belongs to the vocabulary is counted in that phase.  Symptoms
outside the vocabulary (free text, legacy values) are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from cycletrack.engine.base import CycleSettings, Entry, finite_number
from cycletrack.engine.phases import PHASES, Phase, classify

logger = logging.getLogger("cycletrack.engine.heatmap")

HeatmapCounts = dict[Phase, dict[str, int]]


def empty_counts(symptom_vocabulary: Iterable[str]) -> HeatmapCounts:
    """Every phase × symptom pair set to zero."""
    symptoms = list(symptom_vocabulary)
    return {phase: {symptom: 0 for symptom in symptoms} for phase in PHASES}


def heatmap_counts(
    entries: Iterable[Entry],
    settings: CycleSettings,
    symptom_vocabulary: Iterable[str],
) -> HeatmapCounts:
    """Count symptom occurrences per phase.

    Args:
        entries:            Logged entries.
        settings:           Supplies the cycle length used to classify days.
        symptom_vocabulary: Symptoms to count; defines the result's keys.

    Returns:
        Phase → symptom → count, with every pair present.
    """
    counts = empty_counts(symptom_vocabulary)
    unattributed = 0

    for entry in entries:
        day = finite_number(entry.cycle_day)
        if day is None:
            unattributed += 1
            continue
        row = counts[classify(int(day), settings.cycle_length)]
        for symptom in entry.symptoms:
            if symptom in row:
                row[symptom] += 1

    if unattributed:
        logger.debug("heatmap_counts: %d entries without a cycle day", unattributed)
    return counts


def heatmap_matrix(
    counts: HeatmapCounts, symptom_vocabulary: Sequence[str]
) -> dict[str, list[int]]:
    """Per symptom, its counts in phase order (one stacked-bar dataset each)."""
    return {
        symptom: [counts[phase].get(symptom, 0) for phase in PHASES]
        for symptom in symptom_vocabulary
    }


def total_count(counts: HeatmapCounts) -> int:
    return sum(sum(row.values()) for row in counts.values())
