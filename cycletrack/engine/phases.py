"""Phase classification for cycle days.

A cycle day maps onto one of four coarse phases.  The day-by-day rule in
``classify`` is authoritative; ``phase_boundaries`` derives display ranges
(chart background bands, the settings preview text) from the same rule and
is never used to classify.

Rule, for cycle length ``L``::

    day <= 5                 → Menstrual
    day <= floor(L/2) - 2    → Follicular
    day <= ceil(L/2) + 2     → Ovulation
    otherwise                → Luteal
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

MENSTRUAL_DAYS = 5
OVULATION_HALF_WIDTH = 2


class Phase(str, Enum):
    MENSTRUAL = "Menstrual"
    FOLLICULAR = "Follicular"
    OVULATION = "Ovulation"
    LUTEAL = "Luteal"


# Phases in cycle order
PHASES: tuple[Phase, ...] = tuple(Phase)


def follicular_end(cycle_length: int) -> int:
    return cycle_length // 2 - OVULATION_HALF_WIDTH


def ovulation_end(cycle_length: int) -> int:
    return math.ceil(cycle_length / 2) + OVULATION_HALF_WIDTH


def classify(cycle_day: int, cycle_length: int) -> Phase:
    """Return the phase of a cycle day.

    Args:
        cycle_day:    1-indexed day within the cycle.
        cycle_length: Configured cycle length in days.

    Returns:
        The Phase for that day.  Days past ``cycle_length`` fall in Luteal.
    """
    if cycle_day <= MENSTRUAL_DAYS:
        return Phase.MENSTRUAL
    if cycle_day <= follicular_end(cycle_length):
        return Phase.FOLLICULAR
    if cycle_day <= ovulation_end(cycle_length):
        return Phase.OVULATION
    return Phase.LUTEAL


@dataclass(frozen=True)
class PhaseRange:
    """Inclusive day range of one phase.  Empty when ``start > end``."""

    phase: Phase
    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    def __contains__(self, cycle_day: int) -> bool:
        return self.start <= cycle_day <= self.end

    def days(self) -> range:
        return range(self.start, self.end + 1)


@dataclass(frozen=True)
class PhaseBoundaries:
    """The four phase ranges for one cycle length, in phase order."""

    cycle_length: int
    ranges: tuple[PhaseRange, ...]

    def for_phase(self, phase: Phase) -> PhaseRange:
        for r in self.ranges:
            if r.phase is phase:
                return r
        raise KeyError(phase)

    def preview(self) -> str:
        """Human-readable summary, e.g. for the settings page.

        ``Menstrual: 1–5 · Follicular: 6–12 · Ovulation: ~13–16 · Luteal: 17–28``
        """
        parts = []
        for r in self.ranges:
            approx = "~" if r.phase is Phase.OVULATION else ""
            parts.append(f"{r.phase.value}: {approx}{r.start}–{r.end}")
        return " · ".join(parts)


def phase_boundaries(cycle_length: int) -> PhaseBoundaries:
    """Derive the display ranges implied by ``classify``.

    For ``cycle_length >= 10`` the non-empty ranges partition
    ``[1, cycle_length]``.  Shorter cycles can yield empty Follicular or
    Ovulation ranges; they are returned as-is (``start > end``).
    """
    menstrual = PhaseRange(Phase.MENSTRUAL, 1, min(MENSTRUAL_DAYS, cycle_length))
    follicular = PhaseRange(
        Phase.FOLLICULAR,
        MENSTRUAL_DAYS + 1,
        min(follicular_end(cycle_length), cycle_length),
    )
    ovulation_start = max(menstrual.end, follicular.end) + 1
    ovulation = PhaseRange(
        Phase.OVULATION,
        ovulation_start,
        min(ovulation_end(cycle_length), cycle_length),
    )
    luteal = PhaseRange(
        Phase.LUTEAL,
        max(ovulation.end, ovulation_start - 1) + 1,
        cycle_length,
    )
    return PhaseBoundaries(
        cycle_length=cycle_length,
        ranges=(menstrual, follicular, ovulation, luteal),
    )
