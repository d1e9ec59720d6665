"""Date → cycle position calculator.

Converts a calendar date plus ``CycleSettings`` into a cycle number and
cycle day.  Cycles repeat every ``cycle_length`` days from ``period_start``;
both numbers are 1-indexed so ``period_start`` itself is cycle 1, day 1.

Nothing here reads the system clock.  Callers that want "today" pass the
current date explicitly as ``as_of``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime

from cycletrack.engine.base import CycleAssignment, CycleSettings, Entry, as_calendar_date
from cycletrack.engine.phases import Phase, classify

NO_STATUS_LABEL = "—"


@dataclass(frozen=True)
class CycleStatus:
    """Cycle position and phase for a reference date.

    Attributes:
        as_of:      The reference date.
        assignment: Cycle position, or None when it cannot be computed.
        phase:      Phase of ``assignment.cycle_day``, or None.
    """

    as_of: date
    assignment: CycleAssignment | None = None
    phase: Phase | None = None

    @property
    def label(self) -> str:
        """Badge text, e.g. ``"Ovulation · Day 15"``."""
        if self.assignment is None or self.phase is None:
            return NO_STATUS_LABEL
        return f"{self.phase.value} · Day {self.assignment.cycle_day}"


def whole_days_between(later: date | datetime, earlier: date | datetime) -> int:
    """Signed number of calendar days from ``earlier`` to ``later``.

    Time of day is ignored.
    """
    return (as_calendar_date(later) - as_calendar_date(earlier)).days


def compute_cycle(on_date: date | datetime, settings: CycleSettings) -> CycleAssignment | None:
    """Return the cycle position of ``on_date``.

    Args:
        on_date:  Calendar date to place.
        settings: Period start and cycle length.

    Returns:
        CycleAssignment, or None when ``settings.period_start`` is unset or
        ``on_date`` precedes it.
    """
    if settings.period_start is None:
        return None

    diff = whole_days_between(on_date, settings.period_start)
    if diff < 0:
        return None

    return CycleAssignment(
        cycle_number=diff // settings.cycle_length + 1,
        cycle_day=diff % settings.cycle_length + 1,
    )


def current_status(settings: CycleSettings, as_of: date | datetime) -> CycleStatus:
    """Cycle position and phase for ``as_of`` (the dashboard badge)."""
    as_of = as_calendar_date(as_of)
    assignment = compute_cycle(as_of, settings)
    if assignment is None:
        return CycleStatus(as_of=as_of)
    return CycleStatus(
        as_of=as_of,
        assignment=assignment,
        phase=classify(assignment.cycle_day, settings.cycle_length),
    )


def enrich_entry(entry: Entry, settings: CycleSettings) -> Entry:
    """Fill in ``cycle_day`` / ``cycle_number`` the way the log form does.

    Values already on the entry are kept.  Returns a new Entry; the input is
    never modified.  Entries that cannot be placed come back unchanged.
    """
    if entry.cycle_day is not None and entry.cycle_number is not None:
        return entry

    assignment = compute_cycle(entry.date, settings)
    if assignment is None:
        return entry

    return dataclasses.replace(
        entry,
        cycle_day=entry.cycle_day if entry.cycle_day is not None else assignment.cycle_day,
        cycle_number=(
            entry.cycle_number if entry.cycle_number is not None else assignment.cycle_number
        ),
    )
