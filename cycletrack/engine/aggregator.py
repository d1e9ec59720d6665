"""Group logged entries by cycle for overlay charts.

Each cycle becomes one ordered point series of ``(cycle_day, value)`` for a
chosen numeric field, so cycles can be drawn on top of each other against
cycle day.  Also provides the small dashboard summaries (recent averages,
recent entries).

Policy:
- Entries without a finite cycle day or a finite value for the field are
  left out of that field's series only.
- A missing cycle number counts as cycle 1 so legacy / ungrouped entries
  still show up.
"""

from __future__ import annotations

import logging
import statistics
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from operator import attrgetter

from cycletrack.engine.base import Entry, finite_number

logger = logging.getLogger("cycletrack.engine.aggregator")

# Entry fields that can be charted against cycle day
NUMERIC_FIELDS: tuple[str, ...] = ("weight", "energy", "sleep", "stress", "water")

UNGROUPED_CYCLE = 1


class SortAxis(str, Enum):
    """Sort key for points within a series.

    ``day`` suits line charts with cycle day on the x axis; ``value`` suits
    scatter charts that put the metric on the x axis.
    """

    DAY = "day"
    VALUE = "value"


@dataclass(frozen=True)
class SeriesPoint:
    cycle_day: int
    value: float


def _check_field(value_field: str) -> None:
    if value_field not in NUMERIC_FIELDS:
        raise ValueError(
            f"Unknown value field {value_field!r}; expected one of {', '.join(NUMERIC_FIELDS)}"
        )


def _cycle_key(entry: Entry) -> int:
    if entry.cycle_number is None:
        return UNGROUPED_CYCLE
    return int(entry.cycle_number)


def group_by_cycle(
    entries: Iterable[Entry],
    value_field: str,
    sort_by: SortAxis = SortAxis.DAY,
) -> dict[int, list[SeriesPoint]]:
    """Build one point series per cycle number for ``value_field``.

    Args:
        entries:     Logged entries, in insertion order.
        value_field: One of ``NUMERIC_FIELDS``.
        sort_by:     Order of points inside each series.  The sort is
                     stable, so ties keep insertion order.

    Returns:
        Mapping of cycle number → points, iterating in ascending cycle order.

    Raises:
        ValueError: If ``value_field`` is not a numeric entry field.
    """
    _check_field(value_field)

    cycles: dict[int, list[SeriesPoint]] = {}
    skipped = 0
    for entry in entries:
        day = finite_number(entry.cycle_day)
        value = finite_number(getattr(entry, value_field))
        if day is None or value is None:
            skipped += 1
            continue
        cycles.setdefault(_cycle_key(entry), []).append(
            SeriesPoint(cycle_day=int(day), value=value)
        )

    if skipped:
        logger.debug("group_by_cycle(%s): skipped %d entries", value_field, skipped)

    key = attrgetter("value" if SortAxis(sort_by) is SortAxis.VALUE else "cycle_day")

    return {number: sorted(cycles[number], key=key) for number in sorted(cycles)}


def recent_average(
    entries: Sequence[Entry], value_field: str, window: int = 28
) -> float | None:
    """Mean of ``value_field`` over the last ``window`` entries.

    Entries without a finite value are ignored.

    Returns:
        Mean rounded to one decimal, or None if no entry in the window has
        a value.
    """
    _check_field(value_field)
    if window <= 0:
        return None

    values = [
        number
        for entry in list(entries)[-window:]
        if (number := finite_number(getattr(entry, value_field))) is not None
    ]
    if not values:
        return None
    return round(statistics.mean(values), 1)


def recent_entries(entries: Sequence[Entry], limit: int = 10) -> list[Entry]:
    """The last ``limit`` entries, newest first."""
    if limit <= 0:
        return []
    return list(reversed(list(entries)[-limit:]))
