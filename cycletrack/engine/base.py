"""Canonical data records for the CycleTrack cycle engine.

Every engine operation reads these immutable records and returns new derived
values.  ``CycleSettings`` and ``Entry`` are the single source of truth shared
by the engine, the storage repository, and the API layer.

The stored (JSON) form uses the camelCase keys of the original browser app
(``periodStart``, ``cycleLength``, ``cycleDay``, ``cycleNumber``) so existing
exports load unchanged.  ``from_record`` / ``to_record`` translate between
the two forms.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

logger = logging.getLogger("cycletrack.engine")

DEFAULT_CYCLE_LENGTH = 28


class InvalidSettingsError(ValueError):
    """Raised when cycle settings violate an engine precondition."""


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def as_calendar_date(value: date | datetime) -> date:
    """Reduce a date or datetime to calendar-day granularity."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(value: Any) -> date | None:
    """Parse an ISO-8601 date (or datetime) string into a ``date``.

    Empty values return None.  A time component is discarded.

    Raises:
        ValueError: If the value is not a recognizable date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return as_calendar_date(value)
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError as exc:
        raise ValueError(f"Not an ISO-8601 date: {value!r}") from exc


def finite_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or None if it has no finite reading.

    Accepts ints, floats and numeric strings.  Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _optional_number(record: dict, key: str) -> float | None:
    raw = record.get(key)
    if raw is None or raw == "":
        return None
    number = finite_number(raw)
    if number is None:
        logger.debug("Field '%s' has no finite reading (%r), read as empty", key, raw)
    return number


def _optional_int(record: dict, key: str) -> int | None:
    number = _optional_number(record, key)
    if number is None:
        return None
    if not number.is_integer():
        raise ValueError(f"Field '{key}' must be a whole number, got {number!r}")
    return int(number)


def _compact(number: float | None) -> int | float | None:
    """Write whole floats back as ints (60.0 → 60) to keep records tidy.

    Non-finite values are dropped so stored documents stay strict JSON.
    """
    number = finite_number(number)
    if number is None:
        return None
    return int(number) if number.is_integer() else number


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CycleSettings:
    """User configuration anchoring all cycle computations.

    Attributes:
        period_start: First day of the tracked period (cycle 1, day 1).
                      None until the user configures it.
        cycle_length: Configured cycle length in days (> 0).
    """

    period_start: date | None = None
    cycle_length: int = DEFAULT_CYCLE_LENGTH

    def __post_init__(self) -> None:
        if isinstance(self.cycle_length, bool) or not isinstance(self.cycle_length, int):
            raise InvalidSettingsError(
                f"cycle_length must be an integer, got {self.cycle_length!r}"
            )
        if self.cycle_length <= 0:
            raise InvalidSettingsError(
                f"cycle_length must be positive, got {self.cycle_length}"
            )
        if self.period_start is not None:
            object.__setattr__(self, "period_start", as_calendar_date(self.period_start))

    @classmethod
    def from_record(
        cls, record: dict | None, default_cycle_length: int = DEFAULT_CYCLE_LENGTH
    ) -> CycleSettings:
        """Build settings from the stored form.

        A missing, empty, or zero ``cycleLength`` falls back to
        ``default_cycle_length``.
        """
        record = record or {}
        length = _optional_int(record, "cycleLength") or default_cycle_length
        return cls(
            period_start=parse_date(record.get("periodStart")),
            cycle_length=length,
        )

    def to_record(self) -> dict:
        record: dict[str, Any] = {"cycleLength": self.cycle_length}
        if self.period_start is not None:
            record["periodStart"] = self.period_start.isoformat()
        return record


@dataclass(frozen=True)
class Entry:
    """One day's logged health observations.

    Attributes:
        date:         Calendar date the observations belong to.
        weight:       Body weight (kg).
        energy:       Energy rating (1–10).
        sleep:        Sleep duration (hours).
        stress:       Stress rating (1–10).
        water:        Water intake (litres).
        mood:         Free-text mood label.
        symptoms:     Symptom names logged for the day.
        cycle_day:    Day within the cycle, if computed at log time.
        cycle_number: Cycle ordinal, if computed at log time.
        notes:        Free-text notes.
    """

    date: date
    weight: float | None = None
    energy: float | None = None
    sleep: float | None = None
    stress: float | None = None
    water: float | None = None
    mood: str | None = None
    symptoms: frozenset[str] = field(default_factory=frozenset)
    cycle_day: int | None = None
    cycle_number: int | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", as_calendar_date(self.date))
        if not isinstance(self.symptoms, frozenset):
            object.__setattr__(self, "symptoms", frozenset(self.symptoms or ()))

    @classmethod
    def from_record(cls, record: dict) -> Entry:
        """Build an entry from the stored form.

        Numeric fields without a finite reading (``"heavy"``, ``Infinity``)
        are read as empty, so the entry still counts wherever that field is
        not needed.

        Raises:
            ValueError: If the date is missing or a cycle day/number is fractional.
        """
        entry_date = parse_date(record.get("date"))
        if entry_date is None:
            raise ValueError("Entry record has no 'date'")
        symptoms = record.get("symptoms") or []
        if isinstance(symptoms, str):
            symptoms = [symptoms]
        return cls(
            date=entry_date,
            weight=_optional_number(record, "weight"),
            energy=_optional_number(record, "energy"),
            sleep=_optional_number(record, "sleep"),
            stress=_optional_number(record, "stress"),
            water=_optional_number(record, "water"),
            mood=record.get("mood") or None,
            symptoms=frozenset(str(s) for s in symptoms),
            cycle_day=_optional_int(record, "cycleDay"),
            cycle_number=_optional_int(record, "cycleNumber"),
            notes=record.get("notes") or None,
        )

    def to_record(self) -> dict:
        record: dict[str, Any] = {
            "date": self.date.isoformat(),
            "weight": _compact(self.weight),
            "energy": _compact(self.energy),
            "sleep": _compact(self.sleep),
            "stress": _compact(self.stress),
            "water": _compact(self.water),
            "mood": self.mood,
            "symptoms": sorted(self.symptoms),
            "cycleDay": self.cycle_day,
            "cycleNumber": self.cycle_number,
            "notes": self.notes,
        }
        return {k: v for k, v in record.items() if v is not None}


@dataclass(frozen=True)
class CycleAssignment:
    """Cycle position of a calendar date.

    Attributes:
        cycle_number: 1-indexed cycle ordinal since ``period_start``.
        cycle_day:    1-indexed day within that cycle (day 1 = first day of
                      menstruation).
    """

    cycle_number: int
    cycle_day: int
