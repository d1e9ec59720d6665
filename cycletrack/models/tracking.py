"""Pydantic models for the log, dashboard, and insights endpoints:
settings, entries, cycle status, chart series, heatmap, tips."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from cycletrack.engine.aggregator import SortAxis
from cycletrack.engine.base import CycleSettings, Entry
from cycletrack.engine.phases import Phase, classify
from cycletrack.models.base import CycleTrackBase


# ---------- Settings ----------

class SettingsUpdate(CycleTrackBase):
    period_start: dt.date | None = None
    cycle_length: int | None = Field(default=None, gt=0)

    def to_settings(self, default_cycle_length: int) -> CycleSettings:
        """Omitted cycle length falls back to the configured default."""
        return CycleSettings(
            period_start=self.period_start,
            cycle_length=self.cycle_length or default_cycle_length,
        )


class SettingsRead(CycleTrackBase):
    period_start: dt.date | None = None
    cycle_length: int
    phase_preview: str


# ---------- Entries ----------

class EntryBase(CycleTrackBase):
    entry_date: dt.date = Field(alias="date")
    weight: float | None = None
    energy: float | None = None
    sleep: float | None = None
    stress: float | None = None
    water: float | None = None
    mood: str | None = None
    symptoms: list[str] = Field(default_factory=list)
    cycle_day: int | None = None
    cycle_number: int | None = None
    notes: str | None = None


class EntryCreate(EntryBase):
    """Log form input.  Limits apply only to new entries, not stored ones."""

    weight: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    energy: float | None = Field(default=None, ge=0, le=10, allow_inf_nan=False)
    sleep: float | None = Field(default=None, ge=0, le=24, allow_inf_nan=False)
    stress: float | None = Field(default=None, ge=0, le=10, allow_inf_nan=False)
    water: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    cycle_day: int | None = Field(default=None, ge=1)
    cycle_number: int | None = Field(default=None, ge=1)

    def to_entry(self) -> Entry:
        return Entry(
            date=self.entry_date,
            weight=self.weight,
            energy=self.energy,
            sleep=self.sleep,
            stress=self.stress,
            water=self.water,
            mood=self.mood or None,
            symptoms=frozenset(s for s in self.symptoms if s),
            cycle_day=self.cycle_day,
            cycle_number=self.cycle_number,
            notes=self.notes or None,
        )


class EntryRead(EntryBase):
    phase: Phase | None = None

    @classmethod
    def from_entry(cls, entry: Entry, settings: CycleSettings) -> EntryRead:
        phase = (
            classify(entry.cycle_day, settings.cycle_length)
            if entry.cycle_day is not None
            else None
        )
        return cls(
            entry_date=entry.date,
            weight=entry.weight,
            energy=entry.energy,
            sleep=entry.sleep,
            stress=entry.stress,
            water=entry.water,
            mood=entry.mood,
            symptoms=sorted(entry.symptoms),
            cycle_day=entry.cycle_day,
            cycle_number=entry.cycle_number,
            notes=entry.notes,
            phase=phase,
        )


# ---------- Cycle position ----------

class CyclePreviewRead(CycleTrackBase):
    """Values the log form pre-fills for a chosen date."""

    entry_date: dt.date = Field(alias="date")
    cycle_day: int | None = None
    cycle_number: int | None = None


class StatusRead(CycleTrackBase):
    as_of: dt.date
    cycle_length: int
    cycle_day: int | None = None
    cycle_number: int | None = None
    phase: Phase | None = None
    label: str


# ---------- Charts ----------

class SeriesPointRead(CycleTrackBase):
    cycle_day: int
    value: float


class CycleSeriesRead(CycleTrackBase):
    cycle_number: int
    label: str
    points: list[SeriesPointRead]


class SeriesRead(CycleTrackBase):
    value_field: str = Field(alias="field")
    sort_by: SortAxis
    cycle_length: int
    cycles: list[CycleSeriesRead]


class PhaseRangeRead(CycleTrackBase):
    phase: Phase
    start: int
    end: int
    is_empty: bool


class PhaseBandsRead(CycleTrackBase):
    cycle_length: int
    ranges: list[PhaseRangeRead]
    preview: str


class AveragesRead(CycleTrackBase):
    window: int
    entries_considered: int
    averages: dict[str, float | None]


# ---------- Insights ----------

class HeatmapRead(CycleTrackBase):
    phases: list[Phase]
    symptoms: list[str]
    counts: dict[Phase, dict[str, int]]
    matrix: dict[str, list[int]]
    total: int


class TipsRead(CycleTrackBase):
    phase: Phase | None = None
    training: str
    nutrition: str
    life: str
    extras: list[str] = Field(default_factory=list)
