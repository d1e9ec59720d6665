"""Tests for engine records and their stored form."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from cycletrack.engine.base import (
    CycleSettings,
    Entry,
    InvalidSettingsError,
    finite_number,
    parse_date,
)


class TestCycleSettings:
    def test_defaults(self) -> None:
        settings = CycleSettings()
        assert settings.period_start is None
        assert settings.cycle_length == 28

    @pytest.mark.parametrize("cycle_length", [0, -1])
    def test_non_positive_length_rejected(self, cycle_length: int) -> None:
        with pytest.raises(InvalidSettingsError):
            CycleSettings(cycle_length=cycle_length)

    def test_non_integer_length_rejected(self) -> None:
        with pytest.raises(InvalidSettingsError):
            CycleSettings(cycle_length=28.5)

    def test_is_a_value_error(self) -> None:
        assert issubclass(InvalidSettingsError, ValueError)

    def test_datetime_start_reduced_to_date(self) -> None:
        settings = CycleSettings(period_start=datetime(2024, 1, 1, 18, 30))
        assert settings.period_start == date(2024, 1, 1)

    def test_from_record(self) -> None:
        settings = CycleSettings.from_record({"periodStart": "2024-01-01", "cycleLength": 30})
        assert settings == CycleSettings(date(2024, 1, 1), 30)

    @pytest.mark.parametrize("record", [None, {}, {"cycleLength": ""}, {"cycleLength": 0}])
    def test_from_record_defaults_cycle_length(self, record: dict | None) -> None:
        assert CycleSettings.from_record(record).cycle_length == 28

    def test_from_record_custom_default(self) -> None:
        assert CycleSettings.from_record({}, default_cycle_length=31).cycle_length == 31

    def test_from_record_empty_period_start(self) -> None:
        assert CycleSettings.from_record({"periodStart": ""}).period_start is None

    def test_round_trip_record(self) -> None:
        record = {"periodStart": "2024-01-01", "cycleLength": 28}
        assert CycleSettings.from_record(record).to_record() == record


class TestEntry:
    def test_from_record_coerces_numbers(self) -> None:
        entry = Entry.from_record(
            {
                "date": "2024-01-15",
                "weight": "60.5",
                "energy": 7,
                "water": "",
                "symptoms": ["Cramps", "Acne"],
                "cycleDay": "15",
                "cycleNumber": 1,
                "mood": "calm",
            }
        )
        assert entry.date == date(2024, 1, 15)
        assert entry.weight == pytest.approx(60.5)
        assert entry.energy == 7
        assert entry.water is None
        assert entry.symptoms == frozenset({"Cramps", "Acne"})
        assert entry.cycle_day == 15
        assert entry.cycle_number == 1
        assert entry.mood == "calm"

    def test_from_record_missing_date(self) -> None:
        with pytest.raises(ValueError, match="date"):
            Entry.from_record({"weight": 60})

    @pytest.mark.parametrize("raw", ["heavy", float("inf"), float("nan"), "-Infinity"])
    def test_from_record_reads_non_finite_number_as_empty(self, raw) -> None:
        entry = Entry.from_record(
            {"date": "2024-01-01", "weight": raw, "energy": 6, "symptoms": ["Cramps"]}
        )
        assert entry.weight is None
        assert entry.energy == 6
        assert entry.symptoms == frozenset({"Cramps"})

    def test_from_record_non_finite_cycle_day_is_empty(self) -> None:
        assert Entry.from_record({"date": "2024-01-01", "cycleDay": "inf"}).cycle_day is None

    def test_to_record_drops_non_finite_values(self) -> None:
        entry = Entry(date=date(2024, 1, 2), weight=float("inf"), water=1.5)
        assert entry.to_record() == {"date": "2024-01-02", "water": 1.5, "symptoms": []}

    def test_from_record_rejects_fractional_cycle_day(self) -> None:
        with pytest.raises(ValueError, match="cycleDay"):
            Entry.from_record({"date": "2024-01-01", "cycleDay": 2.5})

    def test_to_record_omits_empty_fields(self) -> None:
        entry = Entry(date=date(2024, 1, 2), weight=60.0, symptoms={"Cramps"}, cycle_day=2)
        assert entry.to_record() == {
            "date": "2024-01-02",
            "weight": 60,
            "symptoms": ["Cramps"],
            "cycleDay": 2,
        }

    def test_symptoms_become_frozenset(self) -> None:
        entry = Entry(date=date(2024, 1, 2), symptoms=["Cramps", "Cramps"])
        assert entry.symptoms == frozenset({"Cramps"})

    def test_is_immutable(self) -> None:
        entry = Entry(date=date(2024, 1, 2))
        with pytest.raises(AttributeError):
            entry.weight = 10  # type: ignore[misc]


class TestHelpers:
    @pytest.mark.parametrize(
        "value, expected",
        [(3, 3.0), ("4.5", 4.5), (None, None), ("", None), ("abc", None),
         (float("nan"), None), (float("inf"), None), (True, None)],
    )
    def test_finite_number(self, value, expected) -> None:
        assert finite_number(value) == expected

    def test_parse_date_with_time(self) -> None:
        assert parse_date("2024-01-15T22:10:00") == date(2024, 1, 15)

    def test_parse_date_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_date("15/01/2024")
