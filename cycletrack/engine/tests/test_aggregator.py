"""Tests for per-cycle grouping and dashboard summaries."""

from __future__ import annotations

from collections import Counter
from datetime import date, timedelta

import pytest

from cycletrack.engine.aggregator import (
    SeriesPoint,
    SortAxis,
    group_by_cycle,
    recent_average,
    recent_entries,
)
from cycletrack.engine.base import Entry


def make_entry(day: int | None, cycle: int | None, **values: float) -> Entry:
    return Entry(date=date(2024, 1, 1), cycle_day=day, cycle_number=cycle, **values)


class TestGroupByCycle:
    def test_documented_example(self) -> None:
        entries = [
            make_entry(1, 1, weight=60),
            make_entry(10, 1, weight=58),
            make_entry(2, 2, weight=61),
        ]
        result = group_by_cycle(entries, "weight")
        assert result == {
            1: [SeriesPoint(1, 60.0), SeriesPoint(10, 58.0)],
            2: [SeriesPoint(2, 61.0)],
        }

    def test_sorts_points_by_day(self, weight_entries: list[Entry]) -> None:
        result = group_by_cycle(weight_entries, "weight")
        assert [p.cycle_day for p in result[1]] == [1, 10]

    def test_sorts_points_by_value(self, weight_entries: list[Entry]) -> None:
        result = group_by_cycle(weight_entries, "weight", sort_by=SortAxis.VALUE)
        assert [p.value for p in result[1]] == [58.0, 60.0]

    def test_sort_axis_accepts_plain_string(self, weight_entries: list[Entry]) -> None:
        result = group_by_cycle(weight_entries, "weight", sort_by="value")
        assert [p.value for p in result[1]] == [58.0, 60.0]

    def test_skips_entries_without_the_field(self, weight_entries: list[Entry]) -> None:
        result = group_by_cycle(weight_entries, "weight")
        assert all(p.cycle_day != 5 for p in result[1])
        energy = group_by_cycle(weight_entries, "energy")
        assert energy == {1: [SeriesPoint(5, 4.0)]}

    def test_skips_entries_without_cycle_day(self) -> None:
        entries = [make_entry(None, 1, weight=60), make_entry(3, 1, weight=61)]
        assert group_by_cycle(entries, "weight") == {1: [SeriesPoint(3, 61.0)]}

    def test_skips_non_finite_values(self) -> None:
        entries = [
            make_entry(1, 1, weight=float("nan")),
            make_entry(2, 1, weight=float("inf")),
            make_entry(3, 1, weight=59),
        ]
        assert group_by_cycle(entries, "weight") == {1: [SeriesPoint(3, 59.0)]}

    def test_missing_cycle_number_defaults_to_one(self) -> None:
        entries = [make_entry(4, None, weight=60), make_entry(2, 1, weight=61)]
        result = group_by_cycle(entries, "weight")
        assert list(result) == [1]
        assert [p.cycle_day for p in result[1]] == [2, 4]

    def test_cycles_in_numeric_order(self) -> None:
        entries = [
            make_entry(1, 10, weight=60),
            make_entry(1, 2, weight=60),
            make_entry(1, 1, weight=60),
        ]
        assert list(group_by_cycle(entries, "weight")) == [1, 2, 10]

    def test_numeric_string_cycle_numbers_compare_as_integers(self) -> None:
        records = [
            {"date": "2024-01-01", "weight": 60, "cycleDay": 1, "cycleNumber": "10"},
            {"date": "2024-01-02", "weight": 61, "cycleDay": 1, "cycleNumber": "9"},
        ]
        entries = [Entry.from_record(r) for r in records]
        assert list(group_by_cycle(entries, "weight")) == [9, 10]

    def test_stable_sort_keeps_insertion_order_for_ties(self) -> None:
        entries = [
            make_entry(3, 1, weight=60),
            make_entry(3, 1, weight=61),
            make_entry(3, 1, weight=62),
        ]
        by_day = group_by_cycle(entries, "weight")
        assert [p.value for p in by_day[1]] == [60.0, 61.0, 62.0]

    def test_stable_sort_by_value_keeps_insertion_order_for_ties(self) -> None:
        entries = [
            make_entry(9, 1, energy=1),
            make_entry(3, 1, energy=1),
            make_entry(5, 1, energy=0),
            make_entry(7, 1, energy=1),
        ]
        by_value = group_by_cycle(entries, "energy", sort_by=SortAxis.VALUE)
        assert [p.cycle_day for p in by_value[1]] == [5, 9, 3, 7]

    def test_duplicate_points_are_kept(self) -> None:
        entries = [make_entry(3, 1, weight=60), make_entry(3, 1, weight=60)]
        assert group_by_cycle(entries, "weight") == {1: [SeriesPoint(3, 60.0)] * 2}

    def test_idempotent_on_reconstruction(self) -> None:
        entries = [
            make_entry((i * 7) % 28 + 1, i % 3 + 1, weight=55 + (i % 5))
            for i in range(40)
        ] + [make_entry(None, 1, weight=70), make_entry(5, None, weight=57)]
        first = group_by_cycle(entries, "weight")
        rebuilt = [
            make_entry(p.cycle_day, number, weight=p.value)
            for number, points in first.items()
            for p in points
        ]
        assert group_by_cycle(rebuilt, "weight") == first

        original_points = Counter(
            (e.cycle_number or 1, e.cycle_day, e.weight) for e in entries if e.cycle_day
        )
        grouped_points = Counter(
            (number, p.cycle_day, p.value) for number, points in first.items() for p in points
        )
        assert grouped_points == original_points

    def test_does_not_mutate_input(self, weight_entries: list[Entry]) -> None:
        snapshot = list(weight_entries)
        group_by_cycle(weight_entries, "weight", sort_by=SortAxis.VALUE)
        assert weight_entries == snapshot

    def test_empty_input(self) -> None:
        assert group_by_cycle([], "sleep") == {}

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown value field"):
            group_by_cycle([], "mood")


class TestRecentAverage:
    def test_averages_last_window(self) -> None:
        entries = [make_entry(1, 1, weight=w) for w in (50, 60, 70, 80)]
        assert recent_average(entries, "weight", window=2) == pytest.approx(75.0)

    def test_rounds_to_one_decimal(self) -> None:
        entries = [make_entry(1, 1, energy=e) for e in (5, 6, 6)]
        assert recent_average(entries, "energy") == pytest.approx(5.7)

    def test_ignores_missing_values(self) -> None:
        entries = [make_entry(1, 1, weight=60), make_entry(1, 1, energy=3)]
        assert recent_average(entries, "weight") == pytest.approx(60.0)

    def test_no_values_returns_none(self) -> None:
        entries = [make_entry(1, 1, energy=3)]
        assert recent_average(entries, "weight") is None
        assert recent_average([], "weight") is None

    def test_does_not_need_cycle_day(self) -> None:
        entries = [make_entry(None, None, sleep=7.5)]
        assert recent_average(entries, "sleep") == pytest.approx(7.5)


class TestRecentEntries:
    def test_newest_first_and_limited(self) -> None:
        entries = [
            Entry(date=date(2024, 1, 1) + timedelta(days=i)) for i in range(15)
        ]
        recent = recent_entries(entries, limit=10)
        assert len(recent) == 10
        assert recent[0].date == date(2024, 1, 15)
        assert recent[-1].date == date(2024, 1, 6)

    def test_fewer_than_limit(self) -> None:
        entries = [Entry(date=date(2024, 1, 1)), Entry(date=date(2024, 1, 2))]
        assert [e.date.day for e in recent_entries(entries)] == [2, 1]
