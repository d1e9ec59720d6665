"""Shared fixtures for cycle engine tests."""

from __future__ import annotations

from datetime import date

import pytest

from cycletrack.engine.base import CycleSettings, Entry
from cycletrack.engine.config_loader import EngineConfig, load_engine_config

PERIOD_START = date(2024, 1, 1)


@pytest.fixture
def engine_config() -> EngineConfig:
    """Load the bundled engine config for tests."""
    return load_engine_config()


@pytest.fixture
def settings() -> CycleSettings:
    """A 28-day cycle starting 2024-01-01."""
    return CycleSettings(period_start=PERIOD_START, cycle_length=28)


@pytest.fixture
def unset_settings() -> CycleSettings:
    """Settings before the user has configured a period start."""
    return CycleSettings()


@pytest.fixture
def vocabulary(engine_config: EngineConfig) -> list[str]:
    return list(engine_config.symptom_vocabulary)


@pytest.fixture
def weight_entries() -> list[Entry]:
    """Two cycles of weight readings, logged out of day order."""
    return [
        Entry(date=date(2024, 1, 10), weight=58.0, cycle_day=10, cycle_number=1),
        Entry(date=date(2024, 1, 1), weight=60.0, cycle_day=1, cycle_number=1),
        Entry(date=date(2024, 1, 30), weight=61.0, cycle_day=2, cycle_number=2),
        Entry(date=date(2024, 1, 5), energy=4.0, cycle_day=5, cycle_number=1),
    ]
