"""Load, validate, and hot-reload the CycleTrack engine configuration.

The config lives in ``engine_config.yaml`` alongside this module.  At startup
it is loaded once and cached.  Call ``reload_engine_config()`` to re-read from
disk after an edit; no restart required.

Usage::

    from cycletrack.engine.config_loader import get_engine_config

    config = get_engine_config()
    config.symptom_vocabulary          # ('Cramps', 'Bloating', ...)
    config.tips.low_water_threshold_l  # 1.5
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger("cycletrack.engine.config")

_CONFIG_PATH = Path(__file__).parent / "engine_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class TipsConfig:
    """Metric-dependent refinements applied by the tip resolver."""

    low_energy_threshold: float
    gentle_training: str
    low_water_threshold_l: float
    hydration_reminder: str
    placeholder: str


@dataclass
class DashboardConfig:
    """Window sizes for the dashboard summaries."""

    averages_window_entries: int = 28
    recent_entries: int = 10


@dataclass
class EngineConfig:
    """Complete, validated engine configuration.

    Attributes:
        version:              Config schema version string.
        default_cycle_length: Cycle length used when settings carry none.
        symptom_vocabulary:   Symptoms counted by the phase heatmap, in
                              display order.
        tips:                 Tip resolver refinement settings.
        dashboard:            Dashboard summary window sizes.
    """

    version: str
    default_cycle_length: int
    symptom_vocabulary: tuple[str, ...]
    tips: TipsConfig
    dashboard: DashboardConfig
    _raw: dict = field(default_factory=dict, repr=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when engine_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Engine config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{path} must contain a mapping at the top level")
    return raw


def _validate_and_build(raw: dict) -> EngineConfig:
    """Validate the raw YAML dict and construct an EngineConfig.

    Every problem found is collected and reported in one error.

    Raises:
        ConfigValidationError: If required fields are missing or invalid.
    """
    errors: list[str] = []

    def _number(section: dict, key: str, default: float, path: str) -> float:
        value = section.get(key, default)
        try:
            return float(value)
        except (TypeError, ValueError):
            errors.append(f"{path}.{key} must be a number, got {value!r}")
            return default

    def _positive_int(section: dict, key: str, default: int, path: str) -> int:
        value = section.get(key, default)
        try:
            number = int(value)
        except (TypeError, ValueError):
            errors.append(f"{path}.{key} must be an integer, got {value!r}")
            return default
        if number <= 0:
            errors.append(f"{path}.{key} must be positive, got {number}")
        return number

    version = str(raw.get("version", "1.0"))

    # ── Cycle ──
    cycle_raw = raw.get("cycle") or {}
    default_length = _positive_int(cycle_raw, "default_length_days", 28, "cycle")

    # ── Symptoms ──
    symptoms_raw = raw.get("symptoms")
    symptoms: list[str] = []
    if not symptoms_raw:
        errors.append("'symptoms' list is missing or empty")
    elif not isinstance(symptoms_raw, list):
        errors.append("'symptoms' must be a list of symptom names")
    else:
        for item in symptoms_raw:
            name = str(item).strip()
            if not name:
                errors.append("'symptoms' contains an empty name")
            elif name in symptoms:
                errors.append(f"Duplicate symptom '{name}'")
            else:
                symptoms.append(name)

    # ── Tips ──
    tips_raw = raw.get("tips") or {}
    tips = TipsConfig(
        low_energy_threshold=_number(tips_raw, "low_energy_threshold", 5, "tips"),
        gentle_training=str(tips_raw.get("gentle_training", "Rest or light stretching")),
        low_water_threshold_l=_number(tips_raw, "low_water_threshold_l", 1.5, "tips"),
        hydration_reminder=str(
            tips_raw.get("hydration_reminder", "Top up water: aim for 2 L today")
        ),
        placeholder=str(tips_raw.get("placeholder", "—")),
    )

    # ── Dashboard ──
    dash_raw = raw.get("dashboard") or {}
    dashboard = DashboardConfig(
        averages_window_entries=_positive_int(
            dash_raw, "averages_window_entries", 28, "dashboard"
        ),
        recent_entries=_positive_int(dash_raw, "recent_entries", 10, "dashboard"),
    )

    if errors:
        raise ConfigValidationError(
            f"engine_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return EngineConfig(
        version=version,
        default_cycle_length=default_length,
        symptom_vocabulary=tuple(symptoms),
        tips=tips,
        dashboard=dashboard,
        _raw=raw,
    )


def load_engine_config(path: Path | None = None) -> EngineConfig:
    """Load and validate the engine config from disk.

    Args:
        path: Override path to YAML. Uses the bundled engine_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded engine config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: EngineConfig | None = None
_config_lock = threading.Lock()


def get_engine_config() -> EngineConfig:
    """Return the global EngineConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_engine_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_engine_config()
    return _config


def reload_engine_config(path: Path | None = None) -> EngineConfig:
    """Reload the engine config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_engine_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded engine config: %s → %s", old_version, new_config.version)
    return new_config
