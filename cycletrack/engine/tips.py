"""Phase-based suggestions for training, nutrition, and daily life.

A fixed table gives each phase its three tips.  Two refinements look at the
latest same-day metrics:

- Menstrual phase with low energy → gentler training suggestion.
- Low water intake (any phase) → hydration reminder in ``extras``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from cycletrack.engine.base import finite_number
from cycletrack.engine.config_loader import EngineConfig, get_engine_config
from cycletrack.engine.phases import Phase


@dataclass(frozen=True)
class PhaseTips:
    """Suggested actions for a phase.

    Attributes:
        training:  Movement / exercise suggestion.
        nutrition: Food suggestion.
        life:      Scheduling / lifestyle suggestion.
        extras:    Additional reminders triggered by the day's metrics.
        phase:     Phase the tips were resolved for, or None for the
                   placeholder.
    """

    training: str
    nutrition: str
    life: str
    extras: tuple[str, ...] = ()
    phase: Phase | None = None


TIPS: dict[Phase, PhaseTips] = {
    Phase.MENSTRUAL: PhaseTips(
        "Gentle movement", "Iron-rich meals", "Early night", phase=Phase.MENSTRUAL
    ),
    Phase.FOLLICULAR: PhaseTips(
        "Strength focus", "Lean protein + carbs", "Deep work blocks", phase=Phase.FOLLICULAR
    ),
    Phase.OVULATION: PhaseTips(
        "Intervals optional", "Hydrate + electrolytes", "Presentations/social",
        phase=Phase.OVULATION,
    ),
    Phase.LUTEAL: PhaseTips(
        "Steady effort", "Fibre + magnesium", "Calendar buffer", phase=Phase.LUTEAL
    ),
}

if set(TIPS) != set(Phase):
    raise RuntimeError("TIPS must cover every Phase")


def placeholder_tips(config: EngineConfig | None = None) -> PhaseTips:
    text = (config or get_engine_config()).tips.placeholder
    return PhaseTips(training=text, nutrition=text, life=text)


def resolve_tips(
    phase: Phase | None,
    latest_metrics: Any | None = None,
    config: EngineConfig | None = None,
) -> PhaseTips:
    """Return the tips for ``phase``, refined by the day's metrics.

    Args:
        phase:          Current phase, or None when no period start is set.
        latest_metrics: Any object with optional ``energy`` / ``water``
                        attributes, typically the latest Entry for the day.
        config:         Engine config supplying thresholds and texts.

    Returns:
        PhaseTips.  A neutral placeholder when ``phase`` is None.
    """
    cfg = config or get_engine_config()
    if phase is None:
        return placeholder_tips(cfg)

    tips = TIPS[Phase(phase)]
    if latest_metrics is None:
        return tips

    energy = finite_number(getattr(latest_metrics, "energy", None))
    water = finite_number(getattr(latest_metrics, "water", None))

    if tips.phase is Phase.MENSTRUAL and energy is not None and energy < cfg.tips.low_energy_threshold:
        tips = dataclasses.replace(tips, training=cfg.tips.gentle_training)
    if water is not None and water < cfg.tips.low_water_threshold_l:
        tips = dataclasses.replace(tips, extras=tips.extras + (cfg.tips.hydration_reminder,))
    return tips
