"""Combat resolution, progression and level-up upgrades."""

from survival.actions.combat import DamageOutcome, apply_damage, heal, mitigate, resolve_damage
from survival.actions.progression import ProgressionTracker
from survival.actions.upgrades import UpgradeSelector, apply_upgrade, draw_choices

__all__ = [
    "DamageOutcome",
    "ProgressionTracker",
    "UpgradeSelector",
    "apply_damage",
    "apply_upgrade",
    "draw_choices",
    "heal",
    "mitigate",
    "resolve_damage",
]
