"""Combat resolution: outgoing damage rolls, dodge, armor mitigation and healing.

Outgoing damage is rolled on the attacker's side (base x damage multiplier,
optionally scaled by a critical hit).  Incoming damage is resolved on the
defender's side: a dodge roll first, then armor mitigation

    mitigated = raw * (1 - armor / (armor + 100))

Crit only ever scales the pre-mitigation value; a dodge skips mitigation
entirely.  Death is reported exactly once because a dead defender is a no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from survival.core.enums import EnemyKind
from survival.core.signals import Death, HealthChanged

if TYPE_CHECKING:
    from survival.core.models import StatBlock
    from survival.core.signals import SignalBus
    from survival.systems.rng import RandomSource

logger = logging.getLogger(__name__)

ARMOR_CONSTANT = 100.0


@dataclass(frozen=True, slots=True)
class DamageOutcome:
    """What happened when damage reached a defender."""

    applied: float = 0.0
    dodged: bool = False
    died: bool = False


NO_EFFECT = DamageOutcome()


def mitigation_fraction(armor: float) -> float:
    """Fraction of incoming damage absorbed by *armor*; always in [0, 1)."""
    armor = max(0.0, armor)
    return armor / (armor + ARMOR_CONSTANT)


def mitigate(raw: float, armor: float) -> float:
    return raw * (1.0 - mitigation_fraction(armor))


def resolve_damage(attacker: StatBlock, base_damage: float, rng: RandomSource) -> float:
    """Roll outgoing damage for *attacker*.  Consumes exactly one draw."""
    damage = base_damage * attacker.damage_multiplier
    if rng.random() < attacker.crit_chance:
        damage *= attacker.crit_damage_multiplier
    return damage


def apply_damage(
    defender: StatBlock,
    raw_damage: float,
    rng: RandomSource,
    signals: SignalBus | None = None,
    actor_id: int = 0,
    kind: EnemyKind | None = None,
) -> DamageOutcome:
    """Apply *raw_damage* to *defender* after dodge and armor.

    A dead defender is left untouched and consumes no draw.
    """
    if not defender.alive:
        return NO_EFFECT

    if rng.random() < defender.dodge_chance:
        logger.debug("Actor %d dodged %.1f damage", actor_id, raw_damage)
        return DamageOutcome(dodged=True)

    mitigated = mitigate(raw_damage, defender.armor)
    before = defender.current_health
    defender.current_health = max(0.0, before - mitigated)
    applied = before - defender.current_health

    if signals is not None:
        signals.health_changed.emit(
            HealthChanged(actor_id, defender.current_health, defender.max_health)
        )

    died = defender.current_health <= 0.0
    if died:
        logger.debug("Actor %d died (took %.1f)", actor_id, applied)
        if signals is not None:
            signals.death.emit(Death(actor_id, kind))
    return DamageOutcome(applied=applied, died=died)


def heal(
    stats: StatBlock,
    amount: float,
    signals: SignalBus | None = None,
    actor_id: int = 0,
) -> float:
    """Restore up to *amount* health; returns the amount actually restored."""
    if not stats.alive or amount <= 0.0:
        return 0.0
    before = stats.current_health
    stats.current_health = min(stats.max_health, before + amount)
    restored = stats.current_health - before
    if restored > 0.0 and signals is not None:
        signals.health_changed.emit(
            HealthChanged(actor_id, stats.current_health, stats.max_health)
        )
    return restored
