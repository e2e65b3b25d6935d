"""Enemy templates: one immutable definition per EnemyKind.

Balancing data lives here rather than in per-kind subclasses; a spawned
Enemy copies the numbers it needs at creation time.
"""

from __future__ import annotations

from pydantic.dataclasses import dataclass as pydantic_dataclass

from survival.core.enums import EnemyKind


@pydantic_dataclass(frozen=True)
class EnemyTypeDefinition:
    """Immutable blueprint for one kind of enemy."""

    kind: EnemyKind
    name: str
    max_health: float
    base_damage: float
    move_speed: float
    experience_value: int = 1
    attack_cooldown: float = 1.0


ENEMY_TYPES: dict[EnemyKind, EnemyTypeDefinition] = {}


def _reg(d: EnemyTypeDefinition) -> None:
    ENEMY_TYPES[d.kind] = d


_reg(EnemyTypeDefinition(EnemyKind.SQUARE, "Square Enemy", 100.0, 33.0, 2.5, 1))
_reg(EnemyTypeDefinition(EnemyKind.TRIANGLE, "Triangle Enemy", 80.0, 30.0, 3.0, 1))   # faster, frailer
_reg(EnemyTypeDefinition(EnemyKind.ROUND, "Round Enemy", 120.0, 35.0, 2.0, 2))        # slower, tankier
_reg(EnemyTypeDefinition(EnemyKind.BOSS, "Boss", 600.0, 50.0, 1.8, 10, attack_cooldown=1.5))


def get_enemy_type(
    kind: EnemyKind,
    registry: dict[EnemyKind, EnemyTypeDefinition] | None = None,
) -> EnemyTypeDefinition | None:
    """Look up the template for *kind*; None when the registry lacks it."""
    reg = ENEMY_TYPES if registry is None else registry
    return reg.get(kind)
