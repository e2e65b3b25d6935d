"""Abstract weapon with the shared cooldown / fire / upgrade cycle.

Subclass and implement:
  - fire(): perform one activation against the current context
  - _params(): per-kind runtime parameters for snapshots (optional)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from survival.core.models import Vector2

if TYPE_CHECKING:
    from survival.config import SimulationConfig
    from survival.core.enums import WeaponKind
    from survival.core.models import Player, StatBlock
    from survival.core.world_state import SimulationContext
    from survival.weapons.registry import WeaponSpec

logger = logging.getLogger(__name__)

_DEFAULT_AIM = Vector2(1.0, 0.0)


@dataclass(slots=True)
class WeaponRuntimeState:
    """Copy of a weapon's mutable state, safe to hand to readers."""

    weapon_id: str
    kind: WeaponKind
    level: int
    base_damage: float
    cooldown_remaining: float
    params: dict[str, float] = field(default_factory=dict)


def aim_direction(player: Player) -> Vector2:
    """Player's last movement direction, or +x before the first move."""
    aim = player.last_move_direction.normalized()
    return aim if aim.length() > 0.0 else _DEFAULT_AIM


class WeaponController(ABC):
    """One equipped weapon.

    Each tick the cooldown either fires the weapon (when it has run out) and
    restarts at ``1 / effective_fire_rate``, or counts down by ``dt``.
    """

    def __init__(self, spec: WeaponSpec, config: SimulationConfig) -> None:
        self.spec = spec
        self._config = config
        self.level: int = 1
        self.base_damage: float = spec.base_damage
        self.cooldown_remaining: float = 0.0

    @property
    def weapon_id(self) -> str:
        return self.spec.weapon_id

    def effective_fire_rate(self, stats: StatBlock) -> float:
        level_bonus = 1.0 + self._config.fire_rate_per_level * (self.level - 1)
        return self.spec.fire_rate * stats.attack_speed_multiplier * level_bonus

    def update(self, ctx: SimulationContext, dt: float) -> int:
        """Tick the cooldown; returns what ``fire`` returned, or 0."""
        player = ctx.player
        if not player.alive:
            return 0
        if self.cooldown_remaining > 0.0:
            self.cooldown_remaining -= dt
            return 0
        result = self.fire(ctx)
        rate = self.effective_fire_rate(player.stats)
        self.cooldown_remaining = 1.0 / rate if rate > 0.0 else float("inf")
        return result

    @abstractmethod
    def fire(self, ctx: SimulationContext) -> int:
        """One activation; returns projectiles launched or enemies hit."""

    def upgrade(self) -> None:
        self.level += 1
        self.base_damage *= self._config.weapon_damage_growth
        self._on_level_up()
        logger.info("%s upgraded to level %d (damage %.1f)",
                    self.spec.name, self.level, self.base_damage)

    def _on_level_up(self) -> None:
        pass

    def _params(self) -> dict[str, float]:
        return {}

    def runtime_state(self) -> WeaponRuntimeState:
        return WeaponRuntimeState(
            weapon_id=self.weapon_id,
            kind=self.spec.kind,
            level=self.level,
            base_damage=self.base_damage,
            cooldown_remaining=self.cooldown_remaining,
            params=self._params(),
        )
