"""Orbiting energy aura."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from survival.actions.combat import resolve_damage
from survival.ai.enemy_controller import damage_enemy
from survival.core.models import Vector2
from survival.weapons.base import WeaponController

if TYPE_CHECKING:
    from survival.config import SimulationConfig
    from survival.core.world_state import SimulationContext
    from survival.weapons.registry import WeaponSpec

RADIUS_PER_LEVEL = 0.5


class EnergyAura(WeaponController):
    """Orbs circle the player; each activation hits everything inside the radius.

    Leveling alternates between adding an orb (even levels, up to the cap)
    and widening the radius.
    """

    def __init__(self, spec: WeaponSpec, config: SimulationConfig) -> None:
        super().__init__(spec, config)
        self.orb_count: int = spec.orb_count
        self.radius: float = spec.radius
        self.rotation: float = 0.0        # degrees

    def update(self, ctx: SimulationContext, dt: float) -> int:
        self.rotation = (self.rotation + self.spec.rotation_speed * dt) % 360.0
        return super().update(ctx, dt)

    def orb_positions(self, center: Vector2) -> list[Vector2]:
        if self.orb_count <= 0:
            return []
        step = 360.0 / self.orb_count
        return [
            center + Vector2.from_angle(math.radians(self.rotation + i * step), self.radius)
            for i in range(self.orb_count)
        ]

    def fire(self, ctx: SimulationContext) -> int:
        player = ctx.player
        hits = 0
        for eid in sorted(ctx.query_in_radius(player.pos, self.radius)):
            damage = resolve_damage(player.stats, self.base_damage, ctx.combat_random)
            damage_enemy(ctx, ctx.enemies[eid], damage)
            hits += 1
        return hits

    def _on_level_up(self) -> None:
        if self.level % 2 == 0 and self.orb_count < self.spec.max_orbs:
            self.orb_count += 1
        else:
            self.radius += RADIUS_PER_LEVEL

    def _params(self) -> dict[str, float]:
        return {"orb_count": self.orb_count, "radius": self.radius, "rotation": self.rotation}
