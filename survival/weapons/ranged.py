"""Projectile weapons: the single-shot Gun and the spread-shot Double Barrel."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from survival.actions.combat import resolve_damage
from survival.core.models import Projectile, Vector2
from survival.weapons.base import WeaponController, aim_direction

if TYPE_CHECKING:
    from survival.core.world_state import SimulationContext


def _rotate(v: Vector2, degrees: float) -> Vector2:
    return Vector2.from_angle(v.angle() + math.radians(degrees), v.length())


class Gun(WeaponController):
    """Fires one projectile at the nearest enemy in range."""

    def _target_direction(self, ctx: SimulationContext) -> Vector2 | None:
        player = ctx.player
        target_id = ctx.query_nearest(player.pos, self.spec.max_range)
        if target_id is None:
            return None
        direction = (ctx.enemies[target_id].pos - player.pos).normalized()
        if direction.length() == 0.0:
            direction = aim_direction(player)
        return direction

    def _launch(self, ctx: SimulationContext, direction: Vector2) -> Projectile:
        # Damage is rolled now and carried by the projectile
        damage = resolve_damage(ctx.player.stats, self.base_damage, ctx.combat_random)
        projectile = Projectile(
            projectile_id=ctx.allocate_projectile_id(),
            position=ctx.player.pos,
            velocity=direction * self.spec.projectile_speed,
            damage=damage,
            lifetime=self.spec.projectile_lifetime,
        )
        ctx.add_projectile(projectile)
        return projectile

    def fire(self, ctx: SimulationContext) -> int:
        direction = self._target_direction(ctx)
        if direction is None:
            return 0
        self._launch(ctx, direction)
        return 1


class DoubleBarrel(Gun):
    """Two projectiles fanned at plus/minus half the spread angle."""

    def fire(self, ctx: SimulationContext) -> int:
        direction = self._target_direction(ctx)
        if direction is None:
            return 0
        half = self.spec.spread_angle / 2.0
        self._launch(ctx, _rotate(direction, half))
        self._launch(ctx, _rotate(direction, -half))
        return 2

    def _params(self) -> dict[str, float]:
        return {"spread_angle": self.spec.spread_angle}
