"""Projectile flight, expiry and hit resolution."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from survival.ai.enemy_controller import damage_enemy

if TYPE_CHECKING:
    from survival.config import SimulationConfig
    from survival.core.models import Projectile
    from survival.core.world_state import SimulationContext

logger = logging.getLogger(__name__)


class ProjectileSystem:
    """Moves every live projectile and lands at most one hit per projectile."""

    __slots__ = ("_config",)

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config

    def update(self, ctx: SimulationContext, dt: float) -> int:
        """Advance projectiles one tick; returns the number of hits landed."""
        hits = 0
        for pid in sorted(ctx.projectiles):
            projectile = ctx.projectiles[pid]
            if projectile.consumed:
                ctx.remove_projectile(pid)
                continue

            projectile.position = projectile.position + projectile.velocity * dt
            projectile.lifetime -= dt

            if self._check_hit(ctx, projectile):
                hits += 1
                ctx.remove_projectile(pid)
            elif projectile.lifetime <= 0.0:
                ctx.remove_projectile(pid)
        return hits

    def _check_hit(self, ctx: SimulationContext, projectile: Projectile) -> bool:
        candidates = ctx.query_in_radius(projectile.position, self._config.projectile_hit_radius)
        if not candidates:
            return False
        # Closest enemy takes the hit; ties broken by id
        target_id = min(
            candidates,
            key=lambda eid: (ctx.enemies[eid].pos.distance(projectile.position), eid),
        )
        projectile.consumed = True
        damage_enemy(ctx, ctx.enemies[target_id], projectile.damage)
        return True
