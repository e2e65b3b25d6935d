"""Melee arc weapon."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from survival.actions.combat import resolve_damage
from survival.ai.enemy_controller import damage_enemy
from survival.core.enums import EffectKind
from survival.weapons.base import WeaponController, aim_direction

if TYPE_CHECKING:
    from survival.core.world_state import SimulationContext


class Sword(WeaponController):
    """Sweeps an arc in the player's facing; every enemy inside is struck."""

    def fire(self, ctx: SimulationContext) -> int:
        player = ctx.player
        aim = aim_direction(player)
        half_arc = self.spec.arc_angle / 2.0
        ctx.request_effect(EffectKind.SLASH, player.pos, math.degrees(aim.angle()), 0.2)

        hits = 0
        for eid in sorted(ctx.query_in_radius(player.pos, self.spec.max_range)):
            enemy = ctx.enemies[eid]
            offset = enemy.pos - player.pos
            if offset.length() > 0.0 and aim.angle_between(offset) > half_arc:
                continue
            damage = resolve_damage(player.stats, self.base_damage, ctx.combat_random)
            damage_enemy(ctx, enemy, damage)
            hits += 1
        return hits

    def _params(self) -> dict[str, float]:
        return {"range": self.spec.max_range, "arc_angle": self.spec.arc_angle}
