"""Enemy behaviour: chase the player with local separation, then attack.

Each living enemy, in id order:
  1. Outside detection range: idle.
  2. Inside detection range but beyond attack range: move toward the player
     at template speed, steered away from crowded neighbours.
  3. Inside attack range: halt, and strike when the attack cooldown allows.

Damage *taken* by enemies also flows through here (``damage_enemy``) so the
death consequences (experience drop, death effect, despawn) happen exactly
once no matter which weapon landed the final blow.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from survival.actions.combat import NO_EFFECT, DamageOutcome, apply_damage, resolve_damage
from survival.core.enums import EffectKind
from survival.core.models import PLAYER_ID, Vector2
from survival.systems.pickups import drop_pickup

if TYPE_CHECKING:
    from survival.config import SimulationConfig
    from survival.core.models import Enemy
    from survival.core.world_state import SimulationContext
    from survival.systems.player import PlayerController

logger = logging.getLogger(__name__)


def damage_enemy(ctx: SimulationContext, enemy: Enemy, raw_damage: float) -> DamageOutcome:
    """Deliver pre-rolled damage to *enemy* and resolve its death."""
    if not enemy.alive:
        return NO_EFFECT
    outcome = apply_damage(
        enemy.stats, raw_damage, ctx.combat_random, ctx.signals, enemy.id, enemy.kind,
    )
    if outcome.applied > 0.0:
        ctx.request_effect(EffectKind.HIT_FLASH, enemy.pos, duration=0.1)
    if outcome.died:
        handle_enemy_death(ctx, enemy)
    return outcome


def handle_enemy_death(ctx: SimulationContext, enemy: Enemy) -> bool:
    """Drop experience, request the death effect and despawn, once."""
    if enemy.removed:
        return False
    drop_pickup(ctx, enemy.pos, enemy.experience_value)
    ctx.request_effect(EffectKind.DEATH, enemy.pos)
    if ctx.spawner is not None:
        ctx.spawner.despawn(ctx, enemy.id)
    else:
        logger.warning("No spawn director attached; removing enemy %d directly", enemy.id)
        enemy.removed = True
        ctx.remove_enemy(enemy.id)
    logger.info("Tick %d: %s #%d killed (+%d XP dropped)",
                ctx.tick, enemy.kind.name, enemy.id, enemy.experience_value)
    return True


class EnemyController:
    """Movement, separation and melee attack for every living enemy."""

    __slots__ = ("_config", "_player_controller")

    def __init__(
        self,
        config: SimulationConfig,
        player_controller: PlayerController | None = None,
    ) -> None:
        self._config = config
        self._player_controller = player_controller

    def update_all(self, ctx: SimulationContext, dt: float) -> None:
        for enemy in ctx.living_enemies():
            if not ctx.player.alive:
                break
            self.update(ctx, enemy, dt)

    def update(self, ctx: SimulationContext, enemy: Enemy, dt: float) -> None:
        if not enemy.alive:
            return
        cfg = self._config
        player = ctx.player
        to_player = player.pos - enemy.pos
        dist = to_player.length()

        if dist > cfg.enemy_detection_range:
            return

        if dist > cfg.enemy_attack_range:
            heading = (to_player.normalized() + self._separation(ctx, enemy)).normalized()
            step = heading * (enemy.stats.move_speed * dt)
            ctx.move_enemy(enemy.id, enemy.pos + step)
            return

        self._try_attack(ctx, enemy)

    def _separation(self, ctx: SimulationContext, enemy: Enemy) -> Vector2:
        """Weighted sum of unit vectors pointing away from close neighbours."""
        cfg = self._config
        away = Vector2()
        for other_id in sorted(ctx.query_in_radius(enemy.pos, cfg.enemy_avoidance_radius)):
            if other_id == enemy.id:
                continue
            other = ctx.enemies[other_id]
            away = away + (enemy.pos - other.pos).normalized()
        return away * cfg.enemy_avoidance_weight

    def _try_attack(self, ctx: SimulationContext, enemy: Enemy) -> bool:
        now = ctx.time
        if now - enemy.last_attack_at < enemy.attack_cooldown:
            return False
        player = ctx.player
        if self._player_controller is not None and self._player_controller.is_invulnerable(player):
            return False

        enemy.last_attack_at = now
        raw = resolve_damage(enemy.stats, enemy.attack_damage, ctx.combat_random)
        outcome = apply_damage(player.stats, raw, ctx.combat_random, ctx.signals, PLAYER_ID)
        if outcome.dodged:
            logger.debug("Tick %d: player dodged %s #%d", ctx.tick, enemy.kind.name, enemy.id)
        elif outcome.applied > 0.0:
            logger.debug("Tick %d: %s #%d hits player for %.1f [HP: %.1f/%.1f]",
                         ctx.tick, enemy.kind.name, enemy.id, outcome.applied,
                         player.stats.current_health, player.stats.max_health)
        if outcome.died:
            logger.info("Tick %d: player killed by %s #%d", ctx.tick, enemy.kind.name, enemy.id)
        return True
