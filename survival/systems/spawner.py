"""SpawnDirector: timed enemy spawning in escalating waves.

Enemies appear on a ring around the player.  Each wave is a fixed number of
spawns; when the quota is met the wave advances, the quota grows
geometrically and the spawn interval decays toward its floor.  Every
``boss_wave_interval``-th wave opens with a boss.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from survival.core.enemies import ENEMY_TYPES, EnemyTypeDefinition, get_enemy_type
from survival.core.enums import EnemyKind
from survival.core.models import Enemy, StatBlock, Vector2
from survival.core.signals import WaveChanged

if TYPE_CHECKING:
    from survival.config import SimulationConfig
    from survival.core.world_state import SimulationContext

logger = logging.getLogger(__name__)


# Wave bands: (first wave past the band, [(kind, weight), ...])
_KIND_BANDS: tuple[tuple[int | None, tuple[tuple[EnemyKind, float], ...]], ...] = (
    (3, ((EnemyKind.SQUARE, 0.7), (EnemyKind.TRIANGLE, 0.2), (EnemyKind.ROUND, 0.1))),
    (6, ((EnemyKind.SQUARE, 0.4), (EnemyKind.TRIANGLE, 0.3), (EnemyKind.ROUND, 0.3))),
    (None, ((EnemyKind.SQUARE, 0.3), (EnemyKind.TRIANGLE, 0.2), (EnemyKind.ROUND, 0.5))),
)


def enemies_per_wave(wave: int, initial: int, scaling: float) -> int:
    """Spawn quota for *wave*: ``round(initial * scaling^(wave-1))``."""
    return int(round(initial * scaling ** (wave - 1)))


def kind_weights(wave: int) -> tuple[tuple[EnemyKind, float], ...]:
    for upper, weights in _KIND_BANDS:
        if upper is None or wave < upper:
            return weights
    return _KIND_BANDS[-1][1]


def select_enemy_kind(wave: int, roll: float) -> EnemyKind:
    """Map a uniform *roll* in [0, 1) onto the wave's weighted kind table."""
    weights = kind_weights(wave)
    cumulative = 0.0
    for kind, weight in weights:
        cumulative += weight
        if roll < cumulative:
            return kind
    return weights[-1][0]


def difficulty_multiplier(wave: int, scaling: float) -> float:
    return scaling ** max(0, wave - 1)


def is_boss_wave(wave: int, interval: int) -> bool:
    return interval > 0 and wave % interval == 0


class SpawnDirector:
    """Sole owner of the enemy population and the wave state."""

    __slots__ = ("_config", "_registry", "_timer", "_missing_warned")

    def __init__(
        self,
        config: SimulationConfig,
        registry: dict[EnemyKind, EnemyTypeDefinition] | None = None,
    ) -> None:
        self._config = config
        self._registry = ENEMY_TYPES if registry is None else registry
        # Starts full so the first tick spawns immediately
        self._timer: float = config.spawn_interval
        self._missing_warned: set[EnemyKind] = set()

    @property
    def timer(self) -> float:
        return self._timer

    # -- tick --

    def update(self, ctx: SimulationContext, dt: float) -> Enemy | None:
        """Advance the spawn timer and spawn at most one regular enemy."""
        wave = ctx.wave
        self._timer += dt
        if wave.active_enemy_count >= self._config.max_active_enemies:
            return None
        if self._timer < wave.spawn_interval:
            return None

        rng = ctx.spawn_random
        angle = rng.random() * 2.0 * math.pi
        radius = self._config.spawn_radius + rng.random() * self._config.spawn_jitter
        kind = select_enemy_kind(wave.wave_number, rng.random())

        enemy = self._instantiate(ctx, kind, angle, radius)
        if enemy is None:
            return None

        self._timer = 0.0
        wave.enemies_spawned_this_wave += 1
        if wave.enemies_spawned_this_wave >= wave.enemies_per_wave:
            self._advance_wave(ctx)
        return enemy

    # -- population --

    def spawn_boss(self, ctx: SimulationContext) -> Enemy | None:
        if ctx.wave.active_enemy_count >= self._config.max_active_enemies:
            logger.info("Boss spawn for wave %d skipped: population cap reached",
                        ctx.wave.wave_number)
            return None
        angle = ctx.spawn_random.random() * 2.0 * math.pi
        return self._instantiate(ctx, EnemyKind.BOSS, angle, self._config.boss_spawn_radius)

    def despawn(self, ctx: SimulationContext, enemy_id: int) -> bool:
        """Remove a dead enemy from the population; False if already gone."""
        enemy = ctx.enemies.get(enemy_id)
        if enemy is None or enemy.removed:
            return False
        enemy.removed = True
        ctx.remove_enemy(enemy_id)
        ctx.wave.active_enemy_count = max(0, ctx.wave.active_enemy_count - 1)
        return True

    def _instantiate(
        self, ctx: SimulationContext, kind: EnemyKind, angle: float, radius: float,
    ) -> Enemy | None:
        template = get_enemy_type(kind, self._registry)
        if template is None:
            if kind not in self._missing_warned:
                self._missing_warned.add(kind)
                logger.warning("No enemy template for %s; spawn skipped", kind.name)
            else:
                logger.debug("No enemy template for %s; spawn skipped", kind.name)
            return None

        mult = difficulty_multiplier(ctx.wave.wave_number, self._config.difficulty_scaling)
        health = template.max_health * mult
        pos = ctx.player.pos + Vector2.from_angle(angle, radius)
        enemy = Enemy(
            id=ctx.allocate_entity_id(),
            kind=kind,
            pos=pos,
            stats=StatBlock(
                max_health=health,
                current_health=health,
                base_move_speed=template.move_speed,
                crit_chance=0.0,
            ),
            attack_damage=template.base_damage * mult,
            attack_cooldown=template.attack_cooldown,
            experience_value=template.experience_value,
        )
        ctx.add_enemy(enemy)
        ctx.wave.active_enemy_count += 1
        logger.debug("Tick %d: spawned %s #%d at %r (wave %d, x%.2f)",
                     ctx.tick, template.name, enemy.id, pos, ctx.wave.wave_number, mult)
        return enemy

    # -- waves --

    def _advance_wave(self, ctx: SimulationContext) -> None:
        cfg = self._config
        wave = ctx.wave
        wave.wave_number += 1
        wave.enemies_spawned_this_wave = 0
        wave.enemies_per_wave = enemies_per_wave(
            wave.wave_number, cfg.initial_enemies_per_wave, cfg.wave_scaling,
        )
        wave.spawn_interval = max(cfg.spawn_interval_floor,
                                  wave.spawn_interval * cfg.spawn_interval_decay)
        wave.boss_wave = is_boss_wave(wave.wave_number, cfg.boss_wave_interval)
        logger.info("Wave %d begins: %d enemies, interval %.2fs%s",
                    wave.wave_number, wave.enemies_per_wave, wave.spawn_interval,
                    " (BOSS)" if wave.boss_wave else "")
        ctx.signals.wave_changed.emit(WaveChanged(wave.wave_number, wave.boss_wave))
        if wave.boss_wave:
            self.spawn_boss(ctx)
