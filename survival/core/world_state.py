"""Mutable authoritative simulation context passed into every component update."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from survival.core.enums import Domain, EffectKind
from survival.core.models import Enemy, PickupRecord, Player, Projectile, Vector2, WaveState
from survival.core.signals import EffectRequest, SignalBus

if TYPE_CHECKING:
    from survival.config import SimulationConfig
    from survival.systems.rng import DeterministicRNG, RandomSource
    from survival.systems.spatial_hash import SpatialHash
    from survival.systems.spawner import SpawnDirector
    from survival.weapons.base import WeaponController

logger = logging.getLogger(__name__)


class SimulationClock:
    """Tick counter, simulation time and the global pause flag."""

    __slots__ = ("tick", "time", "dt", "paused", "pause_reason")

    def __init__(self, dt: float) -> None:
        self.tick: int = 0
        self.time: float = 0.0
        self.dt: float = dt
        self.paused: bool = False
        self.pause_reason: str = ""

    def pause(self, reason: str = "") -> None:
        if not self.paused:
            logger.debug("Simulation paused at tick %d (%s)", self.tick, reason or "unspecified")
        self.paused = True
        self.pause_reason = reason

    def resume(self) -> None:
        if self.paused:
            logger.debug("Simulation resumed at tick %d", self.tick)
        self.paused = False
        self.pause_reason = ""

    def advance(self) -> None:
        self.tick += 1
        self.time = self.tick * self.dt


class SimulationContext:
    """The single source of truth for one simulation run.

    Holds the player, the active enemy population, pickups, projectiles, the
    wave state, random streams and collaborator handles.  Each collection has
    one owning component that mutates it in its own tick phase.
    """

    __slots__ = (
        "config",
        "rng",
        "signals",
        "clock",
        "player",
        "wave",
        "enemies",
        "pickups",
        "projectiles",
        "weapons",
        "spatial_index",
        "spawner",
        "combat_random",
        "spawn_random",
        "upgrade_random",
        "_next_entity_id",
        "_next_pickup_id",
        "_next_projectile_id",
    )

    def __init__(
        self,
        config: SimulationConfig,
        rng: DeterministicRNG,
        spatial_index: SpatialHash,
        player: Player,
        signals: SignalBus | None = None,
        combat_random: RandomSource | None = None,
        spawn_random: RandomSource | None = None,
        upgrade_random: RandomSource | None = None,
    ) -> None:
        self.config = config
        self.rng = rng
        self.signals = signals or SignalBus()
        self.clock = SimulationClock(config.tick_seconds)
        self.player = player
        self.wave = WaveState(
            spawn_interval=config.spawn_interval,
            enemies_per_wave=config.initial_enemies_per_wave,
        )
        self.enemies: dict[int, Enemy] = {}
        self.pickups: dict[int, PickupRecord] = {}
        self.projectiles: dict[int, Projectile] = {}
        self.weapons: list[WeaponController] = []
        self.spatial_index = spatial_index
        self.spawner: SpawnDirector | None = None
        self.combat_random = combat_random or rng.stream(Domain.COMBAT)
        self.spawn_random = spawn_random or rng.stream(Domain.SPAWN)
        self.upgrade_random = upgrade_random or rng.stream(Domain.UPGRADE)
        # Enemy ids start at 1; 0 is the player
        self._next_entity_id: int = 1
        self._next_pickup_id: int = 1
        self._next_projectile_id: int = 1

    # -- time --

    @property
    def tick(self) -> int:
        return self.clock.tick

    @property
    def time(self) -> float:
        return self.clock.time

    @property
    def paused(self) -> bool:
        return self.clock.paused

    # -- id allocation --

    def allocate_entity_id(self) -> int:
        eid = self._next_entity_id
        self._next_entity_id += 1
        return eid

    def allocate_pickup_id(self) -> int:
        pid = self._next_pickup_id
        self._next_pickup_id += 1
        return pid

    def allocate_projectile_id(self) -> int:
        pid = self._next_projectile_id
        self._next_projectile_id += 1
        return pid

    # -- enemy population (mutated by the SpawnDirector) --

    def add_enemy(self, enemy: Enemy) -> None:
        self.enemies[enemy.id] = enemy
        self.spatial_index.insert(enemy.id, enemy.pos)

    def remove_enemy(self, enemy_id: int) -> Enemy | None:
        enemy = self.enemies.pop(enemy_id, None)
        if enemy is not None:
            self.spatial_index.remove(enemy_id, enemy.pos)
        return enemy

    def move_enemy(self, enemy_id: int, new_pos: Vector2) -> None:
        enemy = self.enemies.get(enemy_id)
        if enemy is None:
            return
        old_pos = enemy.pos
        enemy.pos = new_pos
        self.spatial_index.move(enemy_id, old_pos, new_pos)

    def living_enemies(self) -> list[Enemy]:
        """Alive enemies in id order (deterministic iteration)."""
        return [self.enemies[eid] for eid in sorted(self.enemies) if self.enemies[eid].alive]

    # -- spatial queries --

    def query_in_radius(self, point: Vector2, radius: float) -> set[int]:
        """IDs of living enemies whose position lies within *radius* of *point*."""
        result: set[int] = set()
        for eid in self.spatial_index.query_radius(point, radius):
            enemy = self.enemies.get(eid)
            if enemy is not None and enemy.alive and enemy.pos.distance(point) <= radius:
                result.add(eid)
        return result

    def query_nearest(self, point: Vector2, max_range: float | None = None) -> int | None:
        """Nearest living enemy to *point* (linear scan); ties go to the lowest id."""
        best_id: int | None = None
        best_dist = float("inf")
        for enemy in self.living_enemies():
            d = enemy.pos.distance(point)
            if d < best_dist:
                best_dist = d
                best_id = enemy.id
        if best_id is None or (max_range is not None and best_dist > max_range):
            return None
        return best_id

    # -- pickups / projectiles --

    def add_pickup(self, pickup: PickupRecord) -> None:
        self.pickups[pickup.pickup_id] = pickup

    def remove_pickup(self, pickup_id: int) -> PickupRecord | None:
        return self.pickups.pop(pickup_id, None)

    def add_projectile(self, projectile: Projectile) -> None:
        self.projectiles[projectile.projectile_id] = projectile

    def remove_projectile(self, projectile_id: int) -> Projectile | None:
        return self.projectiles.pop(projectile_id, None)

    # -- effects collaborator --

    def request_effect(
        self, effect: EffectKind, position: Vector2, angle: float = 0.0, duration: float = 0.0,
    ) -> None:
        self.signals.spawn_effect.emit(EffectRequest(effect, position, angle, duration))
