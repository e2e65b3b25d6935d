"""SurvivalArena: test fixture around a fully-wired WorldLoop.

Creates a simulation with spawning disabled by default, lets tests place
enemies and pickups by hand, scripts the combat random source, and records
every signal emitted.

Usage:
    arena = SurvivalArena(weapons=("sword",))
    enemy = arena.add_enemy(pos=(1, 0), health=10)
    arena.run_ticks(1)
    assert not enemy.alive
"""

from __future__ import annotations

import os
import sys
from collections import defaultdict, deque
from typing import Iterable

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from survival.config import SimulationConfig
from survival.core.enemies import ENEMY_TYPES
from survival.core.enums import EnemyKind
from survival.core.models import Enemy, PickupRecord, StatBlock, Vector2
from survival.engine.world_loop import WorldLoop
from survival.systems.pickups import drop_pickup


class FixedRandom:
    """Scripted random source: queued values first, then a constant fallback.

    The default fallback of 0.99 never crits (crit 0.1) and never dodges.
    """

    def __init__(self, values: Iterable[float] = (), fallback: float = 0.99) -> None:
        self._values: deque[float] = deque(values)
        self.fallback = fallback
        self.draws = 0

    def push(self, *values: float) -> None:
        self._values.extend(values)

    def random(self) -> float:
        self.draws += 1
        if self._values:
            return self._values.popleft()
        return self.fallback


class SurvivalArena:
    """Small controllable world with the complete tick pipeline."""

    def __init__(
        self,
        seed: int = 42,
        weapons: tuple[str, ...] = (),
        spawning: bool = False,
        **config_overrides,
    ) -> None:
        defaults = dict(
            world_seed=seed,
            max_ticks=99999,
            starting_weapons=tuple(weapons),
        )
        if not spawning:
            defaults["max_active_enemies"] = 0
        defaults.update(config_overrides)
        self.config = SimulationConfig(**defaults)
        self.loop = WorldLoop.build(self.config)
        self.ctx = self.loop.context

        self.combat = FixedRandom()
        self.ctx.combat_random = self.combat

        self.events: dict[str, list] = defaultdict(list)
        for channel in self.ctx.signals.channels():
            channel.subscribe(lambda payload, name=channel.name: self.events[name].append(payload))

    # -- accessors --

    @property
    def player(self):
        return self.ctx.player

    @property
    def tracker(self):
        return self.loop.tracker

    @property
    def selector(self):
        return self.loop.selector

    def weapon(self, weapon_id: str):
        for w in self.ctx.weapons:
            if w.weapon_id == weapon_id:
                return w
        raise KeyError(weapon_id)

    # -- setup --

    def add_enemy(
        self,
        kind: EnemyKind = EnemyKind.SQUARE,
        pos: tuple[float, float] = (5.0, 0.0),
        health: float | None = None,
        damage: float | None = None,
    ) -> Enemy:
        template = ENEMY_TYPES[kind]
        hp = template.max_health if health is None else health
        enemy = Enemy(
            id=self.ctx.allocate_entity_id(),
            kind=kind,
            pos=Vector2(*pos),
            stats=StatBlock(max_health=hp, current_health=hp, base_move_speed=template.move_speed),
            attack_damage=template.base_damage if damage is None else damage,
            attack_cooldown=template.attack_cooldown,
            experience_value=template.experience_value,
        )
        self.ctx.add_enemy(enemy)
        self.ctx.wave.active_enemy_count += 1
        return enemy

    def add_pickup(self, pos: tuple[float, float], value: int = 1) -> PickupRecord:
        return drop_pickup(self.ctx, Vector2(*pos), value)

    # -- running --

    def run_ticks(self, n: int) -> int:
        """Run up to *n* ticks; returns how many actually advanced time."""
        start = self.ctx.tick
        for _ in range(n):
            if not self.loop.tick_once():
                break
        return self.ctx.tick - start
