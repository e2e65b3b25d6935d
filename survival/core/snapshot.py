"""Immutable snapshot of the simulation for API readers and replays."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

import xxhash

from survival.core.enums import GameState
from survival.core.models import Enemy, PickupRecord, Player, Projectile, WaveState

if TYPE_CHECKING:
    from survival.actions.progression import ProgressionTracker
    from survival.actions.upgrades import UpgradeSelector
    from survival.core.upgrades import UpgradeDefinition
    from survival.core.world_state import SimulationContext
    from survival.weapons.base import WeaponRuntimeState


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of one tick, safe to share across threads.

    Holds copies of every mutable record and a MappingProxyType for the
    enemy dict so readers cannot reach back into the live context.
    """

    tick: int
    time: float
    seed: int
    state: GameState
    player: Player
    enemies: Mapping[int, Enemy]
    pickups: tuple[PickupRecord, ...]
    projectiles: tuple[Projectile, ...]
    wave: WaveState
    weapons: tuple[WeaponRuntimeState, ...]
    upgrade_choices: tuple[UpgradeDefinition, ...] = ()
    upgrade_menu_level: int | None = None
    total_experience: int = 0

    @classmethod
    def from_context(
        cls,
        ctx: SimulationContext,
        state: GameState,
        selector: UpgradeSelector | None = None,
        tracker: ProgressionTracker | None = None,
    ) -> Snapshot:
        return cls(
            tick=ctx.tick,
            time=ctx.time,
            seed=ctx.rng.seed,
            state=state,
            player=ctx.player.copy(),
            enemies=MappingProxyType({eid: e.copy() for eid, e in ctx.enemies.items()}),
            pickups=tuple(p.copy() for p in ctx.pickups.values()),
            projectiles=tuple(p.copy() for p in ctx.projectiles.values()),
            wave=ctx.wave.copy(),
            weapons=tuple(w.runtime_state() for w in ctx.weapons),
            upgrade_choices=selector.choices if selector is not None else (),
            upgrade_menu_level=selector.menu_level if selector is not None else None,
            total_experience=tracker.total_experience if tracker is not None else 0,
        )

    def fingerprint(self) -> str:
        """Stable hash of the gameplay-relevant state (for replay comparison)."""
        h = xxhash.xxh64()
        p = self.player
        h.update(f"{self.tick}|{p.pos.x:.6f},{p.pos.y:.6f}|{p.stats.current_health:.6f}|"
                 f"{p.stats.level}|{p.stats.experience}".encode())
        for eid in sorted(self.enemies):
            e = self.enemies[eid]
            h.update(f"|e{eid}:{e.kind.value}:{e.pos.x:.6f},{e.pos.y:.6f}:"
                     f"{e.stats.current_health:.6f}".encode())
        for pk in sorted(self.pickups, key=lambda r: r.pickup_id):
            h.update(f"|p{pk.pickup_id}:{pk.position.x:.6f},{pk.position.y:.6f}".encode())
        for pr in sorted(self.projectiles, key=lambda r: r.projectile_id):
            h.update(f"|b{pr.projectile_id}:{pr.position.x:.6f},{pr.position.y:.6f}:"
                     f"{pr.damage:.6f}:{pr.lifetime:.6f}".encode())
        for wr in self.weapons:
            h.update(f"|g{wr.weapon_id}:{wr.level}:{wr.base_damage:.6f}:"
                     f"{wr.cooldown_remaining:.6f}".encode())
        w = self.wave
        h.update(f"|w{w.wave_number}:{w.enemies_spawned_this_wave}:{w.active_enemy_count}".encode())
        return h.hexdigest()
