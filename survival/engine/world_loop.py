"""WorldLoop: the authoritative fixed-tick engine.

Phase cycle (every unpaused tick, in this order):
  1. Player: movement intent, dash, regeneration
  2. Spawn: wave timer and enemy creation
  3. Enemies: chase, separation, attacks on the player
  4. Weapons: cooldowns and activations
  5. Projectiles: flight and hits
  6. Pickups: attraction, collection, experience
  7. Upgrade check: open the level-up menu (pauses the loop)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from survival.actions.progression import ProgressionTracker
from survival.actions.upgrades import UpgradeSelector
from survival.ai.enemy_controller import EnemyController
from survival.core.enums import GameState
from survival.core.models import Player, StatBlock
from survival.core.snapshot import Snapshot
from survival.core.world_state import SimulationContext
from survival.systems.pickups import PickupAttractor
from survival.systems.player import InputState, PlayerController
from survival.systems.rng import DeterministicRNG
from survival.systems.spatial_hash import SpatialHash
from survival.systems.spawner import SpawnDirector
from survival.weapons.projectiles import ProjectileSystem
from survival.weapons.registry import create_weapon, weapons_unlocked_at

if TYPE_CHECKING:
    from survival.config import SimulationConfig
    from survival.core.signals import LevelUp, SignalBus
    from survival.utils.replay import ReplayRecorder
    from survival.weapons.base import WeaponController

logger = logging.getLogger(__name__)


def player_from_config(config: SimulationConfig) -> Player:
    """Fresh player at the origin with the configured starting stats."""
    return Player(stats=StatBlock(
        max_health=config.player_max_health,
        current_health=config.player_max_health,
        damage_multiplier=config.player_damage_multiplier,
        attack_speed_multiplier=config.player_attack_speed_multiplier,
        crit_chance=config.player_crit_chance,
        crit_damage_multiplier=config.player_crit_damage_multiplier,
        armor=config.player_armor,
        dodge_chance=config.player_dodge_chance,
        base_move_speed=config.player_base_move_speed,
        move_speed_bonus=config.player_move_speed_bonus,
        health_regen_per_second=config.player_health_regen,
    ))


class WorldLoop:
    """The heartbeat of the simulation.

    Single-threaded mutation of the SimulationContext through a fixed phase
    order.  While the upgrade menu is open the loop is paused: ``tick_once``
    returns True without advancing time.
    """

    __slots__ = (
        "_config",
        "_ctx",
        "_input",
        "_player_controller",
        "_spawner",
        "_enemy_controller",
        "_projectiles",
        "_pickups",
        "_tracker",
        "_selector",
        "_recorder",
        "_game_over_logged",
    )

    def __init__(
        self,
        config: SimulationConfig,
        ctx: SimulationContext,
        player_controller: PlayerController,
        spawner: SpawnDirector,
        enemy_controller: EnemyController,
        projectiles: ProjectileSystem,
        pickups: PickupAttractor,
        tracker: ProgressionTracker,
        selector: UpgradeSelector,
        recorder: ReplayRecorder | None = None,
    ) -> None:
        self._config = config
        self._ctx = ctx
        self._input = InputState()
        self._player_controller = player_controller
        self._spawner = spawner
        self._enemy_controller = enemy_controller
        self._projectiles = projectiles
        self._pickups = pickups
        self._tracker = tracker
        self._selector = selector
        self._recorder = recorder
        self._game_over_logged = False

        ctx.spawner = spawner
        ctx.signals.level_up.subscribe(self._on_level_up)

    @classmethod
    def build(
        cls,
        config: SimulationConfig,
        recorder: ReplayRecorder | None = None,
        signals: SignalBus | None = None,
    ) -> WorldLoop:
        """Wire a complete simulation from *config*."""
        rng = DeterministicRNG(config.world_seed)
        ctx = SimulationContext(
            config=config,
            rng=rng,
            spatial_index=SpatialHash(config.spatial_cell_size),
            player=player_from_config(config),
            signals=signals,
        )
        tracker = ProgressionTracker(ctx.player.stats, ctx.signals, ctx.clock)
        selector = UpgradeSelector(
            ctx.player.stats, ctx.signals, ctx.clock, tracker, ctx.upgrade_random,
            choices_per_level=config.upgrade_choices_per_level,
        )
        player_controller = PlayerController(config)
        loop = cls(
            config=config,
            ctx=ctx,
            player_controller=player_controller,
            spawner=SpawnDirector(config),
            enemy_controller=EnemyController(config, player_controller),
            projectiles=ProjectileSystem(config),
            pickups=PickupAttractor(config, tracker),
            tracker=tracker,
            selector=selector,
            recorder=recorder,
        )
        for weapon_id in config.starting_weapons:
            loop.grant_weapon(weapon_id)
        return loop

    # -- accessors --

    @property
    def context(self) -> SimulationContext:
        return self._ctx

    @property
    def tracker(self) -> ProgressionTracker:
        return self._tracker

    @property
    def selector(self) -> UpgradeSelector:
        return self._selector

    @property
    def signals(self) -> SignalBus:
        return self._ctx.signals

    @property
    def state(self) -> GameState:
        if not self._ctx.player.alive:
            return GameState.GAME_OVER
        if self._ctx.paused:
            return GameState.PAUSED
        return GameState.PLAYING

    @property
    def input(self) -> InputState:
        return self._input

    # -- external input --

    def set_input(self, inp: InputState) -> None:
        self._input = inp

    def grant_weapon(self, weapon_id: str) -> WeaponController | None:
        """Equip *weapon_id*; a weapon already carried is upgraded instead."""
        for weapon in self._ctx.weapons:
            if weapon.weapon_id == weapon_id:
                weapon.upgrade()
                return weapon
        weapon = create_weapon(weapon_id, self._config)
        if weapon is not None:
            self._ctx.weapons.append(weapon)
            logger.info("Tick %d: %s unlocked", self._ctx.tick, weapon.spec.name)
        return weapon

    def choose_upgrade(self, index: int) -> None:
        self._selector.choose(index)

    def dismiss_upgrade(self) -> None:
        self._selector.dismiss()

    def _on_level_up(self, ev: LevelUp) -> None:
        for weapon_id in weapons_unlocked_at(ev.level, self._config):
            self.grant_weapon(weapon_id)

    # -- ticking --

    def tick_once(self) -> bool:
        """Execute a single tick.  Returns False if the simulation should stop."""
        ctx = self._ctx
        if not ctx.player.alive:
            if not self._game_over_logged:
                self._game_over_logged = True
                logger.info("Tick %d: Player is dead: game over (wave %d, level %d)",
                            ctx.tick, ctx.wave.wave_number, ctx.player.stats.level)
            return False

        if ctx.tick >= self._config.max_ticks:
            logger.info("Tick %d: Max ticks reached.", ctx.tick)
            return False

        if ctx.paused:
            return True

        self._step()
        ctx.clock.advance()
        if self._recorder is not None:
            self._recorder.record_tick(self.create_snapshot())
        return True

    def _step(self) -> None:
        ctx = self._ctx
        dt = ctx.clock.dt

        # --- Phase 1: Player ---
        self._player_controller.update(ctx, self._input, dt)
        if self._input.dash is not None:
            # Dash is a one-shot trigger; movement intent persists
            self._input = InputState(self._input.move_intent)

        # --- Phase 2: Spawn ---
        self._spawner.update(ctx, dt)

        # --- Phase 3: Enemies ---
        self._enemy_controller.update_all(ctx, dt)

        # --- Phase 4: Weapons ---
        for weapon in list(ctx.weapons):
            weapon.update(ctx, dt)

        # --- Phase 5: Projectiles ---
        self._projectiles.update(ctx, dt)

        # --- Phase 6: Pickups / progression ---
        self._pickups.update(ctx, dt)

        # --- Phase 7: Upgrade check ---
        if self._tracker.pending_level_ups and not self._selector.menu_open:
            self._selector.open_menu()

    def create_snapshot(self) -> Snapshot:
        """Create an immutable snapshot of the current simulation state."""
        return Snapshot.from_context(self._ctx, self.state, self._selector, self._tracker)

    def run(self, auto_upgrade: bool = True) -> None:
        """Run headless until game over or max_ticks.

        With *auto_upgrade* the first offered upgrade is taken whenever the
        menu opens; otherwise the run stops at the first menu.
        """
        ctx = self._ctx
        logger.info("=== Simulation started (seed=%d) ===", ctx.rng.seed)

        while self.tick_once():
            if self._selector.menu_open:
                if not auto_upgrade:
                    logger.info("Tick %d: upgrade menu open, stopping headless run", ctx.tick)
                    break
                self._selector.choose(0)

            if ctx.tick % 500 == 0 and not ctx.paused:
                logger.info(
                    "Tick %d: wave %d, %d enemies, player L%d [HP: %.0f/%.0f]",
                    ctx.tick, ctx.wave.wave_number, len(ctx.enemies),
                    ctx.player.stats.level, ctx.player.stats.current_health,
                    ctx.player.stats.max_health,
                )

        logger.info("=== Simulation finished at tick %d ===", ctx.tick)
        if self._recorder is not None:
            self._recorder.flush()

    def shutdown(self) -> None:
        """Drop all signal subscriptions."""
        self._ctx.signals.disconnect_all()
