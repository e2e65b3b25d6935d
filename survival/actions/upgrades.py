"""Level-up upgrade draws and the modal upgrade menu.

A menu opens for each pending level-up.  While it is open the simulation is
paused; choosing or dismissing closes it and opens the next pending menu,
or clears the pause flag once no level-ups are left.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Sequence

from survival.core.enums import StatTarget
from survival.core.models import PLAYER_ID
from survival.core.signals import HealthChanged, UpgradeMenuClosed, UpgradeMenuOpened
from survival.core.upgrades import UPGRADE_CATALOG, UpgradeDefinition

if TYPE_CHECKING:
    from survival.actions.progression import ProgressionTracker
    from survival.core.models import StatBlock
    from survival.core.signals import SignalBus
    from survival.core.world_state import SimulationClock
    from survival.systems.rng import RandomSource

logger = logging.getLogger(__name__)


def draw_choices(
    catalog: Sequence[UpgradeDefinition],
    count: int,
    rng: RandomSource,
) -> list[UpgradeDefinition]:
    """Uniformly sample *count* distinct upgrades, without replacement.

    A catalog smaller than *count* yields every entry (in draw order).
    """
    available = list(catalog)
    picked: list[UpgradeDefinition] = []
    while available and len(picked) < count:
        idx = min(int(rng.random() * len(available)), len(available) - 1)
        picked.append(available.pop(idx))
    return picked


# ---------------------------------------------------------------------------
# Stat application (dispatch on StatTarget)
# ---------------------------------------------------------------------------

def _apply_attack(stats: StatBlock, m: float) -> None:
    stats.damage_multiplier *= 1.0 + m


def _apply_attack_speed(stats: StatBlock, m: float) -> None:
    stats.attack_speed_multiplier *= 1.0 + m


def _apply_armor(stats: StatBlock, m: float) -> None:
    stats.armor += m


def _apply_max_health(stats: StatBlock, m: float) -> None:
    stats.max_health *= 1.0 + m
    stats.current_health = stats.max_health


def _apply_move_speed(stats: StatBlock, m: float) -> None:
    stats.move_speed_bonus += m


def _apply_crit_chance(stats: StatBlock, m: float) -> None:
    stats.crit_chance = min(1.0, stats.crit_chance + m)


def _apply_crit_damage(stats: StatBlock, m: float) -> None:
    stats.crit_damage_multiplier += m


def _apply_health_regen(stats: StatBlock, m: float) -> None:
    stats.health_regen_per_second += m


_APPLIERS: dict[StatTarget, Callable[[StatBlock, float], None]] = {
    StatTarget.ATTACK: _apply_attack,
    StatTarget.ATTACK_SPEED: _apply_attack_speed,
    StatTarget.ARMOR: _apply_armor,
    StatTarget.MAX_HEALTH: _apply_max_health,
    StatTarget.MOVE_SPEED: _apply_move_speed,
    StatTarget.CRIT_CHANCE: _apply_crit_chance,
    StatTarget.CRIT_DAMAGE: _apply_crit_damage,
    StatTarget.HEALTH_REGEN: _apply_health_regen,
}


def apply_upgrade(stats: StatBlock, upgrade: UpgradeDefinition) -> None:
    applier = _APPLIERS.get(upgrade.stat_target)
    if applier is None:
        logger.warning("No handler for stat target %s (upgrade '%s')",
                       upgrade.stat_target, upgrade.upgrade_id)
        return
    applier(stats, upgrade.magnitude)


# ---------------------------------------------------------------------------
# Selector
# ---------------------------------------------------------------------------

class UpgradeSelector:
    """Presents upgrade choices for pending level-ups and applies the pick."""

    __slots__ = (
        "_stats", "_signals", "_clock", "_tracker", "_rng",
        "_catalog", "_choices_per_level", "_choices", "_menu_level",
    )

    def __init__(
        self,
        stats: StatBlock,
        signals: SignalBus,
        clock: SimulationClock,
        tracker: ProgressionTracker,
        rng: RandomSource,
        catalog: Sequence[UpgradeDefinition] = UPGRADE_CATALOG,
        choices_per_level: int = 3,
    ) -> None:
        self._stats = stats
        self._signals = signals
        self._clock = clock
        self._tracker = tracker
        self._rng = rng
        self._catalog = tuple(catalog)
        self._choices_per_level = choices_per_level
        self._choices: tuple[UpgradeDefinition, ...] = ()
        self._menu_level: int | None = None

    @property
    def menu_open(self) -> bool:
        return self._menu_level is not None

    @property
    def choices(self) -> tuple[UpgradeDefinition, ...]:
        return self._choices

    @property
    def menu_level(self) -> int | None:
        return self._menu_level

    def open_menu(self) -> tuple[UpgradeDefinition, ...]:
        """Open the menu for the oldest pending level-up.

        Returns the offered choices.  With nothing pending the call is a
        no-op; with a menu already open the current choices are returned.
        """
        if self.menu_open:
            return self._choices
        level = self._tracker.pop_pending_level()
        if level is None:
            return ()

        self._menu_level = level
        self._choices = tuple(draw_choices(self._catalog, self._choices_per_level, self._rng))
        if not self._choices:
            logger.warning("Upgrade catalog is empty; skipping level %d menu", level)
            self._menu_level = None
            self._advance()
            return ()

        self._clock.pause("upgrade menu")
        logger.info("Upgrade menu for level %d: %s",
                    level, ", ".join(c.upgrade_id for c in self._choices))
        self._signals.upgrade_menu_opened.emit(UpgradeMenuOpened(self._choices))
        return self._choices

    def choose(self, index: int) -> UpgradeDefinition:
        """Apply the choice at *index* and close the menu."""
        if not self.menu_open:
            raise ValueError("No upgrade menu is open")
        if not 0 <= index < len(self._choices):
            raise ValueError(
                f"Upgrade index {index} out of range (0..{len(self._choices) - 1})"
            )
        upgrade = self._choices[index]
        apply_upgrade(self._stats, upgrade)
        logger.info("Applied upgrade '%s' at level %d", upgrade.upgrade_id, self._menu_level)
        if upgrade.stat_target == StatTarget.MAX_HEALTH:
            self._signals.health_changed.emit(
                HealthChanged(PLAYER_ID, self._stats.current_health, self._stats.max_health)
            )
        self._close(upgrade)
        return upgrade

    def dismiss(self) -> None:
        """Close the menu without applying anything."""
        if not self.menu_open:
            raise ValueError("No upgrade menu is open")
        logger.info("Upgrade menu for level %d dismissed", self._menu_level)
        self._close(None)

    def _close(self, applied: UpgradeDefinition | None) -> None:
        self._choices = ()
        self._menu_level = None
        self._signals.upgrade_menu_closed.emit(UpgradeMenuClosed(applied))
        self._advance()

    def _advance(self) -> None:
        if self._tracker.pending_level_ups == 0:
            self._clock.resume()
        else:
            # Still paused: chain straight into the next level's menu
            self.open_menu()
