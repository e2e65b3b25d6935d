"""Upgrade catalog: the fixed list of permanent stat upgrades offered on level-up."""

from __future__ import annotations

from pydantic.dataclasses import dataclass as pydantic_dataclass

from survival.core.enums import StatTarget


@pydantic_dataclass(frozen=True)
class UpgradeDefinition:
    """Immutable description of one upgrade option."""

    upgrade_id: str
    display_text: str
    description: str
    stat_target: StatTarget
    magnitude: float


UPGRADE_CATALOG: tuple[UpgradeDefinition, ...] = (
    UpgradeDefinition(
        "attack", "Attack +10%", "Increase attack damage by 10%",
        StatTarget.ATTACK, 0.10,
    ),
    UpgradeDefinition(
        "attack_speed", "Attack Speed +10%", "Increase attack speed by 10%",
        StatTarget.ATTACK_SPEED, 0.10,
    ),
    UpgradeDefinition(
        "armor", "Armor +25%", "Increase armor by 25%",
        StatTarget.ARMOR, 0.25,
    ),
    UpgradeDefinition(
        "health", "Health +10%", "Increase max health by 10% and fully heal",
        StatTarget.MAX_HEALTH, 0.10,
    ),
    UpgradeDefinition(
        "speed", "Move Speed +10%", "Increase movement speed by 10%",
        StatTarget.MOVE_SPEED, 0.10,
    ),
    UpgradeDefinition(
        "crit_chance", "Crit Chance +5%", "Increase critical hit chance by 5%",
        StatTarget.CRIT_CHANCE, 0.05,
    ),
    UpgradeDefinition(
        "crit_damage", "Crit Damage +25%", "Increase critical damage multiplier by 25%",
        StatTarget.CRIT_DAMAGE, 0.25,
    ),
    UpgradeDefinition(
        "health_regen", "Health Regen +1", "Gain 1 health per second regeneration",
        StatTarget.HEALTH_REGEN, 1.0,
    ),
)

UPGRADES_BY_ID: dict[str, UpgradeDefinition] = {u.upgrade_id: u for u in UPGRADE_CATALOG}
