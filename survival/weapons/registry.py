"""Weapon specs, the weapon factory and level-based unlocks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic.dataclasses import dataclass as pydantic_dataclass

from survival.core.enums import WeaponKind
from survival.weapons.aura import EnergyAura
from survival.weapons.melee import Sword
from survival.weapons.ranged import DoubleBarrel, Gun

if TYPE_CHECKING:
    from survival.config import SimulationConfig
    from survival.weapons.base import WeaponController

logger = logging.getLogger(__name__)


@pydantic_dataclass(frozen=True)
class WeaponSpec:
    """Immutable starting parameters for one weapon."""

    weapon_id: str
    kind: WeaponKind
    name: str
    base_damage: float
    fire_rate: float                  # activations per second at level 1
    max_range: float = 0.0
    projectile_speed: float = 0.0
    projectile_lifetime: float = 0.0
    spread_angle: float = 0.0         # degrees between the two barrels
    arc_angle: float = 0.0            # degrees, melee sweep
    radius: float = 0.0               # aura orbit radius
    orb_count: int = 0
    max_orbs: int = 0
    rotation_speed: float = 0.0       # degrees per second


WEAPON_SPECS: dict[str, WeaponSpec] = {}


def _reg(s: WeaponSpec) -> None:
    WEAPON_SPECS[s.weapon_id] = s


_reg(WeaponSpec("gun", WeaponKind.GUN, "Gun", 15.0, 1.0,
                max_range=15.0, projectile_speed=10.0, projectile_lifetime=3.0))
_reg(WeaponSpec("double_barrel", WeaponKind.DOUBLE_BARREL, "Double Barrel", 20.0, 0.8,
                max_range=20.0, projectile_speed=12.0, projectile_lifetime=3.0,
                spread_angle=15.0))
_reg(WeaponSpec("sword", WeaponKind.SWORD, "Sword", 25.0, 1.5,
                max_range=2.0, arc_angle=90.0))
_reg(WeaponSpec("energy_aura", WeaponKind.ENERGY_AURA, "Energy Aura", 15.0, 2.0,
                radius=3.0, orb_count=3, max_orbs=6, rotation_speed=180.0))


_WEAPON_CLASSES: dict[WeaponKind, type[WeaponController]] = {
    WeaponKind.GUN: Gun,
    WeaponKind.DOUBLE_BARREL: DoubleBarrel,
    WeaponKind.SWORD: Sword,
    WeaponKind.ENERGY_AURA: EnergyAura,
}


def create_weapon(
    weapon_id: str,
    config: SimulationConfig,
    specs: dict[str, WeaponSpec] | None = None,
) -> WeaponController | None:
    """Build a weapon by id; None (with a warning) for an unknown id."""
    spec = (WEAPON_SPECS if specs is None else specs).get(weapon_id)
    if spec is None:
        logger.warning("Unknown weapon '%s'", weapon_id)
        return None
    return _WEAPON_CLASSES[spec.kind](spec, config)


def weapons_unlocked_at(level: int, config: SimulationConfig) -> tuple[str, ...]:
    """Weapon ids granted on reaching *level*."""
    for unlock_level, weapon_ids in config.weapon_unlocks:
        if unlock_level == level:
            return tuple(weapon_ids)
    return ()
