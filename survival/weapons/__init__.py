"""Weapons: the shared cooldown cycle, four variants and projectiles."""

from survival.weapons.base import WeaponController
from survival.weapons.projectiles import ProjectileSystem
from survival.weapons.registry import WEAPON_SPECS, WeaponSpec, create_weapon

__all__ = ["ProjectileSystem", "WEAPON_SPECS", "WeaponController", "WeaponSpec", "create_weapon"]
