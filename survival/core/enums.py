"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    COMBAT = 0
    SPAWN = 1
    UPGRADE = 2


@unique
class EnemyKind(IntEnum):
    """Tags used to look up enemy templates."""

    SQUARE = 0
    TRIANGLE = 1
    ROUND = 2
    BOSS = 3


@unique
class StatTarget(IntEnum):
    """Which StatBlock field an upgrade mutates."""

    ATTACK = 0
    ATTACK_SPEED = 1
    ARMOR = 2
    MAX_HEALTH = 3
    MOVE_SPEED = 4
    CRIT_CHANCE = 5
    CRIT_DAMAGE = 6
    HEALTH_REGEN = 7


@unique
class PickupState(IntEnum):
    """Experience orb attraction phases."""

    IDLE = 0
    ATTRACTED = 1
    COLLECTED = 2


@unique
class WeaponKind(IntEnum):
    """Weapon variants the player can carry."""

    GUN = 0
    DOUBLE_BARREL = 1
    SWORD = 2
    ENERGY_AURA = 3


@unique
class EffectKind(IntEnum):
    """Visual effects the core can request from the effects layer."""

    DASH_TRAIL = 0
    HIT_FLASH = 1
    SLASH = 2
    DEATH = 3


@unique
class GameState(IntEnum):
    """Top-level simulation phase."""

    PLAYING = 0
    PAUSED = 1
    GAME_OVER = 2
