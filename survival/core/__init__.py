"""Core data models, static definitions and the simulation context."""

from survival.core.enums import Domain, EffectKind, EnemyKind, GameState, PickupState, StatTarget, WeaponKind
from survival.core.models import Enemy, PickupRecord, Player, Projectile, StatBlock, Vector2, WaveState
from survival.core.signals import SignalBus
from survival.core.world_state import SimulationClock, SimulationContext
from survival.core.snapshot import Snapshot

__all__ = [
    "Domain",
    "EffectKind",
    "Enemy",
    "EnemyKind",
    "GameState",
    "PickupRecord",
    "PickupState",
    "Player",
    "Projectile",
    "SignalBus",
    "SimulationClock",
    "SimulationContext",
    "Snapshot",
    "StatBlock",
    "StatTarget",
    "Vector2",
    "WaveState",
    "WeaponKind",
]
