"""Engine systems: RNG, spatial indexing, spawning, pickups, player movement."""

from survival.systems.rng import DeterministicRNG
from survival.systems.spatial_hash import SpatialHash
from survival.systems.spawner import SpawnDirector
from survival.systems.pickups import PickupAttractor
from survival.systems.player import InputState, PlayerController

__all__ = [
    "DeterministicRNG",
    "InputState",
    "PickupAttractor",
    "PlayerController",
    "SpatialHash",
    "SpawnDirector",
]
