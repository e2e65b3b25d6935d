"""Domain-separated deterministic RNG using xxhash.

The outcome of tick T depends ONLY on WorldSeed + inputs + state at T-1.

Formula: RNG_Value = Hash(WorldSeed, Domain, Key, DrawIndex)

Combat, spawning and upgrade draws each pull from their own stream, so a
change in how often one subsystem rolls never shifts another's sequence.
"""

from __future__ import annotations

import struct
from typing import Protocol

import xxhash

from survival.core.enums import Domain


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in [0, 1); ``random.Random`` qualifies."""

    def random(self) -> float: ...


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, key, index):
    no internal mutable state.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, index: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, key, index)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, index: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, index) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, key: int, index: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, index)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, index: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, key, index) < probability

    def stream(self, domain: Domain, key: int = 0) -> RngStream:
        """Sequential draws for one domain, starting at index 0."""
        return RngStream(self, domain, key)


class RngStream:
    """Sequential view over a DeterministicRNG domain.

    Draw *n* is ``rng.next_float(domain, key, n)``; the only state is the
    draw counter, so a stream can be rewound by recreating it.
    """

    __slots__ = ("_rng", "_domain", "_key", "_index")

    def __init__(self, rng: DeterministicRNG, domain: Domain, key: int = 0) -> None:
        self._rng = rng
        self._domain = domain
        self._key = key
        self._index = 0

    @property
    def draws(self) -> int:
        return self._index

    def random(self) -> float:
        value = self._rng.next_float(self._domain, self._key, self._index)
        self._index += 1
        return value

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.random()
