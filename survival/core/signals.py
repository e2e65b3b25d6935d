"""Typed signal channels between the simulation core and its observers.

Components publish payloads on a ``Signal``; the UI / API layer subscribes.
Handlers run synchronously in subscription order.  A handler that raises is
logged and skipped so a faulty observer cannot break the tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from survival.core.enums import EffectKind, EnemyKind
from survival.core.models import Vector2
from survival.core.upgrades import UpgradeDefinition

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Signal(Generic[T]):
    """A single typed channel."""

    __slots__ = ("name", "_handlers")

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[Callable[[T], None]] = []

    def subscribe(self, handler: Callable[[T], None]) -> Callable[[T], None]:
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: Callable[[T], None]) -> None:
        # Bound methods are rebuilt on each attribute access; compare by equality
        self._handlers = [h for h in self._handlers if h != handler]

    def emit(self, payload: T) -> None:
        for handler in list(self._handlers):
            try:
                handler(payload)
            except Exception:
                logger.exception("Signal '%s' handler %r failed", self.name, handler)

    def clear(self) -> None:
        self._handlers.clear()

    def __len__(self) -> int:
        return len(self._handlers)


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class HealthChanged:
    actor_id: int
    current: float
    maximum: float


@dataclass(frozen=True, slots=True)
class LevelUp:
    level: int


@dataclass(frozen=True, slots=True)
class Death:
    actor_id: int
    kind: EnemyKind | None = None   # None for the player


@dataclass(frozen=True, slots=True)
class WaveChanged:
    wave_number: int
    boss_wave: bool = False


@dataclass(frozen=True, slots=True)
class ExperienceGained:
    amount: int
    total: int


@dataclass(frozen=True, slots=True)
class UpgradeMenuOpened:
    choices: tuple[UpgradeDefinition, ...]


@dataclass(frozen=True, slots=True)
class UpgradeMenuClosed:
    applied: UpgradeDefinition | None = None


@dataclass(frozen=True, slots=True)
class EffectRequest:
    """Fire-and-forget request for the effects layer; the core never awaits it."""

    effect: EffectKind
    position: Vector2
    angle: float = 0.0        # degrees
    duration: float = 0.0


class SignalBus:
    """All channels the core publishes on."""

    __slots__ = (
        "health_changed",
        "level_up",
        "death",
        "wave_changed",
        "experience_gained",
        "upgrade_menu_opened",
        "upgrade_menu_closed",
        "spawn_effect",
    )

    def __init__(self) -> None:
        self.health_changed: Signal[HealthChanged] = Signal("health_changed")
        self.level_up: Signal[LevelUp] = Signal("level_up")
        self.death: Signal[Death] = Signal("death")
        self.wave_changed: Signal[WaveChanged] = Signal("wave_changed")
        self.experience_gained: Signal[ExperienceGained] = Signal("experience_gained")
        self.upgrade_menu_opened: Signal[UpgradeMenuOpened] = Signal("upgrade_menu_opened")
        self.upgrade_menu_closed: Signal[UpgradeMenuClosed] = Signal("upgrade_menu_closed")
        self.spawn_effect: Signal[EffectRequest] = Signal("spawn_effect")

    def channels(self) -> list[Signal]:
        return [getattr(self, name) for name in self.__slots__]

    def disconnect_all(self) -> None:
        """Drop every subscription (teardown)."""
        for channel in self.channels():
            channel.clear()
