"""Thread-safe ring buffer of gameplay events, fed from the signal bus."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from survival.core.models import PLAYER_ID

if TYPE_CHECKING:
    from survival.core.signals import (
        Death, LevelUp, SignalBus, UpgradeMenuClosed, UpgradeMenuOpened, WaveChanged,
    )


@dataclass(frozen=True, slots=True)
class SimEvent:
    """A single simulation event for the API event feed."""

    tick: int
    category: str
    message: str
    entity_ids: tuple[int, ...] = ()  # IDs of entities involved in this event


class EventLog:
    """Bounded event log.  Writers append; readers take copies.

    The oldest events fall off once ``capacity`` is reached.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, capacity: int = 2000) -> None:
        self._buffer: deque[SimEvent] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def append(self, event: SimEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def since_tick(self, tick: int) -> list[SimEvent]:
        """Return all events with tick >= *tick*."""
        with self._lock:
            return [e for e in self._buffer if e.tick >= tick]

    def latest(self, count: int = 50) -> list[SimEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()


def attach_signal_feed(log: EventLog, signals: SignalBus, tick_source: Callable[[], int]) -> None:
    """Subscribe *log* to the gameplay-level channels of *signals*.

    Health changes and effect requests are too frequent for the feed and
    are left out.
    """

    def on_death(ev: Death) -> None:
        if ev.actor_id == PLAYER_ID:
            msg = "Player died"
        else:
            msg = f"{ev.kind.name if ev.kind is not None else 'Enemy'} #{ev.actor_id} died"
        log.append(SimEvent(tick_source(), "death", msg, (ev.actor_id,)))

    def on_level_up(ev: LevelUp) -> None:
        log.append(SimEvent(tick_source(), "level_up", f"Player reached level {ev.level}",
                            (PLAYER_ID,)))

    def on_wave(ev: WaveChanged) -> None:
        suffix = " (boss wave)" if ev.boss_wave else ""
        log.append(SimEvent(tick_source(), "wave", f"Wave {ev.wave_number} started{suffix}"))

    def on_menu_opened(ev: UpgradeMenuOpened) -> None:
        names = ", ".join(c.display_text for c in ev.choices)
        log.append(SimEvent(tick_source(), "upgrade", f"Upgrade menu opened: {names}"))

    def on_menu_closed(ev: UpgradeMenuClosed) -> None:
        msg = (f"Upgrade chosen: {ev.applied.display_text}"
               if ev.applied is not None else "Upgrade menu dismissed")
        log.append(SimEvent(tick_source(), "upgrade", msg))

    signals.death.subscribe(on_death)
    signals.level_up.subscribe(on_level_up)
    signals.wave_changed.subscribe(on_wave)
    signals.upgrade_menu_opened.subscribe(on_menu_opened)
    signals.upgrade_menu_closed.subscribe(on_menu_closed)
