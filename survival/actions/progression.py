"""Experience accumulation and leveling for the player."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from survival.core.signals import ExperienceGained, LevelUp

if TYPE_CHECKING:
    from survival.core.models import StatBlock
    from survival.core.signals import SignalBus
    from survival.core.world_state import SimulationClock

logger = logging.getLogger(__name__)


def experience_threshold(level: int) -> int:
    """Experience needed to go from *level* to *level + 1*."""
    return level * 2


class ProgressionTracker:
    """Grants experience, resolves level-ups and raises the pause flag.

    Every level gained is queued so the upgrade selector can offer one menu
    per level, oldest first.
    """

    __slots__ = ("_stats", "_signals", "_clock", "_pending", "total_experience")

    def __init__(
        self,
        stats: StatBlock,
        signals: SignalBus,
        clock: SimulationClock | None = None,
    ) -> None:
        self._stats = stats
        self._signals = signals
        self._clock = clock
        self._pending: deque[int] = deque()
        self.total_experience: int = 0

    @property
    def stats(self) -> StatBlock:
        return self._stats

    @property
    def pending_level_ups(self) -> int:
        return len(self._pending)

    def add_experience(self, amount: int) -> list[int]:
        """Add *amount* experience; returns the levels reached, ascending."""
        if amount <= 0:
            return []

        stats = self._stats
        stats.experience += amount
        self.total_experience += amount
        self._signals.experience_gained.emit(ExperienceGained(amount, self.total_experience))

        gained: list[int] = []
        while stats.experience >= stats.experience_to_next_level:
            stats.experience -= stats.experience_to_next_level
            stats.level += 1
            stats.experience_to_next_level = experience_threshold(stats.level)
            gained.append(stats.level)

        for level in gained:
            logger.info("Level up! Now level %d [XP: %d/%d]",
                        level, stats.experience, stats.experience_to_next_level)
            self._pending.append(level)
            self._signals.level_up.emit(LevelUp(level))

        if gained and self._clock is not None:
            self._clock.pause("level up")
        return gained

    def pop_pending_level(self) -> int | None:
        """Consume the oldest unhandled level-up, if any."""
        return self._pending.popleft() if self._pending else None
