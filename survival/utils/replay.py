"""Replay trace: per-tick state summaries flushed to a JSON file.

Two runs with the same seed and inputs produce identical fingerprints tick
for tick, so diffing two traces pinpoints where a run diverged.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from survival.core.snapshot import Snapshot

logger = logging.getLogger(__name__)


class ReplayRecorder:
    """Accumulates tick summaries and flushes them to a JSON replay file."""

    __slots__ = ("_path", "_ticks", "_seed", "_every")

    def __init__(self, path: str | Path, seed: int, every: int = 1) -> None:
        self._path = Path(path)
        self._seed = seed
        self._every = max(1, every)
        self._ticks: list[dict[str, Any]] = []

    @property
    def ticks(self) -> list[dict[str, Any]]:
        return self._ticks

    def record_tick(self, snapshot: Snapshot) -> None:
        if snapshot.tick % self._every != 0:
            return
        p = snapshot.player
        self._ticks.append(
            {
                "tick": snapshot.tick,
                "state": snapshot.state.name,
                "player": {
                    "pos": [round(p.pos.x, 4), round(p.pos.y, 4)],
                    "hp": round(p.stats.current_health, 4),
                    "level": p.stats.level,
                    "xp": p.stats.experience,
                },
                "wave": snapshot.wave.wave_number,
                "enemies": len(snapshot.enemies),
                "pickups": len(snapshot.pickups),
                "fingerprint": snapshot.fingerprint(),
            }
        )

    def flush(self) -> None:
        """Write accumulated data to disk."""
        replay = {
            "version": "1.0",
            "seed": self._seed,
            "total_ticks": len(self._ticks),
            "ticks": self._ticks,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(replay, indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d ticks)", self._path, len(self._ticks))
