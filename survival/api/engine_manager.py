"""EngineManager: runs the WorldLoop on a background thread.

The API reads from an atomically-swapped immutable Snapshot.  Anything that
mutates the simulation (input, upgrade choices) is queued as a command and
executed on the engine thread between ticks, so the SimulationContext keeps
a single writer.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from concurrent.futures import Future
from typing import TYPE_CHECKING, Callable, TypeVar

from survival.core.models import PLAYER_ID, Vector2
from survival.engine.world_loop import WorldLoop
from survival.systems.player import InputState
from survival.utils.event_log import EventLog, attach_signal_feed

if TYPE_CHECKING:
    from survival.config import SimulationConfig
    from survival.core.signals import Death
    from survival.core.snapshot import Snapshot
    from survival.core.upgrades import UpgradeDefinition

logger = logging.getLogger(__name__)

T = TypeVar("T")

_COMMAND_TIMEOUT = 5.0


class EngineManager:
    """Manages the simulation lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded ring buffer)
      - control commands (start / pause / resume / step / reset)
      - queued gameplay commands (movement, dash, upgrade menu)
    """

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config
        self.config = config
        self._tick_rate: float = config.tick_seconds  # real-time pacing by default

        self._loop: WorldLoop | None = None

        # Thread-safe shared state
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog()
        self._commands: queue.Queue[tuple[Callable[[], object], Future]] = queue.Queue()
        # Serializes inline command execution when no engine thread is alive
        self._inline_lock = threading.Lock()

        # Counters
        self._total_kills: int = 0

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.001, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def total_kills(self) -> int:
        return self._total_kills

    @property
    def loop(self) -> WorldLoop | None:
        """The live WorldLoop.  Only touch it from the engine thread or while stopped."""
        return self._loop

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- lifecycle --

    def start(self, paused: bool = False) -> None:
        """Launch the engine thread; with *paused* it waits for step or resume."""
        if self._running.is_set():
            return
        self._stop_requested.clear()
        if paused:
            self._paused.set()
        else:
            self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        self._thread = None
        with self._inline_lock:
            self._drain_commands()
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild, and leave stopped with a fresh initial snapshot."""
        self.stop()
        if self._loop is not None:
            self._loop.shutdown()
        self._event_log.clear()
        self._total_kills = 0
        self._build()
        logger.info("EngineManager reset.")

    # -- gameplay commands --

    def set_move(self, x: float, y: float) -> None:
        def apply() -> None:
            loop = self._require_loop()
            loop.set_input(InputState(Vector2(x, y), loop.input.dash))
        self.execute(apply)

    def request_dash(self, x: float = 0.0, y: float = 0.0) -> None:
        def apply() -> None:
            loop = self._require_loop()
            loop.set_input(InputState(loop.input.move_intent, Vector2(x, y)))
        self.execute(apply)

    def choose_upgrade(self, index: int) -> UpgradeDefinition:
        """Apply upgrade *index*; raises ValueError when invalid."""
        def apply() -> UpgradeDefinition:
            loop = self._require_loop()
            upgrade = loop.selector.choose(index)
            self._publish_snapshot()
            return upgrade
        return self.execute(apply)

    def dismiss_upgrade(self) -> None:
        def apply() -> None:
            self._require_loop().dismiss_upgrade()
            self._publish_snapshot()
        self.execute(apply)

    def execute(self, fn: Callable[[], T]) -> T:
        """Run *fn* on the engine thread (or inline when it is not running).

        Exceptions raised by *fn* propagate to the caller.
        """
        thread = self._thread
        if thread is None or not thread.is_alive() or threading.current_thread() is thread:
            with self._inline_lock:
                return fn()
        future: Future = Future()
        self._commands.put((fn, future))
        deadline = time.monotonic() + _COMMAND_TIMEOUT
        while True:
            try:
                return future.result(timeout=0.05)
            except TimeoutError:
                if not thread.is_alive():
                    # Engine exited after we queued; run leftovers here
                    with self._inline_lock:
                        self._drain_commands()
                elif time.monotonic() > deadline:
                    raise

    # -- internals --

    def _build(self) -> None:
        """Construct all simulation components from config."""
        self._loop = WorldLoop.build(self._config)
        loop = self._loop
        attach_signal_feed(self._event_log, loop.signals, lambda: loop.context.tick)
        loop.signals.death.subscribe(self._on_death)
        self._publish_snapshot()

    def _on_death(self, ev: Death) -> None:
        if ev.actor_id != PLAYER_ID:
            self._total_kills += 1

    def _require_loop(self) -> WorldLoop:
        if self._loop is None:
            raise RuntimeError("Simulation not built")
        return self._loop

    def _drain_commands(self) -> None:
        while True:
            try:
                fn, future = self._commands.get_nowait()
            except queue.Empty:
                return
            if not future.set_running_or_notify_cancel():
                continue
            try:
                future.set_result(fn())
            except Exception as exc:
                future.set_exception(exc)

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Engine thread started.")
        loop = self._require_loop()

        while not self._stop_requested.is_set():
            self._drain_commands()

            # Handle pause
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            single_step = self._step_requested.is_set()
            if single_step:
                self._step_requested.clear()

            can_continue = loop.tick_once()
            self._publish_snapshot()

            if not can_continue:
                logger.info("Simulation ended at tick %d.", loop.context.tick)
                break

            # Rate limiting
            if not single_step:
                time.sleep(self._tick_rate)

        self._running.clear()
        self._drain_commands()
        logger.info("Engine thread exited.")

    def _publish_snapshot(self) -> None:
        snap = self._require_loop().create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

    def _current_tick(self) -> int:
        if self._loop:
            return self._loop.context.tick
        return 0
