"""Tests for signal channels and the event log fed from them."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

from survival.core.enums import EnemyKind
from survival.core.signals import Death, LevelUp, Signal, SignalBus, WaveChanged
from survival.utils.event_log import EventLog, SimEvent, attach_signal_feed


class TestSignal:
    def test_handlers_run_in_subscription_order(self):
        sig = Signal("test")
        seen = []
        sig.subscribe(lambda p: seen.append(("a", p)))
        sig.subscribe(lambda p: seen.append(("b", p)))
        sig.emit(1)
        assert seen == [("a", 1), ("b", 1)]

    def test_unsubscribe(self):
        sig = Signal("test")
        seen = []
        handler = sig.subscribe(seen.append)
        sig.unsubscribe(handler)
        sig.emit(1)
        assert seen == []
        assert len(sig) == 0

    def test_unsubscribe_bound_method(self):
        class _Observer:
            def __init__(self):
                self.levels = []

            def on_level(self, payload):
                self.levels.append(payload.level)

        sig = Signal("level_up")
        obs = _Observer()
        sig.subscribe(obs.on_level)
        sig.unsubscribe(obs.on_level)
        sig.emit(LevelUp(2))
        assert len(sig) == 0
        assert obs.levels == []

    def test_unsubscribe_leaves_other_instances(self):
        class _Observer:
            def __init__(self):
                self.seen = 0

            def on_any(self, _payload):
                self.seen += 1

        sig = Signal("test")
        a, b = _Observer(), _Observer()
        sig.subscribe(a.on_any)
        sig.subscribe(b.on_any)
        sig.unsubscribe(a.on_any)
        sig.emit(None)
        assert (a.seen, b.seen) == (0, 1)

    def test_failing_handler_is_logged_and_skipped(self, caplog):
        sig = Signal("test")
        seen = []

        def broken(_payload):
            raise RuntimeError("boom")

        sig.subscribe(broken)
        sig.subscribe(seen.append)
        with caplog.at_level(logging.ERROR, logger="survival.core.signals"):
            sig.emit(5)
        assert seen == [5]
        assert any(r.exc_info and "test" in r.getMessage() for r in caplog.records)

    def test_disconnect_all(self):
        bus = SignalBus()
        bus.death.subscribe(lambda p: None)
        bus.level_up.subscribe(lambda p: None)
        bus.disconnect_all()
        assert all(len(ch) == 0 for ch in bus.channels())
        assert len(bus.channels()) == 8


class TestEventLog:
    def test_capacity_drops_oldest(self):
        log = EventLog(capacity=3)
        for t in range(5):
            log.append(SimEvent(t, "x", str(t)))
        assert len(log) == 3
        assert [e.tick for e in log.latest(10)] == [2, 3, 4]

    def test_since_tick(self):
        log = EventLog()
        for t in (1, 5, 9):
            log.append(SimEvent(t, "x", ""))
        assert [e.tick for e in log.since_tick(5)] == [5, 9]

    def test_signal_feed(self):
        log = EventLog()
        bus = SignalBus()
        attach_signal_feed(log, bus, lambda: 12)
        bus.death.emit(Death(3, EnemyKind.TRIANGLE))
        bus.death.emit(Death(0))
        bus.level_up.emit(LevelUp(4))
        bus.wave_changed.emit(WaveChanged(5, True))
        events = log.latest()
        assert [e.category for e in events] == ["death", "death", "level_up", "wave"]
        assert all(e.tick == 12 for e in events)
        assert events[0].message == "TRIANGLE #3 died"
        assert events[0].entity_ids == (3,)
        assert events[1].message == "Player died"
        assert "boss" in events[3].message
