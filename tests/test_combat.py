"""Tests for damage rolls, dodge, armor mitigation and healing."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from survival.actions.combat import (
    NO_EFFECT,
    apply_damage,
    heal,
    mitigate,
    mitigation_fraction,
    resolve_damage,
)
from survival.core.enums import EnemyKind
from survival.core.models import StatBlock
from survival.core.signals import SignalBus
from tests.helpers.arena import FixedRandom


def _make_stats(**kw) -> StatBlock:
    return StatBlock(**kw)


class _Recorder:
    def __init__(self, signals: SignalBus) -> None:
        self.health = []
        self.deaths = []
        signals.health_changed.subscribe(self.health.append)
        signals.death.subscribe(self.deaths.append)


class TestMitigation:
    """Armor formula: raw * (1 - armor / (armor + 100))."""

    def test_zero_armor_takes_full_damage(self):
        assert mitigate(40.0, 0.0) == 40.0

    def test_hundred_armor_halves_damage(self):
        assert mitigate(40.0, 100.0) == pytest.approx(20.0)

    def test_strictly_decreasing_in_armor(self):
        values = [mitigate(100.0, a) for a in (0, 1, 10, 50, 100, 1000, 10000)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_never_reaches_zero(self):
        assert mitigate(100.0, 1e9) > 0.0
        assert 0.0 <= mitigation_fraction(1e9) < 1.0

    def test_negative_armor_treated_as_zero(self):
        assert mitigation_fraction(-50.0) == 0.0


class TestResolveDamage:
    """Outgoing damage: base x multiplier, crit on a roll below crit chance."""

    def test_non_crit(self):
        attacker = _make_stats(damage_multiplier=2.0, crit_chance=0.5)
        assert resolve_damage(attacker, 10.0, FixedRandom([0.6])) == pytest.approx(20.0)

    def test_crit(self):
        attacker = _make_stats(damage_multiplier=2.0, crit_chance=0.5, crit_damage_multiplier=1.5)
        assert resolve_damage(attacker, 10.0, FixedRandom([0.4])) == pytest.approx(30.0)

    def test_consumes_exactly_one_draw(self):
        rng = FixedRandom()
        resolve_damage(_make_stats(), 10.0, rng)
        assert rng.draws == 1


class TestApplyDamage:
    """Defender-side resolution."""

    def test_crit_scales_before_mitigation(self):
        attacker = _make_stats(crit_chance=1.0, crit_damage_multiplier=1.5)
        defender = _make_stats(armor=100.0)
        raw = resolve_damage(attacker, 15.0, FixedRandom([0.0]))
        outcome = apply_damage(defender, raw, FixedRandom([0.99]))
        # 15 * 1.5 = 22.5, then halved by 100 armor
        assert outcome.applied == pytest.approx(11.25)
        assert defender.current_health == pytest.approx(100.0 - 11.25)

    def test_dodge_skips_damage_and_signals(self):
        signals = SignalBus()
        rec = _Recorder(signals)
        defender = _make_stats(dodge_chance=0.5)
        rng = FixedRandom([0.1])
        outcome = apply_damage(defender, 50.0, rng, signals)
        assert outcome.dodged
        assert outcome.applied == 0.0
        assert defender.current_health == 100.0
        assert rec.health == []
        assert rng.draws == 1

    def test_health_clamped_at_zero(self):
        defender = _make_stats(max_health=30.0, current_health=30.0)
        outcome = apply_damage(defender, 500.0, FixedRandom())
        assert defender.current_health == 0.0
        assert outcome.applied == pytest.approx(30.0)
        assert outcome.died

    def test_death_emitted_exactly_once(self):
        signals = SignalBus()
        rec = _Recorder(signals)
        defender = _make_stats()
        first = apply_damage(defender, 100.0, FixedRandom(), signals, actor_id=7, kind=EnemyKind.ROUND)
        second = apply_damage(defender, 100.0, FixedRandom(), signals, actor_id=7, kind=EnemyKind.ROUND)
        assert first.died
        assert second is NO_EFFECT
        assert len(rec.deaths) == 1
        assert rec.deaths[0].actor_id == 7
        assert rec.deaths[0].kind == EnemyKind.ROUND

    def test_dead_defender_consumes_no_draw(self):
        defender = _make_stats(current_health=0.0)
        rng = FixedRandom()
        assert apply_damage(defender, 10.0, rng) is NO_EFFECT
        assert rng.draws == 0

    def test_health_changed_reports_new_value(self):
        signals = SignalBus()
        rec = _Recorder(signals)
        apply_damage(_make_stats(), 25.0, FixedRandom(), signals, actor_id=3)
        assert len(rec.health) == 1
        assert rec.health[0].actor_id == 3
        assert rec.health[0].current == pytest.approx(75.0)
        assert rec.health[0].maximum == 100.0


class TestHeal:
    def test_capped_at_max(self):
        stats = _make_stats(current_health=95.0)
        assert heal(stats, 20.0) == pytest.approx(5.0)
        assert stats.current_health == 100.0

    def test_dead_cannot_heal(self):
        stats = _make_stats(current_health=0.0)
        assert heal(stats, 20.0) == 0.0
        assert stats.current_health == 0.0

    def test_full_health_emits_nothing(self):
        signals = SignalBus()
        rec = _Recorder(signals)
        heal(_make_stats(), 10.0, signals)
        assert rec.health == []
