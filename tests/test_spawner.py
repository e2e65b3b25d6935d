"""Tests for wave sizing, enemy kind bands, spawn timing and the population cap."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

import pytest

from survival.core.enemies import ENEMY_TYPES
from survival.core.enums import EnemyKind
from survival.systems.spawner import (
    SpawnDirector,
    difficulty_multiplier,
    enemies_per_wave,
    is_boss_wave,
    select_enemy_kind,
)
from tests.helpers.arena import FixedRandom, SurvivalArena


def _make_arena(**overrides) -> SurvivalArena:
    return SurvivalArena(spawning=True, **overrides)


class TestWaveFormulas:
    """Pure wave-table helpers."""

    def test_wave_sizes_grow_geometrically(self):
        assert [enemies_per_wave(w, 5, 1.2) for w in (1, 2, 3, 4)] == [5, 6, 7, 9]

    def test_kind_bands(self):
        assert select_enemy_kind(1, 0.69) == EnemyKind.SQUARE
        assert select_enemy_kind(1, 0.75) == EnemyKind.TRIANGLE
        assert select_enemy_kind(2, 0.95) == EnemyKind.ROUND
        assert select_enemy_kind(4, 0.5) == EnemyKind.TRIANGLE
        assert select_enemy_kind(6, 0.6) == EnemyKind.ROUND
        assert select_enemy_kind(20, 0.1) == EnemyKind.SQUARE

    def test_roll_at_top_of_range_maps_to_last_kind(self):
        assert select_enemy_kind(1, 0.999999) == EnemyKind.ROUND

    def test_difficulty_multiplier(self):
        assert difficulty_multiplier(1, 1.1) == 1.0
        assert difficulty_multiplier(3, 1.1) == pytest.approx(1.21)

    def test_boss_waves(self):
        assert [w for w in range(1, 16) if is_boss_wave(w, 5)] == [5, 10, 15]
        assert not is_boss_wave(5, 0)


class TestSpawning:
    """SpawnDirector.update against a live context."""

    def test_first_tick_spawns_on_ring(self):
        arena = _make_arena()
        ctx = arena.ctx
        ctx.spawn_random = FixedRandom([0.25, 0.5, 0.0])
        enemy = ctx.spawner.update(ctx, ctx.clock.dt)
        assert enemy is not None
        assert enemy.kind == EnemyKind.SQUARE
        # angle pi/2, radius 15 + 0.5 * 2
        assert enemy.pos.x == pytest.approx(0.0, abs=1e-9)
        assert enemy.pos.y == pytest.approx(16.0)
        assert ctx.wave.active_enemy_count == 1
        assert ctx.wave.enemies_spawned_this_wave == 1
        assert ctx.spawner.timer == 0.0

    def test_spawn_distance_within_jitter(self):
        arena = _make_arena()
        ctx = arena.ctx
        for _ in range(5):
            enemy = ctx.spawner.update(ctx, 2.0)
            d = enemy.pos.distance(ctx.player.pos)
            assert 15.0 <= d <= 17.0

    def test_timer_gates_spawns(self):
        arena = _make_arena()
        ctx = arena.ctx
        assert ctx.spawner.update(ctx, 0.02) is not None
        assert ctx.spawner.update(ctx, 0.02) is None
        assert ctx.spawner.update(ctx, 2.0) is not None

    def test_population_cap(self):
        arena = _make_arena(max_active_enemies=1)
        ctx = arena.ctx
        assert ctx.spawner.update(ctx, 2.0) is not None
        assert ctx.spawner.update(ctx, 2.0) is None
        assert ctx.wave.active_enemy_count == 1
        assert len(ctx.enemies) == 1

    def test_wave_advances_when_quota_met(self):
        arena = _make_arena(initial_enemies_per_wave=2)
        ctx = arena.ctx
        ctx.spawner.update(ctx, 2.0)
        assert ctx.wave.wave_number == 1
        ctx.spawner.update(ctx, 2.0)
        assert ctx.wave.wave_number == 2
        assert ctx.wave.enemies_spawned_this_wave == 0
        assert ctx.wave.enemies_per_wave == 2
        assert ctx.wave.spawn_interval == pytest.approx(1.9)
        assert [(w.wave_number, w.boss_wave) for w in arena.events["wave_changed"]] == [(2, False)]

    def test_spawn_interval_floor(self):
        arena = _make_arena(
            initial_enemies_per_wave=1, spawn_interval=1.0,
            spawn_interval_decay=0.1, spawn_interval_floor=0.5,
        )
        ctx = arena.ctx
        ctx.spawner.update(ctx, 1.0)
        assert ctx.wave.wave_number == 2
        assert ctx.wave.spawn_interval == 0.5

    def test_later_waves_are_tougher(self):
        arena = _make_arena(initial_enemies_per_wave=1, wave_scaling=1.0)
        ctx = arena.ctx
        ctx.spawn_random = FixedRandom(fallback=0.0)
        first = ctx.spawner.update(ctx, 2.0)
        second = ctx.spawner.update(ctx, 2.0)
        assert first.stats.max_health == pytest.approx(100.0)
        assert second.stats.max_health == pytest.approx(110.0)
        assert second.attack_damage == pytest.approx(33.0 * 1.1)


class TestBossWave:
    def test_boss_spawns_when_boss_wave_begins(self):
        arena = _make_arena(initial_enemies_per_wave=1, boss_wave_interval=2)
        ctx = arena.ctx
        ctx.spawner.update(ctx, 2.0)
        assert ctx.wave.wave_number == 2
        assert ctx.wave.boss_wave
        bosses = [e for e in ctx.enemies.values() if e.kind == EnemyKind.BOSS]
        assert len(bosses) == 1
        assert bosses[0].pos.distance(ctx.player.pos) == pytest.approx(20.0)
        assert bosses[0].stats.max_health == pytest.approx(ENEMY_TYPES[EnemyKind.BOSS].max_health * 1.1)
        assert ctx.wave.active_enemy_count == 2
        # Boss is extra; the new wave's quota is untouched
        assert ctx.wave.enemies_spawned_this_wave == 0

    def test_boss_respects_cap(self):
        arena = _make_arena(initial_enemies_per_wave=1, boss_wave_interval=2, max_active_enemies=1)
        ctx = arena.ctx
        ctx.spawner.update(ctx, 2.0)
        assert ctx.wave.boss_wave
        assert all(e.kind != EnemyKind.BOSS for e in ctx.enemies.values())


class TestMissingTemplate:
    def test_skipped_with_single_warning(self, caplog):
        arena = _make_arena()
        ctx = arena.ctx
        registry = {k: v for k, v in ENEMY_TYPES.items() if k != EnemyKind.SQUARE}
        spawner = SpawnDirector(arena.config, registry)
        ctx.spawn_random = FixedRandom(fallback=0.0)   # always rolls SQUARE

        with caplog.at_level(logging.DEBUG, logger="survival.systems.spawner"):
            assert spawner.update(ctx, 0.02) is None
            assert spawner.update(ctx, 0.02) is None

        warnings = [r for r in caplog.records
                    if r.levelno == logging.WARNING and "No enemy template" in r.getMessage()]
        assert len(warnings) == 1
        assert ctx.enemies == {}
        assert ctx.wave.enemies_spawned_this_wave == 0
        assert ctx.wave.active_enemy_count == 0
        # Timer is not consumed; the next tick retries
        assert spawner.timer >= ctx.wave.spawn_interval


class TestDespawn:
    def test_despawn_is_idempotent(self):
        arena = _make_arena()
        ctx = arena.ctx
        enemy = ctx.spawner.update(ctx, 2.0)
        assert ctx.spawner.despawn(ctx, enemy.id)
        assert not ctx.spawner.despawn(ctx, enemy.id)
        assert enemy.removed
        assert ctx.wave.active_enemy_count == 0
        assert ctx.query_in_radius(enemy.pos, 1.0) == set()
