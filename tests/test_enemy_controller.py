"""Tests for enemy chase, separation, melee attacks and enemy death handling."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import math

import pytest

from survival.actions.combat import NO_EFFECT
from survival.ai.enemy_controller import EnemyController, damage_enemy, handle_enemy_death
from survival.core.enums import EnemyKind
from survival.systems.player import PlayerController
from tests.helpers.arena import SurvivalArena


def _make_controller(arena: SurvivalArena) -> EnemyController:
    return EnemyController(arena.config, PlayerController(arena.config))


def _set_time(arena: SurvivalArena, seconds: float) -> None:
    clock = arena.ctx.clock
    clock.tick = int(round(seconds / clock.dt))
    clock.time = seconds


class TestMovement:
    """Idle outside detection range, chase inside it."""

    def test_idle_beyond_detection(self):
        arena = SurvivalArena()
        enemy = arena.add_enemy(pos=(20, 0))
        _make_controller(arena).update(arena.ctx, enemy, 0.02)
        assert enemy.pos.x == 20.0
        assert enemy.pos.y == 0.0

    def test_chases_at_template_speed(self):
        arena = SurvivalArena()
        enemy = arena.add_enemy(pos=(10, 0))
        _make_controller(arena).update(arena.ctx, enemy, 0.02)
        # Square moves at 2.5 units/s
        assert enemy.pos.x == pytest.approx(10.0 - 2.5 * 0.02)
        assert enemy.pos.y == pytest.approx(0.0)

    def test_spatial_index_follows_movement(self):
        arena = SurvivalArena()
        enemy = arena.add_enemy(pos=(4.01, 0))
        controller = _make_controller(arena)
        for _ in range(10):
            controller.update(arena.ctx, enemy, 0.02)
        assert enemy.pos.x < 4.0
        assert arena.ctx.query_in_radius(enemy.pos, 0.01) == {enemy.id}

    def test_neighbours_push_apart(self):
        arena = SurvivalArena()
        a = arena.add_enemy(pos=(5, 0))
        b = arena.add_enemy(pos=(5, 0.3))
        _make_controller(arena).update_all(arena.ctx, 0.02)
        assert a.pos.y < 0.0
        assert b.pos.y > 0.3
        assert a.pos.x < 5.0 and b.pos.x < 5.0

    def test_halts_inside_attack_range(self):
        arena = SurvivalArena()
        enemy = arena.add_enemy(pos=(0.8, 0))
        _make_controller(arena).update(arena.ctx, enemy, 0.02)
        assert enemy.pos.x == 0.8


class TestAttack:
    """Melee strikes gated by a per-enemy cooldown."""

    def test_strikes_then_waits_for_cooldown(self):
        arena = SurvivalArena()
        enemy = arena.add_enemy(pos=(0.5, 0))
        controller = _make_controller(arena)
        stats = arena.player.stats

        controller.update(arena.ctx, enemy, 0.02)
        assert stats.current_health == pytest.approx(67.0)

        _set_time(arena, 0.5)
        controller.update(arena.ctx, enemy, 0.02)
        assert stats.current_health == pytest.approx(67.0)

        _set_time(arena, 1.0)
        controller.update(arena.ctx, enemy, 0.02)
        assert stats.current_health == pytest.approx(34.0)

    def test_armor_mitigates_enemy_hits(self):
        arena = SurvivalArena(player_armor=100.0)
        enemy = arena.add_enemy(pos=(0.5, 0))
        _make_controller(arena).update(arena.ctx, enemy, 0.02)
        assert arena.player.stats.current_health == pytest.approx(100.0 - 16.5)

    def test_dash_grants_invulnerability(self):
        arena = SurvivalArena()
        enemy = arena.add_enemy(pos=(0.5, 0))
        arena.player.dashing = True
        _make_controller(arena).update(arena.ctx, enemy, 0.02)
        assert arena.player.stats.current_health == 100.0
        assert enemy.last_attack_at == -math.inf

    def test_dash_invulnerability_can_be_disabled(self):
        arena = SurvivalArena(invulnerable_during_dash=False)
        enemy = arena.add_enemy(pos=(0.5, 0))
        arena.player.dashing = True
        _make_controller(arena).update(arena.ctx, enemy, 0.02)
        assert arena.player.stats.current_health == pytest.approx(67.0)

    def test_player_dodge(self):
        arena = SurvivalArena(player_dodge_chance=0.5)
        enemy = arena.add_enemy(pos=(0.5, 0))
        arena.combat.push(0.99, 0.1)    # no crit, then dodge
        _make_controller(arena).update(arena.ctx, enemy, 0.02)
        assert arena.player.stats.current_health == 100.0

    def test_stops_once_player_dies(self):
        arena = SurvivalArena(player_max_health=30.0)
        first = arena.add_enemy(pos=(0.5, 0))
        second = arena.add_enemy(pos=(-0.5, 0))
        _make_controller(arena).update_all(arena.ctx, 0.02)
        assert not arena.player.alive
        assert first.last_attack_at == 0.0
        assert second.last_attack_at == -math.inf
        player_deaths = [d for d in arena.events["death"] if d.actor_id == 0]
        assert len(player_deaths) == 1


class TestEnemyDeath:
    """Death consequences happen exactly once."""

    def test_damage_enemy_kills_once(self):
        arena = SurvivalArena()
        enemy = arena.add_enemy(pos=(3, 0), health=20.0)
        first = damage_enemy(arena.ctx, enemy, 50.0)
        second = damage_enemy(arena.ctx, enemy, 50.0)
        assert first.died
        assert second is NO_EFFECT
        assert len(arena.events["death"]) == 1
        assert len(arena.ctx.pickups) == 1
        assert arena.ctx.wave.active_enemy_count == 0

    def test_handle_death_without_spawner(self):
        arena = SurvivalArena()
        enemy = arena.add_enemy(pos=(3, 0))
        arena.ctx.spawner = None
        enemy.stats.current_health = 0.0
        assert handle_enemy_death(arena.ctx, enemy)
        assert enemy.removed
        assert enemy.id not in arena.ctx.enemies
        assert not handle_enemy_death(arena.ctx, enemy)

    def test_experience_value_carried_by_pickup(self):
        arena = SurvivalArena()
        enemy = arena.add_enemy(kind=EnemyKind.ROUND, pos=(3, 0), health=1.0)
        damage_enemy(arena.ctx, enemy, 5.0)
        (pickup,) = arena.ctx.pickups.values()
        assert pickup.experience_value == 2
