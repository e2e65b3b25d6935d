"""GET /api/v1/state: live simulation state (polled by the UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from survival.api.dependencies import get_engine_manager
from survival.api.engine_manager import EngineManager
from survival.api.schemas import (
    EnemySchema,
    EventSchema,
    PickupSchema,
    PlayerSchema,
    ProjectileSchema,
    SimulationStateResponse,
    SimulationStats,
    StatBlockSchema,
    VectorSchema,
    WaveSchema,
    WeaponSchema,
)
from survival.core.models import Player, Vector2

router = APIRouter()


def _vec(v: Vector2) -> VectorSchema:
    return VectorSchema(x=v.x, y=v.y)


def _serialize_player(p: Player) -> PlayerSchema:
    s = p.stats
    return PlayerSchema(
        position=_vec(p.pos),
        velocity=_vec(p.velocity),
        facing=_vec(p.last_move_direction),
        stats=StatBlockSchema(
            max_health=s.max_health,
            current_health=s.current_health,
            damage_multiplier=s.damage_multiplier,
            attack_speed_multiplier=s.attack_speed_multiplier,
            crit_chance=s.crit_chance,
            crit_damage_multiplier=s.crit_damage_multiplier,
            armor=s.armor,
            dodge_chance=s.dodge_chance,
            move_speed=s.move_speed,
            health_regen_per_second=s.health_regen_per_second,
            level=s.level,
            experience=s.experience,
            experience_to_next_level=s.experience_to_next_level,
        ),
        dashing=p.dashing,
        dash_cooldown_remaining=p.dash_cooldown_remaining,
    )


@router.get("/state", response_model=SimulationStateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events from this tick onward"),
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Simulation not yet initialized.")

    w = snapshot.wave
    enemies = [
        EnemySchema(
            id=e.id,
            kind=e.kind.name.lower(),
            position=_vec(e.pos),
            health=e.stats.current_health,
            max_health=e.stats.max_health,
            attack_damage=e.attack_damage,
        )
        for e in snapshot.enemies.values()
        if e.alive
    ]
    return SimulationStateResponse(
        tick=snapshot.tick,
        time=snapshot.time,
        state=snapshot.state.name,
        player=_serialize_player(snapshot.player),
        wave=WaveSchema(
            wave_number=w.wave_number,
            spawn_interval=w.spawn_interval,
            enemies_per_wave=w.enemies_per_wave,
            enemies_spawned_this_wave=w.enemies_spawned_this_wave,
            active_enemy_count=w.active_enemy_count,
            boss_wave=w.boss_wave,
        ),
        enemies=enemies,
        pickups=[
            PickupSchema(
                pickup_id=p.pickup_id, experience_value=p.experience_value,
                state=p.state.name, position=_vec(p.position),
            )
            for p in snapshot.pickups
        ],
        projectiles=[
            ProjectileSchema(
                projectile_id=p.projectile_id, position=_vec(p.position),
                velocity=_vec(p.velocity), damage=p.damage, lifetime=p.lifetime,
            )
            for p in snapshot.projectiles
        ],
        weapons=[
            WeaponSchema(
                weapon_id=ws.weapon_id, kind=ws.kind.name.lower(), level=ws.level,
                base_damage=ws.base_damage, cooldown_remaining=ws.cooldown_remaining,
                params=dict(ws.params),
            )
            for ws in snapshot.weapons
        ],
        upgrade_menu_open=snapshot.upgrade_menu_level is not None,
        events=[
            EventSchema(tick=ev.tick, category=ev.category, message=ev.message,
                        entity_ids=list(ev.entity_ids))
            for ev in manager.event_log.since_tick(since_tick)
        ],
    )


@router.get("/stats", response_model=SimulationStats)
def get_stats(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationStats:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Simulation not yet initialized.")
    return SimulationStats(
        tick=snapshot.tick,
        state=snapshot.state.name,
        wave=snapshot.wave.wave_number,
        level=snapshot.player.stats.level,
        enemies_alive=sum(1 for e in snapshot.enemies.values() if e.alive),
        total_kills=manager.total_kills,
        total_experience=snapshot.total_experience,
        running=manager.running,
        paused=manager.paused,
    )
