"""GET /api/v1/config: expose simulation configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from survival.api.dependencies import get_engine_manager
from survival.api.engine_manager import EngineManager
from survival.api.schemas import SimulationConfigResponse

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationConfigResponse:
    cfg = manager.config
    return SimulationConfigResponse(
        world_seed=cfg.world_seed,
        tick_seconds=cfg.tick_seconds,
        max_ticks=cfg.max_ticks,
        spawn_radius=cfg.spawn_radius,
        spawn_interval=cfg.spawn_interval,
        spawn_interval_floor=cfg.spawn_interval_floor,
        initial_enemies_per_wave=cfg.initial_enemies_per_wave,
        wave_scaling=cfg.wave_scaling,
        max_active_enemies=cfg.max_active_enemies,
        boss_wave_interval=cfg.boss_wave_interval,
        difficulty_scaling=cfg.difficulty_scaling,
        upgrade_choices_per_level=cfg.upgrade_choices_per_level,
        starting_weapons=list(cfg.starting_weapons),
        tick_rate=manager.tick_rate,
    )
