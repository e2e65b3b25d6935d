"""Pydantic request and response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Actors ---

class VectorSchema(BaseModel):
    x: float
    y: float


class StatBlockSchema(BaseModel):
    max_health: float
    current_health: float
    damage_multiplier: float
    attack_speed_multiplier: float
    crit_chance: float
    crit_damage_multiplier: float
    armor: float
    dodge_chance: float
    move_speed: float
    health_regen_per_second: float
    level: int
    experience: int
    experience_to_next_level: int


class PlayerSchema(BaseModel):
    position: VectorSchema
    velocity: VectorSchema
    facing: VectorSchema
    stats: StatBlockSchema
    dashing: bool = False
    dash_cooldown_remaining: float = 0.0


class EnemySchema(BaseModel):
    id: int
    kind: str
    position: VectorSchema
    health: float
    max_health: float
    attack_damage: float


class PickupSchema(BaseModel):
    pickup_id: int
    experience_value: int
    state: str
    position: VectorSchema


class ProjectileSchema(BaseModel):
    projectile_id: int
    position: VectorSchema
    velocity: VectorSchema
    damage: float
    lifetime: float


class WaveSchema(BaseModel):
    wave_number: int
    spawn_interval: float
    enemies_per_wave: int
    enemies_spawned_this_wave: int
    active_enemy_count: int
    boss_wave: bool


class WeaponSchema(BaseModel):
    weapon_id: str
    kind: str
    level: int
    base_damage: float
    cooldown_remaining: float
    params: dict[str, float] = Field(default_factory=dict)


class UpgradeChoiceSchema(BaseModel):
    index: int
    upgrade_id: str
    display_text: str
    description: str
    stat_target: str
    magnitude: float


class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)


class SimulationStateResponse(BaseModel):
    tick: int
    time: float
    state: str
    player: PlayerSchema
    wave: WaveSchema
    enemies: list[EnemySchema]
    pickups: list[PickupSchema] = Field(default_factory=list)
    projectiles: list[ProjectileSchema] = Field(default_factory=list)
    weapons: list[WeaponSchema] = Field(default_factory=list)
    upgrade_menu_open: bool = False
    events: list[EventSchema] = Field(default_factory=list)


# --- Upgrades ---

class UpgradeMenuResponse(BaseModel):
    open: bool
    level: int | None = None
    choices: list[UpgradeChoiceSchema] = Field(default_factory=list)


class UpgradeAppliedResponse(BaseModel):
    status: str
    applied: UpgradeChoiceSchema | None = None
    tick: int = 0


# --- Input ---

class MoveInputRequest(BaseModel):
    x: float = Field(0.0, ge=-1.0, le=1.0)
    y: float = Field(0.0, ge=-1.0, le=1.0)


class DashInputRequest(BaseModel):
    """Dash direction; zero means 'the way the player is facing'."""

    x: float = 0.0
    y: float = 0.0


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


# --- Config ---

class SimulationConfigResponse(BaseModel):
    world_seed: int
    tick_seconds: float
    max_ticks: int
    spawn_radius: float
    spawn_interval: float
    spawn_interval_floor: float
    initial_enemies_per_wave: int
    wave_scaling: float
    max_active_enemies: int
    boss_wave_interval: int
    difficulty_scaling: float
    upgrade_choices_per_level: int
    starting_weapons: list[str]
    tick_rate: float


# --- Stats ---

class SimulationStats(BaseModel):
    tick: int
    state: str
    wave: int
    level: int
    enemies_alive: int
    total_kills: int
    total_experience: int
    running: bool
    paused: bool
