"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for the simulation run."""

    # World
    world_seed: int = 42

    # Timing
    tick_seconds: float = 0.02           # Fixed simulation step (50 Hz)
    max_ticks: int = 90000

    # Player (starting stat block)
    player_max_health: float = 100.0
    player_damage_multiplier: float = 1.0
    player_attack_speed_multiplier: float = 1.0
    player_crit_chance: float = 0.1
    player_crit_damage_multiplier: float = 1.5
    player_armor: float = 0.0
    player_dodge_chance: float = 0.0
    player_base_move_speed: float = 5.0
    player_move_speed_bonus: float = 0.25
    player_health_regen: float = 0.0
    player_contact_radius: float = 0.5

    # Player movement / dash
    player_acceleration: float = 20.0
    player_deceleration: float = 15.0
    move_input_deadzone: float = 0.1
    dash_speed: float = 15.0
    dash_duration: float = 0.3
    dash_cooldown: float = 1.5
    invulnerable_during_dash: bool = True

    # Spawning
    spawn_radius: float = 15.0
    spawn_jitter: float = 2.0
    spawn_interval: float = 2.0
    spawn_interval_decay: float = 0.95
    spawn_interval_floor: float = 0.5
    initial_enemies_per_wave: int = 5
    wave_scaling: float = 1.2
    max_active_enemies: int = 50
    spatial_cell_size: float = 4.0

    # Boss waves / difficulty
    boss_wave_interval: int = 5
    boss_spawn_radius: float = 20.0
    difficulty_scaling: float = 1.1

    # Enemy AI
    enemy_detection_range: float = 15.0
    enemy_attack_range: float = 1.0
    enemy_avoidance_radius: float = 0.5
    enemy_avoidance_weight: float = 0.3

    # Pickups
    pickup_attraction_range: float = 3.0
    pickup_attraction_speed: float = 5.0
    pickup_range: float = 0.5

    # Weapons
    projectile_hit_radius: float = 0.5
    weapon_damage_growth: float = 1.1     # Base damage mult per weapon level
    fire_rate_per_level: float = 0.05     # Fire rate bonus per weapon level above 1
    starting_weapons: tuple = ("gun",)
    # Player level -> weapons unlocked on reaching it
    weapon_unlocks: tuple = ((5, ("sword",)), (10, ("double_barrel", "energy_aura")))

    # Upgrades
    upgrade_choices_per_level: int = 3

    # Logging
    log_level: str = "INFO"
    replay_file: str = "replay.json"
