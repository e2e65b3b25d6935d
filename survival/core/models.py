"""Core data models: Vector2, StatBlock, WaveState, Enemy, Player, pickups and projectiles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from survival.core.enums import EnemyKind, PickupState

PLAYER_ID = 0


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D float vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance(self, other: Vector2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def normalized(self) -> Vector2:
        """Unit vector in the same direction; the zero vector stays zero."""
        n = self.length()
        if n == 0.0:
            return Vector2()
        return Vector2(self.x / n, self.y / n)

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def angle(self) -> float:
        """Heading in radians, measured from +x."""
        return math.atan2(self.y, self.x)

    def angle_between(self, other: Vector2) -> float:
        """Unsigned angle in degrees between two vectors (0..180)."""
        a = self.normalized()
        b = other.normalized()
        cos = max(-1.0, min(1.0, a.dot(b)))
        return math.degrees(math.acos(cos))

    def move_towards(self, target: Vector2, max_delta: float) -> Vector2:
        """Step toward *target* by at most *max_delta* without overshooting."""
        delta = target - self
        dist = delta.length()
        if dist <= max_delta or dist == 0.0:
            return target
        return self + delta * (max_delta / dist)

    @staticmethod
    def from_angle(radians: float, length: float = 1.0) -> Vector2:
        return Vector2(math.cos(radians) * length, math.sin(radians) * length)

    def __repr__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"


@dataclass(slots=True)
class StatBlock:
    """Mutable combat and progression statistics for one actor."""

    # --- Health ---
    max_health: float = 100.0
    current_health: float = 100.0

    # --- Offense ---
    damage_multiplier: float = 1.0
    attack_speed_multiplier: float = 1.0
    crit_chance: float = 0.0
    crit_damage_multiplier: float = 1.5

    # --- Defense ---
    armor: float = 0.0
    dodge_chance: float = 0.0

    # --- Movement / sustain ---
    base_move_speed: float = 5.0
    move_speed_bonus: float = 0.0
    health_regen_per_second: float = 0.0

    # --- Progression ---
    level: int = 1
    experience: int = 0
    experience_to_next_level: int = 2

    @property
    def alive(self) -> bool:
        return self.current_health > 0

    @property
    def health_ratio(self) -> float:
        return self.current_health / self.max_health if self.max_health > 0 else 0.0

    @property
    def move_speed(self) -> float:
        return self.base_move_speed * (1.0 + self.move_speed_bonus)

    def copy(self) -> StatBlock:
        return StatBlock(
            max_health=self.max_health, current_health=self.current_health,
            damage_multiplier=self.damage_multiplier,
            attack_speed_multiplier=self.attack_speed_multiplier,
            crit_chance=self.crit_chance,
            crit_damage_multiplier=self.crit_damage_multiplier,
            armor=self.armor, dodge_chance=self.dodge_chance,
            base_move_speed=self.base_move_speed,
            move_speed_bonus=self.move_speed_bonus,
            health_regen_per_second=self.health_regen_per_second,
            level=self.level, experience=self.experience,
            experience_to_next_level=self.experience_to_next_level,
        )


@dataclass(slots=True)
class WaveState:
    """Wave progression owned by the SpawnDirector."""

    wave_number: int = 1
    spawn_interval: float = 2.0
    enemies_per_wave: int = 5
    enemies_spawned_this_wave: int = 0
    active_enemy_count: int = 0
    boss_wave: bool = False

    def copy(self) -> WaveState:
        return WaveState(
            wave_number=self.wave_number,
            spawn_interval=self.spawn_interval,
            enemies_per_wave=self.enemies_per_wave,
            enemies_spawned_this_wave=self.enemies_spawned_this_wave,
            active_enemy_count=self.active_enemy_count,
            boss_wave=self.boss_wave,
        )


@dataclass(slots=True)
class Enemy:
    """A live enemy instance built from an EnemyTypeDefinition."""

    id: int
    kind: EnemyKind
    pos: Vector2
    stats: StatBlock
    attack_damage: float
    attack_cooldown: float = 1.0
    experience_value: int = 1
    last_attack_at: float = -math.inf
    removed: bool = False

    @property
    def alive(self) -> bool:
        return self.stats.alive and not self.removed

    def copy(self) -> Enemy:
        return Enemy(
            id=self.id, kind=self.kind, pos=self.pos, stats=self.stats.copy(),
            attack_damage=self.attack_damage, attack_cooldown=self.attack_cooldown,
            experience_value=self.experience_value,
            last_attack_at=self.last_attack_at, removed=self.removed,
        )


@dataclass(slots=True)
class Player:
    """The player actor: stats plus movement and dash state."""

    pos: Vector2 = field(default_factory=Vector2)
    stats: StatBlock = field(default_factory=StatBlock)
    velocity: Vector2 = field(default_factory=Vector2)
    move_intent: Vector2 = field(default_factory=Vector2)
    last_move_direction: Vector2 = field(default_factory=Vector2)
    # Dash
    dashing: bool = False
    dash_direction: Vector2 = field(default_factory=Vector2)
    dash_time_remaining: float = 0.0
    dash_cooldown_remaining: float = 0.0

    id: int = PLAYER_ID

    @property
    def alive(self) -> bool:
        return self.stats.alive

    def copy(self) -> Player:
        return Player(
            pos=self.pos, stats=self.stats.copy(), velocity=self.velocity,
            move_intent=self.move_intent,
            last_move_direction=self.last_move_direction,
            dashing=self.dashing, dash_direction=self.dash_direction,
            dash_time_remaining=self.dash_time_remaining,
            dash_cooldown_remaining=self.dash_cooldown_remaining,
            id=self.id,
        )


@dataclass(slots=True)
class PickupRecord:
    """Experience orb dropped by a dead enemy."""

    pickup_id: int
    experience_value: int
    position: Vector2
    state: PickupState = PickupState.IDLE

    def copy(self) -> PickupRecord:
        return PickupRecord(
            pickup_id=self.pickup_id, experience_value=self.experience_value,
            position=self.position, state=self.state,
        )


@dataclass(slots=True)
class Projectile:
    """A bullet carrying damage rolled at fire time."""

    projectile_id: int
    position: Vector2
    velocity: Vector2
    damage: float
    lifetime: float
    consumed: bool = False

    def copy(self) -> Projectile:
        return Projectile(
            projectile_id=self.projectile_id, position=self.position,
            velocity=self.velocity, damage=self.damage,
            lifetime=self.lifetime, consumed=self.consumed,
        )
