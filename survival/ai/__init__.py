"""Enemy AI: chase, separation and melee attacks."""

from survival.ai.enemy_controller import EnemyController, damage_enemy

__all__ = ["EnemyController", "damage_enemy"]
