"""Player movement, dash and health regeneration."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from survival.actions.combat import heal
from survival.core.enums import EffectKind
from survival.core.models import PLAYER_ID, Vector2

if TYPE_CHECKING:
    from survival.config import SimulationConfig
    from survival.core.models import Player
    from survival.core.world_state import SimulationContext

logger = logging.getLogger(__name__)

_DEFAULT_FACING = Vector2(1.0, 0.0)


@dataclass(frozen=True, slots=True)
class InputState:
    """Per-tick player input: a movement intent and an optional dash request."""

    move_intent: Vector2 = field(default_factory=Vector2)
    dash: Vector2 | None = None


class PlayerController:
    """Eases player velocity toward the input intent and runs the dash."""

    __slots__ = ("_config",)

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config

    def is_invulnerable(self, player: Player) -> bool:
        return self._config.invulnerable_during_dash and player.dashing

    def update(self, ctx: SimulationContext, inp: InputState, dt: float) -> None:
        player = ctx.player
        if not player.alive:
            player.velocity = Vector2()
            return
        cfg = self._config

        if inp.dash is not None:
            self.try_dash(ctx, inp.dash)

        intent = inp.move_intent
        if intent.length() > 1.0:
            intent = intent.normalized()
        player.move_intent = intent
        if intent.length() > cfg.move_input_deadzone:
            player.last_move_direction = intent.normalized()

        if player.dashing:
            player.pos = player.pos + player.dash_direction * (cfg.dash_speed * dt)
            player.dash_time_remaining -= dt
            if player.dash_time_remaining <= 0.0:
                player.dashing = False
                player.dash_time_remaining = 0.0
        else:
            target = intent * player.stats.move_speed
            rate = cfg.player_acceleration if intent.length() > 0.0 else cfg.player_deceleration
            player.velocity = player.velocity.move_towards(target, rate * dt)
            player.pos = player.pos + player.velocity * dt

        if player.dash_cooldown_remaining > 0.0:
            player.dash_cooldown_remaining = max(0.0, player.dash_cooldown_remaining - dt)

        regen = player.stats.health_regen_per_second
        if regen > 0.0:
            heal(player.stats, regen * dt, ctx.signals, PLAYER_ID)

    def try_dash(self, ctx: SimulationContext, direction: Vector2) -> bool:
        """Start a dash; ignored while dashing, cooling down or dead."""
        player = ctx.player
        if not player.alive or player.dashing or player.dash_cooldown_remaining > 0.0:
            return False

        heading = direction.normalized()
        if heading.length() == 0.0:
            heading = player.last_move_direction.normalized()
        if heading.length() == 0.0:
            heading = _DEFAULT_FACING

        cfg = self._config
        player.dashing = True
        player.dash_direction = heading
        player.dash_time_remaining = cfg.dash_duration
        player.dash_cooldown_remaining = cfg.dash_cooldown
        ctx.request_effect(
            EffectKind.DASH_TRAIL, player.pos, math.degrees(heading.angle()), cfg.dash_duration,
        )
        logger.debug("Tick %d: dash toward %r", ctx.tick, heading)
        return True
