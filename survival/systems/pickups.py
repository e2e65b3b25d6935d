"""Experience pickups: drop, attraction toward the player and collection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from survival.core.enums import PickupState
from survival.core.models import PickupRecord

if TYPE_CHECKING:
    from survival.actions.progression import ProgressionTracker
    from survival.config import SimulationConfig
    from survival.core.models import Vector2
    from survival.core.world_state import SimulationContext

logger = logging.getLogger(__name__)


def drop_pickup(ctx: SimulationContext, position: Vector2, experience_value: int) -> PickupRecord:
    pickup = PickupRecord(
        pickup_id=ctx.allocate_pickup_id(),
        experience_value=experience_value,
        position=position,
    )
    ctx.add_pickup(pickup)
    return pickup


class PickupAttractor:
    """Idle -> Attracted -> Collected state machine for every live pickup.

    An idle pickup starts homing once the player is within attraction range,
    moves toward the player without overshooting, and is collected inside the
    pickup range.  Touching the player collects it from any state.
    """

    __slots__ = ("_config", "_tracker")

    def __init__(self, config: SimulationConfig, tracker: ProgressionTracker) -> None:
        self._config = config
        self._tracker = tracker

    def update(self, ctx: SimulationContext, dt: float) -> int:
        """Advance every pickup one tick; returns the number collected."""
        player = ctx.player
        if not player.alive:
            return 0
        cfg = self._config
        collected = 0

        for pid in sorted(ctx.pickups):
            pickup = ctx.pickups[pid]
            if pickup.state == PickupState.COLLECTED:
                ctx.remove_pickup(pid)
                continue

            dist = pickup.position.distance(player.pos)
            if dist <= cfg.player_contact_radius:
                collected += self.collect(ctx, pickup)
                continue

            if pickup.state == PickupState.IDLE and dist <= cfg.pickup_attraction_range:
                pickup.state = PickupState.ATTRACTED

            if pickup.state == PickupState.ATTRACTED:
                pickup.position = pickup.position.move_towards(
                    player.pos, cfg.pickup_attraction_speed * dt,
                )
                if pickup.position.distance(player.pos) <= cfg.pickup_range:
                    collected += self.collect(ctx, pickup)
        return collected

    def collect(self, ctx: SimulationContext, pickup: PickupRecord) -> bool:
        """Grant the pickup's experience once and remove it."""
        if pickup.state == PickupState.COLLECTED:
            return False
        pickup.state = PickupState.COLLECTED
        ctx.remove_pickup(pickup.pickup_id)
        logger.debug("Tick %d: pickup #%d collected (+%d XP)",
                     ctx.tick, pickup.pickup_id, pickup.experience_value)
        self._tracker.add_experience(pickup.experience_value)
        return True
