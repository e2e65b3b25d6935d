"""Engine layer: the fixed-tick world loop."""

from survival.engine.world_loop import WorldLoop

__all__ = ["WorldLoop"]
