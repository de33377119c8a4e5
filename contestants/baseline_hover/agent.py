"""
Baseline Hover Agent - Steers toward the middle of the gap.

This is a simple heuristic agent that reads the clearance above and below
the worm's head and picks a target velocity that closes the distance to
the gap centre, holding the button while the worm is sinking faster than
that target.

This serves as:
1. A working example of how to read observations and return actions
2. A baseline benchmark for other agents to compare against
3. A verification that the environment API works correctly

Strategy:
- Read gap_above / gap_below (blocks of clearance at the head column)
- Offset from centre = (gap_above - gap_below) / 2
- Target velocity = -gain * offset, clamped to the velocity limit
- Hold (climb) if current velocity > target, otherwise release (fall)
"""

import numpy as np
from typing import Any, Dict, Optional


MAX_VELOCITY = 16
GAIN = 2.0


class WormAgent:
    """
    Baseline agent that hovers around the centre of the cave gap.
    """

    def __init__(self, debug: bool = False, gain: float = GAIN):
        """
        Initialize the agent.

        Args:
            debug: If True, print decisions to stdout.
            gain: Velocity units per block of offset from the gap centre.
        """
        self.debug = debug
        self.gain = gain

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset agent state for a new episode (stateless)."""
        pass

    def act(self, observation: Dict[str, Any], debug: bool = False) -> int:
        """
        Choose whether to hold the action button this tick.

        Args:
            observation: Dict of numpy arrays from the environment.
            debug: If True, print debug info for this step.

        Returns:
            1 to hold (climb), 0 to release (fall).
        """
        gap_above = float(observation["gap_above"])
        gap_below = float(observation["gap_below"])
        velocity = int(observation["worm_velocity"])

        # Positive offset: head is below the centre and should rise
        offset = (gap_above - gap_below) / 2.0
        target = float(np.clip(-self.gain * offset, -MAX_VELOCITY, MAX_VELOCITY))
        action = 1 if velocity > target else 0

        if debug or self.debug:
            print(f"[Hover Agent] gap=({gap_above:.1f}, {gap_below:.1f}), "
                  f"velocity={velocity}, target={target:.1f}, action={action}")

        return action


# Convenience function to create agent (used by evaluation harness)
def create_agent(**kwargs) -> WormAgent:
    """Factory function to create an agent instance."""
    return WormAgent(**kwargs)
