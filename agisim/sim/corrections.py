"""Ready-made correction terms for press-aware reward functions."""

from __future__ import annotations

from agisim.sim.agent import OptimizingAgent
from agisim.sim.reward import (
    REWARD_AFTER_PRESS,
    REWARD_BEFORE_PRESS,
    AfterPressCorrection,
)
from agisim.sim.world_state import WorldState


def balancing_correction(agent: OptimizingAgent) -> AfterPressCorrection:
    """Build an ``f`` term that pays out the value lost to the press.

    On the first transition after the press the agent receives the value the
    before-press law would still have earned from that world, minus what
    the after-press law will earn. The press then neither gains nor costs
    the agent anything, so it has no reason to lobby over its timing.
    """

    def f(previous_world: WorldState) -> float:
        return agent.value_function(
            REWARD_BEFORE_PRESS,
            previous_world.with_new_agent_reward_function(REWARD_BEFORE_PRESS),
        ) - agent.value_function(
            REWARD_AFTER_PRESS,
            previous_world.with_new_agent_reward_function(REWARD_AFTER_PRESS),
        )

    return f
