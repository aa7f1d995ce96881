"""Backward-induction agents over a finite horizon.

Every variant shares one memoized value routine and differs only in which
actions it considers at a state and how their expected values are combined:

* ``OptimizingAgent`` maximizes over all actions and commits to the first
  best action.
* ``TieExploringAgent`` values states the same way but returns every tied
  best action, so a run records one worldline per tie.
* ``SafeAgent`` acts like ``TieExploringAgent``; when valuing a state under
  any reward function it takes the minimum over its own tied best actions.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Generic, Hashable, Sequence, TypeVar

from agisim.sim.contracts import AgentConfig, ConfigurationError
from agisim.sim.reward import RewardFunction
from agisim.sim.simulation import Simulation
from agisim.sim.world_state import WorldState

logger = logging.getLogger(__name__)

ActionT = TypeVar("ActionT")


class Aggregation(str, Enum):
    MAX = "max"
    MIN = "min"
    TIES = "ties"


def aggregate(
    scored: Sequence[tuple[ActionT, float]], how: Aggregation
) -> tuple[float, list[ActionT]]:
    """Combine ``(action, value)`` pairs in action order.

    MAX and MIN keep the first action reaching a new extreme; TIES keeps
    every action equal to the running best and restarts on a strictly
    better one.
    """
    if not scored:
        raise ConfigurationError("No actions were possible in this simulation.")

    best_value = scored[0][1]
    best_actions = [scored[0][0]]
    for action, value in scored[1:]:
        if how == Aggregation.MIN:
            if value < best_value:
                best_value, best_actions = value, [action]
        elif value > best_value:
            best_value, best_actions = value, [action]
        elif how == Aggregation.TIES and value == best_value:
            best_actions.append(action)
    return best_value, best_actions


class OptimizingAgent(Generic[ActionT]):
    value_aggregation = Aggregation.MAX

    def __init__(self, simulation: Simulation[ActionT], config: AgentConfig) -> None:
        self._simulation = simulation
        self._time_discount_factor = config.time_discount_factor
        self._value_cache: dict[tuple[Hashable, Hashable], float] = {}

    @property
    def simulation(self) -> Simulation[ActionT]:
        return self._simulation

    @property
    def time_discount_factor(self) -> float:
        return self._time_discount_factor

    @property
    def cache_size(self) -> int:
        return len(self._value_cache)

    def clear_cache(self) -> None:
        self._value_cache.clear()

    def value_function(self, reward_function: RewardFunction, world: WorldState) -> float:
        key = (reward_function.memo_key, world.memo_key())
        if key not in self._value_cache:
            self._value_cache[key] = self._value_function_unmemoized(
                reward_function, world
            )
        return self._value_cache[key]

    def expected_value(
        self, reward_function: RewardFunction, world: WorldState, action: ActionT
    ) -> float:
        value = 0.0
        for probability, successor in self._simulation.successor_distribution(
            world, action
        ):
            value += probability * (
                reward_function(world, successor)
                + self._time_discount_factor
                * self.value_function(reward_function, successor)
            )
        return value

    def action_values(
        self,
        world: WorldState,
        reward_function: RewardFunction | None = None,
        actions: Sequence[ActionT] | None = None,
    ) -> list[tuple[ActionT, float]]:
        reward = (
            world.agent_reward_function if reward_function is None else reward_function
        )
        candidates = self._simulation.possible_actions if actions is None else actions
        return [
            (action, self.expected_value(reward, world, action))
            for action in candidates
        ]

    def choose_action(self, world: WorldState) -> ActionT:
        _, actions = aggregate(self.action_values(world), Aggregation.MAX)
        logger.debug("Step %s: chose %r", world.step, actions[0])
        return actions[0]

    def choose_actions(self, world: WorldState) -> list[ActionT]:
        return [self.choose_action(world)]

    def _value_candidates(self, world: WorldState) -> Sequence[ActionT]:
        return self._simulation.possible_actions

    def _value_function_unmemoized(
        self, reward_function: RewardFunction, world: WorldState
    ) -> float:
        if world.step > self._simulation.total_steps:
            return 0.0
        scored = self.action_values(
            world, reward_function, actions=self._value_candidates(world)
        )
        value, _ = aggregate(scored, self.value_aggregation)
        return value


class TieExploringAgent(OptimizingAgent[ActionT]):
    def choose_actions(self, world: WorldState) -> list[ActionT]:
        _, actions = aggregate(self.action_values(world), Aggregation.TIES)
        if len(actions) > 1:
            logger.debug("Step %s: %s tied best actions", world.step, len(actions))
        return actions


class SafeAgent(TieExploringAgent[ActionT]):
    value_aggregation = Aggregation.MIN

    def _value_candidates(self, world: WorldState) -> Sequence[ActionT]:
        return self.choose_actions(world)
