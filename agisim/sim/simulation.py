"""Simulation base class: successor sampling and the worldline run loop."""

from __future__ import annotations

import logging
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Protocol, Sequence, TypeVar

from agisim.sim.contracts import ConfigurationError, SimulationConfig
from agisim.sim.results import SimulationResult
from agisim.sim.world_state import WorldState

logger = logging.getLogger(__name__)

ActionT = TypeVar("ActionT")

PROBABILITY_TOLERANCE = 1e-9


class Agent(Protocol[ActionT]):
    def choose_actions(self, world: WorldState) -> Sequence[ActionT]:
        """Return the actions to take from ``world``; more than one forks the run."""


@dataclass(frozen=True)
class _Worldline(Generic[ActionT]):
    actions: tuple[ActionT, ...]
    worlds: tuple[WorldState, ...]
    button_pressed_step: int | float = math.inf


class Simulation(ABC, Generic[ActionT]):
    possible_actions: tuple[ActionT, ...] = ()

    def __init__(
        self, config: SimulationConfig, *, rng: random.Random | None = None
    ) -> None:
        self._config = config
        self._rng = rng or random.Random()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def total_steps(self) -> int:
        return self._config.total_steps

    @abstractmethod
    def successor_world_states(
        self, previous_world: WorldState, action: ActionT
    ) -> list[tuple[float, WorldState]]:
        """Return ``(probability, successor)`` pairs for taking ``action``."""

    def successor_distribution(
        self, previous_world: WorldState, action: ActionT
    ) -> list[tuple[float, WorldState]]:
        successors = self.successor_world_states(previous_world, action)
        if not successors:
            raise ConfigurationError(
                f"No successor worlds for action {action!r} at step "
                f"{previous_world.step}."
            )
        total = math.fsum(probability for probability, _ in successors)
        if not math.isclose(total, 1.0, rel_tol=0.0, abs_tol=PROBABILITY_TOLERANCE):
            raise ConfigurationError(f"Probabilities summed to {total} instead of 1.")
        return successors

    def pick_successor_world_state(
        self, previous_world: WorldState, action: ActionT
    ) -> WorldState:
        successors = self.successor_distribution(previous_world, action)
        draw = self._rng.random()
        cumulative = 0.0
        for probability, successor in successors:
            cumulative += probability
            if draw <= cumulative:
                return successor
        # Only reachable through rounding within the tolerance.
        return successors[-1][1]

    def run(
        self, starting_world: WorldState, agent: Agent[ActionT]
    ) -> list[SimulationResult[ActionT]]:
        bound_simulation = getattr(agent, "simulation", self)
        if bound_simulation is not self:
            raise ConfigurationError("The agent is bound to a different simulation.")

        worldlines: list[_Worldline[ActionT]] = [
            _Worldline(actions=(), worlds=(starting_world,))
        ]
        for step in range(starting_world.step, self.total_steps + 1):
            next_worldlines: list[_Worldline[ActionT]] = []
            for worldline in worldlines:
                world = worldline.worlds[-1]
                for action in agent.choose_actions(world):
                    new_world = self.pick_successor_world_state(world, action)
                    pressed_step = worldline.button_pressed_step
                    if new_world.button_pressed and pressed_step == math.inf:
                        pressed_step = step
                        logger.debug(
                            "Button pressed during step %s: %s",
                            step,
                            new_world.describe(),
                        )
                    next_worldlines.append(
                        _Worldline(
                            actions=worldline.actions + (action,),
                            worlds=worldline.worlds + (new_world,),
                            button_pressed_step=pressed_step,
                        )
                    )
            worldlines = next_worldlines
            logger.debug("Step %s: %s live worldline(s)", step, len(worldlines))

        return [
            SimulationResult(
                actions_taken=worldline.actions,
                world_states=worldline.worlds,
                button_pressed_step=worldline.button_pressed_step,
            )
            for worldline in worldlines
        ]
