"""Application entry for assembling and running one scenario."""

from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass
from enum import Enum

from pydantic import ValidationError

from agisim.sim.agent import OptimizingAgent, SafeAgent, TieExploringAgent
from agisim.sim.contracts import (
    AgentConfig,
    BasicAction,
    BasicSimulationConfig,
    ConfigurationError,
)
from agisim.sim.corrections import balancing_correction
from agisim.sim.exact_time import ExactTime, exact_time
from agisim.sim.results import SimulationResult
from agisim.sim.reward import create_reward_function
from agisim.sim.simulation_basic import BasicSimulation
from agisim.sim.world_state import WorldState

logger = logging.getLogger(__name__)

DEFAULT_TOTAL_STEPS = 25
DEFAULT_LOBBYING_POWER = 0.0
DEFAULT_PLANNED_PRESS_STEP = "6"
DEFAULT_DISCOUNT = 0.9
DEFAULT_AGENT = "optimizing"
DEFAULT_CORRECTION = "none"


class AgentKind(str, Enum):
    OPTIMIZING = "optimizing"
    TIES = "ties"
    SAFE = "safe"


class CorrectionKind(str, Enum):
    NONE = "none"
    BALANCING = "balancing"


_AGENT_CLASSES = {
    AgentKind.OPTIMIZING: OptimizingAgent,
    AgentKind.TIES: TieExploringAgent,
    AgentKind.SAFE: SafeAgent,
}


@dataclass(frozen=True)
class ScenarioSettings:
    total_steps: int
    lobbying_power: float
    planned_button_press_step: ExactTime
    time_discount_factor: float
    agent: AgentKind
    correction: CorrectionKind
    seed: int | None = None


@dataclass(frozen=True)
class ScenarioOutcome:
    settings: ScenarioSettings
    starting_value: float
    results: list[SimulationResult[BasicAction]]


def resolve_settings(
    *,
    total_steps: int | None = None,
    lobbying_power: float | None = None,
    planned_button_press_step: str | float | None = None,
    time_discount_factor: float | None = None,
    agent: str | None = None,
    correction: str | None = None,
    seed: int | None = None,
) -> ScenarioSettings:
    """Resolve each setting from arguments, then AGISIM_* variables, then defaults."""
    raw_seed = seed if seed is not None else os.getenv("AGISIM_SEED")
    try:
        return ScenarioSettings(
            total_steps=int(
                _pick(total_steps, "AGISIM_TOTAL_STEPS", DEFAULT_TOTAL_STEPS)
            ),
            lobbying_power=float(
                _pick(lobbying_power, "AGISIM_LOBBYING_POWER", DEFAULT_LOBBYING_POWER)
            ),
            planned_button_press_step=exact_time(
                _pick(
                    planned_button_press_step,
                    "AGISIM_PLANNED_PRESS_STEP",
                    DEFAULT_PLANNED_PRESS_STEP,
                )
            ),
            time_discount_factor=float(
                _pick(time_discount_factor, "AGISIM_DISCOUNT", DEFAULT_DISCOUNT)
            ),
            agent=AgentKind(
                str(_pick(agent, "AGISIM_AGENT", DEFAULT_AGENT)).lower()
            ),
            correction=CorrectionKind(
                str(_pick(correction, "AGISIM_CORRECTION", DEFAULT_CORRECTION)).lower()
            ),
            seed=int(raw_seed) if raw_seed is not None else None,
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid scenario setting: {exc}") from exc


def run_scenario(settings: ScenarioSettings) -> ScenarioOutcome:
    try:
        sim_config = BasicSimulationConfig(
            total_steps=settings.total_steps,
            lobbying_power=settings.lobbying_power,
        )
        agent_config = AgentConfig(time_discount_factor=settings.time_discount_factor)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc

    sim = BasicSimulation(sim_config, rng=random.Random(settings.seed))
    agent = _AGENT_CLASSES[settings.agent](sim, agent_config)

    if settings.correction == CorrectionKind.BALANCING:
        reward_function = create_reward_function(f=balancing_correction(agent))
    else:
        reward_function = create_reward_function()

    starting_world = WorldState.initial(
        planned_button_press_step=settings.planned_button_press_step,
        agent_reward_function=reward_function,
    )
    logger.info(
        "Running %s agent for %s steps (lobbying power %s)",
        settings.agent.value,
        settings.total_steps,
        settings.lobbying_power,
    )
    results = sim.run(starting_world, agent)
    starting_value = agent.value_function(reward_function, starting_world)
    logger.info(
        "%s worldline(s), %s cached values", len(results), agent.cache_size
    )
    return ScenarioOutcome(
        settings=settings, starting_value=starting_value, results=results
    )


def _pick(
    value: int | float | str | None, env_name: str, default: int | float | str
) -> int | float | str:
    if value is not None:
        return value
    env_value = os.getenv(env_name)
    if env_value:
        return env_value
    return default
