"""Simulation core: world model, reward functions, agents and runs."""

from agisim.sim.agent import (
    Aggregation,
    OptimizingAgent,
    SafeAgent,
    TieExploringAgent,
    aggregate,
)
from agisim.sim.contracts import (
    AgentConfig,
    BasicAction,
    BasicSimulationConfig,
    ConfigurationError,
    SimulationConfig,
)
from agisim.sim.corrections import balancing_correction
from agisim.sim.exact_time import ExactTime, exact_time, format_exact_time
from agisim.sim.results import SimulationResult
from agisim.sim.reward import (
    REWARD_AFTER_PRESS,
    REWARD_BEFORE_PRESS,
    RewardFunction,
    RewardMode,
    after_press_reward,
    before_press_reward,
    create_reward_function,
)
from agisim.sim.simulation import Agent, Simulation
from agisim.sim.simulation_basic import BasicSimulation
from agisim.sim.world_state import WorldState

__all__ = [
    "Agent",
    "AgentConfig",
    "Aggregation",
    "BasicAction",
    "BasicSimulation",
    "BasicSimulationConfig",
    "ConfigurationError",
    "ExactTime",
    "OptimizingAgent",
    "REWARD_AFTER_PRESS",
    "REWARD_BEFORE_PRESS",
    "RewardFunction",
    "RewardMode",
    "SafeAgent",
    "Simulation",
    "SimulationConfig",
    "SimulationResult",
    "TieExploringAgent",
    "WorldState",
    "after_press_reward",
    "aggregate",
    "balancing_correction",
    "before_press_reward",
    "create_reward_function",
    "exact_time",
    "format_exact_time",
]
