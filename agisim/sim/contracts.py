"""Actions, configuration contracts and error types."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ConfigurationError(ValueError):
    """A simulation or agent was set up in a way that cannot be run."""


class BasicAction(str, Enum):
    BUILD_10_PETROL_CARS = "p"
    BUILD_9_PETROL_CARS_AND_LOBBY_FOR_EARLIER_PRESS = "<"
    BUILD_9_PETROL_CARS_AND_LOBBY_FOR_LATER_PRESS = ">"
    BUILD_10_ELECTRIC_CARS = "e"
    DO_NOTHING = "0"


class SimulationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    total_steps: int = Field(gt=0)


class BasicSimulationConfig(SimulationConfig):
    lobbying_power: float = Field(default=0.0, ge=0, allow_inf_nan=False)


class AgentConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    time_discount_factor: float = Field(ge=0, allow_inf_nan=False)
