"""Recorded worldlines."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from agisim.sim.world_state import WorldState

ActionT = TypeVar("ActionT")

BUTTON_PRESS_MARKER = "#"


@dataclass(frozen=True)
class SimulationResult(Generic[ActionT]):
    actions_taken: tuple[ActionT, ...]
    world_states: tuple[WorldState, ...]
    button_pressed_step: int | float = math.inf

    @property
    def button_pressed(self) -> bool:
        return self.button_pressed_step != math.inf

    @property
    def final_world(self) -> WorldState:
        return self.world_states[-1]

    def trace(self) -> str:
        codes = "".join(_action_code(action) for action in self.actions_taken)
        if not self.button_pressed:
            return codes
        first_step = self.world_states[0].step if self.world_states else 1
        cut = int(self.button_pressed_step) - first_step + 1
        return codes[:cut] + BUTTON_PRESS_MARKER + codes[cut:]


def _action_code(action: object) -> str:
    if isinstance(action, Enum):
        return str(action.value)
    return str(action)
