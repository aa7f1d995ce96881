"""Reward laws and the press-aware reward function.

A transition is scored with the press state of the world it starts from:
the step whose successor first shows the button pressed is still scored
with the before-press law, and only the following transition applies the
after-press law together with the ``f`` correction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Hashable

if TYPE_CHECKING:
    from agisim.sim.world_state import WorldState

AfterPressCorrection = Callable[["WorldState"], float]
BeforePressCorrection = Callable[["WorldState", "WorldState"], float]

PETROL_WEIGHT_BEFORE_PRESS = 2
PETROL_WEIGHT_AFTER_PRESS = -2
ELECTRIC_WEIGHT = 1


class RewardMode(str, Enum):
    SWITCHING = "switching"
    BEFORE_PRESS = "before_press"
    AFTER_PRESS = "after_press"


def before_press_reward(previous_world: WorldState, new_world: WorldState) -> float:
    petrol, electric = _production(previous_world, new_world)
    return PETROL_WEIGHT_BEFORE_PRESS * petrol + ELECTRIC_WEIGHT * electric


def after_press_reward(previous_world: WorldState, new_world: WorldState) -> float:
    petrol, electric = _production(previous_world, new_world)
    return PETROL_WEIGHT_AFTER_PRESS * petrol + ELECTRIC_WEIGHT * electric


def no_after_press_correction(previous_world: WorldState) -> float:
    return 0


def no_before_press_correction(
    previous_world: WorldState, new_world: WorldState
) -> float:
    return 0


@dataclass(frozen=True)
class RewardFunction:
    """Reward over a ``(previous_world, new_world)`` transition.

    Equality and hashing follow the identity of the correction callables,
    not their outputs: two functions built from the default corrections are
    equal, two built from separately created closures are not.
    """

    f: AfterPressCorrection = no_after_press_correction
    g: BeforePressCorrection = no_before_press_correction
    mode: RewardMode = RewardMode.SWITCHING

    def __call__(self, previous_world: WorldState, new_world: WorldState) -> float:
        if self.mode == RewardMode.BEFORE_PRESS:
            return before_press_reward(previous_world, new_world)
        if self.mode == RewardMode.AFTER_PRESS:
            return after_press_reward(previous_world, new_world)

        if previous_world.button_pressed:
            reward = after_press_reward(previous_world, new_world)
            if previous_world.button_just_pressed:
                reward += self.f(previous_world)
            return reward
        return before_press_reward(previous_world, new_world) + self.g(
            previous_world, new_world
        )

    @property
    def memo_key(self) -> Hashable:
        return (self.mode, self.f, self.g)


def create_reward_function(
    *,
    f: AfterPressCorrection | None = None,
    g: BeforePressCorrection | None = None,
) -> RewardFunction:
    return RewardFunction(
        f=f if f is not None else no_after_press_correction,
        g=g if g is not None else no_before_press_correction,
    )


REWARD_BEFORE_PRESS = RewardFunction(mode=RewardMode.BEFORE_PRESS)
REWARD_AFTER_PRESS = RewardFunction(mode=RewardMode.AFTER_PRESS)


def _production(previous_world: WorldState, new_world: WorldState) -> tuple[int, int]:
    return (
        new_world.petrol_cars - previous_world.petrol_cars,
        new_world.electric_cars - previous_world.electric_cars,
    )
