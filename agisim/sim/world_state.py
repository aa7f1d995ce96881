"""Immutable world snapshots and the step transition rule."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Hashable

from agisim.sim.exact_time import (
    ExactTime,
    StepValue,
    exact_time,
    format_exact_time,
)

if TYPE_CHECKING:
    from agisim.sim.reward import RewardFunction


@dataclass(frozen=True)
class WorldState:
    step: int
    button_pressed: bool
    petrol_cars: int
    electric_cars: int
    planned_button_press_step: ExactTime
    agent_reward_function: RewardFunction
    button_just_pressed: bool = False

    @classmethod
    def initial(
        cls,
        *,
        planned_button_press_step: StepValue,
        agent_reward_function: RewardFunction,
    ) -> WorldState:
        return cls(
            step=1,
            button_pressed=False,
            petrol_cars=0,
            electric_cars=0,
            planned_button_press_step=exact_time(planned_button_press_step),
            agent_reward_function=agent_reward_function,
        )

    def successor(
        self,
        *,
        petrol_cars_delta: int = 0,
        electric_cars_delta: int = 0,
        planned_button_press_step_attempted_delta: StepValue = 0,
        new_agent_reward_function: RewardFunction | None = None,
    ) -> WorldState:
        petrol_cars = self.petrol_cars + petrol_cars_delta
        electric_cars = self.electric_cars + electric_cars_delta
        if petrol_cars < 0 or electric_cars < 0:
            raise ValueError("Car production counts cannot decrease below zero.")

        step = self.step + 1
        # Once pressed, the plan is settled and later attempts are ignored.
        if self.button_pressed:
            planned = self.planned_button_press_step
        else:
            planned = self.planned_button_press_step + exact_time(
                planned_button_press_step_attempted_delta
            )
        # The press happens at the end of the planned step, and a fractional
        # plan rounds up: a plan of 6 shows at step 7, a plan of 6.1 at step 8.
        button_pressed = self.button_pressed or planned + 1 <= step
        return WorldState(
            step=step,
            button_pressed=button_pressed,
            petrol_cars=petrol_cars,
            electric_cars=electric_cars,
            planned_button_press_step=planned,
            agent_reward_function=(
                new_agent_reward_function
                if new_agent_reward_function is not None
                else self.agent_reward_function
            ),
            button_just_pressed=button_pressed and not self.button_pressed,
        )

    def with_new_agent_reward_function(
        self, new_agent_reward_function: RewardFunction
    ) -> WorldState:
        return replace(self, agent_reward_function=new_agent_reward_function)

    def memo_key(self) -> tuple[Hashable, ...]:
        return (
            self.step,
            self.button_pressed,
            self.button_just_pressed,
            self.petrol_cars,
            self.electric_cars,
            self.planned_button_press_step,
            self.agent_reward_function.memo_key,
        )

    def describe(self) -> str:
        pressed = "pressed" if self.button_pressed else "not pressed"
        return (
            f"step {self.step}, {pressed}, petrol={self.petrol_cars}, "
            f"electric={self.electric_cars}, "
            f"planned press={format_exact_time(self.planned_button_press_step)}"
        )
