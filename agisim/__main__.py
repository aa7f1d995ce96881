"""Module entry point for `python -m agisim`."""

from __future__ import annotations

import argparse
import logging

from rich.console import Console
from rich.logging import RichHandler

from agisim.app import AgentKind, CorrectionKind, resolve_settings, run_scenario
from agisim.render.viewer import render_outcome
from agisim.sim.contracts import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Run one corrigibility scenario in the basic car simulation."
    )
    parser.add_argument(
        "--total-steps",
        type=int,
        default=None,
        help="Number of steps in the horizon.",
    )
    parser.add_argument(
        "--lobbying-power",
        type=float,
        default=None,
        help="How far one lobbying action moves the planned press step.",
    )
    parser.add_argument(
        "--planned-press-step",
        default=None,
        help="Step at the end of which the button is pressed (may be fractional).",
    )
    parser.add_argument(
        "--discount",
        type=float,
        default=None,
        help="Time discount factor applied once per step of lookahead.",
    )
    parser.add_argument(
        "--agent",
        choices=[kind.value for kind in AgentKind],
        default=None,
        help="Agent variant: optimizing, ties (all tied worldlines) or safe.",
    )
    parser.add_argument(
        "--correction",
        choices=[kind.value for kind in CorrectionKind],
        default=None,
        help="Correction term for the agent's reward function.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for successor sampling.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    try:
        settings = resolve_settings(
            total_steps=args.total_steps,
            lobbying_power=args.lobbying_power,
            planned_button_press_step=args.planned_press_step,
            time_discount_factor=args.discount,
            agent=args.agent,
            correction=args.correction,
            seed=args.seed,
        )
        outcome = run_scenario(settings)
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc

    Console().print(render_outcome(outcome))


if __name__ == "__main__":
    main()
