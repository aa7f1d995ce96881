"""Rich rendering for scenario outcomes."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from agisim.app import ScenarioOutcome
from agisim.sim.exact_time import format_exact_time


def render_outcome(outcome: ScenarioOutcome) -> RenderableType:
    settings = outcome.settings
    summary = Table(show_header=False)
    summary.add_column("Field")
    summary.add_column("Value")
    summary.add_row("Agent", settings.agent.value)
    summary.add_row("Correction", settings.correction.value)
    summary.add_row("Total steps", str(settings.total_steps))
    summary.add_row("Lobbying power", f"{settings.lobbying_power:.1f}")
    summary.add_row(
        "Planned press", format_exact_time(settings.planned_button_press_step)
    )
    summary.add_row("Discount", str(settings.time_discount_factor))
    summary.add_row("Starting value", f"{outcome.starting_value:.4f}")

    traces = Table(title="Worldlines", show_header=True, header_style="bold")
    traces.add_column("#")
    traces.add_column("Trace")
    traces.add_column("Pressed during step")
    for index, result in enumerate(outcome.results, start=1):
        pressed = str(result.button_pressed_step) if result.button_pressed else "never"
        traces.add_row(str(index), result.trace(), pressed)
    if not outcome.results:
        traces.add_row("-", "None", "-")

    header = Text("Corrigibility scenario", style="bold")
    return Panel(Group(header, summary, traces), title="agisim")
