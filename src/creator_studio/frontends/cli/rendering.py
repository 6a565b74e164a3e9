"""Rich rendering for workflow runs and poll progress.

Status indicators are centralized here so the live progress lines and
the final summary table always agree.
"""

from __future__ import annotations

from typing import NamedTuple

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from creator_studio.core.content import StepContent
from creator_studio.core.operations import PollState, PollUpdate
from creator_studio.core.workflow import ProgressUpdate, RunStatus, WorkflowRun


class StatusIndicator(NamedTuple):
    """A status indicator with symbol and Rich style."""

    symbol: str
    style: str


STATUS_PENDING = StatusIndicator("○", "pending")
STATUS_RUNNING = StatusIndicator("⏳", "running")
STATUS_SELECTING = StatusIndicator("⚖", "running")
STATUS_COMPLETED = StatusIndicator("✓", "success")
STATUS_FAILED = StatusIndicator("✗", "error")

_STATUS_MAP: dict[str, StatusIndicator] = {
    "pending": STATUS_PENDING,
    "running": STATUS_RUNNING,
    "selecting": STATUS_SELECTING,
    "completed": STATUS_COMPLETED,
    "failed": STATUS_FAILED,
}

STUDIO_THEME = Theme(
    {
        "pending": "bright_black",
        "running": "bold cyan",
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "label": "bold",
        "chosen": "bold magenta",
    }
)

# Longest text shown inline for a step in the summary table
PREVIEW_CHARS = 240


def get_status_indicator(status: str) -> StatusIndicator:
    """Look up the indicator for a status value, defaulting to pending."""
    return _STATUS_MAP.get(status, STATUS_PENDING)


def make_console(stderr: bool = False) -> Console:
    return Console(theme=STUDIO_THEME, stderr=stderr, highlight=False)


class WorkflowRenderer:
    """Prints one line per progress update and a summary at the end."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self._labels: dict[str, str] = {}

    def attach(self, run: WorkflowRun) -> None:
        """Remember step labels and print the pending plan."""
        self._labels = {step.id: step.label for step in run.steps}
        self._console.print(Text(f"Topic: {run.topic}", style="label"))
        for step in run.steps:
            indicator = get_status_indicator(step.status.value)
            self._console.print(Text(f"  {indicator.symbol} {step.label}", style=indicator.style))

    def on_progress(self, update: ProgressUpdate) -> None:
        indicator = get_status_indicator(update.status.value)
        label = self._labels.get(update.step_id, update.step_id)
        line = Text(f"{indicator.symbol} {label}: {update.status.value}", style=indicator.style)
        if update.error:
            line.append(f" ({update.error})", style="error")
        self._console.print(line)

    def summary(self, run: WorkflowRun) -> Group:
        """Build the final per-step summary."""
        table = Table(show_header=True, header_style="label", expand=True)
        table.add_column("Step", no_wrap=True)
        table.add_column("Status", no_wrap=True)
        table.add_column("Result")

        for step in run.steps:
            indicator = get_status_indicator(step.status.value)
            result = render_content(step.content) if step.content is not None else Text("")
            if step.error:
                result = Text(step.error, style="error")
            table.add_row(
                step.label,
                Text(f"{indicator.symbol} {step.status.value}", style=indicator.style),
                result,
            )

        renderables: list[Table | Panel] = [table]
        if run.status is RunStatus.FAILED and run.error:
            renderables.append(Panel(Text(run.error, style="error"), title="Automation failed"))
        return Group(*renderables)


def render_content(content: StepContent) -> Text:
    """Render step content by its discriminant."""
    if content.kind == "selection":
        text = Text()
        for alternative in content.alternatives:
            if alternative == content.chosen:
                text.append(f"★ {alternative}\n", style="chosen")
            else:
                text.append(f"  {alternative}\n")
        text.rstrip()
        return text
    if content.kind == "list":
        return Text("\n".join(f"• {item}" for item in content.items))
    if content.kind == "text":
        preview = content.text
        if len(preview) > PREVIEW_CHARS:
            preview = preview[:PREVIEW_CHARS].rstrip() + "…"
        return Text(preview)
    return Text(str(content))


def render_poll_update(update: PollUpdate) -> Text:
    """One line for a poll progress message."""
    if update.state is PollState.FAILED:
        style = "error"
    elif update.state is PollState.SUCCEEDED:
        style = "success"
    elif update.retrying:
        style = "warning"
    else:
        style = "running"
    return Text(update.message, style=style)
