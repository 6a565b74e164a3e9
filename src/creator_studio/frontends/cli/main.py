"""CLI entry point."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, NoReturn

import rich_click as click
from rich.text import Text

from creator_studio.backend import GeminiClient, GenerationKind
from creator_studio.backend.models import dump
from creator_studio.core.config import StudioConfig
from creator_studio.core.errors import StudioError
from creator_studio.core.logging_config import configure_logging
from creator_studio.core.operations import OperationPoller, PollOutcome, PollState, PollUpdate
from creator_studio.core.workflow import PIPELINES, RunStatus, WorkflowOrchestrator
from creator_studio.frontends.cli.rendering import (
    WorkflowRenderer,
    make_console,
    render_poll_update,
)

# Exit code when the video service rejected the credential
EXIT_REAUTH = 2

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
click.rich_click.ERRORS_EPILOGUE = ""
click.rich_click.MAX_WIDTH = 100


def main() -> None:
    """Main entry point for the CLI."""
    cli()


def error_exit(message: str, code: int = 1) -> NoReturn:
    """Print error message and exit."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


def output_json(data: Any, indent: int = 2) -> None:
    """Output data as formatted JSON."""
    click.echo(json.dumps(data, indent=indent, ensure_ascii=False))


def make_client(config: StudioConfig) -> GeminiClient:
    """Build the backend client used by every command."""
    return GeminiClient(config)


def _load_config() -> StudioConfig:
    try:
        return StudioConfig.from_env()
    except StudioError as e:
        error_exit(e.message)


# =========================================================================
# Root CLI
# =========================================================================
@click.group()
@click.version_option(package_name="creator-studio")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: CREATOR_STUDIO_LOG_LEVEL or WARNING)",
)
def cli(log_level: str | None):
    """Creator Studio - AI content assistant for video creators.

    Turn one topic into titles, hooks, a script, a description and tags,
    or generate a short vertical video from a prompt.

    **Configuration:** set `GEMINI_API_KEY` (or `API_KEY`).

    **Commands:**

        creator-studio automate   Run the full content pipeline for a topic

        creator-studio video      Generate a video and save it to a file

        creator-studio generate   Run a single generation

        creator-studio trending   List trending video topics
    """
    configure_logging(level=log_level, force=log_level is not None)


# =========================================================================
# automate
# =========================================================================
@cli.command()
@click.argument("topic")
@click.option(
    "--platform",
    "-p",
    type=click.Choice(sorted(PIPELINES)),
    default="youtube",
    show_default=True,
    help="Which content pipeline to run",
)
@click.option("--json", "-j", "json_output", is_flag=True, help="Output the run as JSON")
def automate(topic: str, platform: str, json_output: bool):
    """Run the full content pipeline for a topic.

    Steps run in order. The best title is picked automatically and the
    script is written for it. The first failing step ends the run.

    **Examples:**

        creator-studio automate "review of a new laptop"

        creator-studio automate "remote work tips" --platform x --json
    """
    config = _load_config()
    try:
        status = asyncio.run(_automate(config, topic, platform, json_output))
    except StudioError as e:
        error_exit(e.message)

    if status is not RunStatus.COMPLETED:
        sys.exit(1)


async def _automate(
    config: StudioConfig, topic: str, platform: str, json_output: bool
) -> RunStatus:
    console = make_console(stderr=json_output)
    renderer = WorkflowRenderer(console)

    async with make_client(config) as client:
        orchestrator = WorkflowOrchestrator(
            pipeline=PIPELINES[platform](client),
            chooser=client.choose,
            on_progress=renderer.on_progress,
            name=platform,
        )
        run = orchestrator.start(topic)
        if run is None:
            # A fresh orchestrator never has a run in flight
            raise RuntimeError("Run was not started")
        renderer.attach(run)
        status = await run.wait()

    if json_output:
        output_json(run.to_info().to_dict())
    else:
        console.print(renderer.summary(run))
    return status


# =========================================================================
# video
# =========================================================================
@cli.command()
@click.argument("prompt")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    required=True,
    help="File to write the generated video to",
)
@click.option(
    "--interval",
    "-i",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds between status checks (default: CREATOR_STUDIO_POLL_INTERVAL or 10)",
)
def video(prompt: str, output: Path, interval: float | None):
    """Generate a short vertical video and save it to a file.

    Exits with code 2 when the API key was rejected and a new one is needed.

    **Examples:**

        creator-studio video "a timelapse of a city at night" -o city.mp4
    """
    config = _load_config()
    try:
        outcome = asyncio.run(_video(config, prompt, interval or config.poll_interval))
    except StudioError as e:
        error_exit(e.message)

    if outcome.state is not PollState.SUCCEEDED or outcome.artifact is None:
        message = str(outcome.error) if outcome.error else "Video generation did not finish"
        error_exit(message, EXIT_REAUTH if outcome.requires_reauth else 1)

    output.write_bytes(outcome.artifact)
    click.echo(f"Saved {len(outcome.artifact)} bytes to {output}")


async def _video(config: StudioConfig, prompt: str, interval: float) -> PollOutcome:
    console = make_console(stderr=True)

    def on_update(update: PollUpdate) -> None:
        console.print(render_poll_update(update))

    async with make_client(config) as client:
        poller = OperationPoller(backend=client, on_update=on_update, interval=interval)
        try:
            return await poller.run(prompt)
        finally:
            await poller.cancel()


# =========================================================================
# generate
# =========================================================================
@cli.command()
@click.argument("kind", type=click.Choice([k.value for k in GenerationKind]))
@click.argument("input")
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
def generate(kind: str, input: str, json_output: bool):
    """Run a single generation.

    KIND is one of the generation kinds (titles, hooks, script, ...).
    INPUT is the topic, or the title for script and chapters.

    **Examples:**

        creator-studio generate hooks "review of a new laptop"

        creator-studio generate script "I Tried Every Laptop So You Don't Have To" --json
    """
    config = _load_config()
    try:
        result = asyncio.run(_generate(config, GenerationKind(kind), input))
    except StudioError as e:
        error_exit(e.message)

    data = dump(result)
    if json_output:
        output_json(data)
    elif isinstance(data, str):
        click.echo(data)
    elif isinstance(data, list):
        for item in data:
            click.echo(f"- {item}")
    else:
        output_json(data)


async def _generate(config: StudioConfig, kind: GenerationKind, input: str) -> Any:
    async with make_client(config) as client:
        return await client.generate(kind, input)


# =========================================================================
# trending
# =========================================================================
@cli.command()
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
def trending(json_output: bool):
    """List trending video topics, found with web search."""
    config = _load_config()
    try:
        topics = asyncio.run(_generate(config, GenerationKind.TRENDING_TOPICS, "YouTube"))
    except StudioError as e:
        error_exit(e.message)

    if json_output:
        output_json(topics)
        return

    console = make_console()
    for i, topic in enumerate(topics, 1):
        console.print(Text.assemble((f"{i}. ", "label"), str(topic)))
