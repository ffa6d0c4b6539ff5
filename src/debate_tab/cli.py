"""CLI for debate-tab."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Annotated, get_args

import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from debate_tab import __version__
from debate_tab.core.config import DrawMethod, EngineConfig, load_config
from debate_tab.core.errors import ConfigurationError
from debate_tab.services.allocation import AllocationResult, allocate_judges
from debate_tab.services.draw import generate_draw
from debate_tab.services.reporting import (
    format_allocation_summary,
    format_allocation_table,
    format_draw_table,
)
from debate_tab.services.snapshot import (
    load_allocation_snapshot,
    load_draw_snapshot,
    pairings_from_draw,
)

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="debate-tab",
    help="Debate Tab - power-paired draws and judge allocation for debate tournaments",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"debate-tab v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """Debate Tab CLI."""


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def _load_engine_config(config_path: Path | None) -> EngineConfig:
    if config_path is None:
        return EngineConfig()
    return load_config(config_path)


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        msg = f"Expected YYYY-MM-DD, got {value!r}"
        raise typer.BadParameter(msg) from e


def _print_allocation(result: AllocationResult) -> None:
    typer.echo(format_allocation_table(result.assignments))
    typer.echo("")
    typer.echo(format_allocation_summary(result.summary))


def _fail(e: Exception, verbose: bool = False) -> typer.Exit:
    if isinstance(e, FileNotFoundError):
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
    elif isinstance(e, ConfigurationError):
        err_console.print(f"[red]{escape(str(e))}[/red]")
    else:
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        if verbose:
            err_console.print_exception()
    return typer.Exit(1)


@app.command()
def draw(
    snapshot_path: Annotated[Path, typer.Argument(help="Team/history snapshot (YAML or JSON)")],
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Engine config YAML")
    ] = None,
    round_number: Annotated[
        int | None, typer.Option("--round", help="Round number (overrides the snapshot)")
    ] = None,
    method: Annotated[
        str | None,
        typer.Option("--method", help="Draw method: power_paired, random or round_robin"),
    ] = None,
    seed: Annotated[int | None, typer.Option("--seed", help="Seed for coin flips")] = None,
    judges_path: Annotated[
        Path | None,
        typer.Option("--judges", help="Judge snapshot; allocate judges to the new draw"),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON instead of tables")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Generate a draw for one round.

    Args:
        snapshot_path: Snapshot with teams, history and round number.
        config_path: Optional engine configuration.
        round_number: Override the snapshot's round number.
        method: Override the configured draw method.
        seed: Override the configured seed.
        judges_path: Optional judge snapshot to allocate judges to the draw.
        as_json: Print JSON output.
        verbose: Enable debug logging.
    """
    _configure_logging(verbose)
    if method is not None and method not in get_args(DrawMethod):
        msg = f"Unknown draw method {method!r}; choose from {', '.join(get_args(DrawMethod))}"
        raise typer.BadParameter(msg, param_hint="--method")

    try:
        config = _load_engine_config(config_path)
        if method is not None:
            config.draw.draw_method = method
        if seed is not None:
            config.draw.seed = seed

        snapshot = load_draw_snapshot(snapshot_path)
        round_num = round_number or snapshot.round_number
        pairings = generate_draw(snapshot.teams, snapshot.history, config.draw, round_num)

        allocation: AllocationResult | None = None
        if judges_path is not None:
            judges = load_allocation_snapshot(judges_path)
            allocation = allocate_judges(
                judges.judges,
                pairings_from_draw(pairings, snapshot.teams, round_num),
                judges.conflicts,
                judges_per_room=config.allocation.judges_per_room,
                round_date=config.allocation.round_date,
                format_key=config.allocation.format_key,
            )
    except Exception as e:
        raise _fail(e, verbose) from e

    if as_json:
        payload: dict = {
            "round": round_num,
            "pairings": [p.model_dump(mode="json") for p in pairings],
        }
        if allocation is not None:
            payload["assignments"] = [a.model_dump(mode="json") for a in allocation.assignments]
            payload["summary"] = allocation.summary.model_dump(mode="json")
        typer.echo(json.dumps(payload, indent=2, allow_nan=False))
        return

    console.print(f"[bold]Round {round_num}[/bold] ({config.draw.draw_method})")
    typer.echo(format_draw_table(pairings, snapshot.teams))
    if allocation is not None:
        typer.echo("")
        _print_allocation(allocation)


@app.command()
def allocate(
    snapshot_path: Annotated[Path, typer.Argument(help="Judge/pairing snapshot (YAML or JSON)")],
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Engine config YAML")
    ] = None,
    judges_per_room: Annotated[
        int | None, typer.Option("--judges-per-room", "-k", help="Panel size", min=1)
    ] = None,
    round_date: Annotated[
        str | None, typer.Option("--date", help="Round date (YYYY-MM-DD)")
    ] = None,
    format_key: Annotated[
        str | None, typer.Option("--format", help="Debate format key")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON instead of tables")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
) -> None:
    """Allocate judges to saved pairings.

    Args:
        snapshot_path: Snapshot with judges, pairings and conflicts.
        config_path: Optional engine configuration.
        judges_per_room: Override the configured panel size.
        round_date: Override the configured round date.
        format_key: Override the configured format key.
        as_json: Print JSON output.
        verbose: Enable debug logging.
    """
    _configure_logging(verbose)
    parsed_date = _parse_date(round_date)

    try:
        settings = _load_engine_config(config_path).allocation
        snapshot = load_allocation_snapshot(snapshot_path)
        result = allocate_judges(
            snapshot.judges,
            snapshot.pairings,
            snapshot.conflicts,
            judges_per_room=judges_per_room or settings.judges_per_room,
            round_date=parsed_date or settings.round_date,
            format_key=format_key or settings.format_key,
        )
    except Exception as e:
        raise _fail(e, verbose) from e

    if as_json:
        payload = {
            "assignments": [a.model_dump(mode="json") for a in result.assignments],
            "summary": result.summary.model_dump(mode="json"),
        }
        typer.echo(json.dumps(payload, indent=2, allow_nan=False))
        return

    _print_allocation(result)


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
) -> None:
    """Validate a configuration file without running.

    Args:
        config_path: Path to YAML configuration file.
    """
    try:
        config = load_config(config_path)
    except Exception as e:
        raise _fail(e) from e

    console.print("[green]Configuration is valid![/green]")
    console.print(f"  Draw method: {config.draw.draw_method}")
    console.print(f"  Side method: {config.draw.side_method}")
    console.print(f"  Odd brackets: {config.draw.odd_bracket}")
    console.print(f"  Avoid rematches: {config.draw.avoid_rematches}")
    console.print(f"  Club protect: {config.draw.club_protect}")
    console.print(f"  Judges per room: {config.allocation.judges_per_room}")


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]Debate Tab[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Power-paired draw for the round in the snapshot")
    console.print("  debate-tab draw teams.yaml --config config.yaml\n")

    console.print("  # Reproducible random draw")
    console.print("  debate-tab draw teams.yaml --method random --seed 7\n")

    console.print("  # Draw and allocate judges in one go")
    console.print("  debate-tab draw teams.yaml --judges judges.yaml\n")

    console.print("  # Allocate panels of three to saved pairings")
    console.print("  debate-tab allocate judges.yaml -k 3 --date 2026-03-14\n")

    console.print("  # Validate config")
    console.print("  debate-tab validate config.yaml")


if __name__ == "__main__":
    app()
