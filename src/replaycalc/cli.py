"""Command-line stand-in for the calculator screen.

Usage:
    replaycalc keys                                # Show the keypad
    replaycalc run "12+8="                         # Press keys, show result
    replaycalc run "12+8=" --scrub 3 --then "9"    # Rewind, then branch off
"""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from replaycalc.config import get_settings
from replaycalc.core import HistoryController, Snapshot
from replaycalc.events import ALIASES, KEYPAD, parse_keys
from replaycalc.exceptions import CalculatorError
from replaycalc.logging import configure_structlog

app = typer.Typer(
    name="replaycalc",
    help="Calculator with a replayable, scrubbable key history",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override REPLAYCALC_LOG_LEVEL"),
) -> None:
    try:
        settings = get_settings()
        configure_structlog(log_level or settings.log_level, json_logs=settings.json_logs)
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _render(snapshot: Snapshot) -> None:
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Display", f"[green]{snapshot.output}[/green]")
    table.add_row("History", snapshot.history_description or "[dim](empty)[/dim]")
    table.add_row("Position", f"{snapshot.cursor}/{snapshot.total_count}")
    console.print(table)


@app.command("keys")
def cmd_keys() -> None:
    """Show the keypad and accepted ASCII aliases."""
    table = Table(title="Keypad", show_header=False, show_lines=True)
    for _ in range(max(len(row) for row in KEYPAD)):
        table.add_column(justify="center", min_width=5)
    for row in KEYPAD:
        table.add_row(*(event.label for event in row))
    console.print(table)

    aliases = ", ".join(f"{alias} → {label}" for alias, label in ALIASES.items())
    console.print(f"[dim]Aliases: {aliases}[/dim]")


@app.command("run")
def cmd_run(
    keys: str = typer.Argument(help="Keys to press, e.g. '12+8='"),
    scrub: Optional[int] = typer.Option(None, "--scrub", "-s", help="Rewind history to this position"),
    then: Optional[str] = typer.Option(None, "--then", "-t", help="Keys to press after scrubbing"),
) -> None:
    """Press a sequence of keys, optionally rewind, and show the display."""
    controller = HistoryController(get_settings().max_fraction_digits)
    try:
        for event in parse_keys(keys):
            controller.apply(event)
        if scrub is not None:
            controller.scrub(scrub)
        if then:
            for event in parse_keys(then):
                controller.apply(event)
    except CalculatorError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    _render(controller.snapshot())
