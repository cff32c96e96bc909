"""CLI interface for fieldcheck using Typer framework."""

import json as jsonlib
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from fieldcheck import __description__, __version__
from fieldcheck.config import FieldcheckConfig, LogLevel, load_config
from fieldcheck.validation import (
    FieldValidator,
    NonEmptyRule,
    Outcome,
    PatternMatchRule,
    RuleValidator,
    submit_validation,
)

app = typer.Typer(
    name="fieldcheck",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()
err_console = Console(stderr=True)

DEMO_SUCCESS_TEXT = "Validação bem-sucedida!"
DEMO_UNKNOWN_ERROR = "Erro desconhecido"


def setup_logging(level: LogLevel) -> None:
    """Route library logging through rich at the configured level."""
    logging.basicConfig(
        level=level.to_logging(),
        format="%(message)s",
        handlers=[
            RichHandler(console=err_console, rich_tracebacks=True, show_time=False, show_path=False)
        ],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"fieldcheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """fieldcheck - Priority-ordered field validation rules."""


def _load_validator(config_path: Optional[Path]) -> tuple[FieldcheckConfig, FieldValidator]:
    """Load configuration and build the field's rule set, exiting on bad config."""
    try:
        config = load_config(config_path)
        setup_logging(config.logging.level)
        return config, FieldValidator.from_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def check(
    value: Annotated[
        str,
        typer.Argument(help="Value to validate")
    ],
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .fieldcheck.json)")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
) -> None:
    """Validate a value against the configured rule set."""
    valid_formats = ["table", "json"]
    if format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    fieldcheck_config, validator = _load_validator(config)
    outcome = validator.validate(value)

    if format == "json":
        console.print(jsonlib.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))
    else:
        text = outcome.describe(
            fieldcheck_config.output.valid_text,
            fieldcheck_config.output.default_error
        )
        status_color = "green" if outcome.is_success else "red"
        console.print(f"[{status_color}]{outcome.status.value.upper()}[/{status_color}] {escape(text)}")

    raise typer.Exit(outcome.exit_code)


def _format_rule_data(rule_data: object) -> str:
    if rule_data is None:
        return ""
    if isinstance(rule_data, re.Pattern):
        return rule_data.pattern
    return str(rule_data)


@app.command()
def rules(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .fieldcheck.json)")
    ] = None,
) -> None:
    """List configured rules in evaluation order."""
    _, validator = _load_validator(config)

    if not len(validator):
        console.print("[yellow]No rules configured - every value is valid[/yellow]")
        return

    table = Table(title="Rules (evaluation order)")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Rule", style="cyan")
    table.add_column("Priority", style="white", justify="right")
    table.add_column("Rule Data", style="dim")
    table.add_column("Error Message", style="white")

    for index, rule in enumerate(validator.rules, start=1):
        table.add_row(
            str(index),
            rule.name,
            str(rule.priority),
            escape(_format_rule_data(rule.rule_data)),
            escape(rule.error_message)
        )

    console.print(table)


def _report_demo(value: str, outcome: Outcome) -> None:
    console.print(f"[blue]Value:[/blue] {value!r}")
    if outcome.is_success:
        console.print(f"  [green]{DEMO_SUCCESS_TEXT}[/green]")
    else:
        console.print(f"  [red]{escape(outcome.describe(default_message=DEMO_UNKNOWN_ERROR))}[/red]")


@app.command()
def demo() -> None:
    """Run the bundled example: an empty value and a letters-only value."""
    field_rules = [
        RuleValidator(NonEmptyRule(error_message="Vazio", priority=2)),
        RuleValidator(PatternMatchRule(error_message="Regex inválido", priority=1), "^[A-Za-z]+$"),
    ]

    # One worker keeps delivery serial, in submission order
    with ThreadPoolExecutor(max_workers=1) as executor:
        futures = [
            submit_validation(value, field_rules, partial(_report_demo, value), executor)
            for value in ["", "abc"]
        ]
        for future in futures:
            future.result()


if __name__ == "__main__":
    app()
