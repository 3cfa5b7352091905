"""Validate command and the shared report of configuration problems.

Load failures and validation results are printed the same way: one
``path: message`` line per problem, followed by the offending value and a
catalog hint or suggestion where there is one.
"""

from pathlib import Path
from typing import Annotated, Any

import typer

from caissons.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def _echo_entry(
    path: str, message: str, value: Any = None, note: str | None = None, err: bool = True
) -> None:
    typer.echo(f"  {path}: {message}", err=err)
    if value is not None and not isinstance(value, dict):
        typer.echo(f"    Value: {value!r}", err=err)
    if note:
        typer.echo(f"    {note}", err=err)


def display_load_error(error: ConfigError) -> None:
    """Print why a configuration could not be loaded."""
    typer.echo("Errors:", err=True)
    if error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
    for detail in error.details:
        _echo_entry(detail["path"], detail["message"], detail.get("value"), detail.get("hint"))
    if not error.details:
        typer.echo(f"  {error.message}", err=True)
    typer.echo()
    typer.echo("Validation failed.", err=True)


def display_validation_result(result: ValidationResult) -> None:
    """Print validation errors, warnings and a one-line verdict."""
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            _echo_entry(error.path, error.message, error.value, error.hint)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            suggestion = f"Suggestion: {warning.suggestion}" if warning.suggestion else None
            _echo_entry(warning.path, warning.message, note=suggestion, err=False)
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Configuration is valid.")


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="JSON configuration file, or the name of a bundled template"),
    ],
) -> None:
    """Validate a caisson configuration file.

    Reports schema errors, the dimension, hardware and drilling errors found
    by the engine, and woodworking advisories. Unknown hardware keys are
    listed with the keys the catalog knows.

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        caissons validate base-600.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    display_validation_result(result)
    raise typer.Exit(code=result.exit_code)
