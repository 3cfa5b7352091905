"""Templates commands: list the bundled caissons and start a project from one."""

from pathlib import Path
from typing import Annotated

import typer

from caissons.application.config import ConfigError
from caissons.application.templates import (
    TemplateManager,
    TemplateNotFoundError,
    TemplateRejectedError,
)
from caissons.cli.commands.validate import display_load_error, display_validation_result

templates_app = typer.Typer(
    name="templates",
    help="List bundled caisson templates and start configurations from them.",
)


@templates_app.command(name="list")
def list_templates() -> None:
    """List the bundled templates with a summary of each cabinet.

    Example:
        caissons templates list
    """
    templates = TemplateManager().list_templates()

    typer.echo("Available templates:")
    typer.echo()
    width = max(len(name) for name, _ in templates) if templates else 0
    for name, description in templates:
        typer.echo(f"  {name:<{width}}  - {description}")
    typer.echo()
    typer.echo("Use 'caissons templates init <name>' to create a configuration file from a template.")


@templates_app.command(name="init")
def init_template(
    name: Annotated[str, typer.Argument(help="Name of the template to start from")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (default: <name>.json)"),
    ] = None,
    cabinet_name: Annotated[
        str | None, typer.Option("--name", help="Cabinet name for the new configuration")
    ] = None,
    width: Annotated[float | None, typer.Option("--width", help="External width (mm)")] = None,
    height: Annotated[float | None, typer.Option("--height", help="External height (mm)")] = None,
    depth: Annotated[float | None, typer.Option("--depth", help="External depth (mm)")] = None,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite existing file")] = False,
) -> None:
    """Write a configuration file from a template, optionally resized.

    The configuration is validated by the engine first and nothing is
    written when it reports errors.

    Examples:
        caissons templates init base-600
        caissons templates init wall-800 --width 1000 --output kitchen-wall.json
        caissons templates init base-600 --force
    """
    output = output or Path(f"{cabinet_name or name}.json")

    try:
        result = TemplateManager().init_template(
            name,
            output,
            force=force,
            cabinet_name=cabinet_name,
            width=width,
            height=height,
            depth=depth,
        )
    except TemplateNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except FileExistsError:
        typer.echo(f"Error: File already exists: {output}", err=True)
        typer.echo("Use --force to overwrite.", err=True)
        raise typer.Exit(code=1)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)
    except TemplateRejectedError as e:
        display_validation_result(e.result)
        typer.echo(f"Nothing written to {output}.", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Error: Could not write file: {e}", err=True)
        raise typer.Exit(code=1)

    if result.warnings:
        display_validation_result(result)
    typer.echo(f"Created: {output}")
