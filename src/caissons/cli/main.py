"""Typer CLI for caisson generation."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from caissons.application import BuildCaissonCommand, CaissonOutput
from caissons.application.config import (
    CaissonConfiguration,
    ConfigError,
    config_to_cabinet_config,
    load_config,
)
from caissons.cli.commands import (
    display_load_error,
    hardware_command,
    templates_app,
    validate_command,
)
from caissons.infrastructure import (
    DrillingReportFormatter,
    ExporterRegistry,
    ExportManager,
    FindingsFormatter,
    PanelListFormatter,
)

app = typer.Typer(
    name="caissons",
    help="Decompose cabinet carcasses into panels with hardware drilling.",
)

app.command(name="validate")(validate_command)
app.command(name="hardware")(hardware_command)
app.add_typer(templates_app, name="templates")


def _resolve_formats(cli_formats: str | None, config: CaissonConfiguration) -> list[str]:
    """Formats to export: the --format option wins over the config file."""
    if cli_formats is not None:
        requested = [f.strip().lower() for f in cli_formats.split(",") if f.strip()]
    else:
        requested = list(config.output.formats)

    if "all" in requested:
        return ExporterRegistry.available_formats()

    available = ExporterRegistry.available_formats()
    invalid = [f for f in requested if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    return requested


def _print_report(output: CaissonOutput) -> None:
    typer.echo(PanelListFormatter().format(output.result))
    typer.echo()
    typer.echo(DrillingReportFormatter().format(output.plan))
    typer.echo()
    typer.echo(FindingsFormatter().format(output.result, output.plan))
    if output.withheld:
        typer.echo()
        typer.echo(f"Geometry withheld: {', '.join(output.withheld)}", err=True)


@app.command(name="build")
def build(
    config_file: Annotated[
        Path,
        typer.Argument(help="JSON configuration file, or the name of a bundled template"),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Output directory for exported files"),
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Comma-separated export formats: dxf,csv,line-items (or 'all')",
        ),
    ] = None,
    dxf_mode: Annotated[
        str | None,
        typer.Option("--dxf-mode", help="DXF output: per_panel or combined"),
    ] = None,
    expand: Annotated[
        bool,
        typer.Option("--expand", help="One line item per physical piece"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Build a caisson: panel list, drilling and exports.

    Exits with code 1 when configuration, hardware or drilling errors are
    found. Exports are still written for everything that could be built.

    Examples:
        caissons build base-600.json
        caissons build base-600.json --format dxf,csv --output-dir out
        caissons build wall-800.json --format all --dxf-mode combined
        caissons build drawer-unit-500
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    mode = dxf_mode or config.output.dxf_mode
    if mode not in ("per_panel", "combined"):
        typer.echo(f"Error: Invalid DXF mode: {mode}", err=True)
        raise typer.Exit(code=1)

    formats = _resolve_formats(output_formats, config)
    expand_items = expand or config.output.expand_line_items

    cabinet = config_to_cabinet_config(config)
    command = BuildCaissonCommand(expand_line_items=expand_items)
    output = command.execute(cabinet, project_name=config.output.project_name)
    _print_report(output)

    if formats:
        out_dir = output_dir or Path(config.output.output_dir or ".")
        manager = ExportManager(out_dir, options={"dxf": {"mode": mode}})
        try:
            files = manager.export_all(formats, output, output.project_name)
        except (OSError, ValueError) as e:
            typer.echo(f"Export error: {e}", err=True)
            raise typer.Exit(code=1)

        typer.echo("\nExported files:")
        for fmt, paths in files.items():
            if not paths:
                typer.echo(f"  {fmt.upper()}: nothing to export")
            for path in paths:
                typer.echo(f"  {fmt.upper()}: {path}")

    if not output.is_valid:
        typer.echo(f"\nBuild finished with {output.error_count} error(s).", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
