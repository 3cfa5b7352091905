"""Hardware command listing the hinge, plate and runner catalog."""

import typer

from caissons.infrastructure import HardwareCatalogFormatter


def hardware_command() -> None:
    """List catalog hinges, mounting plates and drawer runners.

    Example:
        caissons hardware
    """
    typer.echo(HardwareCatalogFormatter().format())
