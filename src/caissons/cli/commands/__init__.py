"""CLI command implementations for the caissons application.

This package contains subcommands for the caissons CLI, including:
- validate: Validate a configuration file
- templates: List bundled templates and start configurations from them
- hardware: List the hardware catalog
"""

from caissons.cli.commands.hardware import hardware_command
from caissons.cli.commands.templates import templates_app
from caissons.cli.commands.validate import (
    display_load_error,
    display_validation_result,
    validate_command,
)

__all__ = [
    "display_load_error",
    "display_validation_result",
    "hardware_command",
    "templates_app",
    "validate_command",
]
