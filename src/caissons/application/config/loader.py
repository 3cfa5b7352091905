"""Configuration loading from files and bundled templates.

A configuration reference is either a path to a JSON file or, when no such
file exists, the name of a bundled template ("base-600"). Every failure is
raised as ``ConfigError`` whose details share one shape: ``path``,
``message`` and, where they help, ``value`` and a catalog ``hint``.
"""

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from caissons.application.config.schema import CaissonConfiguration
from caissons.domain.hardware import (
    FASTENERS,
    MOUNTING_PLATES,
    RUNNERS,
    available_hinges,
)
from caissons.domain.value_objects import FastenerKind

logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "caissons.application.templates.data"


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the configuration file (if applicable)
        details: One record per problem, each with "path" and "message"
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _catalog_choices() -> dict[str, tuple[str, list[str]]]:
    angles: dict[str, list[str]] = {}
    for hinge in available_hinges():
        angles.setdefault(hinge.family, []).append(str(hinge.angle.value))
    return {
        "cabinet.hinge": (
            "hinges",
            [f"{family} {'/'.join(values)}" for family, values in angles.items()],
        ),
        "cabinet.hinge.family": ("hinge families", list(angles)),
        "cabinet.hinge.mounting_plate": (
            "mounting plates",
            [plate.value for plate in MOUNTING_PLATES],
        ),
        "cabinet.drawers.runner": ("drawer runners", list(RUNNERS)),
        "cabinet.fastener": (
            "fasteners",
            [kind.value for kind in FASTENERS if kind is not FastenerKind.SHELF_PIN],
        ),
    }


def catalog_hint(path: str) -> str | None:
    """Hardware catalog keys accepted at a configuration path.

    Args:
        path: JSON path of a configuration value (e.g. "cabinet.drawers.runner").

    Returns:
        A display hint listing the known keys, or None for paths that do not
        name catalog hardware.
    """
    choices = _catalog_choices().get(path)
    if choices is None:
        return None
    label, keys = choices
    return f"Known {label}: {', '.join(keys)}"


def bundled_template_names() -> list[str]:
    """Names of the templates shipped with the package, sorted."""
    files = resources.files(TEMPLATE_PACKAGE)
    return sorted(
        entry.name.removesuffix(".json")
        for entry in files.iterdir()
        if entry.name.endswith(".json")
    )


def read_bundled_template(name: str) -> str | None:
    """JSON text of a bundled template, or None when there is none by that name."""
    resource = resources.files(TEMPLATE_PACKAGE).joinpath(f"{name}.json")
    if not resource.is_file():
        return None
    return resource.read_text(encoding="utf-8")


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("cabinet", "width"))
        'cabinet.width'
        >>> _format_json_path(("output", "formats", 0))
        'output.formats[0]'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    details: list[dict[str, Any]] = []
    for err in error.errors():
        path = _format_json_path(err["loc"])
        detail = {
            "path": path,
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        hint = catalog_hint(path)
        if hint:
            detail["hint"] = hint
        details.append(detail)
    return details


def _validate(data: Any, path: Path | None = None) -> CaissonConfiguration:
    try:
        return CaissonConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        lines = ["Configuration validation failed:"]
        for detail in details:
            value = detail["value"]
            suffix = f" (got: {value!r})" if value is not None and not isinstance(value, dict) else ""
            lines.append(f"  - {detail['path']}: {detail['message']}{suffix}")
            if "hint" in detail:
                lines.append(f"    {detail['hint']}")
        raise ConfigError(
            message="\n".join(lines),
            error_type="validation",
            path=path,
            details=details,
        )


def _parse(content: str, path: Path) -> CaissonConfiguration:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in config file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[
                {
                    "path": f"line {e.lineno}, column {e.colno}",
                    "message": e.msg,
                    "line": e.lineno,
                    "column": e.colno,
                }
            ],
        )
    return _validate(data, path)


def _template_for(path: Path) -> str | None:
    # Only bare names ("base-600" or "base-600.json") can refer to a template
    if path.parent != Path("."):
        return None
    return read_bundled_template(path.name.removesuffix(".json"))


def load_config(source: Path | str) -> CaissonConfiguration:
    """Load and validate a caisson configuration.

    Args:
        source: Path to a JSON configuration file, or the name of a bundled
            template when no file of that name exists.

    Returns:
        A validated CaissonConfiguration instance

    Raises:
        ConfigError: If the file cannot be loaded or validated.
            The error_type attribute indicates the specific error category:
            - "file_not_found": No such file and no such template
            - "json_parse": Invalid JSON syntax
            - "validation": Schema validation failed

    Example:
        >>> config = load_config("drawer-unit-500")
        >>> config.cabinet.drawers.count
        3
    """
    path = Path(source)
    if not path.exists():
        template = _template_for(path)
        if template is None:
            raise ConfigError(
                message=f"Config file not found: {path}",
                error_type="file_not_found",
                path=path,
                details=[
                    {
                        "path": str(path),
                        "message": "File not found",
                        "hint": f"Bundled templates: {', '.join(bundled_template_names())}",
                    }
                ],
            )
        logger.info(f"No file '{path}', using the bundled template")
        return _parse(template, path)

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
            details=[{"path": str(path), "message": "Permission denied"}],
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
            details=[{"path": str(path), "message": str(e)}],
        )

    config = _parse(content, path)
    logger.debug(f"Loaded configuration '{config.cabinet.name}' from {path}")
    return config


def load_config_from_dict(data: dict[str, Any]) -> CaissonConfiguration:
    """Load and validate a caisson configuration from a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)
