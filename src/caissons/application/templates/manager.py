"""Bundled caisson templates.

Templates are JSON configurations shipped in the ``data`` package. They are
discovered from the package contents, described from their own cabinet
settings and can be renamed or resized before being written out. A
template is only written once the engine accepts it.
"""

import json
import logging
from pathlib import Path
from typing import Any

from caissons.application.config import (
    CaissonConfiguration,
    ValidationResult,
    bundled_template_names,
    config_to_cabinet_config,
    load_config_from_dict,
    read_bundled_template,
    validate_config,
)
from caissons.domain.value_objects import CabinetConfig

logger = logging.getLogger(__name__)


class TemplateNotFoundError(Exception):
    """Raised when a requested template does not exist."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        message = f"Template not found: {name}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class TemplateRejectedError(Exception):
    """Raised when a customized template fails engine validation.

    Attributes:
        name: Template name.
        result: The validation result with its errors.
    """

    def __init__(self, name: str, result: ValidationResult) -> None:
        self.name = name
        self.result = result
        super().__init__(
            f"Template '{name}' does not validate: {len(result.errors)} error(s)"
        )


def _plural(count: int, word: str, plural: str | None = None) -> str:
    return f"{count} {word if count == 1 else plural or word + 's'}"


def describe_cabinet(cabinet: CabinetConfig) -> str:
    """One-line summary of a cabinet's family, size and contents.

    Example:
        "base 600 x 720 x 560 mm, 1 overlay door, 1 shelf on pins, minifix joints"
    """
    parts = [
        f"{cabinet.family.value.replace('_', ' ')} "
        f"{cabinet.width:g} x {cabinet.height:g} x {cabinet.depth:g} mm"
    ]
    if cabinet.drawers.count:
        parts.append(
            f"{_plural(cabinet.drawers.count, 'drawer')} on {cabinet.drawers.runner} runners"
        )
    elif cabinet.doors.count:
        parts.append(
            _plural(cabinet.doors.count, f"{cabinet.doors.mounting.value} door")
        )
    else:
        parts.append("open")
    if cabinet.shelves.count:
        shelves = _plural(cabinet.shelves.count, "shelf", "shelves")
        parts.append(f"{shelves} on pins" if cabinet.shelves.pins else shelves)
    if cabinet.fastener is not None:
        parts.append(f"{cabinet.fastener.value} joints")
    return ", ".join(parts)


class TemplateManager:
    """Manager for bundled caisson templates.

    Example:
        manager = TemplateManager()
        for name, description in manager.list_templates():
            print(f"{name}: {description}")

        manager.init_template("base-600", Path("kitchen-base.json"), width=800)
    """

    def list_templates(self) -> list[tuple[str, str]]:
        """List templates as (name, description) tuples, sorted by name."""
        return [
            (name, describe_cabinet(config_to_cabinet_config(self.load_template(name))))
            for name in bundled_template_names()
        ]

    def template_exists(self, name: str) -> bool:
        """Check if a template with the given name exists."""
        return name in bundled_template_names()

    def get_template(self, name: str) -> str:
        """Get the JSON content of a template.

        Raises:
            TemplateNotFoundError: If the template does not exist.
        """
        content = read_bundled_template(name)
        if content is None:
            raise TemplateNotFoundError(name, bundled_template_names())
        return content

    def load_template(self, name: str) -> CaissonConfiguration:
        """Parse and validate a template.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            ConfigError: If the template fails schema validation.
        """
        return load_config_from_dict(json.loads(self.get_template(name)))

    def customize(
        self,
        name: str,
        cabinet_name: str | None = None,
        width: float | None = None,
        height: float | None = None,
        depth: float | None = None,
    ) -> tuple[dict[str, Any], ValidationResult]:
        """Apply overrides to a template and run the full validation.

        Args:
            name: Template name.
            cabinet_name: New cabinet name.
            width: New external width.
            height: New external height.
            depth: New external depth.

        Returns:
            The overridden template data and its validation result (warnings
            included).

        Raises:
            TemplateNotFoundError: If the template does not exist.
            ConfigError: If the overrides break the schema.
            TemplateRejectedError: If the engine reports errors.
        """
        data = json.loads(self.get_template(name))
        overrides = {"name": cabinet_name, "width": width, "height": height, "depth": depth}
        data["cabinet"].update({k: v for k, v in overrides.items() if v is not None})

        result = validate_config(load_config_from_dict(data))
        if not result.is_valid:
            raise TemplateRejectedError(name, result)
        return data, result

    def init_template(
        self,
        name: str,
        output_path: Path,
        force: bool = False,
        **overrides: Any,
    ) -> ValidationResult:
        """Write a validated template to a file.

        Without overrides the template text is copied unchanged.

        Args:
            name: Template name.
            output_path: Destination file.
            force: Overwrite an existing file.
            **overrides: ``cabinet_name``, ``width``, ``height`` or ``depth``
                passed to ``customize``.

        Returns:
            The validation result of the written configuration.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            FileExistsError: If the output file exists and force is False.
            ConfigError: If the overrides break the schema.
            TemplateRejectedError: If the engine reports errors.
        """
        if output_path.exists() and not force:
            raise FileExistsError(str(output_path))

        data, result = self.customize(name, **overrides)
        if any(value is not None for value in overrides.values()):
            content = json.dumps(data, indent=2) + "\n"
        else:
            content = self.get_template(name)
        output_path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote template '{name}' to {output_path}")
        return result
