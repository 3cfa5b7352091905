"""Validation structures and woodworking advisory checks.

This module provides the validation result structures used by the CLI and
maps the engine's collected findings onto them, adding woodworking
advisories for values that are legal but unusual.
"""

from dataclasses import dataclass, field
from typing import Any

from caissons.application.config.adapter import config_to_cabinet_config
from caissons.application.config.loader import catalog_hint
from caissons.application.config.schema import CaissonConfiguration
from caissons.domain.hardware import hinge_count_for_height
from caissons.domain.services import compute_drillings, decompose, door_layout
from caissons.domain.value_objects import BackMounting, CabinetConfig

# Standard panel thicknesses stocked by panel suppliers (mm)
STANDARD_CARCASS_THICKNESSES: frozenset[float] = frozenset({16.0, 18.0, 19.0, 22.0})
STANDARD_BACK_THICKNESSES: frozenset[float] = frozenset({3.0, 5.0, 8.0, 10.0})
STANDARD_DOOR_THICKNESSES: frozenset[float] = frozenset({16.0, 18.0, 19.0, 22.0})

# Groove depths available as standard router cutters (mm)
STANDARD_GROOVE_DEPTHS: frozenset[float] = frozenset({8.0, 10.0, 12.0, 15.0})

# Door gaps handled by standard hinge adjustment (mm)
STANDARD_DOOR_GAPS: frozenset[float] = frozenset({1.0, 1.5, 2.0, 2.5, 3.0})

MAX_RECOMMENDED_HINGES = 4


@dataclass
class ValidationError:
    """Represents a blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "cabinet.thickness.carcass")
        message: Human-readable description of the error
        value: The invalid value that caused the error
        hint: Catalog keys accepted at the path, for hardware selections
    """

    path: str
    message: str
    value: Any = None
    hint: str | None = None


@dataclass
class ValidationWarning:
    """Represents a non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: List of blocking validation errors
        warnings: List of non-blocking validation warnings
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the configuration has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        """Check if the configuration has any warnings."""
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None, hint: str | None = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(
            ValidationError(path=path, message=message, value=value, hint=hint)
        )
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def _config_path(path: str) -> str:
    """Map a domain finding path onto the configuration file layout."""
    if path.startswith("cabinet.") or path.startswith("panels."):
        return path
    return f"cabinet.{path}"


def check_woodworking_advisories(cabinet: CabinetConfig) -> ValidationResult:
    """Check a cabinet against common panel and hardware practice.

    Advisories checked:
    - Carcass, back or door thickness outside the standard board range
    - Groove depth without a standard cutter
    - Door gap outside the hinge adjustment range
    - More than four hinges on a single door

    Args:
        cabinet: Cabinet configuration

    Returns:
        ValidationResult containing any warnings found
    """
    result = ValidationResult()
    thickness = cabinet.thickness

    checks = (
        ("carcass", thickness.carcass, STANDARD_CARCASS_THICKNESSES),
        ("back", thickness.back, STANDARD_BACK_THICKNESSES),
        ("door", thickness.door, STANDARD_DOOR_THICKNESSES),
    )
    for role, value, standard in checks:
        if value not in standard:
            result.add_warning(
                path=f"cabinet.thickness.{role}",
                message=f"{value:g} mm is not a standard {role} board thickness",
                suggestion=f"Standard thicknesses: {', '.join(f'{s:g}' for s in sorted(standard))} mm",
            )

    if (
        cabinet.back.mounting is BackMounting.GROOVED
        and cabinet.back.groove_depth not in STANDARD_GROOVE_DEPTHS
    ):
        result.add_warning(
            path="cabinet.back.groove_depth",
            message=f"Groove depth of {cabinet.back.groove_depth:g} mm needs a special cutter setting",
            suggestion=(
                "Standard groove depths: "
                f"{', '.join(f'{s:g}' for s in sorted(STANDARD_GROOVE_DEPTHS))} mm"
            ),
        )

    if cabinet.has_hinged_doors and cabinet.doors.gap not in STANDARD_DOOR_GAPS:
        result.add_warning(
            path="cabinet.doors.gap",
            message=f"Door gap of {cabinet.doors.gap:g} mm is outside the usual hinge adjustment",
            suggestion="Use a gap between 1 and 3 mm",
        )

    layout = door_layout(cabinet)
    if layout is not None and layout.height > 0:
        count = hinge_count_for_height(layout.height)
        if count > MAX_RECOMMENDED_HINGES:
            result.add_warning(
                path="cabinet.doors",
                message=f"Each {layout.height:g} mm door needs {count} hinges",
                suggestion="Consider splitting the door or the cabinet height",
            )

    return result


def validate_config(config: CaissonConfiguration) -> ValidationResult:
    """Perform full validation of a caisson configuration.

    Runs decomposition and drilling on the configuration and reports their
    findings: configuration and drilling problems as errors, undersized
    panels and woodworking advisories as warnings.

    Args:
        config: A CaissonConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    cabinet = config_to_cabinet_config(config)

    decomposition = decompose(cabinet)
    for error in decomposition.errors:
        path = _config_path(error.path)
        result.add_error(path, error.message, error.value, hint=catalog_hint(path))

    # Hardware lookup errors repeat the configuration errors per panel
    plan = compute_drillings(decomposition.panels, cabinet)
    for conflict in plan.conflicts:
        result.add_error(f"panels.{conflict.panel_id}.drilling", conflict.message)

    for warning in decomposition.warnings:
        result.add_warning(_config_path(warning.path), warning.message, warning.suggestion)

    result.merge(check_woodworking_advisories(cabinet))
    return result
