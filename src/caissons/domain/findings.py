"""Structured findings reported by the engine.

Findings are collected and returned alongside a best-effort result. They are
plain records, never raised, so a caller can display every problem at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .value_objects import ConflictKind, DrillingPoint


@dataclass(frozen=True)
class ConfigValidationError:
    """Out-of-range or unresolvable configuration value.

    Attributes:
        path: Dotted path to the offending field (e.g. "thickness.door").
        message: Human-readable description.
        value: The offending value.
    """

    path: str
    message: str
    value: Any = None


@dataclass(frozen=True)
class HardwareLookupError:
    """Hardware combination missing from the specification library.

    Scoped to one panel; every other panel still computes normally.
    """

    panel_id: str
    message: str
    family: str | None = None
    angle: Any = None
    mounting_plate: Any = None


@dataclass(frozen=True)
class GeometryConflictError:
    """Drilling points that cannot be machined as computed.

    Attributes:
        panel_id: Panel whose geometry is withheld.
        kind: Out of bounds, overlapping holes or a blind hole too deep.
        message: Human-readable description.
        points: The drilling points involved.
    """

    panel_id: str
    kind: ConflictKind
    message: str
    points: tuple[DrillingPoint, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DecompositionWarning:
    """Non-blocking concern about a panel or the configuration."""

    path: str
    message: str
    panel_id: str | None = None
    suggestion: str | None = None


def unique_hardware_errors(
    *groups: Iterable[HardwareLookupError],
) -> list[HardwareLookupError]:
    """Merge hardware errors, keeping the first of each (panel, message) pair.

    Decomposition and drilling both flag the panels an unresolved fitting
    touches, so the same problem arrives twice.
    """
    seen: set[tuple[str, str]] = set()
    unique: list[HardwareLookupError] = []
    for group in groups:
        for error in group:
            key = (error.panel_id, error.message)
            if key not in seen:
                seen.add(key)
                unique.append(error)
    return unique
