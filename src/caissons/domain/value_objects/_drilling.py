"""Drilling point value object."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ._enums import DrillPurpose


@dataclass(frozen=True)
class DrillingPoint:
    """A single hole bored into the interior face of a panel.

    Coordinates are millimetres from the bottom-left corner of the panel's
    interior-face view. Bounds are not enforced here; points outside the
    panel are reported as geometry conflicts by the drilling validator.

    Attributes:
        panel_id: Id of the panel the hole belongs to.
        x: Horizontal position of the hole centre.
        y: Vertical position of the hole centre.
        diameter: Hole diameter.
        depth: Boring depth.
        purpose: What the hole is for; selects the CAD layer.
        label: Short description (e.g. "cup", "pilot", "bolt").
        through: True for holes bored through the whole panel.
    """

    panel_id: str
    x: float
    y: float
    diameter: float
    depth: float
    purpose: DrillPurpose
    label: str = ""
    through: bool = False

    def __post_init__(self) -> None:
        if self.diameter <= 0:
            raise ValueError("Hole diameter must be positive")
        if self.depth <= 0:
            raise ValueError("Hole depth must be positive")

    @property
    def radius(self) -> float:
        return self.diameter / 2

    def distance_to(self, other: "DrillingPoint") -> float:
        """Centre-to-centre distance in millimetres."""
        return math.hypot(self.x - other.x, self.y - other.y)
