"""Hardware specification records.

Every record is frozen. Hole offsets are millimetres relative to the
fitting's reference point (cup centre, plate centre or fastener axis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from caissons.domain.value_objects import FastenerKind, HingeAngle, MountingPlateType


@dataclass(frozen=True)
class HoleSpec:
    """One hole of a fitting's drilling pattern.

    Attributes:
        diameter: Hole diameter.
        depth: Boring depth. Ignored for through holes.
        label: Short description of the hole.
        dx: Offset away from the reference edge.
        dy: Vertical offset from the reference point.
        through: True when the hole goes through the panel.
    """

    diameter: float
    depth: float
    label: str
    dx: float = 0.0
    dy: float = 0.0
    through: bool = False

    def __post_init__(self) -> None:
        if self.diameter <= 0:
            raise ValueError("Hole diameter must be positive")
        if self.depth <= 0 and not self.through:
            raise ValueError("Blind holes need a positive depth")


@dataclass(frozen=True)
class MountingPlateSpec:
    """Mounting plate (embase) screwed to the side panel.

    Attributes:
        plate_type: Catalog key.
        reference: Manufacturer article number.
        name: Display name.
        line_from_front_edge: Distance from the side's front edge to the
            plate's hole line.
        height_adjustment: Built-in vertical adjustment of the plate.
        holes: Pattern around the plate centre (dy along the hole line).
    """

    plate_type: MountingPlateType
    reference: str
    name: str
    line_from_front_edge: float
    height_adjustment: float
    holes: tuple[HoleSpec, ...]


@dataclass(frozen=True)
class HingeSpec:
    """Concealed hinge with its door-side drilling pattern.

    Attributes:
        reference: Manufacturer article number.
        name: Display name.
        manufacturer: Brand.
        family: Family key used for lookups.
        angle: Opening angle.
        cup_diameter: Cup boring diameter.
        cup_depth: Cup boring depth.
        cup_edge_offset: Distance from the hinged door edge to the cup centre.
        min_door_height: Shortest door the hinge layout supports.
        max_door_height: Tallest door the hinge layout supports.
        min_door_thickness: Thinnest door accepted.
        max_door_thickness: Thickest door accepted.
        min_cabinet_depth: Shallowest carcass the arm fits in.
        door_holes: Extra door holes around the cup (dx away from the
            hinged edge).
        mounting_plate: Plate resolved by ``lookup_hinge``; None in the
            raw catalog rows.
    """

    reference: str
    name: str
    manufacturer: str
    family: str
    angle: HingeAngle
    cup_diameter: float
    cup_depth: float
    cup_edge_offset: float
    min_door_height: float
    max_door_height: float
    min_door_thickness: float
    max_door_thickness: float
    min_cabinet_depth: float
    door_holes: tuple[HoleSpec, ...] = ()
    mounting_plate: MountingPlateSpec | None = None


@dataclass(frozen=True)
class FastenerSpec:
    """Knock-down fastener or shelf support with a face drilling pattern.

    Attributes:
        kind: Catalog key.
        name: Display name.
        hole: Hole bored in the side panel face.
        edge_offset: Distance from the panel's front/back edges to the hole.
        pitch: Grid pitch for repeated holes (shelf pins).
        housing: Cam housing bored in the horizontal panel (Minifix).
        housing_end_offset: Distance from the horizontal panel's end to the
            housing centre.
        min_panel_thickness: Thinnest panel accepted.
        max_panel_thickness: Thickest panel accepted.
    """

    kind: FastenerKind
    name: str
    hole: HoleSpec
    edge_offset: float
    pitch: float | None = None
    housing: HoleSpec | None = None
    housing_end_offset: float | None = None
    min_panel_thickness: float = 16.0
    max_panel_thickness: float = 25.0


@dataclass(frozen=True)
class RunnerSpec:
    """Drawer runner screwed to the side panels on the 32 mm system line.

    Attributes:
        family: Family key used for lookups.
        reference: Manufacturer series reference.
        name: Display name.
        manufacturer: Brand.
        lengths: Nominal runner lengths on sale, ascending.
        line_from_front_edge: Distance from the side's front edge to the
            front hole line.
        front_holes: Holes on the front line (dy above the drawer opening).
        rear_hole: Rear mounting hole (dy above the drawer opening).
        rear_hole_from_end: Distance from the runner's rear end back to the
            rear hole line.
        min_panel_thickness: Thinnest side panel accepted.
        max_panel_thickness: Thickest side panel accepted.
    """

    family: str
    reference: str
    name: str
    manufacturer: str
    lengths: tuple[float, ...]
    line_from_front_edge: float
    front_holes: tuple[HoleSpec, ...]
    rear_hole: HoleSpec
    rear_hole_from_end: float
    min_panel_thickness: float = 16.0
    max_panel_thickness: float = 19.0

    def length_for(self, box_length: float) -> float | None:
        """Longest nominal length that fits a drawer box, or None."""
        fitting = [length for length in self.lengths if length <= box_length]
        return fitting[-1] if fitting else None

    def rear_hole_x(self, length: float) -> float:
        """Rear hole distance from the side's front edge for a runner length."""
        return self.line_from_front_edge + length - self.rear_hole_from_end


@dataclass(frozen=True)
class HardwareNotFound:
    """Typed "not found" result of a failed hardware lookup.

    Attributes:
        kind: Table that was searched ("hinge", "mounting_plate",
            "fastener", "runner").
        key: The key that was looked up.
        message: Human-readable reason.
    """

    kind: str
    key: tuple[Any, ...] = field(default_factory=tuple)
    message: str = ""
