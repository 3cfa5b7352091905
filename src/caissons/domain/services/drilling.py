"""Drilling position calculator.

Coordinates are millimetres from the bottom-left corner of each panel's
interior-face view, the view from inside the cabinet:

- left side: x = 0 at the front edge
- right side: x = 0 at the back edge
- door: seen from behind, x = 0 at the cabinet's right-hand edge, so the
  hinged edge of a left-hinged door is at x = length
- bottom: x = 0 at the cabinet's left, y = 0 at the front
- top: x = 0 at the cabinet's right, y = 0 at the front

All offsets are added from the relevant edge; nothing is computed from the
panel centre. Drawer runner holes are placed per drawer, measured up from
the bottom edge of its front.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import combinations
from types import MappingProxyType
from typing import Iterable, Mapping

from caissons.domain.findings import GeometryConflictError, HardwareLookupError
from caissons.domain.hardware import (
    FastenerSpec,
    HardwareNotFound,
    HingeSpec,
    RunnerSpec,
    hinge_count_for_height,
    lookup_fastener,
    lookup_hinge,
    lookup_runner,
    vertical_hinge_offsets,
)
from caissons.domain.value_objects import (
    CabinetConfig,
    ConflictKind,
    DoorMounting,
    DrillingPoint,
    DrillPurpose,
    FastenerKind,
    Hand,
    Panel,
    PanelRole,
    round_mm,
)

from .decomposition import (
    FASTENED_ROLES,
    DoorLayout,
    DrawerLayout,
    door_layout,
    drawer_layout,
)

logger = logging.getLogger(__name__)


# Material left between a hole and the panel edge
MIN_EDGE_CLEARANCE = 3.0
# Material left between two neighbouring holes
MIN_HOLE_CLEARANCE = 2.0


@dataclass(frozen=True)
class DrillingPlan:
    """Drilling points of every panel with per-panel findings.

    Attributes:
        points: Drilling points keyed by panel id. Every panel has an entry.
        hinge_offsets: Vertical hinge positions used for doors and their
            mating sides, in each panel's own coordinates.
        hardware_errors: Panels whose hardware could not be resolved.
        conflicts: Geometry conflicts found on the computed points.
    """

    points: Mapping[str, tuple[DrillingPoint, ...]]
    hinge_offsets: Mapping[str, tuple[float, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    hardware_errors: tuple[HardwareLookupError, ...] = ()
    conflicts: tuple[GeometryConflictError, ...] = ()

    def for_panel(self, panel_id: str) -> tuple[DrillingPoint, ...]:
        """Drilling points of one panel."""
        return self.points.get(panel_id, ())

    def conflicts_for(self, panel_id: str) -> list[GeometryConflictError]:
        """Geometry conflicts of one panel."""
        return [c for c in self.conflicts if c.panel_id == panel_id]

    def errors_for(self, panel_id: str) -> list[HardwareLookupError]:
        """Hardware lookup errors of one panel."""
        return [e for e in self.hardware_errors if e.panel_id == panel_id]

    @property
    def conflicted_panel_ids(self) -> frozenset[str]:
        """Panels whose geometry must be withheld."""
        return frozenset(c.panel_id for c in self.conflicts)

    @property
    def hole_count(self) -> int:
        """Holes per set of panel entries (quantities not applied)."""
        return sum(len(points) for points in self.points.values())


def _lookup_error(panel: Panel, config: CabinetConfig, message: str) -> HardwareLookupError:
    selection = config.hinge
    return HardwareLookupError(
        panel_id=panel.id,
        message=message,
        family=selection.family,
        angle=selection.angle,
        mounting_plate=selection.mounting_plate,
    )


def _door_points(panel: Panel, hinge: HingeSpec, offsets: tuple[float, ...]) -> list[DrillingPoint]:
    # Hinged edge and the direction pointing away from it
    if panel.hand is Hand.RIGHT:
        edge_x, away = 0.0, 1.0
    else:
        edge_x, away = panel.length, -1.0

    cup_x = edge_x + away * hinge.cup_edge_offset
    points: list[DrillingPoint] = []
    for y in offsets:
        points.append(
            DrillingPoint(
                panel_id=panel.id,
                x=round_mm(cup_x),
                y=round_mm(y),
                diameter=hinge.cup_diameter,
                depth=hinge.cup_depth,
                purpose=DrillPurpose.HINGE_CUP,
                label="cup",
            )
        )
        for hole in hinge.door_holes:
            points.append(
                DrillingPoint(
                    panel_id=panel.id,
                    x=round_mm(edge_x + away * (hinge.cup_edge_offset + hole.dx)),
                    y=round_mm(y + hole.dy),
                    diameter=hole.diameter,
                    depth=hole.depth,
                    purpose=DrillPurpose.HINGE_CUP,
                    label=hole.label,
                )
            )
    return points


def _front_x(panel: Panel, distance: float) -> float:
    """X of a line at ``distance`` from the front edge of a side panel."""
    if panel.hand is Hand.RIGHT:
        return panel.length - distance
    return distance


def _plate_points(
    panel: Panel,
    hinge: HingeSpec,
    offsets: tuple[float, ...],
    line_from_front: float,
) -> list[DrillingPoint]:
    plate = hinge.mounting_plate
    if plate is None:
        return []
    points: list[DrillingPoint] = []
    for y in offsets:
        for hole in plate.holes:
            points.append(
                DrillingPoint(
                    panel_id=panel.id,
                    x=round_mm(_front_x(panel, line_from_front + hole.dx)),
                    y=round_mm(y + hole.dy),
                    diameter=hole.diameter,
                    depth=hole.depth,
                    purpose=DrillPurpose.MOUNTING_PLATE,
                    label=hole.label,
                )
            )
    return points


def _shelf_pin_points(
    panel: Panel, spec: FastenerSpec, carcass: float
) -> list[DrillingPoint]:
    pitch = spec.pitch or 0.0
    if pitch <= 0:
        return []
    first = carcass + spec.edge_offset
    last = panel.width - carcass - spec.edge_offset
    rows_y: list[float] = []
    y = first
    while y <= last + 1e-9:
        rows_y.append(round_mm(y))
        y += pitch

    points: list[DrillingPoint] = []
    for x in (spec.edge_offset, panel.length - spec.edge_offset):
        for row_y in rows_y:
            points.append(
                DrillingPoint(
                    panel_id=panel.id,
                    x=round_mm(x),
                    y=row_y,
                    diameter=spec.hole.diameter,
                    depth=spec.hole.depth,
                    purpose=DrillPurpose.SHELF_PIN,
                    label=spec.hole.label,
                )
            )
    return points


def _side_fastener_points(
    panel: Panel, spec: FastenerSpec, carcass: float
) -> list[DrillingPoint]:
    hole = spec.hole
    depth = panel.thickness if hole.through else hole.depth
    points: list[DrillingPoint] = []
    for y in (carcass / 2, panel.width - carcass / 2):
        for x in (spec.edge_offset, panel.length - spec.edge_offset):
            points.append(
                DrillingPoint(
                    panel_id=panel.id,
                    x=round_mm(x),
                    y=round_mm(y),
                    diameter=hole.diameter,
                    depth=depth,
                    purpose=DrillPurpose.FASTENER,
                    label=hole.label,
                    through=hole.through,
                )
            )
    return points


def _housing_points(panel: Panel, spec: FastenerSpec) -> list[DrillingPoint]:
    housing = spec.housing
    if housing is None or spec.housing_end_offset is None:
        return []
    points: list[DrillingPoint] = []
    for x in (spec.housing_end_offset, panel.length - spec.housing_end_offset):
        for y in (spec.edge_offset, panel.width - spec.edge_offset):
            points.append(
                DrillingPoint(
                    panel_id=panel.id,
                    x=round_mm(x),
                    y=round_mm(y),
                    diameter=housing.diameter,
                    depth=housing.depth,
                    purpose=DrillPurpose.FASTENER,
                    label=housing.label,
                )
            )
    return points


def _runner_points(
    panel: Panel, runner: RunnerSpec, drawers: DrawerLayout, inset_shift: float
) -> list[DrillingPoint]:
    """Runner holes for every drawer, measured up from each front's bottom edge.

    Nothing is drilled when no catalog length fits the drawer box; the
    decomposition reports such boxes as too shallow.
    """
    length = runner.length_for(drawers.box_length)
    if length is None:
        return []
    front_x = runner.line_from_front_edge + inset_shift
    rear_x = runner.rear_hole_x(length) + inset_shift

    points: list[DrillingPoint] = []
    for bottom in drawers.bottom_offsets:
        placed = [(front_x, hole) for hole in runner.front_holes]
        placed.append((rear_x, runner.rear_hole))
        for x, hole in placed:
            points.append(
                DrillingPoint(
                    panel_id=panel.id,
                    x=round_mm(_front_x(panel, x + hole.dx)),
                    y=round_mm(bottom + hole.dy),
                    diameter=hole.diameter,
                    depth=hole.depth,
                    purpose=DrillPurpose.DRAWER_RUNNER,
                    label=hole.label,
                )
            )
    return points


def _fastener_error(panel: Panel, config: CabinetConfig, message: str) -> HardwareLookupError:
    kind = config.fastener
    return HardwareLookupError(
        panel_id=panel.id,
        message=message,
        family=getattr(kind, "value", str(kind)),
    )


def validate_drillings(
    panel: Panel, points: Iterable[DrillingPoint]
) -> list[GeometryConflictError]:
    """Check drilling points against the panel bounds and each other.

    Args:
        panel: Panel the points belong to.
        points: Points to check.

    Returns:
        One conflict per offending point or pair; empty when machinable.

    Raises:
        ValueError: If a point belongs to another panel.
    """
    points = list(points)
    conflicts: list[GeometryConflictError] = []
    low = MIN_EDGE_CLEARANCE
    for point in points:
        if point.panel_id != panel.id:
            raise ValueError(
                f"Drilling point for '{point.panel_id}' checked against panel '{panel.id}'"
            )
        r = point.radius
        if (
            point.x - r < low
            or point.x + r > panel.length - low
            or point.y - r < low
            or point.y + r > panel.width - low
        ):
            conflicts.append(
                GeometryConflictError(
                    panel_id=panel.id,
                    kind=ConflictKind.OUT_OF_BOUNDS,
                    message=(
                        f"{point.label or point.purpose.value} Ø{point.diameter:g} at "
                        f"({point.x:g}, {point.y:g}) is within {low:g} mm of the edge of "
                        f"a {panel.length:g} x {panel.width:g} panel"
                    ),
                    points=(point,),
                )
            )
        if not point.through and point.depth >= panel.thickness:
            conflicts.append(
                GeometryConflictError(
                    panel_id=panel.id,
                    kind=ConflictKind.TOO_DEEP,
                    message=(
                        f"Blind hole {point.depth:g} mm deep at ({point.x:g}, {point.y:g}) "
                        f"in a {panel.thickness:g} mm panel"
                    ),
                    points=(point,),
                )
            )

    for first, second in combinations(points, 2):
        minimum = (first.diameter + second.diameter) / 2 + MIN_HOLE_CLEARANCE
        distance = first.distance_to(second)
        if distance < minimum:
            conflicts.append(
                GeometryConflictError(
                    panel_id=panel.id,
                    kind=ConflictKind.OVERLAP,
                    message=(
                        f"{first.purpose.value} at ({first.x:g}, {first.y:g}) and "
                        f"{second.purpose.value} at ({second.x:g}, {second.y:g}) are "
                        f"{distance:.1f} mm apart (minimum {minimum:g} mm)"
                    ),
                    points=(first, second),
                )
            )
    return conflicts


def compute_drillings(panels: Iterable[Panel], config: CabinetConfig) -> DrillingPlan:
    """Compute the drilling points of every panel.

    Unknown hardware is reported per affected panel and drilling continues
    for everything else. Conflicting points are reported, never clipped.

    Args:
        panels: Panels from decomposition.
        config: Configuration the panels were built from.

    Returns:
        DrillingPlan with an entry for every panel.
    """
    panels = list(panels)
    points: dict[str, list[DrillingPoint]] = {panel.id: [] for panel in panels}
    hinge_offsets: dict[str, tuple[float, ...]] = {}
    hardware_errors: list[HardwareLookupError] = []
    carcass = config.thickness.carcass

    layout: DoorLayout | None = door_layout(config)
    hinge: HingeSpec | HardwareNotFound | None = None
    if layout is not None:
        selection = config.hinge
        hinge = lookup_hinge(selection.family, selection.angle, selection.mounting_plate)

    # Doors first: their hinge offsets drive the mating sides
    door_offsets: dict[Hand, tuple[float, ...]] = {}
    for panel in panels:
        if panel.role is not PanelRole.DOOR:
            continue
        if hinge is None or isinstance(hinge, HardwareNotFound):
            message = hinge.message if hinge is not None else "Door without a hinge selection"
            hardware_errors.append(_lookup_error(panel, config, message))
            continue
        height = panel.width
        if not hinge.min_door_height <= height <= hinge.max_door_height:
            hardware_errors.append(
                _lookup_error(
                    panel,
                    config,
                    f"No {hinge.reference} layout for a {height:g} mm door",
                )
            )
            continue
        offsets = vertical_hinge_offsets(height, hinge_count_for_height(height))
        hinge_offsets[panel.id] = offsets
        points[panel.id].extend(_door_points(panel, hinge, offsets))
        if panel.hand is not None:
            door_offsets[panel.hand] = offsets

    shelf_pin = lookup_fastener(FastenerKind.SHELF_PIN) if config.shelves.pins else None
    fastener = lookup_fastener(config.fastener) if config.fastener is not None else None
    if isinstance(fastener, HardwareNotFound):
        for panel in panels:
            if panel.role in FASTENED_ROLES:
                hardware_errors.append(
                    _fastener_error(panel, config, fastener.message)
                )

    drawers = drawer_layout(config)
    runner = lookup_runner(config.drawers.runner) if drawers is not None else None
    inset_shift = (
        config.thickness.door if config.doors.mounting is DoorMounting.INSET else 0.0
    )

    for panel in panels:
        if panel.role is PanelRole.SIDE:
            if layout is not None and panel.hand in layout.hands:
                if isinstance(hinge, HingeSpec) and panel.hand in door_offsets:
                    line = (
                        hinge.mounting_plate.line_from_front_edge
                        if hinge.mounting_plate
                        else 0.0
                    )
                    offsets = tuple(
                        round_mm(layout.bottom_offset + y) for y in door_offsets[panel.hand]
                    )
                    hinge_offsets[panel.id] = offsets
                    points[panel.id].extend(
                        _plate_points(panel, hinge, offsets, line + inset_shift)
                    )
                else:
                    message = (
                        hinge.message
                        if isinstance(hinge, HardwareNotFound)
                        else "Mating door has no hinge layout"
                    )
                    hardware_errors.append(_lookup_error(panel, config, message))

            if isinstance(shelf_pin, FastenerSpec):
                points[panel.id].extend(_shelf_pin_points(panel, shelf_pin, carcass))
            if isinstance(fastener, FastenerSpec):
                points[panel.id].extend(_side_fastener_points(panel, fastener, carcass))
            if drawers is not None:
                if isinstance(runner, RunnerSpec):
                    points[panel.id].extend(
                        _runner_points(panel, runner, drawers, inset_shift)
                    )
                elif isinstance(runner, HardwareNotFound):
                    hardware_errors.append(
                        HardwareLookupError(
                            panel_id=panel.id,
                            message=runner.message,
                            family=config.drawers.runner,
                        )
                    )
        elif panel.role in (PanelRole.TOP, PanelRole.BOTTOM) and isinstance(
            fastener, FastenerSpec
        ):
            points[panel.id].extend(_housing_points(panel, fastener))

    conflicts: list[GeometryConflictError] = []
    for panel in panels:
        conflicts.extend(validate_drillings(panel, points[panel.id]))

    logger.debug(
        f"Computed {sum(len(p) for p in points.values())} drilling points on "
        f"{len(panels)} panels, {len(conflicts)} conflicts, "
        f"{len(hardware_errors)} hardware errors"
    )
    return DrillingPlan(
        points=MappingProxyType({pid: tuple(pts) for pid, pts in points.items()}),
        hinge_offsets=MappingProxyType(hinge_offsets),
        hardware_errors=tuple(hardware_errors),
        conflicts=tuple(conflicts),
    )
