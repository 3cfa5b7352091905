"""Cabinet decomposition engine.

Turns a ``CabinetConfig`` into the list of flat panels needed to build the
cabinet. Panel dimensions follow each panel's interior-face view: ``length``
is the horizontal extent of that view and ``width`` the vertical one. For a
side that is depth x height, for a door width x height, for the top and
bottom width x depth.

Configuration problems are collected, never raised. Decomposition proceeds
best-effort: a role whose computed size is not positive is skipped with an
error, and panels whose hinge, runner or fastener cannot be resolved are
flagged with a ``HardwareLookupError``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

from caissons.domain.findings import (
    ConfigValidationError,
    DecompositionWarning,
    HardwareLookupError,
)
from caissons.domain.hardware import (
    HardwareNotFound,
    hinge_count_for_height,
    lookup_fastener,
    lookup_hinge,
    lookup_runner,
)
from caissons.domain.hardware.catalog import MAX_DOOR_HEIGHT, MIN_DOOR_HEIGHT
from caissons.domain.value_objects import (
    AssemblyStyle,
    BackMounting,
    CabinetConfig,
    CabinetFamily,
    DoorMounting,
    EdgeBanding,
    Hand,
    InteriorDimensions,
    Panel,
    PanelRole,
    round_mm,
)

from .validation import MAX_DOORS, validate_cabinet_config

logger = logging.getLogger(__name__)


# Shelves leave 1 mm play on each side and sit back from the front edge
SHELF_SIDE_CLEARANCE = 1.0
SHELF_FRONT_SETBACK = 20.0

# Drawer boxes for full-extension runners
DRAWER_WIDTH_REDUCTION = 42.0
DRAWER_REAR_CLEARANCE = 10.0
DRAWER_LENGTH_STEP = 50.0
MIN_DRAWER_LENGTH = 250.0
DRAWER_HEIGHT_REDUCTION = 40.0

# Panels drilled for the carcass fastener
FASTENED_ROLES = frozenset({PanelRole.SIDE, PanelRole.TOP, PanelRole.BOTTOM})

# Top and bottom are housed in rebates of this fraction of the carcass thickness
REBATE_DEPTH_RATIO = 0.5


_FRONT_ON_LENGTH = EdgeBanding(length_edges=1)
_FRONT_ON_WIDTH = EdgeBanding(width_edges=1)
_ALL = EdgeBanding.all_edges()
_NONE = EdgeBanding.none()

# Banded edges per family and role. Roles absent from a family are unbanded.
EDGE_BANDING_POLICY: Mapping[CabinetFamily, Mapping[PanelRole, EdgeBanding]] = (
    MappingProxyType(
        {
            CabinetFamily.BASE: MappingProxyType(
                {
                    PanelRole.SIDE: _FRONT_ON_WIDTH,
                    PanelRole.TOP: _NONE,  # hidden under the worktop
                    PanelRole.BOTTOM: _FRONT_ON_LENGTH,
                    PanelRole.BACK: _NONE,
                    PanelRole.SHELF: _FRONT_ON_LENGTH,
                    PanelRole.DOOR: _ALL,
                }
            ),
            CabinetFamily.WALL: MappingProxyType(
                {
                    # front edge plus the bottom edge seen from below
                    PanelRole.SIDE: EdgeBanding(length_edges=1, width_edges=1),
                    PanelRole.TOP: _FRONT_ON_LENGTH,
                    PanelRole.BOTTOM: _FRONT_ON_LENGTH,
                    PanelRole.BACK: _NONE,
                    PanelRole.SHELF: _FRONT_ON_LENGTH,
                    PanelRole.DOOR: _ALL,
                }
            ),
            CabinetFamily.COLUMN: MappingProxyType(
                {
                    PanelRole.SIDE: _FRONT_ON_WIDTH,
                    PanelRole.TOP: _FRONT_ON_LENGTH,
                    PanelRole.BOTTOM: _FRONT_ON_LENGTH,
                    PanelRole.BACK: _NONE,
                    PanelRole.SHELF: _FRONT_ON_LENGTH,
                    PanelRole.DOOR: _ALL,
                }
            ),
            CabinetFamily.DRAWER_UNIT: MappingProxyType(
                {
                    PanelRole.SIDE: _FRONT_ON_WIDTH,
                    PanelRole.TOP: _NONE,
                    PanelRole.BOTTOM: _FRONT_ON_LENGTH,
                    PanelRole.BACK: _NONE,
                    PanelRole.SHELF: _FRONT_ON_LENGTH,
                    PanelRole.DRAWER_FRONT: _ALL,
                    PanelRole.DRAWER_SIDE: _FRONT_ON_LENGTH,  # top edge
                    PanelRole.DRAWER_BACK: _NONE,
                    PanelRole.DRAWER_BOTTOM: _NONE,
                }
            ),
        }
    )
)


def edge_banding_for(family: CabinetFamily, role: PanelRole) -> EdgeBanding:
    """Banding policy of a role within a cabinet family."""
    return EDGE_BANDING_POLICY[family].get(role, _NONE)


def default_groove_offset(back_thickness: float) -> float:
    """Standard distance from the rear edge to the back panel groove."""
    if back_thickness <= 3:
        return 10.0
    if back_thickness <= 5:
        return 12.0
    return 15.0


def carcass_depth(config: CabinetConfig) -> float:
    """Depth of sides, top and bottom.

    An applied back is screwed onto the rear edges and counts in the
    external depth.
    """
    if config.back.mounting is BackMounting.APPLIED:
        return config.depth - config.thickness.back
    return config.depth


def interior_dimensions(config: CabinetConfig) -> InteriorDimensions:
    """Usable space inside the carcass."""
    t = config.thickness.carcass
    back = config.back
    if back.mounting is BackMounting.GROOVED:
        offset = (
            back.groove_offset
            if back.groove_offset is not None
            else default_groove_offset(config.thickness.back)
        )
        depth = config.depth - offset - config.thickness.back
    elif back.mounting is BackMounting.REBATED:
        depth = config.depth - config.thickness.back
    else:
        depth = carcass_depth(config)
    return InteriorDimensions(
        width=round_mm(config.width - 2 * t),
        height=round_mm(config.height - 2 * t),
        depth=round_mm(depth),
    )


@dataclass(frozen=True)
class DoorLayout:
    """Computed size and position of the doors.

    Attributes:
        width: Width of each door.
        height: Height of each door.
        bottom_offset: Height of the door's bottom edge above the bottom of
            the side panels.
        hands: Hinged edge of each door, left to right.
    """

    width: float
    height: float
    bottom_offset: float
    hands: tuple[Hand, ...]


def door_layout(config: CabinetConfig) -> DoorLayout | None:
    """Door size and hinge sides, or None when the cabinet has no doors."""
    count = config.doors.count
    if not config.has_hinged_doors or count > MAX_DOORS:
        return None

    t = config.thickness.carcass
    gap = config.doors.gap
    if config.doors.mounting is DoorMounting.OVERLAY:
        width = (config.width - count * gap) / count
        height = config.height - gap
        bottom = 0.0
    else:
        width = (config.width - 2 * t - (count + 1) * gap) / count
        height = config.height - 2 * t - 2 * gap
        bottom = t + gap

    if count == 1:
        hands: tuple[Hand, ...] = (config.doors.hinge_side,)
    else:
        hands = (Hand.LEFT, Hand.RIGHT)
    return DoorLayout(
        width=round_mm(width),
        height=round_mm(height),
        bottom_offset=round_mm(bottom),
        hands=hands,
    )


@dataclass(frozen=True)
class DrawerLayout:
    """Computed drawer fronts and boxes of a drawer unit.

    Attributes:
        front_length: Width of each drawer front.
        front_height: Height of each drawer front.
        bottom_offsets: Height of each front's bottom edge above the bottom
            of the side panels, lowest drawer first.
        box_length: Length of the drawer box sides, which is also the
            longest runner that fits.
    """

    front_length: float
    front_height: float
    bottom_offsets: tuple[float, ...]
    box_length: float


def drawer_layout(config: CabinetConfig) -> DrawerLayout | None:
    """Drawer fronts and box length, or None when the cabinet has no drawers."""
    count = config.drawers.count
    if config.family is not CabinetFamily.DRAWER_UNIT or count < 1:
        return None

    t = config.thickness.carcass
    gap = config.drawers.gap
    if config.doors.mounting is DoorMounting.OVERLAY:
        front_length = config.width - gap
        front_height = (config.height - count * gap) / count
        first = 0.0
    else:
        front_length = config.width - 2 * t - 2 * gap
        front_height = (config.height - 2 * t - (count + 1) * gap) / count
        first = t + gap

    interior = interior_dimensions(config)
    box_length = (
        math.floor((interior.depth - DRAWER_REAR_CLEARANCE) / DRAWER_LENGTH_STEP)
        * DRAWER_LENGTH_STEP
    )
    return DrawerLayout(
        front_length=round_mm(front_length),
        front_height=round_mm(front_height),
        bottom_offsets=tuple(
            round_mm(first + i * (front_height + gap)) for i in range(count)
        ),
        box_length=float(box_length),
    )


@dataclass(frozen=True)
class DecompositionResult:
    """Panels of one cabinet with aggregate totals and findings.

    Attributes:
        config: Configuration that was decomposed.
        interior: Usable interior dimensions.
        panels: Panels, identical blanks merged with a quantity.
        errors: Collected configuration errors.
        hardware_errors: Panels whose hardware could not be resolved.
        warnings: Non-blocking findings (e.g. undersized panels).
    """

    config: CabinetConfig
    interior: InteriorDimensions
    panels: tuple[Panel, ...]
    errors: tuple[ConfigValidationError, ...] = field(default_factory=tuple)
    hardware_errors: tuple[HardwareLookupError, ...] = field(default_factory=tuple)
    warnings: tuple[DecompositionWarning, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        """True when neither configuration nor hardware errors were found."""
        return not self.errors and not self.hardware_errors

    @property
    def panel_count(self) -> int:
        """Number of physical pieces."""
        return sum(panel.quantity for panel in self.panels)

    @property
    def total_surface_m2(self) -> float:
        """Face area of all pieces in square metres."""
        total_mm2 = sum(panel.area_mm2 * panel.quantity for panel in self.panels)
        return round(total_mm2 / 1_000_000, 4)

    @property
    def total_billed_surface_m2(self) -> float:
        """Surface with each piece raised to the minimum billable area."""
        minimum = self.config.min_panel_area_m2
        return round(
            sum(p.billed_surface_m2(minimum) * p.quantity for p in self.panels), 4
        )

    @property
    def total_edge_banding_m(self) -> float:
        """Banded length of all pieces in metres."""
        total_mm = sum(panel.edge_banding_mm * panel.quantity for panel in self.panels)
        return round(total_mm / 1000, 3)

    @property
    def flagged_panel_ids(self) -> frozenset[str]:
        """Ids of panels with unresolved hardware."""
        return frozenset(error.panel_id for error in self.hardware_errors)

    def get_panel(self, panel_id: str) -> Panel | None:
        """Find a panel by id."""
        for panel in self.panels:
            if panel.id == panel_id:
                return panel
        return None

    def panels_by_role(self, role: PanelRole) -> list[Panel]:
        """All panels with the given role."""
        return [panel for panel in self.panels if panel.role is role]


class _PanelDrafts:
    """Collects panels, skipping roles whose computed size is not positive."""

    def __init__(self, config: CabinetConfig) -> None:
        self.config = config
        self.panels: list[Panel] = []
        self.errors: list[ConfigValidationError] = []

    def add(
        self,
        panel_id: str,
        name: str,
        role: PanelRole,
        length: float,
        width: float,
        thickness: float,
        quantity: int = 1,
        hand: Hand | None = None,
        material_ref: str | None = None,
        hinge_count: int = 0,
    ) -> None:
        length = round_mm(length)
        width = round_mm(width)
        if length <= 0 or width <= 0 or thickness <= 0 or quantity < 1:
            self.errors.append(
                ConfigValidationError(
                    path=f"panels.{panel_id}",
                    message=f"{name} has no positive size and was not built",
                    value=(length, width, thickness),
                )
            )
            return
        self.panels.append(
            Panel(
                id=panel_id,
                name=name,
                role=role,
                length=length,
                width=width,
                thickness=thickness,
                quantity=quantity,
                edge_banding=edge_banding_for(self.config.family, role),
                material_ref=(
                    material_ref if material_ref is not None else self.config.material_ref
                ),
                hand=hand,
                hinge_count=hinge_count,
            )
        )


def _add_carcass(drafts: _PanelDrafts, config: CabinetConfig) -> None:
    t = config.thickness.carcass
    depth = carcass_depth(config)

    if config.has_hinged_doors:
        drafts.add("side-left", "Left side", PanelRole.SIDE, depth, config.height, t, hand=Hand.LEFT)
        drafts.add("side-right", "Right side", PanelRole.SIDE, depth, config.height, t, hand=Hand.RIGHT)
    else:
        drafts.add("side", "Side", PanelRole.SIDE, depth, config.height, t, quantity=2)

    if config.assembly is AssemblyStyle.REBATED:
        between = config.width - 2 * t + 2 * (t * REBATE_DEPTH_RATIO)
    else:
        between = config.width - 2 * t
    drafts.add("top", "Top", PanelRole.TOP, between, depth, t)
    drafts.add("bottom", "Bottom", PanelRole.BOTTOM, between, depth, t)


def _add_back(drafts: _PanelDrafts, config: CabinetConfig) -> None:
    t = config.thickness.carcass
    mounting = config.back.mounting
    if mounting is BackMounting.NONE:
        return
    if mounting is BackMounting.APPLIED:
        length, width = config.width, config.height
    elif mounting is BackMounting.GROOVED:
        g = config.back.groove_depth
        length = config.width - 2 * t + 2 * g
        width = config.height - 2 * t + 2 * g
    else:
        length = config.width - 2 * t
        width = config.height - 2 * t
    drafts.add("back", "Back", PanelRole.BACK, length, width, config.thickness.back)


def _add_shelves(
    drafts: _PanelDrafts, config: CabinetConfig, interior: InteriorDimensions
) -> None:
    if config.shelves.count <= 0:
        return
    width = interior.depth - SHELF_FRONT_SETBACK
    if config.has_hinged_doors and config.doors.mounting is DoorMounting.INSET:
        width -= config.thickness.door
    drafts.add(
        "shelf",
        "Shelf",
        PanelRole.SHELF,
        interior.width - 2 * SHELF_SIDE_CLEARANCE,
        width,
        config.thickness.shelf,
        quantity=config.shelves.count,
    )


def _add_doors(drafts: _PanelDrafts, config: CabinetConfig, layout: DoorLayout) -> None:
    hinge_count = hinge_count_for_height(layout.height) if layout.height > 0 else 0
    single = len(layout.hands) == 1
    for hand in layout.hands:
        panel_id = "door" if single else f"door-{hand.value}"
        name = f"Door ({hand.value} hinged)"
        drafts.add(
            panel_id,
            name,
            PanelRole.DOOR,
            layout.width,
            layout.height,
            config.thickness.door,
            hand=hand,
            material_ref=config.door_material_ref,
            hinge_count=hinge_count,
        )


def _add_drawers(
    drafts: _PanelDrafts,
    config: CabinetConfig,
    interior: InteriorDimensions,
    layout: DrawerLayout,
) -> None:
    count = len(layout.bottom_offsets)
    drafts.add(
        "drawer-front",
        "Drawer front",
        PanelRole.DRAWER_FRONT,
        layout.front_length,
        layout.front_height,
        config.thickness.door,
        quantity=count,
        material_ref=config.door_material_ref,
    )

    side_length = layout.box_length
    if side_length < MIN_DRAWER_LENGTH:
        drafts.errors.append(
            ConfigValidationError(
                path="cabinet.depth",
                message=(
                    f"Interior depth {interior.depth:g} mm is too shallow for "
                    f"{MIN_DRAWER_LENGTH:g} mm drawer runners"
                ),
                value=config.depth,
            )
        )
        return

    dt = config.thickness.drawer_box
    box_width = interior.width - DRAWER_WIDTH_REDUCTION
    box_height = layout.front_height - DRAWER_HEIGHT_REDUCTION
    drafts.add(
        "drawer-side", "Drawer side", PanelRole.DRAWER_SIDE,
        side_length, box_height, dt, quantity=2 * count,
    )
    drafts.add(
        "drawer-back", "Drawer back", PanelRole.DRAWER_BACK,
        box_width - 2 * dt, box_height, dt, quantity=count,
    )
    drafts.add(
        "drawer-bottom", "Drawer bottom", PanelRole.DRAWER_BOTTOM,
        box_width - 2 * dt, side_length - dt, config.thickness.back, quantity=count,
    )


def merge_identical_panels(panels: list[Panel]) -> list[Panel]:
    """Merge panels describing the same blank into one entry with a quantity.

    Order of first appearance is kept and ids stay unique.
    """
    merged: dict[tuple, Panel] = {}
    for panel in panels:
        key = panel.blank_key()
        if key in merged:
            first = merged[key]
            merged[key] = replace(first, quantity=first.quantity + panel.quantity)
        else:
            merged[key] = panel

    result: list[Panel] = []
    seen: dict[str, int] = {}
    for panel in merged.values():
        if panel.id in seen:
            seen[panel.id] += 1
            panel = replace(panel, id=f"{panel.id}-{seen[panel.id]}")
        else:
            seen[panel.id] = 1
        result.append(panel)
    return result


def _check_door_heights(
    layout: DoorLayout, errors: list[ConfigValidationError]
) -> None:
    if not MIN_DOOR_HEIGHT <= layout.height <= MAX_DOOR_HEIGHT:
        errors.append(
            ConfigValidationError(
                path="doors",
                message=(
                    f"Door height {layout.height:g} mm is outside the hinge range "
                    f"{MIN_DOOR_HEIGHT:g}-{MAX_DOOR_HEIGHT:g} mm"
                ),
                value=layout.height,
            )
        )


def _hinge_errors(
    config: CabinetConfig, panels: list[Panel], layout: DoorLayout | None
) -> list[HardwareLookupError]:
    if layout is None:
        return []
    selection = config.hinge
    hinge = lookup_hinge(selection.family, selection.angle, selection.mounting_plate)
    if not isinstance(hinge, HardwareNotFound):
        return []

    hinged_hands = set(layout.hands)
    errors: list[HardwareLookupError] = []
    for panel in panels:
        affected = panel.role is PanelRole.DOOR or (
            panel.role is PanelRole.SIDE and panel.hand in hinged_hands
        )
        if affected:
            errors.append(
                HardwareLookupError(
                    panel_id=panel.id,
                    message=hinge.message,
                    family=selection.family,
                    angle=selection.angle,
                    mounting_plate=selection.mounting_plate,
                )
            )
    return errors


def _hardware_errors(
    config: CabinetConfig,
    panels: list[Panel],
    layout: DoorLayout | None,
    drawers: DrawerLayout | None,
) -> list[HardwareLookupError]:
    errors = _hinge_errors(config, panels, layout)

    if drawers is not None:
        runner = lookup_runner(config.drawers.runner)
        if isinstance(runner, HardwareNotFound):
            errors.extend(
                HardwareLookupError(
                    panel_id=panel.id, message=runner.message, family=config.drawers.runner
                )
                for panel in panels
                if panel.role is PanelRole.SIDE
            )

    if config.fastener is not None:
        fastener = lookup_fastener(config.fastener)
        if isinstance(fastener, HardwareNotFound):
            errors.extend(
                HardwareLookupError(
                    panel_id=panel.id,
                    message=fastener.message,
                    family=getattr(config.fastener, "value", str(config.fastener)),
                )
                for panel in panels
                if panel.role in FASTENED_ROLES
            )
    return errors


def _area_warnings(config: CabinetConfig, panels: list[Panel]) -> list[DecompositionWarning]:
    minimum = config.min_panel_area_m2
    warnings: list[DecompositionWarning] = []
    for panel in panels:
        if panel.surface_m2 < minimum:
            warnings.append(
                DecompositionWarning(
                    path=f"panels.{panel.id}",
                    message=(
                        f"{panel.name} surface {panel.surface_m2:.3f} m² is below the "
                        f"{minimum:g} m² minimum"
                    ),
                    panel_id=panel.id,
                    suggestion=f"Billed as {minimum:g} m² per piece",
                )
            )
    return warnings


def decompose(config: CabinetConfig) -> DecompositionResult:
    """Decompose a cabinet into its panels.

    Args:
        config: Cabinet configuration. Never mutated.

    Returns:
        DecompositionResult with merged panels, totals and every finding.
    """
    errors = validate_cabinet_config(config)
    interior = interior_dimensions(config)
    drafts = _PanelDrafts(config)

    _add_carcass(drafts, config)
    _add_back(drafts, config)

    layout = door_layout(config)
    if layout is not None:
        _check_door_heights(layout, errors)
        _add_doors(drafts, config, layout)
    drawers = drawer_layout(config)
    if drawers is not None:
        _add_drawers(drafts, config, interior, drawers)
    _add_shelves(drafts, config, interior)

    panels = merge_identical_panels(drafts.panels)
    errors.extend(drafts.errors)
    hardware_errors = _hardware_errors(config, panels, layout, drawers)
    warnings = _area_warnings(config, panels)

    logger.debug(
        f"Decomposed '{config.name}' into {len(panels)} panel entries "
        f"({sum(p.quantity for p in panels)} pieces), {len(errors)} errors, "
        f"{len(hardware_errors)} hardware errors"
    )
    return DecompositionResult(
        config=config,
        interior=interior,
        panels=tuple(panels),
        errors=tuple(errors),
        hardware_errors=tuple(hardware_errors),
        warnings=tuple(warnings),
    )
