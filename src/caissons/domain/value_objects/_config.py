"""Cabinet configuration value objects.

A ``CabinetConfig`` is built by the caller (or from a configuration file)
and never mutated by the engine. Range checks are deliberately absent here:
they are collected by ``validate_cabinet_config`` so that every problem can
be reported at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ._enums import (
    AssemblyStyle,
    BackMounting,
    CabinetFamily,
    DoorMounting,
    FastenerKind,
    Hand,
    HingeAngle,
    MountingPlateType,
)

# Minimum billable panel surface in square metres
DEFAULT_MIN_PANEL_AREA_M2 = 0.25


@dataclass(frozen=True)
class MaterialThicknesses:
    """Material thickness per panel role, in millimetres."""

    carcass: float = 18.0
    back: float = 8.0
    door: float = 18.0
    shelf: float = 18.0
    drawer_box: float = 16.0


@dataclass(frozen=True)
class BackSpec:
    """Back panel fitting.

    Attributes:
        mounting: How the back is fitted.
        groove_depth: Depth of the housing groove (grooved backs only).
        groove_offset: Distance from the rear edge to the groove. None uses
            the standard offset for the back thickness.
    """

    mounting: BackMounting = BackMounting.GROOVED
    groove_depth: float = 10.0
    groove_offset: float | None = None


@dataclass(frozen=True)
class DoorSpec:
    """Door layout.

    Attributes:
        count: Number of doors side by side (0, 1 or 2).
        mounting: Overlay or inset doors.
        gap: Clearance around each door.
        hinge_side: Hinged edge of a single door. Pairs always hinge outward.
    """

    count: int = 1
    mounting: DoorMounting = DoorMounting.OVERLAY
    gap: float = 2.0
    hinge_side: Hand = Hand.LEFT


@dataclass(frozen=True)
class DrawerSpec:
    """Drawer layout for drawer units.

    Attributes:
        count: Number of drawers stacked from the bottom.
        gap: Clearance around each drawer front.
        runner: Drawer runner family key.
    """

    count: int = 0
    gap: float = 2.0
    runner: str = "tandem"


@dataclass(frozen=True)
class HingeSelection:
    """Hinge catalog key: family, opening angle and mounting plate."""

    family: str = "standard"
    angle: HingeAngle = HingeAngle.DEG_110
    mounting_plate: MountingPlateType = MountingPlateType.EXPANDO_0MM


@dataclass(frozen=True)
class ShelfSpec:
    """Adjustable shelves and their shelf-pin drilling."""

    count: int = 0
    pins: bool = False


@dataclass(frozen=True)
class CabinetConfig:
    """Complete description of one cabinet instance.

    External dimensions are millimetres.
    """

    family: CabinetFamily
    width: float
    height: float
    depth: float
    thickness: MaterialThicknesses = field(default_factory=MaterialThicknesses)
    assembly: AssemblyStyle = AssemblyStyle.BUTT_JOINT
    back: BackSpec = field(default_factory=BackSpec)
    doors: DoorSpec = field(default_factory=DoorSpec)
    drawers: DrawerSpec = field(default_factory=DrawerSpec)
    hinge: HingeSelection = field(default_factory=HingeSelection)
    shelves: ShelfSpec = field(default_factory=ShelfSpec)
    fastener: FastenerKind | None = None
    material_ref: str | None = None
    door_material_ref: str | None = None
    min_panel_area_m2: float = DEFAULT_MIN_PANEL_AREA_M2
    name: str = "caisson"

    @property
    def has_hinged_doors(self) -> bool:
        """True when the cabinet carries hinged doors."""
        return self.family is not CabinetFamily.DRAWER_UNIT and self.doors.count > 0
