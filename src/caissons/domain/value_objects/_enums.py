"""Closed enumerations shared by the domain and the configuration schema."""

from __future__ import annotations

from enum import Enum


class CabinetFamily(str, Enum):
    """Cabinet families supported by the decomposition engine."""

    BASE = "base"
    WALL = "wall"
    COLUMN = "column"
    DRAWER_UNIT = "drawer_unit"


class PanelRole(str, Enum):
    """Role of a flat panel within a cabinet."""

    SIDE = "side"
    TOP = "top"
    BOTTOM = "bottom"
    BACK = "back"
    SHELF = "shelf"
    DOOR = "door"
    DRAWER_FRONT = "drawer_front"
    DRAWER_SIDE = "drawer_side"
    DRAWER_BACK = "drawer_back"
    DRAWER_BOTTOM = "drawer_bottom"


class Hand(str, Enum):
    """Left/right handedness of a panel, seen from the front of the cabinet."""

    LEFT = "left"
    RIGHT = "right"


class AssemblyStyle(str, Enum):
    """How the top and bottom panels meet the sides.

    BUTT_JOINT places top and bottom between the sides. REBATED houses them
    in rebates cut to half the carcass thickness.
    """

    BUTT_JOINT = "butt_joint"
    REBATED = "rebated"


class BackMounting(str, Enum):
    """How the back panel is fitted to the carcass."""

    APPLIED = "applied"
    GROOVED = "grooved"
    REBATED = "rebated"
    NONE = "none"


class DoorMounting(str, Enum):
    """Door position relative to the carcass front edges."""

    OVERLAY = "overlay"
    INSET = "inset"


class HingeAngle(int, Enum):
    """Opening angles offered by the hinge catalog."""

    DEG_95 = 95
    DEG_107 = 107
    DEG_110 = 110
    DEG_155 = 155


class MountingPlateType(str, Enum):
    """Mounting plates (embases) fixed to the side panel."""

    INSERTA_0MM = "inserta_0mm"
    WING_0MM = "wing_0mm"
    EXPANDO_0MM = "expando_0mm"
    EXPANDO_3MM = "expando_3mm"


class FastenerKind(str, Enum):
    """Knock-down fasteners and supports with a face drilling pattern."""

    MINIFIX = "minifix"
    DOWEL = "dowel"
    CONFIRMAT = "confirmat"
    SHELF_PIN = "shelf_pin"


class DrillPurpose(str, Enum):
    """Purpose tag carried by every drilling point."""

    HINGE_CUP = "hinge_cup"
    MOUNTING_PLATE = "mounting_plate"
    SHELF_PIN = "shelf_pin"
    FASTENER = "fastener"
    DRAWER_RUNNER = "drawer_runner"


class DocumentLayer(str, Enum):
    """Named layers of a vector panel document.

    The values are written verbatim into CAD output and must stay stable.
    """

    OUTLINE = "OUTLINE"
    HINGE = "HINGE"
    SHELF_PIN = "SHELF_PIN"
    FASTENER = "FASTENER"
    DRAWER_RUNNER = "DRAWER_RUNNER"
    GROOVE = "GROOVE"
    ANNOTATION = "ANNOTATION"


class ConflictKind(str, Enum):
    """Kinds of drilling geometry conflicts."""

    OUT_OF_BOUNDS = "out_of_bounds"
    OVERLAP = "overlap"
    TOO_DEEP = "too_deep"
