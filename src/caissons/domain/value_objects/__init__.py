"""Value objects for the caisson domain.

Immutable data types used throughout the engine, re-exported from
sub-modules for convenience.
"""

from __future__ import annotations

from ._config import (
    DEFAULT_MIN_PANEL_AREA_M2,
    BackSpec,
    CabinetConfig,
    DoorSpec,
    DrawerSpec,
    HingeSelection,
    MaterialThicknesses,
    ShelfSpec,
)
from ._drilling import DrillingPoint
from ._enums import (
    AssemblyStyle,
    BackMounting,
    CabinetFamily,
    ConflictKind,
    DocumentLayer,
    DoorMounting,
    DrillPurpose,
    FastenerKind,
    Hand,
    HingeAngle,
    MountingPlateType,
    PanelRole,
)
from ._panels import (
    MM2_PER_M2,
    MM_PER_M,
    MM_PRECISION,
    EdgeBanding,
    InteriorDimensions,
    Panel,
    round_mm,
)

__all__ = [
    "AssemblyStyle",
    "BackMounting",
    "BackSpec",
    "CabinetConfig",
    "CabinetFamily",
    "ConflictKind",
    "DEFAULT_MIN_PANEL_AREA_M2",
    "DocumentLayer",
    "DoorMounting",
    "DoorSpec",
    "DrawerSpec",
    "DrillPurpose",
    "DrillingPoint",
    "EdgeBanding",
    "FastenerKind",
    "Hand",
    "HingeAngle",
    "HingeSelection",
    "InteriorDimensions",
    "MM2_PER_M2",
    "MM_PER_M",
    "MM_PRECISION",
    "MaterialThicknesses",
    "MountingPlateType",
    "Panel",
    "PanelRole",
    "ShelfSpec",
    "round_mm",
]
