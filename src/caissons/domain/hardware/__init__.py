"""Hardware specification library.

Immutable tables of hinges, mounting plates, fasteners, drawer runners and
the 32 mm drilling grid, plus table-driven hinge count and placement rules.
"""

from .catalog import (
    COMPATIBLE_PLATES,
    CUP_CENTER_FROM_HINGED_EDGE,
    FASTENER_EDGE_OFFSET,
    FASTENERS,
    HINGE_COUNT_BANDS,
    HINGE_EDGE_DISTANCE,
    HINGES,
    MAX_HINGE_COUNT,
    MOUNTING_PLATES,
    PLATE_LINE_FROM_FRONT_EDGE,
    RUNNERS,
    SYSTEM_LINE_OFFSET,
    SYSTEM_PITCH,
    available_hinges,
    hinge_count_for_height,
    lookup_fastener,
    lookup_hinge,
    lookup_mounting_plate,
    lookup_runner,
    vertical_hinge_offsets,
)
from .specs import (
    FastenerSpec,
    HardwareNotFound,
    HingeSpec,
    HoleSpec,
    MountingPlateSpec,
    RunnerSpec,
)

__all__ = [
    "COMPATIBLE_PLATES",
    "CUP_CENTER_FROM_HINGED_EDGE",
    "FASTENER_EDGE_OFFSET",
    "FASTENERS",
    "FastenerSpec",
    "HINGE_COUNT_BANDS",
    "HINGE_EDGE_DISTANCE",
    "HINGES",
    "HardwareNotFound",
    "HingeSpec",
    "HoleSpec",
    "MAX_HINGE_COUNT",
    "MOUNTING_PLATES",
    "MountingPlateSpec",
    "PLATE_LINE_FROM_FRONT_EDGE",
    "RUNNERS",
    "RunnerSpec",
    "SYSTEM_LINE_OFFSET",
    "SYSTEM_PITCH",
    "available_hinges",
    "hinge_count_for_height",
    "lookup_fastener",
    "lookup_hinge",
    "lookup_mounting_plate",
    "lookup_runner",
    "vertical_hinge_offsets",
]
