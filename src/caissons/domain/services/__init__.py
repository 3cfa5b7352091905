"""Domain services: decomposition, drilling and vector geometry."""

from .decomposition import (
    DecompositionResult,
    DoorLayout,
    DrawerLayout,
    carcass_depth,
    decompose,
    default_groove_offset,
    door_layout,
    drawer_layout,
    edge_banding_for,
    interior_dimensions,
    merge_identical_panels,
)
from .drilling import (
    MIN_EDGE_CLEARANCE,
    MIN_HOLE_CLEARANCE,
    DrillingPlan,
    compute_drillings,
    validate_drillings,
)
from .geometry import (
    GROOVED_ROLES,
    PURPOSE_LAYERS,
    Circle,
    Polyline,
    Text,
    VectorPanelDocument,
    back_groove,
    generate_document,
    generate_documents,
)
from .validation import validate_cabinet_config

__all__ = [
    "Circle",
    "DecompositionResult",
    "DoorLayout",
    "DrawerLayout",
    "DrillingPlan",
    "GROOVED_ROLES",
    "MIN_EDGE_CLEARANCE",
    "MIN_HOLE_CLEARANCE",
    "PURPOSE_LAYERS",
    "Polyline",
    "Text",
    "VectorPanelDocument",
    "back_groove",
    "carcass_depth",
    "compute_drillings",
    "decompose",
    "default_groove_offset",
    "door_layout",
    "drawer_layout",
    "edge_banding_for",
    "generate_document",
    "generate_documents",
    "interior_dimensions",
    "merge_identical_panels",
    "validate_cabinet_config",
    "validate_drillings",
]
