"""Domain layer - hardware library, panel decomposition and drilling."""

from .findings import (
    ConfigValidationError,
    DecompositionWarning,
    GeometryConflictError,
    HardwareLookupError,
    unique_hardware_errors,
)
from .services import (
    DecompositionResult,
    DrillingPlan,
    VectorPanelDocument,
    compute_drillings,
    decompose,
    generate_document,
    generate_documents,
    validate_drillings,
)
from .value_objects import CabinetConfig, DrillingPoint, Panel

__all__ = [
    "CabinetConfig",
    "ConfigValidationError",
    "DecompositionResult",
    "DecompositionWarning",
    "DrillingPlan",
    "DrillingPoint",
    "GeometryConflictError",
    "HardwareLookupError",
    "Panel",
    "VectorPanelDocument",
    "compute_drillings",
    "decompose",
    "generate_document",
    "generate_documents",
    "unique_hardware_errors",
    "validate_drillings",
]
