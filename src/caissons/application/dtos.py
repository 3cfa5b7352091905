"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from caissons.domain.findings import HardwareLookupError, unique_hardware_errors
from caissons.domain.services import (
    DecompositionResult,
    DrillingPlan,
    VectorPanelDocument,
)

from .line_items import ExternalLineItem


@dataclass
class CaissonOutput:
    """Output DTO containing everything built for one caisson.

    Attributes:
        result: Panels, totals and findings from decomposition.
        plan: Drilling points and drilling findings.
        documents: Vector documents of the panels without drilling conflicts.
        withheld: Ids of panels whose geometry was withheld.
        line_items: Quote line items.
        project_name: Base name for output files.
    """

    result: DecompositionResult
    plan: DrillingPlan
    documents: list[VectorPanelDocument] = field(default_factory=list)
    withheld: list[str] = field(default_factory=list)
    line_items: list[ExternalLineItem] = field(default_factory=list)
    project_name: str = "caisson"

    @property
    def is_valid(self) -> bool:
        """True when no errors, hardware errors or drilling conflicts were found."""
        return (
            self.result.is_valid
            and not self.plan.hardware_errors
            and not self.plan.conflicts
        )

    @property
    def hardware_errors(self) -> list[HardwareLookupError]:
        """Hardware errors of decomposition and drilling, each problem once."""
        return unique_hardware_errors(self.result.hardware_errors, self.plan.hardware_errors)

    @property
    def error_count(self) -> int:
        return (
            len(self.result.errors)
            + len(self.hardware_errors)
            + len(self.plan.conflicts)
        )
