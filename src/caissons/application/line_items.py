"""Line items for the external quoting system.

This is the only consumer-facing contract of the engine: field names and
meanings are stable. Sizes are millimetres, surfaces square metres and
edge banding metres. Surfaces and banding are line totals, so summing a
field over all lines gives the decomposition total whether or not lines
are expanded.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from caissons.domain.services import DecompositionResult
from caissons.domain.value_objects import MM_PER_M, Panel


@dataclass(frozen=True)
class ExternalLineItem:
    """One priced line of a quote.

    Attributes:
        reference: Human-readable line reference.
        panel_id: Id of the source panel.
        role: Panel role value (e.g. "side", "door").
        length_mm: Panel length.
        width_mm: Panel width.
        thickness_mm: Panel thickness.
        quantity: Pieces on this line.
        edge_a: First length edge banded.
        edge_b: Second length edge banded.
        edge_c: First width edge banded.
        edge_d: Second width edge banded.
        material_ref: Catalog material key, if any.
        surface_m2: Face area of the line.
        billed_surface_m2: Face area with each piece raised to the minimum
            billable area.
        edge_banding_m: Banded length of the line.
    """

    reference: str
    panel_id: str
    role: str
    length_mm: float
    width_mm: float
    thickness_mm: float
    quantity: int
    edge_a: bool
    edge_b: bool
    edge_c: bool
    edge_d: bool
    material_ref: str | None
    surface_m2: float
    billed_surface_m2: float
    edge_banding_m: float

    def to_dict(self) -> dict[str, Any]:
        """Wire form of the line."""
        return asdict(self)


def _line(
    panel: Panel, reference: str, quantity: int, min_area_m2: float
) -> ExternalLineItem:
    edge_a, edge_b, edge_c, edge_d = panel.edge_banding.flags
    return ExternalLineItem(
        reference=reference,
        panel_id=panel.id,
        role=panel.role.value,
        length_mm=panel.length,
        width_mm=panel.width,
        thickness_mm=panel.thickness,
        quantity=quantity,
        edge_a=edge_a,
        edge_b=edge_b,
        edge_c=edge_c,
        edge_d=edge_d,
        material_ref=panel.material_ref,
        surface_m2=round(panel.surface_m2 * quantity, 4),
        billed_surface_m2=round(panel.billed_surface_m2(min_area_m2) * quantity, 4),
        edge_banding_m=round(panel.edge_banding_mm * quantity / MM_PER_M, 3),
    )


def to_line_items(
    result: DecompositionResult, expand: bool = False
) -> list[ExternalLineItem]:
    """Flatten a decomposition into quote line items.

    Args:
        result: Decomposition result.
        expand: Emit one line per physical piece instead of one per panel
            entry. Expanded references read "<name> (i/n)".

    Returns:
        Line items in panel order.
    """
    minimum = result.config.min_panel_area_m2
    items: list[ExternalLineItem] = []
    for panel in result.panels:
        if not expand or panel.quantity == 1:
            items.append(_line(panel, panel.name, panel.quantity, minimum))
            continue
        for i in range(1, panel.quantity + 1):
            reference = f"{panel.name} ({i}/{panel.quantity})"
            items.append(_line(panel, reference, 1, minimum))
    return items
