"""Layered vector geometry for CNC import.

Each panel becomes one ``VectorPanelDocument``: a true-scale outline, a
circle per drilling point, the back panel groove on carcass panels and a
text label, every primitive tagged with the layer it belongs to. Documents
are rebuilt on demand and never edited.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable

from caissons.domain.value_objects import (
    BackMounting,
    CabinetConfig,
    DocumentLayer,
    DrillingPoint,
    DrillPurpose,
    Hand,
    Panel,
    PanelRole,
    round_mm,
)

from .decomposition import DecompositionResult, default_groove_offset
from .drilling import DrillingPlan

logger = logging.getLogger(__name__)


PURPOSE_LAYERS = MappingProxyType(
    {
        DrillPurpose.HINGE_CUP: DocumentLayer.HINGE,
        DrillPurpose.MOUNTING_PLATE: DocumentLayer.HINGE,
        DrillPurpose.SHELF_PIN: DocumentLayer.SHELF_PIN,
        DrillPurpose.FASTENER: DocumentLayer.FASTENER,
        DrillPurpose.DRAWER_RUNNER: DocumentLayer.DRAWER_RUNNER,
    }
)

# Carcass panels milled to house a grooved back
GROOVED_ROLES = frozenset({PanelRole.SIDE, PanelRole.TOP, PanelRole.BOTTOM})

# Label height as a share of the smaller panel dimension, clamped in mm
LABEL_HEIGHT_RATIO = 0.08
MIN_LABEL_HEIGHT = 4.0
MAX_LABEL_HEIGHT = 25.0


@dataclass(frozen=True)
class Polyline:
    """Open or closed sequence of vertices.

    ``depth`` is the machining depth of a milled pocket or groove, 0 for
    plain outlines.
    """

    points: tuple[tuple[float, float], ...]
    layer: DocumentLayer = DocumentLayer.OUTLINE
    closed: bool = True
    depth: float = 0.0


@dataclass(frozen=True)
class Circle:
    """Drilled hole seen from the drilled face.

    Attributes:
        center: Hole centre in panel coordinates.
        radius: Hole radius.
        depth: Boring depth.
        layer: Document layer.
        label: Hole description.
        through: True for through holes.
    """

    center: tuple[float, float]
    radius: float
    depth: float
    layer: DocumentLayer
    label: str = ""
    through: bool = False


@dataclass(frozen=True)
class Text:
    """Multi-line annotation anchored at its middle."""

    content: str
    insert: tuple[float, float]
    height: float
    layer: DocumentLayer = DocumentLayer.ANNOTATION


@dataclass(frozen=True)
class VectorPanelDocument:
    """Vector drawing of one panel's interior face.

    Attributes:
        panel_id: Panel the drawing belongs to.
        name: Panel display name.
        length: X extent.
        width: Y extent.
        outline: Closed outline rectangle.
        circles: One circle per drilling point.
        grooves: Milled grooves (the back panel housing).
        texts: Annotations.
    """

    panel_id: str
    name: str
    length: float
    width: float
    outline: Polyline
    circles: tuple[Circle, ...] = ()
    grooves: tuple[Polyline, ...] = ()
    texts: tuple[Text, ...] = ()

    def layers(self) -> set[DocumentLayer]:
        """Layers used by at least one primitive."""
        used = {self.outline.layer}
        used.update(groove.layer for groove in self.grooves)
        used.update(circle.layer for circle in self.circles)
        used.update(text.layer for text in self.texts)
        return used

    def circles_on(self, layer: DocumentLayer) -> list[Circle]:
        return [circle for circle in self.circles if circle.layer is layer]


def _label(panel: Panel) -> str:
    dims = f"{panel.length:g} x {panel.width:g} x {panel.thickness:g} mm"
    return f"{panel.name}\n{dims}\nqty {panel.quantity}"


def _rectangle(x0: float, y0: float, x1: float, y1: float) -> tuple[tuple[float, float], ...]:
    return ((x0, y0), (x1, y0), (x1, y1), (x0, y1))


def back_groove(panel: Panel, config: CabinetConfig) -> Polyline | None:
    """Groove housing the back panel, or None when the panel has none.

    Grooved backs run in a through groove on the sides, top and bottom,
    ``groove_offset`` from the rear edge and as wide as the back is thick.
    Sides are grooved over their full height, top and bottom over their
    full length.
    """
    back = config.back
    if back.mounting is not BackMounting.GROOVED or panel.role not in GROOVED_ROLES:
        return None

    offset = (
        back.groove_offset
        if back.groove_offset is not None
        else default_groove_offset(config.thickness.back)
    )
    width = config.thickness.back
    if panel.role is PanelRole.SIDE:
        depth = panel.length
    else:
        depth = panel.width
    rear = depth - offset
    front = rear - width
    if front < 0:
        logger.debug(f"No room for the back groove on '{panel.id}'")
        return None

    if panel.role is PanelRole.SIDE:
        # x runs from the back edge on the right side
        if panel.hand is Hand.RIGHT:
            x0, x1 = depth - rear, depth - front
        else:
            x0, x1 = front, rear
        points = _rectangle(round_mm(x0), 0.0, round_mm(x1), panel.width)
    else:
        points = _rectangle(0.0, round_mm(front), panel.length, round_mm(rear))
    return Polyline(
        points=points, layer=DocumentLayer.GROOVE, closed=True, depth=back.groove_depth
    )


def generate_document(
    panel: Panel,
    drillings: Iterable[DrillingPoint],
    grooves: Iterable[Polyline] = (),
) -> VectorPanelDocument:
    """Build the vector document of one panel.

    Args:
        panel: Panel to draw.
        drillings: Drilling points of that panel.
        grooves: Grooves milled into that panel.

    Returns:
        Document with the outline, one circle per point, the grooves and a
        label.

    Raises:
        ValueError: If the panel has no area or a point belongs to another
            panel.
    """
    if panel.length <= 0 or panel.width <= 0:
        raise ValueError(
            f"Cannot draw panel '{panel.id}' of {panel.length} x {panel.width}"
        )

    length, width = panel.length, panel.width
    outline = Polyline(
        points=((0.0, 0.0), (length, 0.0), (length, width), (0.0, width)),
        layer=DocumentLayer.OUTLINE,
        closed=True,
    )

    circles: list[Circle] = []
    for point in drillings:
        if point.panel_id != panel.id:
            raise ValueError(
                f"Drilling point for '{point.panel_id}' passed to panel '{panel.id}'"
            )
        circles.append(
            Circle(
                center=(point.x, point.y),
                radius=point.radius,
                depth=point.depth,
                layer=PURPOSE_LAYERS[point.purpose],
                label=point.label,
                through=point.through,
            )
        )

    height = max(
        MIN_LABEL_HEIGHT, min(MAX_LABEL_HEIGHT, min(length, width) * LABEL_HEIGHT_RATIO)
    )
    label = Text(content=_label(panel), insert=(length / 2, width / 2), height=height)

    return VectorPanelDocument(
        panel_id=panel.id,
        name=panel.name,
        length=length,
        width=width,
        outline=outline,
        circles=tuple(circles),
        grooves=tuple(grooves),
        texts=(label,),
    )


def generate_documents(
    result: DecompositionResult, plan: DrillingPlan
) -> tuple[list[VectorPanelDocument], list[str]]:
    """Build documents for every panel whose drilling is free of conflicts.

    Args:
        result: Decomposition result.
        plan: Drilling plan for the same panels.

    Returns:
        Tuple of (documents, withheld panel ids).
    """
    conflicted = plan.conflicted_panel_ids
    documents: list[VectorPanelDocument] = []
    withheld: list[str] = []
    for panel in result.panels:
        if panel.id in conflicted:
            logger.debug(f"Withholding geometry for '{panel.id}' (drilling conflicts)")
            withheld.append(panel.id)
            continue
        groove = back_groove(panel, result.config)
        documents.append(
            generate_document(
                panel, plan.for_panel(panel.id), grooves=(groove,) if groove else ()
            )
        )
    return documents, withheld
