"""DXF format exporter for caisson panels.

Generates 2D DXF files (R2010 format, millimetre units) for CNC machining.
Each panel is drawn from its vector document: a closed outline, one circle
per hole with the boring depth stored as the circle's thickness, closed
groove outlines carrying their milling depth the same way, and a text
label. Supports per-panel and combined output modes.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import ezdxf
from ezdxf import units

from caissons.domain.services import VectorPanelDocument
from caissons.domain.value_objects import DocumentLayer
from caissons.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from caissons.application.dtos import CaissonOutput


logger = logging.getLogger(__name__)


# Layer colours (ACI) for DXF output
LAYERS: dict[DocumentLayer, int] = {
    DocumentLayer.OUTLINE: 7,  # white
    DocumentLayer.HINGE: 1,  # red
    DocumentLayer.SHELF_PIN: 3,  # green
    DocumentLayer.FASTENER: 4,  # cyan
    DocumentLayer.DRAWER_RUNNER: 6,  # magenta
    DocumentLayer.GROOVE: 2,  # yellow
    DocumentLayer.ANNOTATION: 5,  # blue
}

MTEXT_MIDDLE_CENTER = 5


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports caisson panels to DXF for CNC machining.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def __init__(
        self,
        mode: str = "per_panel",
        panel_spacing: float = 50.0,
        panels_per_row: int = 4,
    ) -> None:
        """Initialize the DXF exporter.

        Args:
            mode: "per_panel" for one file per panel, "combined" for all
                panels on one sheet.
            panel_spacing: Space between panels in combined mode, in mm.
            panels_per_row: Number of panels per row in combined mode.
        """
        if mode not in ("combined", "per_panel"):
            raise ValueError(f"Invalid mode: {mode}. Must be 'combined' or 'per_panel'")
        if panels_per_row < 1:
            raise ValueError("panels_per_row must be at least 1")
        self.mode = mode
        self.panel_spacing = panel_spacing
        self.panels_per_row = panels_per_row

    def export(self, output: CaissonOutput, path: Path) -> list[Path]:
        """Export panel documents to DXF file(s).

        In combined mode a single file is written at ``path``. In per-panel
        mode one file per panel is written next to it, named
        ``{path_stem}_{panel_id}.dxf``. Panels with drilling conflicts have
        no document and are skipped.

        Args:
            output: The caisson output to export.
            path: Path where the DXF file(s) will be saved.

        Returns:
            Paths of the files written.
        """
        if output.withheld:
            logger.warning(
                f"Geometry withheld for {len(output.withheld)} panel(s) with drilling "
                f"conflicts: {', '.join(output.withheld)}"
            )
        if not output.documents:
            logger.warning("No panel documents to export")
            return []

        if self.mode == "combined":
            return [self._export_combined(output.documents, path)]
        return self._export_per_panel(output.documents, path)

    def export_string(self, output: CaissonOutput) -> str:
        """Export all panel documents as one combined DXF string."""
        if not output.documents:
            return ""
        doc = self.render(output.documents)
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def render(self, documents: list[VectorPanelDocument]) -> Drawing:
        """Draw documents onto a new DXF drawing, one per panel or laid out on a grid."""
        doc = self._create_document()
        msp = doc.modelspace()
        if len(documents) == 1:
            self._draw_document(msp, documents[0], 0.0, 0.0)
        else:
            self._draw_all(msp, documents)
        return doc

    def _create_document(self) -> Drawing:
        doc = ezdxf.new("R2010", units=units.MM)
        for layer, color in LAYERS.items():
            doc.layers.add(layer.value, color=color)
        return doc

    def _export_combined(self, documents: list[VectorPanelDocument], path: Path) -> Path:
        doc = self.render(documents)
        doc.saveas(path)
        logger.info(f"Exported combined DXF to {path}")
        return path

    def _export_per_panel(
        self, documents: list[VectorPanelDocument], path: Path
    ) -> list[Path]:
        written: list[Path] = []
        for document in documents:
            doc = self.render([document])
            safe_id = document.panel_id.replace(" ", "_").replace("/", "-")
            panel_path = path.parent / f"{path.stem}_{safe_id}.dxf"
            doc.saveas(panel_path)
            logger.info(f"Exported panel DXF to {panel_path}")
            written.append(panel_path)
        return written

    def _draw_all(self, msp: Modelspace, documents: list[VectorPanelDocument]) -> None:
        """Lay documents out left-to-right, top-to-bottom.

        Each row hangs below the previous one by its tallest panel plus the
        spacing, so panels never overlap.
        """
        rows = [
            documents[i : i + self.panels_per_row]
            for i in range(0, len(documents), self.panels_per_row)
        ]
        current_y = 0.0
        for row in rows:
            row_height = max(document.width for document in row)
            row_bottom = current_y - row_height
            current_x = 0.0
            for document in row:
                self._draw_document(msp, document, current_x, row_bottom)
                current_x += document.length + self.panel_spacing
            current_y = row_bottom - self.panel_spacing

    def _draw_document(
        self, msp: Modelspace, document: VectorPanelDocument, dx: float, dy: float
    ) -> None:
        outline = document.outline
        msp.add_lwpolyline(
            [(x + dx, y + dy) for x, y in outline.points],
            close=outline.closed,
            dxfattribs={"layer": outline.layer.value},
        )
        for groove in document.grooves:
            msp.add_lwpolyline(
                [(x + dx, y + dy) for x, y in groove.points],
                close=groove.closed,
                dxfattribs={"layer": groove.layer.value, "thickness": groove.depth},
            )
        for circle in document.circles:
            cx, cy = circle.center
            msp.add_circle(
                (cx + dx, cy + dy),
                circle.radius,
                dxfattribs={"layer": circle.layer.value, "thickness": circle.depth},
            )
        for text in document.texts:
            tx, ty = text.insert
            msp.add_mtext(
                text.content,
                dxfattribs={
                    "layer": text.layer.value,
                    "char_height": text.height,
                    "insert": (tx + dx, ty + dy),
                    "attachment_point": MTEXT_MIDDLE_CENTER,
                },
            )


__all__ = ["DxfExporter", "LAYERS"]
