"""CNC drilling program exporter.

One semicolon-separated row per hole, in panel order, coordinates in the
panel's interior-face view rounded to 0.01 mm. Panels whose drilling has
conflicts are left out, matching the withheld DXF geometry.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from caissons.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from caissons.application.dtos import CaissonOutput
    from caissons.domain.value_objects import DrillingPoint


logger = logging.getLogger(__name__)


HEADER = ("PANEL", "PURPOSE", "X_MM", "Y_MM", "DIAMETER_MM", "DEPTH_MM", "FACE")

FACE_INTERIOR = "interior"
FACE_THROUGH = "through"


def _row(point: DrillingPoint) -> list[str]:
    return [
        point.panel_id,
        point.purpose.value,
        f"{point.x:.2f}",
        f"{point.y:.2f}",
        f"{point.diameter:.2f}",
        f"{point.depth:.2f}",
        FACE_THROUGH if point.through else FACE_INTERIOR,
    ]


@ExporterRegistry.register("csv")
class CncCsvExporter:
    """Exports drilling points as a CSV drilling program.

    Attributes:
        format_name: "csv"
        file_extension: "csv"
    """

    format_name: ClassVar[str] = "csv"
    file_extension: ClassVar[str] = "csv"

    def __init__(self, delimiter: str = ";") -> None:
        self.delimiter = delimiter

    def export(self, output: CaissonOutput, path: Path) -> list[Path]:
        """Write the drilling program to ``path``."""
        path.write_text(self.export_string(output), encoding="utf-8")
        logger.info(f"Exported CNC drilling CSV to {path}")
        return [path]

    def export_string(self, output: CaissonOutput) -> str:
        """Drilling program as a CSV string, header included."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=self.delimiter, lineterminator="\n")
        writer.writerow(HEADER)

        withheld = set(output.withheld)
        for panel in output.result.panels:
            if panel.id in withheld:
                continue
            for point in output.plan.for_panel(panel.id):
                writer.writerow(_row(point))
        return buffer.getvalue()
