"""Line-item JSON exporter for the external quoting system."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from caissons.application.line_items import to_line_items
from caissons.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from caissons.application.dtos import CaissonOutput


logger = logging.getLogger(__name__)


# Version of the line-item document layout
SCHEMA_VERSION = "1.0"


@ExporterRegistry.register("line-items")
class LineItemsExporter:
    """Exports quote line items and totals as JSON.

    Attributes:
        format_name: "line-items"
        file_extension: "json"
    """

    format_name: ClassVar[str] = "line-items"
    file_extension: ClassVar[str] = "json"

    def __init__(self, expand: bool | None = None, indent: int = 2) -> None:
        """Initialize the exporter.

        Args:
            expand: One line per physical piece. None keeps the line items
                already carried by the output.
            indent: JSON indentation level (default 2 spaces).
        """
        self.expand = expand
        self.indent = indent

    def export(self, output: CaissonOutput, path: Path) -> list[Path]:
        """Write line items to ``path``."""
        path.write_text(self.export_string(output), encoding="utf-8")
        logger.info(f"Exported line items to {path}")
        return [path]

    def export_string(self, output: CaissonOutput) -> str:
        return json.dumps(self._build_output(output), indent=self.indent)

    def _build_output(self, output: CaissonOutput) -> dict[str, Any]:
        result = output.result
        items = (
            output.line_items
            if self.expand is None
            else to_line_items(result, expand=self.expand)
        )
        return {
            "schema_version": SCHEMA_VERSION,
            "project": output.project_name,
            "family": result.config.family.value,
            "items": [item.to_dict() for item in items],
            "totals": {
                "pieces": result.panel_count,
                "surface_m2": result.total_surface_m2,
                "billed_surface_m2": result.total_billed_surface_m2,
                "edge_banding_m": result.total_edge_banding_m,
            },
            "flagged_panels": sorted(result.flagged_panel_ids),
        }
