"""Exporter framework for caisson outputs.

This package provides a unified exporter framework with:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates multi-format export operations

Registered exporters:
- csv: CNC drilling program, one row per hole
- dxf: DXF panel drawings for CNC machining
- line-items: JSON line items for the external quoting system

Usage:
    from caissons.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()

    manager = ExportManager(Path("./output"), options={"dxf": {"mode": "combined"}})
    files = manager.export_all(["dxf", "csv"], caisson_output, project_name="base-600")
"""

from caissons.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)

# Import exporters to trigger registration
from caissons.infrastructure.exporters.csv_cnc import CncCsvExporter
from caissons.infrastructure.exporters.dxf import DxfExporter
from caissons.infrastructure.exporters.line_items import LineItemsExporter

__all__ = [
    "CncCsvExporter",
    "DxfExporter",
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "LineItemsExporter",
]
