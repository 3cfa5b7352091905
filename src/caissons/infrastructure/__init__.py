"""Infrastructure layer - exporters and text formatters."""

from caissons.infrastructure.exporters import (
    CncCsvExporter,
    DxfExporter,
    ExportManager,
    ExporterRegistry,
    LineItemsExporter,
)
from caissons.infrastructure.formatters import (
    DrillingReportFormatter,
    FindingsFormatter,
    HardwareCatalogFormatter,
    PanelListFormatter,
)

__all__ = [
    "CncCsvExporter",
    "DrillingReportFormatter",
    "DxfExporter",
    "ExportManager",
    "ExporterRegistry",
    "FindingsFormatter",
    "HardwareCatalogFormatter",
    "LineItemsExporter",
    "PanelListFormatter",
]
