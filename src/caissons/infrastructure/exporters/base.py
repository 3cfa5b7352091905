"""Base exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from caissons.application.dtos import CaissonOutput


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all exporters.

    Exporters convert a CaissonOutput to a specific format.

    Attributes:
        format_name: Name of the export format (e.g., "dxf", "csv").
        file_extension: File extension without leading dot (e.g., "dxf").
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export(self, output: CaissonOutput, path: Path) -> list[Path]:
        """Export caisson output to one or more files.

        Args:
            output: The caisson output to export.
            path: Path of the file to write. Exporters producing several
                files derive their names from it.

        Returns:
            Paths of the files written.
        """
        ...

    def export_string(self, output: CaissonOutput) -> str:
        """Export caisson output as a string.

        Raises:
            NotImplementedError: If the format does not support string export.
        """
        raise NotImplementedError(
            f"Format '{self.format_name}' does not support string export"
        )


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves using the @ExporterRegistry.register
    decorator.

    Example:
        @ExporterRegistry.register("csv")
        class CncCsvExporter:
            format_name = "csv"
            file_extension = "csv"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str) -> Any:
        """Decorator to register an exporter class.

        Args:
            format_name: The format name to register (e.g., "dxf").

        Returns:
            Decorator function that registers the class.
        """

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning(
                    f"Overwriting existing exporter for format '{format_name}'"
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(f"Registered exporter '{format_name}': {exporter_class.__name__}")
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        """Sorted list of all registered format names."""
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters

    @classmethod
    def clear(cls) -> None:
        """Clear all registered exporters.

        This is primarily useful for testing.
        """
        cls._exporters.clear()


class ExportManager:
    """Manages export operations to multiple formats.

    Attributes:
        output_dir: Directory where exported files will be saved.
        options: Constructor keyword arguments per format name.
    """

    def __init__(
        self, output_dir: Path, options: dict[str, dict[str, Any]] | None = None
    ) -> None:
        """Initialize the export manager.

        Args:
            output_dir: Directory where exported files will be saved.
                Will be created if it doesn't exist.
            options: Exporter constructor arguments keyed by format name,
                e.g. ``{"dxf": {"mode": "combined"}}``.
        """
        self.output_dir = Path(output_dir)
        self.options = options or {}

    def export_all(
        self,
        formats: list[str],
        output: CaissonOutput,
        project_name: str = "caisson",
    ) -> dict[str, list[Path]]:
        """Export caisson output to multiple formats.

        Args:
            formats: Format names to export (e.g., ["dxf", "csv"]).
            output: The caisson output to export.
            project_name: Base name for output files (default "caisson").

        Returns:
            Dictionary mapping format names to the files written.

        Raises:
            KeyError: If any format is not registered.
            OSError: If file operations fail.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        results: dict[str, list[Path]] = {}
        for format_name in formats:
            exporter_class = ExporterRegistry.get(format_name)
            exporter = exporter_class(**self.options.get(format_name, {}))

            # {project_name}_{format}.{ext}
            filename = f"{project_name}_{format_name}.{exporter.file_extension}"
            filepath = self.output_dir / filename

            logger.info(f"Exporting to {format_name}: {filepath}")
            results[format_name] = exporter.export(output, filepath)

        return results

    def export_single(
        self,
        format_name: str,
        output: CaissonOutput,
        project_name: str = "caisson",
    ) -> list[Path]:
        """Export caisson output to a single format."""
        return self.export_all([format_name], output, project_name)[format_name]
