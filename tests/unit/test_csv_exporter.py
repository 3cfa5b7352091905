"""Unit tests for the CNC drilling CSV exporter."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from caissons.application import BuildCaissonCommand, CaissonOutput
from caissons.domain.value_objects import CabinetConfig, DoorSpec, FastenerKind
from caissons.infrastructure.exporters import CncCsvExporter, ExporterRegistry
from caissons.infrastructure.exporters.csv_cnc import HEADER


@pytest.fixture
def base_output(base_config: CabinetConfig) -> CaissonOutput:
    return BuildCaissonCommand().execute(base_config)


def rows(content: str) -> list[list[str]]:
    return [line.split(";") for line in content.strip().split("\n")]


class TestCncCsvExporter:
    """Tests for the drilling program rows."""

    def test_registered(self) -> None:
        assert ExporterRegistry.get("csv") is CncCsvExporter
        assert CncCsvExporter.file_extension == "csv"

    def test_header(self, base_output: CaissonOutput) -> None:
        header = rows(CncCsvExporter().export_string(base_output))[0]
        assert header == list(HEADER)
        assert header == ["PANEL", "PURPOSE", "X_MM", "Y_MM", "DIAMETER_MM", "DEPTH_MM", "FACE"]

    def test_one_row_per_hole_in_panel_order(self, base_output: CaissonOutput) -> None:
        body = rows(CncCsvExporter().export_string(base_output))[1:]
        assert body == [
            ["side-left", "mounting_plate", "37.00", "100.00", "10.00", "12.00", "interior"],
            ["side-left", "mounting_plate", "37.00", "618.00", "10.00", "12.00", "interior"],
            ["door", "hinge_cup", "575.00", "100.00", "35.00", "13.00", "interior"],
            ["door", "hinge_cup", "575.00", "618.00", "35.00", "13.00", "interior"],
        ]

    def test_through_holes(self, base_config: CabinetConfig) -> None:
        output = BuildCaissonCommand().execute(
            replace(base_config, fastener=FastenerKind.CONFIRMAT)
        )
        body = rows(CncCsvExporter().export_string(output))[1:]
        fasteners = [r for r in body if r[1] == "fastener"]

        assert len(fasteners) == 8
        assert all(r[6] == "through" and r[5] == "18.00" for r in fasteners)

    def test_withheld_panels_skipped(self, base_config: CabinetConfig) -> None:
        config = replace(
            base_config, depth=100, doors=DoorSpec(count=0), fastener=FastenerKind.MINIFIX
        )
        content = CncCsvExporter().export_string(BuildCaissonCommand().execute(config))
        assert rows(content) == [list(HEADER)]

    def test_custom_delimiter(self, base_output: CaissonOutput) -> None:
        content = CncCsvExporter(delimiter=",").export_string(base_output)
        assert content.startswith("PANEL,PURPOSE,")

    def test_export_writes_file(self, base_output: CaissonOutput, tmp_path: Path) -> None:
        path = tmp_path / "drill.csv"
        assert CncCsvExporter().export(base_output, path) == [path]
        assert path.read_text(encoding="utf-8").count("\n") == 5
