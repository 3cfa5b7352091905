"""Unit tests for the DXF exporter.

Files are written to a temporary directory and read back with ezdxf to
check layers, entities and units.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import ezdxf
import pytest
from ezdxf import units

from caissons.application import BuildCaissonCommand, CaissonOutput
from caissons.domain.value_objects import (
    CabinetConfig,
    CabinetFamily,
    DoorSpec,
    DrawerSpec,
    FastenerKind,
    ShelfSpec,
)
from caissons.infrastructure.exporters import DxfExporter, Exporter, ExporterRegistry
from caissons.infrastructure.exporters.dxf import LAYERS


# --- Fixtures ---


@pytest.fixture
def base_output(base_config: CabinetConfig) -> CaissonOutput:
    """Build output of the single-door base unit."""
    return BuildCaissonCommand().execute(base_config)


@pytest.fixture
def conflicted_output(base_config: CabinetConfig) -> CaissonOutput:
    """Output where sides, top and bottom have overlapping fastener holes."""
    config = replace(
        base_config, depth=100, doors=DoorSpec(count=0), fastener=FastenerKind.MINIFIX
    )
    return BuildCaissonCommand().execute(config)


# --- Test Classes ---


class TestDxfExporterRegistration:
    """Tests for DXF exporter registration."""

    def test_dxf_exporter_is_registered(self) -> None:
        assert ExporterRegistry.is_registered("dxf")
        assert ExporterRegistry.get("dxf") is DxfExporter

    def test_dxf_exporter_implements_protocol(self) -> None:
        assert isinstance(DxfExporter(), Exporter)


class TestDxfExporterInit:
    """Tests for DxfExporter initialization."""

    def test_defaults(self) -> None:
        exporter = DxfExporter()
        assert exporter.mode == "per_panel"
        assert exporter.panel_spacing == 50.0
        assert exporter.panels_per_row == 4

    def test_invalid_mode_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid mode"):
            DxfExporter(mode="sheets")

    def test_invalid_row_size(self) -> None:
        with pytest.raises(ValueError):
            DxfExporter(panels_per_row=0)

    def test_every_layer_has_a_colour(self) -> None:
        assert all(isinstance(color, int) for color in LAYERS.values())


class TestPerPanelExport:
    """Tests for one file per panel."""

    def test_one_file_per_panel(self, base_output: CaissonOutput, tmp_path: Path) -> None:
        files = DxfExporter().export(base_output, tmp_path / "base-600_dxf.dxf")

        assert [f.name for f in files] == [
            "base-600_dxf_side-left.dxf",
            "base-600_dxf_side-right.dxf",
            "base-600_dxf_top.dxf",
            "base-600_dxf_bottom.dxf",
            "base-600_dxf_back.dxf",
            "base-600_dxf_door.dxf",
        ]
        assert all(f.exists() for f in files)

    def test_door_file_contents(self, base_output: CaissonOutput, tmp_path: Path) -> None:
        DxfExporter().export(base_output, tmp_path / "out.dxf")
        doc = ezdxf.readfile(tmp_path / "out_door.dxf")
        msp = doc.modelspace()

        outlines = msp.query("LWPOLYLINE")
        circles = msp.query("CIRCLE")
        assert len(outlines) == 1
        assert outlines[0].closed
        assert outlines[0].dxf.layer == "OUTLINE"
        assert len(circles) == 2
        for circle in circles:
            assert circle.dxf.layer == "HINGE"
            assert circle.dxf.radius == pytest.approx(17.5)
            assert circle.dxf.thickness == pytest.approx(13.0)
        assert {round(c.dxf.center.x, 2) for c in circles} == {575.0}
        assert len(msp.query("MTEXT")) == 1

    def test_layers_and_units(self, base_output: CaissonOutput, tmp_path: Path) -> None:
        DxfExporter().export(base_output, tmp_path / "out.dxf")
        doc = ezdxf.readfile(tmp_path / "out_side-left.dxf")

        assert doc.units == units.MM
        for layer in LAYERS:
            assert layer.value in doc.layers

    def test_shelf_pins_on_their_layer(self, base_config: CabinetConfig, tmp_path: Path) -> None:
        output = BuildCaissonCommand().execute(
            replace(base_config, shelves=ShelfSpec(count=1, pins=True))
        )
        DxfExporter().export(output, tmp_path / "out.dxf")
        msp = ezdxf.readfile(tmp_path / "out_side-right.dxf").modelspace()

        assert len(msp.query('CIRCLE[layer=="SHELF_PIN"]')) == 40

    def test_back_groove_read_back(self, base_output: CaissonOutput, tmp_path: Path) -> None:
        DxfExporter().export(base_output, tmp_path / "out.dxf")
        msp = ezdxf.readfile(tmp_path / "out_side-left.dxf").modelspace()

        (groove,) = msp.query('LWPOLYLINE[layer=="GROOVE"]')
        assert groove.closed
        assert groove.dxf.thickness == pytest.approx(10.0)
        xs = {round(x, 2) for x, _ in groove.get_points("xy")}
        assert xs == {527.0, 545.0}
        assert len(msp.query('LWPOLYLINE[layer=="OUTLINE"]')) == 1

    def test_door_has_no_groove(self, base_output: CaissonOutput, tmp_path: Path) -> None:
        DxfExporter().export(base_output, tmp_path / "out.dxf")
        msp = ezdxf.readfile(tmp_path / "out_door.dxf").modelspace()
        assert len(msp.query('LWPOLYLINE[layer=="GROOVE"]')) == 0

    def test_drawer_runners_on_their_layer(self, tmp_path: Path) -> None:
        config = CabinetConfig(
            family=CabinetFamily.DRAWER_UNIT,
            width=500,
            height=720,
            depth=560,
            doors=DoorSpec(count=0),
            drawers=DrawerSpec(count=3, gap=2),
            name="drawers",
        )
        DxfExporter().export(BuildCaissonCommand().execute(config), tmp_path / "out.dxf")
        msp = ezdxf.readfile(tmp_path / "out_side.dxf").modelspace()

        runners = msp.query('CIRCLE[layer=="DRAWER_RUNNER"]')
        assert len(runners) == 12
        assert all(c.dxf.radius == pytest.approx(2.5) for c in runners)


class TestCombinedExport:
    """Tests for one combined sheet."""

    def test_single_file(self, base_output: CaissonOutput, tmp_path: Path) -> None:
        path = tmp_path / "sheet.dxf"
        files = DxfExporter(mode="combined").export(base_output, path)

        assert files == [path]
        msp = ezdxf.readfile(path).modelspace()
        assert len(msp.query('LWPOLYLINE[layer=="OUTLINE"]')) == 6
        assert len(msp.query("CIRCLE")) == 4
        assert len(msp.query("MTEXT")) == 6

    def test_panels_do_not_overlap(self, base_output: CaissonOutput) -> None:
        doc = DxfExporter(mode="combined", panels_per_row=2).render(base_output.documents)
        boxes = []
        for outline in doc.modelspace().query('LWPOLYLINE[layer=="OUTLINE"]'):
            xs = [p[0] for p in outline.get_points("xy")]
            ys = [p[1] for p in outline.get_points("xy")]
            boxes.append((min(xs), min(ys), max(xs), max(ys)))

        for i, a in enumerate(boxes):
            for b in boxes[i + 1 :]:
                separated = a[2] <= b[0] or b[2] <= a[0] or a[3] <= b[1] or b[3] <= a[1]
                assert separated

    def test_export_string(self, base_output: CaissonOutput) -> None:
        content = DxfExporter().export_string(base_output)
        assert "LWPOLYLINE" in content
        assert "HINGE" in content


class TestWithheldGeometry:
    """Panels with drilling conflicts are never exported."""

    def test_only_clean_panels_written(
        self, conflicted_output: CaissonOutput, tmp_path: Path
    ) -> None:
        files = DxfExporter().export(conflicted_output, tmp_path / "out.dxf")
        assert [f.name for f in files] == ["out_back.dxf"]

    def test_nothing_to_export(self, conflicted_output: CaissonOutput, tmp_path: Path) -> None:
        empty = replace(conflicted_output, documents=[])
        assert DxfExporter().export(empty, tmp_path / "out.dxf") == []
        assert DxfExporter().export_string(empty) == ""
