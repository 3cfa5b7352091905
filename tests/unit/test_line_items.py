"""Unit tests for quote line items and the line-item JSON exporter."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

import pytest

from caissons.application import BuildCaissonCommand, ExternalLineItem, to_line_items
from caissons.domain.services import decompose
from caissons.domain.value_objects import CabinetConfig, HingeSelection
from caissons.infrastructure.exporters import ExporterRegistry, LineItemsExporter


LINE_ITEM_FIELDS = {
    "reference",
    "panel_id",
    "role",
    "length_mm",
    "width_mm",
    "thickness_mm",
    "quantity",
    "edge_a",
    "edge_b",
    "edge_c",
    "edge_d",
    "material_ref",
    "surface_m2",
    "billed_surface_m2",
    "edge_banding_m",
}


class TestToLineItems:
    """Tests for flattening a decomposition."""

    def test_one_line_per_panel_entry(self, open_config: CabinetConfig) -> None:
        result = decompose(open_config)
        items = to_line_items(result)

        assert [i.panel_id for i in items] == [p.id for p in result.panels]
        assert sum(i.quantity for i in items) == result.panel_count

    def test_wire_fields(self, base_config: CabinetConfig) -> None:
        item = to_line_items(decompose(base_config))[0]
        data = item.to_dict()

        assert set(data) == LINE_ITEM_FIELDS
        assert data["reference"] == "Left side"
        assert data["role"] == "side"
        assert (data["length_mm"], data["width_mm"], data["thickness_mm"]) == (560.0, 720.0, 18.0)

    def test_edge_flags(self, base_config: CabinetConfig) -> None:
        items = {i.panel_id: i for i in to_line_items(decompose(base_config))}
        door, side, top = items["door"], items["side-left"], items["top"]

        assert (door.edge_a, door.edge_b, door.edge_c, door.edge_d) == (True, True, True, True)
        assert (side.edge_a, side.edge_b, side.edge_c, side.edge_d) == (False, False, True, False)
        assert not any((top.edge_a, top.edge_b, top.edge_c, top.edge_d))

    def test_expanded_references(self, open_config: CabinetConfig) -> None:
        result = decompose(open_config)
        items = to_line_items(result, expand=True)

        assert [i.reference for i in items if i.panel_id == "side"] == ["Side (1/2)", "Side (2/2)"]
        assert [i.reference for i in items if i.panel_id == "shelf"] == ["Shelf (1/2)", "Shelf (2/2)"]
        assert all(i.quantity == 1 for i in items)
        assert len(items) == result.panel_count == 7

    @pytest.mark.parametrize("expand", [False, True])
    def test_line_totals_match_decomposition(
        self, open_config: CabinetConfig, expand: bool
    ) -> None:
        result = decompose(open_config)
        items = to_line_items(result, expand=expand)

        assert sum(i.surface_m2 for i in items) == pytest.approx(result.total_surface_m2, abs=1e-3)
        assert sum(i.billed_surface_m2 for i in items) == pytest.approx(
            result.total_billed_surface_m2, abs=1e-3
        )
        assert sum(i.edge_banding_m for i in items) == pytest.approx(
            result.total_edge_banding_m, abs=1e-3
        )

    def test_billed_surface_raised_to_minimum(self, open_config: CabinetConfig) -> None:
        shelf = next(i for i in to_line_items(decompose(open_config)) if i.panel_id == "shelf")
        assert shelf.surface_m2 == 0.3916
        assert shelf.billed_surface_m2 == 0.5

    def test_material_refs(self, base_config: CabinetConfig) -> None:
        config = replace(base_config, material_ref="MEL-WHITE-18", door_material_ref="MEL-OAK-18")
        items = {i.panel_id: i for i in to_line_items(decompose(config))}

        assert items["side-left"].material_ref == "MEL-WHITE-18"
        assert items["door"].material_ref == "MEL-OAK-18"

    def test_items_are_frozen(self, base_config: CabinetConfig) -> None:
        item = to_line_items(decompose(base_config))[0]
        assert isinstance(item, ExternalLineItem)
        with pytest.raises(AttributeError):
            item.quantity = 5  # type: ignore[misc]


class TestLineItemsExporter:
    """Tests for the line-item JSON document."""

    def test_registered(self) -> None:
        assert ExporterRegistry.get("line-items") is LineItemsExporter
        assert LineItemsExporter.file_extension == "json"

    def test_document_layout(self, base_config: CabinetConfig) -> None:
        output = BuildCaissonCommand().execute(base_config)
        data = json.loads(LineItemsExporter().export_string(output))

        assert data["schema_version"] == "1.0"
        assert data["project"] == "base-600"
        assert data["family"] == "base"
        assert len(data["items"]) == 6
        assert data["totals"] == {
            "pieces": 6,
            "surface_m2": 2.2786,
            "billed_surface_m2": output.result.total_billed_surface_m2,
            "edge_banding_m": 4.636,
        }
        assert data["flagged_panels"] == []

    def test_expand_option(self, open_config: CabinetConfig) -> None:
        output = BuildCaissonCommand().execute(open_config)
        collapsed = json.loads(LineItemsExporter().export_string(output))
        expanded = json.loads(LineItemsExporter(expand=True).export_string(output))

        assert len(collapsed["items"]) == 5
        assert len(expanded["items"]) == 7
        assert expanded["totals"] == collapsed["totals"]

    def test_command_expansion_carried(self, open_config: CabinetConfig) -> None:
        output = BuildCaissonCommand(expand_line_items=True).execute(open_config)
        data = json.loads(LineItemsExporter().export_string(output))
        assert len(data["items"]) == 7

    def test_flagged_panels(self, base_config: CabinetConfig) -> None:
        config = replace(base_config, hinge=HingeSelection(family="imaginary"))
        output = BuildCaissonCommand().execute(config)
        data = json.loads(LineItemsExporter().export_string(output))

        assert data["flagged_panels"] == ["door", "side-left"]
        assert len(data["items"]) == 6

    def test_export_writes_file(self, base_config: CabinetConfig, tmp_path: Path) -> None:
        output = BuildCaissonCommand().execute(base_config, project_name="kitchen")
        path = tmp_path / "items.json"

        assert LineItemsExporter().export(output, path) == [path]
        assert json.loads(path.read_text(encoding="utf-8"))["project"] == "kitchen"
