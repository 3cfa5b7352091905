"""Unit tests for drilling position calculation and validation."""

from __future__ import annotations

from dataclasses import replace

import pytest

from caissons.domain.services import (
    DrillingPlan,
    compute_drillings,
    decompose,
    validate_drillings,
)
from caissons.domain.value_objects import (
    CabinetConfig,
    CabinetFamily,
    ConflictKind,
    DoorMounting,
    DoorSpec,
    DrawerSpec,
    DrillingPoint,
    DrillPurpose,
    FastenerKind,
    Hand,
    HingeSelection,
    MaterialThicknesses,
    MountingPlateType,
    Panel,
    PanelRole,
    ShelfSpec,
)


# --- Helper Functions ---


def plan_for(config: CabinetConfig) -> DrillingPlan:
    """Decompose and drill a configuration."""
    return compute_drillings(decompose(config).panels, config)


def coords(plan: DrillingPlan, panel_id: str, purpose: DrillPurpose) -> list[tuple[float, float]]:
    """Sorted (x, y) of one panel's points with the given purpose."""
    return sorted((p.x, p.y) for p in plan.for_panel(panel_id) if p.purpose is purpose)


def point(x: float, y: float, diameter: float = 5.0, depth: float = 10.0, **kwargs) -> DrillingPoint:
    return DrillingPoint(
        panel_id="p",
        x=x,
        y=y,
        diameter=diameter,
        depth=depth,
        purpose=kwargs.pop("purpose", DrillPurpose.FASTENER),
        **kwargs,
    )


# --- Fixtures ---


@pytest.fixture
def square_panel() -> Panel:
    """100 x 100 x 18 shelf for validation tests."""
    return Panel(id="p", name="Test", role=PanelRole.SHELF, length=100, width=100, thickness=18)


@pytest.fixture
def drawer_config() -> CabinetConfig:
    """500 x 720 x 560 drawer unit, three overlay fronts on TANDEM runners."""
    return CabinetConfig(
        family=CabinetFamily.DRAWER_UNIT,
        width=500,
        height=720,
        depth=560,
        doors=DoorSpec(count=0),
        drawers=DrawerSpec(count=3, gap=2),
    )


# --- Test Classes ---


class TestHingeDrilling:
    """Tests for hinge cups and the mating mounting plates."""

    def test_left_hinged_door_cups(self, base_config: CabinetConfig) -> None:
        """Seen from inside, the hinged edge of a left door is at x = length."""
        plan = plan_for(base_config)
        assert coords(plan, "door", DrillPurpose.HINGE_CUP) == [(575.0, 100.0), (575.0, 618.0)]

    def test_cup_dimensions(self, base_config: CabinetConfig) -> None:
        cups = plan_for(base_config).for_panel("door")
        assert all(p.diameter == 35.0 and p.depth == 13.0 for p in cups)
        assert all(p.label == "cup" for p in cups)

    def test_left_side_plates_match_door(self, base_config: CabinetConfig) -> None:
        """Plates sit 37 mm from the front edge at the door's hinge heights."""
        plan = plan_for(base_config)
        assert coords(plan, "side-left", DrillPurpose.MOUNTING_PLATE) == [
            (37.0, 100.0),
            (37.0, 618.0),
        ]
        assert plan.hinge_offsets["door"] == plan.hinge_offsets["side-left"] == (100.0, 618.0)

    def test_opposite_side_not_drilled(self, base_config: CabinetConfig) -> None:
        plan = plan_for(base_config)
        assert plan.for_panel("side-right") == ()
        assert "side-right" not in plan.hinge_offsets

    def test_right_hinged_door(self, base_config: CabinetConfig) -> None:
        config = replace(base_config, doors=DoorSpec(count=1, hinge_side=Hand.RIGHT))
        plan = plan_for(config)

        assert coords(plan, "door", DrillPurpose.HINGE_CUP) == [(23.0, 100.0), (23.0, 618.0)]
        # x = 0 is the back edge of the right side
        assert coords(plan, "side-right", DrillPurpose.MOUNTING_PLATE) == [
            (523.0, 100.0),
            (523.0, 618.0),
        ]
        assert plan.for_panel("side-left") == ()

    def test_door_pair(self, base_config: CabinetConfig) -> None:
        plan = plan_for(replace(base_config, doors=DoorSpec(count=2, gap=2)))

        assert {x for x, _ in coords(plan, "door-left", DrillPurpose.HINGE_CUP)} == {275.0}
        assert {x for x, _ in coords(plan, "door-right", DrillPurpose.HINGE_CUP)} == {23.0}
        assert {x for x, _ in coords(plan, "side-left", DrillPurpose.MOUNTING_PLATE)} == {37.0}
        assert {x for x, _ in coords(plan, "side-right", DrillPurpose.MOUNTING_PLATE)} == {523.0}

    def test_tall_door_three_hinges(self, base_config: CabinetConfig) -> None:
        plan = plan_for(replace(base_config, height=1400))
        assert [y for _, y in coords(plan, "door", DrillPurpose.HINGE_CUP)] == [100.0, 699.0, 1298.0]
        assert [y for _, y in coords(plan, "side-left", DrillPurpose.MOUNTING_PLATE)] == [
            100.0,
            699.0,
            1298.0,
        ]

    def test_inset_door_moves_plates(self, base_config: CabinetConfig) -> None:
        """Inset doors push the plate line back by the door thickness and up by the gap."""
        config = replace(base_config, doors=DoorSpec(count=1, mounting=DoorMounting.INSET, gap=2))
        plan = plan_for(config)

        assert coords(plan, "door", DrillPurpose.HINGE_CUP) == [(537.0, 100.0), (537.0, 580.0)]
        assert coords(plan, "side-left", DrillPurpose.MOUNTING_PLATE) == [
            (55.0, 120.0),
            (55.0, 600.0),
        ]

    def test_wing_plate_has_two_screws_per_hinge(self, base_config: CabinetConfig) -> None:
        config = replace(base_config, hinge=HingeSelection(mounting_plate=MountingPlateType.WING_0MM))
        plan = plan_for(config)
        assert coords(plan, "side-left", DrillPurpose.MOUNTING_PLATE) == [
            (37.0, 84.0),
            (37.0, 116.0),
            (37.0, 602.0),
            (37.0, 634.0),
        ]

    def test_inserta_dowels(self, base_config: CabinetConfig) -> None:
        config = replace(
            base_config,
            hinge=HingeSelection(family="inserta", mounting_plate=MountingPlateType.INSERTA_0MM),
        )
        plan = plan_for(config)
        door = plan.for_panel("door")

        assert len(door) == 6
        dowels = sorted((p.x, p.y) for p in door if p.label == "dowel")
        assert dowels[:2] == [(565.5, 77.5), (565.5, 122.5)]
        assert plan.conflicts == ()


class TestShelfPins:
    """Tests for the 32 mm shelf-pin grid."""

    def test_pin_grid(self, open_config: CabinetConfig) -> None:
        plan = plan_for(open_config)
        pins = coords(plan, "side", DrillPurpose.SHELF_PIN)
        ys = sorted({y for _, y in pins})

        assert {x for x, _ in pins} == {37.0, 263.0}
        assert ys[0] == 55.0
        assert ys[-1] == 1719.0
        assert all(b - a == 32.0 for a, b in zip(ys, ys[1:]))
        assert len(pins) == 2 * len(ys) == 106

    def test_pins_beside_plates(self, base_config: CabinetConfig) -> None:
        config = replace(base_config, shelves=ShelfSpec(count=1, pins=True))
        plan = plan_for(config)

        assert len(coords(plan, "side-left", DrillPurpose.SHELF_PIN)) == 40
        assert len(coords(plan, "side-right", DrillPurpose.SHELF_PIN)) == 40
        assert plan.conflicts == ()

    def test_no_pins_when_disabled(self, base_config: CabinetConfig) -> None:
        config = replace(base_config, shelves=ShelfSpec(count=2, pins=False))
        assert coords(plan_for(config), "side-left", DrillPurpose.SHELF_PIN) == []


class TestFastenerDrilling:
    """Tests for knock-down fastener holes."""

    def test_minifix_bolts_and_housings(self, base_config: CabinetConfig) -> None:
        plan = plan_for(replace(base_config, fastener=FastenerKind.MINIFIX))

        assert coords(plan, "side-right", DrillPurpose.FASTENER) == [
            (50.0, 9.0),
            (50.0, 711.0),
            (510.0, 9.0),
            (510.0, 711.0),
        ]
        assert coords(plan, "top", DrillPurpose.FASTENER) == [
            (24.0, 50.0),
            (24.0, 510.0),
            (540.0, 50.0),
            (540.0, 510.0),
        ]
        housings = plan.for_panel("bottom")
        assert all(p.diameter == 15.0 and p.label == "housing" for p in housings)

    def test_confirmat_is_through(self, base_config: CabinetConfig) -> None:
        plan = plan_for(replace(base_config, fastener=FastenerKind.CONFIRMAT))
        holes = [p for p in plan.for_panel("side-left") if p.purpose is DrillPurpose.FASTENER]

        assert len(holes) == 4
        assert all(p.through and p.depth == 18.0 for p in holes)
        assert plan.for_panel("top") == ()

    def test_dowels_have_no_housing(self, base_config: CabinetConfig) -> None:
        plan = plan_for(replace(base_config, fastener=FastenerKind.DOWEL))
        assert plan.for_panel("top") == ()
        assert len(coords(plan, "side-left", DrillPurpose.FASTENER)) == 4


class TestDrawerRunnerDrilling:
    """Tests for drawer runner holes on the carcass sides."""

    def test_runner_holes_per_drawer(self, drawer_config: CabinetConfig) -> None:
        """Front line 37 mm back, rear hole 37 mm short of the 500 mm runner."""
        plan = plan_for(drawer_config)
        holes = coords(plan, "side", DrillPurpose.DRAWER_RUNNER)

        assert [(x, y) for x, y in holes if y < 240] == [
            (37.0, 32.0),
            (37.0, 64.0),
            (37.0, 96.0),
            (500.0, 32.0),
        ]
        assert len(holes) == 12
        assert sorted({y for x, y in holes if x == 500.0}) == [32.0, 272.0, 512.0]
        assert plan.conflicts == ()

    def test_runner_hole_dimensions(self, drawer_config: CabinetConfig) -> None:
        holes = [
            p for p in plan_for(drawer_config).for_panel("side")
            if p.purpose is DrillPurpose.DRAWER_RUNNER
        ]
        assert all(p.diameter == 5.0 and p.depth == 13.0 for p in holes)
        assert {p.label for p in holes} == {"runner", "runner rear"}

    def test_two_hole_runner(self, drawer_config: CabinetConfig) -> None:
        config = replace(drawer_config, drawers=DrawerSpec(count=3, gap=2, runner="movento"))
        holes = coords(plan_for(config), "side", DrillPurpose.DRAWER_RUNNER)
        assert len(holes) == 9
        assert [y for x, y in holes if x == 37.0][:2] == [32.0, 64.0]

    def test_inset_fronts_shift_runners(self, drawer_config: CabinetConfig) -> None:
        """Inset fronts move the runners back by the front thickness and up by t + gap."""
        config = replace(
            drawer_config, doors=DoorSpec(count=0, mounting=DoorMounting.INSET, gap=2)
        )
        holes = coords(plan_for(config), "side", DrillPurpose.DRAWER_RUNNER)

        assert {x for x, _ in holes} == {55.0, 518.0}
        assert holes[0] == (55.0, 52.0)

    def test_runners_with_fasteners(self, drawer_config: CabinetConfig) -> None:
        plan = plan_for(replace(drawer_config, fastener=FastenerKind.DOWEL))

        assert len(coords(plan, "side", DrillPurpose.FASTENER)) == 4
        assert len(coords(plan, "side", DrillPurpose.DRAWER_RUNNER)) == 12
        assert plan.conflicts == ()

    def test_no_runners_without_drawers(self, base_config: CabinetConfig) -> None:
        plan = plan_for(base_config)
        assert coords(plan, "side-left", DrillPurpose.DRAWER_RUNNER) == []


class TestDrillingFindings:
    """Tests for hardware errors and geometry conflicts."""

    def test_unknown_hinge_scoped_to_hinged_panels(self, base_config: CabinetConfig) -> None:
        config = replace(
            base_config,
            hinge=HingeSelection(family="imaginary"),
            fastener=FastenerKind.DOWEL,
        )
        plan = plan_for(config)

        assert {e.panel_id for e in plan.hardware_errors} == {"door", "side-left"}
        assert plan.for_panel("door") == ()
        assert coords(plan, "side-left", DrillPurpose.MOUNTING_PLATE) == []
        # every other drilling still happens
        assert len(coords(plan, "side-left", DrillPurpose.FASTENER)) == 4
        assert len(plan.for_panel("side-right")) == 4

    def test_unknown_fastener_flags_fastened_panels(self, base_config: CabinetConfig) -> None:
        plan = plan_for(replace(base_config, fastener="glue"))
        flagged = {e.panel_id: e for e in plan.hardware_errors}

        assert set(flagged) == {"side-left", "side-right", "top", "bottom"}
        assert flagged["top"].message == "Unknown fastener 'glue'"
        assert flagged["top"].family == "glue"
        assert plan.hole_count == 4
        assert coords(plan, "side-left", DrillPurpose.MOUNTING_PLATE) == [
            (37.0, 100.0),
            (37.0, 618.0),
        ]

    def test_unknown_runner_flags_sides(self, drawer_config: CabinetConfig) -> None:
        config = replace(drawer_config, drawers=DrawerSpec(count=3, gap=2, runner="nope"))
        plan = plan_for(config)

        assert [e.panel_id for e in plan.hardware_errors] == ["side"]
        assert plan.hardware_errors[0].message == "Unknown drawer runner 'nope'"
        assert coords(plan, "side", DrillPurpose.DRAWER_RUNNER) == []

    def test_door_outside_hinge_range(self, base_config: CabinetConfig) -> None:
        plan = plan_for(replace(base_config, height=240))
        messages = {e.panel_id: e.message for e in plan.hardware_errors}

        assert "238 mm door" in messages["door"]
        assert messages["side-left"] == "Mating door has no hinge layout"

    def test_overlapping_bolts_reported(self, base_config: CabinetConfig) -> None:
        """On a 100 mm deep carcass both bolt rows land on the same spot."""
        config = replace(
            base_config, depth=100, doors=DoorSpec(count=0), fastener=FastenerKind.MINIFIX
        )
        plan = plan_for(config)

        assert plan.conflicted_panel_ids == frozenset({"side", "top", "bottom"})
        assert all(c.kind is ConflictKind.OVERLAP for c in plan.conflicts)
        assert plan.conflicts_for("back") == []

    def test_thin_carcass_too_deep(self, base_config: CabinetConfig) -> None:
        config = replace(base_config, thickness=MaterialThicknesses(carcass=12, back=8))
        plan = plan_for(config)
        kinds = {c.kind for c in plan.conflicts_for("side-left")}
        assert ConflictKind.TOO_DEEP in kinds

    def test_clean_plan(self, base_config: CabinetConfig) -> None:
        plan = plan_for(base_config)
        assert plan.conflicts == ()
        assert plan.hardware_errors == ()
        assert plan.hole_count == 4

    def test_every_panel_has_an_entry(self, base_config: CabinetConfig) -> None:
        result = decompose(base_config)
        plan = compute_drillings(result.panels, base_config)
        assert set(plan.points) == {p.id for p in result.panels}
        assert plan.for_panel("missing") == ()

    def test_repeatable(self, base_config: CabinetConfig) -> None:
        config = replace(base_config, fastener=FastenerKind.MINIFIX, shelves=ShelfSpec(1, True))
        first = plan_for(config)
        second = plan_for(config)
        assert dict(first.points) == dict(second.points)
        assert first.conflicts == second.conflicts


class TestValidateDrillings:
    """Tests for bounds, overlap and depth checks."""

    def test_valid_points(self, square_panel: Panel) -> None:
        assert validate_drillings(square_panel, [point(20, 20), point(80, 80)]) == []

    def test_edge_clearance_is_inclusive(self, square_panel: Panel) -> None:
        """A hole leaving exactly 3 mm of material is accepted."""
        assert validate_drillings(square_panel, [point(5.5, 50)]) == []

    def test_out_of_bounds(self, square_panel: Panel) -> None:
        conflicts = validate_drillings(square_panel, [point(2, 50)])
        assert len(conflicts) == 1
        assert conflicts[0].kind is ConflictKind.OUT_OF_BOUNDS

    def test_point_outside_panel(self, square_panel: Panel) -> None:
        conflicts = validate_drillings(square_panel, [point(50, 150)])
        assert conflicts[0].kind is ConflictKind.OUT_OF_BOUNDS

    def test_overlap(self, square_panel: Panel) -> None:
        first, second = point(50, 50), point(54, 50)
        conflicts = validate_drillings(square_panel, [first, second])

        assert len(conflicts) == 1
        assert conflicts[0].kind is ConflictKind.OVERLAP
        assert conflicts[0].points == (first, second)

    def test_hole_clearance(self, square_panel: Panel) -> None:
        """Two 5 mm holes need 7 mm between centres."""
        assert validate_drillings(square_panel, [point(50, 50), point(57, 50)]) == []
        assert validate_drillings(square_panel, [point(50, 50), point(56.9, 50)])

    def test_too_deep(self, square_panel: Panel) -> None:
        conflicts = validate_drillings(square_panel, [point(50, 50, depth=18)])
        assert [c.kind for c in conflicts] == [ConflictKind.TOO_DEEP]

    def test_through_hole_not_too_deep(self, square_panel: Panel) -> None:
        assert validate_drillings(square_panel, [point(50, 50, depth=18, through=True)]) == []

    def test_foreign_point_rejected(self, square_panel: Panel) -> None:
        foreign = DrillingPoint(
            panel_id="other", x=10, y=10, diameter=5, depth=5, purpose=DrillPurpose.FASTENER
        )
        with pytest.raises(ValueError, match="other"):
            validate_drillings(square_panel, [foreign])

    def test_point_rejects_bad_diameter(self) -> None:
        with pytest.raises(ValueError):
            point(10, 10, diameter=0)
