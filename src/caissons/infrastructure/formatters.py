"""Text formatters for caisson build results."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from caissons.domain.findings import unique_hardware_errors
from caissons.domain.hardware import MOUNTING_PLATES, RUNNERS, available_hinges

if TYPE_CHECKING:
    from caissons.domain.services import DecompositionResult, DrillingPlan


class PanelListFormatter:
    """Formats the panel list of a decomposition with totals."""

    def format(self, result: DecompositionResult) -> str:
        """Format panels as a table.

        Edge columns show A B C D flags: A and B are the length edges, C and
        D the width edges.
        """
        if not result.panels:
            return "No panels."

        width = 96
        lines = [
            f"PANEL LIST - {result.config.name}",
            "=" * width,
            f"{'Id':<16} {'Panel':<24} {'Length':>8} {'Width':>8} {'Thk':>5} "
            f"{'Qty':>4} {'Edges':>6} {'m²':>8} {'Band m':>8}",
            "-" * width,
        ]
        for panel in result.panels:
            edges = "".join(
                letter if flag else "-"
                for letter, flag in zip("ABCD", panel.edge_banding.flags)
            )
            lines.append(
                f"{panel.id:<16} {panel.name:<24} {panel.length:>8.1f} {panel.width:>8.1f} "
                f"{panel.thickness:>5g} {panel.quantity:>4} {edges:>6} "
                f"{panel.total_surface_m2:>8.3f} {panel.total_edge_banding_m:>8.2f}"
            )
        lines.append("-" * width)
        lines.append(
            f"{'TOTAL':<16} {result.panel_count:>4} pieces"
            f"{'':>39} {result.total_surface_m2:>8.3f} {result.total_edge_banding_m:>8.2f}"
        )
        if result.total_billed_surface_m2 != result.total_surface_m2:
            lines.append(
                f"Billed surface (minimum {result.config.min_panel_area_m2:g} m² per piece): "
                f"{result.total_billed_surface_m2:.3f} m²"
            )
        interior = result.interior
        lines.append(
            f"Interior: {interior.width:g} x {interior.height:g} x {interior.depth:g} mm"
        )
        return "\n".join(lines)


class DrillingReportFormatter:
    """Summarizes holes per panel and purpose."""

    def format(self, plan: DrillingPlan, title: str = "DRILLING") -> str:
        lines = [title, "=" * 60]
        if plan.hole_count == 0:
            lines.append("No drilling required.")
            return "\n".join(lines)

        for panel_id, points in plan.points.items():
            if not points:
                continue
            counts = Counter(point.purpose.value for point in points)
            summary = ", ".join(f"{count} {purpose}" for purpose, count in sorted(counts.items()))
            lines.append(f"  {panel_id:<18} {len(points):>4} holes  ({summary})")
            offsets = plan.hinge_offsets.get(panel_id)
            if offsets:
                lines.append(f"    hinge Y: {', '.join(f'{y:g}' for y in offsets)}")
        lines.append("-" * 60)
        lines.append(f"  {'TOTAL':<18} {plan.hole_count:>4} holes")
        return "\n".join(lines)


class FindingsFormatter:
    """Formats every finding of a build, errors first."""

    def format(self, result: DecompositionResult, plan: DrillingPlan) -> str:
        lines: list[str] = []
        for error in result.errors:
            lines.append(f"  ✗ {error.path}: {error.message}")
        for hw in unique_hardware_errors(result.hardware_errors, plan.hardware_errors):
            lines.append(f"  ✗ {hw.panel_id}: hardware - {hw.message}")
        for conflict in plan.conflicts:
            lines.append(
                f"  ✗ {conflict.panel_id}: {conflict.kind.value} - {conflict.message}"
            )
        for warning in result.warnings:
            lines.append(f"  ⚠ {warning.path}: {warning.message}")
            if warning.suggestion:
                lines.append(f"    Suggestion: {warning.suggestion}")

        if not lines:
            return "No findings."
        return "\n".join(["FINDINGS", "=" * 60, *lines])


class HardwareCatalogFormatter:
    """Lists the hinge, mounting plate and drawer runner catalog."""

    def format(self) -> str:
        lines = [
            "HINGES",
            "=" * 72,
            f"{'Family':<10} {'Angle':>6} {'Reference':<10} {'Cup':<10} "
            f"{'Door height':<13} {'Min depth':>9}",
            "-" * 72,
        ]
        for hinge in available_hinges():
            cup = f"Ø{hinge.cup_diameter:g}x{hinge.cup_depth:g}"
            heights = f"{hinge.min_door_height:g}-{hinge.max_door_height:g}"
            lines.append(
                f"{hinge.family:<10} {hinge.angle.value:>5}° {hinge.reference:<10} {cup:<10} "
                f"{heights:<13} {hinge.min_cabinet_depth:>9g}"
            )
        lines.extend(["", "MOUNTING PLATES", "=" * 72])
        for plate in MOUNTING_PLATES.values():
            holes = ", ".join(
                f"Ø{hole.diameter:g}x{hole.depth:g} {hole.label}" for hole in plate.holes
            )
            lines.append(
                f"{plate.plate_type.value:<12} {plate.reference:<10} {plate.name:<28} {holes}"
            )
        lines.extend(["", "DRAWER RUNNERS", "=" * 72])
        for runner in RUNNERS.values():
            lengths = f"{runner.lengths[0]:g}-{runner.lengths[-1]:g}"
            lines.append(
                f"{runner.family:<12} {runner.reference:<10} {runner.name:<36} {lengths} mm"
            )
        return "\n".join(lines)
