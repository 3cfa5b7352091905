"""Cabinet configuration validation.

Problems are collected as ``ConfigValidationError`` records instead of
being raised, so a caller can show every problem at once and decomposition
can still proceed with the valid parts of the configuration.
"""

from __future__ import annotations

from caissons.domain.findings import ConfigValidationError
from caissons.domain.hardware import (
    HardwareNotFound,
    lookup_fastener,
    lookup_hinge,
    lookup_runner,
)
from caissons.domain.value_objects import BackMounting, CabinetConfig, CabinetFamily

# Physical ranges of external dimensions (mm): (min, max)
HEIGHT_RANGE = (200.0, 2800.0)
WIDTH_RANGE = (100.0, 2800.0)
DEPTH_RANGE = (100.0, 2800.0)

MAX_DOORS = 2


def _check_range(
    errors: list[ConfigValidationError],
    path: str,
    value: float,
    bounds: tuple[float, float],
) -> None:
    low, high = bounds
    if not low <= value <= high:
        errors.append(
            ConfigValidationError(
                path=path,
                message=f"Must be between {low:g} and {high:g} mm",
                value=value,
            )
        )


def _check_thicknesses(
    config: CabinetConfig, errors: list[ConfigValidationError]
) -> None:
    thickness = config.thickness
    for role in ("carcass", "back", "door", "shelf", "drawer_box"):
        value = getattr(thickness, role)
        if value <= 0:
            errors.append(
                ConfigValidationError(
                    path=f"thickness.{role}",
                    message="Thickness must be positive",
                    value=value,
                )
            )

    carcass = thickness.carcass
    if carcass > 0 and (2 * carcass >= config.width or 2 * carcass >= config.height):
        errors.append(
            ConfigValidationError(
                path="thickness.carcass",
                message="Two carcass panels must fit inside the external width and height",
                value=carcass,
            )
        )
    for role in ("carcass", "back", "door"):
        value = getattr(thickness, role)
        if value > 0 and value >= config.depth:
            errors.append(
                ConfigValidationError(
                    path=f"thickness.{role}",
                    message="Thickness must be below the external depth",
                    value=value,
                )
            )
    if thickness.shelf > 0 and thickness.shelf >= config.height:
        errors.append(
            ConfigValidationError(
                path="thickness.shelf",
                message="Thickness must be below the external height",
                value=thickness.shelf,
            )
        )


def _check_layout(config: CabinetConfig, errors: list[ConfigValidationError]) -> None:
    doors = config.doors
    if not 0 <= doors.count <= MAX_DOORS:
        errors.append(
            ConfigValidationError(
                path="doors.count",
                message=f"Door count must be between 0 and {MAX_DOORS}",
                value=doors.count,
            )
        )
    if doors.gap < 0:
        errors.append(
            ConfigValidationError(
                path="doors.gap", message="Door gap cannot be negative", value=doors.gap
            )
        )

    drawers = config.drawers
    if config.family is CabinetFamily.DRAWER_UNIT:
        if drawers.count < 1:
            errors.append(
                ConfigValidationError(
                    path="drawers.count",
                    message="A drawer unit needs at least one drawer",
                    value=drawers.count,
                )
            )
        if doors.count > 0:
            errors.append(
                ConfigValidationError(
                    path="doors.count",
                    message="Drawer units carry drawer fronts, not doors",
                    value=doors.count,
                )
            )
    elif drawers.count > 0:
        errors.append(
            ConfigValidationError(
                path="drawers.count",
                message=f"Only drawer units carry drawers (family is '{config.family.value}')",
                value=drawers.count,
            )
        )
    if drawers.gap < 0:
        errors.append(
            ConfigValidationError(
                path="drawers.gap",
                message="Drawer gap cannot be negative",
                value=drawers.gap,
            )
        )

    if config.shelves.count < 0:
        errors.append(
            ConfigValidationError(
                path="shelves.count",
                message="Shelf count cannot be negative",
                value=config.shelves.count,
            )
        )

    back = config.back
    if back.mounting is BackMounting.GROOVED:
        if back.groove_depth <= 0 or back.groove_depth >= config.thickness.carcass:
            errors.append(
                ConfigValidationError(
                    path="back.groove_depth",
                    message="Groove depth must be positive and below the carcass thickness",
                    value=back.groove_depth,
                )
            )
        if back.groove_offset is not None and back.groove_offset < 0:
            errors.append(
                ConfigValidationError(
                    path="back.groove_offset",
                    message="Groove offset cannot be negative",
                    value=back.groove_offset,
                )
            )

    if config.min_panel_area_m2 <= 0:
        errors.append(
            ConfigValidationError(
                path="min_panel_area_m2",
                message="Minimum panel area must be positive",
                value=config.min_panel_area_m2,
            )
        )


def _check_hardware(config: CabinetConfig, errors: list[ConfigValidationError]) -> None:
    if config.has_hinged_doors:
        selection = config.hinge
        hinge = lookup_hinge(selection.family, selection.angle, selection.mounting_plate)
        if isinstance(hinge, HardwareNotFound):
            errors.append(
                ConfigValidationError(
                    path="hinge",
                    message=hinge.message,
                    value=selection.family,
                )
            )
        else:
            if config.depth < hinge.min_cabinet_depth:
                errors.append(
                    ConfigValidationError(
                        path="cabinet.depth",
                        message=(
                            f"Hinge {hinge.reference} needs a cabinet depth of at "
                            f"least {hinge.min_cabinet_depth:g} mm"
                        ),
                        value=config.depth,
                    )
                )
            door = config.thickness.door
            if not hinge.min_door_thickness <= door <= hinge.max_door_thickness:
                errors.append(
                    ConfigValidationError(
                        path="thickness.door",
                        message=(
                            f"Hinge {hinge.reference} takes doors "
                            f"{hinge.min_door_thickness:g}-{hinge.max_door_thickness:g} mm thick"
                        ),
                        value=door,
                    )
                )

    if config.family is CabinetFamily.DRAWER_UNIT and config.drawers.count > 0:
        runner = lookup_runner(config.drawers.runner)
        if isinstance(runner, HardwareNotFound):
            errors.append(
                ConfigValidationError(
                    path="drawers.runner",
                    message=runner.message,
                    value=config.drawers.runner,
                )
            )
        elif not (
            runner.min_panel_thickness
            <= config.thickness.carcass
            <= runner.max_panel_thickness
        ):
            errors.append(
                ConfigValidationError(
                    path="thickness.carcass",
                    message=(
                        f"{runner.name} mounts on sides "
                        f"{runner.min_panel_thickness:g}-{runner.max_panel_thickness:g} mm thick"
                    ),
                    value=config.thickness.carcass,
                )
            )

    if config.fastener is not None:
        fastener = lookup_fastener(config.fastener)
        if isinstance(fastener, HardwareNotFound):
            errors.append(
                ConfigValidationError(
                    path="fastener", message=fastener.message, value=config.fastener
                )
            )
        elif not (
            fastener.min_panel_thickness
            <= config.thickness.carcass
            <= fastener.max_panel_thickness
        ):
            errors.append(
                ConfigValidationError(
                    path="fastener",
                    message=(
                        f"{fastener.name} fits carcass panels "
                        f"{fastener.min_panel_thickness:g}-{fastener.max_panel_thickness:g} mm thick"
                    ),
                    value=config.thickness.carcass,
                )
            )


def validate_cabinet_config(config: CabinetConfig) -> list[ConfigValidationError]:
    """Collect every configuration problem.

    Args:
        config: Cabinet configuration to check.

    Returns:
        List of validation errors, empty when the configuration is valid.
    """
    errors: list[ConfigValidationError] = []
    _check_range(errors, "cabinet.height", config.height, HEIGHT_RANGE)
    _check_range(errors, "cabinet.width", config.width, WIDTH_RANGE)
    _check_range(errors, "cabinet.depth", config.depth, DEPTH_RANGE)
    _check_thicknesses(config, errors)
    _check_layout(config, errors)
    _check_hardware(config, errors)
    return errors
