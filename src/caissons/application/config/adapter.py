"""Adapter converting a CaissonConfiguration to the domain CabinetConfig."""

from caissons.application.config.schema import CaissonConfiguration
from caissons.domain.value_objects import (
    BackSpec,
    CabinetConfig,
    CabinetFamily,
    DoorSpec,
    DrawerSpec,
    HingeSelection,
    MaterialThicknesses,
    ShelfSpec,
)


def config_to_cabinet_config(config: CaissonConfiguration) -> CabinetConfig:
    """Convert a validated configuration to the engine's value object.

    A drawer unit whose configuration omits ``doors`` gets no doors rather
    than the single-door default.

    Args:
        config: A validated CaissonConfiguration instance

    Returns:
        Immutable CabinetConfig ready for ``decompose``.

    Example:
        >>> config = load_config(Path("base-600.json"))
        >>> result = decompose(config_to_cabinet_config(config))
    """
    cabinet = config.cabinet

    door_count = cabinet.doors.count
    if cabinet.family is CabinetFamily.DRAWER_UNIT and "doors" not in cabinet.model_fields_set:
        door_count = 0

    return CabinetConfig(
        family=cabinet.family,
        width=cabinet.width,
        height=cabinet.height,
        depth=cabinet.depth,
        thickness=MaterialThicknesses(
            carcass=cabinet.thickness.carcass,
            back=cabinet.thickness.back,
            door=cabinet.thickness.door,
            shelf=cabinet.thickness.shelf,
            drawer_box=cabinet.thickness.drawer_box,
        ),
        assembly=cabinet.assembly,
        back=BackSpec(
            mounting=cabinet.back.mounting,
            groove_depth=cabinet.back.groove_depth,
            groove_offset=cabinet.back.groove_offset,
        ),
        doors=DoorSpec(
            count=door_count,
            mounting=cabinet.doors.mounting,
            gap=cabinet.doors.gap,
            hinge_side=cabinet.doors.hinge_side,
        ),
        drawers=DrawerSpec(
            count=cabinet.drawers.count,
            gap=cabinet.drawers.gap,
            runner=cabinet.drawers.runner,
        ),
        hinge=HingeSelection(
            family=cabinet.hinge.family,
            angle=cabinet.hinge.angle,
            mounting_plate=cabinet.hinge.mounting_plate,
        ),
        shelves=ShelfSpec(count=cabinet.shelves.count, pins=cabinet.shelves.pins),
        fastener=cabinet.fastener,
        material_ref=cabinet.material_ref,
        door_material_ref=cabinet.door_material_ref,
        min_panel_area_m2=cabinet.min_panel_area_m2,
        name=cabinet.name,
    )
