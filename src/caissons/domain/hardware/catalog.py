"""Hardware specification tables and lookups.

The tables are module-level read-only mappings built once at import time.
They are shared by every caller without synchronization and are never
mutated at runtime.

Lookups fail closed: an unknown key returns ``HardwareNotFound`` rather
than a default.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, TypeVar

from caissons.domain.value_objects import (
    FastenerKind,
    HingeAngle,
    MountingPlateType,
    round_mm,
)

from .specs import (
    FastenerSpec,
    HardwareNotFound,
    HingeSpec,
    HoleSpec,
    MountingPlateSpec,
    RunnerSpec,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


# --- Drilling grid constants (mm) ---

# Distance from the hinged door edge to the cup centre
CUP_CENTER_FROM_HINGED_EDGE = 23.0
CUP_DIAMETER = 35.0
CUP_DEPTH = 13.0

# Hole line of the mounting plates, measured from the side's front edge
PLATE_LINE_FROM_FRONT_EDGE = 37.0

# First and last hinge distance from the bottom/top edge of the door
HINGE_EDGE_DISTANCE = 100.0

# 32 mm system grid
SYSTEM_PITCH = 32.0
SYSTEM_LINE_OFFSET = 37.0

# Knock-down fasteners sit this far from the front and back edges
FASTENER_EDGE_OFFSET = 50.0

MIN_DOOR_HEIGHT = 250.0
MAX_DOOR_HEIGHT = 2800.0
MIN_DOOR_THICKNESS = 15.0
MAX_DOOR_THICKNESS = 24.0


# Hinge count per door height band: (max door height inclusive, count)
HINGE_COUNT_BANDS: tuple[tuple[float, int], ...] = (
    (900.0, 2),
    (1600.0, 3),
    (2000.0, 4),
    (2400.0, 5),
)
MAX_HINGE_COUNT = 6


# --- Mounting plates ---

_PILOT_10 = HoleSpec(diameter=10.0, depth=12.0, label="pilot")

MOUNTING_PLATES: Mapping[MountingPlateType, MountingPlateSpec] = MappingProxyType(
    {
        MountingPlateType.INSERTA_0MM: MountingPlateSpec(
            plate_type=MountingPlateType.INSERTA_0MM,
            reference="173H7100",
            name="CLIP mounting plate INSERTA 0mm",
            line_from_front_edge=PLATE_LINE_FROM_FRONT_EDGE,
            height_adjustment=0.0,
            holes=(_PILOT_10,),
        ),
        MountingPlateType.WING_0MM: MountingPlateSpec(
            plate_type=MountingPlateType.WING_0MM,
            reference="175H3100",
            name="CLIP wing mounting plate 0mm",
            line_from_front_edge=PLATE_LINE_FROM_FRONT_EDGE,
            height_adjustment=0.0,
            holes=(
                HoleSpec(diameter=5.0, depth=13.0, label="screw", dy=-SYSTEM_PITCH / 2),
                HoleSpec(diameter=5.0, depth=13.0, label="screw", dy=SYSTEM_PITCH / 2),
            ),
        ),
        MountingPlateType.EXPANDO_0MM: MountingPlateSpec(
            plate_type=MountingPlateType.EXPANDO_0MM,
            reference="177H3100E",
            name="CLIP mounting plate EXPANDO 0mm",
            line_from_front_edge=PLATE_LINE_FROM_FRONT_EDGE,
            height_adjustment=0.0,
            holes=(_PILOT_10,),
        ),
        MountingPlateType.EXPANDO_3MM: MountingPlateSpec(
            plate_type=MountingPlateType.EXPANDO_3MM,
            reference="177H3130E",
            name="CLIP mounting plate EXPANDO 3mm",
            line_from_front_edge=PLATE_LINE_FROM_FRONT_EDGE,
            height_adjustment=3.0,
            holes=(_PILOT_10,),
        ),
    }
)


# --- Hinges ---

_INSERTA_DOWELS = (
    HoleSpec(diameter=8.0, depth=12.0, label="dowel", dx=9.5, dy=-22.5),
    HoleSpec(diameter=8.0, depth=12.0, label="dowel", dx=9.5, dy=22.5),
)


def _clip_top(
    reference: str,
    name: str,
    family: str,
    angle: HingeAngle,
    min_cabinet_depth: float,
    door_holes: tuple[HoleSpec, ...] = (),
) -> HingeSpec:
    return HingeSpec(
        reference=reference,
        name=name,
        manufacturer="Blum",
        family=family,
        angle=angle,
        cup_diameter=CUP_DIAMETER,
        cup_depth=CUP_DEPTH,
        cup_edge_offset=CUP_CENTER_FROM_HINGED_EDGE,
        min_door_height=MIN_DOOR_HEIGHT,
        max_door_height=MAX_DOOR_HEIGHT,
        min_door_thickness=MIN_DOOR_THICKNESS,
        max_door_thickness=MAX_DOOR_THICKNESS,
        min_cabinet_depth=min_cabinet_depth,
        door_holes=door_holes,
    )


# Key: (family, angle)
HINGES: Mapping[tuple[str, HingeAngle], HingeSpec] = MappingProxyType(
    {
        ("standard", HingeAngle.DEG_95): _clip_top(
            "71B3650", "CLIP top BLUMOTION 95° reduced angle", "standard",
            HingeAngle.DEG_95, 280.0,
        ),
        ("standard", HingeAngle.DEG_107): _clip_top(
            "71B3750", "CLIP top BLUMOTION 107°", "standard",
            HingeAngle.DEG_107, 300.0,
        ),
        ("standard", HingeAngle.DEG_110): _clip_top(
            "71B3550", "CLIP top BLUMOTION 110°", "standard",
            HingeAngle.DEG_110, 300.0,
        ),
        ("standard", HingeAngle.DEG_155): _clip_top(
            "71B7550", "CLIP top BLUMOTION 155° wide angle", "standard",
            HingeAngle.DEG_155, 350.0,
        ),
        ("inserta", HingeAngle.DEG_110): _clip_top(
            "71B3590", "CLIP top BLUMOTION 110° INSERTA", "inserta",
            HingeAngle.DEG_110, 300.0, door_holes=_INSERTA_DOWELS,
        ),
    }
)

# Plates each hinge family accepts
COMPATIBLE_PLATES: Mapping[str, frozenset[MountingPlateType]] = MappingProxyType(
    {
        "standard": frozenset(MountingPlateType),
        "inserta": frozenset(MountingPlateType),
    }
)


# --- Fasteners and supports ---

FASTENERS: Mapping[FastenerKind, FastenerSpec] = MappingProxyType(
    {
        FastenerKind.MINIFIX: FastenerSpec(
            kind=FastenerKind.MINIFIX,
            name="Minifix 15 cam connector",
            hole=HoleSpec(diameter=5.0, depth=11.0, label="bolt"),
            edge_offset=FASTENER_EDGE_OFFSET,
            housing=HoleSpec(diameter=15.0, depth=12.5, label="housing"),
            housing_end_offset=24.0,
        ),
        FastenerKind.DOWEL: FastenerSpec(
            kind=FastenerKind.DOWEL,
            name="Wood dowel 8x35",
            hole=HoleSpec(diameter=8.0, depth=12.0, label="dowel"),
            edge_offset=FASTENER_EDGE_OFFSET,
            max_panel_thickness=50.0,
        ),
        FastenerKind.CONFIRMAT: FastenerSpec(
            kind=FastenerKind.CONFIRMAT,
            name="Confirmat screw 7x50",
            hole=HoleSpec(diameter=8.0, depth=0.0, label="confirmat", through=True),
            edge_offset=FASTENER_EDGE_OFFSET,
        ),
        FastenerKind.SHELF_PIN: FastenerSpec(
            kind=FastenerKind.SHELF_PIN,
            name="Shelf pin 5mm",
            hole=HoleSpec(diameter=5.0, depth=13.0, label="pin"),
            edge_offset=SYSTEM_LINE_OFFSET,
            pitch=SYSTEM_PITCH,
        ),
    }
)


# --- Drawer runners ---

# Rear hole line sits this far in front of the runner's rear end
RUNNER_REAR_HOLE_FROM_END = 37.0

_RUNNER_LENGTHS = tuple(float(length) for length in range(250, 601, 50))


def _runner_holes(depth: float, count: int) -> tuple[HoleSpec, ...]:
    return tuple(
        HoleSpec(diameter=5.0, depth=depth, label="runner", dy=SYSTEM_PITCH * (i + 1))
        for i in range(count)
    )


# Key: runner family
RUNNERS: Mapping[str, RunnerSpec] = MappingProxyType(
    {
        "tandem": RunnerSpec(
            family="tandem",
            reference="550H",
            name="TANDEM 550H full extension",
            manufacturer="Blum",
            lengths=_RUNNER_LENGTHS,
            line_from_front_edge=SYSTEM_LINE_OFFSET,
            front_holes=_runner_holes(13.0, 3),
            rear_hole=HoleSpec(diameter=5.0, depth=13.0, label="runner rear", dy=SYSTEM_PITCH),
            rear_hole_from_end=RUNNER_REAR_HOLE_FROM_END,
        ),
        "movento": RunnerSpec(
            family="movento",
            reference="760H",
            name="MOVENTO 760H full extension 40 kg",
            manufacturer="Blum",
            lengths=_RUNNER_LENGTHS,
            line_from_front_edge=SYSTEM_LINE_OFFSET,
            front_holes=_runner_holes(13.0, 2),
            rear_hole=HoleSpec(diameter=5.0, depth=13.0, label="runner rear", dy=SYSTEM_PITCH),
            rear_hole_from_end=RUNNER_REAR_HOLE_FROM_END,
        ),
        "quadro": RunnerSpec(
            family="quadro",
            reference="Quadro V6",
            name="Quadro V6 full extension",
            manufacturer="Hettich",
            lengths=_RUNNER_LENGTHS + (650.0,),
            line_from_front_edge=SYSTEM_LINE_OFFSET,
            front_holes=_runner_holes(12.0, 3),
            rear_hole=HoleSpec(diameter=5.0, depth=12.0, label="runner rear", dy=SYSTEM_PITCH),
            rear_hole_from_end=RUNNER_REAR_HOLE_FROM_END,
        ),
    }
)


def _coerce(enum_cls: type[E], value: E | str | int) -> E | None:
    """Convert a raw key to its enum member, or None when unknown."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def lookup_mounting_plate(
    plate: MountingPlateType | str,
) -> MountingPlateSpec | HardwareNotFound:
    """Look up a mounting plate by type.

    Args:
        plate: Plate type or its string value.

    Returns:
        The plate specification, or HardwareNotFound for unknown keys.
    """
    plate_type = _coerce(MountingPlateType, plate)
    if plate_type is None or plate_type not in MOUNTING_PLATES:
        return HardwareNotFound(
            kind="mounting_plate",
            key=(plate,),
            message=f"Unknown mounting plate '{plate}'",
        )
    return MOUNTING_PLATES[plate_type]


def lookup_hinge(
    family: str,
    angle: HingeAngle | int,
    mounting_plate: MountingPlateType | str,
) -> HingeSpec | HardwareNotFound:
    """Resolve a hinge by family, opening angle and mounting plate.

    Args:
        family: Hinge family key (e.g. "standard", "inserta").
        angle: Opening angle.
        mounting_plate: Mounting plate fixed to the side.

    Returns:
        The hinge specification with its mounting plate attached, or
        HardwareNotFound when any part of the combination is unknown.
    """
    key = (family, angle, mounting_plate)
    hinge_angle = _coerce(HingeAngle, angle)
    hinge = HINGES.get((family, hinge_angle)) if hinge_angle is not None else None
    if hinge is None:
        logger.debug(f"No hinge for family={family!r} angle={angle!r}")
        return HardwareNotFound(
            kind="hinge",
            key=key,
            message=f"No hinge '{family}' with a {getattr(angle, 'value', angle)}° opening angle",
        )

    plate = lookup_mounting_plate(mounting_plate)
    if isinstance(plate, HardwareNotFound):
        return HardwareNotFound(kind="hinge", key=key, message=plate.message)

    if plate.plate_type not in COMPATIBLE_PLATES.get(family, frozenset()):
        return HardwareNotFound(
            kind="hinge",
            key=key,
            message=f"Mounting plate '{plate.plate_type.value}' does not fit hinge '{family}'",
        )

    return replace(hinge, mounting_plate=plate)


def lookup_fastener(kind: FastenerKind | str) -> FastenerSpec | HardwareNotFound:
    """Look up a fastener or support by kind.

    Args:
        kind: Fastener kind or its string value.

    Returns:
        The fastener specification, or HardwareNotFound for unknown kinds.
    """
    fastener_kind = _coerce(FastenerKind, kind)
    if fastener_kind is None or fastener_kind not in FASTENERS:
        return HardwareNotFound(
            kind="fastener",
            key=(kind,),
            message=f"Unknown fastener '{kind}'",
        )
    return FASTENERS[fastener_kind]


def lookup_runner(family: str) -> RunnerSpec | HardwareNotFound:
    """Look up a drawer runner family.

    Args:
        family: Runner family key (e.g. "tandem", "quadro").

    Returns:
        The runner specification, or HardwareNotFound for unknown families.
    """
    runner = RUNNERS.get(family)
    if runner is None:
        return HardwareNotFound(
            kind="runner",
            key=(family,),
            message=f"Unknown drawer runner '{family}'",
        )
    return runner


def available_hinges() -> list[HingeSpec]:
    """List catalog hinges ordered by family then angle."""
    return [HINGES[key] for key in sorted(HINGES, key=lambda k: (k[0], k[1].value))]


def hinge_count_for_height(door_height: float) -> int:
    """Number of hinges required for a door of the given height.

    Driven entirely by ``HINGE_COUNT_BANDS``; band limits are inclusive.

    Raises:
        ValueError: If the height is not positive.
    """
    if door_height <= 0:
        raise ValueError(f"Door height must be positive (got {door_height})")
    for max_height, count in HINGE_COUNT_BANDS:
        if door_height <= max_height:
            return count
    return MAX_HINGE_COUNT


def vertical_hinge_offsets(door_height: float, count: int) -> tuple[float, ...]:
    """Vertical hinge positions measured from the bottom edge of the door.

    The first and last hinge sit exactly ``HINGE_EDGE_DISTANCE`` from the
    bottom and top edges; the others are spaced evenly between them.

    Raises:
        ValueError: If fewer than two hinges are requested or the door is
            too short to hold them.
    """
    if count < 2:
        raise ValueError(f"At least two hinges are required (got {count})")
    if door_height <= 2 * HINGE_EDGE_DISTANCE:
        raise ValueError(
            f"Door height {door_height} is too short for hinges "
            f"{HINGE_EDGE_DISTANCE} mm from each edge"
        )

    spacing = (door_height - 2 * HINGE_EDGE_DISTANCE) / (count - 1)
    offsets = [round_mm(HINGE_EDGE_DISTANCE + i * spacing) for i in range(count - 1)]
    offsets.append(round_mm(door_height - HINGE_EDGE_DISTANCE))
    return tuple(offsets)
