"""Pydantic configuration schema models for caisson specifications.

This module defines the schema for JSON caisson configuration files. It
uses Pydantic v2 for validation and serialization.

Enums are reused from the domain layer so configuration values and domain
values never drift apart. Dimensions are millimetres.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from caissons.domain.value_objects import (
    DEFAULT_MIN_PANEL_AREA_M2,
    AssemblyStyle,
    BackMounting,
    CabinetFamily,
    DoorMounting,
    FastenerKind,
    Hand,
    HingeAngle,
    MountingPlateType,
)

# Supported schema versions for configuration files
# Version 1.0: Initial caisson schema
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

# Output formats accepted in ``output.formats``
OUTPUT_FORMATS: frozenset[str] = frozenset({"dxf", "csv", "line-items", "all"})


class ThicknessConfigSchema(BaseModel):
    """Material thickness per panel role, in millimetres.

    Attributes:
        carcass: Sides, top, bottom (default 18)
        back: Back panel (default 8)
        door: Doors and drawer fronts (default 18)
        shelf: Loose shelves (default 18)
        drawer_box: Drawer sides, backs and bottoms (default 16)
    """

    model_config = ConfigDict(extra="forbid")

    carcass: float = Field(default=18.0, gt=0, le=60.0)
    back: float = Field(default=8.0, gt=0, le=60.0)
    door: float = Field(default=18.0, gt=0, le=60.0)
    shelf: float = Field(default=18.0, gt=0, le=60.0)
    drawer_box: float = Field(default=16.0, gt=0, le=60.0)


class BackConfigSchema(BaseModel):
    """Back panel mounting.

    Attributes:
        mounting: How the back is fixed (applied, grooved, rebated, none)
        groove_depth: Depth of the groove in the carcass panels
        groove_offset: Distance from the rear edge to the groove. Derived
            from the back thickness when omitted.
    """

    model_config = ConfigDict(extra="forbid")

    mounting: BackMounting = BackMounting.GROOVED
    groove_depth: float = Field(default=10.0, gt=0)
    groove_offset: float | None = Field(default=None, ge=0)


class DoorConfigSchema(BaseModel):
    """Door layout."""

    model_config = ConfigDict(extra="forbid")

    count: int = Field(default=1, ge=0, le=2)
    mounting: DoorMounting = DoorMounting.OVERLAY
    gap: float = Field(default=2.0, ge=0, le=10.0)
    hinge_side: Hand = Hand.LEFT


class DrawerConfigSchema(BaseModel):
    """Drawer layout (drawer units only).

    Attributes:
        count: Number of drawers
        gap: Clearance around each drawer front
        runner: Drawer runner family (e.g. "tandem", "movento", "quadro")
    """

    model_config = ConfigDict(extra="forbid")

    count: int = Field(default=0, ge=0, le=10)
    gap: float = Field(default=2.0, ge=0, le=10.0)
    runner: str = Field(default="tandem", min_length=1)


class HingeConfigSchema(BaseModel):
    """Hinge selection.

    The family is kept as free text so an unknown family is reported as a
    hardware finding rather than rejected by the schema.

    Attributes:
        family: Hinge family key (e.g. "standard", "inserta")
        angle: Opening angle in degrees
        mounting_plate: Mounting plate fixed to the side panel
    """

    model_config = ConfigDict(extra="forbid")

    family: str = Field(default="standard", min_length=1)
    angle: HingeAngle = HingeAngle.DEG_110
    mounting_plate: MountingPlateType = MountingPlateType.EXPANDO_0MM


class ShelvesConfigSchema(BaseModel):
    """Shelf layout."""

    model_config = ConfigDict(extra="forbid")

    count: int = Field(default=0, ge=0, le=20)
    pins: bool = Field(default=False, description="Drill the shelf-pin grid")


class CabinetConfigSchema(BaseModel):
    """Caisson dimensions and construction.

    Attributes:
        name: Display name used in reports and file names
        family: Cabinet family (base, wall, column, drawer_unit)
        width: External width in mm
        height: External height in mm
        depth: External depth in mm
        assembly: Joint between sides and top/bottom
        thickness: Material thickness per role
        back: Back panel mounting
        doors: Door layout
        drawers: Drawer layout
        hinge: Hinge selection
        shelves: Shelf layout
        fastener: Knock-down fastener drilled into the carcass (optional)
        material_ref: Catalog material for carcass panels (optional)
        door_material_ref: Catalog material for fronts (optional)
        min_panel_area_m2: Minimum billable panel area
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="caisson", min_length=1, max_length=80)
    family: CabinetFamily = CabinetFamily.BASE
    width: float = Field(..., gt=0, le=5000.0)
    height: float = Field(..., gt=0, le=5000.0)
    depth: float = Field(..., gt=0, le=5000.0)
    assembly: AssemblyStyle = AssemblyStyle.BUTT_JOINT
    thickness: ThicknessConfigSchema = Field(default_factory=ThicknessConfigSchema)
    back: BackConfigSchema = Field(default_factory=BackConfigSchema)
    doors: DoorConfigSchema = Field(default_factory=DoorConfigSchema)
    drawers: DrawerConfigSchema = Field(default_factory=DrawerConfigSchema)
    hinge: HingeConfigSchema = Field(default_factory=HingeConfigSchema)
    shelves: ShelvesConfigSchema = Field(default_factory=ShelvesConfigSchema)
    fastener: FastenerKind | None = None
    material_ref: str | None = None
    door_material_ref: str | None = None
    min_panel_area_m2: float = Field(default=DEFAULT_MIN_PANEL_AREA_M2, gt=0)

    @field_validator("fastener")
    @classmethod
    def validate_fastener(cls, v: FastenerKind | None) -> FastenerKind | None:
        """Shelf pins are drilled through ``shelves.pins``, not as a carcass fastener."""
        if v is FastenerKind.SHELF_PIN:
            raise ValueError("Use 'shelves.pins' for shelf pins")
        return v


class OutputConfig(BaseModel):
    """Configuration for output formats and file paths.

    Attributes:
        formats: Output formats to generate (dxf, csv, line-items, all)
        output_dir: Directory for output files
        project_name: Base name for output files
        dxf_mode: One DXF file per panel or one combined sheet
        expand_line_items: Emit one line item per physical piece
    """

    model_config = ConfigDict(extra="forbid")

    formats: list[str] = Field(default_factory=list)
    output_dir: str | None = None
    project_name: str | None = None
    dxf_mode: Literal["per_panel", "combined"] = "per_panel"
    expand_line_items: bool = False

    @field_validator("formats")
    @classmethod
    def validate_formats(cls, v: list[str]) -> list[str]:
        """Validate format names in the formats list."""
        invalid = [fmt for fmt in v if fmt not in OUTPUT_FORMATS]
        if invalid:
            raise ValueError(
                f"Invalid format(s): {invalid}. Valid formats: {sorted(OUTPUT_FORMATS)}"
            )
        return v


class CaissonConfiguration(BaseModel):
    """Root configuration model for caisson specifications.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        cabinet: Caisson dimensions and construction
        output: Output format configuration

    Example:
        >>> config = CaissonConfiguration(
        ...     schema_version="1.0",
        ...     cabinet=CabinetConfigSchema(width=600, height=720, depth=560),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    cabinet: CabinetConfigSchema
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that the schema version is supported.

        Newer minor versions of a supported major version are accepted.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
