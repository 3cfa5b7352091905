"""Panel value objects.

All lengths are millimetres. Surfaces are square metres and edge-banding
lengths are metres; both are derived, never stored.
"""

from __future__ import annotations

from dataclasses import dataclass

from ._enums import Hand, PanelRole

# Decimal places kept for every computed millimetre value (0.01 mm).
MM_PRECISION = 2

MM2_PER_M2 = 1_000_000.0
MM_PER_M = 1000.0


def round_mm(value: float) -> float:
    """Round a millimetre value to the engine's fixed precision."""
    # + 0.0 turns -0.0 into 0.0
    return round(value, MM_PRECISION) + 0.0


@dataclass(frozen=True)
class EdgeBanding:
    """Banded edges of a panel, counted per direction.

    Labeling is order-independent: a panel records how many of its two
    length-running edges and how many of its two width-running edges are
    banded, not which one. Mirrored left/right blanks therefore compare equal.

    Attributes:
        length_edges: Banded edges running along the panel length (0-2).
        width_edges: Banded edges running along the panel width (0-2).
    """

    length_edges: int = 0
    width_edges: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.length_edges <= 2 or not 0 <= self.width_edges <= 2:
            raise ValueError("A panel has at most two edges per direction")

    @classmethod
    def none(cls) -> "EdgeBanding":
        """No banded edges."""
        return cls(0, 0)

    @classmethod
    def all_edges(cls) -> "EdgeBanding":
        """All four edges banded."""
        return cls(2, 2)

    @property
    def edge_count(self) -> int:
        """Total number of banded edges."""
        return self.length_edges + self.width_edges

    @property
    def flags(self) -> tuple[bool, bool, bool, bool]:
        """Edge flags A, B (length edges) and C, D (width edges)."""
        return (
            self.length_edges >= 1,
            self.length_edges == 2,
            self.width_edges >= 1,
            self.width_edges == 2,
        )

    def banded_length(self, length: float, width: float) -> float:
        """Banded length in millimetres for one panel of the given size."""
        return round_mm(self.length_edges * length + self.width_edges * width)


@dataclass(frozen=True)
class Panel:
    """A physical flat piece produced by decomposition.

    ``length`` is the extent along the X axis and ``width`` the extent along
    the Y axis of the panel's interior-face view, whose origin is the
    bottom-left corner of that view.
    """

    id: str
    name: str
    role: PanelRole
    length: float
    width: float
    thickness: float
    quantity: int = 1
    edge_banding: EdgeBanding = EdgeBanding()
    material_ref: str | None = None
    hand: Hand | None = None
    hinge_count: int = 0

    def __post_init__(self) -> None:
        if self.length <= 0 or self.width <= 0:
            raise ValueError(
                f"Panel '{self.id}' dimensions must be positive "
                f"(got {self.length} x {self.width})"
            )
        if self.thickness <= 0:
            raise ValueError(f"Panel '{self.id}' thickness must be positive")
        if self.quantity < 1:
            raise ValueError(f"Panel '{self.id}' quantity must be at least 1")
        if self.hinge_count < 0:
            raise ValueError(f"Panel '{self.id}' hinge count cannot be negative")

    @property
    def area_mm2(self) -> float:
        """Face area of one piece in square millimetres."""
        return self.length * self.width

    @property
    def surface_m2(self) -> float:
        """Face area of one piece in square metres."""
        return round(self.area_mm2 / MM2_PER_M2, 4)

    @property
    def total_surface_m2(self) -> float:
        """Face area of all pieces in square metres."""
        return round(self.area_mm2 * self.quantity / MM2_PER_M2, 4)

    @property
    def edge_banding_mm(self) -> float:
        """Banded length of one piece in millimetres."""
        return self.edge_banding.banded_length(self.length, self.width)

    @property
    def total_edge_banding_m(self) -> float:
        """Banded length of all pieces in metres."""
        return round(self.edge_banding_mm * self.quantity / MM_PER_M, 3)

    def billed_surface_m2(self, min_area_m2: float) -> float:
        """Surface of one piece, raised to the minimum billable area."""
        return max(self.surface_m2, min_area_m2)

    def blank_key(self) -> tuple:
        """Identity of the manufactured blank, ignoring id and quantity."""
        return (
            self.role,
            self.hand,
            self.length,
            self.width,
            self.thickness,
            self.edge_banding,
            self.material_ref,
            self.hinge_count,
        )


@dataclass(frozen=True)
class InteriorDimensions:
    """Usable space inside the carcass, in millimetres."""

    width: float
    height: float
    depth: float
