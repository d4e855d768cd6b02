# floor_cutlist/types.py
# Core data structures for joist cut planning (1-D cutting stock with provenance).
# Keep this file dependency-light so it can be imported everywhere.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


# ----------------------------
# Part types / composition kinds
# ----------------------------

PART_UNPROCESSED = "unprocessed"          # whole stock unit used as-is
PART_TARGET = "target"                    # target-length piece (or the cut remainder of one)
PART_OFFCUT = "offcut"                    # leftover length kept for reuse
PART_TARGET_FROM_OFFCUT = "target_from_offcut"

PART_TYPES = (PART_UNPROCESSED, PART_TARGET, PART_OFFCUT, PART_TARGET_FROM_OFFCUT)

KIND_NO_CUT = "no_cut"
KIND_UNPROCESSED = "unprocessed"
KIND_COMBINED = "combined"
KIND_SAME_OFFCUT_PAIR = "same_offcut_pair"
KIND_DIFFERENT_OFFCUT_PAIR = "different_offcut_pair"
KIND_FROM_OFFCUT = "from_offcut"

COMPOSITION_KINDS = (
    KIND_NO_CUT,
    KIND_UNPROCESSED,
    KIND_COMBINED,
    KIND_SAME_OFFCUT_PAIR,
    KIND_DIFFERENT_OFFCUT_PAIR,
    KIND_FROM_OFFCUT,
)


# ----------------------------
# Inputs
# ----------------------------

@dataclass(frozen=True)
class JoistSize:
    """Joist cross-section in millimeters, as listed by the user."""
    width: float
    height: float
    name: Optional[str] = None
    index: int = 0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid joist size: {self.width}x{self.height}")

    def oriented(self, rotate: bool) -> Tuple[float, float]:
        """(width, height) as laid, swapped when the joist is turned on its side."""
        if rotate:
            return self.height, self.width
        return self.width, self.height

    def label(self) -> str:
        dims = f"{self.width:g}x{self.height:g}mm"
        return f"{self.name} ({dims})" if self.name else f"joist {dims}"


@dataclass(frozen=True)
class JobSpec:
    """One flooring job: room, joist stock, sheet goods and height target."""
    room_width: float
    room_depth: float
    joist: JoistSize
    joist_length: float
    joist_spacing: float
    rotate_joist: bool = False
    eco_mode: bool = False

    plywood_width: float = 910.0
    plywood_length: float = 1820.0
    plywood_thicknesses: Tuple[float, ...] = ()

    foam_board_width: float = 910.0
    foam_board_length: float = 1820.0

    # Height search is skipped when tatami_height is None
    tatami_height: Optional[float] = None
    flooring_thickness: float = 0.0
    joist_sizes: Tuple[JoistSize, ...] = ()

    def __post_init__(self):
        for name in ("room_width", "room_depth", "joist_length", "joist_spacing",
                     "plywood_width", "plywood_length", "foam_board_width", "foam_board_length"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0 (got {getattr(self, name)})")
        if self.flooring_thickness < 0:
            raise ValueError(f"flooring_thickness must be >= 0 (got {self.flooring_thickness})")

    @property
    def laid_joist_width(self) -> float:
        return self.joist.oriented(self.rotate_joist)[0]

    @property
    def laid_joist_height(self) -> float:
        return self.joist.oriented(self.rotate_joist)[1]


# ----------------------------
# Outputs / plan objects
# ----------------------------

@dataclass
class Part:
    """
    A linear segment of one stock unit.
    A target_from_offcut part points back at the offcut it was cut from
    via source_unit_id / source_part_id.
    """
    id: str
    type: str
    length: float
    stock_unit_id: Optional[str] = None
    source_unit_id: Optional[str] = None
    source_part_id: Optional[str] = None

    def __post_init__(self):
        if self.type not in PART_TYPES:
            raise ValueError(f"Unknown part type: {self.type}")
        if self.length < 0:
            raise ValueError(f"Part length must be >= 0 (got {self.length})")


@dataclass
class StockUnit:
    """One physical piece of raw stock and the parts cut from it."""
    id: str
    length: float
    parts: List[Part] = field(default_factory=list)
    part_seq: int = field(default=0, repr=False, compare=False)

    def add_part(
        self,
        part_type: str,
        length: float,
        *,
        source_unit_id: Optional[str] = None,
        source_part_id: Optional[str] = None,
    ) -> Part:
        self.part_seq += 1
        part = Part(
            id=f"{self.id}.{self.part_seq}",
            type=part_type,
            length=length,
            stock_unit_id=self.id,
            source_unit_id=source_unit_id,
            source_part_id=source_part_id,
        )
        self.parts.append(part)
        return part

    def find_part(self, part_id: str) -> Optional[Part]:
        for p in self.parts:
            if p.id == part_id:
                return p
        return None

    def remove_part(self, part_id: str) -> None:
        self.parts = [p for p in self.parts if p.id != part_id]

    def used_length(self) -> float:
        return sum(p.length for p in self.parts)

    def has_part_type(self, part_type: str) -> bool:
        return any(p.type == part_type for p in self.parts)


@dataclass
class OffcutEntry:
    """Tally of offcuts sharing one length (within tolerance)."""
    length: float
    count: int

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"Offcut count must be >= 0 (got {self.count})")


@dataclass
class CompositionGroup:
    """How a set of target pieces was produced, with a running count."""
    kind: str
    lengths: Tuple[float, ...]
    count: int

    def __post_init__(self):
        if self.kind not in COMPOSITION_KINDS:
            raise ValueError(f"Unknown composition kind: {self.kind}")
        self.lengths = tuple(self.lengths)


@dataclass
class CuttingPlan:
    """
    Allocator output. Every field is always present; the default instance is the
    canonical empty plan returned for invalid input.
    """
    target_length: float = 0.0
    stock_length: float = 0.0
    required_count: int = 0
    eco_mode: bool = False

    total_stock_units: int = 0
    full_length_pieces: int = 0
    unprocessed_stock_units: int = 0
    cut_stock_units: int = 0
    scraps_used_count: int = 0

    offcuts: List[OffcutEntry] = field(default_factory=list)
    secondary_offcuts: List[OffcutEntry] = field(default_factory=list)
    extra_targets_from_offcuts: int = 0

    compositions: List[CompositionGroup] = field(default_factory=list)
    stock_units: List[StockUnit] = field(default_factory=list)

    def is_empty(self) -> bool:
        return self.total_stock_units == 0 and not self.stock_units

    def total_offcut_pieces(self) -> int:
        return sum(e.count for e in self.offcuts)

    def find_unit(self, unit_id: str) -> Optional[StockUnit]:
        for u in self.stock_units:
            if u.id == unit_id:
                return u
        return None


def empty_plan() -> CuttingPlan:
    return CuttingPlan()
