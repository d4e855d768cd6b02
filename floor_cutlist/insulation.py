# floor_cutlist/insulation.py
# Foam insulation strips between joists.
# Summary rows give strip size, count and area; detail rows split each strip
# along its length into full board lengths plus one remainder piece.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from .joist_layout import JoistLayout

KIND_REGULAR = "regular"
KIND_LAST = "last"


@dataclass(frozen=True)
class InsulationStrip:
    """Foam strip running the full room depth."""
    kind: str
    width: float
    length: float
    count: int

    @property
    def area_m2(self) -> float:
        return self.width * self.length * self.count / 1_000_000


@dataclass(frozen=True)
class InsulationPiece:
    """Piece cut from a foam board for one strip kind."""
    kind: str
    width: float
    length: float
    count: int
    per_board_width: int   # strips of this width that fit across one board
    full_length: bool      # True for board-length pieces, False for the remainder

    def note(self) -> str:
        if self.full_length:
            return f"{self.per_board_width} per board"
        return "length remainder"


@dataclass
class InsulationList:
    strips: List[InsulationStrip] = field(default_factory=list)
    pieces: List[InsulationPiece] = field(default_factory=list)
    board_width: float = 910.0
    board_length: float = 1820.0

    @property
    def total_strips(self) -> int:
        return sum(s.count for s in self.strips)

    @property
    def total_area_m2(self) -> float:
        return sum(s.area_m2 for s in self.strips)


def _pieces_for(kind: str, width: float, depth: float, strips: int,
                board_width: float, board_length: float) -> List[InsulationPiece]:
    per_width = math.floor(board_width / width)
    if per_width <= 0:
        return []
    out: List[InsulationPiece] = []
    full = math.floor(depth / board_length)
    rest = depth - full * board_length
    if full > 0:
        out.append(InsulationPiece(kind, width, board_length, full * strips, per_width, True))
    if rest > 0:
        out.append(InsulationPiece(kind, width, rest, strips, per_width, False))
    return out


def compute_insulation_parts(
    layout: JoistLayout,
    board_width: float = 910.0,
    board_length: float = 1820.0,
) -> InsulationList:
    """Parts list for the foam strips of a joist layout."""
    if board_width <= 0 or board_length <= 0:
        raise ValueError(f"Invalid foam board size: {board_width}x{board_length}")

    res = InsulationList(board_width=float(board_width), board_length=float(board_length))
    depth = layout.room_depth

    if layout.foam_width > 0 and layout.foam_count > 0:
        res.strips.append(InsulationStrip(KIND_REGULAR, layout.foam_width, depth, layout.foam_count))
        res.pieces.extend(
            _pieces_for(KIND_REGULAR, layout.foam_width, depth, layout.foam_count, board_width, board_length)
        )

    last = layout.last_foam_width
    if last > 0 and abs(last - layout.foam_width) >= 0.1:
        res.strips.append(InsulationStrip(KIND_LAST, last, depth, 1))
        res.pieces.extend(_pieces_for(KIND_LAST, last, depth, 1, board_width, board_length))

    return res
