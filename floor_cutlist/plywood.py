# floor_cutlist/plywood.py
# Plywood subfloor: tile the room with whole sheets (ceiling division per axis)
# and keep whichever sheet orientation wastes less.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class PlywoodSheet:
    index: int
    x: float
    y: float
    width: float      # cut width taken from this sheet
    length: float     # cut length taken from this sheet
    partial: bool


@dataclass
class PlywoodPlan:
    room_width: float
    room_depth: float
    sheet_width: float     # along the room width
    sheet_length: float    # along the room depth
    width_sheets: int
    depth_sheets: int
    sheets: List[PlywoodSheet] = field(default_factory=list)

    @property
    def total_sheets(self) -> int:
        return self.width_sheets * self.depth_sheets

    @property
    def orientation(self) -> str:
        return "horizontal" if self.sheet_width < self.sheet_length else "vertical"

    @property
    def sheet_area(self) -> float:
        return self.sheet_width * self.sheet_length

    @property
    def utilization(self) -> float:
        total = self.total_sheets * self.sheet_area
        return self.room_width * self.room_depth / total * 100 if total > 0 else 0.0

    @property
    def waste_area(self) -> float:
        return self.total_sheets * self.sheet_area - self.room_width * self.room_depth


def tile_plywood(room_width: float, room_depth: float, sheet_width: float, sheet_length: float) -> PlywoodPlan:
    """Tile in one fixed orientation."""
    for name, v in (("room_width", room_width), ("room_depth", room_depth),
                    ("sheet_width", sheet_width), ("sheet_length", sheet_length)):
        if v <= 0:
            raise ValueError(f"{name} must be > 0 (got {v})")

    across = math.ceil(room_width / sheet_width)
    along = math.ceil(room_depth / sheet_length)
    plan = PlywoodPlan(
        room_width=float(room_width),
        room_depth=float(room_depth),
        sheet_width=float(sheet_width),
        sheet_length=float(sheet_length),
        width_sheets=across,
        depth_sheets=along,
    )
    for i in range(across):
        for j in range(along):
            w = min(sheet_width, room_width - i * sheet_width)
            l = min(sheet_length, room_depth - j * sheet_length)
            plan.sheets.append(
                PlywoodSheet(
                    index=i * along + j,
                    x=i * sheet_width,
                    y=j * sheet_length,
                    width=w,
                    length=l,
                    partial=w < sheet_width or l < sheet_length,
                )
            )
    return plan


def compute_plywood_plan(room_width: float, room_depth: float, sheet_width: float, sheet_length: float) -> PlywoodPlan:
    """
    Try the sheet both ways round and keep the better utilization
    (a tie goes to the rotated layout).
    """
    as_given = tile_plywood(room_width, room_depth, sheet_width, sheet_length)
    rotated = tile_plywood(room_width, room_depth, sheet_length, sheet_width)
    return as_given if as_given.utilization > rotated.utilization else rotated


def group_sheets_by_size(plan: PlywoodPlan) -> List[Tuple[Tuple[float, float], List[PlywoodSheet]]]:
    """Sheets grouped by cut size, in order of first appearance."""
    groups: Dict[Tuple[float, float], List[PlywoodSheet]] = {}
    for s in plan.sheets:
        groups.setdefault((s.width, s.length), []).append(s)
    return list(groups.items())
