# floor_cutlist/layout.py
# Turn a plan's provenance graph into cut diagrams:
# stock units with the same cut pattern are grouped and counted, so a report or
# plot can show "3 x [1000 | 1000 | 1000 | 820 offcut]" instead of every unit.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set, Tuple

from .types import (
    PART_OFFCUT,
    PART_TARGET_FROM_OFFCUT,
    PART_UNPROCESSED,
    CuttingPlan,
    StockUnit,
)

MATERIAL_UNCUT = "uncut"    # one unprocessed stock unit, used as-is
MATERIAL_CUT = "cut"        # cut, with an offcut left over
MATERIAL_STOCK = "stock"    # cut without leftover

SignatureKey = Tuple[Tuple[str, float], ...]


@dataclass(frozen=True)
class DiagramPart:
    """One segment of a cut diagram, positioned along the stock length."""
    type: str
    offset: float
    length: float
    label: str

    def end(self) -> float:
        return self.offset + self.length


@dataclass
class LayoutGroup:
    """Stock units sharing one cut pattern."""
    signature: str
    material_kind: str
    stock_length: float
    parts: List[DiagramPart] = field(default_factory=list)
    unit_ids: List[str] = field(default_factory=list)

    @property
    def unit_count(self) -> int:
        return len(self.unit_ids)

    @property
    def used_length(self) -> float:
        """Used (non-offcut) length of one unit in this group."""
        return sum(p.length for p in self.parts if p.type != PART_OFFCUT)

    @property
    def total_used_length(self) -> float:
        return self.used_length * self.unit_count

    @property
    def total_stock_length(self) -> float:
        return self.stock_length * self.unit_count

    @property
    def utilization(self) -> float:
        """
        Percentage of the group's stock length that ends up in pieces.
        Offcuts later joined or swept into extra targets by the ledger still count
        as offcut here; see CuttingPlan.extra_targets_from_offcuts for those.
        """
        if self.total_stock_length <= 0:
            return 0.0
        return self.total_used_length / self.total_stock_length * 100


def consumed_source_units(units: Iterable[StockUnit]) -> Set[str]:
    """
    Ids of units whose offcut feeds a target_from_offcut part owned by another
    unit. Those units are already represented where the piece ended up.
    """
    out: Set[str] = set()
    for unit in units:
        for part in unit.parts:
            if part.type != PART_TARGET_FROM_OFFCUT:
                continue
            if part.source_unit_id and part.source_unit_id != unit.id:
                out.add(part.source_unit_id)
    return out


def signature_key(unit: StockUnit) -> SignatureKey:
    return tuple((p.type, round(p.length, 1)) for p in unit.parts)


def signature_text(key: SignatureKey) -> str:
    return "|".join(f"{t}:{length:.1f}" for t, length in key)


def _material_kind(unit: StockUnit) -> str:
    if len(unit.parts) == 1 and unit.parts[0].type == PART_UNPROCESSED:
        return MATERIAL_UNCUT
    if unit.has_part_type(PART_OFFCUT):
        return MATERIAL_CUT
    return MATERIAL_STOCK


def _diagram_parts(unit: StockUnit) -> List[DiagramPart]:
    out: List[DiagramPart] = []
    x = 0.0
    for p in unit.parts:
        out.append(DiagramPart(type=p.type, offset=x, length=p.length, label=f"{p.length:.1f}mm"))
        x += p.length
    return out


def project_layout(plan: CuttingPlan) -> List[LayoutGroup]:
    """
    Group the plan's stock units by cut pattern, in order of first appearance.
    """
    skip = consumed_source_units(plan.stock_units)
    groups: Dict[SignatureKey, LayoutGroup] = {}

    for unit in plan.stock_units:
        if unit.id in skip or not unit.parts:
            continue
        key = signature_key(unit)
        g = groups.get(key)
        if g is None:
            g = LayoutGroup(
                signature=signature_text(key),
                material_kind=_material_kind(unit),
                stock_length=unit.length,
                parts=_diagram_parts(unit),
            )
            groups[key] = g
        g.unit_ids.append(unit.id)

    return list(groups.values())


def layout_utilization(groups: Iterable[LayoutGroup]) -> float:
    """Overall utilization (%) across all displayed groups."""
    used = 0.0
    total = 0.0
    for g in groups:
        used += g.total_used_length
        total += g.total_stock_length
    return used / total * 100 if total > 0 else 0.0
