# floor_cutlist/debug.py
# Debug / inspection helpers:
# - pretty-print stock units and their parts
# - quick text summaries of a plan
# - helpful when checking why a plan needs the stock it does

from __future__ import annotations

from typing import Iterable, List

from .composition import groups_by_kind
from .layout import LayoutGroup
from .metrics import compute_plan_metrics, total_offcut_length
from .types import CuttingPlan, StockUnit


def format_unit(unit: StockUnit) -> str:
    segs = []
    for p in unit.parts:
        seg = f"{p.type}:{p.length:.1f}"
        if p.source_part_id:
            seg += f"<-{p.source_part_id}"
        segs.append(seg)
    return f"{unit.id:10s} [{unit.length:.1f}] " + " | ".join(segs)


def print_units(units: Iterable[StockUnit]) -> None:
    for u in units:
        print(format_unit(u))


def plan_summary_lines(plan: CuttingPlan) -> List[str]:
    m = compute_plan_metrics(plan)
    lines = [
        f"Stock units: {plan.total_stock_units}",
        f"  full-length pieces: {plan.full_length_pieces}",
        f"  unprocessed units: {plan.unprocessed_stock_units}",
        f"  cut units: {plan.cut_stock_units}",
        f"  pieces from existing offcuts: {plan.scraps_used_count}",
    ]
    if plan.offcuts:
        lines.append(f"Offcuts ({plan.total_offcut_pieces()} pieces, {total_offcut_length(plan):.1f}mm total):")
        lines.extend(f"  {e.length:.1f}mm x {e.count}" for e in plan.offcuts)
    if plan.extra_targets_from_offcuts:
        lines.append(f"Extra pieces from offcuts: {plan.extra_targets_from_offcuts}")
    if plan.secondary_offcuts:
        lines.append("Offcuts of offcuts:")
        lines.extend(f"  {e.length:.1f}mm x {e.count}" for e in plan.secondary_offcuts)
    if plan.compositions:
        lines.append("Compositions:")
        for kind, groups in groups_by_kind(plan.compositions).items():
            for g in groups:
                lens = " + ".join(f"{x:.0f}" for x in g.lengths)
                lines.append(f"  {kind:22s} {lens} x {g.count}")
    lines.append(f"Utilization: {m.utilization:.1f}%")
    return lines


def print_plan(plan: CuttingPlan, *, with_units: bool = True) -> None:
    for line in plan_summary_lines(plan):
        print(line)
    if with_units:
        print("-- Stock units --")
        print_units(plan.stock_units)


def print_layout(groups: Iterable[LayoutGroup]) -> None:
    for g in groups:
        bars = " | ".join(f"{p.type}:{p.length:.1f}" for p in g.parts)
        print(f"{g.unit_count:3d} x [{bars}]  ({g.material_kind}, {g.utilization:.1f}%)")
