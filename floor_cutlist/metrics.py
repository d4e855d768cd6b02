# floor_cutlist/metrics.py
# Metrics for joist cut plans:
# - total stock length bought
# - length ending up in target pieces (incl. pieces made from offcuts)
# - offcut length left on the units
# - utilization / waste percentage
#
# These metrics only look at the provenance graph, so they work for any plan.

from __future__ import annotations

from dataclasses import dataclass

from .types import PART_OFFCUT, CuttingPlan


@dataclass(frozen=True)
class PlanMetrics:
    stock_units: int
    stock_length_total: float
    used_length: float
    offcut_length: float
    pieces_required: int
    extra_pieces: int

    @property
    def utilization(self) -> float:
        if self.stock_length_total <= 0:
            return 0.0
        return self.used_length / self.stock_length_total * 100

    @property
    def waste_percent(self) -> float:
        if self.stock_length_total <= 0:
            return 0.0
        return self.offcut_length / self.stock_length_total * 100


def compute_plan_metrics(plan: CuttingPlan) -> PlanMetrics:
    total = 0.0
    used = 0.0
    offcut = 0.0
    for unit in plan.stock_units:
        total += unit.length
        for p in unit.parts:
            if p.type == PART_OFFCUT:
                offcut += p.length
            else:
                used += p.length
    return PlanMetrics(
        stock_units=plan.total_stock_units,
        stock_length_total=total,
        used_length=used,
        offcut_length=offcut,
        pieces_required=plan.required_count,
        extra_pieces=plan.extra_targets_from_offcuts,
    )


def total_offcut_length(plan: CuttingPlan) -> float:
    """Primary offcut tally length (after any pair harvesting)."""
    return sum(e.length * e.count for e in plan.offcuts)
