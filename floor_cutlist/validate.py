# floor_cutlist/validate.py
# Validation utilities:
# - parts of a stock unit never add up to more than the unit
# - summary counts agree with the provenance graph
# - offcut tallies are non-negative and pruned
#
# Useful both during development and to sanity-check allocator output.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .config import DEFAULTS
from .types import PART_TARGET_FROM_OFFCUT, PART_UNPROCESSED, CuttingPlan, StockUnit


@dataclass(frozen=True)
class ValidationIssue:
    level: str   # "ERROR" or "WARN"
    message: str
    unit_id: Optional[str] = None
    part_id: Optional[str] = None


def validate_unit(unit: StockUnit, tol: float = DEFAULTS.length_tolerance) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    used = unit.used_length()
    if used > unit.length + tol:
        issues.append(
            ValidationIssue(
                level="ERROR",
                message=f"Parts use {used:.1f}mm of a {unit.length:.1f}mm unit",
                unit_id=unit.id,
            )
        )
    for p in unit.parts:
        if p.length <= 0:
            issues.append(
                ValidationIssue(level="ERROR", message=f"Non-positive part length {p.length}",
                                unit_id=unit.id, part_id=p.id)
            )
        if p.stock_unit_id != unit.id:
            issues.append(
                ValidationIssue(level="ERROR", message=f"Part owned by {p.stock_unit_id} listed on {unit.id}",
                                unit_id=unit.id, part_id=p.id)
            )
        if p.type == PART_TARGET_FROM_OFFCUT and not p.source_part_id:
            issues.append(
                ValidationIssue(level="WARN", message="Piece from offcut without a source reference",
                                unit_id=unit.id, part_id=p.id)
            )
    return issues


def validate_plan(plan: CuttingPlan, tol: float = DEFAULTS.length_tolerance) -> List[ValidationIssue]:
    """
    Validate a whole plan.
    Returns a list of issues (empty if OK).
    """
    issues: List[ValidationIssue] = []

    for unit in plan.stock_units:
        issues.extend(validate_unit(unit, tol))

    if plan.total_stock_units != len(plan.stock_units):
        issues.append(
            ValidationIssue(
                level="ERROR",
                message=(
                    f"total_stock_units={plan.total_stock_units} but the graph holds "
                    f"{len(plan.stock_units)} units"
                ),
            )
        )

    unprocessed = sum(
        1 for u in plan.stock_units if len(u.parts) == 1 and u.parts[0].type == PART_UNPROCESSED
    )
    if unprocessed != plan.unprocessed_stock_units:
        issues.append(
            ValidationIssue(
                level="ERROR",
                message=f"unprocessed_stock_units={plan.unprocessed_stock_units}, graph has {unprocessed}",
            )
        )

    for label, entries in (("offcut", plan.offcuts), ("secondary offcut", plan.secondary_offcuts)):
        for e in entries:
            if e.count <= 0:
                issues.append(ValidationIssue(level="ERROR", message=f"Unpruned {label} entry {e.length:.1f}mm x {e.count}"))
            if e.length <= 0:
                issues.append(ValidationIssue(level="ERROR", message=f"Non-positive {label} length {e.length}"))

    if plan.is_empty():
        issues.append(ValidationIssue(level="WARN", message="Plan uses 0 stock units."))

    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        msg = "\n".join(f"[{e.level}] unit={e.unit_id} part={e.part_id} :: {e.message}" for e in errs)
        raise ValueError("Validation failed:\n" + msg)
