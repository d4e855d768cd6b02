# floor_cutlist/allocator.py
# Greedy 1-D cutting-stock allocation for joists.
#
# Given a target piece length (room depth), a stock length (joist length) and the
# number of pieces needed (joist columns), decide how many stock units are used,
# which are cut and which are used whole, and what offcuts remain. Every part
# keeps a back-reference to the stock unit it came from (provenance graph).
#
# Three cases, chosen by comparing stock and target length:
#   stock >  target : several target pieces per stock unit
#   stock <  target : whole units end to end, remainder cut from fresh stock or an offcut
#   stock == target : every unit used whole
#
# This is a deterministic heuristic, not an optimizer.

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Optional

from .composition import CompositionAggregator
from .config import DEFAULTS, lengths_equal
from .logger import get_logger
from .scrap_ledger import OffcutPiece, OffcutPool, ScrapLedger
from .types import (
    KIND_COMBINED,
    KIND_NO_CUT,
    PART_OFFCUT,
    PART_TARGET,
    PART_TARGET_FROM_OFFCUT,
    PART_UNPROCESSED,
    CuttingPlan,
    StockUnit,
    empty_plan,
)


def _is_positive_number(v: Any) -> bool:
    if isinstance(v, bool) or not isinstance(v, Real):
        return False
    return math.isfinite(v) and v > 0


def validate_inputs(target_length: Any, stock_length: Any, required_count: Any) -> Optional[str]:
    """Return a reason string when the inputs cannot be allocated, else None."""
    if not _is_positive_number(target_length):
        return f"target_length must be a positive number (got {target_length!r})"
    if not _is_positive_number(stock_length):
        return f"stock_length must be a positive number (got {stock_length!r})"
    if not _is_positive_number(required_count):
        return f"required_count must be a positive integer (got {required_count!r})"
    if int(required_count) != required_count:
        return f"required_count must be a whole number (got {required_count!r})"
    return None


class StockAllocator:
    """
    One allocation call. Holds the plan under construction, the id sequence and
    the offcut machinery; create a new instance per call (see allocate()).
    """

    def __init__(
        self,
        target_length: float,
        stock_length: float,
        required_count: int,
        eco_mode: bool = False,
        tolerance: Optional[float] = None,
    ) -> None:
        self.target_length = float(target_length)
        self.stock_length = float(stock_length)
        self.required_count = int(required_count)
        # Accepted and reported; allocation is the same in both modes.
        self.eco_mode = bool(eco_mode)
        self.tolerance = DEFAULTS.length_tolerance if tolerance is None else float(tolerance)

        self.plan = CuttingPlan(
            target_length=self.target_length,
            stock_length=self.stock_length,
            required_count=self.required_count,
            eco_mode=self.eco_mode,
        )
        self.compositions = CompositionAggregator(self.plan, tolerance=self.tolerance)
        self.ledger = ScrapLedger(self.plan, self.compositions, tolerance=self.tolerance)
        self._unit_seq = 0

    # ---- provenance ----

    def _new_unit(self) -> StockUnit:
        self._unit_seq += 1
        unit = StockUnit(id=f"stock_{self._unit_seq}", length=self.stock_length)
        self.plan.stock_units.append(unit)
        return unit

    # ---- cases ----

    def _allocate_multiple_per_stock(self) -> None:
        """Stock longer than target: cut several whole targets from each unit."""
        target, stock, required = self.target_length, self.stock_length, self.required_count
        # a stock unit within tolerance of n targets still holds n
        per_stock = math.floor((stock + self.tolerance) / target)
        units = math.ceil(required / per_stock)

        self.plan.total_stock_units = units
        self.plan.full_length_pieces = required
        self.compositions.record(KIND_NO_CUT, (target,), required)

        for i in range(units):
            is_last = i == units - 1
            pieces = per_stock
            if is_last and required % per_stock != 0:
                pieces = required % per_stock

            unit = self._new_unit()
            for _ in range(pieces):
                unit.add_part(PART_TARGET, target)

            leftover = stock - target * pieces
            if leftover >= self.tolerance:
                unit.add_part(PART_OFFCUT, leftover)
                self.ledger.record_offcut(leftover, 1)

        self.ledger.harvest_same_pairs(target)

    def _allocate_equal(self) -> None:
        """Stock exactly one target long: every unit is used whole."""
        required = self.required_count
        self.plan.total_stock_units = required
        self.plan.full_length_pieces = required
        for _ in range(required):
            self._new_unit().add_part(PART_TARGET, self.stock_length)
        self.compositions.record(KIND_NO_CUT, (self.target_length,), required)

    def _fill_from_offcut(self, remaining: float, pool: OffcutPool) -> bool:
        hit = self.ledger.try_consume(remaining, pool)
        if not hit.consumed:
            return False

        src = hit.source
        unit = self.plan.find_unit(src.stock_unit_id) if src.stock_unit_id else None
        if unit is not None:
            unit.add_part(
                PART_TARGET_FROM_OFFCUT,
                hit.used_length,
                source_unit_id=unit.id,
                source_part_id=src.part_id,
            )
            offcut = unit.find_part(src.part_id) if src.part_id else None
            if offcut is not None:
                offcut.length = max(0.0, src.length)
                unit.remove_part(offcut.id)
                if offcut.length > 0:
                    # keep the leftover at the far end of the unit
                    unit.parts.append(offcut)

        self.compositions.record(KIND_COMBINED, (hit.used_length,), 1)
        return True

    def _cut_fresh_unit(self, remaining: float, whole_units: int, pool: OffcutPool) -> None:
        stock = self.stock_length
        unit = self._new_unit()
        unit.add_part(PART_TARGET, remaining)

        leftover = stock - remaining
        if leftover > 0:
            part = unit.add_part(PART_OFFCUT, leftover)
            pool.push(OffcutPiece(length=leftover, stock_unit_id=unit.id, part_id=part.id))

        self.plan.cut_stock_units += 1
        self.compositions.record(KIND_COMBINED, (stock,) * whole_units + (remaining,), 1)

    def _allocate_joined(self) -> None:
        """Stock shorter than target: butt whole units, then top up from an offcut or fresh stock."""
        target, stock = self.target_length, self.stock_length
        pool = OffcutPool()
        total = 0

        for _ in range(self.required_count):
            remaining = target
            whole_units = 0

            while remaining > stock - self.tolerance:
                remaining -= stock
                whole_units += 1
                self.plan.unprocessed_stock_units += 1
                self._new_unit().add_part(PART_UNPROCESSED, stock)
            if remaining < self.tolerance:
                remaining = 0.0

            used_units = whole_units
            if remaining > 0:
                if not self._fill_from_offcut(remaining, pool):
                    self._cut_fresh_unit(remaining, whole_units, pool)
                    used_units += 1
            elif whole_units > 0:
                self.compositions.record(KIND_NO_CUT, (stock,) * whole_units, 1)

            total += used_units

        self.plan.total_stock_units = total
        get_logger().debug(f"offcut pool after joining: {len(pool)} pieces, {pool.total_length():.1f}mm")
        self.ledger.tally_pool(pool)
        self.ledger.reconcile_pairs(target)

    # ---- entry ----

    def run(self) -> CuttingPlan:
        if lengths_equal(self.stock_length, self.target_length, self.tolerance):
            self._allocate_equal()
        elif self.stock_length > self.target_length:
            self._allocate_multiple_per_stock()
        else:
            self._allocate_joined()

        self.ledger.sweep_long_offcuts(self.target_length)
        return self.plan


def allocate(
    target_length: float,
    stock_length: float,
    required_count: int,
    eco_mode: bool = False,
) -> CuttingPlan:
    """
    Plan how to cut `required_count` pieces of `target_length` from stock of
    `stock_length`.

    Invalid input (non-numeric, non-positive, non-integral count) returns the
    canonical empty plan instead of raising, so callers can render "no result"
    uniformly.
    """
    log = get_logger()
    reason = validate_inputs(target_length, stock_length, required_count)
    if reason is not None:
        log.warn(f"allocate: {reason}; returning empty plan")
        return empty_plan()

    plan = StockAllocator(target_length, stock_length, required_count, eco_mode).run()
    log.debug(
        f"allocate target={plan.target_length:g} stock={plan.stock_length:g} n={plan.required_count}: "
        f"units={plan.total_stock_units} cut={plan.cut_stock_units} "
        f"unprocessed={plan.unprocessed_stock_units} scraps_used={plan.scraps_used_count} "
        f"extra={plan.extra_targets_from_offcuts}"
    )
    return plan

