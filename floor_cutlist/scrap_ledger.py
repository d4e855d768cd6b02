# floor_cutlist/scrap_ledger.py
# Offcut bookkeeping for the allocator:
# - OffcutPool: live offcut pieces (with provenance) available during allocation
# - ScrapLedger: tallies of primary / secondary offcuts on the plan, plus the
#   harvesting steps that join two offcuts into an extra target piece
#
# Consumption policy: longest piece first, first piece that is long enough.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .composition import CompositionAggregator
from .config import DEFAULTS, lengths_equal
from .types import (
    KIND_DIFFERENT_OFFCUT_PAIR,
    KIND_FROM_OFFCUT,
    KIND_SAME_OFFCUT_PAIR,
    CuttingPlan,
    OffcutEntry,
)


@dataclass(eq=False)
class OffcutPiece:
    """One physical offcut waiting to be reused."""
    length: float
    stock_unit_id: Optional[str] = None
    part_id: Optional[str] = None


@dataclass(frozen=True)
class ConsumeResult:
    consumed: bool
    used_length: float = 0.0
    source: Optional[OffcutPiece] = None


class OffcutPool:
    """Mutable pool of offcut pieces, passed by reference through the allocation."""

    def __init__(self) -> None:
        self._pieces: List[OffcutPiece] = []

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[OffcutPiece]:
        return iter(self._pieces)

    def push(self, piece: OffcutPiece) -> None:
        if piece.length <= 0:
            raise ValueError(f"Offcut length must be > 0 (got {piece.length})")
        self._pieces.append(piece)

    def remove(self, piece: OffcutPiece) -> None:
        self._pieces.remove(piece)

    def sort_descending(self) -> None:
        # stable: equal lengths keep insertion order
        self._pieces.sort(key=lambda p: p.length, reverse=True)

    def first_fit(self, required_length: float, tol: float = 0.0) -> Optional[OffcutPiece]:
        """Longest-first scan; returns the first piece at least `required_length` long (within `tol`)."""
        self.sort_descending()
        for piece in self._pieces:
            if piece.length > required_length - tol:
                return piece
        return None

    def total_length(self) -> float:
        return sum(p.length for p in self._pieces)


def _add_entry(entries: List[OffcutEntry], length: float, count: int, tol: float) -> None:
    for e in entries:
        if lengths_equal(e.length, length, tol):
            e.count += count
            return
    entries.append(OffcutEntry(length=length, count=count))


class ScrapLedger:
    """
    Offcut tallies and harvesting for one plan.
    Extra target pieces harvested here are counted on the plan and recorded as
    compositions; they are not attached to a single stock unit.
    """

    def __init__(
        self,
        plan: CuttingPlan,
        compositions: CompositionAggregator,
        tolerance: Optional[float] = None,
    ) -> None:
        self.plan = plan
        self.compositions = compositions
        self.tolerance = DEFAULTS.length_tolerance if tolerance is None else float(tolerance)

    # ---- tallies ----

    def record_offcut(self, length: float, count: int = 1) -> None:
        """Primary offcut (cut from stock)."""
        if length > 0 and count > 0:
            _add_entry(self.plan.offcuts, length, count, self.tolerance)

    def record_secondary(self, length: float, count: int = 1) -> None:
        """Offcut left over after joining/trimming offcuts."""
        if length > 0 and count > 0:
            _add_entry(self.plan.secondary_offcuts, length, count, self.tolerance)

    def prune(self) -> None:
        self.plan.offcuts = [e for e in self.plan.offcuts if e.count > 0]
        self.plan.secondary_offcuts = [e for e in self.plan.secondary_offcuts if e.count > 0]

    # ---- consumption during allocation ----

    def try_consume(self, required_length: float, pool: OffcutPool) -> ConsumeResult:
        """
        Serve `required_length` from the pool. The chosen piece is shortened by the
        consumed length and dropped once nothing is left of it.
        """
        piece = pool.first_fit(required_length, self.tolerance)
        if piece is None:
            return ConsumeResult(consumed=False)

        piece.length -= required_length
        if piece.length < self.tolerance:
            piece.length = 0.0
            pool.remove(piece)
        self.plan.scraps_used_count += 1
        return ConsumeResult(consumed=True, used_length=required_length, source=piece)

    def tally_pool(self, pool: OffcutPool) -> None:
        """Move whatever is left in the pool into the primary offcut tally."""
        for piece in pool:
            self.record_offcut(piece.length, 1)

    # ---- harvesting ----

    def _harvest_same(self, entry: OffcutEntry, target_length: float) -> int:
        n = min(entry.count // 2, math.floor(entry.length * 2 / target_length))
        if n <= 0:
            return 0
        entry.count -= n * 2
        self.plan.extra_targets_from_offcuts += n
        self.record_secondary(entry.length * 2 - target_length, n)
        self.compositions.record(KIND_SAME_OFFCUT_PAIR, (entry.length, entry.length), n)
        return n

    def _harvest_different(self, a: OffcutEntry, b: OffcutEntry, target_length: float) -> int:
        n = min(a.count, b.count)
        if n <= 0:
            return 0
        a.count -= n
        b.count -= n
        self.plan.extra_targets_from_offcuts += n
        self.record_secondary(a.length + b.length - target_length, n)
        self.compositions.record(KIND_DIFFERENT_OFFCUT_PAIR, (a.length, b.length), n)
        return n

    def harvest_same_pairs(self, target_length: float) -> int:
        """Join two equal offcuts into one target piece wherever 2 * length reaches the target."""
        extra = 0
        for entry in self.plan.offcuts:
            if entry.count >= 2 and entry.length * 2 >= target_length:
                extra += self._harvest_same(entry, target_length)
        self.prune()
        return extra

    def reconcile_pairs(self, target_length: float) -> int:
        """
        Same-length pairs first, then every pair of distinct lengths (longest first)
        whose sum reaches the target. Returns the number of extra target pieces.
        """
        entries = self.plan.offcuts
        entries.sort(key=lambda e: e.length, reverse=True)
        extra = 0
        for i, first in enumerate(entries):
            if first.count <= 0:
                continue
            if first.count >= 2 and first.length * 2 >= target_length:
                extra += self._harvest_same(first, target_length)
            for second in entries[i + 1:]:
                if second.count <= 0 or first.count <= 0:
                    continue
                if first.length + second.length >= target_length:
                    extra += self._harvest_different(first, second, target_length)
        self.prune()
        return extra

    def sweep_long_offcuts(self, target_length: float) -> int:
        """Offcuts at least one target long are target pieces outright."""
        extra = 0
        for entry in self.plan.offcuts:
            if entry.count <= 0 or entry.length < target_length:
                continue
            per_piece = math.floor(entry.length / target_length)
            made = per_piece * entry.count
            extra += made
            self.plan.extra_targets_from_offcuts += made
            self.record_secondary(entry.length - per_piece * target_length, entry.count)
            self.compositions.record(KIND_FROM_OFFCUT, (target_length,), made)
            entry.count = 0
        self.prune()
        return extra
