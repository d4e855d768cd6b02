# floor_cutlist/composition.py
# Composition groups: counted, deduplicated records of how target pieces were made.
# Groups are keyed structurally (kind + ordered lengths), lengths compared with tolerance.

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import DEFAULTS, lengths_equal
from .types import COMPOSITION_KINDS, CompositionGroup, CuttingPlan


def _bucket(length: float, tol: float) -> int:
    return int(round(length / tol))


class CompositionAggregator:
    """
    Accumulates composition groups for one plan.

    The lookup key is (kind, bucketed lengths). Neighbouring buckets are probed
    too, so two lengths that straddle a bucket edge but differ by less than the
    tolerance still land in the same group.
    """

    def __init__(self, plan: CuttingPlan, tolerance: Optional[float] = None) -> None:
        self.plan = plan
        self.tolerance = DEFAULTS.length_tolerance if tolerance is None else float(tolerance)
        self._index: Dict[Tuple[str, Tuple[int, ...]], CompositionGroup] = {}
        for g in plan.compositions:
            self._index[self._key(g.kind, g.lengths)] = g

    def _key(self, kind: str, lengths: Sequence[float]) -> Tuple[str, Tuple[int, ...]]:
        return kind, tuple(_bucket(x, self.tolerance) for x in lengths)

    def _matches(self, group: CompositionGroup, kind: str, lengths: Sequence[float]) -> bool:
        if group.kind != kind or len(group.lengths) != len(lengths):
            return False
        return all(lengths_equal(a, b, self.tolerance) for a, b in zip(group.lengths, lengths))

    def find(self, kind: str, lengths: Sequence[float]) -> Optional[CompositionGroup]:
        g = self._index.get(self._key(kind, lengths))
        if g is not None and self._matches(g, kind, lengths):
            return g
        # Slow path for lengths near a bucket edge
        for g in self.plan.compositions:
            if self._matches(g, kind, lengths):
                return g
        return None

    def record(self, kind: str, lengths: Iterable[float], count: int = 1) -> CompositionGroup:
        """Add `count` occurrences of a pattern; merges into an existing group when one matches."""
        if kind not in COMPOSITION_KINDS:
            raise ValueError(f"Unknown composition kind: {kind}")
        if count <= 0:
            raise ValueError(f"count must be >= 1 (got {count})")
        lengths_t = tuple(float(x) for x in lengths)

        existing = self.find(kind, lengths_t)
        if existing is not None:
            existing.count += count
            return existing

        group = CompositionGroup(kind=kind, lengths=lengths_t, count=count)
        self.plan.compositions.append(group)
        self._index[self._key(kind, lengths_t)] = group
        return group

    def total_pieces(self) -> int:
        return sum(g.count for g in self.plan.compositions)


def groups_by_kind(groups: Iterable[CompositionGroup]) -> Dict[str, List[CompositionGroup]]:
    out: Dict[str, List[CompositionGroup]] = {}
    for g in groups:
        out.setdefault(g.kind, []).append(g)
    return out
