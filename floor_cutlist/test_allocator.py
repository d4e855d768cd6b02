# floor_cutlist/test_allocator.py
# Allocator behavior on the three stock/target cases, offcut reuse and invalid input.
#   pytest floor_cutlist

from __future__ import annotations

import math

import pytest

from floor_cutlist.allocator import allocate, validate_inputs
from floor_cutlist.types import (
    KIND_COMBINED,
    KIND_NO_CUT,
    PART_OFFCUT,
    PART_TARGET,
    PART_TARGET_FROM_OFFCUT,
    PART_UNPROCESSED,
    CuttingPlan,
    empty_plan,
)
from floor_cutlist.validate import raise_on_errors, validate_plan


def _check_invariants(plan: CuttingPlan) -> None:
    assert plan.total_stock_units == len(plan.stock_units)
    for u in plan.stock_units:
        assert u.used_length() <= u.length + 0.1
        for p in u.parts:
            assert p.stock_unit_id == u.id
    raise_on_errors(validate_plan(plan))


def test_several_pieces_per_stock() -> None:
    plan = allocate(300, 1820, 10)
    _check_invariants(plan)

    assert plan.total_stock_units == 2
    assert plan.full_length_pieces == 10
    assert plan.cut_stock_units == 0
    assert plan.unprocessed_stock_units == 0

    first, second = plan.stock_units
    assert [p.type for p in first.parts] == [PART_TARGET] * 6 + [PART_OFFCUT]
    assert first.parts[-1].length == pytest.approx(20)
    assert [p.type for p in second.parts] == [PART_TARGET] * 4 + [PART_OFFCUT]
    assert second.parts[-1].length == pytest.approx(620)

    lengths = {round(e.length, 1): e.count for e in plan.offcuts}
    assert lengths[20.0] == 1

    kinds = {g.kind for g in plan.compositions}
    assert KIND_NO_CUT in kinds


def test_long_leftover_becomes_extra_piece() -> None:
    plan = allocate(300, 1820, 10)
    # the 620 leftover of the second unit holds two more 300 pieces
    assert plan.extra_targets_from_offcuts == 2
    assert all(e.length < 300 for e in plan.offcuts)
    assert any(e.length == pytest.approx(20) for e in plan.secondary_offcuts)


def test_stock_equals_target() -> None:
    plan = allocate(300, 300, 5)
    _check_invariants(plan)

    assert plan.total_stock_units == 5
    assert plan.full_length_pieces == 5
    assert plan.offcuts == []
    assert plan.secondary_offcuts == []
    assert [g.kind for g in plan.compositions] == [KIND_NO_CUT]
    assert plan.compositions[0].count == 5
    assert all(not u.has_part_type(PART_OFFCUT) for u in plan.stock_units)


def test_stock_shorter_than_target() -> None:
    plan = allocate(1000, 600, 1)
    _check_invariants(plan)

    assert plan.total_stock_units == 2
    assert plan.unprocessed_stock_units == 1
    assert plan.cut_stock_units == 1
    assert len(plan.offcuts) == 1
    assert plan.offcuts[0].length == pytest.approx(200)
    assert plan.offcuts[0].count == 1

    whole, cut = plan.stock_units
    assert [p.type for p in whole.parts] == [PART_UNPROCESSED]
    assert [(p.type, p.length) for p in cut.parts] == [(PART_TARGET, 400), (PART_OFFCUT, 200)]

    g = plan.compositions[0]
    assert g.kind == KIND_COMBINED
    assert g.lengths == (600.0, 400.0)


def test_offcut_reused_with_provenance() -> None:
    plan = allocate(1000, 700, 2)
    _check_invariants(plan)

    # piece 1: whole 700 + 300 cut from a fresh unit (400 left)
    # piece 2: whole 700 + 300 taken from that 400 offcut
    assert plan.total_stock_units == 3
    assert plan.unprocessed_stock_units == 2
    assert plan.cut_stock_units == 1
    assert plan.scraps_used_count == 1

    cut = plan.find_unit("stock_2")
    assert cut is not None
    types = [p.type for p in cut.parts]
    assert types == [PART_TARGET, PART_TARGET_FROM_OFFCUT, PART_OFFCUT]

    reused = cut.parts[1]
    assert reused.length == pytest.approx(300)
    assert reused.source_unit_id == "stock_2"
    assert reused.source_part_id == cut.parts[2].id
    assert cut.parts[2].length == pytest.approx(100)
    assert cut.used_length() == pytest.approx(700)

    assert [(e.length, e.count) for e in plan.offcuts] == [(pytest.approx(100), 1)]


def test_offcut_fully_consumed_is_removed() -> None:
    # 1000 from 750: 250 remainder leaves a 500 offcut, which serves two more remainders
    plan = allocate(1000, 750, 3)
    _check_invariants(plan)

    cut = plan.find_unit("stock_2")
    assert cut is not None
    assert not cut.has_part_type(PART_OFFCUT)
    assert sum(1 for p in cut.parts if p.type == PART_TARGET_FROM_OFFCUT) == 2
    assert plan.scraps_used_count == 2
    assert plan.offcuts == []


def test_allocation_is_idempotent() -> None:
    for args in ((300, 1820, 10), (1000, 600, 4), (2500, 910, 7), (300, 300, 3)):
        assert allocate(*args) == allocate(*args)


def test_eco_mode_is_recorded_only() -> None:
    a = allocate(1800, 4000, 9)
    b = allocate(1800, 4000, 9, eco_mode=True)
    assert b.eco_mode is True
    assert a.stock_units == b.stock_units
    assert a.total_stock_units == b.total_stock_units


@pytest.mark.parametrize(
    "target,stock,required",
    [
        (300, 1820, 0),
        (300, 0, 5),
        (300, -10, 5),
        (0, 1820, 5),
        ("300", 1820, 5),
        (300, 1820, 2.5),
        (300, 1820, True),
        (math.nan, 1820, 5),
        (300, math.inf, 5),
        (None, 1820, 5),
    ],
)
def test_invalid_input_returns_empty_plan(target, stock, required) -> None:
    plan = allocate(target, stock, required)
    assert plan == empty_plan()
    assert plan.is_empty()
    assert validate_inputs(target, stock, required) is not None


def test_pieces_needed_are_covered() -> None:
    for target, stock, required in ((2400, 4000, 11), (3600, 1820, 5), (910, 910, 2), (1000, 650, 6)):
        plan = allocate(target, stock, required)
        _check_invariants(plan)
        made = sum(
            p.length
            for u in plan.stock_units
            for p in u.parts
            if p.type != PART_OFFCUT
        )
        assert made >= target * required - 0.1


def test_fractional_exact_multiple_needs_no_cut() -> None:
    # 3 * 910.1 is not exactly 2730.3 in floating point
    plan = allocate(2730.3, 910.1, 3)
    _check_invariants(plan)

    assert plan.total_stock_units == 9
    assert plan.unprocessed_stock_units == 9
    assert plan.cut_stock_units == 0
    assert plan.offcuts == []
    assert [(g.kind, g.count) for g in plan.compositions] == [(KIND_NO_CUT, 3)]
    assert plan.compositions[0].lengths == (910.1, 910.1, 910.1)

    single = allocate(300.3, 100.1, 1)
    assert single.total_stock_units == 3
    assert all(p.length > 0.1 for u in single.stock_units for p in u.parts)


def test_fractional_pieces_per_stock() -> None:
    plan = allocate(910.1, 2730.3, 6)
    _check_invariants(plan)

    assert plan.total_stock_units == 2
    assert all(len(u.parts) == 3 for u in plan.stock_units)
    assert not any(u.has_part_type(PART_OFFCUT) for u in plan.stock_units)
    assert plan.offcuts == []


def test_stock_within_tolerance_of_target_is_equal_case() -> None:
    plan = allocate(1820.0, 1820.05, 4)
    _check_invariants(plan)
    assert plan.total_stock_units == 4
    assert plan.full_length_pieces == 4
    assert plan.offcuts == []
