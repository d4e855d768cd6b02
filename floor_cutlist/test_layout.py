# floor_cutlist/test_layout.py
# Grouping stock units into cut diagrams.

from __future__ import annotations

import pytest

from floor_cutlist.allocator import allocate
from floor_cutlist.layout import (
    MATERIAL_CUT,
    MATERIAL_STOCK,
    MATERIAL_UNCUT,
    consumed_source_units,
    layout_utilization,
    project_layout,
)
from floor_cutlist.types import (
    PART_OFFCUT,
    PART_TARGET,
    PART_TARGET_FROM_OFFCUT,
    CuttingPlan,
    StockUnit,
    empty_plan,
)


def test_identical_units_are_grouped() -> None:
    groups = project_layout(allocate(1800, 4000, 9))
    assert [g.unit_count for g in groups] == [4, 1]
    full, last = groups
    assert full.material_kind == MATERIAL_CUT
    assert full.signature == "target:1800.0|target:1800.0|offcut:400.0"
    assert full.unit_ids == ["stock_1", "stock_2", "stock_3", "stock_4"]
    assert last.signature == "target:1800.0|offcut:2200.0"
    assert full.utilization == pytest.approx(90.0)


def test_diagram_parts_are_laid_end_to_end() -> None:
    g = project_layout(allocate(300, 1820, 10))[0]
    offsets = [p.offset for p in g.parts]
    assert offsets == [0, 300, 600, 900, 1200, 1500, 1800]
    assert g.parts[-1].end() == pytest.approx(1820)
    assert g.parts[0].label == "300.0mm"


def test_material_kinds() -> None:
    groups = project_layout(allocate(1000, 600, 2))
    kinds = {g.signature: g.material_kind for g in groups}
    assert kinds["unprocessed:600.0"] == MATERIAL_UNCUT
    assert kinds["target:400.0|offcut:200.0"] == MATERIAL_CUT

    exact = project_layout(allocate(300, 300, 3))
    assert [(g.material_kind, g.unit_count) for g in exact] == [(MATERIAL_STOCK, 3)]
    assert layout_utilization(exact) == pytest.approx(100.0)


def test_units_feeding_other_units_are_hidden() -> None:
    donor = StockUnit("stock_1", 1000)
    off = donor.add_part(PART_OFFCUT, 600)
    donor.add_part(PART_TARGET, 400)
    taker = StockUnit("stock_2", 1000)
    taker.add_part(PART_TARGET, 400)
    taker.add_part(PART_TARGET_FROM_OFFCUT, 600, source_unit_id="stock_1", source_part_id=off.id)
    plan = CuttingPlan(total_stock_units=2, stock_units=[donor, taker])

    assert consumed_source_units(plan.stock_units) == {"stock_1"}
    groups = project_layout(plan)
    assert [g.unit_ids for g in groups] == [["stock_2"]]


def test_reuse_on_own_unit_stays_visible() -> None:
    plan = allocate(1000, 700, 2)
    assert consumed_source_units(plan.stock_units) == set()
    ids = [u for g in project_layout(plan) for u in g.unit_ids]
    assert sorted(ids) == ["stock_1", "stock_2", "stock_3"]


def test_empty_plan_has_no_groups() -> None:
    assert project_layout(empty_plan()) == []
    assert layout_utilization([]) == 0.0


def test_swept_offcut_still_counts_as_offcut_in_diagram() -> None:
    plan = allocate(1800, 4000, 9)
    # the 2200 leftover of the last unit yields one extra piece on the plan...
    assert plan.extra_targets_from_offcuts == 1
    # ...but its diagram keeps it as offcut
    last = project_layout(plan)[-1]
    assert last.parts[-1].type == PART_OFFCUT
    assert last.utilization == pytest.approx(45.0)
