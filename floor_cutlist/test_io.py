# floor_cutlist/test_io.py
# Text parsers, JSON job loading and CSV export.

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from floor_cutlist.allocator import allocate
from floor_cutlist.config import DEFAULTS, parse_dims_text
from floor_cutlist.io_csv import export_all
from floor_cutlist.io_json import job_from_dict, load_job_json
from floor_cutlist.io_text import format_joist_sizes, parse_joist_sizes, parse_plywood_thicknesses
from floor_cutlist.plywood import compute_plywood_plan


def test_parse_joist_sizes() -> None:
    sizes = parse_joist_sizes("45,45,45 square\n\n30,40\nnot,a size\n36, 45 ,\n")
    assert [(s.width, s.height, s.name, s.index) for s in sizes] == [
        (45, 45, "45 square", 0),
        (30, 40, None, 1),
        (36, 45, None, 3),
    ]
    assert format_joist_sizes(sizes) == "45,45,45 square\n30,40\n36,45"


def test_parse_plywood_thicknesses() -> None:
    assert parse_plywood_thicknesses("12, 15,x, 24,") == [12, 15, 24]
    assert parse_plywood_thicknesses("") == []


def test_parse_dims_text() -> None:
    assert parse_dims_text("2700x1800") == (2700, 1800)
    assert parse_dims_text("2700 × 1800") == (2700, 1800)
    with pytest.raises(ValueError):
        parse_dims_text("2700")
    with pytest.raises(ValueError):
        parse_dims_text("widexdeep")


def test_load_job_json(tmp_path: Path) -> None:
    path = tmp_path / "job.json"
    path.write_text(
        json.dumps(
            {
                "room": {"width": 2700, "depth": 1800},
                "joist": {"sizes": "45,45,45 square\n30,40", "selected": 1, "rotate": True, "length": 3650},
                "plywood": {"thicknesses": [12, 15]},
                "height": {"tatami": 60, "flooring": 3},
            }
        ),
        encoding="utf-8",
    )
    job = load_job_json(path)
    assert job.joist.width == 30 and job.joist.height == 40
    assert job.rotate_joist
    assert job.laid_joist_width == 40
    assert job.joist_length == 3650
    assert job.joist_spacing == DEFAULTS.default_joist_spacing
    assert job.plywood_thicknesses == (12.0, 15.0)
    assert (job.plywood_width, job.plywood_length) == (910, 1820)
    assert job.tatami_height == 60
    assert job.flooring_thickness == 3
    assert len(job.joist_sizes) == 2


def test_job_from_dict_size_list() -> None:
    job = job_from_dict(
        {
            "room": {"width": 3600, "depth": 2700},
            "joist": {"sizes": [{"width": 45, "height": 60, "name": "45x60"}], "length": 4000},
        }
    )
    assert job.joist.label() == "45x60 (45x60mm)"
    assert job.tatami_height is None
    assert job.plywood_thicknesses == DEFAULTS.default_plywood_thicknesses


@pytest.mark.parametrize(
    "data",
    [
        {"joist": {"length": 4000}},
        {"room": {"width": 2700, "depth": 1800}, "joist": {}},
        {"room": {"width": 2700, "depth": 1800}, "joist": {"length": 4000, "selected": 9}},
        {"room": {"width": 2700, "depth": 1800}, "joist": {"length": 4000, "sizes": "nothing here"}},
        {"room": {"width": -1, "depth": 1800}, "joist": {"length": 4000}},
    ],
)
def test_job_from_dict_rejects(data) -> None:
    with pytest.raises(ValueError):
        job_from_dict(data)


def test_load_job_json_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "job.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_job_json(path)


def test_export_all(tmp_path: Path) -> None:
    plan = allocate(1000, 700, 2)
    export_all(plan, tmp_path / "out", prefix="p", plywood=compute_plywood_plan(2700, 1800, 910, 1820))

    out = tmp_path / "out"
    for name in ("p_parts.csv", "p_offcuts.csv", "p_compositions.csv", "p_layout.csv", "plywood_sheets.csv"):
        assert (out / name).exists()

    with (out / "p_parts.csv").open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == sum(len(u.parts) for u in plan.stock_units)
    reused = [r for r in rows if r["type"] == "target_from_offcut"]
    assert len(reused) == 1
    assert reused[0]["source_unit_id"] == "stock_2"

    with (out / "p_compositions.csv").open(newline="", encoding="utf-8") as f:
        comps = list(csv.DictReader(f))
    assert comps[0]["lengths"] == "700+300"


@pytest.mark.parametrize(
    "sizes",
    [
        [{"width": 45}],
        ["45x45"],
        [{"width": "wide", "height": 45}],
        {"width": 45, "height": 45},
    ],
)
def test_job_from_dict_rejects_bad_size_entries(sizes) -> None:
    data = {"room": {"width": 2700, "depth": 1800}, "joist": {"length": 4000, "sizes": sizes}}
    with pytest.raises(ValueError, match="joist.sizes"):
        job_from_dict(data)


def test_job_from_dict_rejects_bad_thicknesses() -> None:
    data = {"room": {"width": 2700, "depth": 1800}, "joist": {"length": 4000}, "plywood": {"thicknesses": [12, {}]}}
    with pytest.raises(ValueError, match="plywood.thicknesses"):
        job_from_dict(data)
