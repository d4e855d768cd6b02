# floor_cutlist/test_run.py
# End-to-end: job -> plan, companions, exports, plots and the CLI.

from __future__ import annotations

import json
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from floor_cutlist.cli import main
from floor_cutlist.config import make_default_job
from floor_cutlist.logger import set_enabled
from floor_cutlist.plotting import plot_layout, plot_plywood, save_layout_png
from floor_cutlist.run import JobResult, run_job


def test_run_job_basic() -> None:
    res = run_job(make_default_job(2700, 1800), show_plot=False)
    assert isinstance(res, JobResult)

    assert res.joist_layout.column_count == 9
    assert res.plan.target_length == 1800
    assert res.plan.required_count == 9
    assert res.plan.total_stock_units == 5
    assert [g.unit_count for g in res.layout_groups] == [4, 1]
    assert res.plywood.total_sheets == 3
    assert res.insulation.total_strips == 8
    assert res.height_options == []
    assert res.metrics.stock_length_total == pytest.approx(5 * 4000)


def test_run_job_height_search() -> None:
    res = run_job(make_default_job(2700, 1800, tatami_height=60), show_plot=False)
    assert res.height_options
    assert all(58 <= o.total <= 60 for o in res.height_options)


def test_run_job_exports(tmp_path: Path) -> None:
    run_job(make_default_job(3600, 2700), out_dir=tmp_path, show_plot=False)
    assert (tmp_path / "joists_parts.csv").exists()
    assert (tmp_path / "plywood_sheets.csv").exists()

    data = json.loads((tmp_path / "result.json").read_text(encoding="utf-8"))
    assert set(data) == {"job", "joist_layout", "joist_plan", "plywood", "insulation", "height_options"}
    assert data["joist_plan"]["totals"]["total_stock_units"] == len(data["joist_plan"]["stock_units"])
    assert data["job"]["joist"]["width"] == 45


def test_run_job_returns_figure() -> None:
    res, fig = run_job(make_default_job(2700, 1800), show_plot=True)
    assert fig is not None
    assert len(fig.axes) == 1
    plt.close(fig)


def test_plots(tmp_path: Path) -> None:
    res = run_job(make_default_job(2700, 3650, joist_length=1820), show_plot=False)
    save_layout_png(res.layout_groups, str(tmp_path / "cuts.png"))
    assert (tmp_path / "cuts.png").exists()

    fig = plot_plywood(res.plywood)
    plt.close(fig)
    with pytest.raises(ValueError):
        plot_layout([])


def test_cli_room_options(capsys) -> None:
    try:
        main(["--room", "2700x1800", "--joist", "45x45", "--no_plot", "--quiet", "--tatami", "60"])
    finally:
        set_enabled(True)
    out = capsys.readouterr().out
    assert "Joist columns: 9 x 1800 mm" in out
    assert "== Plywood" in out
    assert "Height options for tatami 60 mm" in out


def test_cli_job_file(tmp_path: Path, capsys) -> None:
    job = tmp_path / "job.json"
    job.write_text(json.dumps({"room": {"width": 1820, "depth": 910}, "joist": {"length": 4000}}), encoding="utf-8")
    try:
        main(["--job", str(job), "--no_plot", "--quiet", "--out", str(tmp_path / "out"), "--png", str(tmp_path / "cuts.png")])
    finally:
        set_enabled(True)
    assert (tmp_path / "out" / "result.json").exists()
    assert (tmp_path / "cuts.png").exists()
    assert (tmp_path / "cuts_plywood.png").exists()
    assert "Stock units:" in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv",
    [
        ["--no_plot"],
        ["--job", "does/not/exist.json", "--no_plot"],
        ["--room", "wide", "--no_plot"],
        ["--room", "60x1800", "--no_plot"],
    ],
)
def test_cli_errors(argv) -> None:
    with pytest.raises(SystemExit):
        main(argv)


def test_cli_reports_bad_size_entry(tmp_path: Path) -> None:
    job = tmp_path / "job.json"
    job.write_text(
        json.dumps({"room": {"width": 2700, "depth": 1800}, "joist": {"length": 4000, "sizes": [{"width": 45}]}}),
        encoding="utf-8",
    )
    with pytest.raises(SystemExit, match="Invalid job file"):
        main(["--job", str(job), "--no_plot"])
