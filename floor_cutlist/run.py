# floor_cutlist/run.py
# High-level convenience runner that ties together:
# - joist column layout for the room
# - joist cut plan (allocator) + grouped cut diagrams
# - validation + metrics
# - plywood tiling, foam strips, height options
# - optional CSV/JSON export
# - matplotlib cut diagram
#
# Example:
#   from floor_cutlist.config import make_default_job
#   from floor_cutlist.run import run_job
#   res = run_job(make_default_job(2700, 1800), out_dir="out", show_plot=False)

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .allocator import allocate
from .height_options import HeightOption, find_height_options
from .insulation import InsulationList, compute_insulation_parts
from .io_csv import export_all
from .joist_layout import JoistLayout, compute_joist_layout
from .layout import LayoutGroup, project_layout
from .logger import get_logger
from .metrics import PlanMetrics, compute_plan_metrics
from .plotting import PlotStyle, plot_layout
from .plywood import PlywoodPlan, compute_plywood_plan
from .types import CuttingPlan, JobSpec
from .utils import save_result_json, timer
from .validate import raise_on_errors, validate_plan


@dataclass(frozen=True)
class JobResult:
    job: JobSpec
    joist_layout: JoistLayout
    plan: CuttingPlan
    layout_groups: List[LayoutGroup]
    plywood: PlywoodPlan
    insulation: InsulationList
    height_options: List[HeightOption]
    metrics: PlanMetrics


def run_job(
    job: JobSpec,
    *,
    validate: bool = True,
    out_dir: Optional[str | Path] = None,
    export_prefix: str = "joists",
    show_plot: bool = True,
    plot_style: Optional[PlotStyle] = None,
):
    """
    Compute everything for one flooring job.

    Each joist column runs the room depth, so the cut plan asks for
    `column_count` pieces of `room_depth` from stock of `joist_length`.

    Returns JobResult. If show_plot=True, returns (JobResult, fig).
    """
    log = get_logger()

    with timer("run_job") as t:
        columns = compute_joist_layout(job.room_width, job.room_depth, job.laid_joist_width, job.joist_spacing)
        plan = allocate(job.room_depth, job.joist_length, columns.column_count, eco_mode=job.eco_mode)

        if validate:
            issues = validate_plan(plan)
            for issue in issues:
                if issue.level == "ERROR":
                    log.error(issue.message)
                else:
                    log.warn(issue.message)
            raise_on_errors(issues)

        groups = project_layout(plan)
        plywood = compute_plywood_plan(job.room_width, job.room_depth, job.plywood_width, job.plywood_length)
        insulation = compute_insulation_parts(columns, job.foam_board_width, job.foam_board_length)

        options: List[HeightOption] = []
        if job.tatami_height is not None:
            options = find_height_options(
                job.joist_sizes or (job.joist,),
                job.plywood_thicknesses,
                job.tatami_height,
                job.flooring_thickness,
            )

    res = JobResult(
        job=job,
        joist_layout=columns,
        plan=plan,
        layout_groups=groups,
        plywood=plywood,
        insulation=insulation,
        height_options=options,
        metrics=compute_plan_metrics(plan),
    )
    log.info(
        f"room {job.room_width:g}x{job.room_depth:g}: {columns.column_count} joists, "
        f"{plan.total_stock_units} stock units, {plywood.total_sheets} plywood sheets "
        f"({t['seconds']:.3f}s)"
    )

    if out_dir is not None:
        out_dir = Path(out_dir)
        export_all(plan, out_dir=out_dir, prefix=export_prefix, plywood=plywood)
        save_result_json(res, out_dir / "result.json")

    if show_plot:
        if not groups:
            log.warn("Cut plan is empty; nothing to plot")
            return res, None
        fig = plot_layout(groups, style=plot_style or PlotStyle())
        return res, fig

    return res
