# floor_cutlist/cli.py
# Command line entry point:
# - job from a JSON file (--job) or from explicit room / joist options
# - prints the joist cut plan, cut diagrams, plywood and foam lists
# - optional CSV + JSON export folder and PNG diagrams
# - shows the matplotlib cut diagram unless --no_plot
#
# Run:
#   python -m floor_cutlist --job job.json --out out/
#   python -m floor_cutlist --room 2700x1800 --joist 45x45 --joist_length 4000 --spacing 303

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from .config import DEFAULTS, parse_dims_text
from .debug import print_layout, print_plan
from .io_json import load_job_json
from .logger import set_enabled, set_verbose
from .plotting import PlotStyle, save_layout_png, save_plywood_png
from .plywood import group_sheets_by_size
from .run import JobResult, run_job
from .types import JobSpec, JoistSize


def _job_from_args(args: argparse.Namespace) -> JobSpec:
    if not args.room:
        raise SystemExit("Either --job or --room is required.")
    try:
        room_w, room_d = parse_dims_text(args.room)
        joist_w, joist_h = parse_dims_text(args.joist)
        return JobSpec(
            room_width=room_w,
            room_depth=room_d,
            joist=JoistSize(joist_w, joist_h),
            joist_length=float(args.joist_length),
            joist_spacing=float(args.spacing),
            rotate_joist=bool(args.rotate),
            eco_mode=bool(args.eco),
            plywood_thicknesses=DEFAULTS.default_plywood_thicknesses,
            tatami_height=args.tatami,
            joist_sizes=DEFAULTS.default_joist_sizes,
        )
    except ValueError as e:
        raise SystemExit(str(e)) from None


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Flooring cut list: joists, plywood and foam for one room")
    p.add_argument("--job", type=str, default="", help="Path to job JSON (room/joist/plywood/insulation/height)")

    # Explicit job (used when --job is not given)
    p.add_argument("--room", type=str, default="", help="Room WxD in mm, e.g. 2700x1800")
    p.add_argument("--joist", type=str, default="45x45", help="Joist section WxH in mm")
    p.add_argument("--joist_length", type=float, default=DEFAULTS.default_joist_length, help="Joist stock length (mm)")
    p.add_argument("--spacing", type=float, default=DEFAULTS.default_joist_spacing, help="Gap between joists (mm)")
    p.add_argument("--rotate", action="store_true", help="Lay joists on their side")
    p.add_argument("--eco", action="store_true", help="Eco mode flag (recorded on the plan)")
    p.add_argument("--tatami", type=float, default=None, help="Tatami height (mm) for the height search")

    # Output
    p.add_argument("--out", type=str, default="", help="Output directory for CSV + JSON exports (optional)")
    p.add_argument("--prefix", type=str, default="joists", help="Export filename prefix")
    p.add_argument("--png", type=str, default="", help="Save the cut diagram PNG here (plywood goes next to it)")
    p.add_argument("--no_plot", action="store_true", help="Do not show matplotlib plot")
    p.add_argument("--no_labels", action="store_true", help="Hide part labels in plot")
    p.add_argument("--grid", action="store_true", help="Show grid in plot")
    p.add_argument("--debug", action="store_true", help="Verbose logging and per-unit breakdown")
    p.add_argument("--quiet", action="store_true", help="Silence info/warning logging")
    return p


def print_report(res: JobResult, *, with_units: bool = False) -> None:
    job = res.job
    cols = res.joist_layout
    print(f"Room: {job.room_width:g} x {job.room_depth:g} mm")
    print(f"Joist: {job.joist.label()}{' (on its side)' if job.rotate_joist else ''}, stock {job.joist_length:g} mm")
    print(f"Joist columns: {cols.column_count} x {cols.room_depth:g} mm (total {cols.total_joist_length:,.0f} mm)")
    print()

    print("== Joist cut plan ==")
    print_plan(res.plan, with_units=with_units)
    if res.layout_groups:
        print("-- Cut diagrams --")
        print_layout(res.layout_groups)
    print()

    ply = res.plywood
    print(f"== Plywood ({ply.sheet_width:g}x{ply.sheet_length:g}, {ply.orientation}) ==")
    print(f"Sheets: {ply.total_sheets} ({ply.width_sheets} x {ply.depth_sheets}), utilization {ply.utilization:.1f}%")
    for (w, l), sheets in group_sheets_by_size(ply):
        print(f"  {w:g} x {l:g} mm x {len(sheets)}")
    print()

    ins = res.insulation
    print(f"== Foam strips ({ins.total_strips} strips, {ins.total_area_m2:.2f} m2) ==")
    for s in ins.strips:
        print(f"  {s.kind:8s} {s.width:g} x {s.length:g} mm x {s.count}")
    for pc in ins.pieces:
        print(f"    cut {pc.width:g} x {pc.length:g} mm x {pc.count}  ({pc.note()})")

    if job.tatami_height is not None:
        print()
        print(f"== Height options for tatami {job.tatami_height:g} mm ==")
        if not res.height_options:
            print("  (no combination within range)")
        for o in res.height_options:
            print(f"  {o.describe()}")


def main(argv: Optional[List[str]] = None) -> None:
    args = build_argparser().parse_args(argv)

    set_verbose(args.debug)
    if args.quiet:
        set_enabled(False)

    if args.job:
        path = Path(args.job)
        if not path.exists():
            raise SystemExit(f"Job file not found: {path}")
        try:
            job = load_job_json(path)
        except ValueError as e:
            raise SystemExit(f"Invalid job file {path}: {e}") from None
    else:
        job = _job_from_args(args)

    style = PlotStyle(show_labels=not args.no_labels, show_grid=bool(args.grid))

    try:
        result = run_job(
            job,
            validate=True,
            out_dir=args.out.strip() or None,
            export_prefix=args.prefix,
            show_plot=not args.no_plot,
            plot_style=style,
        )
    except ValueError as e:
        raise SystemExit(str(e)) from None

    # run_job returns (JobResult, fig) if show_plot else JobResult
    if isinstance(result, tuple):
        res, fig = result
    else:
        res, fig = result, None

    print_report(res, with_units=args.debug)

    if args.png.strip():
        png = Path(args.png.strip())
        png.parent.mkdir(parents=True, exist_ok=True)
        if res.layout_groups:
            save_layout_png(res.layout_groups, str(png), style=style)
        save_plywood_png(res.plywood, str(png.with_name(png.stem + "_plywood" + png.suffix)), style=style)
        print(f"Saved diagrams to {png.parent}")

    if fig is not None:
        import matplotlib.pyplot as plt
        plt.show()


if __name__ == "__main__":
    main()
