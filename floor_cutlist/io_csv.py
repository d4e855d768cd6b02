# floor_cutlist/io_csv.py
# CSV export helpers:
# - stock units with their parts (provenance graph)
# - offcut tallies and compositions
# - grouped cut diagrams (what to actually cut, and how many times)
# - plywood sheets
#
# (Plotting is handled in plotting.py.)

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Optional

from .layout import LayoutGroup, project_layout
from .plywood import PlywoodPlan
from .types import CuttingPlan


def _writer(path: Path, fieldnames: List[str]):
    path.parent.mkdir(parents=True, exist_ok=True)
    f = path.open("w", newline="", encoding="utf-8")
    w = csv.DictWriter(f, fieldnames=fieldnames)
    w.writeheader()
    return f, w


def export_parts_csv(plan: CuttingPlan, path: str | Path) -> None:
    """One row per part, in stock unit order."""
    f, w = _writer(
        Path(path),
        ["unit_id", "unit_length", "part_id", "type", "length", "source_unit_id", "source_part_id"],
    )
    with f:
        for u in plan.stock_units:
            for p in u.parts:
                w.writerow(
                    {
                        "unit_id": u.id,
                        "unit_length": u.length,
                        "part_id": p.id,
                        "type": p.type,
                        "length": p.length,
                        "source_unit_id": p.source_unit_id or "",
                        "source_part_id": p.source_part_id or "",
                    }
                )


def export_offcuts_csv(plan: CuttingPlan, path: str | Path) -> None:
    f, w = _writer(Path(path), ["kind", "length", "count"])
    with f:
        for e in plan.offcuts:
            w.writerow({"kind": "primary", "length": e.length, "count": e.count})
        for e in plan.secondary_offcuts:
            w.writerow({"kind": "secondary", "length": e.length, "count": e.count})


def export_compositions_csv(plan: CuttingPlan, path: str | Path) -> None:
    f, w = _writer(Path(path), ["kind", "lengths", "count"])
    with f:
        for g in plan.compositions:
            w.writerow({"kind": g.kind, "lengths": "+".join(f"{x:g}" for x in g.lengths), "count": g.count})


def export_layout_csv(groups: List[LayoutGroup], path: str | Path) -> None:
    f, w = _writer(Path(path), ["signature", "material_kind", "unit_count", "stock_length", "utilization_pct"])
    with f:
        for g in groups:
            w.writerow(
                {
                    "signature": g.signature,
                    "material_kind": g.material_kind,
                    "unit_count": g.unit_count,
                    "stock_length": g.stock_length,
                    "utilization_pct": round(g.utilization, 2),
                }
            )


def export_plywood_csv(plywood: PlywoodPlan, path: str | Path) -> None:
    f, w = _writer(Path(path), ["index", "x", "y", "width", "length", "partial"])
    with f:
        for s in plywood.sheets:
            w.writerow(
                {
                    "index": s.index,
                    "x": s.x,
                    "y": s.y,
                    "width": s.width,
                    "length": s.length,
                    "partial": int(s.partial),
                }
            )


def export_all(
    plan: CuttingPlan,
    out_dir: str | Path,
    prefix: str = "joists",
    plywood: Optional[PlywoodPlan] = None,
) -> None:
    """
    Export parts, offcuts, compositions, cut diagrams (and plywood sheets) into out_dir.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    export_parts_csv(plan, out_dir / f"{prefix}_parts.csv")
    export_offcuts_csv(plan, out_dir / f"{prefix}_offcuts.csv")
    export_compositions_csv(plan, out_dir / f"{prefix}_compositions.csv")
    export_layout_csv(project_layout(plan), out_dir / f"{prefix}_layout.csv")
    if plywood is not None:
        export_plywood_csv(plywood, out_dir / "plywood_sheets.csv")
