# floor_cutlist/utils.py
# Small utilities used across the project:
# - timing context manager
# - JSON export for plans and whole job results
#
# Keeps dependencies minimal (stdlib only).

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterator

from .io_text import format_joist_sizes
from .layout import layout_utilization, project_layout
from .metrics import compute_plan_metrics
from .types import CuttingPlan, JobSpec

if TYPE_CHECKING:
    from .run import JobResult


@contextmanager
def timer(label: str = "timer") -> Iterator[Dict[str, float]]:
    """
    Usage:
      with timer("allocate") as t:
          ...
      print(t["seconds"])
    """
    t0 = time.perf_counter()
    payload: Dict[str, float] = {}
    try:
        yield payload
    finally:
        payload["seconds"] = time.perf_counter() - t0


def _to_jsonable(obj: Any) -> Any:
    """Convert dataclasses and other objects to JSON-serializable structures."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_jsonable(asdict(obj))
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, Path):
        return str(obj)
    return obj


def plan_to_dict(plan: CuttingPlan) -> Dict[str, Any]:
    """
    Convert a CuttingPlan to a JSON-friendly dict, with metrics and the
    grouped cut diagrams alongside the raw provenance graph.
    """
    m = compute_plan_metrics(plan)
    groups = project_layout(plan)
    return {
        "inputs": {
            "target_length": plan.target_length,
            "stock_length": plan.stock_length,
            "required_count": plan.required_count,
            "eco_mode": plan.eco_mode,
        },
        "totals": {
            "total_stock_units": plan.total_stock_units,
            "full_length_pieces": plan.full_length_pieces,
            "unprocessed_stock_units": plan.unprocessed_stock_units,
            "cut_stock_units": plan.cut_stock_units,
            "scraps_used_count": plan.scraps_used_count,
            "extra_targets_from_offcuts": plan.extra_targets_from_offcuts,
            "stock_length_total_mm": m.stock_length_total,
            "used_length_mm": m.used_length,
            "offcut_length_mm": m.offcut_length,
            "utilization_pct": round(m.utilization, 2),
        },
        "offcuts": [{"length": e.length, "count": e.count} for e in plan.offcuts],
        "secondary_offcuts": [{"length": e.length, "count": e.count} for e in plan.secondary_offcuts],
        "compositions": [
            {"kind": g.kind, "lengths": list(g.lengths), "count": g.count} for g in plan.compositions
        ],
        "stock_units": [
            {
                "id": u.id,
                "length": u.length,
                "parts": [
                    {
                        "id": p.id,
                        "type": p.type,
                        "length": p.length,
                        "source_unit_id": p.source_unit_id,
                        "source_part_id": p.source_part_id,
                    }
                    for p in u.parts
                ],
            }
            for u in plan.stock_units
        ],
        "layout": {
            "utilization_pct": round(layout_utilization(groups), 2),
            "groups": [
                {
                    "signature": g.signature,
                    "material_kind": g.material_kind,
                    "unit_count": g.unit_count,
                    "unit_ids": list(g.unit_ids),
                    "utilization_pct": round(g.utilization, 2),
                }
                for g in groups
            ],
        },
    }


def job_to_dict(job: JobSpec) -> Dict[str, Any]:
    out = _to_jsonable(job)
    out["joist_sizes_text"] = format_joist_sizes(list(job.joist_sizes))
    return out


def result_to_dict(result: "JobResult") -> Dict[str, Any]:
    return {
        "job": job_to_dict(result.job),
        "joist_layout": _to_jsonable(result.joist_layout),
        "joist_plan": plan_to_dict(result.plan),
        "plywood": {
            "orientation": result.plywood.orientation,
            "total_sheets": result.plywood.total_sheets,
            "utilization_pct": round(result.plywood.utilization, 2),
            "sheets": _to_jsonable(result.plywood.sheets),
        },
        "insulation": {
            "strips": _to_jsonable(result.insulation.strips),
            "pieces": _to_jsonable(result.insulation.pieces),
            "total_area_m2": round(result.insulation.total_area_m2, 3),
        },
        "height_options": [o.describe() for o in result.height_options],
    }


def save_result_json(result: "JobResult", path: str | Path, *, indent: int = 2) -> None:
    """Save a job result (plan + companions) into JSON for debugging/integration."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(_to_jsonable(result_to_dict(result)), f, ensure_ascii=False, indent=indent)
