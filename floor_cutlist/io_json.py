# floor_cutlist/io_json.py
# Load a flooring job from JSON into a JobSpec.
#
# Expected JSON shape (only "room" and "joist.length" are required):
# {
#   "room":       {"width": 2700, "depth": 1800},
#   "joist":      {"sizes": "45,45,45 square\n30,40", "selected": 0, "rotate": false,
#                  "length": 4000, "spacing": 303, "eco_mode": false},
#   "plywood":    {"width": 910, "length": 1820, "thicknesses": "12,15,24"},
#   "insulation": {"board_width": 910, "board_length": 1820},
#   "height":     {"tatami": 60, "flooring": 12}
# }
#
# "joist.sizes" and "plywood.thicknesses" may also be JSON lists
# ([{"width": 45, "height": 45, "name": "..."}], [12, 15]).

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .config import DEFAULTS
from .io_text import parse_joist_sizes, parse_plywood_thicknesses
from .types import JobSpec, JoistSize


def _joist_sizes(raw: Any) -> List[JoistSize]:
    if raw is None:
        return list(DEFAULTS.default_joist_sizes)
    if isinstance(raw, str):
        return parse_joist_sizes(raw)
    if not isinstance(raw, list):
        raise ValueError(f"joist.sizes must be text or a list (got {type(raw).__name__})")
    out: List[JoistSize] = []
    for i, it in enumerate(raw):
        if not isinstance(it, dict) or "width" not in it or "height" not in it:
            raise ValueError(f"joist.sizes[{i}] must be an object with width and height (got {it!r})")
        try:
            width = float(it["width"])
            height = float(it["height"])
        except (TypeError, ValueError):
            raise ValueError(f"joist.sizes[{i}] width/height must be numbers (got {it!r})") from None
        name = (str(it["name"]).strip() or None) if it.get("name") else None
        out.append(JoistSize(width=width, height=height, name=name, index=i))
    return out


def _thicknesses(raw: Any) -> Tuple[float, ...]:
    if raw is None:
        return DEFAULTS.default_plywood_thicknesses
    if isinstance(raw, str):
        return tuple(parse_plywood_thicknesses(raw))
    try:
        return tuple(float(x) for x in raw)
    except (TypeError, ValueError):
        raise ValueError(f"plywood.thicknesses must be numbers (got {raw!r})") from None


def job_from_dict(data: Dict[str, Any]) -> JobSpec:
    """
    Convert a parsed job document into a JobSpec.
    - "joist.selected" indexes into the size list (default 0).
    - Missing plywood / insulation sections fall back to 910x1820 boards.
    """
    room = data.get("room") or {}
    if "width" not in room or "depth" not in room:
        raise ValueError("JSON missing 'room.width' / 'room.depth'.")

    joist = data.get("joist") or {}
    if "length" not in joist:
        raise ValueError("JSON missing 'joist.length' (stock length of one joist).")

    sizes = _joist_sizes(joist.get("sizes"))
    if not sizes:
        raise ValueError("No valid joist sizes in 'joist.sizes'.")
    selected = int(joist.get("selected", 0))
    if not 0 <= selected < len(sizes):
        raise ValueError(f"joist.selected={selected} out of range (0..{len(sizes) - 1})")

    ply = data.get("plywood") or {}
    foam = data.get("insulation") or {}
    height = data.get("height") or {}
    tatami = height.get("tatami")

    return JobSpec(
        room_width=float(room["width"]),
        room_depth=float(room["depth"]),
        joist=sizes[selected],
        joist_length=float(joist["length"]),
        joist_spacing=float(joist.get("spacing", DEFAULTS.default_joist_spacing)),
        rotate_joist=bool(joist.get("rotate", False)),
        eco_mode=bool(joist.get("eco_mode", False)),
        plywood_width=float(ply.get("width", DEFAULTS.default_plywood_width)),
        plywood_length=float(ply.get("length", DEFAULTS.default_plywood_length)),
        plywood_thicknesses=_thicknesses(ply.get("thicknesses")),
        foam_board_width=float(foam.get("board_width", DEFAULTS.default_foam_board_width)),
        foam_board_length=float(foam.get("board_length", DEFAULTS.default_foam_board_length)),
        tatami_height=float(tatami) if tatami is not None else None,
        flooring_thickness=float(height.get("flooring", 0.0)),
        joist_sizes=tuple(sizes),
    )


def load_job_json(path: str | Path) -> JobSpec:
    """Load a job definition file (see module header for the shape)."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Job JSON must be an object (got {type(data).__name__})")
    return job_from_dict(data)
