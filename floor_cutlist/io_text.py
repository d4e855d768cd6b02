# floor_cutlist/io_text.py
# Parsers for the free-text size lists users type in:
#
#   joist sizes, one per line:   width,height[,name]
#       45,45,45 square
#       30,40
#
#   plywood thicknesses:         12, 15, 24

from __future__ import annotations

from typing import List, Optional

from .types import JoistSize


def _to_float(s: str) -> Optional[float]:
    try:
        return float(s)
    except ValueError:
        return None


def parse_joist_sizes(text: str) -> List[JoistSize]:
    """
    Parse joist size lines. Blank and unparsable lines are skipped; `index` is
    the line position among non-blank lines.
    """
    out: List[JoistSize] = []
    lines = [ln for ln in text.splitlines() if ln.strip()]
    for index, line in enumerate(lines):
        fields = [f.strip() for f in line.split(",")]
        if len(fields) < 2:
            continue
        w = _to_float(fields[0])
        h = _to_float(fields[1])
        if w is None or h is None or w <= 0 or h <= 0:
            continue
        name = fields[2] if len(fields) >= 3 and fields[2] else None
        out.append(JoistSize(width=w, height=h, name=name, index=index))
    return out


def parse_plywood_thicknesses(text: str) -> List[float]:
    """Comma separated thicknesses; anything non-numeric is dropped."""
    out: List[float] = []
    for tok in text.split(","):
        v = _to_float(tok.strip())
        if v is not None:
            out.append(v)
    return out


def format_joist_sizes(sizes: List[JoistSize]) -> str:
    """Inverse of parse_joist_sizes (for writing job files back out)."""
    lines = []
    for s in sizes:
        row = [f"{s.width:g}", f"{s.height:g}"]
        if s.name:
            row.append(s.name)
        lines.append(",".join(row))
    return "\n".join(lines)
