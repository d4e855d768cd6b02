# floor_cutlist/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (tolerance, stock sizes, spacing) in one place.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .types import JobSpec, JoistSize


@dataclass(frozen=True)
class Defaults:
    # Lengths closer than this are treated as equal (offcut tallies, compositions, layout)
    length_tolerance: float = 0.1

    # Typical joist stock and spacing (mm)
    default_joist_length: float = 4000.0
    default_joist_spacing: float = 303.0
    default_joist_sizes: Tuple[JoistSize, ...] = (
        JoistSize(45, 45, "45 square", 0),
        JoistSize(30, 40, "30x40", 1),
        JoistSize(36, 45, "36x45", 2),
        JoistSize(45, 60, "45x60", 3),
    )

    # Plywood and foam boards come in 3x6 shaku sheets
    default_plywood_width: float = 910.0
    default_plywood_length: float = 1820.0
    default_plywood_thicknesses: Tuple[float, ...] = (9.0, 12.0, 15.0, 24.0)
    default_foam_board_width: float = 910.0
    default_foam_board_length: float = 1820.0

    # Height search window below the tatami height (mm)
    height_window: float = 2.0


DEFAULTS = Defaults()


def make_default_job(
    room_width: float,
    room_depth: float,
    *,
    joist: Optional[JoistSize] = None,
    joist_length: Optional[float] = None,
    joist_spacing: Optional[float] = None,
    rotate_joist: bool = False,
    eco_mode: bool = False,
    tatami_height: Optional[float] = None,
) -> JobSpec:
    """
    Convenience factory for a job using the default stock sizes.
    """
    return JobSpec(
        room_width=float(room_width),
        room_depth=float(room_depth),
        joist=joist if joist is not None else DEFAULTS.default_joist_sizes[0],
        joist_length=float(joist_length if joist_length is not None else DEFAULTS.default_joist_length),
        joist_spacing=float(joist_spacing if joist_spacing is not None else DEFAULTS.default_joist_spacing),
        rotate_joist=rotate_joist,
        eco_mode=eco_mode,
        plywood_width=DEFAULTS.default_plywood_width,
        plywood_length=DEFAULTS.default_plywood_length,
        plywood_thicknesses=DEFAULTS.default_plywood_thicknesses,
        foam_board_width=DEFAULTS.default_foam_board_width,
        foam_board_length=DEFAULTS.default_foam_board_length,
        tatami_height=tatami_height,
        joist_sizes=DEFAULTS.default_joist_sizes,
    )


def lengths_equal(a: float, b: float, tol: Optional[float] = None) -> bool:
    """True if two lengths match within the configured tolerance."""
    t = DEFAULTS.length_tolerance if tol is None else tol
    return abs(a - b) < t


def parse_dims_text(text: str) -> Tuple[float, float]:
    """
    Parse "2700x1800" (also accepts '*', '×' and spaces) into two floats.
    """
    s = text.lower().replace(" ", "").replace("×", "x").replace("*", "x")
    if "x" not in s:
        raise ValueError(f"Dimensions must look like 2700x1800 (got {text!r})")
    a, b = s.split("x", 1)
    try:
        return float(a), float(b)
    except ValueError:
        raise ValueError(f"Dimensions must be numeric (got {text!r})") from None
