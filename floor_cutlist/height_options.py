# floor_cutlist/height_options.py
# Which joist + plywood (+ flooring) stack reaches the tatami height?
# Each joist can stand on its height or lie on its side (width becomes height).

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .config import DEFAULTS
from .types import JoistSize


@dataclass(frozen=True)
class HeightOption:
    joist: JoistSize
    plywood_thickness: float
    flooring_thickness: float
    use_width: bool    # joist laid on its side

    @property
    def joist_height(self) -> float:
        return self.joist.width if self.use_width else self.joist.height

    @property
    def total(self) -> float:
        return self.joist_height + self.plywood_thickness + self.flooring_thickness

    def describe(self) -> str:
        side = "on width" if self.use_width else "on height"
        bits = [f"{self.joist.label()} {side}", f"plywood {self.plywood_thickness:g}mm"]
        if self.flooring_thickness > 0:
            bits.append(f"flooring {self.flooring_thickness:g}mm")
        return " + ".join(bits) + f" = {self.total:.1f}mm"


def find_height_options(
    joists: Iterable[JoistSize],
    plywood_thicknesses: Iterable[float],
    tatami_height: float,
    flooring_thickness: float = 0.0,
    window: float = DEFAULTS.height_window,
) -> List[HeightOption]:
    """
    Every combination whose total lies in [tatami_height - window, tatami_height],
    sorted by total height (stable for equal totals).
    """
    lo = tatami_height - window
    hi = tatami_height
    plys = list(plywood_thicknesses)
    out: List[HeightOption] = []
    for joist in joists:
        for ply in plys:
            for use_width in (False, True):
                opt = HeightOption(joist, float(ply), float(flooring_thickness), use_width)
                if lo <= opt.total <= hi:
                    out.append(opt)
    out.sort(key=lambda o: o.total)
    return out
