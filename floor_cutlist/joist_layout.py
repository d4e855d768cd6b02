# floor_cutlist/joist_layout.py
# Joist columns across the room width.
# One joist sits against each side wall; the width between them is filled with
# (foam strip + joist) sets at the given spacing, and whatever is left becomes a
# narrower last foam strip.

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class JoistLayout:
    room_width: float
    room_depth: float
    joist_width: float
    spacing: float

    column_count: int          # joists across the room, edge joists included
    foam_count: int            # full-width foam strips (one per inner set)
    foam_width: float          # = spacing
    last_foam_width: float     # leftover strip, 0 when the sets fill the width exactly

    @property
    def total_joist_length(self) -> float:
        """Joist length needed in total (every column runs the room depth)."""
        return self.column_count * self.room_depth

    @property
    def foam_strip_count(self) -> int:
        return self.foam_count + (1 if self.last_foam_width > 0 else 0)


def compute_joist_layout(
    room_width: float,
    room_depth: float,
    joist_width: float,
    spacing: float,
) -> JoistLayout:
    """
    Lay joists across the room width (mm). Raises ValueError for non-positive
    dimensions or a room narrower than the two edge joists.
    """
    for name, v in (("room_width", room_width), ("room_depth", room_depth),
                    ("joist_width", joist_width), ("spacing", spacing)):
        if v <= 0:
            raise ValueError(f"{name} must be > 0 (got {v})")
    if room_width < joist_width * 2:
        raise ValueError(
            f"Room width {room_width} is narrower than two edge joists ({joist_width * 2})"
        )

    remaining = room_width - joist_width * 2
    columns = 2
    foam = 0
    set_width = joist_width + spacing
    while remaining >= set_width:
        remaining -= set_width
        columns += 1
        foam += 1

    return JoistLayout(
        room_width=float(room_width),
        room_depth=float(room_depth),
        joist_width=float(joist_width),
        spacing=float(spacing),
        column_count=columns,
        foam_count=foam,
        foam_width=float(spacing),
        last_foam_width=float(remaining) if remaining > 0 else 0.0,
    )
