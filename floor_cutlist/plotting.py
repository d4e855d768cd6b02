# floor_cutlist/plotting.py
# Minimal matplotlib visualization:
# - joist cut diagrams, one bar per distinct cut pattern
# - plywood tiling of the room

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .layout import LayoutGroup, layout_utilization
from .plywood import PlywoodPlan
from .types import PART_OFFCUT, PART_TARGET, PART_TARGET_FROM_OFFCUT, PART_UNPROCESSED

PART_COLORS = {
    PART_TARGET: (0.55, 0.75, 0.45),
    PART_UNPROCESSED: (0.45, 0.62, 0.85),
    PART_TARGET_FROM_OFFCUT: (0.95, 0.75, 0.35),
    PART_OFFCUT: (0.82, 0.82, 0.82),
}


@dataclass(frozen=True)
class PlotStyle:
    show_labels: bool = True
    show_grid: bool = False
    font_size: int = 7
    bar_height: float = 0.6
    row_height_in: float = 0.6   # figure inches per diagram row
    fig_width_in: float = 10.0


def plot_layout(
    groups: List[LayoutGroup],
    style: Optional[PlotStyle] = None,
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Draw one horizontal bar per layout group (stock unit pattern), parts left to right.
    """
    style = style or PlotStyle()
    if not groups:
        raise ValueError("Nothing to plot: layout has no groups")

    n = len(groups)
    fig, ax = plt.subplots(figsize=(style.fig_width_in, max(2.0, 1.0 + n * style.row_height_in)))
    max_len = max(g.stock_length for g in groups)

    for row, g in enumerate(groups):
        y = n - 1 - row
        ax.add_patch(Rectangle((0, y), g.stock_length, style.bar_height, fill=False, linewidth=1.0))
        for p in g.parts:
            rect = Rectangle(
                (p.offset, y),
                p.length,
                style.bar_height,
                facecolor=PART_COLORS.get(p.type, (0.7, 0.7, 0.7)),
                edgecolor="black",
                linewidth=0.6,
                hatch="//" if p.type == PART_OFFCUT else None,
            )
            ax.add_patch(rect)
            if style.show_labels:
                ax.text(
                    p.offset + p.length / 2,
                    y + style.bar_height / 2,
                    p.label,
                    ha="center",
                    va="center",
                    fontsize=style.font_size,
                )
        ax.text(
            max_len * 1.01,
            y + style.bar_height / 2,
            f"x{g.unit_count}  ({g.utilization:.0f}%)",
            va="center",
            fontsize=style.font_size + 1,
        )

    ax.set_xlim(0, max_len * 1.15)
    ax.set_ylim(-0.3, n)
    ax.set_yticks([])
    ax.set_xlabel("mm")
    ax.grid(style.show_grid, axis="x", linewidth=0.3)
    ax.set_title(title or f"Joist cut diagram | utilization {layout_utilization(groups):.1f}%", fontsize=10)
    fig.tight_layout()
    return fig


def plot_plywood(plan: PlywoodPlan, style: Optional[PlotStyle] = None) -> plt.Figure:
    """Room outline with the sheet grid; partial sheets are shaded differently."""
    style = style or PlotStyle()
    fig, ax = plt.subplots(figsize=(6, 6 * plan.room_depth / max(plan.room_width, 1.0)))

    for s in plan.sheets:
        ax.add_patch(Rectangle((s.x, s.y), plan.sheet_width, plan.sheet_length, fill=False, linewidth=0.6, linestyle="--"))
        color: Tuple[float, float, float] = (0.95, 0.76, 0.2) if s.partial else (0.35, 0.7, 0.4)
        ax.add_patch(Rectangle((s.x, s.y), s.width, s.length, facecolor=color, alpha=0.7, edgecolor="black", linewidth=0.8))
        if style.show_labels:
            ax.text(s.x + s.width / 2, s.y + s.length / 2, f"#{s.index + 1}\n{s.width:g}x{s.length:g}",
                    ha="center", va="center", fontsize=style.font_size)

    ax.add_patch(Rectangle((0, 0), plan.room_width, plan.room_depth, fill=False, linewidth=1.5))
    ax.set_xlim(-20, plan.width_sheets * plan.sheet_width + 20)
    ax.set_ylim(-20, plan.depth_sheets * plan.sheet_length + 20)
    ax.set_aspect("equal", adjustable="box")
    ax.tick_params(labelbottom=False, labelleft=False, bottom=False, left=False)
    ax.set_title(
        f"Plywood {plan.total_sheets} sheets ({plan.orientation}) | utilization {plan.utilization:.1f}%",
        fontsize=10,
    )
    fig.tight_layout()
    return fig


def save_layout_png(
    groups: List[LayoutGroup],
    path: str,
    style: Optional[PlotStyle] = None,
    dpi: int = 200,
) -> None:
    """Save the cut diagram to PNG."""
    fig = plot_layout(groups, style=style)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)


def save_plywood_png(plan: PlywoodPlan, path: str, style: Optional[PlotStyle] = None, dpi: int = 200) -> None:
    fig = plot_plywood(plan, style=style)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
