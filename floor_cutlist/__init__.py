# floor_cutlist/__init__.py
"""
Floor cut list package (raised tatami / flooring platforms).

Current state:
- Greedy joist cutting-stock allocator with a provenance graph:
  - several pieces per stock unit, equal lengths, or pieces joined from
    whole units + a remainder
  - offcut reuse (longest first), same/different offcut pair harvesting
  - composition groups describing how target pieces are assembled
- Layout projection: identical stock units grouped into cut diagrams
- Companion calculators: joist columns, foam strips, plywood tiling,
  tatami height combinations
- CSV/JSON export and matplotlib cut diagrams
"""

from .types import (
    JoistSize,
    JobSpec,
    Part,
    StockUnit,
    OffcutEntry,
    CompositionGroup,
    CuttingPlan,
    empty_plan,
)

from .allocator import StockAllocator, allocate

from .layout import (
    DiagramPart,
    LayoutGroup,
    project_layout,
    layout_utilization,
)

from .metrics import PlanMetrics, compute_plan_metrics

from .joist_layout import JoistLayout, compute_joist_layout
from .insulation import InsulationList, compute_insulation_parts
from .plywood import PlywoodPlan, compute_plywood_plan
from .height_options import HeightOption, find_height_options

from .run import JobResult, run_job

__all__ = [
    # types
    "JoistSize",
    "JobSpec",
    "Part",
    "StockUnit",
    "OffcutEntry",
    "CompositionGroup",
    "CuttingPlan",
    "empty_plan",
    # allocation
    "StockAllocator",
    "allocate",
    # layout
    "DiagramPart",
    "LayoutGroup",
    "project_layout",
    "layout_utilization",
    # metrics
    "PlanMetrics",
    "compute_plan_metrics",
    # companions
    "JoistLayout",
    "compute_joist_layout",
    "InsulationList",
    "compute_insulation_parts",
    "PlywoodPlan",
    "compute_plywood_plan",
    "HeightOption",
    "find_height_options",
    # runner
    "JobResult",
    "run_job",
]
