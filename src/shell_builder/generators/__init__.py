"""Shell planning stages.

Pure functions, run in order:
- Footprint generator: half extents -> closed rectangle
- Wall planner: boundary edges -> wall spans
- Opening planner: spans -> door/window placements at span midpoints
- Roof planner: gable extrusion or sloped footprint roof
"""

from shell_builder.generators.footprint import generate_footprint
from shell_builder.generators.walls import plan_wall_spans
from shell_builder.generators.openings import plan_openings
from shell_builder.generators.roof import (
    plan_extrusion_roof,
    plan_footprint_roof,
    plan_roof,
)
from shell_builder.generators.shell import plan_shell

__all__ = [
    "generate_footprint",
    "plan_wall_spans",
    "plan_openings",
    "plan_extrusion_roof",
    "plan_footprint_roof",
    "plan_roof",
    "plan_shell",
]
