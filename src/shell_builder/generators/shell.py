"""Shell layout planner.

Pure pipeline: footprint -> wall spans -> openings -> roof. Nothing here
touches a host document; ``shell_builder.command`` applies the plan.
"""

from __future__ import annotations

from shell_builder.generators.footprint import generate_footprint
from shell_builder.generators.openings import plan_openings
from shell_builder.generators.roof import DEFAULT_SLOPE, plan_roof
from shell_builder.generators.walls import plan_wall_spans
from shell_builder.models.plan import LevelRef, RoofStrategy, ShellPlan, TypeDescriptor


def plan_shell(
    half_width: float,
    half_depth: float,
    base_level: LevelRef,
    top_level: LevelRef,
    door_type: TypeDescriptor,
    window_type: TypeDescriptor,
    roof_strategy: RoofStrategy = RoofStrategy.EXTRUSION,
    wall_height: float | None = None,
    wall_thickness: float | None = None,
    roof_slope: float = DEFAULT_SLOPE,
) -> ShellPlan:
    """Plan a complete rectangular shell.

    Args:
        half_width: Footprint half extent along X (internal units).
        half_depth: Footprint half extent along Y (internal units).
        base_level: Level the walls stand on.
        top_level: Level the walls reach and the roof sits on.
        door_type: Catalog type for the door on span 0.
        window_type: Catalog type for the windows on spans 1..n-1.
        roof_strategy: Extrusion (gable) or footprint roof.
        wall_height: Wall height; defaults to the level-to-level height.
        wall_thickness: Needed by the footprint strategy only.
        roof_slope: Footprint roof slope (rise over run).

    Returns:
        ShellPlan with footprint, spans, openings and roof profile.
    """
    if wall_height is None:
        wall_height = top_level.elevation - base_level.elevation

    footprint = generate_footprint(half_width, half_depth)
    spans = plan_wall_spans(footprint, base_level, top_level)
    openings = plan_openings(spans, door_type, window_type)
    roof = plan_roof(
        roof_strategy,
        spans,
        wall_height=wall_height,
        half_width=half_width,
        half_depth=half_depth,
        wall_thickness=wall_thickness,
        slope=roof_slope,
        base_elevation=base_level.elevation,
    )
    return ShellPlan(
        footprint=footprint,
        walls=tuple(spans),
        openings=tuple(openings),
        roof=roof,
    )
