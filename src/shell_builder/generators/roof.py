"""Roof planners.

Two strategies share the wall spans produced by the wall planner:

- Extrusion (default): a gable profile drawn in the plane of the east
  wall and swept across the whole footprint along X.
- Footprint: the wall outline offset outward by half the wall thickness,
  with the same slope on every edge.

Both depend on the fixed rectangle winding of ``generate_footprint``.
"""

from __future__ import annotations

from collections.abc import Sequence

from shell_builder.errors import InvalidInputError, PreconditionFailedError
from shell_builder.models.geometry import LineSegment, Point3D
from shell_builder.models.plan import (
    ExtrusionRoofProfile,
    FootprintRoofProfile,
    ReferencePlane,
    RoofProfile,
    RoofStrategy,
    WallSpan,
)

# Default rise over run for the footprint strategy
DEFAULT_SLOPE = 0.5

RECTANGLE_WALLS = 4


def plan_extrusion_roof(
    spans: Sequence[WallSpan],
    wall_height: float,
    half_width: float,
    half_depth: float,
    base_elevation: float = 0.0,
) -> ExtrusionRoofProfile:
    """Plan a gable roof extruded across the footprint.

    The ridge sits half a wall height above the eaves. The gable profile
    runs eave corner -> apex -> opposite eave corner over span 1; the
    ridge joins the raised midpoints of span 1 and its opposite span 3.

    Args:
        spans: Planned wall spans (at least the four rectangle walls).
        wall_height: Height of the built walls, as reported by the host.
        half_width: Footprint half extent along X.
        half_depth: Footprint half extent along Y.
        base_elevation: Elevation the walls stand on.

    Raises:
        InvalidInputError: Non-positive height or half extent.
        PreconditionFailedError: Fewer than four wall spans.
    """
    if wall_height <= 0:
        raise InvalidInputError(f"Wall height must be positive, got {wall_height}")
    if half_width <= 0 or half_depth <= 0:
        raise InvalidInputError(
            f"Roof half extents must be positive, got dx={half_width}, dy={half_depth}"
        )
    if len(spans) < RECTANGLE_WALLS:
        raise PreconditionFailedError(
            f"Gable ridge needs two pairs of opposite walls, got {len(spans)} wall spans"
        )

    dx, dy, dh = half_width, half_depth, wall_height
    eave = base_elevation + dh
    rise = Point3D(x=0.0, y=0.0, z=dh / 2)

    # Top-of-wall corners, same winding as the footprint
    top = [
        Point3D(x=-dx, y=-dy, z=eave),
        Point3D(x=dx, y=-dy, z=eave),
        Point3D(x=dx, y=dy, z=eave),
        Point3D(x=-dx, y=dy, z=eave),
    ]
    apex = top[1].midpoint(top[2]) + rise
    ridge_end = top[3].midpoint(top[0]) + rise

    plane = ReferencePlane(
        origin=Point3D(x=0.0, y=0.0, z=0.0),
        axis_end=Point3D(x=0.0, y=0.0, z=dh / 2),
        cut_vector=Point3D(x=0.0, y=dy, z=0.0),
    )

    return ExtrusionRoofProfile(
        ridge=LineSegment(start=apex, end=ridge_end),
        slope_curves=(
            LineSegment(start=top[1], end=apex),
            LineSegment(start=apex, end=top[2]),
        ),
        plane=plane,
        run_start=-dx,
        run_end=dx,
        eave_elevation=eave,
        apex_elevation=apex.z,
    )


def plan_footprint_roof(
    spans: Sequence[WallSpan],
    wall_thickness: float,
    slope: float = DEFAULT_SLOPE,
) -> FootprintRoofProfile:
    """Plan a sloped footprint roof over the outer faces of the walls.

    Each span is pushed outward by half the wall thickness and stretched
    so that neighbouring edges meet at the outer corners.

    Raises:
        InvalidInputError: Non-positive thickness or slope.
        PreconditionFailedError: Not exactly four wall spans.
    """
    if wall_thickness <= 0:
        raise InvalidInputError(f"Wall thickness must be positive, got {wall_thickness}")
    if slope <= 0:
        raise InvalidInputError(f"Roof slope must be positive, got {slope}")
    if len(spans) != RECTANGLE_WALLS:
        raise PreconditionFailedError(
            f"Footprint roof expects the {RECTANGLE_WALLS} rectangle walls, got {len(spans)}"
        )

    t = wall_thickness / 2
    # Outward offset at each corner, in footprint winding order
    offsets = [
        Point3D(x=-t, y=-t),
        Point3D(x=t, y=-t),
        Point3D(x=t, y=t),
        Point3D(x=-t, y=t),
        Point3D(x=-t, y=-t),
    ]
    boundary = tuple(
        LineSegment(start=span.start + offsets[i], end=span.end + offsets[i + 1])
        for i, span in enumerate(spans)
    )
    return FootprintRoofProfile(boundary=boundary, slope=slope, overhang=t)


def plan_roof(
    strategy: RoofStrategy,
    spans: Sequence[WallSpan],
    wall_height: float,
    half_width: float,
    half_depth: float,
    wall_thickness: float | None = None,
    slope: float = DEFAULT_SLOPE,
    base_elevation: float = 0.0,
) -> RoofProfile:
    """Run the roof planner selected by ``strategy``."""
    strategy = RoofStrategy(strategy)
    if strategy == RoofStrategy.FOOTPRINT:
        if wall_thickness is None:
            raise InvalidInputError("Footprint roof needs the wall thickness")
        return plan_footprint_roof(spans, wall_thickness, slope)
    return plan_extrusion_roof(
        spans, wall_height, half_width, half_depth, base_elevation=base_elevation
    )
