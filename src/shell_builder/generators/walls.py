"""Wall segment planner: one wall span per boundary edge."""

from __future__ import annotations

from shell_builder.errors import InvalidInputError
from shell_builder.models.geometry import BoundaryPolygon
from shell_builder.models.plan import LevelRef, WallSpan


def plan_wall_spans(
    boundary: BoundaryPolygon,
    base_level: LevelRef,
    top_level: LevelRef,
) -> list[WallSpan]:
    """Walk the boundary pairwise and emit one span per edge, in order.

    Span 0 is the door wall; the rest take windows.

    Raises:
        InvalidInputError: Open or degenerate boundary, or the top level
            is not above the base level.
    """
    if len(boundary.points) < 4:
        raise InvalidInputError(
            f"Boundary needs at least 3 corners plus the closing point, got {len(boundary.points)} points"
        )
    if not boundary.is_closed:
        raise InvalidInputError("Boundary is not closed (first point != last point)")
    if top_level.elevation <= base_level.elevation:
        raise InvalidInputError(
            f"Top level '{top_level.name}' ({top_level.elevation}) must be above "
            f"base level '{base_level.name}' ({base_level.elevation})"
        )

    spans = []
    for i, (start, end) in enumerate(boundary.edges()):
        if start == end:
            raise InvalidInputError(f"Boundary edge {i} has zero length")
        spans.append(
            WallSpan(
                index=i,
                start=start,
                end=end,
                base_level=base_level,
                top_level=top_level,
            )
        )
    return spans
