"""Footprint generator.

Produces the closed rectangular boundary a shell is built on, centered
at the origin. Winding order is fixed; downstream planners rely on it
to tell the door wall and the gable walls apart.
"""

from __future__ import annotations

from shell_builder.errors import InvalidInputError
from shell_builder.models.geometry import BoundaryPolygon, Point3D


def generate_footprint(
    half_width: float,
    half_depth: float,
    elevation: float = 0.0,
) -> BoundaryPolygon:
    """Closed 5-point rectangle around the origin.

    Corners: (-dx,-dy), (dx,-dy), (dx,dy), (-dx,dy), then (-dx,-dy) again.

    Args:
        half_width: Half the footprint size along X (internal units).
        half_depth: Half the footprint size along Y (internal units).
        elevation: Z of every point.

    Raises:
        InvalidInputError: If either half extent is not positive.
    """
    if half_width <= 0 or half_depth <= 0:
        raise InvalidInputError(
            f"Footprint half extents must be positive, got dx={half_width}, dy={half_depth}"
        )

    dx, dy, z = half_width, half_depth, elevation
    corners = [
        Point3D(x=-dx, y=-dy, z=z),
        Point3D(x=dx, y=-dy, z=z),
        Point3D(x=dx, y=dy, z=z),
        Point3D(x=-dx, y=dy, z=z),
    ]
    return BoundaryPolygon(points=(*corners, corners[0]))
