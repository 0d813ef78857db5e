"""Shell planning data models."""

from shell_builder.models.ids import generate_element_id
from shell_builder.models.geometry import BoundaryPolygon, LineSegment, Point3D
from shell_builder.models.plan import (
    Category,
    ExtrusionRoofProfile,
    FootprintRoofProfile,
    LevelRef,
    OpeningKind,
    OpeningPlacement,
    ReferencePlane,
    RoofProfile,
    RoofStrategy,
    ShellPlan,
    TypeDescriptor,
    WallSpan,
)

__all__ = [
    "generate_element_id",
    "BoundaryPolygon",
    "LineSegment",
    "Point3D",
    "Category",
    "ExtrusionRoofProfile",
    "FootprintRoofProfile",
    "LevelRef",
    "OpeningKind",
    "OpeningPlacement",
    "ReferencePlane",
    "RoofProfile",
    "RoofStrategy",
    "ShellPlan",
    "TypeDescriptor",
    "WallSpan",
]
