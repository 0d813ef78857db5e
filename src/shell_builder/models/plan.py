"""Plan records produced by the shell layout planner.

All records are immutable and live only for one planning invocation.
Host-side handles (walls, instances, roofs) are defined by the host
adapter, not here.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from shell_builder.errors import InvalidInputError
from shell_builder.models.geometry import BoundaryPolygon, LineSegment, Point3D
from shell_builder.models.ids import generate_element_id


class LevelRef(BaseModel):
    """A named horizontal reference plane (internal units)."""

    model_config = ConfigDict(frozen=True)

    global_id: str = Field(default_factory=generate_element_id, description="IFC GlobalId")
    name: str
    elevation: float = 0.0


class Category(str, Enum):
    """Catalog categories the shell command looks up."""

    DOORS = "doors"
    WINDOWS = "windows"
    ROOFS = "roofs"


class TypeDescriptor(BaseModel):
    """A catalog entry (family type), resolved by category/type/family name.

    ``active`` mirrors hosts that require a type to be activated before
    its first instance is placed. Sizes are optional catalog metadata.
    """

    model_config = ConfigDict(frozen=True)

    category: Category
    type_name: str
    family_name: str
    active: bool = False
    width: float | None = Field(default=None, gt=0, description="Nominal width (internal units)")
    height: float | None = Field(default=None, gt=0, description="Nominal height (internal units)")
    sill_height: float = Field(default=0.0, ge=0, description="Sill above level (internal units)")

    @property
    def key(self) -> str:
        return f"{self.family_name}:{self.type_name}"


class OpeningKind(str, Enum):
    DOOR = "door"
    WINDOW = "window"


class WallSpan(BaseModel):
    """One planned wall segment between two consecutive boundary points."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    start: Point3D
    end: Point3D
    base_level: LevelRef
    top_level: LevelRef

    @property
    def curve(self) -> LineSegment:
        return LineSegment(start=self.start, end=self.end)

    @property
    def midpoint(self) -> Point3D:
        return self.start.midpoint(self.end)

    @property
    def height(self) -> float:
        """Level-to-level height."""
        return self.top_level.elevation - self.base_level.elevation

    @property
    def opening_kind(self) -> OpeningKind:
        """Span 0 carries the door, every other span a window."""
        return OpeningKind.DOOR if self.index == 0 else OpeningKind.WINDOW


class OpeningPlacement(BaseModel):
    """Where one door or window goes, and which catalog type it uses."""

    model_config = ConfigDict(frozen=True)

    host_wall_index: int = Field(ge=0)
    placement_point: Point3D
    kind: OpeningKind
    type_descriptor: TypeDescriptor


class ReferencePlane(BaseModel):
    """Work plane for an extrusion roof.

    Spanned by ``axis_end - origin`` and ``cut_vector``; the extrusion runs
    along its normal.
    """

    model_config = ConfigDict(frozen=True)

    origin: Point3D
    axis_end: Point3D
    cut_vector: Point3D

    @property
    def normal(self) -> tuple[float, float, float]:
        """Unit normal: (axis_end - origin) x cut_vector."""
        axis = np.array((self.axis_end - self.origin).as_tuple())
        n = np.cross(axis, np.array(self.cut_vector.as_tuple()))
        norm = np.linalg.norm(n)
        if norm == 0:
            raise InvalidInputError("Reference plane axes are parallel")
        n = n / norm
        return (float(n[0]), float(n[1]), float(n[2]))


class RoofStrategy(str, Enum):
    """Which roof planner to run."""

    EXTRUSION = "extrusion"
    FOOTPRINT = "footprint"


class ExtrusionRoofProfile(BaseModel):
    """Gable profile swept across the footprint."""

    model_config = ConfigDict(frozen=True)

    strategy: RoofStrategy = RoofStrategy.EXTRUSION
    ridge: LineSegment
    slope_curves: tuple[LineSegment, ...]
    plane: ReferencePlane
    run_start: float
    run_end: float
    eave_elevation: float
    apex_elevation: float


class FootprintRoofProfile(BaseModel):
    """Outline-based roof with a uniform slope on every edge."""

    model_config = ConfigDict(frozen=True)

    strategy: RoofStrategy = RoofStrategy.FOOTPRINT
    boundary: tuple[LineSegment, ...]
    slope: float = Field(gt=0, description="Rise over run, same on every edge")
    overhang: float = Field(ge=0, description="Outward offset from wall centerline")


RoofProfile = Union[ExtrusionRoofProfile, FootprintRoofProfile]


class ShellPlan(BaseModel):
    """Complete plan for one rectangular shell."""

    model_config = ConfigDict(frozen=True)

    footprint: BoundaryPolygon
    walls: tuple[WallSpan, ...]
    openings: tuple[OpeningPlacement, ...]
    roof: RoofProfile | None = None

    @property
    def door(self) -> OpeningPlacement | None:
        return next((o for o in self.openings if o.kind == OpeningKind.DOOR), None)

    @property
    def windows(self) -> list[OpeningPlacement]:
        return [o for o in self.openings if o.kind == OpeningKind.WINDOW]
