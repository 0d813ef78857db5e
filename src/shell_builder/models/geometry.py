"""Geometric primitives for shell planning (internal length units)."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, model_validator


class Point3D(BaseModel):
    """Immutable 3D point / vector (internal units)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float = 0.0

    @classmethod
    def of(cls, x: float, y: float, z: float = 0.0) -> Point3D:
        """Positional shorthand for ``Point3D(x=..., y=..., z=...)``."""
        return cls(x=x, y=y, z=z)

    def __add__(self, other: Point3D) -> Point3D:
        return Point3D(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __sub__(self, other: Point3D) -> Point3D:
        return Point3D(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)

    def __mul__(self, factor: float) -> Point3D:
        return Point3D(x=self.x * factor, y=self.y * factor, z=self.z * factor)

    def __truediv__(self, divisor: float) -> Point3D:
        return Point3D(x=self.x / divisor, y=self.y / divisor, z=self.z / divisor)

    def _grid_key(self) -> tuple[float, float, float]:
        """Coordinates snapped to a 1e-6 grid; equality and hashing both use it."""
        return (round(self.x, 6), round(self.y, 6), round(self.z, 6))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point3D):
            return NotImplemented
        return self._grid_key() == other._grid_key()

    def __hash__(self) -> int:
        return hash(self._grid_key())

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def midpoint(self, other: Point3D) -> Point3D:
        """Arithmetic midpoint ``(self + other) / 2``."""
        return (self + other) / 2

    def distance_to(self, other: Point3D) -> float:
        """Euclidean distance to another point."""
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )


class LineSegment(BaseModel):
    """A bounded straight line between two distinct points."""

    model_config = ConfigDict(frozen=True)

    start: Point3D
    end: Point3D

    @model_validator(mode="after")
    def start_and_end_differ(self) -> LineSegment:
        if self.start == self.end:
            raise ValueError("Line start and end points must be different")
        return self

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def midpoint(self) -> Point3D:
        return self.start.midpoint(self.end)

    @property
    def direction(self) -> tuple[float, float, float]:
        """Unit direction vector from start to end."""
        d = self.end - self.start
        length = self.length
        return (d.x / length, d.y / length, d.z / length)


class BoundaryPolygon(BaseModel):
    """Ordered, explicitly closed loop of points (first == last).

    Closure is not enforced here: the planners check it so that a
    malformed boundary surfaces as an ``InvalidInputError``.
    """

    model_config = ConfigDict(frozen=True)

    points: tuple[Point3D, ...]

    @property
    def is_closed(self) -> bool:
        return len(self.points) >= 2 and self.points[0] == self.points[-1]

    @property
    def corners(self) -> tuple[Point3D, ...]:
        """Distinct corners (closing point dropped)."""
        return self.points[:-1] if self.is_closed else self.points

    def edges(self) -> list[tuple[Point3D, Point3D]]:
        """Consecutive point pairs, in boundary order."""
        return list(zip(self.points[:-1], self.points[1:]))

    @property
    def area(self) -> float:
        """Shoelace area in the XY plane. Returns absolute value."""
        area = 0.0
        for a, b in self.edges():
            area += a.x * b.y - b.x * a.y
        return abs(area) / 2.0

    @property
    def perimeter(self) -> float:
        return sum(a.distance_to(b) for a, b in self.edges())
