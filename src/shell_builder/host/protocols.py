"""Host collaborator interfaces.

The planner never talks to a BIM host directly. Whatever document it is
applied to must provide these operations. Resolvers return ``None`` when
nothing matches; callers check before using the result.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from shell_builder.models.geometry import LineSegment, Point3D
from shell_builder.models.plan import Category, LevelRef, ReferencePlane, TypeDescriptor


class WallHandle(Protocol):
    global_id: str
    height: float
    width: float


class InstanceHandle(Protocol):
    global_id: str


class RoofHandle(Protocol):
    global_id: str


class SlopeCurveHandle(Protocol):
    index: int


class LevelResolver(Protocol):
    def resolve_level(self, name: str) -> LevelRef | None: ...


class WallConstructor(Protocol):
    def create_wall(
        self, curve: LineSegment, base_level: LevelRef, top_level: LevelRef
    ) -> WallHandle: ...


class CatalogResolver(Protocol):
    def resolve_type(
        self, category: Category, type_name: str, family_name: str
    ) -> TypeDescriptor | None: ...

    def activate(self, descriptor: TypeDescriptor) -> TypeDescriptor: ...


class InstancePlacer(Protocol):
    def place_instance(
        self,
        point: Point3D,
        descriptor: TypeDescriptor,
        host: WallHandle,
        level: LevelRef,
    ) -> InstanceHandle: ...


class RoofConstructor(Protocol):
    def create_extrusion_roof(
        self,
        profile: Sequence[LineSegment],
        plane: ReferencePlane,
        level: LevelRef,
        roof_type: TypeDescriptor,
        run_start: float,
        run_end: float,
    ) -> RoofHandle: ...

    def create_footprint_roof(
        self,
        boundary: Sequence[LineSegment],
        level: LevelRef,
        roof_type: TypeDescriptor,
    ) -> tuple[RoofHandle, list[SlopeCurveHandle]]: ...

    def define_slope(self, roof: RoofHandle, curve: SlopeCurveHandle, slope: float) -> None: ...


class TransactionScope(Protocol):
    def begin(self, label: str) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@runtime_checkable
class HostDocument(
    LevelResolver,
    WallConstructor,
    CatalogResolver,
    InstancePlacer,
    RoofConstructor,
    TransactionScope,
    Protocol,
):
    """Everything ``create_shell`` needs from a document."""
