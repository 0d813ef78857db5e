"""In-memory reference document.

Implements every host collaborator the shell command needs, with the
same observable rules a BIM host enforces: mutations only inside a
transaction, one transaction at a time, catalog types activated before
their first instance, all-or-nothing rollback.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence

from pydantic import BaseModel, Field

from shell_builder.config import ShellConfig
from shell_builder.errors import InvalidInputError, PreconditionFailedError
from shell_builder.models.geometry import LineSegment, Point3D
from shell_builder.models.ids import generate_element_id
from shell_builder.models.plan import Category, LevelRef, ReferencePlane, TypeDescriptor

logger = logging.getLogger(__name__)


class WallElement(BaseModel):
    """A wall constrained between two levels."""

    global_id: str = Field(default_factory=generate_element_id, description="IFC GlobalId")
    curve: LineSegment
    base_level: LevelRef
    top_level: LevelRef
    height: float = Field(gt=0, description="Unconnected height, from the level constraints")
    width: float = Field(gt=0, description="Wall thickness")


class FamilyInstance(BaseModel):
    """A door or window hosted by a wall."""

    global_id: str = Field(default_factory=generate_element_id, description="IFC GlobalId")
    point: Point3D
    symbol: TypeDescriptor
    host_id: str = Field(description="GlobalId of the host wall")
    level: LevelRef


class ExtrusionRoofElement(BaseModel):
    global_id: str = Field(default_factory=generate_element_id, description="IFC GlobalId")
    profile: list[LineSegment]
    plane: ReferencePlane
    level: LevelRef
    roof_type: TypeDescriptor
    run_start: float
    run_end: float


class SlopeCurve(BaseModel):
    """One edge of a footprint roof; may define a slope."""

    index: int
    curve: LineSegment
    defines_slope: bool = False
    slope: float | None = None


class FootprintRoofElement(BaseModel):
    global_id: str = Field(default_factory=generate_element_id, description="IFC GlobalId")
    level: LevelRef
    roof_type: TypeDescriptor
    curves: list[SlopeCurve]


class MemoryDocument:
    """A minimal BIM document held in memory."""

    def __init__(self, title: str = "Untitled", default_wall_width: float = 0.656):
        if default_wall_width <= 0:
            raise InvalidInputError(f"Wall width must be positive, got {default_wall_width}")
        self.title = title
        self.default_wall_width = default_wall_width
        self.levels: dict[str, LevelRef] = {}
        self.catalog: list[TypeDescriptor] = []
        self.walls: list[WallElement] = []
        self.instances: list[FamilyInstance] = []
        self.roofs: list[ExtrusionRoofElement | FootprintRoofElement] = []
        self._transaction: str | None = None
        self._snapshot: dict | None = None

    @classmethod
    def from_config(cls, config: ShellConfig, title: str = "Shell") -> MemoryDocument:
        """Document seeded with the config's levels and catalog types."""
        doc = cls(title=title, default_wall_width=config.internal(config.wall_thickness))
        for level in config.levels:
            doc.add_level(level.name, config.internal(level.elevation))
        for category in Category:
            doc.add_type(config.type_descriptor(category))
        return doc

    # ── Seeding ───────────────────────────────────────────────────────

    def add_level(self, name: str, elevation: float) -> LevelRef:
        if name in self.levels:
            raise InvalidInputError(f"Level '{name}' already exists")
        level = LevelRef(name=name, elevation=elevation)
        self.levels[name] = level
        return level

    def add_type(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        if self._find_type(descriptor.category, descriptor.type_name, descriptor.family_name) is not None:
            raise InvalidInputError(f"Type '{descriptor.key}' already exists in {descriptor.category.value}")
        self.catalog.append(descriptor)
        return descriptor

    # ── Resolvers ─────────────────────────────────────────────────────

    def resolve_level(self, name: str) -> LevelRef | None:
        return self.levels.get(name)

    def resolve_type(
        self, category: Category, type_name: str, family_name: str
    ) -> TypeDescriptor | None:
        return self._find_type(category, type_name, family_name)

    def _find_type(
        self, category: Category, type_name: str, family_name: str
    ) -> TypeDescriptor | None:
        return next(
            (
                t for t in self.catalog
                if t.category == category
                and t.type_name == type_name
                and t.family_name == family_name
            ),
            None,
        )

    def activate(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        """Mark a catalog type active. Returns the active descriptor."""
        self._require_transaction("activate type")
        current = self._find_type(descriptor.category, descriptor.type_name, descriptor.family_name)
        if current is None:
            raise PreconditionFailedError(f"Type '{descriptor.key}' is not in the catalog")
        if current.active:
            return current
        active = current.model_copy(update={"active": True})
        self.catalog[self.catalog.index(current)] = active
        logger.debug("Activated type %s", active.key)
        return active

    # ── Construction ──────────────────────────────────────────────────

    def create_wall(
        self, curve: LineSegment, base_level: LevelRef, top_level: LevelRef
    ) -> WallElement:
        self._require_transaction("create wall")
        height = top_level.elevation - base_level.elevation
        if height <= 0:
            raise InvalidInputError(
                f"Top level '{top_level.name}' must be above base level '{base_level.name}'"
            )
        wall = WallElement(
            curve=curve,
            base_level=base_level,
            top_level=top_level,
            height=height,
            width=self.default_wall_width,
        )
        self.walls.append(wall)
        logger.debug("Created wall %s (length %.3f)", wall.global_id, curve.length)
        return wall

    def place_instance(
        self,
        point: Point3D,
        descriptor: TypeDescriptor,
        host: WallElement,
        level: LevelRef,
    ) -> FamilyInstance:
        self._require_transaction("place instance")
        if not descriptor.active:
            raise PreconditionFailedError(f"Type '{descriptor.key}' must be activated before placement")
        if self.get_wall(host.global_id) is None:
            raise PreconditionFailedError(f"Host wall {host.global_id} is not in this document")
        instance = FamilyInstance(point=point, symbol=descriptor, host_id=host.global_id, level=level)
        self.instances.append(instance)
        logger.debug("Placed %s on wall %s", descriptor.key, host.global_id)
        return instance

    def create_extrusion_roof(
        self,
        profile: Sequence[LineSegment],
        plane: ReferencePlane,
        level: LevelRef,
        roof_type: TypeDescriptor,
        run_start: float,
        run_end: float,
    ) -> ExtrusionRoofElement:
        self._require_transaction("create extrusion roof")
        if not profile:
            raise InvalidInputError("Extrusion roof profile is empty")
        if run_start == run_end:
            raise InvalidInputError("Extrusion roof run has zero length")
        roof = ExtrusionRoofElement(
            profile=list(profile),
            plane=plane,
            level=level,
            roof_type=roof_type,
            run_start=run_start,
            run_end=run_end,
        )
        self.roofs.append(roof)
        logger.debug("Created extrusion roof %s on %s", roof.global_id, level.name)
        return roof

    def create_footprint_roof(
        self,
        boundary: Sequence[LineSegment],
        level: LevelRef,
        roof_type: TypeDescriptor,
    ) -> tuple[FootprintRoofElement, list[SlopeCurve]]:
        self._require_transaction("create footprint roof")
        if len(boundary) < 3:
            raise InvalidInputError(f"Footprint roof needs a closed outline, got {len(boundary)} edges")
        curves = [SlopeCurve(index=i, curve=seg) for i, seg in enumerate(boundary)]
        roof = FootprintRoofElement(level=level, roof_type=roof_type, curves=curves)
        self.roofs.append(roof)
        logger.debug("Created footprint roof %s on %s", roof.global_id, level.name)
        return roof, list(roof.curves)

    def define_slope(self, roof: FootprintRoofElement, curve: SlopeCurve, slope: float) -> None:
        self._require_transaction("define slope")
        if slope <= 0:
            raise InvalidInputError(f"Slope must be positive, got {slope}")
        target = roof.curves[curve.index]
        target.defines_slope = True
        target.slope = slope

    # ── Lookups ───────────────────────────────────────────────────────

    def get_wall(self, global_id: str) -> WallElement | None:
        return next((w for w in self.walls if w.global_id == global_id), None)

    def instances_of(self, category: Category) -> list[FamilyInstance]:
        return [i for i in self.instances if i.symbol.category == category]

    # ── Transactions ──────────────────────────────────────────────────

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None

    def begin(self, label: str) -> None:
        if self._transaction is not None:
            raise PreconditionFailedError(
                f"Transaction '{self._transaction}' is still open, cannot start '{label}'"
            )
        self._snapshot = copy.deepcopy(self._state())
        self._transaction = label
        logger.debug("Transaction '%s' started", label)

    def commit(self) -> None:
        self._require_transaction("commit")
        logger.debug("Transaction '%s' committed", self._transaction)
        self._transaction = None
        self._snapshot = None

    def rollback(self) -> None:
        self._require_transaction("roll back")
        state = self._snapshot
        self.catalog = state["catalog"]
        self.walls = state["walls"]
        self.instances = state["instances"]
        self.roofs = state["roofs"]
        logger.debug("Transaction '%s' rolled back", self._transaction)
        self._transaction = None
        self._snapshot = None

    def _state(self) -> dict:
        return {
            "catalog": self.catalog,
            "walls": self.walls,
            "instances": self.instances,
            "roofs": self.roofs,
        }

    def _require_transaction(self, action: str) -> None:
        if self._transaction is None:
            raise PreconditionFailedError(f"Cannot {action} outside a transaction")
