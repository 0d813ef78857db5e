"""IFC export via ifcopenshell.

Writes a built shell document to IFC 2x3: one storey per level, walls
with hosted doors/windows cut through openings, and the roof. Internal
lengths (feet) are converted to metres.
"""

from __future__ import annotations

from pathlib import Path

import ifcopenshell
import numpy as np

from shell_builder.host.memory import (
    ExtrusionRoofElement,
    FamilyInstance,
    FootprintRoofElement,
    MemoryDocument,
    WallElement,
)
from shell_builder.models.ids import generate_element_id
from shell_builder.models.plan import Category, LevelRef
from shell_builder.units import LengthUnit, from_internal

# Opening sizes used when a catalog type carries no dimensions (metres)
DEFAULT_DOOR_SIZE = (0.9, 2.1)
DEFAULT_WINDOW_SIZE = (0.9, 1.5)
DEFAULT_ROOF_THICKNESS = 0.3


def _m(value: float) -> float:
    """Internal length to metres."""
    return from_internal(value, LengthUnit.METERS)


def _wall_direction(wall: WallElement) -> tuple[float, float]:
    """Unit direction vector of a wall in plan."""
    dx, dy, _ = wall.curve.direction
    norm = float(np.hypot(dx, dy))
    return (dx / norm, dy / norm)


def _wall_normal(wall: WallElement) -> tuple[float, float]:
    """Left-hand normal of wall direction (for thickness offset)."""
    dx, dy = _wall_direction(wall)
    return (-dy, dx)


class IFCExporter:
    """Export a shell document to an IFC file."""

    def __init__(self, document: MemoryDocument, name: str | None = None):
        self.document = document
        self.name = name or document.title
        self.file = ifcopenshell.file(schema="IFC2X3")
        self._setup_header()
        self._context: ifcopenshell.entity_instance | None = None
        self._body_context: ifcopenshell.entity_instance | None = None

    def _setup_header(self) -> None:
        file_name = self.file.header.file_name
        file_name.name = f"{self.name}.ifc"
        file_name.author = ("Shell Builder",)
        file_name.organization = ("",)

    def export(self, output_path: str | Path) -> Path:
        """Export the document to an IFC file. Returns the output path."""
        if self.document.in_transaction:
            raise RuntimeError("Commit or roll back the open transaction before exporting")
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        self._create_contexts()

        # IFC hierarchy: Project → Site → Building → Storeys
        ifc_project = self._create_project()
        ifc_site = self._create_site(ifc_project)
        ifc_building = self._create_building(ifc_site)

        levels = sorted(self.document.levels.values(), key=lambda lv: lv.elevation)
        for level in levels:
            self._export_level(level, ifc_building)

        self.file.write(str(output_path))
        return output_path

    def _create_contexts(self) -> None:
        self._context = self.file.createIfcGeometricRepresentationContext(
            ContextIdentifier="3D",
            ContextType="Model",
            CoordinateSpaceDimension=3,
            Precision=1e-5,
            WorldCoordinateSystem=self.file.createIfcAxis2Placement3D(
                Location=self.file.createIfcCartesianPoint((0.0, 0.0, 0.0)),
            ),
            TrueNorth=self.file.createIfcDirection((0.0, 1.0)),
        )
        self._body_context = self.file.createIfcGeometricRepresentationSubContext(
            ContextIdentifier="Body",
            ContextType="Model",
            ParentContext=self._context,
            TargetView="MODEL_VIEW",
        )

    def _create_project(self) -> ifcopenshell.entity_instance:
        """Create IfcProject with SI units."""
        units = [
            self.file.createIfcSIUnit(UnitType="LENGTHUNIT", Name="METRE"),
            self.file.createIfcSIUnit(UnitType="AREAUNIT", Name="SQUARE_METRE"),
            self.file.createIfcSIUnit(UnitType="VOLUMEUNIT", Name="CUBIC_METRE"),
            self.file.createIfcSIUnit(UnitType="PLANEANGLEUNIT", Name="RADIAN"),
        ]
        return self.file.createIfcProject(
            GlobalId=generate_element_id(),
            Name=self.name,
            UnitsInContext=self.file.createIfcUnitAssignment(Units=units),
            RepresentationContexts=[self._context],
        )

    def _create_site(self, project: ifcopenshell.entity_instance) -> ifcopenshell.entity_instance:
        site = self.file.createIfcSite(
            GlobalId=generate_element_id(),
            Name="Default Site",
            CompositionType="ELEMENT",
        )
        self.file.createIfcRelAggregates(
            GlobalId=generate_element_id(),
            RelatingObject=project,
            RelatedObjects=[site],
        )
        return site

    def _create_building(self, site: ifcopenshell.entity_instance) -> ifcopenshell.entity_instance:
        ifc_building = self.file.createIfcBuilding(
            GlobalId=generate_element_id(),
            Name=self.name,
            CompositionType="ELEMENT",
        )
        self.file.createIfcRelAggregates(
            GlobalId=generate_element_id(),
            RelatingObject=site,
            RelatedObjects=[ifc_building],
        )
        return ifc_building

    def _export_level(self, level: LevelRef, ifc_building: ifcopenshell.entity_instance) -> None:
        """Export one level as a storey with every element placed on it."""
        ifc_storey = self.file.createIfcBuildingStorey(
            GlobalId=level.global_id,
            Name=level.name,
            CompositionType="ELEMENT",
            Elevation=_m(level.elevation),
        )
        self.file.createIfcRelAggregates(
            GlobalId=generate_element_id(),
            RelatingObject=ifc_building,
            RelatedObjects=[ifc_storey],
        )

        products: list[ifcopenshell.entity_instance] = []

        wall_map: dict[str, ifcopenshell.entity_instance] = {}
        for wall in self.document.walls:
            if wall.base_level.global_id != level.global_id:
                continue
            ifc_wall = self._create_wall(wall)
            wall_map[wall.global_id] = ifc_wall
            products.append(ifc_wall)

        # Openings are linked to their host wall via IfcRelVoidsElement only,
        # not contained in the storey.
        for instance in self.document.instances:
            if instance.level.global_id != level.global_id:
                continue
            wall = self.document.get_wall(instance.host_id)
            if wall is None:
                continue
            ifc_filling = self._create_filling(instance, wall)
            ifc_wall_host = wall_map.get(wall.global_id)
            if ifc_wall_host is not None:
                opening = self._create_opening(instance, wall)
                self.file.createIfcRelVoidsElement(
                    GlobalId=generate_element_id(),
                    RelatingBuildingElement=ifc_wall_host,
                    RelatedOpeningElement=opening,
                )
                self.file.createIfcRelFillsElement(
                    GlobalId=generate_element_id(),
                    RelatingOpeningElement=opening,
                    RelatedBuildingElement=ifc_filling,
                )
            products.append(ifc_filling)

        for roof in self.document.roofs:
            if roof.level.global_id != level.global_id:
                continue
            if isinstance(roof, ExtrusionRoofElement):
                products.append(self._create_extrusion_roof(roof))
            else:
                products.append(self._create_footprint_roof(roof))

        if products:
            self.file.createIfcRelContainedInSpatialStructure(
                GlobalId=generate_element_id(),
                RelatingStructure=ifc_storey,
                RelatedElements=products,
            )

    # ── Elements ──────────────────────────────────────────────────────

    def _create_wall(self, wall: WallElement) -> ifcopenshell.entity_instance:
        """Create an IfcWallStandardCase with extruded geometry."""
        dx, dy = _wall_direction(wall)
        nx, ny = _wall_normal(wall)
        length = _m(wall.curve.length)
        thickness = _m(wall.width)

        # Placement at start point, offset by half thickness along normal
        ox = _m(wall.curve.start.x) - nx * thickness / 2
        oy = _m(wall.curve.start.y) - ny * thickness / 2

        placement = self._create_local_placement(
            origin=(ox, oy, _m(wall.base_level.elevation)),
            x_dir=(dx, dy, 0.0),
        )
        solid = self._extruded_rectangle(length, thickness, _m(wall.height))

        ifc_wall = self.file.createIfcWallStandardCase(
            GlobalId=wall.global_id,
            Name="Exterior Wall",
            ObjectPlacement=placement,
            Representation=self._product_shape(solid),
        )

        props = [
            self.file.createIfcPropertySingleValue(
                Name="LoadBearing",
                NominalValue=self.file.create_entity("IfcBoolean", True),
            ),
            self.file.createIfcPropertySingleValue(
                Name="IsExternal",
                NominalValue=self.file.create_entity("IfcBoolean", True),
            ),
        ]
        pset = self.file.createIfcPropertySet(
            GlobalId=generate_element_id(),
            Name="Pset_WallCommon",
            HasProperties=props,
        )
        self.file.createIfcRelDefinesByProperties(
            GlobalId=generate_element_id(),
            RelatedObjects=[ifc_wall],
            RelatingPropertyDefinition=pset,
        )
        return ifc_wall

    def _opening_size(self, instance: FamilyInstance) -> tuple[float, float]:
        """(width, height) in metres, from the catalog or the defaults."""
        default = DEFAULT_DOOR_SIZE if instance.symbol.category == Category.DOORS else DEFAULT_WINDOW_SIZE
        width = _m(instance.symbol.width) if instance.symbol.width else default[0]
        height = _m(instance.symbol.height) if instance.symbol.height else default[1]
        return width, height

    def _opening_placement(
        self, instance: FamilyInstance, wall: WallElement, width: float
    ) -> ifcopenshell.entity_instance:
        """Placement centred on the instance point, on the wall's outer face."""
        dx, dy = _wall_direction(wall)
        nx, ny = _wall_normal(wall)
        thickness = _m(wall.width)
        ox = _m(instance.point.x) - dx * width / 2 - nx * thickness / 2
        oy = _m(instance.point.y) - dy * width / 2 - ny * thickness / 2
        z = _m(instance.level.elevation + instance.symbol.sill_height)
        return self._create_local_placement(origin=(ox, oy, z), x_dir=(dx, dy, 0.0))

    def _create_filling(self, instance: FamilyInstance, wall: WallElement) -> ifcopenshell.entity_instance:
        """Create an IfcDoor or IfcWindow placed in its host wall."""
        width, height = self._opening_size(instance)
        solid = self._extruded_rectangle(width, _m(wall.width), height)
        kwargs = dict(
            GlobalId=instance.global_id,
            Name=instance.symbol.key,
            ObjectPlacement=self._opening_placement(instance, wall, width),
            Representation=self._product_shape(solid),
            OverallHeight=height,
            OverallWidth=width,
        )
        if instance.symbol.category == Category.DOORS:
            return self.file.createIfcDoor(**kwargs)
        return self.file.createIfcWindow(**kwargs)

    def _create_opening(self, instance: FamilyInstance, wall: WallElement) -> ifcopenshell.entity_instance:
        """Create the IfcOpeningElement that voids the host wall."""
        width, height = self._opening_size(instance)
        # Slightly thicker than the wall for a clean boolean cut
        depth = _m(wall.width) + 0.01
        solid = self._extruded_rectangle(width, depth, height)
        is_door = instance.symbol.category == Category.DOORS
        return self.file.createIfcOpeningElement(
            GlobalId=generate_element_id(),
            Name="Door Opening" if is_door else "Window Opening",
            ObjectPlacement=self._opening_placement(instance, wall, width),
            Representation=self._product_shape(solid),
        )

    def _create_extrusion_roof(self, roof: ExtrusionRoofElement) -> ifcopenshell.entity_instance:
        """Create an IfcRoof: the gable profile swept along the plane normal."""
        normal = np.array(roof.plane.normal)
        cut = np.array(roof.plane.cut_vector.as_tuple())
        ref = cut / np.linalg.norm(cut)
        up = np.cross(normal, ref)

        run_lo, run_hi = sorted((roof.run_start, roof.run_end))
        origin = np.array(roof.plane.origin.as_tuple()) + normal * run_lo

        # Profile in plane coordinates, closed back to the first eave corner
        points = [seg.start for seg in roof.profile] + [roof.profile[-1].end]
        coords = []
        for p in points:
            rel = np.array(p.as_tuple()) - origin
            coords.append((_m(float(rel @ ref)), _m(float(rel @ up))))
        ifc_points = [self.file.createIfcCartesianPoint(c) for c in coords]
        ifc_points.append(ifc_points[0])

        profile = self.file.createIfcArbitraryClosedProfileDef(
            ProfileType="AREA",
            OuterCurve=self.file.createIfcPolyline(Points=ifc_points),
        )
        solid = self.file.createIfcExtrudedAreaSolid(
            SweptArea=profile,
            Position=self.file.createIfcAxis2Placement3D(
                Location=self.file.createIfcCartesianPoint((0.0, 0.0, 0.0)),
            ),
            ExtrudedDirection=self.file.createIfcDirection((0.0, 0.0, 1.0)),
            Depth=_m(run_hi - run_lo),
        )
        placement = self._create_local_placement(
            origin=tuple(_m(float(v)) for v in origin),
            z_dir=tuple(float(v) for v in normal),
            x_dir=tuple(float(v) for v in ref),
        )
        return self.file.createIfcRoof(
            GlobalId=roof.global_id,
            Name=roof.roof_type.key,
            ObjectPlacement=placement,
            Representation=self._product_shape(solid),
            ShapeType="GABLE_ROOF",
        )

    def _create_footprint_roof(self, roof: FootprintRoofElement) -> ifcopenshell.entity_instance:
        """Create an IfcRoof from the footprint outline, at its level."""
        ifc_points = [
            self.file.createIfcCartesianPoint((_m(c.curve.start.x), _m(c.curve.start.y)))
            for c in roof.curves
        ]
        ifc_points.append(ifc_points[0])
        profile = self.file.createIfcArbitraryClosedProfileDef(
            ProfileType="AREA",
            OuterCurve=self.file.createIfcPolyline(Points=ifc_points),
        )
        thickness = _m(roof.roof_type.height) if roof.roof_type.height else DEFAULT_ROOF_THICKNESS
        solid = self.file.createIfcExtrudedAreaSolid(
            SweptArea=profile,
            Position=self.file.createIfcAxis2Placement3D(
                Location=self.file.createIfcCartesianPoint((0.0, 0.0, 0.0)),
            ),
            ExtrudedDirection=self.file.createIfcDirection((0.0, 0.0, 1.0)),
            Depth=thickness,
        )
        placement = self._create_local_placement(origin=(0.0, 0.0, _m(roof.level.elevation)))
        ifc_roof = self.file.createIfcRoof(
            GlobalId=roof.global_id,
            Name=roof.roof_type.key,
            ObjectPlacement=placement,
            Representation=self._product_shape(solid),
            ShapeType="HIP_ROOF",
        )

        slopes = [c.slope for c in roof.curves if c.defines_slope and c.slope]
        if slopes:
            pset = self.file.createIfcPropertySet(
                GlobalId=generate_element_id(),
                Name="Pset_RoofCommon",
                HasProperties=[
                    self.file.createIfcPropertySingleValue(
                        Name="PitchAngle",
                        NominalValue=self.file.create_entity(
                            "IfcPlaneAngleMeasure", float(np.arctan(max(slopes)))
                        ),
                    ),
                ],
            )
            self.file.createIfcRelDefinesByProperties(
                GlobalId=generate_element_id(),
                RelatedObjects=[ifc_roof],
                RelatingPropertyDefinition=pset,
            )
        return ifc_roof

    # ── Geometry helpers ──────────────────────────────────────────────

    def _extruded_rectangle(
        self, x_dim: float, y_dim: float, depth: float
    ) -> ifcopenshell.entity_instance:
        """Rectangle with its corner at the local origin, extruded up."""
        profile = self.file.createIfcRectangleProfileDef(
            ProfileType="AREA",
            XDim=x_dim,
            YDim=y_dim,
            Position=self.file.createIfcAxis2Placement2D(
                Location=self.file.createIfcCartesianPoint((x_dim / 2, y_dim / 2)),
            ),
        )
        return self.file.createIfcExtrudedAreaSolid(
            SweptArea=profile,
            Position=self.file.createIfcAxis2Placement3D(
                Location=self.file.createIfcCartesianPoint((0.0, 0.0, 0.0)),
            ),
            ExtrudedDirection=self.file.createIfcDirection((0.0, 0.0, 1.0)),
            Depth=depth,
        )

    def _product_shape(self, solid: ifcopenshell.entity_instance) -> ifcopenshell.entity_instance:
        shape = self.file.createIfcShapeRepresentation(
            ContextOfItems=self._body_context,
            RepresentationIdentifier="Body",
            RepresentationType="SweptSolid",
            Items=[solid],
        )
        return self.file.createIfcProductDefinitionShape(Representations=[shape])

    def _create_local_placement(
        self,
        origin: tuple[float, float, float] = (0.0, 0.0, 0.0),
        z_dir: tuple[float, float, float] = (0.0, 0.0, 1.0),
        x_dir: tuple[float, float, float] = (1.0, 0.0, 0.0),
    ) -> ifcopenshell.entity_instance:
        """Create an IfcLocalPlacement."""
        axis2 = self.file.createIfcAxis2Placement3D(
            Location=self.file.createIfcCartesianPoint(origin),
            Axis=self.file.createIfcDirection(z_dir),
            RefDirection=self.file.createIfcDirection(x_dir),
        )
        return self.file.createIfcLocalPlacement(RelativePlacement=axis2)
