"""Tests for IFC export and plan rendering."""

import ifcopenshell
import pytest

from shell_builder.command import create_shell
from shell_builder.config import ShellConfig
from shell_builder.export.ifc import IFCExporter
from shell_builder.export.plan_view import render_plan
from shell_builder.host.memory import MemoryDocument
from shell_builder.models import RoofStrategy


def _built(**overrides):
    config = ShellConfig(**overrides)
    doc = MemoryDocument.from_config(config)
    result = create_shell(doc, config)
    return doc, result


class TestIFCExport:
    def test_export_creates_file(self, tmp_path):
        doc, _ = _built()
        path = IFCExporter(doc).export(tmp_path / "shell.ifc")
        assert path.exists()
        assert path.stat().st_size > 0

    def test_header_names_file(self):
        doc, _ = _built()
        exporter = IFCExporter(doc, name="Demo Shell")
        assert exporter.file.header.file_name.name == "Demo Shell.ifc"

    def test_element_counts(self, tmp_path):
        doc, _ = _built()
        path = IFCExporter(doc).export(tmp_path / "shell.ifc")
        ifc = ifcopenshell.open(str(path))
        assert len(ifc.by_type("IfcBuildingStorey")) == 2
        assert len(ifc.by_type("IfcWallStandardCase")) == 4
        assert len(ifc.by_type("IfcDoor")) == 1
        assert len(ifc.by_type("IfcWindow")) == 3
        assert len(ifc.by_type("IfcOpeningElement")) == 4
        assert len(ifc.by_type("IfcRelVoidsElement")) == 4
        assert len(ifc.by_type("IfcRoof")) == 1

    def test_ids_preserved(self, tmp_path):
        doc, result = _built()
        ifc = ifcopenshell.open(str(IFCExporter(doc).export(tmp_path / "shell.ifc")))
        wall_ids = {w.GlobalId for w in ifc.by_type("IfcWallStandardCase")}
        assert wall_ids == set(result.wall_ids)
        assert ifc.by_type("IfcRoof")[0].GlobalId == result.roof_id

    def test_storey_elevation_in_metres(self, tmp_path):
        doc, _ = _built()
        ifc = ifcopenshell.open(str(IFCExporter(doc).export(tmp_path / "shell.ifc")))
        elevations = sorted(s.Elevation for s in ifc.by_type("IfcBuildingStorey"))
        assert elevations == pytest.approx([0.0, 3.0])

    def test_wall_height_in_metres(self, tmp_path):
        doc, _ = _built()
        ifc = ifcopenshell.open(str(IFCExporter(doc).export(tmp_path / "shell.ifc")))
        solids = [
            w.Representation.Representations[0].Items[0]
            for w in ifc.by_type("IfcWallStandardCase")
        ]
        assert all(s.Depth == pytest.approx(3.0) for s in solids)

    def test_gable_roof(self, tmp_path):
        doc, _ = _built()
        ifc = ifcopenshell.open(str(IFCExporter(doc).export(tmp_path / "shell.ifc")))
        roof = ifc.by_type("IfcRoof")[0]
        assert roof.ShapeType == "GABLE_ROOF"
        solid = roof.Representation.Representations[0].Items[0]
        # Swept across the full 10 m width
        assert solid.Depth == pytest.approx(10.0)

    def test_footprint_roof(self, tmp_path):
        doc, _ = _built(roof_strategy=RoofStrategy.FOOTPRINT)
        ifc = ifcopenshell.open(str(IFCExporter(doc).export(tmp_path / "shell.ifc")))
        roof = ifc.by_type("IfcRoof")[0]
        assert roof.ShapeType == "HIP_ROOF"
        assert any(p.Name == "Pset_RoofCommon" for p in ifc.by_type("IfcPropertySet"))

    def test_open_transaction_refused(self, tmp_path):
        doc = MemoryDocument()
        doc.begin("pending")
        with pytest.raises(RuntimeError):
            IFCExporter(doc).export(tmp_path / "shell.ifc")


class TestRenderPlan:
    def test_render_extrusion(self, tmp_path):
        _, result = _built()
        path = render_plan(result.plan, tmp_path / "plan.png")
        assert path.exists()
        assert path.read_bytes()[:4] == b"\x89PNG"

    def test_render_footprint(self, tmp_path):
        _, result = _built(roof_strategy=RoofStrategy.FOOTPRINT)
        path = render_plan(result.plan, tmp_path / "out" / "plan.png", title="Footprint")
        assert path.exists()
