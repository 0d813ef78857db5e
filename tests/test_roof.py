"""Tests for the roof planners."""

import math

import pytest

from shell_builder.errors import InvalidInputError, PreconditionFailedError
from shell_builder.generators.footprint import generate_footprint
from shell_builder.generators.roof import (
    plan_extrusion_roof,
    plan_footprint_roof,
    plan_roof,
)
from shell_builder.generators.walls import plan_wall_spans
from shell_builder.models import (
    ExtrusionRoofProfile,
    FootprintRoofProfile,
    LevelRef,
    Point3D,
    ReferencePlane,
    RoofStrategy,
)

DX, DY, DH = 16.0, 8.0, 10.0


def _spans(base_elevation: float = 0.0):
    base = LevelRef(name="Level 1", elevation=base_elevation)
    top = LevelRef(name="Level 2", elevation=base_elevation + DH)
    return plan_wall_spans(generate_footprint(DX, DY, elevation=base_elevation), base, top)


class TestExtrusionRoof:
    def test_apex_at_one_and_a_half_wall_heights(self):
        roof = plan_extrusion_roof(_spans(), DH, DX, DY)
        assert math.isclose(roof.apex_elevation, 1.5 * DH)
        assert math.isclose(roof.eave_elevation, DH)

    def test_apex_above_raised_base(self):
        roof = plan_extrusion_roof(_spans(3.0), DH, DX, DY, base_elevation=3.0)
        assert math.isclose(roof.apex_elevation, 3.0 + DH + DH / 2)

    def test_gable_profile(self):
        roof = plan_extrusion_roof(_spans(), DH, DX, DY)
        first, second = roof.slope_curves
        assert first.start == Point3D.of(DX, -DY, DH)
        assert first.end == Point3D.of(DX, 0, 1.5 * DH)
        assert second.start == first.end
        assert second.end == Point3D.of(DX, DY, DH)

    def test_ridge_joins_opposite_gable_walls(self):
        roof = plan_extrusion_roof(_spans(), DH, DX, DY)
        assert roof.ridge.start == Point3D.of(DX, 0, 1.5 * DH)
        assert roof.ridge.end == Point3D.of(-DX, 0, 1.5 * DH)
        assert math.isclose(roof.ridge.length, 2 * DX)

    def test_roof_corners_congruent_with_footprint(self):
        roof = plan_extrusion_roof(_spans(), DH, DX, DY)
        eaves = {(p.x, p.y) for seg in roof.slope_curves for p in (seg.start, seg.end) if p.z == DH}
        assert eaves == {(DX, -DY), (DX, DY)}

    def test_reference_plane(self):
        plane = plan_extrusion_roof(_spans(), DH, DX, DY).plane
        assert plane.origin == Point3D.of(0, 0, 0)
        assert plane.axis_end == Point3D.of(0, 0, DH / 2)
        assert plane.cut_vector == Point3D.of(0, DY, 0)
        # Extrusion runs along X, perpendicular to the gable plane
        assert plane.normal == pytest.approx((-1.0, 0.0, 0.0))

    def test_parallel_plane_axes_rejected(self):
        plane = ReferencePlane(
            origin=Point3D.of(0, 0, 0),
            axis_end=Point3D.of(0, 0, 5),
            cut_vector=Point3D.of(0, 0, 2),
        )
        with pytest.raises(InvalidInputError, match="parallel"):
            plane.normal

    def test_run_covers_footprint(self):
        roof = plan_extrusion_roof(_spans(), DH, DX, DY)
        assert (roof.run_start, roof.run_end) == (-DX, DX)

    @pytest.mark.parametrize("dh", [0.0, -1.0])
    def test_non_positive_height(self, dh):
        with pytest.raises(InvalidInputError):
            plan_extrusion_roof(_spans(), dh, DX, DY)

    def test_non_positive_extent(self):
        with pytest.raises(InvalidInputError):
            plan_extrusion_roof(_spans(), DH, 0.0, DY)

    def test_three_walls_precondition(self):
        with pytest.raises(PreconditionFailedError):
            plan_extrusion_roof(_spans()[:3], DH, DX, DY)


class TestFootprintRoof:
    def test_outline_offset_by_half_thickness(self):
        roof = plan_footprint_roof(_spans(), wall_thickness=1.0)
        t = 0.5
        assert roof.overhang == t
        assert [seg.start for seg in roof.boundary] == [
            Point3D.of(-DX - t, -DY - t), Point3D.of(DX + t, -DY - t),
            Point3D.of(DX + t, DY + t), Point3D.of(-DX - t, DY + t),
        ]

    def test_outline_is_closed(self):
        boundary = plan_footprint_roof(_spans(), wall_thickness=1.0).boundary
        for a, b in zip(boundary, boundary[1:] + boundary[:1]):
            assert a.end == b.start

    def test_uniform_slope(self):
        roof = plan_footprint_roof(_spans(), wall_thickness=1.0, slope=0.35)
        assert roof.slope == 0.35

    def test_default_slope(self):
        assert plan_footprint_roof(_spans(), wall_thickness=1.0).slope == 0.5

    def test_bad_inputs(self):
        with pytest.raises(InvalidInputError):
            plan_footprint_roof(_spans(), wall_thickness=0.0)
        with pytest.raises(InvalidInputError):
            plan_footprint_roof(_spans(), wall_thickness=1.0, slope=0.0)

    def test_requires_rectangle(self):
        with pytest.raises(PreconditionFailedError):
            plan_footprint_roof(_spans()[:3], wall_thickness=1.0)


class TestPlanRoof:
    def test_default_is_extrusion(self):
        roof = plan_roof(RoofStrategy.EXTRUSION, _spans(), DH, DX, DY)
        assert isinstance(roof, ExtrusionRoofProfile)

    def test_footprint(self):
        roof = plan_roof("footprint", _spans(), DH, DX, DY, wall_thickness=1.0)
        assert isinstance(roof, FootprintRoofProfile)

    def test_footprint_needs_thickness(self):
        with pytest.raises(InvalidInputError, match="thickness"):
            plan_roof(RoofStrategy.FOOTPRINT, _spans(), DH, DX, DY)
