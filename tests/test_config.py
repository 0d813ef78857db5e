"""Tests for configuration and unit conversion."""

import pytest
from pydantic import ValidationError

from shell_builder.config import LevelConfig, ShellConfig
from shell_builder.models import Category, RoofStrategy
from shell_builder.units import LengthUnit, from_internal, to_internal


class TestUnits:
    def test_foot_is_304_8_mm(self):
        assert to_internal(304.8, LengthUnit.MILLIMETERS) == pytest.approx(1.0)

    def test_meters(self):
        assert to_internal(1.0, "m") == pytest.approx(3.280839895)

    def test_feet_unchanged(self):
        assert to_internal(12.5, LengthUnit.FEET) == 12.5

    def test_round_trip(self):
        assert from_internal(to_internal(5000.0)) == pytest.approx(5000.0)


class TestShellConfig:
    def test_defaults(self):
        config = ShellConfig()
        assert config.unit == LengthUnit.MILLIMETERS
        assert config.roof_strategy == RoofStrategy.EXTRUSION
        assert config.base_level == "Level 1"
        assert config.top_level == "Level 2"

    def test_half_extents_internal(self):
        config = ShellConfig(width=10000, depth=5000)
        assert config.half_width == pytest.approx(to_internal(5000))
        assert config.half_depth == pytest.approx(to_internal(2500))

    def test_meter_config(self):
        config = ShellConfig(unit="m", width=10, depth=5)
        assert config.half_width == pytest.approx(to_internal(5000))

    def test_non_positive_width_rejected(self):
        with pytest.raises(ValidationError):
            ShellConfig(width=0)

    def test_duplicate_levels_rejected(self):
        with pytest.raises(ValidationError):
            ShellConfig(levels=[LevelConfig(name="L", elevation=0), LevelConfig(name="L", elevation=3000)])

    def test_type_descriptor(self):
        door = ShellConfig().type_descriptor(Category.DOORS)
        assert door.category == Category.DOORS
        assert door.family_name == "Single-Flush"
        assert door.width == pytest.approx(to_internal(915))
        assert door.active is False

    def test_window_sill(self):
        window = ShellConfig().type_descriptor(Category.WINDOWS)
        assert window.sill_height == pytest.approx(to_internal(800))

    def test_save_load(self, tmp_path):
        config = ShellConfig(width=12000, roof_strategy=RoofStrategy.FOOTPRINT)
        path = config.save(tmp_path / "nested" / "shell.json")
        loaded = ShellConfig.load(path)
        assert loaded == config

    def test_partial_json(self, tmp_path):
        path = tmp_path / "shell.json"
        path.write_text('{"width": 8000, "roof_strategy": "footprint"}')
        config = ShellConfig.load(path)
        assert config.width == 8000
        assert config.depth == 5000
        assert config.roof_strategy == RoofStrategy.FOOTPRINT
