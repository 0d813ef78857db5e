"""Shell command configuration.

Lengths are in ``unit`` (millimeters by default) and converted to
internal units on access. Stored as JSON, like building models.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from shell_builder.models.plan import Category, RoofStrategy, TypeDescriptor
from shell_builder.units import LengthUnit, to_internal


class LevelConfig(BaseModel):
    """A level the reference document is seeded with."""

    name: str
    elevation: float = Field(default=0.0, description="Elevation in display units")


class FamilyTypeConfig(BaseModel):
    """Catalog type to look up: type name within a family."""

    type_name: str
    family_name: str
    width: float | None = Field(default=None, gt=0, description="Nominal width in display units")
    height: float | None = Field(default=None, gt=0, description="Nominal height in display units")
    sill_height: float = Field(default=0.0, ge=0, description="Sill height in display units")


class ShellConfig(BaseModel):
    """Everything the shell command needs besides the document."""

    unit: LengthUnit = Field(default=LengthUnit.MILLIMETERS, description="Display unit for all lengths")
    width: float = Field(default=10000.0, gt=0, description="Footprint size along X")
    depth: float = Field(default=5000.0, gt=0, description="Footprint size along Y")
    base_level: str = "Level 1"
    top_level: str = "Level 2"
    levels: list[LevelConfig] = Field(
        default_factory=lambda: [
            LevelConfig(name="Level 1", elevation=0.0),
            LevelConfig(name="Level 2", elevation=3000.0),
        ],
        description="Levels of the reference document",
    )
    wall_thickness: float = Field(default=200.0, gt=0, description="Wall thickness of the reference document")
    door: FamilyTypeConfig = Field(
        default_factory=lambda: FamilyTypeConfig(
            type_name="0915 x 2134 mm", family_name="Single-Flush", width=915.0, height=2134.0
        )
    )
    window: FamilyTypeConfig = Field(
        default_factory=lambda: FamilyTypeConfig(
            type_name="0915 x 1830 mm", family_name="Fixed", width=915.0, height=1830.0, sill_height=800.0
        )
    )
    roof: FamilyTypeConfig = Field(
        default_factory=lambda: FamilyTypeConfig(type_name="Generic - 400mm", family_name="Basic Roof", height=400.0)
    )
    roof_strategy: RoofStrategy = RoofStrategy.EXTRUSION
    roof_slope: float = Field(default=0.5, gt=0, description="Footprint roof slope (rise over run)")
    transaction_label: str = "Create shell"

    @field_validator("levels")
    @classmethod
    def unique_level_names(cls, v: list[LevelConfig]) -> list[LevelConfig]:
        names = [lv.name for lv in v]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate level names: {names}")
        return v

    # ── Internal units ────────────────────────────────────────────────

    def internal(self, value: float) -> float:
        """Convert a display-unit length from this config to internal units."""
        return to_internal(value, self.unit)

    @property
    def half_width(self) -> float:
        return self.internal(self.width) / 2

    @property
    def half_depth(self) -> float:
        return self.internal(self.depth) / 2

    def type_descriptor(self, category: Category) -> TypeDescriptor:
        """Catalog entry described by the door/window/roof section."""
        section = {
            Category.DOORS: self.door,
            Category.WINDOWS: self.window,
            Category.ROOFS: self.roof,
        }[Category(category)]
        return TypeDescriptor(
            category=category,
            type_name=section.type_name,
            family_name=section.family_name,
            width=self.internal(section.width) if section.width else None,
            height=self.internal(section.height) if section.height else None,
            sill_height=self.internal(section.sill_height),
        )

    # ── File I/O ──────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path) -> ShellConfig:
        """Load a config from a JSON file."""
        path = Path(path)
        return cls.model_validate_json(path.read_text())

    def save(self, path: str | Path) -> Path:
        """Save the config to a JSON file. Creates parent dirs if needed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
        return path
