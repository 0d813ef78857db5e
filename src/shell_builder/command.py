"""Create-shell command.

Applies a shell plan to a host document: four walls between two levels,
a door on the first wall, windows on the others, and a roof on the top
level. Everything happens in one transaction; any failure rolls the
document back and re-raises.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import BaseModel

from shell_builder.config import ShellConfig
from shell_builder.errors import NotFoundError
from shell_builder.generators.footprint import generate_footprint
from shell_builder.generators.openings import plan_openings
from shell_builder.generators.roof import plan_extrusion_roof, plan_footprint_roof
from shell_builder.generators.walls import plan_wall_spans
from shell_builder.host.protocols import (
    CatalogResolver,
    HostDocument,
    LevelResolver,
    TransactionScope,
)
from shell_builder.models.plan import (
    Category,
    LevelRef,
    RoofStrategy,
    ShellPlan,
    TypeDescriptor,
)

logger = logging.getLogger(__name__)


class ShellResult(BaseModel):
    """What ``create_shell`` planned and the ids of what it built."""

    plan: ShellPlan
    wall_ids: list[str]
    instance_ids: list[str]
    roof_id: str


@contextmanager
def transaction(scope: TransactionScope, label: str) -> Iterator[None]:
    """Run the block in one transaction: commit on success, roll back on error."""
    scope.begin(label)
    try:
        yield
    except BaseException:
        logger.warning("Rolling back '%s'", label)
        scope.rollback()
        raise
    scope.commit()


def require_level(document: LevelResolver, name: str) -> LevelRef:
    level = document.resolve_level(name)
    if level is None:
        raise NotFoundError(f"Level '{name}' not found")
    return level


def require_type(
    document: CatalogResolver,
    category: Category,
    type_name: str,
    family_name: str,
) -> TypeDescriptor:
    """Resolve a catalog type and make sure it is active."""
    descriptor = document.resolve_type(category, type_name, family_name)
    if descriptor is None:
        raise NotFoundError(
            f"No {category.value} type '{type_name}' in family '{family_name}'"
        )
    if not descriptor.active:
        descriptor = document.activate(descriptor)
    return descriptor


def create_shell(document: HostDocument, config: ShellConfig) -> ShellResult:
    """Build the shell described by ``config`` into ``document``.

    Must not run twice at once against the same document: the opening
    and roof assignment depends on the order the walls are created in.

    Raises:
        NotFoundError: Missing level or catalog type.
        InvalidInputError: Bad dimensions or level order.
        PreconditionFailedError: The document refused an operation.
    """
    base_level = require_level(document, config.base_level)
    top_level = require_level(document, config.top_level)
    dx, dy = config.half_width, config.half_depth

    with transaction(document, config.transaction_label):
        door_type = require_type(document, Category.DOORS, config.door.type_name, config.door.family_name)
        window_type = require_type(document, Category.WINDOWS, config.window.type_name, config.window.family_name)
        roof_type = require_type(document, Category.ROOFS, config.roof.type_name, config.roof.family_name)

        footprint = generate_footprint(dx, dy)
        spans = plan_wall_spans(footprint, base_level, top_level)
        walls = [document.create_wall(span.curve, base_level, top_level) for span in spans]
        logger.info("Created %d walls between '%s' and '%s'", len(walls), base_level.name, top_level.name)

        openings = plan_openings(spans, door_type, window_type)
        instances = [
            document.place_instance(
                opening.placement_point,
                opening.type_descriptor,
                walls[opening.host_wall_index],
                base_level,
            )
            for opening in openings
        ]
        logger.info("Placed %d openings", len(instances))

        if config.roof_strategy == RoofStrategy.FOOTPRINT:
            roof_profile = plan_footprint_roof(spans, walls[0].width, config.roof_slope)
            roof, slope_curves = document.create_footprint_roof(roof_profile.boundary, top_level, roof_type)
            for curve in slope_curves:
                document.define_slope(roof, curve, roof_profile.slope)
        else:
            roof_profile = plan_extrusion_roof(
                spans, walls[0].height, dx, dy, base_elevation=base_level.elevation
            )
            roof = document.create_extrusion_roof(
                roof_profile.slope_curves,
                roof_profile.plane,
                top_level,
                roof_type,
                roof_profile.run_start,
                roof_profile.run_end,
            )
        logger.info("Created %s roof on '%s'", config.roof_strategy.value, top_level.name)

    plan = ShellPlan(
        footprint=footprint,
        walls=tuple(spans),
        openings=tuple(openings),
        roof=roof_profile,
    )
    return ShellResult(
        plan=plan,
        wall_ids=[w.global_id for w in walls],
        instance_ids=[i.global_id for i in instances],
        roof_id=roof.global_id,
    )
