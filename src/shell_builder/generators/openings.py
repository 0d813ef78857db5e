"""Door and window placement: one opening per wall span, at its midpoint."""

from __future__ import annotations

from collections.abc import Sequence

from shell_builder.errors import InvalidInputError
from shell_builder.models.plan import (
    Category,
    OpeningKind,
    OpeningPlacement,
    TypeDescriptor,
    WallSpan,
)

_KIND_CATEGORY = {
    OpeningKind.DOOR: Category.DOORS,
    OpeningKind.WINDOW: Category.WINDOWS,
}


def plan_openings(
    spans: Sequence[WallSpan],
    door_type: TypeDescriptor,
    window_type: TypeDescriptor,
) -> list[OpeningPlacement]:
    """Place a door on span 0 and a window on every other span.

    Raises:
        InvalidInputError: Two spans share an index, or a descriptor's
            category does not match the opening kind it is used for.
    """
    types = {OpeningKind.DOOR: door_type, OpeningKind.WINDOW: window_type}
    for kind, descriptor in types.items():
        if descriptor.category != _KIND_CATEGORY[kind]:
            raise InvalidInputError(
                f"{kind.value} type '{descriptor.key}' is in category "
                f"'{descriptor.category.value}', expected '{_KIND_CATEGORY[kind].value}'"
            )

    seen: set[int] = set()
    placements = []
    for span in spans:
        if span.index in seen:
            raise InvalidInputError(f"Wall span {span.index} already has an opening")
        seen.add(span.index)

        kind = span.opening_kind
        placements.append(
            OpeningPlacement(
                host_wall_index=span.index,
                placement_point=span.midpoint,
                kind=kind,
                type_descriptor=types[kind],
            )
        )
    return placements
