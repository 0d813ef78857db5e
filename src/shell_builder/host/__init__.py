"""Host document interfaces and the in-memory reference document."""

from shell_builder.host.protocols import HostDocument
from shell_builder.host.memory import (
    ExtrusionRoofElement,
    FamilyInstance,
    FootprintRoofElement,
    MemoryDocument,
    SlopeCurve,
    WallElement,
)

__all__ = [
    "HostDocument",
    "ExtrusionRoofElement",
    "FamilyInstance",
    "FootprintRoofElement",
    "MemoryDocument",
    "SlopeCurve",
    "WallElement",
]
