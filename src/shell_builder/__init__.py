"""Shell Builder: procedural rectangular building shells (walls, openings, roof)."""

__version__ = "0.1.0"
