"""Element identifiers.

Handles created by the reference document carry IFC-compatible GlobalIds
(22-character compressed GUIDs) so the same id shows up in the exported
IFC file.
"""

from __future__ import annotations

import uuid

import ifcopenshell.guid


def generate_element_id() -> str:
    """New 22-character IFC GlobalId."""
    return ifcopenshell.guid.compress(uuid.uuid4().hex)
