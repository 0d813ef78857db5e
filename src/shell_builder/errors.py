"""Error kinds raised by the planners and the shell command.

All of them are terminal for the current invocation: nothing retries,
nothing is committed partially.
"""

from __future__ import annotations


class ShellBuilderError(Exception):
    """Base class for every shell-builder failure."""

    kind = "error"


class InvalidInputError(ShellBuilderError, ValueError):
    """Non-positive dimension, malformed boundary, mismatched catalog type."""

    kind = "invalid_input"


class NotFoundError(ShellBuilderError, LookupError):
    """A level, catalog type or family symbol is absent from the document."""

    kind = "not_found"


class PreconditionFailedError(ShellBuilderError):
    """The document or the plan is not in a state that allows the operation."""

    kind = "precondition_failed"
