"""
Input error taxonomy.

Everything here is raised by the input adapters before any solving
starts.  The CLI catches ``InputError`` and exits non-zero with the
message; the solvers themselves never raise for validated input.
"""

from __future__ import annotations


class InputError(ValueError):
    """Base class for every rejected-input condition."""


class MalformedInputError(InputError):
    """A matrix cell is not a finite, non-negative number."""


class ShapeError(InputError):
    """The matrix is empty or not square."""


class ConfigError(InputError):
    """The parameter line is missing, malformed, or out of range."""
