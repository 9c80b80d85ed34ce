"""
Exception types raised by the board mesh services.

All errors are raised synchronously to the caller.  The generator never
retries, clamps or returns partial results; callers decide what to do
with a failure.  Each error also derives from ``ValueError`` so that code
which only cares about "bad input" can catch the built-in type.
"""

from __future__ import annotations


class DeckMeshError(Exception):
    """Base class for all deckmesh errors."""


class ConfigurationError(DeckMeshError, ValueError):
    """A profile or rendering configuration is malformed.

    Raised once, at construction time, for problems such as a profile with
    fewer than three points or the wrong winding.  Not retryable: the
    authoring data has to be fixed.
    """


class InvalidDimension(DeckMeshError, ValueError):
    """An extrusion length is not a finite, strictly positive number."""


class InvalidTopology(DeckMeshError, ValueError):
    """A polygon cannot be triangulated (fewer than three points)."""
