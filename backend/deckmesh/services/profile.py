"""
Board cross-section profiles.

A profile is the closed 2D polyline that gets extruded into a board.  It
lives in cross-section space: ``x`` is the lateral offset from the board
centreline and ``y`` the vertical offset from the top face, so every
point has ``y <= 0``.  The last point connects back to the first.

Profiles are authored in inches (they come from DXF measurements) and
converted to feet, the working unit of the rest of the system, exactly
once when the ``ProfileDefinition`` is built.  After that the value is
immutable and can be shared freely between threads.

Winding contract
----------------
Points must be traced clockwise in the cross-section plane, with ``x`` to
the right and ``y`` up.  Equivalently the shoelace signed area is
negative.  With that winding the side-wall triangles emitted by
:mod:`.extrusion` face outward.  The contract is checked at construction
and a violation raises :class:`~.errors.ConfigurationError`.
"""

from __future__ import annotations

import hashlib
import math
from dataclasses import dataclass, field
from typing import Iterable, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError

INCHES_PER_FOOT = 12.0
INCH_TO_FEET = 1.0 / INCHES_PER_FOOT


def inches_to_feet(value: float) -> float:
    """Convert a length in inches to feet."""
    return value * INCH_TO_FEET


class ProfilePoint(NamedTuple):
    """One vertex of a cross-section polyline."""

    x: float
    y: float


@dataclass(frozen=True)
class BoardDimensions:
    """Dimensional constants of a board profile, in feet.

    Attributes:
        width: Lateral extent of the profile (max x minus min x).
        thickness: Nominal board thickness.
        total_height: Vertical extent of the profile (max y minus min y).
        groove_depth: How far the side groove cuts into the board.
        groove_height: Vertical opening of the side groove.
    """

    width: float
    thickness: float
    total_height: float
    groove_depth: float
    groove_height: float


def signed_area(points: Sequence[Tuple[float, float]]) -> float:
    """Return the shoelace signed area of a closed 2D polyline.

    Positive for counter-clockwise winding, negative for clockwise, zero
    for degenerate input.
    """
    n = len(points)
    if n < 3:
        return 0.0
    total = 0.0
    for i in range(n):
        x0, y0 = points[i]
        x1, y1 = points[(i + 1) % n]
        total += x0 * y1 - x1 * y0
    return 0.5 * total


@dataclass(frozen=True)
class ProfileDefinition:
    """An immutable, validated board cross-section in feet.

    Build one with :meth:`from_inches` for authoring data or directly with
    points already expressed in feet.  ``thickness`` defaults to the
    measured total height and the groove constants default to zero for
    profiles without a side groove.

    Raises:
        ConfigurationError: If there are fewer than three points, any
            coordinate is not finite, any point lies above the top face
            (``y > 0``) or the polyline is not wound clockwise.
    """

    name: str
    points: Tuple[ProfilePoint, ...]
    thickness: Optional[float] = None
    groove_depth: float = 0.0
    groove_height: float = 0.0
    dimensions: BoardDimensions = field(init=False, compare=False)
    _array: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        pts = tuple(ProfilePoint(float(x), float(y)) for x, y in self.points)
        if len(pts) < 3:
            raise ConfigurationError(
                f"profile {self.name!r} needs at least 3 points, got {len(pts)}"
            )
        for i, (x, y) in enumerate(pts):
            if not (math.isfinite(x) and math.isfinite(y)):
                raise ConfigurationError(
                    f"profile {self.name!r} point {i} is not finite: ({x}, {y})"
                )
            if y > 0.0:
                raise ConfigurationError(
                    f"profile {self.name!r} point {i} lies above the top face (y={y})"
                )
        area = signed_area(pts)
        if area == 0.0:
            raise ConfigurationError(f"profile {self.name!r} encloses no area")
        if area > 0.0:
            raise ConfigurationError(
                f"profile {self.name!r} is wound counter-clockwise; "
                "side walls would face inward"
            )

        arr = np.array(pts, dtype=np.float64)
        arr.setflags(write=False)
        xs = arr[:, 0]
        ys = arr[:, 1]
        total_height = float(ys.max() - ys.min())
        thickness = total_height if self.thickness is None else float(self.thickness)
        for label, value in (
            ("thickness", thickness),
            ("groove_depth", self.groove_depth),
            ("groove_height", self.groove_height),
        ):
            if not math.isfinite(value) or value < 0.0:
                raise ConfigurationError(f"profile {self.name!r} has invalid {label}: {value}")

        dims = BoardDimensions(
            width=float(xs.max() - xs.min()),
            thickness=thickness,
            total_height=total_height,
            groove_depth=float(self.groove_depth),
            groove_height=float(self.groove_height),
        )
        # frozen dataclass: normalised and derived values are set once here
        object.__setattr__(self, "points", pts)
        object.__setattr__(self, "thickness", thickness)
        object.__setattr__(self, "dimensions", dims)
        object.__setattr__(self, "_array", arr)

    @classmethod
    def from_inches(
        cls,
        name: str,
        points_in: Iterable[Tuple[float, float]],
        thickness_in: Optional[float] = None,
        groove_depth_in: float = 0.0,
        groove_height_in: float = 0.0,
    ) -> "ProfileDefinition":
        """Build a profile from authoring data measured in inches."""
        pts = tuple(
            ProfilePoint(inches_to_feet(x), inches_to_feet(y)) for x, y in points_in
        )
        return cls(
            name=name,
            points=pts,
            thickness=None if thickness_in is None else inches_to_feet(thickness_in),
            groove_depth=inches_to_feet(groove_depth_in),
            groove_height=inches_to_feet(groove_height_in),
        )

    @property
    def point_count(self) -> int:
        return len(self.points)

    @property
    def min_x(self) -> float:
        return float(self._array[:, 0].min())

    @property
    def signed_area(self) -> float:
        return signed_area(self.points)

    def as_array(self) -> np.ndarray:
        """Return the points as a read-only ``(N, 2)`` float64 array."""
        return self._array

    def fingerprint(self) -> str:
        """Return a stable SHA-256 hex digest of the point data.

        Two profiles with the same points in the same order share a
        fingerprint regardless of their names, which makes it suitable as
        a cache key component.
        """
        data = np.ascontiguousarray(self._array, dtype="<f8").tobytes()
        return hashlib.sha256(data).hexdigest()
