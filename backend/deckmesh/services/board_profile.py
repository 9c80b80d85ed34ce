"""
TrueGrain grooved decking profile.

Cross-section taken from ``Grooved-Chestnut-Decking-Wrapped.DXF``.  The
points below are in inches with ``x`` centred on the board (±2.75") and
``y = 0`` at the top surface, negative downward.  The DXF export repeats
the first point at the end; that duplicate is left out because the
polyline closes implicitly, which leaves 74 points.  They are converted to
feet once, at import, into :data:`TRUEGRAIN_PROFILE`.

The layout constants (gap and pitch) are not used by the mesh generator;
they are exported for board placement code that spaces boards across a
deck.
"""

from __future__ import annotations

from typing import List, Tuple

from .profile import ProfileDefinition, inches_to_feet

PROFILE_NAME = "truegrain-grooved"

# Nominal authoring dimensions, inches.
WIDTH_IN = 5.5
THICKNESS_IN = 1.0
TOTAL_HEIGHT_IN = 1.001
GROOVE_DEPTH_IN = 0.45
GROOVE_HEIGHT_IN = 0.181
GAP_IN = 0.125

# Stock lengths the yard carries, feet.
STANDARD_LENGTHS_FT: Tuple[float, ...] = (12.0, 16.0, 20.0)

PROFILE_IN: List[Tuple[float, float]] = [
    (-2.65, 0.0),
    (2.65, 0.0),
    (2.675882, -0.003407),
    (2.7, -0.013397),
    (2.720711, -0.029289),
    (2.736603, -0.05),
    (2.746593, -0.074118),
    (2.75, -0.1),
    (2.75, -0.3595),
    (2.746194, -0.378634),
    (2.735355, -0.394855),
    (2.719134, -0.405694),
    (2.7, -0.4095),
    (2.35, -0.4095),
    (2.330866, -0.413306),
    (2.314645, -0.424145),
    (2.303806, -0.440366),
    (2.3, -0.4595),
    (2.3, -0.5405),
    (2.303806, -0.559634),
    (2.314645, -0.575855),
    (2.330866, -0.586694),
    (2.35, -0.5905),
    (2.7, -0.5905),
    (2.719134, -0.594306),
    (2.735355, -0.605145),
    (2.746194, -0.621366),
    (2.75, -0.6405),
    (2.75, -0.6829),
    (2.749039, -0.692688),
    (2.746194, -0.702068),
    (2.741573, -0.710712),
    (2.735355, -0.718289),
    (2.467633, -0.986012),
    (2.460056, -0.99223),
    (2.451412, -0.99685),
    (2.442032, -0.999696),
    (2.432278, -1.000656),
    (-2.432278, -1.000656),
    (-2.442032, -0.999696),
    (-2.451412, -0.99685),
    (-2.460056, -0.99223),
    (-2.467633, -0.986012),
    (-2.735355, -0.718289),
    (-2.741573, -0.710712),
    (-2.746194, -0.702068),
    (-2.749039, -0.692688),
    (-2.75, -0.6829),
    (-2.75, -0.6405),
    (-2.746194, -0.621366),
    (-2.735355, -0.605145),
    (-2.719134, -0.594306),
    (-2.7, -0.5905),
    (-2.35, -0.5905),
    (-2.330866, -0.586694),
    (-2.314645, -0.575855),
    (-2.303806, -0.559634),
    (-2.3, -0.5405),
    (-2.3, -0.4595),
    (-2.303806, -0.440366),
    (-2.314645, -0.424145),
    (-2.330866, -0.413306),
    (-2.35, -0.4095),
    (-2.7, -0.4095),
    (-2.719134, -0.405694),
    (-2.735355, -0.394855),
    (-2.746194, -0.378634),
    (-2.75, -0.3595),
    (-2.75, -0.1),
    (-2.746593, -0.074118),
    (-2.736603, -0.05),
    (-2.720711, -0.029289),
    (-2.7, -0.013397),
    (-2.675882, -0.003407),
]

TRUEGRAIN_PROFILE = ProfileDefinition.from_inches(
    PROFILE_NAME,
    PROFILE_IN,
    thickness_in=THICKNESS_IN,
    groove_depth_in=GROOVE_DEPTH_IN,
    groove_height_in=GROOVE_HEIGHT_IN,
)

BOARD_GAP_FT = inches_to_feet(GAP_IN)
BOARD_PITCH_FT = TRUEGRAIN_PROFILE.dimensions.width + BOARD_GAP_FT
