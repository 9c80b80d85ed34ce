"""
Profile extrusion mesh builder.

This module turns a :class:`~.profile.ProfileDefinition` and a run length
into a render-ready triangle mesh.  The profile is swept along the z axis
from ``-length/2`` (near plane) to ``+length/2`` (far plane).

Vertex layout
-------------
For a profile of ``N`` points the mesh has exactly ``4N`` vertices in four
rings of ``N``, one vertex per profile point, in this order:

========  ============  =========
ring      index range   z
========  ============  =========
near-side ``[0, N)``    ``-L/2``
far-side  ``[N, 2N)``   ``+L/2``
near-cap  ``[2N, 3N)``  ``-L/2``
far-cap   ``[3N, 4N)``  ``+L/2``
========  ============  =========

Ring isolation for shading discontinuity: the cap rings sit at exactly the
same positions as the side rings but are separate vertices.  Vertex
normals are averaged over the triangles that share a vertex, so isolating
the caps keeps their normals flat (pure ±z) while the side walls stay
smoothly shaded.  Merging the rings would visibly round off the cut ends
of the board, so no deduplication is ever applied.

Index layout
------------
Side-wall triangles come first (``6N`` indices) followed by the two cap
fans (``6(N-2)`` indices).  The mesh records one group per block: group 0
maps to the ``"side"`` material slot and group 1 to ``"cap"``.

The builder is a pure function of its inputs.  It keeps no state, does no
caching and returns fresh read-only arrays, so identical inputs always
produce byte-identical buffers.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import InvalidDimension, InvalidTopology
from .profile import ProfileDefinition

logger = logging.getLogger(__name__)

SIDE_MATERIAL = "side"
CAP_MATERIAL = "cap"

# Ring order within the vertex buffer.
NEAR_SIDE_RING = 0
FAR_SIDE_RING = 1
NEAR_CAP_RING = 2
FAR_CAP_RING = 3
RING_COUNT = 4

POSITION_DTYPE = np.float64
INDEX_DTYPE = np.uint32


@dataclass(frozen=True)
class MeshGroup:
    """A contiguous index-buffer range drawn with one material."""

    start: int
    count: int
    material_slot: str

    @property
    def end(self) -> int:
        return self.start + self.count


@dataclass(frozen=True, eq=False)
class Mesh:
    """Flat vertex/index buffers plus material groups for one extruded solid.

    Attributes:
        positions: ``(4N * 3,)`` float64 array of x, y, z triplets.
        uvs: ``(4N * 2,)`` float64 array of u, v pairs.
        normals: ``(4N * 3,)`` float64 array of unit vertex normals.
        indices: ``(6N + 6(N-2),)`` uint32 triangle index buffer.
        groups: Ordered groups partitioning ``indices``.
        length: Extrusion length the mesh was built for.
    """

    positions: np.ndarray
    uvs: np.ndarray
    normals: np.ndarray
    indices: np.ndarray
    groups: Tuple[MeshGroup, ...]
    length: float

    @property
    def vertex_count(self) -> int:
        return self.positions.size // 3

    @property
    def triangle_count(self) -> int:
        return self.indices.size // 3

    @property
    def ring_size(self) -> int:
        return self.vertex_count // RING_COUNT

    def ring(self, ring: int) -> np.ndarray:
        """Return the ``(N, 3)`` positions of one ring."""
        n = self.ring_size
        return self.positions.reshape(-1, 3)[ring * n : (ring + 1) * n]

    def group(self, material_slot: str) -> MeshGroup:
        for grp in self.groups:
            if grp.material_slot == material_slot:
                return grp
        raise KeyError(material_slot)

    def group_indices(self, material_slot: str) -> np.ndarray:
        grp = self.group(material_slot)
        return self.indices[grp.start : grp.end]

    def bounding_box(self) -> Tuple[Tuple[float, float, float], Tuple[float, float, float]]:
        """Return ``(min_xyz, max_xyz)`` of the vertex positions."""
        pts = self.positions.reshape(-1, 3)
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        return (
            (float(lo[0]), float(lo[1]), float(lo[2])),
            (float(hi[0]), float(hi[1]), float(hi[2])),
        )


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def validate_length(length: float) -> float:
    """Return ``length`` as a float, or raise ``InvalidDimension``."""
    try:
        value = float(length)
    except (TypeError, ValueError) as exc:
        raise InvalidDimension(f"extrusion length must be a number, got {length!r}") from exc
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidDimension(f"extrusion length must be finite and > 0, got {value}")
    return value


def generate_rings(profile: ProfileDefinition, length: float) -> Tuple[np.ndarray, np.ndarray]:
    """Generate the four vertex rings for ``profile`` swept over ``length``.

    Args:
        profile: Cross-section to extrude.
        length: Run length along z; must be finite and positive.

    Returns:
        ``(positions, uvs)`` with shapes ``(4N, 3)`` and ``(4N, 2)``.  U is
        the point's x normalised across the profile width so it spans
        ``[0, 1]``; V is 0 on near rings and 1 on far rings.

    Raises:
        InvalidDimension: If ``length`` is not a finite positive number.
    """
    length = validate_length(length)
    pts = profile.as_array()
    n = pts.shape[0]
    half = length / 2.0
    z_near = -half
    z_far = half

    # near-side, far-side, near-cap, far-cap
    ring_z = np.array([z_near, z_far, z_near, z_far], dtype=POSITION_DTYPE)
    ring_v = np.array([0.0, 1.0, 0.0, 1.0], dtype=POSITION_DTYPE)

    positions = np.empty((RING_COUNT, n, 3), dtype=POSITION_DTYPE)
    positions[:, :, 0] = pts[:, 0]
    positions[:, :, 1] = pts[:, 1]
    positions[:, :, 2] = ring_z[:, None]

    u = (pts[:, 0] - profile.min_x) / profile.dimensions.width
    uvs = np.empty((RING_COUNT, n, 2), dtype=POSITION_DTYPE)
    uvs[:, :, 0] = u
    uvs[:, :, 1] = ring_v[:, None]

    return positions.reshape(-1, 3), uvs.reshape(-1, 2)


def _check_ring_size(n: int) -> None:
    if n < 3:
        raise InvalidTopology(f"cannot triangulate a polygon with {n} points")


def build_side_indices(n: int) -> np.ndarray:
    """Return the ``6N`` side-wall indices joining the near and far side rings.

    Each profile edge ``i -> j`` (``j = (i + 1) % N``) becomes the quad
    ``(i, N+i, N+j, j)`` split into triangles ``(i, N+i, N+j)`` and
    ``(i, N+j, j)``.  With a clockwise profile these face outward.
    """
    _check_ring_size(n)
    i = np.arange(n, dtype=np.int64)
    j = (i + 1) % n
    tris = np.stack([i, n + i, n + j, i, n + j, j], axis=1)
    return tris.reshape(-1).astype(INDEX_DTYPE)


def build_cap_indices(n: int) -> np.ndarray:
    """Return the ``6(N-2)`` end-cap indices as two triangle fans.

    Both fans pivot on the first vertex of their ring.  The near cap
    (ring offset ``2N``) emits ``(p, p+k, p+k+1)`` for ``k`` in
    ``[1, N-2]`` and faces -z; the far cap (offset ``3N``) emits the same
    triangles reversed and faces +z.  The near fan is written first.

    Fans only cover the polygon cleanly when the pivot sees the whole
    interior.  The grooved TrueGrain profile does not: a few fan triangles
    over the side-groove mouths are back-facing slivers.  Their signed
    areas still sum to the cap area, but the averaged normals of some cap
    vertices near the grooves come out as +z on the near cap and -z on the
    far cap.  Every cap normal stays on the z axis; renderers that need
    consistent cap shading should use a flat material or face normals.
    """
    _check_ring_size(n)
    k = np.arange(1, n - 1, dtype=np.int64)
    near = NEAR_CAP_RING * n
    far = FAR_CAP_RING * n
    pivot = np.zeros_like(k)
    near_fan = np.stack([near + pivot, near + k, near + k + 1], axis=1)
    far_fan = np.stack([far + k + 1, far + k, far + pivot], axis=1)
    return np.concatenate([near_fan.reshape(-1), far_fan.reshape(-1)]).astype(INDEX_DTYPE)


def compute_vertex_normals(positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """Return unit per-vertex normals for an indexed triangle mesh.

    Unnormalised face normals (so larger triangles weigh more) are summed
    into each vertex of the face and the sums normalised.  Vertices not
    referenced by any non-degenerate face get a zero normal.

    Args:
        positions: ``(V, 3)`` vertex positions.
        indices: Flat triangle index buffer.

    Returns:
        ``(V, 3)`` float64 array.
    """
    pts = np.asarray(positions, dtype=POSITION_DTYPE).reshape(-1, 3)
    tris = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
    a = pts[tris[:, 0]]
    b = pts[tris[:, 1]]
    c = pts[tris[:, 2]]
    face_normals = np.cross(b - a, c - a)

    normals = np.zeros_like(pts)
    for corner in range(3):
        np.add.at(normals, tris[:, corner], face_normals)

    lengths = np.linalg.norm(normals, axis=1)
    nonzero = lengths > 0.0
    normals[nonzero] /= lengths[nonzero, None]
    return normals


def assemble_mesh(
    positions: np.ndarray,
    uvs: np.ndarray,
    side_indices: np.ndarray,
    cap_indices: np.ndarray,
    length: float,
) -> Mesh:
    """Concatenate side and cap indices and record their material groups.

    No vertices are merged and no indices are compacted.
    """
    side_count = int(side_indices.size)
    cap_count = int(cap_indices.size)
    indices = np.concatenate([side_indices, cap_indices]).astype(INDEX_DTYPE)
    groups = (
        MeshGroup(start=0, count=side_count, material_slot=SIDE_MATERIAL),
        MeshGroup(start=side_count, count=cap_count, material_slot=CAP_MATERIAL),
    )
    normals = compute_vertex_normals(positions, indices)
    return Mesh(
        positions=_readonly(np.ascontiguousarray(positions, dtype=POSITION_DTYPE).reshape(-1)),
        uvs=_readonly(np.ascontiguousarray(uvs, dtype=POSITION_DTYPE).reshape(-1)),
        normals=_readonly(normals.reshape(-1)),
        indices=_readonly(indices),
        groups=groups,
        length=float(length),
    )


def extrude_profile(profile: ProfileDefinition, length: float) -> Mesh:
    """Build the mesh of one board of ``profile`` cut to ``length``.

    Raises:
        InvalidDimension: If ``length`` is not a finite positive number.
        InvalidTopology: If the profile has fewer than three points.
    """
    length = validate_length(length)
    positions, uvs = generate_rings(profile, length)
    n = profile.point_count
    side = build_side_indices(n)
    cap = build_cap_indices(n)
    mesh = assemble_mesh(positions, uvs, side, cap, length)
    logger.debug(
        "extrude_profile(%s, %.4f): %d vertices, %d side + %d cap indices",
        profile.name,
        mesh.length,
        mesh.vertex_count,
        side.size,
        cap.size,
    )
    return mesh
