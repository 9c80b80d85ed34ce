"""
Tests for the profile extrusion builder.

These cover the buffer sizes and layout, the material group partition,
ring positions and texture coordinates, determinism and the error cases.
They run on plain numpy and need no rendering backend.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from deckmesh.services.board_profile import TRUEGRAIN_PROFILE  # type: ignore
from deckmesh.services.errors import InvalidDimension, InvalidTopology  # type: ignore
from deckmesh.services.extrusion import (  # type: ignore
    CAP_MATERIAL,
    FAR_CAP_RING,
    FAR_SIDE_RING,
    NEAR_CAP_RING,
    NEAR_SIDE_RING,
    SIDE_MATERIAL,
    build_cap_indices,
    build_side_indices,
    extrude_profile,
    generate_rings,
)
from deckmesh.services.profile import ProfileDefinition  # type: ignore

SQUARE = ProfileDefinition(
    name="square", points=[(-0.5, 0.0), (0.5, 0.0), (0.5, -1.0), (-0.5, -1.0)]
)


@pytest.mark.parametrize("profile", [SQUARE, TRUEGRAIN_PROFILE], ids=["square", "truegrain"])
def test_buffer_sizes(profile: ProfileDefinition) -> None:
    n = profile.point_count
    mesh = extrude_profile(profile, 7.5)
    assert mesh.vertex_count == 4 * n
    assert mesh.positions.shape == (4 * n * 3,)
    assert mesh.uvs.shape == (4 * n * 2,)
    assert mesh.normals.shape == (4 * n * 3,)
    assert mesh.group(SIDE_MATERIAL).count == 6 * n
    assert mesh.group(CAP_MATERIAL).count == 6 * (n - 2)
    assert mesh.indices.size == 6 * n + 6 * (n - 2)
    assert mesh.indices.dtype == np.uint32
    assert int(mesh.indices.max()) < 4 * n


def test_groups_partition_index_buffer() -> None:
    mesh = extrude_profile(TRUEGRAIN_PROFILE, 16.0)
    cursor = 0
    for grp in mesh.groups:
        assert grp.start == cursor
        assert grp.count > 0
        cursor = grp.end
    assert cursor == mesh.indices.size
    assert [g.material_slot for g in mesh.groups] == [SIDE_MATERIAL, CAP_MATERIAL]


def test_square_scenario() -> None:
    mesh = extrude_profile(SQUARE, 10.0)
    assert mesh.vertex_count == 16
    assert mesh.indices.size == 36
    side, cap = mesh.groups
    assert (side.start, side.count, side.material_slot) == (0, 24, "side")
    assert (cap.start, cap.count, cap.material_slot) == (24, 12, "cap")

    z = mesh.positions.reshape(-1, 3)[:, 2]
    assert np.all(z[0:4] == -5.0)
    assert np.all(z[8:12] == -5.0)
    assert np.all(z[4:8] == 5.0)
    assert np.all(z[12:16] == 5.0)


def test_side_and_cap_index_patterns() -> None:
    assert build_side_indices(4)[:6].tolist() == [0, 4, 5, 0, 5, 1]
    # last edge wraps back to the first point
    assert build_side_indices(4)[-6:].tolist() == [3, 7, 4, 3, 4, 0]
    assert build_cap_indices(4).tolist() == [
        8, 9, 10,
        8, 10, 11,
        14, 13, 12,
        15, 14, 12,
    ]


def test_cap_rings_duplicate_side_ring_positions() -> None:
    mesh = extrude_profile(TRUEGRAIN_PROFILE, 12.0)
    assert np.array_equal(mesh.ring(NEAR_SIDE_RING), mesh.ring(NEAR_CAP_RING))
    assert np.array_equal(mesh.ring(FAR_SIDE_RING), mesh.ring(FAR_CAP_RING))
    # caps only reference cap-ring vertices, sides only side-ring vertices
    n = TRUEGRAIN_PROFILE.point_count
    assert int(mesh.group_indices(CAP_MATERIAL).min()) >= 2 * n
    assert int(mesh.group_indices(SIDE_MATERIAL).max()) < 2 * n


@pytest.mark.parametrize("length", [0.1, 2.7, 12.0, 20.0])
def test_ring_z_planes_are_exact(length: float) -> None:
    mesh = extrude_profile(TRUEGRAIN_PROFILE, length)
    for ring in (NEAR_SIDE_RING, NEAR_CAP_RING):
        assert np.all(mesh.ring(ring)[:, 2] == -length / 2)
    for ring in (FAR_SIDE_RING, FAR_CAP_RING):
        assert np.all(mesh.ring(ring)[:, 2] == length / 2)


def test_uv_coordinates() -> None:
    n = TRUEGRAIN_PROFILE.point_count
    mesh = extrude_profile(TRUEGRAIN_PROFILE, 12.0)
    uv = mesh.uvs.reshape(4, n, 2)
    assert np.all(uv[:, :, 0] >= 0.0)
    assert np.all(uv[:, :, 0] <= 1.0)
    assert uv[:, :, 0].min() == 0.0
    assert uv[:, :, 0].max() == 1.0
    assert np.all(uv[NEAR_SIDE_RING, :, 1] == 0.0)
    assert np.all(uv[NEAR_CAP_RING, :, 1] == 0.0)
    assert np.all(uv[FAR_SIDE_RING, :, 1] == 1.0)
    assert np.all(uv[FAR_CAP_RING, :, 1] == 1.0)


def test_square_u_is_normalised_x() -> None:
    mesh = extrude_profile(SQUARE, 1.0)
    u = mesh.uvs.reshape(-1, 2)[:4, 0]
    assert u.tolist() == [0.0, 1.0, 1.0, 0.0]


def test_length_changes_only_z() -> None:
    short = extrude_profile(SQUARE, 2.0)
    long = extrude_profile(SQUARE, 4.0)
    assert np.array_equal(short.indices, long.indices)
    assert np.array_equal(short.uvs, long.uvs)
    short_pts = short.positions.reshape(-1, 3)
    long_pts = long.positions.reshape(-1, 3)
    assert np.array_equal(short_pts[:, :2], long_pts[:, :2])
    assert set(short_pts[:, 2].tolist()) == {-1.0, 1.0}
    assert set(long_pts[:, 2].tolist()) == {-2.0, 2.0}
    assert np.array_equal(long_pts[:, 2], short_pts[:, 2] * 2.0)


def test_generation_is_deterministic() -> None:
    a = extrude_profile(TRUEGRAIN_PROFILE, 16.0)
    b = extrude_profile(TRUEGRAIN_PROFILE, 16.0)
    assert a is not b
    assert a.positions.tobytes() == b.positions.tobytes()
    assert a.uvs.tobytes() == b.uvs.tobytes()
    assert a.indices.tobytes() == b.indices.tobytes()
    assert a.normals.tobytes() == b.normals.tobytes()


def test_mesh_buffers_are_read_only() -> None:
    mesh = extrude_profile(SQUARE, 1.0)
    with pytest.raises(ValueError):
        mesh.positions[0] = 1.0
    with pytest.raises(ValueError):
        mesh.indices[0] = 1


@pytest.mark.parametrize("length", [0.0, -1.0, math.inf, math.nan, "long"])
def test_invalid_length_raises(length: object) -> None:
    with pytest.raises(InvalidDimension):
        extrude_profile(SQUARE, length)  # type: ignore[arg-type]
    with pytest.raises(InvalidDimension):
        generate_rings(SQUARE, length)  # type: ignore[arg-type]


@pytest.mark.parametrize("n", [0, 1, 2])
def test_degenerate_topology_raises(n: int) -> None:
    with pytest.raises(InvalidTopology):
        build_side_indices(n)
    with pytest.raises(InvalidTopology):
        build_cap_indices(n)


def test_triangle_is_smallest_valid_profile() -> None:
    tri = ProfileDefinition(name="tri", points=[(-1.0, 0.0), (1.0, 0.0), (0.0, -1.0)])
    mesh = extrude_profile(tri, 3.0)
    assert mesh.vertex_count == 12
    assert mesh.group(SIDE_MATERIAL).count == 18
    assert mesh.group(CAP_MATERIAL).count == 6


def test_bounding_box() -> None:
    mesh = extrude_profile(SQUARE, 10.0)
    assert mesh.bounding_box() == ((-0.5, -1.0, -5.0), (0.5, 0.0, 5.0))
