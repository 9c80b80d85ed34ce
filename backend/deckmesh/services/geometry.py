"""
Board mesh service for the deckmesh backend.

This module sits between the HTTP routes and the pure extrusion builder.
It answers "give me the mesh for a board of this length" and takes care
of the caching that the builder deliberately does not do:

1. an in-memory LRU of recent meshes (:mod:`.board_cache`),
2. a disk cache of ``.npz`` files (:mod:`.mesh_cache`) indexed in SQLite
   (:mod:`.mesh_store`),
3. otherwise a fresh :func:`~.extrusion.extrude_profile` call, whose
   result is written back to both caches.

Cached meshes are bit-identical to freshly generated ones, so callers
cannot tell which path served them.

Functions defined here:

- ``get_board_mesh(length_ft, profile)`` – return the ``Mesh`` for a board.
- ``precompute_board_meshes(lengths_ft, profile)`` – warm the caches,
  typically for the standard stock lengths, from a background task.
- ``mesh_to_response(mesh, profile)`` – convert a ``Mesh`` to the API
  schema.
- ``profile_to_response(profile)`` – describe a profile for the API.
"""

from __future__ import annotations

import hashlib
import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional

from . import config
from .board_cache import BoardMeshKey, get_board_mesh_from_cache, put_board_mesh_in_cache
from .board_profile import BOARD_GAP_FT, STANDARD_LENGTHS_FT, TRUEGRAIN_PROFILE
from .errors import DeckMeshError
from .extrusion import Mesh, extrude_profile, validate_length
from .mesh_cache import load_mesh_cache, save_mesh_cache
from .mesh_store import (
    BoardMeshRecord,
    get_board_mesh_record,
    list_board_mesh_records,
    upsert_board_mesh_record,
)
from .profile import ProfileDefinition

from ..api.models import (
    BoardDimensionsInfo,
    BoardMeshResponse,
    MeshBBox,
    MeshGroupInfo,
    ProfilePointInfo,
    ProfileResponse,
)

logger = logging.getLogger(__name__)


def mesh_file_path(profile: ProfileDefinition, length_ft: float) -> Path:
    """Return the ``.npz`` path used to persist a profile/length mesh."""
    digest = hashlib.sha256(f"{profile.fingerprint()}:{length_ft!r}".encode("utf-8")).hexdigest()
    return config.MESH_STORAGE_DIR / f"{profile.name}-{digest[:16]}.npz"


def _load_persisted_mesh(profile: ProfileDefinition, length_ft: float) -> Optional[Mesh]:
    record = get_board_mesh_record(profile.fingerprint(), length_ft)
    if record is None:
        return None
    try:
        mesh = load_mesh_cache(Path(record.mesh_path))
    except (OSError, ValueError):
        logger.exception(
            "Failed to load cached mesh for %s @ %.4f ft from %s; regenerating",
            profile.name,
            length_ft,
            record.mesh_path,
        )
        return None
    logger.debug("Disk cache hit for %s @ %.4f ft", profile.name, length_ft)
    return mesh


def _persist_mesh(profile: ProfileDefinition, mesh: Mesh) -> Optional[BoardMeshRecord]:
    path = mesh_file_path(profile, mesh.length)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        save_mesh_cache(path, mesh)
    except OSError:
        logger.exception("Failed to write mesh cache file %s", path)
        return None
    bbox_min, bbox_max = mesh.bounding_box()
    record = BoardMeshRecord(
        profile_name=profile.name,
        profile_fingerprint=profile.fingerprint(),
        length_ft=mesh.length,
        mesh_path=str(path),
        vertex_count=mesh.vertex_count,
        triangle_count=mesh.triangle_count,
        bbox_min_x=bbox_min[0],
        bbox_min_y=bbox_min[1],
        bbox_min_z=bbox_min[2],
        bbox_max_x=bbox_max[0],
        bbox_max_y=bbox_max[1],
        bbox_max_z=bbox_max[2],
    )
    return upsert_board_mesh_record(record)


def get_board_mesh(
    length_ft: float,
    profile: ProfileDefinition = TRUEGRAIN_PROFILE,
    use_disk_cache: bool = True,
) -> Mesh:
    """Return the mesh for one board of ``profile`` cut to ``length_ft``.

    Args:
        length_ft: Run length in feet.
        profile: Cross-section to extrude; the TrueGrain board by default.
        use_disk_cache: Consult and populate the on-disk cache as well as
            the in-memory one.

    Raises:
        InvalidDimension: If ``length_ft`` is not a finite positive number.
    """
    length_ft = validate_length(length_ft)
    key = BoardMeshKey(profile_fingerprint=profile.fingerprint(), length_ft=length_ft)
    mesh = get_board_mesh_from_cache(key)
    if mesh is not None:
        logger.debug("Memory cache hit for %s @ %.4f ft", profile.name, length_ft)
        return mesh

    if use_disk_cache:
        mesh = _load_persisted_mesh(profile, length_ft)
        if mesh is not None:
            put_board_mesh_in_cache(key, mesh)
            return mesh

    start = time.perf_counter()
    mesh = extrude_profile(profile, length_ft)
    logger.info(
        "Generated %s board mesh @ %.4f ft: %d vertices, %d triangles in %.2f ms",
        profile.name,
        length_ft,
        mesh.vertex_count,
        mesh.triangle_count,
        (time.perf_counter() - start) * 1000.0,
    )
    if use_disk_cache:
        _persist_mesh(profile, mesh)
    put_board_mesh_in_cache(key, mesh)
    return mesh


def precompute_board_meshes(
    lengths_ft: Optional[Iterable[float]] = None,
    profile: ProfileDefinition = TRUEGRAIN_PROFILE,
) -> int:
    """Generate and cache meshes for several lengths.

    Intended to run as a background task.  A bad length is logged and
    skipped so the remaining lengths are still processed.

    Returns:
        Number of meshes that are now cached.
    """
    lengths = list(STANDARD_LENGTHS_FT if lengths_ft is None else lengths_ft)
    done = 0
    for length in lengths:
        try:
            get_board_mesh(length, profile)
        except DeckMeshError as exc:
            logger.warning("Skipping precompute for %s @ %r: %s", profile.name, length, exc)
            continue
        done += 1
    logger.info("Precomputed %d/%d %s board meshes", done, len(lengths), profile.name)
    return done


def mesh_to_response(mesh: Mesh, profile: ProfileDefinition = TRUEGRAIN_PROFILE) -> BoardMeshResponse:
    """Convert a ``Mesh`` to its JSON response schema."""
    bbox_min, bbox_max = mesh.bounding_box()
    return BoardMeshResponse(
        profileName=profile.name,
        lengthFt=mesh.length,
        vertices=mesh.positions.tolist(),
        uvs=mesh.uvs.tolist(),
        normals=mesh.normals.tolist(),
        indices=mesh.indices.tolist(),
        groups=[
            MeshGroupInfo(start=g.start, count=g.count, materialSlot=g.material_slot)
            for g in mesh.groups
        ],
        bbox=MeshBBox(min=list(bbox_min), max=list(bbox_max)),
        vertexCount=mesh.vertex_count,
        triangleCount=mesh.triangle_count,
    )


def profile_to_response(profile: ProfileDefinition = TRUEGRAIN_PROFILE) -> ProfileResponse:
    """Describe ``profile`` and the board layout constants."""
    dims = profile.dimensions
    return ProfileResponse(
        name=profile.name,
        pointCount=profile.point_count,
        points=[ProfilePointInfo(x=p.x, y=p.y) for p in profile.points],
        dimensions=BoardDimensionsInfo(
            widthFt=dims.width,
            thicknessFt=dims.thickness,
            totalHeightFt=dims.total_height,
            grooveDepthFt=dims.groove_depth,
            grooveHeightFt=dims.groove_height,
        ),
        gapFt=BOARD_GAP_FT,
        pitchFt=dims.width + BOARD_GAP_FT,
        standardLengthsFt=list(STANDARD_LENGTHS_FT),
    )


def list_cached_board_meshes() -> List[BoardMeshRecord]:
    return list_board_mesh_records()
