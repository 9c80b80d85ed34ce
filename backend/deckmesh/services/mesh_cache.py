"""
Mesh cache serialization utilities.

This module saves and loads board meshes to/from disk using compressed
NumPy archives (``.npz``).  Buffers are stored with explicit dtypes:
float64 for positions, texture coordinates and normals and uint32 for
indices, so a mesh read back is bit-identical to the one written.
Material groups are stored as parallel ``group_starts``,
``group_counts`` and ``group_slots`` arrays.
"""

from __future__ import annotations

import os
import tempfile
import zipfile
import zlib
from pathlib import Path

import numpy as np

from .extrusion import INDEX_DTYPE, POSITION_DTYPE, Mesh, MeshGroup

_REQUIRED_KEYS = {
    "positions",
    "uvs",
    "normals",
    "indices",
    "group_starts",
    "group_counts",
    "group_slots",
    "length",
}


def save_mesh_cache(path: Path, mesh: Mesh) -> None:
    """Write ``mesh`` to a compressed ``.npz`` file.

    The archive is written to a temporary file in the same directory and
    then renamed onto ``path``, so readers never see a partial file.

    Args:
        path: Destination file path.  Parent directories are not
            created; callers should ensure the directory exists.
        mesh: Mesh to store.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=path.name, suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            np.savez_compressed(
                fh,
                positions=np.asarray(mesh.positions, dtype=POSITION_DTYPE),
                uvs=np.asarray(mesh.uvs, dtype=POSITION_DTYPE),
                normals=np.asarray(mesh.normals, dtype=POSITION_DTYPE),
                indices=np.asarray(mesh.indices, dtype=INDEX_DTYPE),
                group_starts=np.array([g.start for g in mesh.groups], dtype=np.int64),
                group_counts=np.array([g.count for g in mesh.groups], dtype=np.int64),
                group_slots=np.array([g.material_slot for g in mesh.groups], dtype=np.str_),
                length=np.array(mesh.length, dtype=np.float64),
            )
        os.replace(tmp_name, path)
    except Exception:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _read_archive(path: Path):
    with np.load(path, allow_pickle=False) as data:
        if not _REQUIRED_KEYS.issubset(data.files):
            missing = _REQUIRED_KEYS - set(data.files)
            raise ValueError(f"Mesh cache file is missing fields: {sorted(missing)}")
        arrays = {
            "positions": data["positions"].astype(POSITION_DTYPE),
            "uvs": data["uvs"].astype(POSITION_DTYPE),
            "normals": data["normals"].astype(POSITION_DTYPE),
            "indices": data["indices"].astype(INDEX_DTYPE),
        }
        groups = tuple(
            MeshGroup(start=int(start), count=int(count), material_slot=str(slot))
            for start, count, slot in zip(
                data["group_starts"], data["group_counts"], data["group_slots"]
            )
        )
        length = float(data["length"])
    return arrays, groups, length


def load_mesh_cache(path: Path) -> Mesh:
    """Load a mesh from a compressed ``.npz`` file.

    Raises:
        FileNotFoundError: If the specified path does not exist.
        ValueError: If the archive is truncated or corrupt, or does not
            contain the expected fields.
    """
    if not path.exists():
        raise FileNotFoundError(f"Mesh cache file not found: {path}")
    try:
        arrays, groups, length = _read_archive(path)
    except (zipfile.BadZipFile, EOFError, zlib.error) as exc:
        raise ValueError(f"Mesh cache file is corrupt: {path}: {exc}") from exc
    for arr in arrays.values():
        arr.setflags(write=False)
    return Mesh(groups=groups, length=length, **arrays)
