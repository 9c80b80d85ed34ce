"""
Simple in‑memory caching layer for board meshes.

A deck is mostly boards of a handful of stock lengths, so regenerating
the same mesh for every board is wasted work.  This module keeps the
most recently used meshes keyed by ``BoardMeshKey``, which identifies a
mesh by its profile fingerprint and run length.  The extrusion builder
itself stays pure; caching is a concern of the callers that place boards.

The cache is implemented as an ``OrderedDict`` to provide
least‑recently‑used (LRU) eviction.  When the number of cached entries
exceeds the configured capacity the oldest entry is dropped.  Cached
meshes are read-only so sharing one instance between boards is safe.

Usage::

    from .board_cache import BoardMeshKey, get_board_mesh_from_cache, put_board_mesh_in_cache
    key = BoardMeshKey(profile_fingerprint=profile.fingerprint(), length_ft=16.0)
    mesh = get_board_mesh_from_cache(key)
    if mesh is None:
        mesh = extrude_profile(profile, 16.0)
        put_board_mesh_in_cache(key, mesh)

"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from threading import RLock
from typing import Optional

from . import config
from .extrusion import Mesh


@dataclass(frozen=True)
class BoardMeshKey:
    """Unique identifier for a cached board mesh.

    Attributes:
        profile_fingerprint: ``ProfileDefinition.fingerprint()`` of the
            extruded profile.
        length_ft: Run length in feet.
    """

    profile_fingerprint: str
    length_ft: float


# A reentrant lock protects the dictionary to allow safe concurrent access
# from request handlers and background precompute tasks.
_cache: "OrderedDict[BoardMeshKey, Mesh]" = OrderedDict()
_lock = RLock()
MAX_CACHE_ENTRIES: int = config.MEMORY_CACHE_ENTRIES


def get_board_mesh_from_cache(key: BoardMeshKey) -> Optional[Mesh]:
    """Return the cached mesh for ``key`` or ``None``."""
    with _lock:
        mesh = _cache.get(key)
        if mesh is not None:
            # Move the key to the end to mark it as recently used
            _cache.move_to_end(key)
        return mesh


def put_board_mesh_in_cache(key: BoardMeshKey, mesh: Mesh) -> None:
    """Store a mesh, evicting the least recently used entry when full."""
    with _lock:
        _cache[key] = mesh
        _cache.move_to_end(key)
        while len(_cache) > MAX_CACHE_ENTRIES:
            _cache.popitem(last=False)


def clear_board_mesh_cache() -> None:
    with _lock:
        _cache.clear()


def board_mesh_cache_size() -> int:
    with _lock:
        return len(_cache)
