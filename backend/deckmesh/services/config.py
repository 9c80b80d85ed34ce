"""
Runtime configuration for the deckmesh backend.

Values are read once from the environment when this module is first
imported.  Everything has a default so the service runs without any
environment at all.

- ``DECKMESH_STORAGE_DIR`` – directory holding the SQLite index and the
  ``.npz`` mesh files.  Defaults to ``backend/storage``.
- ``DECKMESH_MEMORY_CACHE_ENTRIES`` – capacity of the in-memory board
  mesh cache.
- ``DECKMESH_LOG_LEVEL`` – level passed to ``logging.basicConfig`` by
  ``run.py``.
- ``DECKMESH_HOST`` / ``DECKMESH_PORT`` – address uvicorn binds to.
"""

from __future__ import annotations

import os
from pathlib import Path

# backend/deckmesh/services/config.py -> backend/storage
_DEFAULT_STORAGE_DIR = Path(__file__).resolve().parents[2] / "storage"

STORAGE_DIR: Path = Path(os.environ.get("DECKMESH_STORAGE_DIR", str(_DEFAULT_STORAGE_DIR)))
MESH_STORAGE_DIR: Path = STORAGE_DIR / "meshes"
DATABASE_URL: str = f"sqlite:///{(STORAGE_DIR / 'deckmesh.db').as_posix()}"

MEMORY_CACHE_ENTRIES: int = int(os.environ.get("DECKMESH_MEMORY_CACHE_ENTRIES", "32"))

LOG_LEVEL: str = os.environ.get("DECKMESH_LOG_LEVEL", "INFO").upper()

HOST: str = os.environ.get("DECKMESH_HOST", "0.0.0.0")
PORT: int = int(os.environ.get("DECKMESH_PORT", "8000"))
