"""Shared pytest setup: keep the mesh caches out of the source tree."""

import os
import sys
import tempfile
from pathlib import Path

# Must happen before deckmesh.services.config is imported by any test.
os.environ.setdefault("DECKMESH_STORAGE_DIR", tempfile.mkdtemp(prefix="deckmesh-tests-"))

sys.path.append(str(Path(__file__).resolve().parents[1]))
