"""
Interface between generated meshes and a rendering backend.

The geometry code never talks to a graphics API.  A backend instead
implements :class:`MeshSink`, a narrow protocol for loading the flat
buffers of a :class:`~.extrusion.Mesh` and binding one material per
group.  :func:`upload_mesh` drives a sink in a fixed order.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

import numpy as np

from .errors import ConfigurationError
from .extrusion import Mesh

logger = logging.getLogger(__name__)


class MeshSink(Protocol):
    """A rendering backend that consumes mesh buffers."""

    def load_positions(self, buffer: np.ndarray) -> None:
        """Receive the flat x, y, z position buffer."""

    def load_uvs(self, buffer: np.ndarray) -> None:
        """Receive the flat u, v texture coordinate buffer."""

    def load_normals(self, buffer: np.ndarray) -> None:
        """Receive the flat x, y, z vertex normal buffer."""

    def load_indices(self, buffer: np.ndarray) -> None:
        """Receive the flat triangle index buffer."""

    def bind_group(self, start: int, count: int, material: Any) -> None:
        """Draw ``count`` indices from ``start`` with ``material``."""


def upload_mesh(mesh: Mesh, sink: MeshSink, materials: Mapping[str, Any]) -> None:
    """Load ``mesh`` into ``sink`` and bind a material to each of its groups.

    Materials are looked up by group material slot (``"side"``, ``"cap"``).
    All slots are resolved before the sink sees any data, so a missing
    material leaves the sink untouched.

    Raises:
        ConfigurationError: If ``materials`` lacks an entry for a slot.
    """
    missing = [grp.material_slot for grp in mesh.groups if grp.material_slot not in materials]
    if missing:
        raise ConfigurationError(f"no material bound for slot(s): {', '.join(missing)}")

    sink.load_positions(mesh.positions)
    sink.load_uvs(mesh.uvs)
    sink.load_normals(mesh.normals)
    sink.load_indices(mesh.indices)
    for grp in mesh.groups:
        sink.bind_group(grp.start, grp.count, materials[grp.material_slot])
    logger.debug(
        "Uploaded mesh: %d vertices, %d groups", mesh.vertex_count, len(mesh.groups)
    )
