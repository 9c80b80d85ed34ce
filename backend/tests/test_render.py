"""Tests for driving a rendering backend through the MeshSink protocol."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from deckmesh.services.board_profile import TRUEGRAIN_PROFILE  # type: ignore
from deckmesh.services.errors import ConfigurationError  # type: ignore
from deckmesh.services.extrusion import extrude_profile  # type: ignore
from deckmesh.services.render import upload_mesh  # type: ignore


class RecordingSink:
    """Minimal backend that records every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def load_positions(self, buffer: np.ndarray) -> None:
        self.calls.append(("positions", buffer.size))

    def load_uvs(self, buffer: np.ndarray) -> None:
        self.calls.append(("uvs", buffer.size))

    def load_normals(self, buffer: np.ndarray) -> None:
        self.calls.append(("normals", buffer.size))

    def load_indices(self, buffer: np.ndarray) -> None:
        self.calls.append(("indices", buffer.size))

    def bind_group(self, start: int, count: int, material: object) -> None:
        self.calls.append(("group", start, count, material))


def test_upload_loads_buffers_then_binds_each_group() -> None:
    n = TRUEGRAIN_PROFILE.point_count
    mesh = extrude_profile(TRUEGRAIN_PROFILE, 16.0)
    sink = RecordingSink()
    upload_mesh(mesh, sink, {"side": "wood-texture", "cap": "solid-brown"})
    assert sink.calls == [
        ("positions", 4 * n * 3),
        ("uvs", 4 * n * 2),
        ("normals", 4 * n * 3),
        ("indices", 6 * n + 6 * (n - 2)),
        ("group", 0, 6 * n, "wood-texture"),
        ("group", 6 * n, 6 * (n - 2), "solid-brown"),
    ]


def test_missing_material_leaves_sink_untouched() -> None:
    mesh = extrude_profile(TRUEGRAIN_PROFILE, 16.0)
    sink = RecordingSink()
    with pytest.raises(ConfigurationError, match="cap"):
        upload_mesh(mesh, sink, {"side": "wood-texture"})
    assert sink.calls == []
