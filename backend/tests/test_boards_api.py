"""
Tests for the profile and board mesh endpoints.

These tests use FastAPI's TestClient to simulate requests against the
application without running a real server.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add the backend directory to sys.path so we can import the app
sys.path.append(str(Path(__file__).resolve().parents[1]))

from deckmesh.main import app  # type: ignore


@pytest.fixture
def client():
    # The context manager runs the startup hook that creates the tables.
    with TestClient(app) as c:
        yield c


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_profile_endpoint(client: TestClient) -> None:
    resp = client.get("/api/profile")
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "truegrain-grooved"
    assert data["pointCount"] == len(data["points"]) == 74
    assert data["dimensions"]["widthFt"] == pytest.approx(5.5 / 12)
    assert data["pitchFt"] == pytest.approx(data["dimensions"]["widthFt"] + data["gapFt"])
    assert data["standardLengthsFt"] == [12.0, 16.0, 20.0]


def test_board_mesh_endpoint(client: TestClient) -> None:
    resp = client.get("/api/boards/mesh", params={"lengthFt": 10})
    assert resp.status_code == 200
    mesh = resp.json()
    n = 74
    assert mesh["lengthFt"] == 10.0
    assert mesh["vertexCount"] == 4 * n
    assert len(mesh["vertices"]) == 3 * 4 * n
    assert len(mesh["normals"]) == 3 * 4 * n
    assert len(mesh["uvs"]) == 2 * 4 * n
    assert len(mesh["indices"]) == 6 * n + 6 * (n - 2)
    assert mesh["groups"] == [
        {"start": 0, "count": 6 * n, "materialSlot": "side"},
        {"start": 6 * n, "count": 6 * (n - 2), "materialSlot": "cap"},
    ]
    assert mesh["bbox"]["min"][2] == -5.0
    assert mesh["bbox"]["max"][2] == 5.0


@pytest.mark.parametrize("length", ["0", "-2"])
def test_board_mesh_rejects_bad_length(client: TestClient, length: str) -> None:
    resp = client.get("/api/boards/mesh", params={"lengthFt": length})
    assert resp.status_code == 422
    assert "length" in resp.json()["detail"]


def test_precompute_then_list_cache(client: TestClient) -> None:
    resp = client.post("/api/boards/precompute", json={"lengthsFt": [8.0]})
    assert resp.status_code == 202
    assert resp.json() == {"scheduled": [8.0]}
    # TestClient runs background tasks before returning the response
    cached = client.get("/api/boards/cache")
    assert cached.status_code == 200
    entries = [e for e in cached.json() if e["lengthFt"] == 8.0]
    assert len(entries) == 1
    assert entries[0]["profileName"] == "truegrain-grooved"
    assert entries[0]["vertexCount"] == 4 * 74


def test_precompute_defaults_to_standard_lengths(client: TestClient) -> None:
    resp = client.post("/api/boards/precompute", json={})
    assert resp.status_code == 202
    assert resp.json() == {"scheduled": [12.0, 16.0, 20.0]}
