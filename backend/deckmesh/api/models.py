"""
Pydantic data models for the deckmesh API.

These models define the shapes of requests and responses used by the
backend.  Field names are camelCase because the consumers are browser
scene code that binds the buffers directly.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class MeshBBox(BaseModel):
    """Axis‑aligned bounding box for a mesh."""

    min: List[float] = Field(..., description="Minimum x, y, z coordinates of the mesh")
    max: List[float] = Field(..., description="Maximum x, y, z coordinates of the mesh")


class MeshGroupInfo(BaseModel):
    """A contiguous index range rendered with one material."""

    start: int = Field(..., description="First index of the group in the index buffer")
    count: int = Field(..., description="Number of indices in the group")
    materialSlot: str = Field(..., description="Material slot the group is drawn with ('side' or 'cap')")


class BoardMeshResponse(BaseModel):
    """Response returned for a board mesh request."""

    profileName: str = Field(..., description="Name of the extruded cross-section profile")
    lengthFt: float = Field(..., description="Run length of the board in feet")
    vertices: List[float] = Field(..., description="Flat list of vertex positions (x, y, z …)")
    uvs: List[float] = Field(..., description="Flat list of texture coordinates (u, v …)")
    normals: List[float] = Field(..., description="Flat list of vertex normals (x, y, z …)")
    indices: List[int] = Field(..., description="Index buffer defining the mesh triangles")
    groups: List[MeshGroupInfo] = Field(..., description="Material groups partitioning the index buffer")
    bbox: MeshBBox = Field(..., description="Bounding box around the mesh")
    vertexCount: int = Field(..., description="Number of vertices")
    triangleCount: int = Field(..., description="Number of triangles")


class ProfilePointInfo(BaseModel):
    """Single point of a cross-section, in feet."""

    x: float
    y: float


class BoardDimensionsInfo(BaseModel):
    """Dimensional constants of a board profile, in feet."""

    widthFt: float
    thicknessFt: float
    totalHeightFt: float
    grooveDepthFt: float
    grooveHeightFt: float


class ProfileResponse(BaseModel):
    """Description of the board profile and layout constants."""

    name: str = Field(..., description="Profile name")
    pointCount: int = Field(..., description="Number of points in the closed polyline")
    points: List[ProfilePointInfo] = Field(..., description="Cross-section points in feet, clockwise")
    dimensions: BoardDimensionsInfo
    gapFt: float = Field(..., description="Gap between neighbouring boards")
    pitchFt: float = Field(..., description="Centre-to-centre spacing of boards (width + gap)")
    standardLengthsFt: List[float] = Field(..., description="Stock board lengths")


class PrecomputeRequest(BaseModel):
    """Request body for warming the board mesh caches."""

    lengthsFt: Optional[List[float]] = Field(
        default=None,
        description="Board lengths to precompute.  Defaults to the standard stock lengths.",
    )


class PrecomputeResponse(BaseModel):
    """Acknowledgement for a scheduled precompute job."""

    scheduled: List[float] = Field(..., description="Lengths queued for precomputation")


class CachedMeshInfo(BaseModel):
    """Summary of a board mesh persisted in the disk cache."""

    profileName: str
    lengthFt: float
    vertexCount: int
    triangleCount: int
    bbox: MeshBBox
    createdAt: datetime
