"""
Routes for the board profile and board meshes.

This router exposes the built-in profile, per-length board meshes ready
to bind into a scene, and a way to warm the mesh caches for the stock
lengths before a deck is laid out.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, HTTPException, Query

from .models import (
    BoardMeshResponse,
    CachedMeshInfo,
    MeshBBox,
    PrecomputeRequest,
    PrecomputeResponse,
    ProfileResponse,
)
from ..services.board_profile import STANDARD_LENGTHS_FT
from ..services.errors import InvalidDimension
from ..services.geometry import (
    get_board_mesh,
    list_cached_board_meshes,
    mesh_to_response,
    precompute_board_meshes,
    profile_to_response,
)


router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
async def get_profile() -> ProfileResponse:
    """Return the board cross-section and its dimensional constants."""
    return profile_to_response()


@router.get("/boards/mesh", response_model=BoardMeshResponse)
def get_board_mesh_route(
    lengthFt: float = Query(..., description="Board run length in feet"),
) -> BoardMeshResponse:
    """Return the mesh for one board of the given length.

    Raises:
        HTTPException: 422 if the length is not a finite positive number.
    """
    try:
        mesh = get_board_mesh(lengthFt)
    except InvalidDimension as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return mesh_to_response(mesh)


@router.post("/boards/precompute", response_model=PrecomputeResponse, status_code=202)
async def precompute_boards(
    request: PrecomputeRequest,
    background_tasks: BackgroundTasks,
) -> PrecomputeResponse:
    """Schedule mesh generation for several lengths in the background."""
    lengths = list(STANDARD_LENGTHS_FT) if request.lengthsFt is None else list(request.lengthsFt)
    background_tasks.add_task(precompute_board_meshes, lengths)
    return PrecomputeResponse(scheduled=lengths)


@router.get("/boards/cache", response_model=list[CachedMeshInfo])
def list_cached_boards() -> list[CachedMeshInfo]:
    """Return the board meshes currently persisted in the disk cache."""
    result: list[CachedMeshInfo] = []
    for r in list_cached_board_meshes():
        result.append(
            CachedMeshInfo(
                profileName=r.profile_name,
                lengthFt=r.length_ft,
                vertexCount=r.vertex_count,
                triangleCount=r.triangle_count,
                bbox=MeshBBox(
                    min=[r.bbox_min_x, r.bbox_min_y, r.bbox_min_z],
                    max=[r.bbox_max_x, r.bbox_max_y, r.bbox_max_z],
                ),
                createdAt=r.created_at,
            )
        )
    return result
