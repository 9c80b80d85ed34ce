"""
Index of board meshes persisted on disk.

Each generated mesh written to the disk cache gets a ``BoardMeshRecord``
describing where the ``.npz`` file lives together with summary
statistics (vertex and triangle counts, bounding box).  Records are keyed
by profile fingerprint and run length; there is at most one record per
pair.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from sqlmodel import Field, SQLModel, select

from .db import create_db_and_tables, get_session


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BoardMeshRecord(SQLModel, table=True):
    """Database model describing one cached board mesh."""

    id: Optional[int] = Field(default=None, primary_key=True)
    profile_name: str
    profile_fingerprint: str = Field(index=True)
    length_ft: float = Field(index=True)
    mesh_path: str
    vertex_count: int
    triangle_count: int
    bbox_min_x: float
    bbox_min_y: float
    bbox_min_z: float
    bbox_max_x: float
    bbox_max_y: float
    bbox_max_z: float
    created_at: datetime = Field(default_factory=_utcnow)


def init_db() -> None:
    """Initialise the database and create tables if they do not exist."""
    create_db_and_tables()


def get_board_mesh_record(profile_fingerprint: str, length_ft: float) -> Optional[BoardMeshRecord]:
    """Return the record for a profile/length pair, or ``None``."""
    with get_session() as session:
        statement = select(BoardMeshRecord).where(
            BoardMeshRecord.profile_fingerprint == profile_fingerprint,
            BoardMeshRecord.length_ft == length_ft,
        )
        return session.exec(statement).first()


def upsert_board_mesh_record(record: BoardMeshRecord) -> BoardMeshRecord:
    """Insert ``record``, replacing any record for the same profile and length."""
    with get_session() as session:
        statement = select(BoardMeshRecord).where(
            BoardMeshRecord.profile_fingerprint == record.profile_fingerprint,
            BoardMeshRecord.length_ft == record.length_ft,
        )
        existing = session.exec(statement).first()
        if existing is not None:
            session.delete(existing)
            session.commit()
        session.add(record)
        session.commit()
        session.refresh(record)
        return record


def list_board_mesh_records() -> List[BoardMeshRecord]:
    """Return all records ordered by profile and length."""
    with get_session() as session:
        statement = select(BoardMeshRecord).order_by(
            BoardMeshRecord.profile_name, BoardMeshRecord.length_ft
        )
        return list(session.exec(statement))
