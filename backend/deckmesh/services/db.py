"""
Database configuration and session management for the deckmesh backend.

This module defines a SQLModel engine targeting a SQLite database stored
in the configured storage directory.  It exposes helper functions to
initialise the schema and to obtain session objects.  Keeping this in one
place isolates database configuration from the mesh services.
"""

from __future__ import annotations

from sqlmodel import SQLModel, Session, create_engine

from . import config

config.STORAGE_DIR.mkdir(parents=True, exist_ok=True)

# The engine is shared by request handlers and background tasks, so
# SQLite's same-thread check is disabled.
engine = create_engine(
    config.DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
)


def create_db_and_tables() -> None:
    """Create all tables in the database.

    Safe to call repeatedly; existing tables are left alone.
    """
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    """Return a new SQLModel session bound to the engine.

    Use it as a context manager (``with get_session() as session: ...``)
    so the connection is released.
    """
    return Session(engine)
