"""
Main application module for the deckmesh backend.

This file sets up the FastAPI application, configures CORS so the deck
builder frontend can make cross-origin requests, and exposes a simple
health check endpoint.  The board router is included under the `/api`
namespace.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes_boards import router as boards_router

# init_db creates the mesh cache index tables in SQLite if they do not
# already exist.
from .services.mesh_store import init_db


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="deckmesh")

    @app.on_event("startup")  # type: ignore[misc]
    async def startup_event() -> None:
        init_db()

    # Allow all origins by default.  In production you should restrict
    # this to the domains that host the deck builder.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint for monitoring and deployment probes.
    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(boards_router, prefix="/api", tags=["boards"])

    return app


# Create the application instance.  Uvicorn imports this when running
# `uvicorn deckmesh.main:app` from within the backend directory.
app = create_app()
