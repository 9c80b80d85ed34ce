"""
Entry point for the deckmesh backend.

Running this script with ``python run.py`` starts the FastAPI server that
serves board profiles and board meshes.  The application defined in
``backend/deckmesh/main.py`` is imported after adjusting the Python path
to include the backend directory.
"""

from __future__ import annotations

import sys
from pathlib import Path

import logging
import uvicorn


def main() -> None:
    """Run the Uvicorn server hosting the deckmesh application."""
    # Make ``deckmesh`` importable when running from a source checkout.
    backend_dir = Path(__file__).resolve().parent / "backend"
    if str(backend_dir) not in sys.path:
        sys.path.append(str(backend_dir))

    from deckmesh.services import config  # type: ignore

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Import the FastAPI application.  We import inside main() to avoid
    # modifying sys.path at module import time.
    from deckmesh.main import app  # type: ignore

    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
