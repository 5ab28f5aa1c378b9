"""
Entry point for the perimeter function service.

Running this script with ``python run.py`` starts the FastAPI server
defined in ``backend/perimeter/main.py`` after adjusting the Python
path to include the backend directory.
"""

from __future__ import annotations

import sys
from pathlib import Path

import logging
import uvicorn

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """Run the Uvicorn server hosting the perimeter function API."""
    # Make ``perimeter`` importable without installing the package.
    backend_dir = Path(__file__).resolve().parent / "backend"
    if str(backend_dir) not in sys.path:
        sys.path.append(str(backend_dir))

    # Import inside main() to avoid modifying sys.path at import time.
    from perimeter.main import app  # type: ignore

    # Bind to all interfaces on port 8000 by default.
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
