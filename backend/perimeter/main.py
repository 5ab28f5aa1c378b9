"""
Main application module for the perimeter function service.

This file sets up the FastAPI application, configures CORS so a
browser front end can call the API from another origin, mounts the
static front end files when they exist, and exposes a health check.

Routers for polygon perimeter functions and for canonical domains are
included under the `/api` namespace.
"""

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .api.routes_domains import router as domains_router
from .api.routes_polygons import router as polygons_router


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="Perimeter functions")

    # Allow all origins by default.  Restrict this in production.
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

    app.include_router(polygons_router, prefix="/api", tags=["polygons"])
    app.include_router(domains_router, prefix="/api", tags=["domains"])

    # Serve a compiled front end from the repository's frontend directory
    # when one is present.
    frontend_dir = Path(__file__).resolve().parents[2] / "frontend"
    if frontend_dir.exists():
        app.mount(
            "/",
            StaticFiles(directory=str(frontend_dir), html=True),
            name="frontend",
        )

    return app


# Uvicorn imports this instance when running `uvicorn perimeter.main:app`
# from within the backend directory.
app = create_app()
