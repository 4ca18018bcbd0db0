"""
NexusAI Placement Platform - Main Application

FastAPI backend with:
- MongoDB as the primary store, SQLite as the local fallback
- Socket.IO channel pushing job events to every connected client
- Built React frontend served from FRONTEND_DIR when present

Run: uvicorn nexusai.main:app --reload
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from nexusai.api.routes import api_router
from nexusai.core.config import Settings, configure_logging, get_settings
from nexusai.core.errors import register_error_handlers
from nexusai.repositories import PlacementRepository, select_repository
from nexusai.schemas.schemas import HealthResponse
from nexusai.services.notifier import JobNotifier

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[PlacementRepository] = None,
    notifier: Optional[JobNotifier] = None
) -> FastAPI:
    """
    Build the application.

    When no repository is given, the backend is resolved once on startup
    and kept for the lifetime of the process.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="NexusAI Placement Platform",
        description="""
        Job placement backend connecting students, colleges and recruiters.

        ## Features
        - **Jobs**: Post, list, update, delete and apply
        - **Users**: Students, colleges and recruiters with their applications
        - **Colleges**: Student roster with application history
        - **Realtime**: Job events over Socket.IO at /socket.io

        ## Databases
        - MongoDB: Primary document store
        - SQLite: Local fallback when MongoDB is unavailable at startup
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.repository = repository
    app.state.notifier = notifier or JobNotifier()

    # CORS middleware (allow all, the frontend may be served elsewhere)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event():
        """Select the persistence backend once."""
        if app.state.repository is None:
            app.state.repository = select_repository(settings)
        logger.info("Active store: %s", app.state.repository.backend_name)

    @app.on_event("shutdown")
    async def shutdown_event():
        if app.state.repository is not None:
            app.state.repository.close()

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        repo = app.state.repository
        return HealthResponse(
            status="healthy",
            backend=repo.backend_name if repo is not None else "unselected"
        )

    mount_frontend(app, settings.frontend_dir)
    return app


def mount_frontend(app: FastAPI, frontend_dir: str) -> None:
    """Serve the built SPA: static assets plus index.html for unknown paths."""
    index_path = os.path.join(frontend_dir, "index.html")
    if not os.path.exists(index_path):
        return

    assets_dir = os.path.join(frontend_dir, "assets")
    if os.path.isdir(assets_dir):
        app.mount("/assets", StaticFiles(directory=assets_dir), name="assets")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        root = os.path.realpath(frontend_dir)
        candidate = os.path.realpath(os.path.join(root, full_path))
        if full_path and candidate.startswith(root + os.sep) and os.path.isfile(candidate):
            return FileResponse(candidate)
        return FileResponse(index_path)


def create_asgi_app(app: FastAPI):
    """Wrap the API so /socket.io/ is answered by the notifier's Socket.IO server."""
    return app.state.notifier.asgi_app(app)


configure_logging(get_settings())
fastapi_app = create_app()
app = create_asgi_app(fastapi_app)
