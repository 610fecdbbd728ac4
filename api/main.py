"""
jsonstash - FastAPI Application

Main entry point for the API server.
Environment-agnostic: configuration reads from settings (config.yml + env).

Run with:
    python -m api.main
    uvicorn api.main:create_app --factory
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from jsonstash.logging_setup import setup_logging
from jsonstash.settings import Settings, get_settings
from api.dependencies import AppState, lifespan_handler
from api.errors import register_exception_handlers
from api.repositories.base import BaseRepository
from api.routers import health, items

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[BaseRepository] = None,
) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        settings: Configuration (defaults to get_settings(), i.e. config.yml + env)
        repository: Durable item storage (defaults to files under settings.data_dir)

    Returns:
        Configured FastAPI application instance
    """
    cfg = settings or get_settings()
    setup_logging(cfg.log_level)

    app = FastAPI(
        title="jsonstash",
        description="Store, fetch and expire arbitrary JSON documents",
        version=VERSION,
        lifespan=lifespan_handler  # Starts/stops the retention sweeper
    )
    app.state.jsonstash = AppState(cfg, repository=repository)

    # CORS configuration from settings
    logger.info(f"Configuring CORS with origins: {cfg.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url} -> {response.status_code}")
        return response

    register_exception_handlers(app)

    # Mount routers
    app.include_router(items.router, prefix="/json", tags=["items"])
    app.include_router(health.router, prefix="/health", tags=["health"])

    @app.get("/")
    async def root():
        """Root endpoint - API info"""
        return {
            "name": "jsonstash",
            "version": VERSION,
            "environment": cfg.env,
            "status": "running",
            "docs": "/docs",
            "health": "/health/ready"
        }

    logger.info(f"FastAPI application created (env={cfg.env}, data_dir={cfg.data_dir})")

    return app


if __name__ == "__main__":
    import uvicorn

    cfg = get_settings()
    setup_logging(cfg.log_level)
    logger.info(f"Server running on http://{cfg.server.host}:{cfg.server.port}")
    logger.info(f"Environment: {cfg.env}")
    logger.info(f"Reload: {cfg.server.reload}")

    uvicorn.run(
        "api.main:create_app",
        factory=True,
        host=cfg.server.host,
        port=cfg.server.port,
        reload=cfg.server.reload,
        workers=1,  # The item store lives in process memory
        log_level=cfg.log_level.lower()
    )
