"""
API Dependencies - Application state and FastAPI dependency injection

One AppState per application instance owns the in-memory item store, the
durable repository and the retention sweeper. It is created by the app
factory and attached to app.state; the lifespan handler starts and stops
the sweeper.
"""

import logging
import secrets
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Depends, Request, Security
from fastapi.security.api_key import APIKeyHeader

from jsonstash.errors import BadRequestError, UnauthorizedError
from jsonstash.io.readers import loads_strict
from jsonstash.retention import RetentionSweeper
from jsonstash.settings import Settings
from jsonstash.store import ItemStore
from api.repositories.base import BaseRepository
from api.repositories.local import LocalFileRepository

logger = logging.getLogger(__name__)


class AppState:
    """
    Application state - holds the two stores and the sweeper.

    One instance shared across all requests of an app.
    """

    def __init__(self, settings: Settings, repository: Optional[BaseRepository] = None):
        self.settings = settings
        self.item_store = ItemStore()
        self.repository: BaseRepository = repository or LocalFileRepository(settings.data_dir)
        self.sweeper = RetentionSweeper(
            repository=self.repository,
            item_store=self.item_store,
            retention_days=settings.retention.days,
            timezone_name=settings.retention.timezone,
        )

        if settings.auth_secret is None:
            logger.warning("No auth header configured: every mutating request will be rejected")

    async def startup(self) -> None:
        if self.settings.retention.enabled:
            self.sweeper.start()
        else:
            logger.info("Retention sweeper disabled by configuration")

    async def shutdown(self) -> None:
        await self.sweeper.stop()

    def get_status(self) -> dict:
        """Get current state for the readiness probe"""
        return {
            "items_in_memory": len(self.item_store),
            "data_dir": str(self.settings.data_dir),
            "retention": self.sweeper.get_status(),
        }


def get_app_state(request: Request) -> AppState:
    """
    FastAPI dependency to access app state.

    Usage in routers:
        @router.get("/example")
        async def example(state: AppState = Depends(get_app_state)):
            item = state.item_store.get(item_id)
            ...
    """
    return request.app.state.jsonstash


_authorization_header = APIKeyHeader(name="Authorization", auto_error=False)


async def require_auth(
    authorization: Optional[str] = Security(_authorization_header),
    state: AppState = Depends(get_app_state),
) -> None:
    """
    Reject the request unless the Authorization header equals the configured secret.

    The comparison is on the raw header value; no scheme prefix is parsed.
    """
    expected = state.settings.auth_secret
    if not authorization or not expected:
        raise UnauthorizedError()
    if not secrets.compare_digest(authorization.encode("utf-8"), expected.encode("utf-8")):
        raise UnauthorizedError()


async def json_body(request: Request) -> Any:
    """Parse the raw request body as JSON, whatever its shape"""
    raw = await request.body()
    try:
        return loads_strict(raw)
    except ValueError as e:
        logger.info(f"Rejected malformed JSON body on {request.method} {request.url.path}: {e}")
        raise BadRequestError()


@asynccontextmanager
async def lifespan_handler(app):
    """
    FastAPI lifespan context manager for startup/shutdown.

    Usage in main.py:
        app = FastAPI(lifespan=lifespan_handler)
    """
    state: AppState = app.state.jsonstash
    logger.info("FastAPI starting up...")
    await state.startup()

    yield  # App is now running

    logger.info("FastAPI shutting down...")
    await state.shutdown()
    logger.info("Shutdown complete")
