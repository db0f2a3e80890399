"""FastAPI application factory for the EcoFlood service.

Mounts the v1 API router and manages the lifetime of the shared report
service (its MongoDB client is closed on shutdown).
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from ecoflood.api.deps import get_report_service
from ecoflood.api.v1.routes import api_router
from ecoflood.config import settings
from ecoflood.logging_utils import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI application lifespan context manager.

    Configures logging on startup and releases the cached report service on
    shutdown.

    Parameters
    ----------
    app : FastAPI
        The FastAPI application instance.

    Yields
    ------
    None
        Control back to the application after startup.
    """
    configure_logging()
    logger.info("%s starting (live data: %s)", settings.APP_NAME, settings.USE_LIVE_DATA)
    yield
    if get_report_service.cache_info().currsize:
        get_report_service().close()
        get_report_service.cache_clear()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns
    -------
    FastAPI
        Application with the API router mounted at the /api/v1 prefix.
    """
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.include_router(api_router, prefix="/api/v1")
    return app
