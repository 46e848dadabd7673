"""Main application entry point for the New Titles Map."""

import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from browse.router import router as session_router
from catalog.router import router as catalog_router
from config.settings import get_settings
from core.dependencies import (
    SESSION_COOKIE,
    close_session_store,
    flush_posthog,
    get_catalog,
    shutdown_posthog,
)
from core.exceptions import CatalogLoadError
from core.logging import get_logger, setup_logging
from core.sentry import init_sentry
from routers.health import router as health_router
from routers.pages import router as pages_router

load_dotenv()

settings = get_settings()

init_sentry(
    dsn=settings.sentry_dsn,
    environment="production" if settings.log_level != "DEBUG" else "development",
    release=settings.app_version,
)

log_file = None
if settings.log_level != "DEBUG":
    log_dir = Path("/app/logs") if Path("/app/logs").exists() else Path("logs")
    log_file = log_dir / "new-titles-map.log"
setup_logging(level=settings.log_level, log_file=log_file)

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the catalog at startup and release session state on shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    try:
        catalog = get_catalog(settings)
        logger.info(f"Catalog ready: {len(catalog)} books")
    except CatalogLoadError as e:
        logger.warning(f"Starting without catalog (health check will report unhealthy): {e}")

    yield

    logger.info("Shutting down application")
    shutdown_posthog()
    close_session_store()
    logger.info("All services shut down")


app = FastAPI(
    title=settings.app_name,
    description="Map of a library's newly acquired books by month",
    version=settings.app_version,
    lifespan=lifespan,
)


@app.middleware("http")
async def session_cookie_middleware(request: Request, call_next):
    """Assign a browse session id to first-time visitors.

    The cookie is re-sent on every response so its expiry tracks the idle
    TTL of the session store rather than the first visit.
    """
    request.state.session_id = request.cookies.get(SESSION_COOKIE) or uuid.uuid4().hex

    response = await call_next(request)

    response.set_cookie(
        SESSION_COOKIE,
        request.state.session_id,
        max_age=settings.session_ttl,
        httponly=True,
        samesite="lax",
    )
    return response


@app.middleware("http")
async def posthog_flush_middleware(request: Request, call_next):
    """Flush PostHog events after each request to prevent data loss."""
    response = await call_next(request)
    flush_posthog()
    return response


@app.exception_handler(CatalogLoadError)
async def catalog_unavailable_handler(request: Request, exc: CatalogLoadError):
    """Report a missing or unreadable catalog as a temporary outage."""
    return JSONResponse(status_code=503, content={"detail": "Book catalog unavailable"})


app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(health_router, prefix="", tags=["health"])
app.include_router(pages_router, prefix="", tags=["pages"])
app.include_router(catalog_router, prefix="/api/v1", tags=["catalog"])
app.include_router(session_router, prefix="/api/v1", tags=["session"])

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
