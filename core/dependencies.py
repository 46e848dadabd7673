"""FastAPI dependency injection providers."""

import logging
import uuid

from fastapi import Depends, Request
from posthog import Posthog

from browse.session import BrowseSession, SessionStore
from catalog.loader import Catalog
from catalog.models import YearMonth
from config.settings import Settings, get_settings
from core.exceptions import CatalogLoadError
from core.sentry import capture_exception
from mapview.models import MapConfig
from mapview.presenter import MapPresenter

logger = logging.getLogger(__name__)

SESSION_COOKIE = "ntm_session"

# Module-level instances for lifecycle management
_catalog: Catalog | None = None
_session_store: SessionStore | None = None
_posthog_client: Posthog | None = None


def get_catalog(settings: Settings = Depends(get_settings)) -> Catalog:
    """Get the bundled book catalog, loading it on first use.

    Args:
        settings: Application settings

    Returns:
        Catalog: Loaded catalog

    Raises:
        CatalogLoadError: If the catalog file cannot be loaded
    """
    global _catalog

    if _catalog is None:
        path = settings.resolved_catalog_path
        try:
            _catalog = Catalog.load(path)
        except CatalogLoadError as e:
            logger.error(f"Failed to load book catalog: {e.message}")
            capture_exception(e, context=e.details)
            raise

    return _catalog


def get_optional_catalog(settings: Settings = Depends(get_settings)) -> Catalog | None:
    """Get the book catalog, or None when it cannot be loaded."""
    try:
        return get_catalog(settings)
    except CatalogLoadError:
        return None


def reset_catalog() -> None:
    """Forget the loaded catalog so the next request reloads it."""
    global _catalog
    _catalog = None


def initial_month(settings: Settings) -> YearMonth:
    """Reference month for new sessions: INITIAL_MONTH if set, else today."""
    if settings.initial_month:
        return YearMonth.parse(settings.initial_month)
    return YearMonth.today()


def get_session_store(
    settings: Settings = Depends(get_settings),
    catalog: Catalog = Depends(get_catalog),
) -> SessionStore:
    """Get the in-memory browse session store.

    Args:
        settings: Application settings
        catalog: Loaded book catalog shared by every session

    Returns:
        SessionStore: Session store creating sessions at the initial month
    """
    global _session_store

    if _session_store is None:
        map_config = MapConfig.from_settings(settings)

        def new_session() -> BrowseSession:
            return BrowseSession(
                catalog=catalog,
                reference_month=initial_month(settings),
                presenter=MapPresenter(map_config),
                page_size=settings.page_size,
                selection_policy=settings.selection_policy,
                selection_zoom=settings.selection_zoom,
            )

        _session_store = SessionStore(
            new_session,
            maxsize=settings.session_cache_maxsize,
            ttl=settings.session_ttl,
        )
        logger.info(
            f"Session store initialized (maxsize: {settings.session_cache_maxsize}, "
            f"ttl: {settings.session_ttl}s)"
        )

    return _session_store


def close_session_store() -> None:
    """Drop all browse sessions."""
    global _session_store
    if _session_store is not None:
        _session_store.clear()
        _session_store = None


def get_session_id(request: Request) -> str:
    """Session id assigned by the session cookie middleware."""
    session_id = getattr(request.state, "session_id", None) or request.cookies.get(
        SESSION_COOKIE
    )
    return session_id or uuid.uuid4().hex


def get_browse_session(
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_session_store),
) -> BrowseSession:
    """Get the caller's browse session, creating it on first visit."""
    return store.get_or_create(session_id)


def get_posthog_client(settings: Settings = Depends(get_settings)) -> Posthog | None:
    """Get PostHog client instance.

    Args:
        settings: Application settings

    Returns:
        Optional[Posthog]: PostHog client if configured and enabled, None otherwise
    """
    global _posthog_client

    if not settings.enable_telemetry:
        logger.debug("Telemetry disabled")
        return None

    if not settings.posthog_api_key:
        logger.debug("POSTHOG_API_KEY not set - telemetry disabled")
        return None

    if _posthog_client is None:
        _posthog_client = Posthog(
            project_api_key=settings.posthog_api_key,
            host=settings.posthog_host,
        )
        logger.info(f"PostHog client initialized (host: {settings.posthog_host})")

    return _posthog_client


def flush_posthog() -> None:
    """Flush any buffered PostHog events."""
    global _posthog_client
    if _posthog_client:
        _posthog_client.flush()


def shutdown_posthog() -> None:
    """Shutdown PostHog client gracefully."""
    global _posthog_client
    if _posthog_client:
        _posthog_client.shutdown()
        _posthog_client = None
        logger.info("PostHog client shutdown")
