"""Health check router."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from catalog.loader import Catalog
from config.settings import Settings, get_settings
from core.dependencies import get_optional_catalog

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _check_catalog(catalog: Catalog | None) -> str:
    """Report whether the bundled catalog is loaded."""
    return "ok" if catalog is not None else "error"


@router.get(
    "/health",
    summary="Health check",
    responses={
        200: {"description": "Service is healthy"},
        503: {"description": "Service is unhealthy (catalog not loaded)"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
    catalog: Catalog | None = Depends(get_optional_catalog),
):
    """Health check reporting whether the book catalog is loaded."""
    services = {"catalog": _check_catalog(catalog)}

    status = "healthy" if services["catalog"] == "ok" else "unhealthy"
    body = {
        "status": status,
        "version": settings.app_version,
        "services": services,
        "books": len(catalog) if catalog is not None else 0,
    }

    status_code = 200 if status == "healthy" else 503
    return JSONResponse(content=body, status_code=status_code)
