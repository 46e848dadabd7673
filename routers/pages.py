"""Single-page map view."""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from browse.session import BrowseSession
from config.settings import Settings, get_settings
from core.dependencies import get_browse_session

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(
    request: Request,
    session: BrowseSession = Depends(get_browse_session),
    settings: Settings = Depends(get_settings),
):
    """Render the map, month navigation and the current list page."""
    snapshot = session.snapshot()
    map_spec = session.map_spec(consume_viewport=True)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": settings.page_title,
            "snapshot": snapshot,
            "map_spec": map_spec.model_dump(mode="json"),
        },
    )
