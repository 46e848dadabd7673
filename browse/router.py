"""Browse session router: month navigation, paging and selection."""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Path
from posthog import Posthog

from browse.models import SessionSnapshot
from browse.session import BrowseSession
from core.dependencies import get_browse_session, get_posthog_client, get_session_id
from core.exceptions import BookNotFoundError
from core.sentry import add_session_breadcrumb
from core.telemetry import (
    BOOK_SELECTED,
    MONTH_CHANGED,
    PAGE_CHANGED,
    capture_session_event,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["session"])

DIRECTIONS = {"previous": -1, "next": 1}


@router.get(
    "",
    response_model=SessionSnapshot,
    summary="Get the current browse session",
)
async def get_session(session: BrowseSession = Depends(get_browse_session)):
    """Return the caller's reference month, list page and selection."""
    return session.snapshot()


@router.post(
    "/month/{direction}",
    response_model=SessionSnapshot,
    summary="Step the reference month",
    description="""
    Move the reference month one calendar month back (`previous`) or forward
    (`next`). The list returns to page 1. Books listed under a month are the
    ones acquired during the month before it.
    """,
    responses={
        200: {"description": "Month changed"},
        400: {"description": "Month outside the supported calendar range"},
    },
)
async def change_month(
    direction: Literal["previous", "next"],
    session: BrowseSession = Depends(get_browse_session),
    session_id: str = Depends(get_session_id),
    posthog_client: Posthog | None = Depends(get_posthog_client),
):
    """Step the reference month."""
    try:
        month = session.advance_month(DIRECTIONS[direction])
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    add_session_breadcrumb("advance_month", {"direction": direction, "month": str(month)})
    capture_session_event(
        posthog_client,
        MONTH_CHANGED,
        session_id,
        {"month": str(month), "direction": direction, "books": len(session.books)},
    )
    return session.snapshot()


@router.post(
    "/page/{page}",
    response_model=SessionSnapshot,
    summary="Go to a list page",
    description="Pages outside the available range are clamped to the first or last page.",
)
async def change_page(
    page: int,
    session: BrowseSession = Depends(get_browse_session),
    session_id: str = Depends(get_session_id),
    posthog_client: Posthog | None = Depends(get_posthog_client),
):
    """Go to a list page."""
    shown = session.go_to_page(page)
    capture_session_event(posthog_client, PAGE_CHANGED, session_id, {"page": shown})
    return session.snapshot()


@router.post(
    "/select/list/{index}",
    response_model=SessionSnapshot,
    summary="Select a book from the list",
    responses={
        200: {"description": "Book selected; response carries the viewport move"},
        404: {"description": "No book at that index on the current page"},
    },
)
async def select_from_list(
    index: int = Path(..., ge=0, description="Zero-based index within the current page"),
    session: BrowseSession = Depends(get_browse_session),
    session_id: str = Depends(get_session_id),
    posthog_client: Posthog | None = Depends(get_posthog_client),
):
    """Select the book at a page-relative index and move the map to it."""
    try:
        book = session.select_from_list(index)
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message) from e

    add_session_breadcrumb("select_from_list", {"index": index, "book_id": book.id})
    capture_session_event(
        posthog_client, BOOK_SELECTED, session_id, {"source": "list", "book_id": book.id}
    )
    return session.snapshot(consume_viewport=True)


@router.post(
    "/select/map/{book_id}",
    response_model=SessionSnapshot,
    summary="Select a book from its map marker",
    responses={
        200: {"description": "Book selected; response carries the viewport move"},
        404: {"description": "Book is not listed for the current month"},
    },
)
async def select_from_map(
    book_id: int,
    session: BrowseSession = Depends(get_browse_session),
    session_id: str = Depends(get_session_id),
    posthog_client: Posthog | None = Depends(get_posthog_client),
):
    """Select the book behind a clicked marker and move the map to it."""
    try:
        book = session.select_from_map(book_id)
    except BookNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message) from e

    add_session_breadcrumb("select_from_map", {"book_id": book.id})
    capture_session_event(
        posthog_client, BOOK_SELECTED, session_id, {"source": "map", "book_id": book.id}
    )
    return session.snapshot(consume_viewport=True)


@router.delete(
    "/selection",
    response_model=SessionSnapshot,
    summary="Clear the selected book",
)
async def clear_selection(session: BrowseSession = Depends(get_browse_session)):
    """Clear the selection and close the open callout."""
    session.clear_selection()
    return session.snapshot()
