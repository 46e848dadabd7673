"""Catalog router for month listings."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from browse.models import MonthBooksResponse
from catalog.loader import Catalog
from catalog.models import YearMonth
from catalog.months import filter_and_sort, target_month
from core.dependencies import get_catalog
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["catalog"])


@router.get(
    "",
    response_model=MonthBooksResponse,
    summary="List new titles for a month",
    description="""
    List the books shown under a reference month, ordered by call number.

    The books listed under a month are the ones acquired during the month
    before it: `month=2024-04` lists March 2024 acquisitions.

    Example request:
    ```
    GET /api/v1/books?month=2024-04
    ```
    """,
    responses={
        200: {"description": "Books returned"},
        400: {"description": "Malformed month"},
        503: {"description": "Book catalog unavailable"},
    },
)
async def list_books(
    month: str = Query(..., description="Reference month as YYYY-MM"),
    catalog: Catalog = Depends(get_catalog),
):
    """List the books for a reference month."""
    try:
        reference_month = YearMonth.parse(month)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=e.message) from e

    books = filter_and_sort(catalog, reference_month)
    return MonthBooksResponse(
        month=reference_month.key(),
        month_label=reference_month.label(),
        listed_month=target_month(reference_month).key(),
        total=len(books),
        books=list(books),
    )
