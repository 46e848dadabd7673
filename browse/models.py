from pydantic import BaseModel

from catalog.models import Book
from mapview.models import ViewportCommand


class SessionSnapshot(BaseModel):
    """Current state of a browse session as seen by the list and map."""

    month: str
    month_label: str
    listed_month: str
    page: int
    page_count: int
    page_size: int
    total: int
    books: list[Book]
    selected_id: int | None = None
    selected_visible: bool = False
    viewport: ViewportCommand | None = None


class MonthBooksResponse(BaseModel):
    """Books listed under a reference month."""

    month: str
    month_label: str
    listed_month: str
    total: int
    books: list[Book]
