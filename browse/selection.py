import logging
from typing import Protocol

from browse.pagination import Paginator
from catalog.models import Book
from core.exceptions import BookNotFoundError

logger = logging.getLogger(__name__)


class ViewportTarget(Protocol):
    """Anything that can pan/zoom a map to a point."""

    def move_viewport(self, lat: float, lng: float, zoom: int | None = None) -> None: ...


class SelectionController:
    """Holds the selected book and keeps the map viewport in sync with it.

    Selecting from either the list or the map sets the same state and moves
    the viewport to the book. Books are matched by id, never by coordinates.
    """

    def __init__(
        self,
        paginator: Paginator[Book],
        viewport: ViewportTarget,
        zoom: int | None = None,
    ):
        self._paginator = paginator
        self._viewport = viewport
        self.zoom = zoom
        self.selected: Book | None = None

    def select_from_list(self, index: int) -> Book:
        """Select the book at a page-relative index of the current page.

        Raises:
            BookNotFoundError: If the index is outside the visible page
        """
        if not 0 <= index < len(self._paginator.visible):
            raise BookNotFoundError(
                f"No book at index {index} on page {self._paginator.page}",
                details={"index": index, "page": self._paginator.page},
            )
        book = self._paginator.items[self._paginator.absolute_index(index)]
        return self._select(book)

    def select_from_map(self, book_id: int) -> Book:
        """Select the book behind a clicked marker.

        Raises:
            BookNotFoundError: If the book is not in the current list
        """
        book = self._find(book_id)
        if book is None:
            raise BookNotFoundError(
                f"Book {book_id} is not listed for this month", details={"book_id": book_id}
            )
        return self._select(book)

    def clear(self) -> None:
        self.selected = None

    @property
    def is_visible(self) -> bool:
        """Whether the selected book is still in the current list."""
        return self.selected is not None and self._find(self.selected.id) is not None

    @property
    def open_callout_id(self) -> int | None:
        """Id of the one marker whose callout is open, if any."""
        return self.selected.id if self.is_visible else None

    def _find(self, book_id: int) -> Book | None:
        return next((book for book in self._paginator.items if book.id == book_id), None)

    def _select(self, book: Book) -> Book:
        self.selected = book
        logger.debug(f"Selected book {book.id} ({book.callno})")
        self._viewport.move_viewport(book.lat, book.lng, self.zoom)
        return book
