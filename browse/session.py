import logging
from collections.abc import Callable
from typing import Literal

from cachetools import TTLCache  # type: ignore[import-untyped]

from browse.models import SessionSnapshot
from browse.pagination import Paginator
from browse.selection import SelectionController
from catalog.loader import Catalog
from catalog.models import Book, YearMonth
from catalog.months import filter_and_sort, target_month
from mapview.models import MapSpec
from mapview.presenter import MapPresenter

logger = logging.getLogger(__name__)

SelectionPolicy = Literal["clear", "keep"]


class BrowseSession:
    """UI state for one browser: reference month, list page and selection.

    Changing the month recomputes the book list, resets the list to page 1
    and applies the selection policy: "clear" drops the selection, "keep"
    leaves it in place even when the book is no longer listed.
    """

    def __init__(
        self,
        catalog: Catalog,
        reference_month: YearMonth,
        presenter: MapPresenter,
        page_size: int = 10,
        selection_policy: SelectionPolicy = "clear",
        selection_zoom: int | None = None,
    ):
        self.catalog = catalog
        self.presenter = presenter
        self.selection_policy = selection_policy
        self.paginator: Paginator[Book] = Paginator(page_size=page_size)
        self.selection = SelectionController(self.paginator, presenter, zoom=selection_zoom)
        self._reference_month = reference_month
        self.paginator.set_items(filter_and_sort(catalog, reference_month))

    @property
    def reference_month(self) -> YearMonth:
        return self._reference_month

    @property
    def books(self) -> tuple[Book, ...]:
        """All books listed for the reference month, in call number order."""
        return tuple(self.paginator.items)

    def advance_month(self, direction: int) -> YearMonth:
        """Step the reference month one calendar month back (-1) or forward (+1)."""
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction}")
        self.set_month(self._reference_month.shift(direction))
        return self._reference_month

    def set_month(self, month: YearMonth) -> None:
        self._reference_month = month
        self.paginator.set_items(filter_and_sort(self.catalog, month))
        self.paginator.go_to(1)
        if self.selection_policy == "clear":
            self.selection.clear()
        logger.debug(f"Reference month set to {month} ({len(self.paginator.items)} books)")

    def go_to_page(self, page: int) -> int:
        return self.paginator.go_to(page)

    def select_from_list(self, index: int) -> Book:
        return self.selection.select_from_list(index)

    def select_from_map(self, book_id: int) -> Book:
        return self.selection.select_from_map(book_id)

    def clear_selection(self) -> None:
        self.selection.clear()

    def map_spec(self, consume_viewport: bool = True) -> MapSpec:
        """Describe the map for this month, optionally consuming the queued viewport move."""
        viewport = (
            self.presenter.take_pending() if consume_viewport else self.presenter.peek_pending()
        )
        return self.presenter.describe(
            self.paginator.items, self.selection.open_callout_id, viewport
        )

    def snapshot(self, consume_viewport: bool = False) -> SessionSnapshot:
        """Serializable view of the session.

        With consume_viewport the queued viewport move is handed to the caller
        and cleared, so the page render does not repeat it.
        """
        selected = self.selection.selected
        viewport = (
            self.presenter.take_pending() if consume_viewport else self.presenter.peek_pending()
        )
        return SessionSnapshot(
            month=self._reference_month.key(),
            month_label=self._reference_month.label(),
            listed_month=target_month(self._reference_month).key(),
            page=self.paginator.page,
            page_count=self.paginator.page_count,
            page_size=self.paginator.page_size,
            total=len(self.paginator.items),
            books=list(self.paginator.visible),
            selected_id=selected.id if selected else None,
            selected_visible=self.selection.is_visible,
            viewport=viewport,
        )


class SessionStore:
    """In-memory browse sessions keyed by session id, expiring when idle."""

    def __init__(
        self,
        factory: Callable[[], BrowseSession],
        maxsize: int = 1000,
        ttl: int = 3600,
    ):
        self._factory = factory
        self._sessions: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)

    def get_or_create(self, session_id: str) -> BrowseSession:
        session = self._sessions.get(session_id)
        if session is None:
            session = self._factory()
            logger.debug(f"Created browse session {session_id[:8]}")
        # Re-inserting restarts the idle TTL
        self._sessions[session_id] = session
        return session

    def discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
