import math
from collections.abc import Sequence
from typing import Generic, TypeVar

from core.exceptions import ConfigurationError

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, page_size: int) -> Sequence[T]:
    """Return the 1-indexed page of items, clipped to bounds.

    Pages before the first or past the last yield an empty slice.
    """
    if page < 1:
        return items[0:0]
    start = (page - 1) * page_size
    return items[start : start + page_size]


def page_count(count: int, page_size: int) -> int:
    """Number of pages needed for count items. An empty list still has one page."""
    return max(1, math.ceil(count / page_size))


class Paginator(Generic[T]):
    """Tracks the current page over an ordered sequence.

    The page resets to 1 whenever a different sequence is assigned, and
    requested pages are clamped into [1, page_count].
    """

    def __init__(self, items: Sequence[T] = (), page_size: int = 10):
        if page_size < 1:
            raise ConfigurationError(
                f"page_size must be at least 1, got {page_size}",
                details={"page_size": page_size},
            )
        self.page_size = page_size
        self._items: Sequence[T] = items
        self._page = 1

    @property
    def items(self) -> Sequence[T]:
        return self._items

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_count(self) -> int:
        return page_count(len(self._items), self.page_size)

    @property
    def visible(self) -> Sequence[T]:
        return paginate(self._items, self._page, self.page_size)

    def set_items(self, items: Sequence[T]) -> None:
        if items is not self._items:
            self._items = items
            self._page = 1

    def go_to(self, page: int) -> int:
        """Move to a page, clamped into range. Returns the page actually shown."""
        self._page = min(max(page, 1), self.page_count)
        return self._page

    def absolute_index(self, relative_index: int) -> int:
        """Map a page-relative index to its position in the full sequence."""
        return (self._page - 1) * self.page_size + relative_index
