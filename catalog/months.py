"""Month-windowed filtering and call number ordering of the catalog.

The month shown to the user is the reference month; the books listed for it
are the ones acquired during the month before.
"""

from collections.abc import Iterable

from catalog.models import Book, YearMonth
from core.collation import collation_key


def target_month(reference_month: YearMonth) -> YearMonth:
    """The acquisition month listed under a reference month."""
    return reference_month.previous()


def acquired_in(book: Book, month: YearMonth) -> bool:
    """Check whether a book was acquired in the given month.

    Books with missing or malformed dates never match.
    """
    return book.acquired == month


def sort_by_callno(books: Iterable[Book]) -> tuple[Book, ...]:
    """Sort books by call number, keeping catalog order for equal call numbers."""
    return tuple(sorted(books, key=lambda book: collation_key(book.callno)))


def filter_and_sort(catalog: Iterable[Book], reference_month: YearMonth) -> tuple[Book, ...]:
    """Books acquired in the month before the reference month, ordered by call number.

    Args:
        catalog: All books, in catalog order
        reference_month: The month being displayed

    Returns:
        New tuple of matching books sorted by call number
    """
    month = target_month(reference_month)
    return sort_by_callno(book for book in catalog if acquired_in(book, month))
