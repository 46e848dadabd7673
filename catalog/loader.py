import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import ValidationError

from catalog.models import Book
from core.exceptions import CatalogLoadError

logger = logging.getLogger(__name__)


class Catalog:
    """Read-only collection of book records loaded once at startup."""

    def __init__(self, books: Iterable[Book] = ()):
        self._books: tuple[Book, ...] = tuple(books)
        self._by_id: dict[int, Book] = {book.id: book for book in self._books}

    @property
    def books(self) -> tuple[Book, ...]:
        return self._books

    def get(self, book_id: int) -> Book | None:
        return self._by_id.get(book_id)

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(self._books)

    @classmethod
    def from_records(cls, records: list) -> "Catalog":
        """Build a catalog from raw JSON records.

        Each record's id is its zero-based position in the input, so ids stay
        stable even when malformed records are skipped.
        """
        books = []
        skipped = 0
        for position, record in enumerate(records):
            if not isinstance(record, dict):
                skipped += 1
                logger.warning(f"Skipping catalog record {position}: not an object")
                continue
            try:
                books.append(Book(**{**record, "id": position}))
            except ValidationError as e:
                skipped += 1
                logger.warning(
                    f"Skipping catalog record {position}: {e.error_count()} validation error(s)"
                )

        if skipped:
            logger.info(f"Skipped {skipped} malformed catalog record(s)")
        return cls(books)

    @classmethod
    def load(cls, path: Path) -> "Catalog":
        """Load the bundled JSON catalog.

        Args:
            path: Path to a JSON file holding an array of book records

        Returns:
            Catalog: Loaded catalog

        Raises:
            CatalogLoadError: If the file is missing, unreadable, or not a JSON array
        """
        if not path.exists():
            raise CatalogLoadError(
                f"Book catalog not found at {path}", details={"path": str(path)}
            )

        try:
            records = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(
                f"Failed to read book catalog: {e}", details={"path": str(path)}
            ) from e

        if not isinstance(records, list):
            raise CatalogLoadError(
                "Book catalog must be a JSON array of records",
                details={"path": str(path), "type": type(records).__name__},
            )

        catalog = cls.from_records(records)
        logger.info(f"Loaded {len(catalog)} books from {path}")
        return catalog
