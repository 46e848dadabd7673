"""Shared test fixtures for pytest."""

import json

import pytest

from catalog.loader import Catalog
from tests.factories import BOOK_RECORDS, make_book


@pytest.fixture
def sample_book():
    """Create a sample book for testing."""
    return make_book(id=1, title="Babylon: a life history", callno="DS70.5.B3 B33 2024")


@pytest.fixture
def sample_catalog():
    """Catalog built from the shared raw records."""
    return Catalog.from_records(BOOK_RECORDS)


@pytest.fixture
def catalog_file(tmp_path):
    """JSON catalog file holding the shared raw records."""
    path = tmp_path / "books.json"
    path.write_text(json.dumps(BOOK_RECORDS), encoding="utf-8")
    return path
