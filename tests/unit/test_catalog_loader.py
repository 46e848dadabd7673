"""Unit tests for catalog/loader.py."""

import json
import logging

import pytest

from catalog.loader import Catalog
from core.exceptions import CatalogLoadError
from tests.factories import BOOK_RECORDS


class TestFromRecords:
    def test_ids_are_positions(self):
        catalog = Catalog.from_records(BOOK_RECORDS)
        assert [book.id for book in catalog] == list(range(len(BOOK_RECORDS)))

    def test_keeps_undated_records(self):
        catalog = Catalog.from_records(BOOK_RECORDS)
        assert catalog.get(5).date == "undated"
        assert catalog.get(5).acquired is None

    def test_skips_malformed_records_keeping_ids(self, caplog):
        caplog.set_level(logging.INFO)
        records = [
            BOOK_RECORDS[0],
            {"title": "No coordinates", "callno": "X1"},
            "not a record",
            BOOK_RECORDS[1],
        ]
        catalog = Catalog.from_records(records)
        assert [book.id for book in catalog] == [0, 3]
        assert "Skipped 2 malformed" in caplog.text

    def test_record_id_field_is_ignored(self):
        catalog = Catalog.from_records([{**BOOK_RECORDS[0], "id": 99}])
        assert catalog.books[0].id == 0

    def test_get_missing(self):
        assert Catalog.from_records(BOOK_RECORDS).get(404) is None

    def test_books_is_tuple(self):
        assert isinstance(Catalog.from_records(BOOK_RECORDS).books, tuple)


class TestLoad:
    def test_loads_file(self, catalog_file):
        catalog = Catalog.load(catalog_file)
        assert len(catalog) == len(BOOK_RECORDS)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError) as exc_info:
            Catalog.load(tmp_path / "missing.json")
        assert "not found" in exc_info.value.message

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "books.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            Catalog.load(path)

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "books.json"
        path.write_text(json.dumps({"books": []}), encoding="utf-8")
        with pytest.raises(CatalogLoadError) as exc_info:
            Catalog.load(path)
        assert exc_info.value.details["type"] == "dict"

    def test_bundled_dataset_loads(self):
        from config.settings import DEFAULT_CATALOG_PATH

        catalog = Catalog.load(DEFAULT_CATALOG_PATH)
        assert len(catalog) > 0
