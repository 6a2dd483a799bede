# tests/utils_tests/test_catalog.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Tests for example catalog loading

import json

import pytest
from utils.catalog import CatalogFormatError, find_entry, load_catalog


def write_catalog(directory, data):
    path = directory / "catalog.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadCatalog:
    def test_bundled_catalog(self, examples_dir):
        entries = load_catalog(examples_dir / "examples_config.json")
        assert len(entries) >= 1
        entry = entries[0]
        assert entry.path.exists()
        assert "(?<clock>" in entry.parser

    def test_sorted_by_order(self, tmp_path):
        path = write_catalog(
            tmp_path,
            [
                {"filename": "b.log", "title": "B", "parser": "p", "order": 2},
                {"filename": "a.log", "title": "A", "parser": "p", "order": 1},
                {"filename": "c.log", "title": "C", "parser": "p", "order": 2},
            ],
        )
        assert [e.filename for e in load_catalog(path)] == ["a.log", "b.log", "c.log"]

    def test_paths_relative_to_catalog(self, tmp_path):
        path = write_catalog(tmp_path, [{"filename": "logs/x.log", "title": "X", "parser": "p"}])
        entry = load_catalog(path)[0]
        assert entry.path == tmp_path / "logs" / "x.log"
        assert entry.delimiter is None
        assert entry.order == 0

    def test_empty_delimiter_is_none(self, tmp_path):
        path = write_catalog(
            tmp_path, [{"filename": "x.log", "title": "X", "parser": "p", "delimiter": ""}]
        )
        assert load_catalog(path)[0].delimiter is None

    @pytest.mark.parametrize(
        "content",
        [
            "not json",
            json.dumps({"filename": "x"}),
            json.dumps([1]),
            json.dumps([{"filename": "x.log", "title": "X"}]),
            json.dumps([{"filename": "x.log", "title": "X", "parser": "p", "order": "first"}]),
        ],
    )
    def test_malformed(self, tmp_path, content):
        path = tmp_path / "catalog.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(CatalogFormatError):
            load_catalog(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogFormatError):
            load_catalog(tmp_path / "nope.json")


class TestFindEntry:
    def test_by_filename_or_title(self, tmp_path):
        path = write_catalog(tmp_path, [{"filename": "x.log", "title": "Example X", "parser": "p"}])
        entries = load_catalog(path)
        assert find_entry(entries, "x.log") is entries[0]
        assert find_entry(entries, "Example X") is entries[0]

    def test_unknown(self):
        with pytest.raises(CatalogFormatError):
            find_entry([], "x.log")
