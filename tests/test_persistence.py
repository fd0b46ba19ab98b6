"""
Save File Unit Tests
====================

Tests for loading and atomically saving record stores.

Test Categories
---------------
1. Loading: missing/empty files, accepted shapes, rejected shapes
2. Saving: file contents, no-op without a path, atomic replacement
3. Round trip: save then load reproduces every record
"""

import json
import os

import pytest

from keytally.errors import LoadError, SaveError
from keytally.tally import (
    COUNT_MAX,
    RecordStore,
    TallyMachine,
    dump_store,
    load_store,
    parse_store,
    save_store,
)


def as_tuples(store: RecordStore) -> dict:
    return {record.key: (record.label, record.count) for record in store}


# =============================================================================
# Loading
# =============================================================================

class TestLoad:
    """Test load_store."""

    def test_no_path(self):
        """No configured path gives an empty store."""
        assert len(load_store(None)) == 0

    def test_missing_file(self, save_path):
        """A file that doesn't exist gives an empty store."""
        assert len(load_store(save_path)) == 0

    @pytest.mark.parametrize("content", ["", "   \n"])
    def test_empty_file(self, save_path, content):
        """An empty file gives an empty store."""
        save_path.write_text(content)
        assert len(load_store(save_path)) == 0

    def test_character_keys(self, save_path):
        """Records keyed and identified by character load."""
        save_path.write_text('{"a": {"label":"apples","key":"a","count":7}}')
        store = load_store(save_path)
        assert as_tuples(store) == {"a": ("apples", 7)}

    def test_codepoint_keys(self, save_path):
        """Records keyed and identified by codepoint load."""
        save_path.write_text('{"98": {"label":"bananas","key":98,"count":2}}')
        assert as_tuples(load_store(save_path)) == {"b": ("bananas", 2)}

    def test_legacy_field_names(self, save_path):
        """Label/Rune/Count field names are accepted."""
        save_path.write_text('{"97": {"Label":"apples","Rune":97,"Count":3}}')
        assert as_tuples(load_store(save_path)) == {"a": ("apples", 3)}

    def test_missing_fields_default(self, save_path):
        """A bare object gives the default label and a zero count."""
        save_path.write_text('{"a": {}}')
        assert as_tuples(load_store(save_path)) == {"a": ("a", 0)}

    def test_digit_key_is_a_character(self, save_path):
        """A single digit is the digit key itself, not a codepoint."""
        save_path.write_text('{"7": {"count": 1}}')
        assert load_store(save_path).keys() == ["7"]

    def test_increment_after_load(self, save_path):
        """Loaded records keep counting from their saved values."""
        save_path.write_text('{"a": {"label":"apples","key":"a","count":7}}')
        machine = TallyMachine(load_store(save_path))
        machine.feed("a")
        record = machine.store.get("a")
        assert record.count == 8
        assert record.label == "apples"

    def test_file_overrides_seeds(self, save_path):
        """Saved records replace seeds; other seeds stay."""
        save_path.write_text('{"a": {"label":"apples","key":97,"count":4}}')
        store = RecordStore()
        store.seed("a", "avocados")
        store.seed("b", "bananas")
        load_store(save_path, store)
        assert as_tuples(store) == {"a": ("apples", 4), "b": ("bananas", 0)}
        assert sorted(store.keys()) == ["a", "b"]

    @pytest.mark.parametrize("content", [
        "not json",
        "[1, 2, 3]",
        "null",
        '{"a": 5}',
        '{"a": {"count": -1}}',
        '{"a": {"count": 1.5}}',
        '{"a": {"count": true}}',
        '{"a": {"count": "3"}}',
        '{"a": {"label": 12}}',
        '{"ab": {"count": 1}}',
        '{"a": {"key": [97]}}',
        '{"²²": {"count": 1}}',
        '{"a": {"key": "¹⁰"}}',
        '{"a": {"count": %d}}' % (COUNT_MAX + 1),
    ])
    def test_malformed(self, save_path, content):
        """Anything that isn't a mapping of records is a load error."""
        save_path.write_text(content, encoding="utf-8")
        with pytest.raises(LoadError) as excinfo:
            load_store(save_path)
        assert str(save_path) in str(excinfo.value)

    def test_unreadable_path(self, tmp_path):
        """A directory in place of the file is a load error."""
        with pytest.raises(LoadError):
            load_store(tmp_path)


# =============================================================================
# Saving
# =============================================================================

class TestSave:
    """Test save_store."""

    def test_no_path(self, tmp_path, store):
        """No configured path writes nothing."""
        store.increment("a")
        save_store(None, store)
        assert list(tmp_path.iterdir()) == []

    def test_file_contents(self, save_path, store):
        """Records are written keyed by character with codepoint keys."""
        store.relabel("a", "apples")
        store.increment("a", 7)
        save_store(save_path, store)
        data = json.loads(save_path.read_text())
        assert data == {"a": {"label": "apples", "key": 97, "count": 7}}

    def test_replaces_existing(self, save_path, store):
        """An existing save file is replaced."""
        save_path.write_text('{"z": {"count": 1}}')
        store.increment("a")
        save_store(save_path, store)
        assert set(json.loads(save_path.read_text())) == {"a"}

    def test_no_temporary_files_left(self, tmp_path, save_path, store):
        """Only the save file remains after a successful save."""
        store.increment("a")
        save_store(save_path, store)
        assert [p.name for p in tmp_path.iterdir()] == ["counts.json"]

    def test_missing_directory(self, tmp_path, store):
        """A save file in a missing directory is a save error."""
        with pytest.raises(SaveError):
            save_store(tmp_path / "nope" / "counts.json", store)

    def test_failed_rename_keeps_old_file(self, save_path, store, monkeypatch):
        """If the final rename fails the old file is intact and loadable."""
        save_path.write_text('{"a": {"label":"apples","key":97,"count":7}}')
        store.increment("b", 3)

        def broken_replace(src, dst):
            raise OSError("disk on fire")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(SaveError):
            save_store(save_path, store)
        monkeypatch.undo()

        assert as_tuples(load_store(save_path)) == {"a": ("apples", 7)}
        assert [p.name for p in save_path.parent.iterdir()] == ["counts.json"]

    def test_failed_write_keeps_old_file(self, save_path, store, monkeypatch):
        """If serialization fails the old file is intact."""
        save_path.write_text('{"a": {"count": 1}}')

        def broken_dump(*args, **kwargs):
            raise ValueError("boom")

        monkeypatch.setattr(json, "dump", broken_dump)
        with pytest.raises(SaveError):
            save_store(save_path, store)
        monkeypatch.undo()
        assert as_tuples(load_store(save_path)) == {"a": ("a", 1)}


# =============================================================================
# Round Trip
# =============================================================================

class TestRoundTrip:
    """Test save followed by load."""

    def test_round_trip(self, save_path):
        """Every key keeps its label and count."""
        machine = TallyMachine()
        machine.feed_text("aaab=bees\rcc+40\r ")
        machine.store.relabel("é", "accent")
        save_store(save_path, machine.store)

        loaded = load_store(save_path)
        assert as_tuples(loaded) == as_tuples(machine.store)

    def test_dump_parse(self):
        """dump_store and parse_store agree in memory."""
        store = RecordStore()
        store.increment("x", 5)
        store.relabel("y", "why")
        assert as_tuples(parse_store(dump_store(store))) == as_tuples(store)
