"""Unit tests for loading the events document.

Tests the EventSourceLoader including:
- Reading a JSON array into the store
- Errors for missing, malformed and non-array documents
- Change detection by file signature
- Keeping the last valid working set when a reload fails
"""

import json
import logging

import pytest

from event_query.source import (
    EventSourceError,
    EventSourceLoader,
    EventSourceNotFoundError,
    EventSourceParseError,
)
from event_query.store import EventStore


def _write(path, records):
    path.write_text(json.dumps(records), encoding="utf-8")


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.json"
    _write(path, [{"id": "a", "title": "Jazz"}, {"id": "b", "title": "Art"}])
    return path


@pytest.fixture
def loader(events_file):
    return EventSourceLoader(events_file, EventStore())


class TestRead:
    """Test suite for parsing the document."""

    def test_read_returns_records(self, loader):
        records = loader.read()
        assert [record["id"] for record in records] == ["a", "b"]

    def test_missing_file(self, tmp_path):
        loader = EventSourceLoader(tmp_path / "missing.json", EventStore())
        with pytest.raises(EventSourceNotFoundError) as exc_info:
            loader.read()
        assert exc_info.value.path == tmp_path / "missing.json"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(EventSourceParseError, match="Invalid JSON"):
            EventSourceLoader(path, EventStore()).read()

    def test_non_array_document(self, tmp_path):
        path = tmp_path / "object.json"
        _write(path, {"events": []})
        with pytest.raises(EventSourceParseError, match="JSON array"):
            EventSourceLoader(path, EventStore()).read()

    def test_errors_share_base_class(self):
        assert issubclass(EventSourceNotFoundError, EventSourceError)
        assert issubclass(EventSourceParseError, EventSourceError)

    def test_non_mapping_elements_kept(self, tmp_path):
        path = tmp_path / "mixed.json"
        _write(path, [{"id": "a"}, 42, "text"])
        store = EventStore()
        EventSourceLoader(path, store).load()
        assert store.query({}).results == [{"id": "a"}, 42, "text"]

    def test_custom_encoding(self, tmp_path):
        path = tmp_path / "utf16.json"
        path.write_text(json.dumps([{"title": "爵士"}], ensure_ascii=False), encoding="utf-16")
        store = EventStore()
        EventSourceLoader(path, store, encoding="utf-16").load()
        assert store.snapshot().events[0].title == "爵士"


class TestLoad:
    """Test suite for loading into the store."""

    def test_load_swaps_store(self, loader):
        working_set = loader.load()
        assert working_set.version == 1
        assert len(loader.store) == 2

    def test_load_failure_leaves_store_untouched(self, tmp_path):
        store = EventStore()
        store.reload([{"id": "old"}])
        loader = EventSourceLoader(tmp_path / "missing.json", store)

        with pytest.raises(EventSourceError):
            loader.load()

        assert store.version == 1
        assert store.query({}).results == [{"id": "old"}]

    def test_load_logs_reload(self, loader, caplog):
        with caplog.at_level(logging.INFO, logger="event_query.source.loader"):
            loader.load()
        records = [r for r in caplog.records if getattr(r, "event", None) == "source.reloaded"]
        assert len(records) == 1
        assert records[0].event_count == 2
        assert records[0].component == "source"


class TestReloadIfChanged:
    """Test suite for change-driven reloads."""

    def test_first_call_loads(self, loader):
        working_set = loader.reload_if_changed()
        assert working_set is not None
        assert working_set.version == 1

    def test_unchanged_file_not_reloaded(self, loader):
        loader.load()
        assert loader.has_changed() is False
        assert loader.reload_if_changed() is None
        assert loader.store.version == 1

    def test_changed_file_reloaded(self, loader, events_file):
        loader.load()
        _write(events_file, [{"id": "c", "title": "Run"}])

        assert loader.has_changed() is True
        working_set = loader.reload_if_changed()

        assert working_set.version == 2
        assert loader.store.query({}).results == [{"id": "c", "title": "Run"}]

    def test_invalid_update_keeps_old_set(self, loader, events_file, caplog):
        loader.load()
        events_file.write_text("[{ not json", encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger="event_query.source.loader"):
            assert loader.reload_if_changed() is None

        assert loader.store.version == 1
        assert [r["id"] for r in loader.store.query({}).results] == ["a", "b"]
        assert any(getattr(r, "event", None) == "source.reload_failed" for r in caplog.records)

    def test_broken_file_not_reparsed_until_changed(self, loader, events_file):
        loader.load()
        events_file.write_text("{}", encoding="utf-8")

        assert loader.reload_if_changed() is None
        assert loader.has_changed() is False

        _write(events_file, [{"id": "fixed", "title": "Recovered event"}])
        assert loader.reload_if_changed().version == 2

    def test_huge_price_loads_as_unknown(self, loader, events_file):
        loader.load()
        events_file.write_text(
            '[{"id": "big", "title": "Gala", "price": 1' + "0" * 400 + "}]", encoding="utf-8"
        )

        working_set = loader.reload_if_changed()

        assert working_set.version == 2
        assert working_set.events[0].price_min is None

    def test_integer_past_digit_limit_keeps_old_set(self, loader, events_file):
        loader.load()
        events_file.write_text("[1" + "0" * 5000 + "]", encoding="utf-8")

        assert loader.reload_if_changed() is None
        assert loader.store.version == 1
        assert loader.has_changed() is False

    def test_deep_nesting_keeps_old_set(self, loader, events_file):
        loader.load()
        events_file.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")

        assert loader.reload_if_changed() is None
        assert loader.store.version == 1

    def test_deleted_file_keeps_old_set(self, loader, events_file):
        loader.load()
        events_file.unlink()

        assert loader.reload_if_changed() is None
        assert len(loader.store) == 2
