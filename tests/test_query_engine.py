"""Unit tests for the query engine.

Tests the EventQueryEngine including:
- Categorical filters (type, district) with exact matching
- Free-only detection, including the zero-minimum rule
- Multi-word AND text search
- Date-range overlap with open and unparsable bounds
- Weekday-of-occurrence matching across multi-day events
- Pagination and result ordering
"""

from datetime import datetime, timezone

import pytest

from event_query.domain.models import NormalizedEvent
from event_query.query import (
    EventQueryEngine,
    QueryParams,
    effective_interval,
    hits_weekday,
    overlaps_range,
    query,
)


def _ids(result):
    return [record["id"] for record in result.results]


def _event(**fields):
    return NormalizedEvent(raw_ref={"id": fields.pop("id", "x")}, **fields)


def _utc(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    return EventQueryEngine()


class TestNoFilters:
    """Test suite for queries without predicates."""

    def test_returns_everything_in_order(self, engine, normalized_events):
        result = engine.execute(normalized_events, {})
        assert result.total == 6
        assert result.offset == 0
        assert result.limit == 200
        assert _ids(result) == ["evt-1", "evt-2", "evt-3", "evt-4", "evt-5", "evt-6"]

    def test_results_are_raw_records(self, engine, normalized_events, raw_events):
        result = engine.execute(normalized_events, None)
        assert result.results[0] is normalized_events[0].raw_ref
        assert result.results[1] == raw_events[1]

    def test_empty_working_set(self, engine):
        result = engine.execute((), {"q": "jazz"})
        assert result.total == 0
        assert result.results == []


class TestCategoricalFilters:
    """Test suite for type and district."""

    def test_type_filter(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"type": "music"})
        assert _ids(result) == ["evt-1", "evt-2", "evt-5"]

    def test_type_is_case_sensitive(self, engine, normalized_events):
        assert engine.execute(normalized_events, {"type": "Music"}).total == 0

    def test_district_filter(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"district": "Daan"})
        assert _ids(result) == ["evt-1", "evt-5"]

    def test_empty_value_disables_filter(self, engine, normalized_events):
        assert engine.execute(normalized_events, {"type": "", "district": ""}).total == 6

    def test_filters_combine_with_and(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"type": "music", "district": "Xinyi"})
        assert _ids(result) == ["evt-2"]


class TestFreeOnly:
    """Test suite for the free-only filter."""

    def test_free_only(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"freeOnly": "true"})
        assert _ids(result) == ["evt-1", "evt-3", "evt-6"]

    def test_free_only_case_insensitive(self, engine, normalized_events):
        assert engine.execute(normalized_events, {"freeOnly": "TRUE"}).total == 3

    @pytest.mark.parametrize("value", ["false", "1", "yes", ""])
    def test_other_values_disable_filter(self, engine, normalized_events, value):
        assert engine.execute(normalized_events, {"freeOnly": value}).total == 6

    def test_zero_minimum_with_positive_maximum_is_free(self, engine):
        events = (_event(id="a", price_min=0.0, price_max=500.0),)
        assert engine.execute(events, {"freeOnly": "true"}).total == 1

    def test_unknown_prices_are_not_free(self, engine):
        events = (_event(id="a"),)
        assert engine.execute(events, {"freeOnly": "true"}).total == 0


class TestTextSearch:
    """Test suite for q."""

    def test_single_word(self, engine, normalized_events):
        assert _ids(engine.execute(normalized_events, {"q": "jazz"})) == ["evt-1", "evt-2"]

    def test_all_words_must_match(self, engine, normalized_events):
        assert _ids(engine.execute(normalized_events, {"q": "jazz night"})) == ["evt-1"]

    def test_case_and_whitespace_insensitive(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"q": "  JAZZ   Night "})
        assert _ids(result) == ["evt-1"]

    def test_substring_match(self, engine, normalized_events):
        assert _ids(engine.execute(normalized_events, {"q": "mark"})) == ["evt-1", "evt-4"]

    def test_matches_any_indexed_field(self, engine, normalized_events):
        assert _ids(engine.execute(normalized_events, {"q": "guitar"})) == ["evt-5"]
        assert _ids(engine.execute(normalized_events, {"q": "example.com/art"})) == ["evt-3"]

    def test_blank_query_disables_search(self, engine, normalized_events):
        assert engine.execute(normalized_events, {"q": "   "}).total == 6


class TestDateRange:
    """Test suite for dateFrom/dateTo overlap."""

    def test_date_from_only(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"dateFrom": "2024-06-06"})
        assert _ids(result) == ["evt-2", "evt-4"]

    def test_date_to_only(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"dateTo": "2024-05-31"})
        assert _ids(result) == ["evt-3"]

    def test_closed_window(self, engine, normalized_events):
        result = engine.execute(
            normalized_events, {"dateFrom": "2024-06-01", "dateTo": "2024-06-03"}
        )
        assert _ids(result) == ["evt-1", "evt-6"]

    def test_undated_events_excluded(self, engine, normalized_events):
        result = engine.execute(
            normalized_events, {"dateFrom": "2000-01-01", "dateTo": "2100-01-01"}
        )
        assert "evt-5" not in _ids(result)
        assert result.total == 5

    def test_unparsable_bound_still_excludes_undated(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"dateFrom": "not-a-date"})
        assert result.total == 5
        assert "evt-5" not in _ids(result)

    def test_boundaries_are_inclusive(self):
        event = _event(start="2024-06-03", end="2024-06-05")
        assert overlaps_range(event, _utc(2024, 6, 5), None)
        assert overlaps_range(event, None, _utc(2024, 6, 3))
        assert not overlaps_range(event, _utc(2024, 6, 5, 1), None)

    def test_last_day_overlaps(self, engine):
        events = (_event(id="art", start="2024-05-10", end="2024-05-12"),)
        assert engine.execute(events, {"dateFrom": "2024-05-12"}).total == 1
        assert engine.execute(events, {"dateFrom": "2024-05-13"}).total == 0

    def test_single_bound_event_is_an_instant(self):
        event = _event(end="2024-06-02")
        assert effective_interval(event) == (_utc(2024, 6, 2), _utc(2024, 6, 2))

    def test_no_dates_no_interval(self):
        assert effective_interval(_event()) is None
        assert not overlaps_range(_event(), None, None)

    def test_unparsable_event_date_counts_as_missing(self):
        assert effective_interval(_event(start="sometime in June")) is None

    def test_offset_is_converted_to_utc(self):
        event = _event(start="2024-06-09T18:00:00+08:00")
        assert effective_interval(event)[0] == _utc(2024, 6, 9, 10)


class TestWeekday:
    """Test suite for weekday-of-occurrence matching."""

    def test_numeric_weekday(self, engine, normalized_events):
        assert _ids(engine.execute(normalized_events, {"weekday": "3"})) == ["evt-1"]

    def test_named_weekday(self, engine, normalized_events):
        assert _ids(engine.execute(normalized_events, {"weekday": "三"})) == ["evt-1"]
        assert _ids(engine.execute(normalized_events, {"weekday": "星期三"})) == ["evt-1"]

    def test_sunday(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"weekday": "0"})
        assert _ids(result) == ["evt-3", "evt-4", "evt-6"]
        assert _ids(engine.execute(normalized_events, {"weekday": "禮拜天"})) == _ids(result)

    def test_unrecognized_weekday_disables_filter(self, engine, normalized_events):
        assert engine.execute(normalized_events, {"weekday": "7"}).total == 6
        assert engine.execute(normalized_events, {"weekday": "someday"}).total == 6

    def test_multi_day_event_matches_each_day(self):
        # Monday 2024-06-03 through Wednesday 2024-06-05
        event = _event(start="2024-06-03", end="2024-06-05")
        assert [day for day in range(7) if hits_weekday(event, day)] == [1, 2, 3]

    def test_week_long_event_matches_every_day(self):
        event = _event(start="2024-06-01", end="2024-06-30")
        assert all(hits_weekday(event, day) for day in range(7))

    def test_end_before_start_tests_start_day(self):
        # 2024-06-05 is a Wednesday
        event = _event(start="2024-06-05", end="2024-06-01")
        assert [day for day in range(7) if hits_weekday(event, day)] == [3]

    def test_undated_event_never_matches(self):
        assert not any(hits_weekday(_event(), day) for day in range(7))


class TestPagination:
    """Test suite for limit/offset."""

    def test_limit(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"limit": "2"})
        assert result.total == 6
        assert result.limit == 2
        assert _ids(result) == ["evt-1", "evt-2"]

    def test_offset(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"limit": "2", "offset": "4"})
        assert result.offset == 4
        assert _ids(result) == ["evt-5", "evt-6"]

    def test_offset_past_total(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"offset": "50"})
        assert result.total == 6
        assert result.results == []

    def test_total_counts_filtered_set(self, engine, normalized_events):
        result = engine.execute(normalized_events, {"type": "music", "limit": "1", "offset": "1"})
        assert result.total == 3
        assert _ids(result) == ["evt-2"]


class TestEngineBehaviour:
    """Test suite for engine-wide properties."""

    def test_accepts_query_params(self, engine, normalized_events):
        params = QueryParams(q="jazz")
        assert engine.execute(normalized_events, params).total == 2

    def test_repeated_queries_are_identical(self, engine, normalized_events):
        params = {"q": "market", "weekday": "0", "limit": "5"}
        assert engine.execute(normalized_events, params) == engine.execute(normalized_events, params)

    def test_query_does_not_mutate_working_set(self, engine, normalized_events, raw_events):
        before = list(normalized_events)
        engine.execute(normalized_events, {"q": "jazz", "freeOnly": "true"})
        assert list(normalized_events) == before
        assert normalized_events[0].raw_ref == raw_events[0]

    def test_module_level_query(self, normalized_events):
        assert query(normalized_events, {"district": "Songshan"}).total == 1
