"""Shared fixtures for the event query service tests."""

import json
import logging
from pathlib import Path

import pytest

from event_query.logging.context import clear_log_context
from event_query.normalization import EventNormalizer
from event_query.store import EventStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"
EVENTS_FIXTURE = FIXTURES_DIR / "events.json"

ENV_VARS = ("PORT", "EVENTS_FILE", "LOG_LEVEL", "ENVIRONMENT")


@pytest.fixture
def raw_events():
    """The six sample events from tests/fixtures/events.json."""
    with open(EVENTS_FIXTURE, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def normalized_events(raw_events):
    """Sample events run through the normalizer."""
    return EventNormalizer().normalize_batch(raw_events)


@pytest.fixture
def store(raw_events):
    """EventStore already loaded with the sample events."""
    event_store = EventStore()
    event_store.reload(raw_events)
    return event_store


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Clear every environment override so tests see config file values."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def clean_log_context():
    """Reset logging context around every test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def restore_root_logging():
    """Put the root logger back the way it was after configure_logging()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
