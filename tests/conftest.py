"""
Pytest configuration and shared fixtures for the test suite.

This file provides common configuration and fixtures used across
all test modules in the tracker test suite.
"""

import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path

import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from killtracker.database.backends import MemoryBackend
from killtracker.database.storage import AggregateStore
from killtracker.streaming.processor import ChatStreamProcessor


class TickingClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime = datetime(2025, 9, 15, 21, 30, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock():
    """Create a ticking clock."""
    return TickingClock()


@pytest.fixture
def backend():
    """Create an empty in-memory backend."""
    return MemoryBackend()


@pytest.fixture
def store(backend, clock):
    """Create a record store over the in-memory backend."""
    return AggregateStore(backend, clock=clock)


@pytest.fixture
def processor(store):
    """Create a stream processor over the test store."""
    return ChatStreamProcessor(store)


@pytest.fixture
def sample_chat_lines():
    """Sample chat lines for testing."""
    return [
        "[21:30:01] Welcome to RuneScape.",
        "[21:30:05] You have killed 4 Vorkath (hm).",
        "[21:30:09] Your loot is worth 120,000 coins.",
        "[21:31:02] You have killed 5 Vorkath (hm).",
        "[21:31:03] A golden beam shines over one of your items, You receive: 1x Brawling Gloves",
        "[21:32:10] You have killed 12 General Graardor in normal mode.",
        "[21:32:11] A golden beam shines over one of your items, You receive: 1x Ribs of Chaos",
    ]


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# Pytest collection configuration
def pytest_collection_modifyitems(config, items):
    """Modify collected test items with markers."""
    for item in items:
        if "test_poller" in item.fspath.basename or "test_cli" in item.fspath.basename:
            item.add_marker(pytest.mark.integration)
