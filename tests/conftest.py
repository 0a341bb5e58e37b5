"""Shared fixtures for intradayvol tests."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from intradayvol.models.bar import Bar, BarSeries
from intradayvol.providers.mock import MockProvider

ET = ZoneInfo("America/New_York")


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def sample_bars() -> list[Bar]:
    """5 contiguous 5-min bars."""
    base = datetime(2024, 1, 16, 9, 30, tzinfo=ET)
    bars = []
    for i in range(5):
        bars.append(Bar(
            timestamp=base + timedelta(minutes=5 * i),
            open=150.0 + i * 0.1,
            high=150.5 + i * 0.1,
            low=149.5 + i * 0.1,
            close=150.2 + i * 0.1,
            volume=10000.0 + i * 500,
        ))
    return bars


@pytest.fixture
def two_day_series() -> BarSeries:
    """12 bars on each of 2024-01-16 and 2024-01-17 with a gentle zig-zag."""
    bars = []
    for day in (16, 17):
        base = datetime(2024, 1, day, 9, 30, tzinfo=ET)
        for i in range(12):
            close = 100.0 + (0.2 if i % 2 else -0.1) + 0.05 * i + (day - 16)
            bars.append(Bar(
                timestamp=base + timedelta(minutes=5 * i),
                open=close - 0.05,
                high=close + 0.3,
                low=close - 0.3,
                close=close,
                volume=1000.0 + 100 * i,
            ))
    return BarSeries.from_bars(bars, "TEST")
