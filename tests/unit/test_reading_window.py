"""
Unit tests for the reading window.

Tests arrival-order retention, age-based pruning, and windowed access.
"""

from datetime import timedelta

import pytest

from rovocs.analysis.window import ReadingWindow
from tests.helpers.synthetic_data import constant_stream, make_reading


class TestAbsorb:
    """Test appending and pruning."""

    def test_keeps_arrival_order(self):
        window = ReadingWindow()
        readings = constant_stream(5)
        for reading in readings:
            window.absorb(reading)

        assert window.recent(5) == readings
        assert window.latest == readings[-1]

    def test_prunes_by_age_relative_to_latest(self):
        """No retained reading is older than the horizon after any absorb."""
        window = ReadingWindow(retention_seconds=300)
        for reading in constant_stream(400):
            window.absorb(reading)
            cutoff = reading.recorded_at - timedelta(seconds=300)
            assert all(r.recorded_at > cutoff for r in window.recent(len(window)))

        # 2s cadence, strict horizon: 150 readings span (latest - 298s .. latest)
        assert len(window) == 150

    def test_out_of_order_timestamps_accepted(self):
        window = ReadingWindow()
        later = make_reading(50, 600, at_seconds=10)
        earlier = make_reading(51, 601, at_seconds=4)

        window.absorb(later)
        window.absorb(earlier)

        assert window.recent(2) == [later, earlier]

    def test_stale_reading_pruned_when_newest_jumps_ahead(self):
        window = ReadingWindow(retention_seconds=60)
        window.absorb(make_reading(50, 600, at_seconds=0))
        window.absorb(make_reading(50, 600, at_seconds=61))

        assert len(window) == 1
        assert window.latest.recorded_at == make_reading(50, 600, 61).recorded_at


class TestRecent:
    """Test windowed access."""

    def test_returns_last_n(self):
        window = ReadingWindow()
        readings = constant_stream(10)
        for reading in readings:
            window.absorb(reading)

        assert window.recent(3) == readings[-3:]

    def test_more_than_available_returns_all(self):
        window = ReadingWindow()
        readings = constant_stream(4)
        for reading in readings:
            window.absorb(reading)

        assert window.recent(30) == readings

    def test_zero_returns_empty(self):
        window = ReadingWindow()
        window.absorb(make_reading(50, 600, 0))
        assert window.recent(0) == []

    def test_negative_size_is_programmer_error(self):
        with pytest.raises(ValueError):
            ReadingWindow().recent(-1)

    def test_since_is_relative_to_latest(self):
        window = ReadingWindow()
        for reading in constant_stream(60):  # 0..118s
            window.absorb(reading)

        last_minute = window.since(60)
        assert len(last_minute) == 30
        assert last_minute[0].recorded_at == window.recent(30)[0].recorded_at

    def test_since_on_empty_window(self):
        assert ReadingWindow().since(60) == []

    def test_clear(self):
        window = ReadingWindow()
        window.absorb(make_reading(50, 600, 0))
        window.clear()
        assert len(window) == 0
        assert window.latest is None
