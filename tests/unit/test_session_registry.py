"""
Unit tests for the per-session analyzer registry.
"""

from rovocs.analysis.service import SessionRegistry
from rovocs.analysis.types import AnalyzerConfig, EventTransition
from tests.helpers.synthetic_data import constant_stream, make_reading


class TestSessionRegistry:
    def test_get_creates_once(self):
        registry = SessionRegistry()
        assert registry.get("a") is registry.get("a")
        assert registry.active_sessions() == ["a"]

    def test_sessions_are_isolated(self):
        registry = SessionRegistry()
        for reading in constant_stream(40, tvoc=50.0):
            registry.process("a", reading)
        for reading in constant_stream(40, tvoc=200.0, eco2=900.0):
            registry.process("b", reading)

        update = registry.process("a", make_reading(90.0, 600.0, 80))

        assert update.transition is EventTransition.OPENED
        assert registry.get("b").current_event is None
        assert registry.get("b").baseline.tvoc == 200.0

    def test_config_applies_to_new_analyzers(self):
        config = AnalyzerConfig(baseline_window_size=5)
        registry = SessionRegistry(config)
        assert registry.get("a").config.baseline_window_size == 5

    def test_end(self):
        registry = SessionRegistry()
        registry.get("a")

        assert registry.end("a") is True
        assert registry.end("a") is False
        assert registry.active_sessions() == []

    def test_end_with_open_event(self):
        registry = SessionRegistry()
        for reading in constant_stream(40):
            registry.process("a", reading)
        registry.process("a", make_reading(90.0, 600.0, 80))

        assert registry.end("a") is True
        assert "a" not in registry.active_sessions()
