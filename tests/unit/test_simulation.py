"""
Unit tests for the synthetic stream generator.
"""

import numpy as np
import pytest

from rovocs.analysis.analyzer import BreathAnalyzer
from rovocs.analysis.types import EventTransition
from rovocs.simulation import breath_pulse, generate_session
from tests.helpers.synthetic_data import START


class TestBreathPulse:
    def test_shape(self):
        profile = breath_pulse(np.array([-2.0, 0.0, 2.0, 4.0, 10.0]))

        assert profile[0] == 0.0
        assert profile[1] == 0.0
        assert profile[2] == pytest.approx(0.5)
        assert profile[3] == pytest.approx(1.0)
        assert profile[4] == pytest.approx(np.exp(-1.0))


class TestGenerateSession:
    def test_cadence_and_length(self):
        readings = generate_session(60.0, 2.0, start=START, seed=1)

        assert len(readings) == 30
        assert readings[0].recorded_at == START
        assert (readings[1].recorded_at - readings[0].recorded_at).total_seconds() == 2.0

    def test_seed_is_reproducible(self):
        first = generate_session(60.0, start=START, seed=3)
        second = generate_session(60.0, start=START, seed=3)
        assert first == second

    def test_ambient_levels(self):
        readings = generate_session(120.0, start=START, seed=5)
        assert np.mean([r.tvoc for r in readings]) == pytest.approx(50.0, rel=0.02)
        assert np.mean([r.eco2 for r in readings]) == pytest.approx(600.0, rel=0.02)

    def test_analyzer_detects_simulated_breaths(self):
        readings = generate_session(
            300.0, breath_offsets=(120.0, 200.0), start=START, seed=7
        )
        analyzer = BreathAnalyzer()

        closed = [
            update
            for update in (analyzer.process_reading(r) for r in readings)
            if update.transition is EventTransition.CLOSED
        ]

        assert len(closed) == 2
        for update in closed:
            tvoc = update.metrics[0]
            assert tvoc.percent_rise > 30.0
            assert tvoc.time_to_peak is not None
