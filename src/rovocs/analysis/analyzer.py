"""Breath analysis engine facade."""

import logging

from rovocs.analysis.baseline import BaselineEstimator
from rovocs.analysis.detector import BreathEventDetector
from rovocs.analysis.metrics import MetricsCalculator
from rovocs.analysis.types import (
    AnalysisUpdate,
    AnalyzerConfig,
    Baseline,
    BreathEvent,
    EventTransition,
)
from rovocs.analysis.window import ReadingWindow
from rovocs.constants import BreathAnalysisConstants as BAC
from rovocs.models.reading import SensorReading

logger = logging.getLogger(__name__)


class BreathAnalyzer:
    """
    Per-session breath analysis engine.

    Each reading flows through the window, the baseline estimator, the event
    detector and, when an event closes, the metrics calculator. All work is
    synchronous and instances share no state, so one analyzer per session
    can run on its own worker without locking.

    A reading arriving more than max_gap_seconds after the previous one
    resets the analyzer first: history and baseline are discarded and any
    open event is dropped without metrics.
    """

    def __init__(self, config: AnalyzerConfig | None = None):
        """
        Initialize analyzer.

        Args:
            config: Analyzer parameters (defaults if omitted)
        """
        self.config = config or AnalyzerConfig()
        self.window = ReadingWindow(self.config.retention_seconds)
        self.estimator = BaselineEstimator(self.config)
        self.detector = BreathEventDetector(self.config)
        self.calculator = MetricsCalculator(self.config)

    def process_reading(self, reading: SensorReading) -> AnalysisUpdate:
        """
        Absorb one reading and return whatever changed.

        Args:
            reading: Next reading in arrival order

        Returns:
            AnalysisUpdate with the stable baseline, an event snapshot on
            open/peak/close transitions, and metrics right after a close
        """
        if self._is_gap(reading):
            self.reset()

        self.window.absorb(reading)
        self.estimator.update(self.window.recent(self.config.baseline_window_size))
        baseline = self.estimator.baseline

        transition, event = self.detector.step(reading, baseline)

        metrics = None
        if transition is EventTransition.CLOSED and event is not None:
            metrics = self.calculator.compute(event)
            logger.debug(f"Computed {len(metrics)} metric(s) for closed event")

        return AnalysisUpdate(
            baseline=baseline.model_copy() if baseline.is_stable else None,
            event=event,
            metrics=metrics,
            transition=transition,
        )

    @property
    def baseline(self) -> Baseline:
        """Snapshot of the current baseline."""
        return self.estimator.snapshot()

    @property
    def current_event(self) -> BreathEvent | None:
        """The open event, if any."""
        return self.detector.current_event

    def recent_readings(
        self, minutes: float = BAC.DEFAULT_RECENT_MINUTES
    ) -> list[SensorReading]:
        """Readings within `minutes` of the newest absorbed reading."""
        return self.window.since(minutes * 60)

    def clear_current_event(self) -> None:
        """Discard the open event, if any, without computing metrics."""
        self.detector.clear()

    def reset(self) -> None:
        """Return to the initial state: empty history, unstable baseline, idle."""
        self.window.clear()
        self.estimator.reset()
        self.detector.clear()

    def _is_gap(self, reading: SensorReading) -> bool:
        max_gap = self.config.max_gap_seconds
        previous = self.window.latest
        if max_gap is None or previous is None:
            return False

        elapsed = (reading.recorded_at - previous.recorded_at).total_seconds()
        if elapsed <= max_gap:
            return False

        logger.warning(
            f"Reading gap of {elapsed:.1f}s exceeds {max_gap:.1f}s, "
            "resetting baseline and dropping open event"
        )
        return True
