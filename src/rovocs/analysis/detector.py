"""Breath event detection state machine."""

import logging
import math

from rovocs.analysis.types import (
    AnalyzerConfig,
    Baseline,
    BreathEvent,
    DetectorState,
    EventTransition,
    IdleState,
    OpenState,
)
from rovocs.analysis.utils import relative_change, relative_rise
from rovocs.models.reading import SensorReading

logger = logging.getLogger(__name__)


class BreathEventDetector:
    """
    Tracks at most one breath event per session.

    Idle -> Open when either channel rises more than breath_threshold above a
    stable baseline. Open -> Idle when both channels return within
    recovery_threshold of the baseline frozen at event start. A new rise
    while Open is absorbed into the current event.
    """

    def __init__(self, config: AnalyzerConfig | None = None):
        self.config = config or AnalyzerConfig()
        self.state: DetectorState = IdleState()

    @property
    def current_event(self) -> BreathEvent | None:
        """The open event, if any."""
        if isinstance(self.state, OpenState):
            return self.state.event
        return None

    def step(
        self, reading: SensorReading, baseline: Baseline
    ) -> tuple[EventTransition, BreathEvent | None]:
        """
        Evaluate one reading against the current baseline.

        Args:
            reading: Newly absorbed reading
            baseline: Current baseline (detection is skipped unless stable)

        Returns:
            Tuple of (transition, event snapshot). The snapshot is the
            completed event for CLOSED and None for NONE.
        """
        if not baseline.is_stable:
            return EventTransition.NONE, None

        if isinstance(self.state, IdleState):
            if not self._is_breath_start(reading, baseline):
                return EventTransition.NONE, None
            event = BreathEvent(
                start_time=reading.recorded_at,
                baseline_tvoc=baseline.tvoc,
                baseline_eco2=baseline.eco2,
            )
            self.state = OpenState(event=event)
            logger.debug(
                f"Breath event opened at {reading.recorded_at.isoformat()} "
                f"(baseline tvoc={baseline.tvoc:.2f}, eco2={baseline.eco2:.2f})"
            )
            return EventTransition.OPENED, event

        event, peak_changed = self._track_peaks(self.state.event, reading)

        if self._is_recovered(reading, event):
            completed = event.model_copy(
                update={"end_time": reading.recorded_at, "is_complete": True}
            )
            self.state = IdleState()
            logger.debug(
                f"Breath event closed at {reading.recorded_at.isoformat()} "
                f"(peak tvoc={completed.peak_tvoc}, eco2={completed.peak_eco2})"
            )
            return EventTransition.CLOSED, completed

        self.state = OpenState(event=event)
        if peak_changed:
            return EventTransition.PEAK_UPDATED, event
        return EventTransition.NONE, None

    def clear(self) -> None:
        """Drop any open event without completing it."""
        self.state = IdleState()

    def _is_breath_start(self, reading: SensorReading, baseline: Baseline) -> bool:
        threshold = self.config.breath_threshold
        for value, reference in (
            (reading.tvoc, baseline.tvoc),
            (reading.eco2, baseline.eco2),
        ):
            rise = relative_rise(value, reference)
            if rise is not None and rise > threshold:
                return True
        return False

    def _is_recovered(self, reading: SensorReading, event: BreathEvent) -> bool:
        threshold = self.config.recovery_threshold
        for value, reference in (
            (reading.tvoc, event.baseline_tvoc),
            (reading.eco2, event.baseline_eco2),
        ):
            deviation = relative_change(value, reference)
            if deviation is None or not abs(deviation) < threshold:
                return False
        return True

    @staticmethod
    def _track_peaks(
        event: BreathEvent, reading: SensorReading
    ) -> tuple[BreathEvent, bool]:
        """Raise recorded peaks to this reading where it exceeds them. NaN never peaks."""
        update: dict[str, object] = {}
        if not math.isnan(reading.tvoc) and (
            event.peak_tvoc is None or reading.tvoc > event.peak_tvoc
        ):
            update["peak_tvoc"] = reading.tvoc
            update["peak_time"] = reading.recorded_at
        if not math.isnan(reading.eco2) and (
            event.peak_eco2 is None or reading.eco2 > event.peak_eco2
        ):
            update["peak_eco2"] = reading.eco2
        if not update:
            return event, False
        return event.model_copy(update=update), True
