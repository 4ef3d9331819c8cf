"""Rolling ambient baseline estimation with stability debounce."""

import logging

from collections.abc import Sequence

import numpy as np

from rovocs.analysis.types import AnalyzerConfig, Baseline
from rovocs.analysis.utils import relative_change
from rovocs.models.reading import SensorReading

logger = logging.getLogger(__name__)


def update_stability(
    previous: tuple[float, float],
    current: tuple[float, float],
    counter: int,
    threshold: float,
    duration: int,
) -> tuple[int, bool]:
    """
    Debounce baseline stability across consecutive rolling means.

    The counter advances only when every channel moved by less than
    `threshold` relative to its previous mean; any larger move, or a zero
    previous mean, resets it.

    Args:
        previous: Previous (tvoc, eco2) means
        current: New (tvoc, eco2) means
        counter: Consecutive qualifying updates so far
        threshold: Max relative change per update
        duration: Qualifying updates required for stability

    Returns:
        Tuple of (updated counter, stable flag)
    """
    for old, new in zip(previous, current, strict=True):
        change = relative_change(new, old)
        if change is None or not change < threshold:
            return 0, False

    counter += 1
    return counter, counter >= duration


class BaselineEstimator:
    """
    Maintains the rolling-mean baseline for a session.

    The mean is stored on every update, stable or not. is_stable only gates
    downstream detection.
    """

    def __init__(self, config: AnalyzerConfig | None = None):
        self.config = config or AnalyzerConfig()
        self.baseline = Baseline()

    def update(self, window: Sequence[SensorReading]) -> bool:
        """
        Recompute the baseline from the most recent readings.

        Args:
            window: Most recent readings, oldest first. Only the last
                baseline_window_size entries are used.

        Returns:
            True if an update occurred, False if history was insufficient
        """
        size = self.config.baseline_window_size
        if len(window) < size:
            return False

        recent = window[-size:]
        new_tvoc = float(np.mean([r.tvoc for r in recent]))
        new_eco2 = float(np.mean([r.eco2 for r in recent]))

        was_stable = self.baseline.is_stable
        counter, stable = update_stability(
            (self.baseline.tvoc, self.baseline.eco2),
            (new_tvoc, new_eco2),
            self.baseline.sample_count,
            self.config.stability_threshold,
            self.config.stability_duration,
        )

        self.baseline.tvoc = new_tvoc
        self.baseline.eco2 = new_eco2
        self.baseline.sample_count = counter
        self.baseline.is_stable = stable
        self.baseline.last_updated = recent[-1].recorded_at

        if stable != was_stable:
            logger.debug(
                f"Baseline {'stable' if stable else 'unstable'}: "
                f"tvoc={new_tvoc:.2f}, eco2={new_eco2:.2f}"
            )
        return True

    def snapshot(self) -> Baseline:
        """Get a copy of the current baseline."""
        return self.baseline.model_copy()

    def reset(self) -> None:
        self.baseline = Baseline()
