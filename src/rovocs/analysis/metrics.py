"""Per-channel metrics for completed breath events."""

import logging

from rovocs.analysis.types import AnalyzerConfig, BreathEvent, BreathMetric
from rovocs.constants import MetricChannel

logger = logging.getLogger(__name__)


class MetricsCalculator:
    """
    Derives breath metrics from a completed event.

    Formulas (per channel, baseline frozen at event start):
        Peak%     = (Peak - Baseline) / Baseline * 100
        T_peak    = peak_time - start_time (seconds)
        Slope     = (Peak - Baseline) / T_peak, only when T_peak > 0
        Threshold = Baseline + fraction * Baseline
        T_rec     = end_time - peak_time (seconds)

    Undefined values (zero baseline, zero elapsed time) are omitted rather
    than reported as NaN or infinity.
    """

    def __init__(self, config: AnalyzerConfig | None = None):
        self.config = config or AnalyzerConfig()

    def compute(self, event: BreathEvent) -> list[BreathMetric]:
        """
        Compute metrics for each channel that recorded a peak.

        Args:
            event: Completed breath event

        Returns:
            Zero, one or two metrics, TVOC first

        Raises:
            ValueError: If the event has not completed
        """
        if not event.is_complete:
            raise ValueError("Metrics can only be computed for a completed event")

        metrics = []
        for channel in MetricChannel:
            peak = event.peak(channel)
            if peak is None:
                continue
            metric = self._compute_channel(event, channel, peak)
            if metric is not None:
                metrics.append(metric)
        return metrics

    def _compute_channel(
        self, event: BreathEvent, channel: MetricChannel, peak: float
    ) -> BreathMetric | None:
        baseline = event.baseline(channel)
        if baseline == 0:
            logger.debug(f"Skipping {channel.value} metric: zero baseline")
            return None

        time_to_peak = None
        if event.peak_time is not None:
            time_to_peak = (event.peak_time - event.start_time).total_seconds()

        slope = None
        if time_to_peak is not None and time_to_peak > 0:
            slope = (peak - baseline) / time_to_peak

        recovery_time = None
        if event.peak_time is not None and event.end_time is not None:
            recovery_time = (event.end_time - event.peak_time).total_seconds()

        return BreathMetric(
            channel=channel,
            baseline=baseline,
            peak=peak,
            percent_rise=(peak - baseline) / baseline * 100,
            time_to_peak=time_to_peak,
            slope=slope,
            recovery_time=recovery_time,
            threshold=baseline + self.config.metric_recovery_fraction * baseline,
        )
