"""
Signal and breath quality scoring.

Informational helpers for presentation layers. Nothing here gates detection.
"""

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, Field

from rovocs.analysis.types import Baseline, BreathMetric
from rovocs.analysis.utils import relative_change, relative_rise
from rovocs.constants import BreathAnalysisConstants as BAC
from rovocs.constants import MetricChannel
from rovocs.constants import QualityConstants as QC
from rovocs.models.reading import SensorReading


class BreathQualityAssessment(BaseModel):
    """Overall quality grade for one breath."""

    overall: Literal["excellent", "fair", "poor"] = Field(description="Grade")
    tvoc_score: int = Field(ge=0, le=100, description="TVOC channel score")
    eco2_score: int = Field(ge=0, le=100, description="eCO2 channel score")
    recommendations: list[str] = Field(
        default_factory=list, description="User-facing suggestions"
    )


def is_exhalation_start(
    reading: SensorReading,
    baseline: Baseline,
    threshold: float = BAC.BREATH_THRESHOLD,
) -> bool:
    """Check whether either channel rose more than threshold over a stable baseline."""
    if not baseline.is_stable:
        return False
    for channel in MetricChannel:
        rise = relative_rise(
            getattr(reading, channel.value), baseline.value(channel)
        )
        if rise is not None and rise > threshold:
            return True
    return False


def is_exhalation_end(
    reading: SensorReading,
    baseline: Baseline,
    threshold: float = BAC.RECOVERY_THRESHOLD,
) -> bool:
    """Check whether both channels are within threshold of a stable baseline."""
    if not baseline.is_stable:
        return False
    for channel in MetricChannel:
        deviation = relative_change(
            getattr(reading, channel.value), baseline.value(channel)
        )
        if deviation is None or not abs(deviation) < threshold:
            return False
    return True


def _within(value: float, bounds: tuple[float, float], inclusive: bool) -> bool:
    low, high = bounds
    if inclusive:
        return low <= value <= high
    return low < value < high


def signal_quality(reading: SensorReading, baseline: Baseline) -> int:
    """
    Score a reading's plausibility from 0 to 100.

    Each implausible field costs a fixed penalty. An unstable baseline
    scores 0 since nothing can be judged against it yet.
    """
    if not baseline.is_stable:
        return 0

    checks = [
        _within(reading.tvoc, QC.TVOC_RANGE, inclusive=False),
        _within(reading.eco2, QC.ECO2_RANGE, inclusive=False),
        _within(reading.temperature, QC.TEMPERATURE_RANGE, inclusive=False),
        _within(reading.humidity, QC.HUMIDITY_RANGE, inclusive=True),
    ]
    quality = 100 - QC.FIELD_PENALTY * checks.count(False)
    return max(0, quality)


def _channel_score(
    metric: BreathMetric | None,
    excellent_rise: float,
    excellent_recovery: float,
    fair_rise: float,
) -> int | None:
    """Score one channel, or None when it was not measured."""
    if metric is None:
        return None
    if (
        metric.percent_rise > excellent_rise
        and metric.recovery_time
        and metric.recovery_time < excellent_recovery
    ):
        return 100
    if metric.percent_rise > fair_rise:
        return 50
    return 25


def assess_breath_quality(metrics: Sequence[BreathMetric]) -> BreathQualityAssessment:
    """
    Grade a breath from its per-channel metrics.

    Args:
        metrics: Metrics for one completed event

    Returns:
        Assessment with channel scores, overall grade and recommendations
    """
    by_channel = {m.channel: m for m in metrics}
    recommendations = []

    tvoc_score = _channel_score(
        by_channel.get(MetricChannel.TVOC),
        QC.TVOC_EXCELLENT_RISE,
        QC.TVOC_EXCELLENT_RECOVERY,
        QC.TVOC_FAIR_RISE,
    )
    if tvoc_score == 25:
        recommendations.append("Low VOC concentration detected. Try deeper breathing.")

    eco2_score = _channel_score(
        by_channel.get(MetricChannel.ECO2),
        QC.ECO2_EXCELLENT_RISE,
        QC.ECO2_EXCELLENT_RECOVERY,
        QC.ECO2_FAIR_RISE,
    )
    if eco2_score == 25:
        recommendations.append(
            "Low CO2 concentration detected. Ensure proper exhalation."
        )

    tvoc_score = tvoc_score or 0
    eco2_score = eco2_score or 0
    overall_score = (tvoc_score + eco2_score) / 2

    overall: Literal["excellent", "fair", "poor"]
    if overall_score >= QC.OVERALL_EXCELLENT:
        overall = "excellent"
    elif overall_score >= QC.OVERALL_FAIR:
        overall = "fair"
    else:
        overall = "poor"
        recommendations.append(
            "Consider consulting a healthcare professional for respiratory assessment."
        )

    return BreathQualityAssessment(
        overall=overall,
        tvoc_score=tvoc_score,
        eco2_score=eco2_score,
        recommendations=recommendations,
    )
