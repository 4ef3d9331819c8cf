"""Breath analysis type definitions."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from rovocs.constants import BreathAnalysisConstants as BAC
from rovocs.constants import MetricChannel

# ============================================================================
# Configuration
# ============================================================================


class AnalyzerConfig(BaseModel):
    """
    Tunable parameters for one breath analyzer.

    All threshold values use decimal format (0.15 = 15%).
    Uses constants from BreathAnalysisConstants as defaults.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Baseline estimation
    baseline_window_size: int = Field(
        default=BAC.BASELINE_WINDOW_SIZE,
        ge=1,
        description="Readings averaged for the rolling baseline",
    )
    stability_threshold: float = Field(
        default=BAC.STABILITY_THRESHOLD,
        gt=0,
        description="Max relative change between consecutive means",
    )
    stability_duration: int = Field(
        default=BAC.STABILITY_DURATION,
        ge=1,
        description="Consecutive qualifying updates before baseline is stable",
    )

    # Event detection
    breath_threshold: float = Field(
        default=BAC.BREATH_THRESHOLD,
        gt=0,
        description="Relative rise over baseline that opens an event",
    )
    recovery_threshold: float = Field(
        default=BAC.RECOVERY_THRESHOLD,
        gt=0,
        description="Relative deviation below which an open event closes",
    )

    # Metrics
    metric_recovery_fraction: float = Field(
        default=BAC.METRIC_RECOVERY_FRACTION,
        ge=0,
        description="Fraction of baseline added to form the reported threshold",
    )

    # History
    retention_seconds: float = Field(
        default=BAC.RETENTION_SECONDS,
        gt=0,
        description="Age horizon for retained readings (seconds)",
    )
    max_gap_seconds: float | None = Field(
        default=BAC.MAX_GAP_SECONDS,
        gt=0,
        description="Dropout length that resets the analyzer (None disables)",
    )


# ============================================================================
# Baseline
# ============================================================================


class Baseline(BaseModel):
    """
    Rolling ambient baseline for both concentration channels.

    Attributes:
        tvoc: Rolling mean TVOC (ppb)
        eco2: Rolling mean eCO2 (ppm)
        sample_count: Consecutive updates within the stability threshold
        is_stable: Whether sample_count has reached the stability duration
        last_updated: Timestamp of the reading that produced the last update
    """

    tvoc: float = Field(default=0.0, description="Rolling mean TVOC (ppb)")
    eco2: float = Field(default=0.0, description="Rolling mean eCO2 (ppm)")
    sample_count: int = Field(default=0, ge=0, description="Stability counter")
    is_stable: bool = Field(default=False, description="Baseline has stabilized")
    last_updated: datetime | None = Field(
        default=None, description="Timestamp of the last update"
    )

    def value(self, channel: MetricChannel) -> float:
        """Get the baseline mean for a channel."""
        return self.tvoc if channel is MetricChannel.TVOC else self.eco2


# ============================================================================
# Breath Events
# ============================================================================


class BreathEvent(BaseModel):
    """
    A detected exhalation.

    Baseline values are frozen at event start. peak_time tracks the TVOC
    peak only.
    """

    model_config = ConfigDict(frozen=True)

    start_time: datetime = Field(description="Timestamp of the opening reading")
    end_time: datetime | None = Field(default=None, description="Recovery timestamp")
    peak_time: datetime | None = Field(default=None, description="TVOC peak timestamp")
    peak_tvoc: float | None = Field(default=None, description="Peak TVOC (ppb)")
    peak_eco2: float | None = Field(default=None, description="Peak eCO2 (ppm)")
    baseline_tvoc: float = Field(description="TVOC baseline at event start")
    baseline_eco2: float = Field(description="eCO2 baseline at event start")
    is_complete: bool = Field(default=False, description="Event has recovered")

    def peak(self, channel: MetricChannel) -> float | None:
        """Get the recorded peak for a channel."""
        return self.peak_tvoc if channel is MetricChannel.TVOC else self.peak_eco2

    def baseline(self, channel: MetricChannel) -> float:
        """Get the frozen baseline for a channel."""
        return (
            self.baseline_tvoc if channel is MetricChannel.TVOC else self.baseline_eco2
        )


class IdleState(BaseModel):
    """Detector state with no open event."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["idle"] = "idle"


class OpenState(BaseModel):
    """Detector state while an event is in progress."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["open"] = "open"
    event: BreathEvent


DetectorState = IdleState | OpenState


class EventTransition(str, Enum):
    """What the detector did with a reading."""

    NONE = "none"
    OPENED = "opened"
    PEAK_UPDATED = "peak_updated"
    CLOSED = "closed"


# ============================================================================
# Metrics
# ============================================================================


class BreathMetric(BaseModel):
    """
    Derived metrics for one channel of a completed event.

    Attributes:
        channel: Concentration channel
        baseline: Baseline frozen at event start
        peak: Peak value during the event
        percent_rise: (peak - baseline) / baseline * 100
        time_to_peak: Seconds from event start to TVOC peak
        slope: Rise rate to peak (units per second)
        recovery_time: Seconds from TVOC peak to event end
        threshold: Reported recovery threshold (baseline + fraction * baseline)
    """

    model_config = ConfigDict(frozen=True)

    channel: MetricChannel = Field(description="Concentration channel")
    baseline: float = Field(description="Baseline at event start")
    peak: float = Field(description="Peak value")
    percent_rise: float = Field(description="Percent rise over baseline")
    time_to_peak: float | None = Field(default=None, description="Seconds to peak")
    slope: float | None = Field(default=None, description="Rise rate (per second)")
    recovery_time: float | None = Field(
        default=None, description="Seconds from peak to recovery"
    )
    threshold: float | None = Field(default=None, description="Recovery threshold")


# ============================================================================
# Engine Output
# ============================================================================


class AnalysisUpdate(BaseModel):
    """
    Incremental output for a single processed reading.

    baseline is present only while stable, event only on a transition, and
    metrics only right after an event closes.
    """

    baseline: Baseline | None = Field(default=None, description="Stable baseline")
    event: BreathEvent | None = Field(default=None, description="Event snapshot")
    metrics: list[BreathMetric] | None = Field(
        default=None, description="Metrics for a just-closed event"
    )
    transition: EventTransition = Field(
        default=EventTransition.NONE, description="Detector transition this tick"
    )

    @property
    def has_changes(self) -> bool:
        """Whether any output was produced."""
        return (
            self.baseline is not None
            or self.event is not None
            or self.metrics is not None
        )
