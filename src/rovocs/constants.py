"""
Constants for ROVOCS breath analysis.

Default thresholds follow the breath-analysis formulas used by the device
firmware and dashboard. All fractional thresholds are in decimal format
(0.15 = 15%).
"""

from enum import Enum
from pathlib import Path

# ============================================================================
# Metric Channels
# ============================================================================


class MetricChannel(str, Enum):
    """Concentration channels analyzed per breath."""

    TVOC = "tvoc"  # Total volatile organic compounds (ppb)
    ECO2 = "eco2"  # Equivalent CO2 (ppm)


# ============================================================================
# Breath Analysis
# ============================================================================


class BreathAnalysisConstants:
    """
    Default parameters for the breath analysis engine.

    These are the SINGLE SOURCE OF TRUTH for AnalyzerConfig defaults.
    """

    SAMPLING_INTERVAL_SECONDS = 2.0

    BASELINE_WINDOW_SIZE = 30  # readings (~60s at 2s cadence)
    STABILITY_THRESHOLD = 0.03
    STABILITY_DURATION = 10  # consecutive qualifying updates (~20s)

    BREATH_THRESHOLD = 0.15  # rise over baseline that opens an event
    RECOVERY_THRESHOLD = 0.05  # deviation that closes an event

    # Reported recovery threshold: baseline + 5% of baseline.
    # Kept separate from RECOVERY_THRESHOLD even though the values match.
    METRIC_RECOVERY_FRACTION = 0.05

    RETENTION_SECONDS = 300.0  # 5 minutes of history
    MAX_GAP_SECONDS = 60.0  # dropout length that resets the analyzer

    DEFAULT_RECENT_MINUTES = 5.0


class QualityConstants:
    """Plausibility ranges and scoring cutoffs for quality assessment."""

    TVOC_RANGE = (0.0, 10000.0)
    ECO2_RANGE = (0.0, 10000.0)
    TEMPERATURE_RANGE = (-10.0, 60.0)
    HUMIDITY_RANGE = (0.0, 100.0)
    FIELD_PENALTY = 25

    TVOC_EXCELLENT_RISE = 25.0
    TVOC_EXCELLENT_RECOVERY = 20.0
    TVOC_FAIR_RISE = 10.0

    ECO2_EXCELLENT_RISE = 15.0
    ECO2_EXCELLENT_RECOVERY = 30.0
    ECO2_FAIR_RISE = 5.0

    OVERALL_EXCELLENT = 70.0
    OVERALL_FAIR = 50.0


# ============================================================================
# Files
# ============================================================================

ROVOCS_HOME = Path.home() / ".rovocs"
DEFAULT_CONFIG_FILE = "config.toml"
DEFAULT_LOG_DIR = ROVOCS_HOME / "logs"
DEFAULT_LOG_FILE = "rovocs.log"
DEFAULT_LOG_BACKUP_COUNT = 5

READING_CSV_FIELDS = ("id", "tvoc", "eco2", "temperature", "humidity", "recorded_at")
