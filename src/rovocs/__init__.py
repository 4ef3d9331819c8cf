"""
ROVOCS: Respiratory VOC Signal analysis

Breath analysis engine for timestamped VOC/eCO2 sensor streams.
"""

from typing import Any

__all__ = ["BreathAnalyzer", "AnalyzerConfig", "SensorReading"]


def __getattr__(name: str) -> Any:
    """Lazy load public classes to keep `import rovocs` cheap."""
    if name == "BreathAnalyzer":
        from rovocs.analysis.analyzer import BreathAnalyzer

        return BreathAnalyzer
    if name == "AnalyzerConfig":
        from rovocs.analysis.types import AnalyzerConfig

        return AnalyzerConfig
    if name == "SensorReading":
        from rovocs.models.reading import SensorReading

        return SensorReading
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
