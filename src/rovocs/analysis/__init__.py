"""Breath analysis engine: baseline, event detection and metrics."""

from rovocs.analysis.analyzer import BreathAnalyzer
from rovocs.analysis.service import SessionRegistry
from rovocs.analysis.types import (
    AnalysisUpdate,
    AnalyzerConfig,
    Baseline,
    BreathEvent,
    BreathMetric,
    EventTransition,
)

__all__ = [
    "AnalysisUpdate",
    "AnalyzerConfig",
    "Baseline",
    "BreathAnalyzer",
    "BreathEvent",
    "BreathMetric",
    "EventTransition",
    "SessionRegistry",
]
