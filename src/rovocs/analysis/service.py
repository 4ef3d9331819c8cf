"""
Session registry for running one breath analyzer per monitoring session.

Analyzers are independent; the registry only guards its own mapping so
sessions can be created and ended from different ingestion workers.
"""

import logging
import threading

from rovocs.analysis.analyzer import BreathAnalyzer
from rovocs.analysis.types import AnalysisUpdate, AnalyzerConfig
from rovocs.models.reading import SensorReading

logger = logging.getLogger(__name__)

__all__ = ["SessionRegistry"]


class SessionRegistry:
    """
    Holds the active analyzer for each session.

    Example:
        >>> registry = SessionRegistry()
        >>> update = registry.process("session-1", reading)
        >>> registry.end("session-1")
    """

    def __init__(self, config: AnalyzerConfig | None = None):
        """
        Initialize registry.

        Args:
            config: Parameters applied to every analyzer it creates
        """
        self.config = config or AnalyzerConfig()
        self._analyzers: dict[str, BreathAnalyzer] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> BreathAnalyzer:
        """Get the analyzer for a session, creating it on first use."""
        with self._lock:
            analyzer = self._analyzers.get(session_id)
            if analyzer is None:
                analyzer = BreathAnalyzer(self.config)
                self._analyzers[session_id] = analyzer
                logger.info(f"Started analyzer for session {session_id}")
            return analyzer

    def process(self, session_id: str, reading: SensorReading) -> AnalysisUpdate:
        """
        Feed a reading to its session's analyzer.

        Readings for one session must be delivered in order by one caller.
        """
        return self.get(session_id).process_reading(reading)

    def end(self, session_id: str) -> bool:
        """
        Discard a session's analyzer.

        Returns:
            True if the session was active
        """
        with self._lock:
            analyzer = self._analyzers.pop(session_id, None)

        if analyzer is None:
            return False
        if analyzer.current_event is not None:
            logger.info(f"Session {session_id} ended with an open breath event")
        logger.info(f"Ended analyzer for session {session_id}")
        return True

    def active_sessions(self) -> list[str]:
        """IDs of sessions with a live analyzer."""
        with self._lock:
            return list(self._analyzers)
