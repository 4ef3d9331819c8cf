"""Bounded history of recent sensor readings."""

from datetime import timedelta

from rovocs.constants import BreathAnalysisConstants as BAC
from rovocs.models.reading import SensorReading


class ReadingWindow:
    """
    Append-only reading history pruned by age.

    Readings are kept in arrival order. Out-of-order timestamps are accepted
    as-is; pruning is relative to the most recently absorbed reading.
    """

    def __init__(self, retention_seconds: float = BAC.RETENTION_SECONDS):
        self.retention = timedelta(seconds=retention_seconds)
        self._readings: list[SensorReading] = []

    def __len__(self) -> int:
        return len(self._readings)

    @property
    def latest(self) -> SensorReading | None:
        """Most recently absorbed reading."""
        return self._readings[-1] if self._readings else None

    def absorb(self, reading: SensorReading) -> None:
        """
        Append a reading and drop entries outside the retention horizon.

        Args:
            reading: Newly arrived reading
        """
        self._readings.append(reading)
        cutoff = reading.recorded_at - self.retention
        self._readings = [r for r in self._readings if r.recorded_at > cutoff]

    def recent(self, window_size: int) -> list[SensorReading]:
        """
        Get the last N readings in arrival order.

        Args:
            window_size: Number of readings to return

        Returns:
            Up to window_size readings, oldest first

        Raises:
            ValueError: If window_size is negative
        """
        if window_size < 0:
            raise ValueError(f"window_size must be non-negative, got {window_size}")
        if window_size == 0:
            return []
        return list(self._readings[-window_size:])

    def since(self, seconds: float) -> list[SensorReading]:
        """Get readings newer than `seconds` before the latest reading."""
        if not self._readings:
            return []
        cutoff = self._readings[-1].recorded_at - timedelta(seconds=seconds)
        return [r for r in self._readings if r.recorded_at > cutoff]

    def clear(self) -> None:
        self._readings = []
