"""Data models shared by the analysis engine and its collaborators."""

from rovocs.models.reading import SensorReading

__all__ = ["SensorReading"]
