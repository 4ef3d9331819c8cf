"""Sensor reading model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SensorReading(BaseModel):
    """
    One timestamped sample from an environmental sensor.

    Values are trusted as delivered. Plausibility checks belong to ingestion.

    Attributes:
        id: Reading identifier assigned by the producer
        tvoc: Total volatile organic compounds (ppb)
        eco2: Equivalent CO2 concentration (ppm)
        temperature: Ambient temperature (°C), informational only
        humidity: Relative humidity (%), informational only
        recorded_at: Sample timestamp
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Reading identifier")
    tvoc: float = Field(description="TVOC concentration (ppb)")
    eco2: float = Field(description="Equivalent CO2 concentration (ppm)")
    temperature: float = Field(default=0.0, description="Temperature (°C)")
    humidity: float = Field(default=0.0, description="Relative humidity (%)")
    recorded_at: datetime = Field(description="Sample timestamp")
