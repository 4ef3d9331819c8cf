"""
Synthetic sensor stream generator.

Produces readings the way a breath monitor reports them: a noisy ambient
level sampled at a fixed cadence with exhalation pulses on top. Useful for
demos and for exercising the analyzer without hardware.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta

import numpy as np

from rovocs.constants import BreathAnalysisConstants as BAC
from rovocs.models.reading import SensorReading

AMBIENT_TVOC = 50.0  # ppb
AMBIENT_ECO2 = 600.0  # ppm
AMBIENT_TEMPERATURE = 22.0  # °C
AMBIENT_HUMIDITY = 50.0  # %


def breath_pulse(
    elapsed: np.ndarray,
    rise_seconds: float = 4.0,
    decay_seconds: float = 6.0,
) -> np.ndarray:
    """
    Unit-height exhalation profile.

    Linear rise to 1.0 over rise_seconds, then exponential decay.
    Zero before the pulse starts.

    Args:
        elapsed: Seconds since pulse onset per sample
        rise_seconds: Time to reach the peak
        decay_seconds: Exponential decay time constant

    Returns:
        Profile values in [0, 1]
    """
    profile = np.zeros_like(elapsed, dtype=float)
    rising = (elapsed >= 0) & (elapsed < rise_seconds)
    falling = elapsed >= rise_seconds
    profile[rising] = elapsed[rising] / rise_seconds
    profile[falling] = np.exp(-(elapsed[falling] - rise_seconds) / decay_seconds)
    return profile


def generate_session(
    duration_seconds: float,
    interval_seconds: float = BAC.SAMPLING_INTERVAL_SECONDS,
    breath_offsets: Sequence[float] = (),
    *,
    tvoc_rise: float = 0.6,
    eco2_rise: float = 0.25,
    noise: float = 0.01,
    start: datetime | None = None,
    seed: int | None = None,
) -> list[SensorReading]:
    """
    Generate a reading stream with exhalations at the given offsets.

    Args:
        duration_seconds: Stream length in seconds
        interval_seconds: Sampling cadence in seconds
        breath_offsets: Seconds from stream start at which exhalations begin
        tvoc_rise: Peak TVOC rise as a fraction of ambient
        eco2_rise: Peak eCO2 rise as a fraction of ambient
        noise: Uniform noise amplitude as a fraction of ambient
        start: Timestamp of the first reading (defaults to now)
        seed: Random seed for reproducible noise

    Returns:
        Readings in time order
    """
    rng = np.random.default_rng(seed)
    start = start or datetime.now().replace(microsecond=0)

    t = np.arange(0.0, duration_seconds, interval_seconds)
    pulses = np.zeros_like(t)
    for offset in breath_offsets:
        pulses += breath_pulse(t - offset)

    def noisy(level: np.ndarray, ambient: float, spread: float) -> np.ndarray:
        return level + rng.uniform(-spread, spread, size=t.size) * ambient

    tvoc = noisy(AMBIENT_TVOC * (1 + tvoc_rise * pulses), AMBIENT_TVOC, noise)
    eco2 = noisy(AMBIENT_ECO2 * (1 + eco2_rise * pulses), AMBIENT_ECO2, noise)
    temperature = noisy(np.full_like(t, AMBIENT_TEMPERATURE), 1.0, 0.2)
    humidity = noisy(AMBIENT_HUMIDITY + 15.0 * pulses, 1.0, 1.0)

    return [
        SensorReading(
            id=f"sim-{i}",
            tvoc=round(float(tvoc[i]), 2),
            eco2=round(float(eco2[i]), 2),
            temperature=round(float(temperature[i]), 2),
            humidity=round(float(humidity[i]), 2),
            recorded_at=start + timedelta(seconds=float(t[i])),
        )
        for i in range(t.size)
    ]
