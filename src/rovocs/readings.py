"""
CSV import and export of sensor reading streams.

Columns: id, tvoc, eco2, temperature, humidity, recorded_at (ISO-8601).
"""

import csv
import logging

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from rovocs.constants import READING_CSV_FIELDS
from rovocs.models.reading import SensorReading

logger = logging.getLogger(__name__)


class ReadingFormatError(ValueError):
    """Raised when a reading file cannot be parsed."""


def _parse_float(row: dict[str, str], field: str, line: int, required: bool) -> float:
    raw = (row.get(field) or "").strip()
    if not raw:
        if required:
            raise ReadingFormatError(f"Line {line}: missing '{field}'")
        return 0.0
    try:
        return float(raw)
    except ValueError as e:
        raise ReadingFormatError(f"Line {line}: '{field}' is not numeric: {raw!r}") from e


def _parse_timestamp(row: dict[str, str], line: int) -> datetime:
    raw = (row.get("recorded_at") or "").strip()
    if not raw:
        raise ReadingFormatError(f"Line {line}: missing 'recorded_at'")
    try:
        return datetime.fromisoformat(raw)
    except ValueError as e:
        raise ReadingFormatError(f"Line {line}: invalid timestamp {raw!r}") from e


def load_readings(path: Path) -> list[SensorReading]:
    """
    Load readings from a CSV file in file order.

    Blank temperature or humidity values default to 0.

    Args:
        path: CSV file with a header row

    Returns:
        Readings in file order

    Raises:
        ReadingFormatError: If the header or any row is malformed
    """
    readings = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = {"tvoc", "eco2", "recorded_at"} - set(reader.fieldnames or [])
        if missing:
            raise ReadingFormatError(
                f"{path}: missing column(s): {', '.join(sorted(missing))}"
            )

        for row in reader:
            line = reader.line_num
            readings.append(
                SensorReading(
                    id=(row.get("id") or "").strip() or str(line - 1),
                    tvoc=_parse_float(row, "tvoc", line, required=True),
                    eco2=_parse_float(row, "eco2", line, required=True),
                    temperature=_parse_float(row, "temperature", line, required=False),
                    humidity=_parse_float(row, "humidity", line, required=False),
                    recorded_at=_parse_timestamp(row, line),
                )
            )

    logger.info(f"Loaded {len(readings)} readings from {path}")
    return readings


def write_readings(readings: Iterable[SensorReading], path: Path) -> int:
    """
    Write readings to a CSV file.

    Args:
        readings: Readings to export
        path: Output CSV path

    Returns:
        Number of rows written
    """
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=READING_CSV_FIELDS)
        writer.writeheader()
        for reading in readings:
            row = reading.model_dump()
            row["recorded_at"] = reading.recorded_at.isoformat()
            writer.writerow(row)
            count += 1
    return count
