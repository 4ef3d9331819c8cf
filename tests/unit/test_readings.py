"""
Unit tests for CSV reading streams.
"""

import pytest

from rovocs.readings import ReadingFormatError, load_readings, write_readings
from tests.helpers.synthetic_data import at, constant_stream

HEADER = "id,tvoc,eco2,temperature,humidity,recorded_at\n"


class TestLoadReadings:
    def test_written_stream_loads_back(self, tmp_path):
        path = tmp_path / "readings.csv"
        readings = constant_stream(5)

        assert write_readings(readings, path) == 5
        assert load_readings(path) == readings

    def test_blank_environmental_fields_default_to_zero(self, tmp_path):
        path = tmp_path / "readings.csv"
        path.write_text(HEADER + f"a,50,600,,,{at(0).isoformat()}\n")

        (reading,) = load_readings(path)

        assert reading.temperature == 0.0
        assert reading.humidity == 0.0

    def test_missing_id_uses_row_number(self, tmp_path):
        path = tmp_path / "readings.csv"
        path.write_text(HEADER + f",50,600,22,50,{at(0).isoformat()}\n")

        (reading,) = load_readings(path)

        assert reading.id == "1"

    def test_missing_column(self, tmp_path):
        path = tmp_path / "readings.csv"
        path.write_text("id,tvoc,recorded_at\n")

        with pytest.raises(ReadingFormatError, match="eco2"):
            load_readings(path)

    def test_non_numeric_concentration_reports_line(self, tmp_path):
        path = tmp_path / "readings.csv"
        path.write_text(
            HEADER
            + f"a,50,600,22,50,{at(0).isoformat()}\n"
            + f"b,high,600,22,50,{at(2).isoformat()}\n"
        )

        with pytest.raises(ReadingFormatError, match="Line 3"):
            load_readings(path)

    def test_bad_timestamp(self, tmp_path):
        path = tmp_path / "readings.csv"
        path.write_text(HEADER + "a,50,600,22,50,yesterday\n")

        with pytest.raises(ReadingFormatError, match="timestamp"):
            load_readings(path)
