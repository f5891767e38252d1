"""
Pytest configuration and fixtures for climate summary tests.
"""
import pytest

from climate.src.parser import ParsedRecord


# Example rows from a NOAA California extract
SAMPLE_LINES = [
    "CA\t1428300000000\t9prcjqk3yc80\t93.0\t0.0\t100.0\t0.0\t95644.0\t277.58716\n",
    "CA\t1430308800000\t9prc9sgwvw80\t4.0\t0.0\t100.0\t0.0\t99226.0\t282.63037\n",
    "CA\t1428559200000\t9prrremmdqxb\t61.0\t0.0\t0.0\t0.0\t102112.0\t285.07513\n",
    "TN\t1428192000000\tdn6m9p4q1s2b\t57.0\t1.0\t100.0\t1.0\t101765.0\t265.21332\n",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CLIMATE_* variables from the host out of the tests"""
    for var in ("CLIMATE_REPORT_TIMEZONE", "CLIMATE_MIN_FIELDS", "CLIMATE_ENCODING",
                "CLIMATE_OUTPUT_FORMAT", "CLIMATE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def sample_lines():
    """Well-formed TDV lines for two regions"""
    return list(SAMPLE_LINES)


@pytest.fixture
def tdv_file(tmp_path):
    """Write lines to a TDV file and return its path"""
    def _write(lines, name="data.tdv"):
        path = tmp_path / name
        path.write_text("".join(lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_record():
    """Build a ParsedRecord with sensible defaults"""
    def _make(
        region_code="CA",
        timestamp_ms=1428300000000,
        humidity=50.0,
        snow=False,
        cloud_cover=20.0,
        lightning=False,
        pressure=100000.0,
        temperature_k=280.0,
    ):
        return ParsedRecord(
            region_code=region_code,
            timestamp_ms=timestamp_ms,
            humidity=humidity,
            snow=snow,
            cloud_cover=cloud_cover,
            lightning=lightning,
            pressure=pressure,
            temperature_k=temperature_k,
        )

    return _make
