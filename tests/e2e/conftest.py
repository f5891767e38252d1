"""
Pytest fixtures for end-to-end tests.

Provides fixtures for:
- Sample NOAA TDV data generation
- Running the climate-summary CLI as a subprocess
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest


PROJECT_ROOT = Path(__file__).parent.parent.parent
SERVICES_DIR = PROJECT_ROOT / "services"


def kelvin_from_fahrenheit(fahrenheit: float) -> float:
    """Inverse of the service's Kelvin to Fahrenheit conversion."""
    return (fahrenheit + 459.67) / 1.8


def make_tdv_line(
    code: str,
    timestamp_ms: int,
    temp_f: float,
    humidity: float = 50.0,
    snow: bool = False,
    cloud_cover: float = 40.0,
    lightning: bool = False,
) -> str:
    """Build one TDV line in the NOAA column order."""
    fields = [
        code,
        str(timestamp_ms),
        "9prcjqk3yc80",
        f"{humidity:.1f}",
        "1.0" if snow else "0.0",
        f"{cloud_cover:.1f}",
        "1.0" if lightning else "0.0",
        "101325.0",
        f"{kelvin_from_fahrenheit(temp_f):.5f}",
    ]
    return "\t".join(fields) + "\n"


@pytest.fixture
def sample_tdv_data(tmp_path) -> List[Path]:
    """
    Generate two TDV files.

    Tennessee: one week of hourly records with a warm spike on day 3
    and a cold dip on day 5, plus malformed lines.
    Washington: six hourly records, two of them snowy.
    """
    start_ms = 1420070400000  # 2015-01-01 00:00:00 UTC
    hour_ms = 3600 * 1000

    tn_lines = []
    for hour in range(24 * 7):
        temp_f = 40.0
        if hour == 24 * 2 + 14:
            temp_f = 70.0
        elif hour == 24 * 4 + 5:
            temp_f = 10.0
        tn_lines.append(make_tdv_line(
            "TN", start_ms + hour * hour_ms, temp_f,
            lightning=(hour % 24 == 0),
        ))
    tn_lines.insert(10, "TN\ttruncated\n")
    tn_lines.append("\n")

    wa_lines = [
        make_tdv_line("WA", start_ms + h * hour_ms, 30.0 + h, humidity=80.0, snow=(h < 2))
        for h in range(6)
    ]

    tn_path = tmp_path / "data_tn.tdv"
    tn_path.write_text("".join(tn_lines), encoding="utf-8")
    wa_path = tmp_path / "data_wa.tdv"
    wa_path.write_text("".join(wa_lines), encoding="utf-8")

    return [tn_path, wa_path]


@pytest.fixture
def run_cli():
    """Run the climate-summary CLI in a subprocess."""
    def _run(*args: str, env_overrides=None) -> subprocess.CompletedProcess:
        env = {
            key: value for key, value in os.environ.items()
            if not key.startswith("CLIMATE_")
        }
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(SERVICES_DIR), env.get("PYTHONPATH")])
        )
        env["PYTHONIOENCODING"] = "utf-8"
        env.update(env_overrides or {})

        return subprocess.run(
            [sys.executable, "-m", "climate.src.orchestrator", *args],
            cwd=PROJECT_ROOT,
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=60,
        )

    return _run
