"""
Report rendering

Turns the ordered region statistics into the human-readable
summary report, or into a JSON document for downstream tooling.
"""
import logging
from datetime import datetime, tzinfo
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field

from .aggregator import RegionStats

logger = logging.getLogger(__name__)

UTC = ZoneInfo("UTC")
NOT_AVAILABLE = "n/a"
SECTION_RULE = "-" * 27


class RegionSummary(BaseModel):
    """Derived statistics for one region."""
    model_config = ConfigDict(frozen=True)

    code: str
    record_count: int = Field(ge=0)
    average_humidity: float
    average_temperature_f: float
    average_cloud_cover: float
    max_temp_f: Optional[float] = None
    max_temp_at: Optional[datetime] = None
    min_temp_f: Optional[float] = None
    min_temp_at: Optional[datetime] = None
    lightning_strikes: int = Field(ge=0)
    snow_cover_records: int = Field(ge=0)


class ClimateReport(BaseModel):
    """Report wrapper for JSON output."""
    region_codes: List[str]
    regions: List[RegionSummary]


def _average(total: float, count: int) -> float:
    return total / count if count else 0.0


def to_datetime(timestamp_ms: Optional[int], tz: tzinfo = UTC) -> Optional[datetime]:
    """
    Convert a millisecond epoch timestamp to an aware datetime

    Sub-second precision is dropped. Timestamps outside the platform's
    representable range yield None.
    """
    if timestamp_ms is None:
        return None
    try:
        return datetime.fromtimestamp(timestamp_ms // 1000, tz=tz)
    except (OverflowError, OSError, ValueError) as e:
        logger.warning(f"Cannot represent timestamp {timestamp_ms}: {e}")
        return None


def summarize_region(stats: RegionStats, tz: tzinfo = UTC) -> RegionSummary:
    """
    Build the derived summary of one region

    Args:
        stats: Accumulated statistics
        tz: Timezone for extremum times

    Returns:
        RegionSummary with averages and extremes
    """
    count = stats.record_count
    has_extremes = count > 0

    return RegionSummary(
        code=stats.code,
        record_count=count,
        average_humidity=_average(stats.humidity_sum, count),
        average_temperature_f=_average(stats.temperature_sum_f, count),
        average_cloud_cover=_average(stats.cloud_cover_sum, count),
        max_temp_f=stats.max_temp_f if has_extremes else None,
        max_temp_at=to_datetime(stats.max_temp_timestamp, tz),
        min_temp_f=stats.min_temp_f if has_extremes else None,
        min_temp_at=to_datetime(stats.min_temp_timestamp, tz),
        lightning_strikes=stats.lightning_strikes,
        snow_cover_records=stats.snow_cover_records,
    )


def _format_temp(value: Optional[float]) -> str:
    return NOT_AVAILABLE if value is None else f"{value:.1f}°F"


def _format_time(value: Optional[datetime]) -> str:
    # ctime layout, e.g. "Mon Aug  3 11:00:00 2015"
    return NOT_AVAILABLE if value is None else value.ctime()


def render_region(summary: RegionSummary) -> List[str]:
    """Report lines for one region"""
    return [
        f"-- State: {summary.code} --",
        f"Number of Records: {summary.record_count}",
        f"Average Humidity: {summary.average_humidity:.1f}%",
        f"Average Temperature: {summary.average_temperature_f:.1f}°F",
        f"Max Temperature: {_format_temp(summary.max_temp_f)}",
        f"Max Temperature on: {_format_time(summary.max_temp_at)}",
        f"Min Temperature: {_format_temp(summary.min_temp_f)}",
        f"Min Temperature on: {_format_time(summary.min_temp_at)}",
        f"Lightning Strikes: {summary.lightning_strikes}",
        f"Records with Snow Cover: {summary.snow_cover_records}",
        f"Average Cloud Cover: {summary.average_cloud_cover:.1f}%",
        SECTION_RULE,
    ]


def render_text_report(regions: Sequence[RegionStats], tz: tzinfo = UTC) -> str:
    """
    Render the human-readable report

    Args:
        regions: Region statistics in first-seen order
        tz: Timezone for extremum times

    Returns:
        Report text, newline-terminated
    """
    if regions:
        lines = ["States found: " + " ".join(stats.code for stats in regions)]
    else:
        lines = ["States found: None"]

    for stats in regions:
        lines.extend(render_region(summarize_region(stats, tz)))

    return "\n".join(lines) + "\n"


def build_report(regions: Sequence[RegionStats], tz: tzinfo = UTC) -> ClimateReport:
    """Build the structured report model"""
    return ClimateReport(
        region_codes=[stats.code for stats in regions],
        regions=[summarize_region(stats, tz) for stats in regions],
    )


def render_json_report(regions: Sequence[RegionStats], tz: tzinfo = UTC) -> str:
    """Render the report as indented JSON, newline-terminated"""
    return build_report(regions, tz).model_dump_json(indent=2) + "\n"


RENDERERS = {
    "text": render_text_report,
    "json": render_json_report,
}


def render_report(
    regions: Sequence[RegionStats],
    output_format: str = "text",
    tz: tzinfo = UTC,
) -> str:
    """
    Render the report in the requested format

    Raises:
        ValueError: If the format is unknown
    """
    if output_format not in RENDERERS:
        raise ValueError(
            f"Unknown output format: {output_format}. "
            f"Must be one of {list(RENDERERS.keys())}"
        )
    return RENDERERS[output_format](regions, tz)
