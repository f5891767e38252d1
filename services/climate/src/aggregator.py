"""
Per-region aggregation of parsed climate records in a single pass.
"""
import dataclasses
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .parser import ParsedRecord, kelvin_to_fahrenheit

logger = logging.getLogger(__name__)


@dataclass
class RegionStats:
    """Running statistics for one region code."""

    code: str
    record_count: int = 0
    humidity_sum: float = 0.0
    cloud_cover_sum: float = 0.0
    temperature_sum_f: float = 0.0
    max_temp_f: float = float("-inf")
    max_temp_timestamp: Optional[int] = None
    min_temp_f: float = float("inf")
    min_temp_timestamp: Optional[int] = None
    lightning_strikes: int = 0
    snow_cover_records: int = 0


class ClimateAggregator:
    """Folds parsed records into per-region statistics, in first-seen order."""

    def __init__(self):
        self._regions: Dict[str, RegionStats] = {}

    def __len__(self) -> int:
        return len(self._regions)

    @property
    def region_codes(self) -> List[str]:
        """Region codes in the order they were first seen."""
        return list(self._regions)

    def fold(self, record: ParsedRecord) -> None:
        """
        Incorporate one record into the statistics of its region.

        The region is created on first sighting. Extremes only move on a
        strict improvement, so the earliest record wins a tie.

        Args:
            record: Parsed observation
        """
        stats = self._regions.get(record.region_code)
        if stats is None:
            stats = RegionStats(code=record.region_code)
            self._regions[record.region_code] = stats
            logger.debug(f"New region: {record.region_code}")

        temp_f = kelvin_to_fahrenheit(record.temperature_k)

        stats.record_count += 1
        stats.humidity_sum += record.humidity
        stats.cloud_cover_sum += record.cloud_cover
        stats.temperature_sum_f += temp_f

        if temp_f > stats.max_temp_f:
            stats.max_temp_f = temp_f
            stats.max_temp_timestamp = record.timestamp_ms
        if temp_f < stats.min_temp_f:
            stats.min_temp_f = temp_f
            stats.min_temp_timestamp = record.timestamp_ms

        stats.lightning_strikes += int(record.lightning)
        stats.snow_cover_records += int(record.snow)

    def consume(self, records: Iterable[ParsedRecord]) -> int:
        """
        Fold every record of an iterable.

        Returns:
            Number of records folded
        """
        folded = 0
        for record in records:
            self.fold(record)
            folded += 1
        return folded

    def snapshot(self) -> List[RegionStats]:
        """
        Copies of the region statistics in first-seen order.

        Later folds do not change a snapshot already taken.
        """
        return [dataclasses.replace(stats) for stats in self._regions.values()]
