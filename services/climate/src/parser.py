"""
NOAA TDV record parser

Splits tab-delimited observation lines into typed records.
Lines with too few columns are dropped; numeric columns are parsed
leniently, so unparsable values degrade to zero instead of failing.
"""
import logging
import math
import re
from typing import Iterable, Iterator, NamedTuple, Optional

from .config import ClimateConfig, TDV_FIELD_COUNT

logger = logging.getLogger(__name__)


FIELD_SEPARATOR = "\t"
REGION_CODE_LENGTH = 2

# Leading numeric prefixes, in the manner of atof/atoi
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)", re.ASCII)

# Column positions in a TDV line
COL_CODE = 0
COL_TIMESTAMP = 1
COL_GEOHASH = 2  # unused
COL_HUMIDITY = 3
COL_SNOW = 4
COL_CLOUD_COVER = 5
COL_LIGHTNING = 6
COL_PRESSURE = 7
COL_TEMPERATURE = 8


class ParsedRecord(NamedTuple):
    """One observation line with typed fields"""

    region_code: str
    timestamp_ms: int
    humidity: float
    snow: bool
    cloud_cover: float
    lightning: bool
    pressure: float
    temperature_k: float


def parse_float_or_default(text: str, default: float = 0.0) -> float:
    """
    Parse the leading float of a token

    Returns `default` when the token does not start with a number.
    "12.5abc" parses as 12.5.
    """
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return default
    value = float(match.group(1))
    # overflowing exponents such as "1e400"
    if not math.isfinite(value):
        return default
    return value


def parse_int_or_default(text: str, default: int = 0) -> int:
    """
    Parse the leading integer of a token

    Returns `default` when the token does not start with a digit.
    "1.0" parses as 1.
    """
    match = _INT_PREFIX.match(text)
    if match is None:
        return default
    return int(match.group(1))


def kelvin_to_fahrenheit(kelvin: float) -> float:
    """Convert Kelvin to Fahrenheit"""
    return kelvin * 1.8 - 459.67


def parse_line(line: str, min_fields: int = TDV_FIELD_COUNT) -> Optional[ParsedRecord]:
    """
    Parse a single TDV line

    Args:
        line: Raw line text, with or without its line terminator
        min_fields: Minimum number of tab-separated columns

    Returns:
        ParsedRecord, or None if the line has too few columns
    """
    tokens = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(tokens) < max(min_fields, TDV_FIELD_COUNT):
        return None

    return ParsedRecord(
        region_code=tokens[COL_CODE][:REGION_CODE_LENGTH],
        timestamp_ms=parse_int_or_default(tokens[COL_TIMESTAMP]),
        humidity=parse_float_or_default(tokens[COL_HUMIDITY]),
        snow=parse_int_or_default(tokens[COL_SNOW]) != 0,
        cloud_cover=parse_float_or_default(tokens[COL_CLOUD_COVER]),
        lightning=parse_int_or_default(tokens[COL_LIGHTNING]) != 0,
        pressure=parse_float_or_default(tokens[COL_PRESSURE]),
        temperature_k=parse_float_or_default(tokens[COL_TEMPERATURE]),
    )


class TDVParser:
    """Parser for NOAA tab-delimited climate lines"""

    def __init__(self, min_fields: int = TDV_FIELD_COUNT):
        """
        Initialize parser

        Args:
            min_fields: Lines with fewer columns are dropped
        """
        self.min_fields = min_fields
        self.lines_read = 0
        self.lines_skipped = 0
        logger.debug(f"Initialized TDVParser, min_fields={min_fields}")

    def parse_line(self, line: str) -> Optional[ParsedRecord]:
        """Parse one line and update the line counters"""
        self.lines_read += 1
        record = parse_line(line, self.min_fields)
        if record is None:
            self.lines_skipped += 1
            logger.debug(f"Dropping malformed line {self.lines_read}: {line!r}")
        return record

    def parse_lines(self, lines: Iterable[str]) -> Iterator[ParsedRecord]:
        """
        Parse a stream of lines

        Args:
            lines: Any iterable of line text, e.g. an open file

        Yields:
            ParsedRecord for every well-formed line, in input order
        """
        for line in lines:
            record = self.parse_line(line)
            if record is not None:
                yield record


def create_parser(config: ClimateConfig) -> TDVParser:
    """
    Factory function to create a parser instance

    Args:
        config: Service configuration

    Returns:
        TDVParser instance
    """
    return TDVParser(min_fields=config.min_fields)
