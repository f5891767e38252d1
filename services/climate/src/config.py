"""
Configuration for climate summary service
"""
import codecs
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


# Input columns: code, timestamp, geohash, humidity, snow, cloud cover,
# lightning, pressure, temperature
TDV_FIELD_COUNT = 9

OUTPUT_FORMATS = ("text", "json")

LOG_LEVELS = ("CRITICAL", "FATAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG", "NOTSET")


class ClimateConfig(BaseSettings):
    """Climate summary configuration"""

    # Input configuration
    min_fields: int = TDV_FIELD_COUNT
    encoding: str = "utf-8"

    # Report configuration
    report_timezone: str = "UTC"
    output_format: str = "text"

    log_level: str = "INFO"

    @field_validator("min_fields")
    @classmethod
    def _check_min_fields(cls, value: int) -> int:
        if value < TDV_FIELD_COUNT:
            raise ValueError(
                f"min_fields must be at least {TDV_FIELD_COUNT}, got {value}"
            )
        return value

    @field_validator("report_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value}") from e
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level: {value}. Must be one of {list(LOG_LEVELS)}"
            )
        return level

    @field_validator("output_format")
    @classmethod
    def _check_output_format(cls, value: str) -> str:
        if value not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format: {value}. Must be one of {list(OUTPUT_FORMATS)}"
            )
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        """Timezone used when rendering extremum timestamps"""
        return ZoneInfo(self.report_timezone)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "CLIMATE_"


def get_config(**overrides) -> ClimateConfig:
    """Get climate summary configuration instance"""
    return ClimateConfig(**overrides)
