"""
WeatherInsight Climate Summary Service

Single-pass summary of NOAA tab-delimited (TDV) climate extracts.
Parses observation lines, folds them into per-region accumulators,
and renders a text or JSON report.
"""

__version__ = "0.1.0"
