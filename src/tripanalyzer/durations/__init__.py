"""Durations package exports."""

from .analysis_config import AnalysisConfig
from .data_sources import iter_records_from_rows, iter_trip_records
from .domain_types import RunningCounts, TripRecord
from .errors import (
    ConfigError,
    DurationError,
    DurationTooLongError,
    DurationTooShortError,
    HistogramConfigError,
    NegativeDurationError,
    SourceDecodeError,
    TimestampParseError,
    TripAnalyzerError,
)
from .hourly_histograms import HourlyDurationHistograms
from .log_linear_histogram import LogLinearHistogram
from .pipeline import AnalysisResult, TripDurationAnalyzer, analyze_trips
from .timestamps import duration_seconds, parse_timestamp
from .zones import ZoneFilter, is_jfk_dropoff, is_midtown_pickup, is_weekday

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "ConfigError",
    "DurationError",
    "DurationTooLongError",
    "DurationTooShortError",
    "HistogramConfigError",
    "HourlyDurationHistograms",
    "LogLinearHistogram",
    "NegativeDurationError",
    "RunningCounts",
    "SourceDecodeError",
    "TimestampParseError",
    "TripAnalyzerError",
    "TripDurationAnalyzer",
    "TripRecord",
    "ZoneFilter",
    "analyze_trips",
    "duration_seconds",
    "is_jfk_dropoff",
    "is_midtown_pickup",
    "is_weekday",
    "iter_records_from_rows",
    "iter_trip_records",
    "parse_timestamp",
]
