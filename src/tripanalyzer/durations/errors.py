"""Exception hierarchy for the trip-duration pipeline."""

from __future__ import annotations

from typing import Optional


class TripAnalyzerError(Exception):
    """Base class for every error raised by the analysis pipeline."""


class ConfigError(TripAnalyzerError, ValueError):
    """Invalid run configuration (histogram bounds, precision, zones)."""


class HistogramConfigError(ConfigError):
    """Histogram bounds or precision cannot be honoured."""


class SourceDecodeError(TripAnalyzerError, ValueError):
    """A source row could not be decoded into a trip record."""

    def __init__(self, message: str, *, row_number: Optional[int] = None) -> None:
        if row_number is not None:
            message = f"row {row_number}: {message}"
        super().__init__(message)
        self.row_number = row_number


class TimestampParseError(TripAnalyzerError, ValueError):
    """Timestamp text does not match ``YYYY-MM-DD HH:MM:SS``."""

    def __init__(self, text: object, reason: str = "expected YYYY-MM-DD HH:MM:SS") -> None:
        super().__init__(f"Invalid timestamp {text!r}: {reason}")
        self.text = text


class ValueOutOfRangeError(TripAnalyzerError, ValueError):
    """Value falls outside the trackable range of a histogram."""

    def __init__(self, value: int, lowest: int, highest: int) -> None:
        super().__init__(f"Value {value} outside trackable range [{lowest}, {highest}]")
        self.value = value
        self.lowest = lowest
        self.highest = highest


class DurationError(TripAnalyzerError, ValueError):
    """Trip duration rejected by the accumulator; recoverable per record."""

    kind = "invalid"

    def __init__(self, duration: int, message: str | None = None) -> None:
        super().__init__(message or f"Trip duration {duration}s rejected ({self.kind})")
        self.duration = duration


class DurationTooShortError(DurationError):
    kind = "too_short"


class DurationTooLongError(DurationError):
    kind = "too_long"


class NegativeDurationError(DurationError):
    """Dropoff precedes pickup."""

    kind = "negative"


__all__ = [
    "ConfigError",
    "DurationError",
    "DurationTooLongError",
    "DurationTooShortError",
    "HistogramConfigError",
    "NegativeDurationError",
    "SourceDecodeError",
    "TimestampParseError",
    "TripAnalyzerError",
    "ValueOutOfRangeError",
]
