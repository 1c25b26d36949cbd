"""Per-hour trip-duration histograms."""

from __future__ import annotations

from datetime import datetime
from typing import Iterator, List, Tuple

from .errors import (
    ConfigError,
    DurationTooLongError,
    DurationTooShortError,
    NegativeDurationError,
    ValueOutOfRangeError,
)
from .log_linear_histogram import LogLinearHistogram
from .timestamps import duration_seconds

HOURS_PER_DAY = 24
DEFAULT_LOWEST_SECONDS = 1
DEFAULT_HIGHEST_SECONDS = 3 * 60 * 60
DEFAULT_SIGNIFICANT_DIGITS = 3
DEFAULT_MIN_DURATION_SECONDS = 20 * 60


class HourlyDurationHistograms:
    """Twenty-four identically configured histograms keyed by pickup hour."""

    def __init__(
        self,
        *,
        lowest: int = DEFAULT_LOWEST_SECONDS,
        highest: int = DEFAULT_HIGHEST_SECONDS,
        significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS,
        min_duration_seconds: int = DEFAULT_MIN_DURATION_SECONDS,
    ) -> None:
        self._histograms: List[LogLinearHistogram] = [
            LogLinearHistogram(lowest, highest, significant_digits) for _ in range(HOURS_PER_DAY)
        ]
        if not lowest <= min_duration_seconds <= highest:
            raise ConfigError(
                f"min_duration_seconds ({min_duration_seconds}) must lie within "
                f"[{lowest}, {highest}]"
            )
        self.lowest = int(lowest)
        self.highest = int(highest)
        self.significant_digits = int(significant_digits)
        self.min_duration_seconds = int(min_duration_seconds)

    def record_duration(self, pickup: datetime, dropoff: datetime) -> int:
        """
        Record the trip duration under the pickup hour.

        Args:
            pickup: Parsed pickup time; its hour selects the histogram.
            dropoff: Parsed dropoff time.
        Returns:
            The recorded duration in seconds.
        Raises:
            NegativeDurationError: dropoff precedes pickup.
            DurationTooShortError: duration below ``min_duration_seconds``.
            DurationTooLongError: duration above the histogram ceiling.
        """
        duration = duration_seconds(pickup, dropoff)
        if duration < 0:
            raise NegativeDurationError(
                duration, f"Dropoff precedes pickup by {-duration}s"
            )
        if duration < self.min_duration_seconds:
            raise DurationTooShortError(
                duration,
                f"Trip duration {duration}s is shorter than {self.min_duration_seconds}s",
            )
        histogram = self._histograms[pickup.hour]
        try:
            histogram.record(duration)
        except ValueOutOfRangeError as exc:
            raise DurationTooLongError(
                duration, f"Trip duration {duration}s exceeds {self.highest}s"
            ) from exc
        return duration

    # ------------------------------------------------------------------ access
    def histogram_for_hour(self, hour: int) -> LogLinearHistogram:
        if not 0 <= hour < HOURS_PER_DAY:
            raise IndexError(f"hour must be within 0-{HOURS_PER_DAY - 1}, got {hour}")
        return self._histograms[hour]

    @property
    def total_count(self) -> int:
        return sum(histogram.total_count for histogram in self._histograms)

    def __iter__(self) -> Iterator[Tuple[int, LogLinearHistogram]]:
        return iter(enumerate(self._histograms))

    def __len__(self) -> int:
        return len(self._histograms)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HourlyDurationHistograms):
            return NotImplemented
        return (
            self.min_duration_seconds == other.min_duration_seconds
            and self._histograms == other._histograms
        )

    __hash__ = None  # type: ignore[assignment]


__all__ = [
    "DEFAULT_HIGHEST_SECONDS",
    "DEFAULT_LOWEST_SECONDS",
    "DEFAULT_MIN_DURATION_SECONDS",
    "DEFAULT_SIGNIFICANT_DIGITS",
    "HOURS_PER_DAY",
    "HourlyDurationHistograms",
]
