"""Bounded log-linear histogram backed by a dense numpy counts array.

The bucket layout follows HdrHistogram: values are split into power-of-two
buckets, each subdivided into ``sub_bucket_count`` linear sub-buckets, so any
two values that land in the same slot differ by less than
``10 ** -significant_digits`` relative to their magnitude.
"""

from __future__ import annotations

import math
from typing import Iterator, Tuple

import numpy as np

from .errors import HistogramConfigError, ValueOutOfRangeError

MAX_SIGNIFICANT_DIGITS = 5
# Keeps every slot bound, including the top slot's upper edge, inside int64.
MAX_TRACKABLE_VALUE = 2**61


class LogLinearHistogram:
    """Frequency counter for integer values in ``[lowest, highest]``."""

    def __init__(self, lowest: int = 1, highest: int = 10800, significant_digits: int = 3) -> None:
        for label, value in (
            ("lowest", lowest),
            ("highest", highest),
            ("significant_digits", significant_digits),
        ):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise HistogramConfigError(f"{label} must be an integer, got {value!r}")
        lowest = int(lowest)
        highest = int(highest)
        significant_digits = int(significant_digits)
        if lowest < 1:
            raise HistogramConfigError("lowest trackable value must be >= 1")
        if highest < 2 * lowest:
            raise HistogramConfigError(
                f"highest trackable value ({highest}) must be at least twice lowest ({lowest})"
            )
        if highest > MAX_TRACKABLE_VALUE:
            raise HistogramConfigError(f"highest trackable value must not exceed {MAX_TRACKABLE_VALUE}")
        if not 1 <= significant_digits <= MAX_SIGNIFICANT_DIGITS:
            raise HistogramConfigError(
                f"significant_digits must be between 1 and {MAX_SIGNIFICANT_DIGITS}"
            )
        self.lowest = lowest
        self.highest = highest
        self.significant_digits = significant_digits

        single_unit_resolution = 2 * 10**significant_digits
        sub_bucket_count_magnitude = (single_unit_resolution - 1).bit_length()
        self._half_count_magnitude = max(sub_bucket_count_magnitude, 1) - 1
        self._sub_bucket_count = 1 << (self._half_count_magnitude + 1)
        self._sub_bucket_half_count = self._sub_bucket_count // 2
        self._unit_magnitude = lowest.bit_length() - 1
        self._sub_bucket_mask = (self._sub_bucket_count - 1) << self._unit_magnitude
        self._bucket_count = self._buckets_needed(highest)

        counts_len = (self._bucket_count + 1) * self._sub_bucket_half_count
        self._counts = np.zeros(counts_len, dtype=np.int64)
        self._total_count = 0

        # Lowest value and width of every slot, indexed like _counts.
        index = np.arange(counts_len, dtype=np.int64)
        bucket = (index >> self._half_count_magnitude) - 1
        sub_bucket = (index & (self._sub_bucket_half_count - 1)) + self._sub_bucket_half_count
        first = bucket < 0
        sub_bucket[first] -= self._sub_bucket_half_count
        bucket[first] = 0
        shift = bucket + self._unit_magnitude
        self._slot_lowest = np.left_shift(sub_bucket, shift)
        self._slot_width = np.left_shift(np.ones_like(shift), shift)

    def _buckets_needed(self, highest: int) -> int:
        smallest_untrackable = self._sub_bucket_count << self._unit_magnitude
        buckets = 1
        while smallest_untrackable <= highest:
            smallest_untrackable <<= 1
            buckets += 1
        return buckets

    # ------------------------------------------------------------------ indexing
    def _counts_index(self, value: int) -> int:
        bucket = (
            (value | self._sub_bucket_mask).bit_length()
            - self._unit_magnitude
            - (self._half_count_magnitude + 1)
        )
        sub_bucket = value >> (bucket + self._unit_magnitude)
        return ((bucket + 1) << self._half_count_magnitude) + (
            sub_bucket - self._sub_bucket_half_count
        )

    # ------------------------------------------------------------------ recording
    def record(self, value: int, count: int = 1) -> None:
        """Add ``count`` occurrences of ``value``; counts are untouched on failure."""
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise TypeError(f"Histogram values must be integers, got {value!r}")
        value = int(value)
        if value < self.lowest or value > self.highest:
            raise ValueOutOfRangeError(value, self.lowest, self.highest)
        if count < 1:
            raise ValueError("count must be positive")
        self._counts[self._counts_index(value)] += count
        self._total_count += int(count)

    # ------------------------------------------------------------------ queries
    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def counts(self) -> np.ndarray:
        view = self._counts.view()
        view.flags.writeable = False
        return view

    def is_empty(self) -> bool:
        return self._total_count == 0

    def min(self) -> int:
        nonzero = np.flatnonzero(self._counts)
        if nonzero.size == 0:
            return 0
        return int(self._slot_lowest[nonzero[0]])

    def max(self) -> int:
        nonzero = np.flatnonzero(self._counts)
        if nonzero.size == 0:
            return 0
        idx = nonzero[-1]
        return int(self._slot_lowest[idx] + self._slot_width[idx] - 1)

    def _slot_medians(self) -> np.ndarray:
        return self._slot_lowest + (self._slot_width >> 1)

    def mean(self) -> float:
        if self._total_count == 0:
            return 0.0
        weighted = np.dot(self._counts.astype(np.float64), self._slot_medians())
        return float(weighted / self._total_count)

    def stdev(self) -> float:
        if self._total_count == 0:
            return 0.0
        deviations = self._slot_medians() - self.mean()
        variance = np.dot(self._counts.astype(np.float64), deviations**2) / self._total_count
        return float(math.sqrt(variance))

    def value_at_percentile(self, percentile: float) -> int:
        """Highest equivalent value below which ``percentile`` % of recordings fall."""
        if self._total_count == 0:
            return 0
        percentile = min(max(float(percentile), 0.0), 100.0)
        target = max(math.ceil(percentile / 100.0 * self._total_count), 1)
        cumulative = np.cumsum(self._counts)
        idx = int(np.searchsorted(cumulative, target, side="left"))
        return int(self._slot_lowest[idx] + self._slot_width[idx] - 1)

    def iter_recorded(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(highest_equivalent_value, count)`` for every non-empty slot."""
        for idx in np.flatnonzero(self._counts):
            value = int(self._slot_lowest[idx] + self._slot_width[idx] - 1)
            yield value, int(self._counts[idx])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogLinearHistogram):
            return NotImplemented
        return (
            self.lowest == other.lowest
            and self.highest == other.highest
            and self.significant_digits == other.significant_digits
            and np.array_equal(self._counts, other._counts)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"LogLinearHistogram(lowest={self.lowest}, highest={self.highest}, "
            f"significant_digits={self.significant_digits}, total_count={self._total_count})"
        )


__all__ = ["LogLinearHistogram", "MAX_SIGNIFICANT_DIGITS"]
