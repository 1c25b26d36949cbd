from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tripanalyzer.durations.errors import (
    ConfigError,
    DurationError,
    DurationTooLongError,
    DurationTooShortError,
    HistogramConfigError,
    NegativeDurationError,
)
from tripanalyzer.durations.hourly_histograms import HourlyDurationHistograms


PICKUP = datetime(2021, 6, 7, 9, 15, 0)


def _counts_by_hour(histograms: HourlyDurationHistograms) -> list[int]:
    return [histogram.total_count for _, histogram in histograms]


def test_construction_defaults():
    histograms = HourlyDurationHistograms()
    assert len(histograms) == 24
    assert histograms.total_count == 0
    for hour, histogram in histograms:
        assert histogram.lowest == 1
        assert histogram.highest == 10800
        assert histogram.significant_digits == 3
        assert histogram.is_empty(), hour


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"lowest": 0}, HistogramConfigError),
        ({"lowest": 5000, "highest": 4000}, HistogramConfigError),
        ({"significant_digits": 9}, HistogramConfigError),
        ({"min_duration_seconds": 20_000}, ConfigError),
        ({"lowest": 1500, "highest": 10800}, ConfigError),
    ],
)
def test_invalid_configuration(kwargs, error):
    with pytest.raises(error):
        HourlyDurationHistograms(**kwargs)


def test_too_short_duration_is_rejected():
    histograms = HourlyDurationHistograms()
    with pytest.raises(DurationTooShortError) as excinfo:
        histograms.record_duration(PICKUP, PICKUP + timedelta(seconds=1199))
    assert excinfo.value.duration == 1199
    assert excinfo.value.kind == "too_short"
    assert histograms.total_count == 0


def test_zero_duration_is_too_short():
    histograms = HourlyDurationHistograms()
    with pytest.raises(DurationTooShortError):
        histograms.record_duration(PICKUP, PICKUP)


def test_too_long_duration_is_rejected_without_mutation():
    histograms = HourlyDurationHistograms()
    with pytest.raises(DurationTooLongError) as excinfo:
        histograms.record_duration(PICKUP, PICKUP + timedelta(seconds=10801))
    assert excinfo.value.duration == 10801
    assert histograms.total_count == 0


def test_dropoff_before_pickup_is_negative_duration():
    histograms = HourlyDurationHistograms()
    with pytest.raises(NegativeDurationError) as excinfo:
        histograms.record_duration(PICKUP, PICKUP - timedelta(minutes=5))
    assert isinstance(excinfo.value, DurationError)
    assert excinfo.value.duration == -300
    assert histograms.total_count == 0


def test_floor_duration_is_recorded_in_pickup_hour_only():
    histograms = HourlyDurationHistograms()
    assert histograms.record_duration(PICKUP, PICKUP + timedelta(seconds=1200)) == 1200
    counts = _counts_by_hour(histograms)
    assert counts[9] == 1
    assert sum(counts) == 1
    assert histograms.histogram_for_hour(9).max() == 1200


def test_ceiling_duration_is_recorded():
    histograms = HourlyDurationHistograms()
    late = PICKUP.replace(hour=23)
    histograms.record_duration(late, late + timedelta(seconds=10800))
    assert histograms.histogram_for_hour(23).total_count == 1


def test_histogram_for_hour_bounds():
    histograms = HourlyDurationHistograms()
    with pytest.raises(IndexError):
        histograms.histogram_for_hour(24)
    with pytest.raises(IndexError):
        histograms.histogram_for_hour(-1)


def test_custom_floor():
    histograms = HourlyDurationHistograms(min_duration_seconds=60)
    histograms.record_duration(PICKUP, PICKUP + timedelta(seconds=300))
    assert histograms.histogram_for_hour(9).total_count == 1
