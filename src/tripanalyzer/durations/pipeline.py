"""Single-pass driver that routes qualifying trips into hourly histograms."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .analysis_config import AnalysisConfig
from .domain_types import RunningCounts, TripRecord
from .errors import DurationError
from .hourly_histograms import HourlyDurationHistograms
from .timestamps import parse_timestamp
from .zones import is_weekday

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    counts: RunningCounts
    histograms: HourlyDurationHistograms


class TripDurationAnalyzer:
    """Counts every record, measures qualifying ones, tolerates out-of-range durations.

    Decode and timestamp errors are fatal and propagate out of :meth:`run`;
    :class:`DurationError` is handled per record by bumping ``skipped``.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        *,
        accumulator: Optional[HourlyDurationHistograms] = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        self.zone_filter = self.config.zone_filter()
        self.histograms = accumulator if accumulator is not None else self.config.build_accumulator()
        self.counts = RunningCounts()

    def process_record(self, record: TripRecord) -> bool:
        """Process one record; return True when its duration was recorded."""
        self.counts.read += 1
        if not self.zone_filter.matches_zones(record):
            return False
        pickup = parse_timestamp(record.pickup_time)
        if not is_weekday(pickup):
            return False
        self.counts.matched += 1
        dropoff = parse_timestamp(record.dropoff_time)
        try:
            self.histograms.record_duration(pickup, dropoff)
        except DurationError as exc:
            self.counts.skipped += 1
            logger.warning(
                "Skipping record #%s (%s): %s [pickup=%s dropoff=%s zones=%s->%s]",
                self.counts.read,
                exc.kind,
                exc,
                record.pickup_time,
                record.dropoff_time,
                record.pickup_zone,
                record.dropoff_zone,
            )
            return False
        return True

    def run(
        self,
        records: Iterable[TripRecord],
        *,
        on_record: Optional[Callable[[RunningCounts], None]] = None,
    ) -> AnalysisResult:
        for record in records:
            self.process_record(record)
            if on_record is not None:
                on_record(self.counts)
        logger.info(
            "Finished scan: read=%s matched=%s skipped=%s",
            self.counts.read,
            self.counts.matched,
            self.counts.skipped,
        )
        return AnalysisResult(counts=self.counts, histograms=self.histograms)


def analyze_trips(
    records: Iterable[TripRecord], config: Optional[AnalysisConfig] = None
) -> AnalysisResult:
    return TripDurationAnalyzer(config).run(records)


__all__ = ["AnalysisResult", "TripDurationAnalyzer", "analyze_trips"]
