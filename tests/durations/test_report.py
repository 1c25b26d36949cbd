from __future__ import annotations

from datetime import datetime, timedelta

from rich.console import Console

from tripanalyzer.durations.domain_types import RunningCounts
from tripanalyzer.durations.hourly_histograms import HourlyDurationHistograms
from tripanalyzer.durations.pipeline import AnalysisResult
from tripanalyzer.durations.report import render_summary, summarize_hours, write_summary_csv


def _histograms() -> HourlyDurationHistograms:
    histograms = HourlyDurationHistograms()
    pickup = datetime(2021, 6, 7, 8, 0, 0)
    for minutes in (25, 30, 30, 34):
        histograms.record_duration(pickup, pickup + timedelta(minutes=minutes))
    return histograms


def test_summarize_hours_columns_and_values():
    frame = summarize_hours(_histograms(), percentiles=(50, 99.9))
    assert list(frame.columns) == [
        "hour",
        "count",
        "mean_s",
        "min_s",
        "p50_s",
        "p99_9_s",
        "max_s",
    ]
    assert len(frame) == 24
    eight = frame[frame["hour"] == 8].iloc[0]
    assert eight["count"] == 4
    assert eight["min_s"] == 1500
    assert eight["p50_s"] == 1800
    assert eight["max_s"] == 2040
    assert frame["count"].sum() == 4
    assert frame[frame["hour"] == 3]["mean_s"].isna().all()


def test_render_summary_prints_tables(tmp_path):
    console = Console(record=True, width=120)
    result = AnalysisResult(counts=RunningCounts(read=10, matched=5, skipped=1), histograms=_histograms())
    frame = render_summary(result, console=console)
    text = console.export_text()
    assert "Trip Scan Summary" in text
    assert "Trip Duration by Pickup Hour" in text
    assert "08:00" in text
    assert "30m00s" in text

    dest = write_summary_csv(frame, tmp_path / "nested" / "summary.csv")
    assert dest.exists()
