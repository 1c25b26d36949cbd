"""Per-hour summaries of the duration histograms."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd
from rich.console import Console
from rich.table import Table

from .hourly_histograms import HourlyDurationHistograms
from .pipeline import AnalysisResult

DEFAULT_PERCENTILES: Sequence[float] = (50.0, 90.0, 99.0)


def _percentile_column(percentile: float) -> str:
    label = f"{percentile:g}".replace(".", "_")
    return f"p{label}_s"


def summarize_hours(
    histograms: HourlyDurationHistograms,
    percentiles: Sequence[float] = DEFAULT_PERCENTILES,
) -> pd.DataFrame:
    """Return one row per pickup hour with count, mean, min, percentiles and max."""
    rows: List[Dict[str, float]] = []
    for hour, histogram in histograms:
        row: Dict[str, float] = {"hour": hour, "count": histogram.total_count}
        empty = histogram.is_empty()
        row["mean_s"] = math.nan if empty else histogram.mean()
        row["min_s"] = math.nan if empty else histogram.min()
        for percentile in percentiles:
            row[_percentile_column(percentile)] = (
                math.nan if empty else histogram.value_at_percentile(percentile)
            )
        row["max_s"] = math.nan if empty else histogram.max()
        rows.append(row)
    frame = pd.DataFrame(rows)
    frame["hour"] = frame["hour"].astype(int)
    frame["count"] = frame["count"].astype(int)
    return frame


def write_summary_csv(frame: pd.DataFrame, path: str | Path) -> Path:
    dest = Path(path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(dest, index=False)
    return dest


def _format_seconds(value: float) -> str:
    if pd.isna(value):
        return "-"
    minutes, seconds = divmod(int(round(value)), 60)
    return f"{minutes}m{seconds:02d}s"


def render_summary(
    result: AnalysisResult,
    console: Optional[Console] = None,
    percentiles: Sequence[float] = DEFAULT_PERCENTILES,
) -> pd.DataFrame:
    """Print run tallies and the per-hour table; returns the summary frame."""
    console = console or Console()
    counts = result.counts

    totals = Table(title="Trip Scan Summary", show_header=True, header_style="bold cyan")
    totals.add_column("Metric", style="bold")
    totals.add_column("Value", justify="right", style="green")
    totals.add_row("Records read", f"{counts.read:,}")
    totals.add_row("Matched (midtown -> JFK, weekday)", f"{counts.matched:,}")
    totals.add_row("Skipped (duration out of range)", f"{counts.skipped:,}")
    totals.add_row("Recorded", f"{counts.recorded:,}", style="bold yellow")
    console.print(totals)

    frame = summarize_hours(result.histograms, percentiles)
    hourly = Table(title="Trip Duration by Pickup Hour", show_header=True, header_style="bold cyan")
    hourly.add_column("Hour", justify="right")
    hourly.add_column("Trips", justify="right")
    hourly.add_column("Mean", justify="right")
    for percentile in percentiles:
        hourly.add_column(f"p{percentile:g}", justify="right")
    hourly.add_column("Max", justify="right")
    for row in frame.itertuples(index=False):
        values = row._asdict()
        cells = [f"{int(values['hour']):02d}:00", f"{int(values['count']):,}"]
        cells.append(_format_seconds(values["mean_s"]))
        for percentile in percentiles:
            cells.append(_format_seconds(values[_percentile_column(percentile)]))
        cells.append(_format_seconds(values["max_s"]))
        hourly.add_row(*cells)
    console.print(hourly)
    return frame


__all__ = ["DEFAULT_PERCENTILES", "render_summary", "summarize_hours", "write_summary_csv"]
