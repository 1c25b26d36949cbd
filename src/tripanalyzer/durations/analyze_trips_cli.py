"""CLI entry point: per-hour duration distribution of midtown -> JFK weekday trips."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from tripanalyzer import __version__
from tripanalyzer.durations.analysis_config import AnalysisConfig
from tripanalyzer.durations.data_sources import iter_trip_records
from tripanalyzer.durations.domain_types import RunningCounts
from tripanalyzer.durations.errors import TripAnalyzerError
from tripanalyzer.durations.pipeline import TripDurationAnalyzer
from tripanalyzer.durations.report import render_summary, write_summary_csv

logger = logging.getLogger(__name__)


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text!r}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="trip-analyzer",
        description="Analyze yellow cab trip records.",
    )
    parser.add_argument("infile", metavar="INFILE", help="Sets the input CSV file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML file with histogram bounds, duration floor and zone sets.",
    )
    parser.add_argument(
        "--lowest-seconds",
        type=int,
        default=None,
        help="Lowest trackable duration in seconds (default: 1).",
    )
    parser.add_argument(
        "--highest-seconds",
        type=int,
        default=None,
        help="Highest trackable duration in seconds; longer trips are skipped (default: 10800).",
    )
    parser.add_argument(
        "--significant-digits",
        type=int,
        default=None,
        help="Histogram precision in significant decimal digits (default: 3).",
    )
    parser.add_argument(
        "--min-duration-seconds",
        type=int,
        default=None,
        help="Trips shorter than this are skipped (default: 1200).",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=250_000,
        help="Chunk size for streaming CSV ingestion.",
    )
    parser.add_argument(
        "--output-csv",
        default=None,
        help="Optional destination CSV for the per-hour summary table.",
    )
    parser.add_argument(
        "--log-every",
        type=int,
        default=1_000_000,
        help="Log progress after processing this many records.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Verbosity for the CLI logger.",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def load_config(args: argparse.Namespace) -> AnalysisConfig:
    if args.config:
        logger.info("Loading analysis config from %s", args.config)
        config = AnalysisConfig.from_yaml(args.config)
    else:
        config = AnalysisConfig()
    return config.with_overrides(
        lowest_seconds=args.lowest_seconds,
        highest_seconds=args.highest_seconds,
        significant_digits=args.significant_digits,
        min_duration_seconds=args.min_duration_seconds,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = load_config(args)
        analyzer = TripDurationAnalyzer(config)
        logger.info("Reading trip records from %s", args.infile)
        records = iter_trip_records(args.infile, chunksize=args.chunk_size)

        progress_console = Console(stderr=True)
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            TextColumn("{task.completed:,} records", justify="right"),
            TimeElapsedColumn(),
            console=progress_console,
            transient=True,
            disable=not progress_console.is_terminal,
        )

        def _on_record(counts: RunningCounts) -> None:
            progress.advance(task, 1)
            if args.log_every and counts.read % args.log_every == 0:
                logger.info(
                    "Processed %s records | matched=%s skipped=%s",
                    counts.read,
                    counts.matched,
                    counts.skipped,
                )

        with progress:
            task = progress.add_task("Scanning trips", total=None)
            result = analyzer.run(records, on_record=_on_record)
    except (TripAnalyzerError, OSError) as exc:
        logger.error("Trip analysis failed: %s", exc)
        return 1

    frame = render_summary(result)
    if args.output_csv:
        dest = write_summary_csv(frame, args.output_csv)
        logger.info("Per-hour summary written to %s", dest)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
