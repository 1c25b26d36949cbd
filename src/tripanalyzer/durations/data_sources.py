"""Streaming helpers for decoding trip records from CSV exports."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Sequence

import pandas as pd

from .domain_types import TripRecord
from .errors import SourceDecodeError


logger = logging.getLogger(__name__)


PICKUP_TIME_COLUMN = "tpep_pickup_datetime"
DROPOFF_TIME_COLUMN = "tpep_dropoff_datetime"
PICKUP_ZONE_COLUMN = "PULocationID"
DROPOFF_ZONE_COLUMN = "DOLocationID"

TRIP_COLUMNS: Sequence[str] = [
    PICKUP_TIME_COLUMN,
    DROPOFF_TIME_COLUMN,
    PICKUP_ZONE_COLUMN,
    DROPOFF_ZONE_COLUMN,
]


def _decode_zone(raw: object, column: str, row_number: int) -> int:
    text = raw.strip() if isinstance(raw, str) else raw
    if isinstance(text, str) and text.isascii() and text.isdigit():
        return int(text)
    raise SourceDecodeError(
        f"{column} must be an unsigned integer zone id, got {raw!r}", row_number=row_number
    )


def _decode_timestamp_text(raw: object, column: str, row_number: int) -> str:
    if not isinstance(raw, str) or not raw:
        raise SourceDecodeError(f"{column} is missing", row_number=row_number)
    return raw


def decode_trip_row(row: Mapping[str, object], row_number: int) -> TripRecord:
    """Map one CSV row onto a :class:`TripRecord` or raise ``SourceDecodeError``."""
    missing = [column for column in TRIP_COLUMNS if column not in row]
    if missing:
        raise SourceDecodeError(
            f"missing required fields: {', '.join(missing)}", row_number=row_number
        )
    return TripRecord(
        pickup_time=_decode_timestamp_text(row[PICKUP_TIME_COLUMN], PICKUP_TIME_COLUMN, row_number),
        dropoff_time=_decode_timestamp_text(
            row[DROPOFF_TIME_COLUMN], DROPOFF_TIME_COLUMN, row_number
        ),
        pickup_zone=_decode_zone(row[PICKUP_ZONE_COLUMN], PICKUP_ZONE_COLUMN, row_number),
        dropoff_zone=_decode_zone(row[DROPOFF_ZONE_COLUMN], DROPOFF_ZONE_COLUMN, row_number),
    )


def iter_records_from_rows(rows: Iterable[Mapping[str, object]]) -> Iterator[TripRecord]:
    for row_number, row in enumerate(rows, start=1):
        yield decode_trip_row(row, row_number)


def _check_columns(csv_path: Path) -> None:
    """Fail early when the CSV header lacks any of the trip columns."""
    try:
        header_df = pd.read_csv(csv_path, nrows=0)
    except pd.errors.EmptyDataError as exc:
        raise SourceDecodeError(f"{csv_path} has no header row") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise SourceDecodeError(f"{csv_path}: unreadable CSV header: {exc}") from exc
    available = set(header_df.columns)
    missing_required = [column for column in TRIP_COLUMNS if column not in available]
    if missing_required:
        missing_list = ", ".join(missing_required)
        raise SourceDecodeError(f"{csv_path} is missing required columns: {missing_list}")


def iter_trip_records(
    csv_path: str | os.PathLike[str],
    *,
    chunksize: int = 250_000,
) -> Iterator[TripRecord]:
    """Yield trip records from a CSV in file order, one at a time.

    Rows are pulled in pandas chunks to keep memory bounded. Every field is
    read as text so timestamps reach the parser untouched and zone ids are
    validated here rather than coerced by pandas.
    """
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"Trip CSV not found at {path}")
    if chunksize <= 0:
        raise ValueError("chunksize must be positive.")
    _check_columns(path)

    row_number = 0
    chunk_idx = 0
    with pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        chunksize=chunksize,
    ) as reader:
        chunks = iter(reader)
        while True:
            try:
                chunk = next(chunks)
            except StopIteration:
                break
            except (pd.errors.ParserError, UnicodeDecodeError) as exc:
                raise SourceDecodeError(
                    f"{path.name}: malformed CSV after row {row_number}: {exc}"
                ) from exc
            # A first row wider than the header makes pandas infer an index column.
            if not isinstance(chunk.index, pd.RangeIndex):
                raise SourceDecodeError(
                    f"{path.name}: row has more fields than the header", row_number=row_number + 1
                )
            chunk_idx += 1
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "iter_trip_records file=%s chunk=%s rows=%s (cumulative=%s)",
                    path.name,
                    chunk_idx,
                    len(chunk),
                    row_number + len(chunk),
                )
            for values in chunk[list(TRIP_COLUMNS)].itertuples(index=False, name=None):
                row_number += 1
                yield decode_trip_row(dict(zip(TRIP_COLUMNS, values)), row_number)


__all__ = [
    "DROPOFF_TIME_COLUMN",
    "DROPOFF_ZONE_COLUMN",
    "PICKUP_TIME_COLUMN",
    "PICKUP_ZONE_COLUMN",
    "TRIP_COLUMNS",
    "decode_trip_row",
    "iter_records_from_rows",
    "iter_trip_records",
]
