"""
CSV Candle Parser

Turns raw CSV text into an ordered list of Candle records.

Structural problems (unterminated quotes, bad line endings) raise ParseError.
Rows whose price/volume fields are not finite numbers are dropped silently,
so one corrupt line never discards a whole upload.
"""

import csv
import io
import logging
import math
from datetime import datetime
from typing import Iterable, Optional, Sequence

from dateutil import parser as date_parser

from forexchart.schemas.market import (
    Candle,
    DATE_COLUMN,
    OPEN_COLUMN,
    HIGH_COLUMN,
    LOW_COLUMN,
    CLOSE_COLUMN,
    VOLUME_COLUMN,
)
from forexchart.services.base import ParseError

logger = logging.getLogger(__name__)

SERVICE_NAME = "CandleParser"

MIN_ROW_LENGTH = VOLUME_COLUMN + 1


def parse_csv_rows(csv_text: str) -> list[list[str]]:
    """
    Split CSV text into rows of strings.

    Raises:
        ParseError: If the text is not well-formed CSV.
    """
    reader = csv.reader(io.StringIO(csv_text, newline=""), strict=True)
    try:
        return [row for row in reader]
    except csv.Error as e:
        raise ParseError(
            SERVICE_NAME,
            f"Malformed CSV at line {reader.line_num}: {e}",
            {"line": reader.line_num},
        ) from e


def parse_float(value: str) -> Optional[float]:
    """Parse a finite float, or None."""
    try:
        number = float(value.strip())
    except (ValueError, AttributeError):
        return None
    return number if math.isfinite(number) else None


def parse_volume(value: str) -> Optional[int]:
    """
    Parse a volume; fractional volumes are truncated toward zero.

    Negative volumes are invalid and give None.
    """
    text = value.strip() if isinstance(value, str) else ""
    try:
        volume = int(text)
    except ValueError:
        number = parse_float(text)
        if number is None:
            return None
        volume = int(number)
    return volume if volume >= 0 else None


def parse_date(value: str) -> Optional[datetime]:
    """
    Parse a timestamp in any format dateutil understands.

    Slash, dot and dash separated dates, month names and ISO 8601 are all
    accepted; ambiguous numeric dates are read month first.
    """
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        return None
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        return None


def row_to_candle(row: Sequence[str]) -> Optional[Candle]:
    """Build a candle from one data row, or None if any field is invalid."""
    if len(row) < MIN_ROW_LENGTH:
        return None

    date = parse_date(row[DATE_COLUMN])
    open_ = parse_float(row[OPEN_COLUMN])
    high = parse_float(row[HIGH_COLUMN])
    low = parse_float(row[LOW_COLUMN])
    close = parse_float(row[CLOSE_COLUMN])
    volume = parse_volume(row[VOLUME_COLUMN])

    if date is None or None in (open_, high, low, close, volume):
        return None

    return Candle(
        date=date,
        open=open_,
        high=high,
        low=low,
        close=close,
        volume=volume,
    )


def normalize_rows(rows: Iterable[Sequence[str]]) -> list[Candle]:
    """
    Convert parsed rows to candles.

    The first row is treated as the header and skipped. Invalid rows are
    dropped; row order is preserved and dates are not deduplicated.
    """
    candles: list[Candle] = []
    for index, row in enumerate(rows):
        if index == 0:
            continue
        candle = row_to_candle(row)
        if candle is not None:
            candles.append(candle)
    return candles


def parse_csv(csv_text: str) -> list[Candle]:
    """Parse CSV text into candles."""
    logger.info("Starting CSV parsing")
    rows = parse_csv_rows(csv_text)
    logger.info(f"CSV parsing complete, rows: {len(rows)}")

    candles = normalize_rows(rows)
    dropped = max(len(rows) - 1, 0) - len(candles)
    logger.info(f"Data processed, valid rows: {len(candles)} (dropped {dropped})")
    return candles
