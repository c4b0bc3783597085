"""
Candle Ingestion

CONTRACT:
    Input:  CSV text (header row + data rows)
    Output: list[Candle]

RESPONSIBILITIES:
    - Parse tabular text (malformed structure -> ParseError)
    - Normalize rows into typed candles, dropping invalid rows
"""

from forexchart.services.ingestion.csv_parser import (
    parse_csv,
    parse_csv_rows,
    normalize_rows,
    row_to_candle,
)

__all__ = [
    "parse_csv",
    "parse_csv_rows",
    "normalize_rows",
    "row_to_candle",
]
