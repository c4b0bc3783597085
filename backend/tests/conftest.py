"""
Shared fixtures for ForexChart tests.
"""

import math
from datetime import datetime, timedelta

import pytest

from forexchart.schemas.market import Candle
import forexchart.services.chart.service as chart_service_module
import forexchart.services.chart.session as chart_session_module
import forexchart.services.cache.layout_store as layout_store_module

CSV_HEADER = "ticker,date,time,open,high,low,close,volume"
START = datetime(2023, 6, 1)


def make_candles(closes, spread=0.5, volume=100, start=START):
    return [
        Candle(
            date=start + timedelta(days=i),
            open=close,
            high=close + spread,
            low=close - spread,
            close=close,
            volume=volume,
        )
        for i, close in enumerate(closes)
    ]


def wave_closes(count, base=1.10, amplitude=0.02, period=24):
    return [
        round(base + amplitude * math.sin(2 * math.pi * i / period) + 0.0001 * i, 5)
        for i in range(count)
    ]


def make_csv(closes, start=START):
    lines = [CSV_HEADER]
    for i, close in enumerate(closes):
        date = (start + timedelta(days=i)).strftime("%Y-%m-%d")
        lines.append(
            f"EURUSD,{date},00:00,{close:.5f},{close + 0.001:.5f},"
            f"{close - 0.001:.5f},{close:.5f},{1000 + i}"
        )
    return "\n".join(lines) + "\n"


@pytest.fixture
def candle_factory():
    return make_candles


@pytest.fixture
def wave_candles():
    return make_candles(wave_closes(120), spread=0.001)


@pytest.fixture
def csv_factory():
    return make_csv


@pytest.fixture
def wave_csv():
    return make_csv(wave_closes(120))


@pytest.fixture
def long_wave_csv():
    return make_csv(wave_closes(2500))


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Each test starts without a loaded chart or saved layout."""
    monkeypatch.setattr(chart_session_module, "_session", None)
    monkeypatch.setattr(chart_service_module, "_service_instance", None)
    monkeypatch.setattr(layout_store_module, "_layout_store", None)
    monkeypatch.setattr(layout_store_module, "_redis_pool", None)
