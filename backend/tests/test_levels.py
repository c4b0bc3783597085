"""
Tests for volume profile and support/resistance detection.
"""

from datetime import datetime

import pytest

from forexchart.schemas.indicators import LevelType, SupportResistanceLevel
from forexchart.schemas.market import Candle
from forexchart.services.levels import (
    Proximity,
    calculate_support_resistance,
    calculate_volume_profile,
    deduplicate_levels,
    find_extrema,
    is_near,
)


def bar(low, high, close, volume):
    return Candle(
        date=datetime(2023, 6, 1), open=close, high=high, low=low, close=close, volume=volume
    )


def levels_at(*prices):
    return [SupportResistanceLevel(price=p, type=LevelType.RESISTANCE) for p in prices]


class TestVolumeProfile:
    def test_default_bin_count(self, wave_candles):
        profile = calculate_volume_profile(wave_candles)

        assert len(profile) == 30
        assert profile[0].price == pytest.approx(min(c.low for c in wave_candles))
        assert [p.price for p in profile] == sorted(p.price for p in profile)

    def test_volume_conserved(self, wave_candles):
        profile = calculate_volume_profile(wave_candles, 12)
        assert sum(p.volume for p in profile) == sum(c.volume for c in wave_candles)

    def test_bin_assignment(self):
        candles = [
            bar(0.0, 1.0, 0.0, 10),
            bar(5.0, 6.0, 5.5, 20),
            bar(9.0, 10.0, 9.99, 30),
        ]
        profile = calculate_volume_profile(candles, 10)

        assert profile[0].volume == 10
        assert profile[5].volume == 20
        assert profile[9].volume == 30
        assert profile[5].price == pytest.approx(5.0)

    def test_close_on_upper_bound_discarded(self):
        candles = [
            bar(0.0, 10.0, 10.0, 500),
            bar(0.0, 4.0, 3.0, 7),
        ]
        profile = calculate_volume_profile(candles, 5)

        assert sum(p.volume for p in profile) == 7

    def test_zero_range_single_bin(self):
        candles = [bar(5.0, 5.0, 5.0, 10), bar(5.0, 5.0, 5.0, 15)]
        profile = calculate_volume_profile(candles, 30)

        assert len(profile) == 1
        assert profile[0].price == 5.0
        assert profile[0].volume == 25

    def test_empty(self):
        assert calculate_volume_profile([], 30) == []

    def test_invalid_levels(self, wave_candles):
        with pytest.raises(ValueError):
            calculate_volume_profile(wave_candles, 0)


class TestFindExtrema:
    def test_single_peak(self, candle_factory):
        closes = list(range(1, 21)) + list(range(19, 0, -1))
        levels = find_extrema(candle_factory([float(c) for c in closes]), 14)

        assert levels == [SupportResistanceLevel(price=20.0, type=LevelType.RESISTANCE)]

    def test_single_valley(self, candle_factory):
        closes = list(range(20, 0, -1)) + list(range(2, 21))
        levels = find_extrema(candle_factory([float(c) for c in closes]), 14)

        assert levels == [SupportResistanceLevel(price=1.0, type=LevelType.SUPPORT)]

    def test_ties_are_not_extrema(self, candle_factory):
        closes = [1.0] * 10 + [2.0, 2.0] + [1.0] * 10
        assert find_extrema(candle_factory(closes), 3) == []

    def test_series_shorter_than_window(self, candle_factory):
        assert find_extrema(candle_factory([1.0, 3.0, 1.0]), 14) == []

    def test_invalid_periods(self, candle_factory):
        with pytest.raises(ValueError):
            find_extrema(candle_factory([1.0]), 0)


class TestDeduplicate:
    def test_drops_near_duplicates(self):
        kept = deduplicate_levels(levels_at(100.0, 100.5, 99.0), 0.01)
        assert [level.price for level in kept] == [100.0, 99.0]

    def test_relative_proximity_depends_on_order(self):
        forward = deduplicate_levels(levels_at(100.0, 101.0), 0.01, Proximity.RELATIVE)
        backward = deduplicate_levels(levels_at(101.0, 100.0), 0.01, Proximity.RELATIVE)

        assert [level.price for level in forward] == [100.0]
        assert [level.price for level in backward] == [101.0, 100.0]

    def test_symmetric_proximity_ignores_order(self):
        forward = deduplicate_levels(levels_at(100.0, 101.0), 0.01, Proximity.SYMMETRIC)
        backward = deduplicate_levels(levels_at(101.0, 100.0), 0.01, Proximity.SYMMETRIC)

        assert len(forward) == len(backward) == 2

    def test_first_occurrence_wins(self):
        kept = deduplicate_levels(levels_at(1.1000, 1.1001, 1.1002), 0.01)
        assert [level.price for level in kept] == [1.1000]

    def test_zero_threshold_keeps_all(self):
        assert len(deduplicate_levels(levels_at(1.0, 1.0), 0.0)) == 2

    def test_zero_price(self):
        assert is_near(0.0, 0.0, 0.01)
        assert not is_near(1.0, 0.0, 0.01)


class TestSupportResistance:
    def test_chronological_and_typed(self, wave_candles):
        levels = calculate_support_resistance(wave_candles, 5, 0.001)

        assert levels
        assert {level.type for level in levels} <= {LevelType.SUPPORT, LevelType.RESISTANCE}

    def test_empty(self):
        assert calculate_support_resistance([], 14, 0.01) == []
