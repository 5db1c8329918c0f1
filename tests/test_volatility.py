"""
Unit tests for volatility indicators: Bollinger Bands and Keltner Channels.
"""

import math

import pytest

from pandas_ta_cascade import atr, bbands, ema, kc


class TestBBands:
    """Tests for Bollinger Bands."""

    def test_values(self):
        result = bbands([1.0, 2.0, 3.0, 4.0], 4, 2.0)
        width = 2.0 * math.sqrt(1.25)
        assert result.middle == [None, None, None, pytest.approx(2.5)]
        assert result.upper[3] == pytest.approx(2.5 + width)
        assert result.lower[3] == pytest.approx(2.5 - width)

    def test_band_ordering(self, series):
        result = bbands(series["close"])
        assert all(v is None for v in result.middle[:19])
        for upper, middle, lower in zip(result.upper[19:], result.middle[19:], result.lower[19:]):
            assert upper > middle > lower

    def test_constant_input_collapses_bands(self):
        result = bbands([12.5] * 25, 20, 2.0)
        assert result.upper[19:] == [12.5] * 6
        assert result.middle[19:] == [12.5] * 6
        assert result.lower[19:] == [12.5] * 6


class TestKeltner:
    """Tests for Keltner Channels."""

    def test_boundaries(self, series):
        result = kc(series["high"], series["low"], series["close"], 10, 2.0)
        assert result.middle[:9] == [None] * 9
        assert result.middle[9] is not None
        assert result.upper[:10] == [None] * 10
        assert all(v is not None for v in result.upper[10:])

    def test_middle_is_ema_and_bands_use_atr(self, series):
        high, low, close = series["high"], series["low"], series["close"]
        result = kc(high, low, close, 10, 1.5)
        mid = ema(close, 10)
        rng = atr(high, low, close, 10)
        for i in range(10, len(close)):
            assert result.middle[i] == pytest.approx(mid[i])
            assert result.upper[i] == pytest.approx(mid[i] + 1.5 * rng[i])
            assert result.lower[i] == pytest.approx(mid[i] - 1.5 * rng[i])
            assert result.upper[i] >= result.middle[i] >= result.lower[i]

    def test_short_input_is_all_undefined(self):
        h = [2.0, 3.0, 4.0]
        l = [1.0, 2.0, 3.0]
        c = [1.5, 2.5, 3.5]
        result = kc(h, l, c, 3, 2.0)
        assert result.upper == [None] * 3
        assert result.middle == [None] * 3
        assert result.lower == [None] * 3
