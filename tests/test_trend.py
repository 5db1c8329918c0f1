"""
Unit tests for trend indicators.

Tests cover:
- ADX / +DI / -DI warm-up, zero-denominator rules and a pure uptrend
- Aroon bars-since-extreme arithmetic
- SuperTrend initial direction, flips, band ratchet and final state
"""

import pytest

from pandas_ta_cascade import Trend, adx, aroon, supertrend


def uptrend(n, start=100.0):
    close = [start + i for i in range(n)]
    return [c + 1.0 for c in close], [c - 1.0 for c in close], close


def downtrend(n, start=200.0):
    close = [start - i for i in range(n)]
    return [c + 1.0 for c in close], [c - 1.0 for c in close], close


class TestADX:
    """Tests for the directional index pipeline."""

    def test_warmup_boundary(self, series):
        result = adx(series["high"], series["low"], series["close"], 5)
        for line in (result.adx, result.plus_di, result.minus_di):
            assert all(v is None for v in line[:5])
            assert all(v is not None for v in line[5:])

    def test_flat_series_resolves_to_zero(self):
        flat = [10.0] * 12
        result = adx(flat, flat, flat, 4)
        assert result.plus_di[4:] == [0.0] * 8
        assert result.minus_di[4:] == [0.0] * 8
        assert result.adx[4:] == [0.0] * 8

    def test_pure_uptrend(self):
        n = 30
        high = [i + 1.0 for i in range(n)]
        low = [float(i) for i in range(n)]
        close = [i + 0.5 for i in range(n)]
        result = adx(high, low, close, 5)
        # +DM = 1 and TR = 1.5 on every bar; -DM = 0
        assert all(v == pytest.approx(200.0 / 3.0) for v in result.plus_di[5:])
        assert all(v == 0.0 for v in result.minus_di[5:])
        assert all(v == pytest.approx(100.0) for v in result.adx[5:])

    def test_adx_seeded_by_first_dx(self):
        n = 30
        high = [i + 1.0 for i in range(n)]
        low = [float(i) for i in range(n)]
        close = [i + 0.5 for i in range(n)]
        result = adx(high, low, close, 5)
        assert result.adx[5] == pytest.approx(100.0)

    def test_insufficient_data(self):
        h, l, c = uptrend(5)
        result = adx(h, l, c, 5)
        assert result.adx == [None] * 5
        assert result.plus_di == [None] * 5


class TestAroon:
    """Tests for Aroon."""

    def test_rising_series(self):
        h, l, _ = uptrend(10)
        result = aroon(h, l, 5)
        assert result.up[:4] == [None] * 4
        assert result.up[4:] == [100.0] * 6
        # lowest low is always the oldest bar of the window
        assert result.down[4:] == [20.0] * 6
        assert result.oscillator[4:] == [80.0] * 6

    def test_falling_series(self):
        h, l, _ = downtrend(10)
        result = aroon(h, l, 5)
        assert result.up[4:] == [20.0] * 6
        assert result.down[4:] == [100.0] * 6
        assert result.oscillator[4:] == [-80.0] * 6

    def test_bounds(self, series):
        result = aroon(series["high"], series["low"], 14)
        assert all(0.0 < v <= 100.0 for v in result.up[13:])
        assert all(-100.0 <= v <= 100.0 for v in result.oscillator[13:])


class TestSuperTrend:
    """Tests for the trend-flip state machine."""

    def test_trend_enum(self):
        assert int(Trend.UP) == 1
        assert int(Trend.DOWN) == -1

    def test_uptrend_flips_up_and_tracks_lower_band(self):
        h, l, c = uptrend(40)
        result = supertrend(h, l, c, 10, 3.0)
        assert result.trend[-1] == 1
        assert result.supertrend[-1] == result.lower[-1]

    def test_initial_direction_and_flip_bar(self):
        """ATR is 2 throughout, so the first upper band is close + 6."""
        h, l, c = uptrend(40)
        result = supertrend(h, l, c, 10, 3.0)
        assert result.trend[:10] == [None] * 10
        assert result.trend[10] == -1
        assert result.upper[10] == pytest.approx(116.0)
        # upper band holds at 116 until the close reaches it
        assert result.trend[15] == -1
        assert result.upper[15] == pytest.approx(116.0)
        assert result.trend[16] == 1
        assert result.supertrend[16] == pytest.approx(110.0)

    def test_downtrend_tracks_upper_band(self):
        h, l, c = downtrend(40)
        result = supertrend(h, l, c, 10, 3.0)
        assert all(t == -1 for t in result.trend[10:])
        assert result.supertrend[-1] == result.upper[-1]

    def test_directions_are_plus_minus_one(self, series):
        result = supertrend(series["high"], series["low"], series["close"], 7, 2.0)
        assert all(t is None for t in result.trend[:7])
        assert set(result.trend[7:]) <= {1, -1}
        for value, t, upper, lower in zip(result.supertrend, result.trend, result.upper, result.lower):
            if t == 1:
                assert value == lower
            elif t == -1:
                assert value == upper

    def test_bands_ratchet_toward_price(self, series):
        """Within an unbroken trend the active band never loosens."""
        close = series["close"]
        result = supertrend(series["high"], series["low"], close, 7, 2.0)
        for i in range(8, len(result.trend)):
            if result.trend[i] == result.trend[i - 1] == 1 and close[i - 1] > result.lower[i - 1]:
                assert result.lower[i] >= result.lower[i - 1]
            if result.trend[i] == result.trend[i - 1] == -1 and close[i - 1] < result.upper[i - 1]:
                assert result.upper[i] <= result.upper[i - 1]

    def test_short_input_is_all_undefined(self):
        h, l, c = uptrend(10)
        result = supertrend(h, l, c, 10, 3.0)
        assert result.supertrend == [None] * 10
        assert result.trend == [None] * 10
