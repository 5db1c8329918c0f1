"""
Unit tests for the directional / range extractor.
"""

import pytest

from pandas_ta_cascade import atr, directional_movement, hl2, true_range, typical_price
from pandas_ta_cascade.engine import ATRState, atr_update_raw
from pandas_ta_cascade.engine._range import dm_raw, tr_raw

HIGH = [10.0, 12.0, 11.0]
LOW = [8.0, 9.0, 7.0]
CLOSE = [9.0, 11.0, 8.0]


class TestPerBar:
    """Tests for the per-bar derivations."""

    def test_true_range(self):
        assert true_range(HIGH, LOW, CLOSE) == [None, 3.0, 4.0]

    def test_tr_uses_previous_close_gap(self):
        assert tr_raw(high=21.0, low=20.0, prev_close=15.0) == 6.0

    def test_directional_movement(self):
        plus, minus = directional_movement(HIGH, LOW)
        assert plus == [None, 2.0, 0.0]
        assert minus == [None, 0.0, 2.0]

    def test_dm_never_both_positive(self):
        assert dm_raw(12.0, 8.0, 10.0, 10.0) == (0.0, 0.0)   # equal moves
        assert dm_raw(9.0, 9.5, 10.0, 10.0) == (0.0, 0.5)

    def test_typical_price(self):
        assert typical_price(HIGH, LOW, CLOSE) == pytest.approx([9.0, 32.0 / 3.0, 26.0 / 3.0])

    def test_hl2(self):
        assert hl2(HIGH, LOW) == [9.0, 10.5, 9.0]


class TestATR:
    """Tests for the Wilder ATR."""

    def test_atr_seed_is_mean_of_first_trs(self):
        assert atr(HIGH, LOW, CLOSE, 2) == [None, None, 3.5]

    def test_atr_recursion(self):
        state = ATRState(length=2)
        bars = [(10.0, 8.0, 9.0), (12.0, 9.0, 11.0), (11.0, 7.0, 8.0), (9.0, 8.0, 8.5)]
        out = []
        for h, l, c in bars:
            val, state = atr_update_raw(state, h, l, c)
            out.append(val)
        # TR[3] = max(1, 1, 0) = 1  ->  (3.5 * 1 + 1) / 2
        assert out == [None, None, 3.5, 2.25]

    def test_atr_first_defined_index(self, series):
        out = atr(series["high"], series["low"], series["close"], 14)
        assert all(v is None for v in out[:14])
        assert all(v is not None and v > 0 for v in out[14:])

    def test_atr_insufficient_data(self):
        assert atr(HIGH, LOW, CLOSE, 3) == [None, None, None]
