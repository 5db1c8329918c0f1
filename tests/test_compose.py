"""
Unit tests for the cascade composer.

Tests cover:
- DenseSeries prefix stripping and expansion
- Stage validation and cascade offsets
- combine / ratio alignment
- DEMA / TEMA / MACD / PPO warm-up boundaries and identities
"""

import warnings

import pytest

from pandas_ta_cascade import dema, ema, macd, ppo, rma, tema
from pandas_ta_cascade.engine import DenseSeries, Stage, apply_stage, cascade, combine, ratio


def ramp(n, start=10.0, step=0.5):
    return [start + step * i + (i % 3) * 0.25 for i in range(n)]


class TestDenseSeries:
    """Tests for the (offset, values) pair."""

    def test_from_optional_strips_prefix(self):
        dense = DenseSeries.from_optional([None, None, 1.0, 2.0])
        assert dense.offset == 2
        assert dense.values == (1.0, 2.0)
        assert dense.end == 4

    def test_from_optional_rejects_holes(self):
        with pytest.raises(ValueError):
            DenseSeries.from_optional([None, 1.0, None, 2.0])

    def test_expand_round_trip(self):
        optional = [None, None, 1.0, 2.0]
        assert DenseSeries.from_optional(optional).expand(4) == optional

    def test_at(self):
        dense = DenseSeries(3, (7.0, 8.0))
        assert dense.at(2) is None
        assert dense.at(3) == 7.0
        assert dense.at(5) is None


class TestStages:
    """Tests for Stage, apply_stage and cascade."""

    def test_invalid_stage_kind(self):
        with pytest.raises(ValueError):
            Stage("wma", 3)

    def test_invalid_stage_length(self):
        with pytest.raises(ValueError):
            Stage("ema", 0)

    def test_offsets_accumulate(self):
        """Each stage of period n adds n - 1 to the offset."""
        stages = cascade(ramp(20), [Stage("ema", 3)] * 3)
        assert [s.offset for s in stages] == [2, 4, 6]
        assert [len(s) for s in stages] == [18, 16, 14]

    def test_first_stage_matches_ema(self):
        values = ramp(15)
        (first,) = cascade(values, [Stage("ema", 4)])
        assert first.expand(15) == ema(values, 4)

    def test_wilder_stage_matches_rma(self):
        values = ramp(15)
        (first,) = cascade(values, [Stage("rma", 4)])
        assert first.offset == 3
        assert first.expand(15) == rma(values, 4)

    def test_two_wilder_stages(self):
        values = ramp(20)
        first, second = cascade(values, [Stage("rma", 4), Stage("rma", 4)])
        assert second.offset == 6
        out = second.expand(20)
        assert out[:6] == [None] * 6
        assert out[6] is not None
        assert list(second.values) == rma(list(first.values), 4)[3:]

    def test_sma_stage(self):
        dense = apply_stage(DenseSeries(1, (2.0, 4.0, 6.0)), Stage("sma", 2))
        assert dense.offset == 2
        assert dense.values == (3.0, 5.0)

    def test_stage_on_short_input_is_empty(self):
        dense = apply_stage(DenseSeries.from_values([1.0, 2.0]), Stage("ema", 5))
        assert len(dense) == 0
        assert dense.expand(2) == [None, None]


class TestCombine:
    """Tests for combine and ratio alignment."""

    def test_combine_aligns_on_largest_offset(self):
        a = DenseSeries(0, (1.0, 2.0, 3.0))
        b = DenseSeries(1, (10.0, 20.0))
        out = combine((1.0, -1.0), (a, b))
        assert out.offset == 1
        assert out.values == (-8.0, -17.0)

    def test_combine_weight_count(self):
        with pytest.raises(ValueError):
            combine((1.0,), (DenseSeries(0, (1.0,)), DenseSeries(0, (2.0,))))

    def test_ratio_zero_denominator(self):
        out = ratio(DenseSeries(0, (1.0, 2.0)), DenseSeries(0, (0.0, 4.0)), scalar=100.0)
        assert out.values == (0.0, 50.0)


class TestCascadeIndicators:
    """Tests for the indicators built on cascades."""

    def test_dema_first_defined_index(self):
        out = dema(ramp(30), 5)
        assert all(v is None for v in out[:8])
        assert all(v is not None for v in out[8:])

    def test_tema_first_defined_index(self):
        out = tema(ramp(30), 5)
        assert all(v is None for v in out[:12])
        assert all(v is not None for v in out[12:])

    def test_dema_constant_input(self):
        out = dema([50.0] * 20, 4)
        assert all(v == pytest.approx(50.0) for v in out[6:])

    def test_tema_insufficient_data(self):
        assert tema([1.0, 2.0, 3.0], 2) == [None, None, None]

    def test_macd_boundaries(self):
        result = macd(ramp(40), fast=3, slow=6, signal=4)
        assert all(v is None for v in result.macd[:5])
        assert result.macd[5] is not None
        assert all(v is None for v in result.signal[:8])
        assert all(v is not None for v in result.signal[8:])
        assert result.histogram[:8] == [None] * 8

    def test_macd_histogram_identity(self):
        result = macd(ramp(40), fast=3, slow=6, signal=4)
        for line, sig, hist in zip(result.macd, result.signal, result.histogram):
            if hist is not None:
                assert hist == pytest.approx(line - sig)

    def test_macd_line_is_fast_minus_slow(self):
        values = ramp(40)
        fast, slow = ema(values, 3), ema(values, 6)
        result = macd(values, fast=3, slow=6, signal=4)
        for i in range(5, 40):
            assert result.macd[i] == pytest.approx(fast[i] - slow[i])

    def test_macd_swaps_fast_and_slow(self):
        values = ramp(40)
        with pytest.warns(UserWarning):
            swapped = macd(values, fast=6, slow=3, signal=4)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            expected = macd(values, fast=3, slow=6, signal=4)
        assert swapped == expected

    def test_swap_warning_points_at_caller(self):
        with pytest.warns(UserWarning) as record:
            ppo(ramp(40), fast=6, slow=3, signal=4)
        assert record[0].filename == __file__

    def test_macd_short_input(self):
        result = macd([1.0, 2.0, 3.0, 4.0], fast=3, slow=6, signal=4)
        assert result.macd == [None] * 4
        assert result.signal == [None] * 4
        assert result.histogram == [None] * 4

    def test_ppo_matches_definition(self):
        values = ramp(40)
        fast, slow = ema(values, 3), ema(values, 6)
        result = ppo(values, fast=3, slow=6, signal=4)
        for i in range(5, 40):
            assert result.ppo[i] == pytest.approx(100.0 * (fast[i] - slow[i]) / slow[i])

    def test_ppo_zero_slow_ema(self):
        result = ppo([0.0] * 20, fast=3, slow=6, signal=4)
        assert result.ppo[5:] == [0.0] * 15
        assert result.signal[8:] == [0.0] * 12
