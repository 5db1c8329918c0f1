"""
Unit tests for the ``df.ta`` DataFrame extension.

Tests cover:
- Series / DataFrame results with NaN warm-up and pandas-ta column names
- case-insensitive column lookup and input overrides
- append, prefix / suffix / col_names
- study() over categories and kind lists
"""

import numpy as np
import pandas as pd
import pytest

import pandas_ta_cascade as ta
from pandas_ta_cascade import Category
from pandas_ta_cascade.utils import sample_ohlcv


class TestAccessor:
    """Tests for single-kind calls."""

    def test_single_output_is_series(self, ohlcv):
        out = ohlcv.ta.ema(length=3)
        assert isinstance(out, pd.Series)
        assert out.name == "EMA_3"
        assert out.index.equals(ohlcv.index)
        assert out.iloc[:2].isna().all()
        assert out.iloc[2] == pytest.approx(ohlcv["close"].iloc[:3].mean())

    def test_matches_flat_function(self, ohlcv):
        out = ohlcv.ta("rsi", length=5)
        expected = ta.rsi(ohlcv["close"].tolist(), 5)
        assert out.iloc[5:].tolist() == expected[5:]

    def test_multi_output_is_frame(self, ohlcv):
        out = ohlcv.ta.macd()
        assert isinstance(out, pd.DataFrame)
        assert list(out.columns) == ["MACD_12_26_9", "MACDs_12_26_9", "MACDh_12_26_9"]

    def test_output_names(self, ohlcv):
        assert list(ohlcv.ta.bbands().columns) == ["BBU_20_2", "BBM_20_2", "BBL_20_2"]
        assert list(ohlcv.ta.supertrend().columns) == [
            "SUPERT_10_3", "SUPERTd_10_3", "SUPERTu_10_3", "SUPERTl_10_3",
        ]
        assert ohlcv.ta.vwap(length=0).name == "VWAP"

    def test_supertrend_direction_column(self, ohlcv):
        out = ohlcv.ta.supertrend(length=7, multiplier=2.0)
        direction = out["SUPERTd_7_2"]
        assert direction.iloc[:7].isna().all()
        assert set(direction.iloc[7:].unique()) <= {1.0, -1.0}

    def test_case_insensitive_columns(self, ohlcv):
        upper = ohlcv.rename(columns=str.capitalize)
        out = upper.ta.sma(length=4)
        expected = ohlcv.ta.sma(length=4)
        pd.testing.assert_series_equal(out, expected)

    def test_input_override_by_name(self, ohlcv):
        out = ohlcv.ta.sma(close="open", length=2)
        expected = ohlcv["open"].rolling(2).mean()
        np.testing.assert_allclose(out.iloc[1:], expected.iloc[1:])

    def test_input_override_by_series(self, ohlcv):
        doubled = ohlcv["close"] * 2.0
        out = ohlcv.ta.sma(close=doubled, length=3)
        np.testing.assert_allclose(out.iloc[2:], 2.0 * ohlcv.ta.sma(length=3).iloc[2:])

    def test_missing_column(self, ohlcv):
        with pytest.raises(KeyError, match="volume"):
            ohlcv.drop(columns="volume").ta.obv()

    def test_unknown_kind(self, ohlcv):
        with pytest.raises(ValueError):
            ohlcv.ta("zigzag")
        with pytest.raises(AttributeError):
            ohlcv.ta.zigzag()

    def test_indicators(self, ohlcv):
        kinds = ohlcv.ta.indicators()
        assert kinds == sorted(kinds)
        assert "supertrend" in kinds

    def test_category_covers_registry(self):
        categorised = {kind for kinds in Category.values() for kind in kinds}
        assert categorised == set(ta.REGISTRY)


class TestSampleData:
    """Tests for the shared OHLCV generator."""

    def test_deterministic_and_bracketed(self):
        df = sample_ohlcv(30, seed=3)
        pd.testing.assert_frame_equal(df, sample_ohlcv(30, seed=3))
        assert list(df.columns) == ["open", "high", "low", "close", "volume"]
        assert (df["high"] >= df[["open", "close"]].max(axis=1)).all()
        assert (df["low"] <= df[["open", "close"]].min(axis=1)).all()
        assert df["volume"].dtype == float


class TestAppend:
    """Tests for append and renaming."""

    def test_append(self, ohlcv):
        ohlcv.ta.ema(length=5, append=True)
        assert "EMA_5" in ohlcv.columns

    def test_prefix_suffix(self, ohlcv):
        out = ohlcv.ta.ema(length=5, prefix="pre", suffix="post")
        assert out.name == "pre_EMA_5_post"

    def test_col_names(self, ohlcv):
        out = ohlcv.ta.stoch(col_names=("k", "d"))
        assert list(out.columns) == ["k", "d"]

    def test_col_names_too_short(self, ohlcv):
        with pytest.raises(ValueError):
            ohlcv.ta.stoch(col_names=("k",))

    def test_ichimoku_extends_and_append_trims(self, ohlcv):
        out = ohlcv.ta.ichimoku(append=True)
        assert len(out) == len(ohlcv) + 26
        assert isinstance(out.index, pd.RangeIndex)
        assert "ISA_9" in ohlcv.columns
        assert len(ohlcv["ISA_9"]) == len(ohlcv)


class TestStudy:
    """Tests for multi-kind studies."""

    def test_category_study(self, ohlcv):
        out = ohlcv.ta.study("momentum", append=False)
        assert len(out) == len(ohlcv)
        assert "RSI_14" in out.columns
        assert "MACD_12_26_9" in out.columns
        assert "RSI_14" not in ohlcv.columns

    def test_study_with_params_appends(self, ohlcv):
        out = ohlcv.ta.study([{"kind": "ema", "length": 3}, "obv", "ichimoku"])
        assert {"EMA_3", "OBV", "ITS_9"} <= set(out.columns)
        assert out.index.equals(ohlcv.index)
        assert "EMA_3" in ohlcv.columns

    def test_unknown_category(self, ohlcv):
        with pytest.raises(ValueError):
            ohlcv.ta.study("candles")
