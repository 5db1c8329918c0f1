# -*- coding: utf-8 -*-
"""pandas-ta cascade engine – smoothing, window and cascade primitives.

Category modules populate REGISTRY at import time.  This package
re-exports it plus the shared base API and every public indicator.
"""
from __future__ import annotations

# Base API (always available)
from ._base import (
    EMAState,
    Indicator,
    IndicatorInputError,
    OptionalSeries,
    REGISTRY,
    SEED_MODES,
    ema_make,
    ema_update_raw,
    evaluate,
    resolve_output_names,
    rma_make,
    smooth,
    supported_kinds,
    SPEC_EXCLUDES,
    _is_nan,
    _param,
    _as_int,
    _as_float,
)
from ._window import REDUCTIONS, WindowState, rolling, window_make, window_update_raw
from ._compose import DenseSeries, Stage, apply_stage, cascade, combine, ratio
from ._range import (
    ATRState,
    atr_update_raw,
    directional_movement,
    hl2,
    true_range,
    typical_price,
)

# ---------------------------------------------------------------------------
# Category modules – each populates the shared registry on import
# ---------------------------------------------------------------------------
from ._overlap import dema, ema, rma, sma, tema, wma
from ._statistics import stdev, variance
from ._momentum import (
    MACDResult, PPOResult, StochResult, cci, macd, ppo, rsi, stoch, willr,
)
from ._trend import (
    ADXResult, AroonResult, SuperTrendResult, Trend, adx, aroon, supertrend,
)
from ._volatility import BBandsResult, KCResult, atr, bbands, kc
from ._volume import intraday_vwap, mfi, obv, vwap
from ._lookahead import IchimokuResult, ichimoku

__all__ = [
    # base
    "EMAState",
    "ATRState",
    "Indicator",
    "IndicatorInputError",
    "OptionalSeries",
    "REGISTRY",
    "SEED_MODES",
    "ema_make",
    "rma_make",
    "ema_update_raw",
    "atr_update_raw",
    "smooth",
    "evaluate",
    "resolve_output_names",
    "supported_kinds",
    # window / cascade
    "REDUCTIONS",
    "WindowState",
    "window_make",
    "window_update_raw",
    "rolling",
    "DenseSeries",
    "Stage",
    "apply_stage",
    "cascade",
    "combine",
    "ratio",
    # range
    "true_range",
    "directional_movement",
    "typical_price",
    "hl2",
    # overlap
    "sma",
    "ema",
    "rma",
    "wma",
    "dema",
    "tema",
    # statistics
    "variance",
    "stdev",
    # momentum
    "MACDResult",
    "PPOResult",
    "StochResult",
    "macd",
    "ppo",
    "rsi",
    "cci",
    "stoch",
    "willr",
    # trend
    "ADXResult",
    "AroonResult",
    "SuperTrendResult",
    "Trend",
    "adx",
    "aroon",
    "supertrend",
    # volatility
    "BBandsResult",
    "KCResult",
    "atr",
    "bbands",
    "kc",
    # volume
    "obv",
    "vwap",
    "intraday_vwap",
    "mfi",
    # lookahead
    "IchimokuResult",
    "ichimoku",
]
