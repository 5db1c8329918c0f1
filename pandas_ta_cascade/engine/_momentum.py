# -*- coding: utf-8 -*-
"""pandas-ta cascade -- momentum indicators.

Each section follows the pattern:
  1. State dataclass or cascade definition
  2. compute / output_names helpers
  3. REGISTRY["<kind>"] = Indicator(...)
  4. public function (bottom of the module)

Warm-up legend (index of the first defined sample):
  macd, ppo         -- slow - 1;  signal / histogram: slow + signal - 2
  rsi               -- length
  cci, willr        -- length - 1
  stoch             -- %K: k - 1;  %D: k + d - 2

Flat-input conventions: RSI saturates to 100 (zero average loss) while CCI,
Williams %R and Stochastic %K resolve to 0 (zero deviation / zero range).
"""
from __future__ import annotations

import warnings
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ._base import (
    EMAState,
    OptionalSeries,
    _as_float,
    _as_period,
    _fmt_num,
    _param,
    Indicator,
    REGISTRY,
    ema_update_raw,
    evaluate,
    replay,
    rma_make,
)
from ._compose import DenseSeries, Stage, apply_stage, cascade, combine, ratio
from ._range import tp_raw
from ._window import rolling, window_mean_deviation, window_moments


def _fast_slow(params: Dict[str, Any], warn: bool = False) -> Tuple[int, int, int]:
    fast   = _as_period(params, "fast",   12)
    slow   = _as_period(params, "slow",   26)
    signal = _as_period(params, "signal",  9)
    if slow < fast:
        if warn:
            warnings.warn(
                f"fast period {fast} is greater than slow period {slow}; swapping them",
                UserWarning,
                stacklevel=5,
            )
        fast, slow = slow, fast
    return fast, slow, signal


# ===========================================================================
# MACD
# ===========================================================================
# MACD   = EMA(close, fast) - EMA(close, slow)   aligned on the slow offset
# Signal = EMA(MACD, signal)                      one more cascade stage
# Hist   = MACD - Signal
# Defaults: fast=12, slow=26, signal=9

@dataclass
class MACDResult:
    macd: OptionalSeries
    signal: OptionalSeries
    histogram: OptionalSeries


def _line_signal_hist(line: DenseSeries, signal: int, size: int) -> List[list]:
    sig = apply_stage(line, Stage("ema", signal))
    hist = combine((1.0, -1.0), (line, sig))
    return [line.expand(size), sig.expand(size), hist.expand(size)]


def _macd_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    fast, slow, signal = _fast_slow(params, warn=True)
    close = inputs["close"]
    (f,) = cascade(close, [Stage("ema", fast)])
    (s,) = cascade(close, [Stage("ema", slow)])
    line = combine((1.0, -1.0), (f, s))
    return _line_signal_hist(line, signal, len(close))


def _macd_output_names(params: Dict[str, Any]) -> List[str]:
    fast, slow, signal = _fast_slow(params)
    p = f"_{fast}_{slow}_{signal}"
    return [f"MACD{p}", f"MACDs{p}", f"MACDh{p}"]


REGISTRY["macd"] = Indicator(
    kind="macd",
    inputs=("close",),
    outputs=("macd", "signal", "histogram"),
    compute=_macd_compute,
    output_names=_macd_output_names,
)


# ===========================================================================
# PPO
# ===========================================================================
# PPO    = scalar * (EMA(fast) - EMA(slow)) / EMA(slow)   (0 where EMA(slow) == 0)
# Signal = EMA(PPO, signal)
# Hist   = PPO - Signal
# Defaults: fast=12, slow=26, signal=9, scalar=100

@dataclass
class PPOResult:
    ppo: OptionalSeries
    signal: OptionalSeries
    histogram: OptionalSeries


def _ppo_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    fast, slow, signal = _fast_slow(params, warn=True)
    scalar = _as_float(_param(params, "scalar", 100.0), 100.0)
    close = inputs["close"]
    (f,) = cascade(close, [Stage("ema", fast)])
    (s,) = cascade(close, [Stage("ema", slow)])
    line = ratio(combine((1.0, -1.0), (f, s)), s, scalar=scalar, zero=0.0)
    return _line_signal_hist(line, signal, len(close))


def _ppo_output_names(params: Dict[str, Any]) -> List[str]:
    fast, slow, signal = _fast_slow(params)
    p = f"_{fast}_{slow}_{signal}"
    return [f"PPO{p}", f"PPOs{p}", f"PPOh{p}"]


REGISTRY["ppo"] = Indicator(
    kind="ppo",
    inputs=("close",),
    outputs=("ppo", "signal", "histogram"),
    compute=_ppo_compute,
    output_names=_ppo_output_names,
)


# ===========================================================================
# RSI
# ===========================================================================
# delta = close - prev_close, gain = max(delta, 0), loss = max(-delta, 0)
# avg_gain / avg_loss -> RMA (alpha=1/n, SMA seed over the first n deltas)
# RSI = 100 - 100 / (1 + avg_gain / avg_loss);  100 when avg_loss == 0
# First bar: store prev_close only; no delta.
# Default length=14

@dataclass
class RSIState:
    length: int
    avg_gain: EMAState
    avg_loss: EMAState
    prev_close: Optional[float] = None


def _rsi_init(params: Dict[str, Any]) -> RSIState:
    length = _as_period(params, "length", 14)
    return RSIState(
        length=length,
        avg_gain=rma_make(length),
        avg_loss=rma_make(length),
    )


def _rsi_update(
    state: RSIState, bar: Dict[str, float], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], RSIState]:
    close = bar["close"]

    if state.prev_close is None:
        state.prev_close = close
        return [None], state

    delta = close - state.prev_close
    state.prev_close = close

    g_val, state.avg_gain = ema_update_raw(state.avg_gain, max(delta, 0.0))
    l_val, state.avg_loss = ema_update_raw(state.avg_loss, max(-delta, 0.0))

    if g_val is None or l_val is None:
        return [None], state
    if l_val == 0.0:
        return [100.0], state
    return [100.0 - 100.0 / (1.0 + g_val / l_val)], state


REGISTRY["rsi"] = Indicator(
    kind="rsi",
    inputs=("close",),
    outputs=("rsi",),
    compute=replay(_rsi_init, _rsi_update, 1),
    output_names=lambda params: [f"RSI_{_as_period(params, 'length', 14)}"],
)


# ===========================================================================
# CCI
# ===========================================================================
# CCI = (TP - SMA(TP)) / (0.015 * meanDev(TP));  0 when meanDev == 0
# Default length=20

@dataclass
class CCIState:
    length: int
    constant: float
    buf: deque = field(default_factory=deque)


def _cci_init(params: Dict[str, Any]) -> CCIState:
    length = _as_period(params, "length", 20)
    constant = _as_float(_param(params, "c", 0.015), 0.015)
    return CCIState(length=length, constant=constant, buf=deque(maxlen=length))


def _cci_update(
    state: CCIState, bar: Dict[str, float], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], CCIState]:
    tp = tp_raw(bar["high"], bar["low"], bar["close"])
    state.buf.append(tp)
    if len(state.buf) < state.length:
        return [None], state
    mean, _ = window_moments(state.buf)
    mad = window_mean_deviation(state.buf, mean)
    if mad == 0.0:
        return [0.0], state
    return [(tp - mean) / (state.constant * mad)], state


REGISTRY["cci"] = Indicator(
    kind="cci",
    inputs=("high", "low", "close"),
    outputs=("cci",),
    compute=replay(_cci_init, _cci_update, 1),
    output_names=lambda params: [
        f"CCI_{_as_period(params, 'length', 20)}_{_fmt_num(_as_float(_param(params, 'c', 0.015), 0.015))}"
    ],
)


# ===========================================================================
# STOCH
# ===========================================================================
# %K = 100 * (close - LL(k)) / (HH(k) - LL(k));  0 when HH == LL
# %D = SMA(%K, d)   (a cascade stage on the dense %K series)
# Defaults: k=14, d=3

@dataclass
class StochResult:
    k: OptionalSeries
    d: OptionalSeries


def _range_position(
    highest: OptionalSeries, lowest: OptionalSeries, close: Sequence[float], scale: float, anchor: str
) -> OptionalSeries:
    out: OptionalSeries = []
    for hh, ll, c in zip(highest, lowest, close):
        if hh is None or ll is None:
            out.append(None)
        elif hh == ll:
            out.append(0.0)
        elif anchor == "low":
            out.append(scale * (c - ll) / (hh - ll))
        else:
            out.append(scale * (hh - c) / (hh - ll))
    return out


def _stoch_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    k = _as_period(params, "k", 14)
    d = _as_period(params, "d", 3)
    close = inputs["close"]
    highest = rolling(inputs["high"], k, "max")
    lowest = rolling(inputs["low"], k, "min")
    stoch_k = _range_position(highest, lowest, close, 100.0, "low")
    stoch_d = apply_stage(DenseSeries.from_optional(stoch_k), Stage("sma", d))
    return [stoch_k, stoch_d.expand(len(close))]


def _stoch_output_names(params: Dict[str, Any]) -> List[str]:
    k = _as_period(params, "k", 14)
    d = _as_period(params, "d", 3)
    return [f"STOCHk_{k}_{d}", f"STOCHd_{k}_{d}"]


REGISTRY["stoch"] = Indicator(
    kind="stoch",
    inputs=("high", "low", "close"),
    outputs=("k", "d"),
    compute=_stoch_compute,
    output_names=_stoch_output_names,
)


# ===========================================================================
# WILLR
# ===========================================================================
# %R = -100 * (HH - close) / (HH - LL);  0 when HH == LL
# Default length=14

def _willr_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    length = _as_period(params, "length", 14)
    highest = rolling(inputs["high"], length, "max")
    lowest = rolling(inputs["low"], length, "min")
    return [_range_position(highest, lowest, inputs["close"], -100.0, "high")]


REGISTRY["willr"] = Indicator(
    kind="willr",
    inputs=("high", "low", "close"),
    outputs=("willr",),
    compute=_willr_compute,
    output_names=lambda params: [f"WILLR_{_as_period(params, 'length', 14)}"],
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def macd(close: Sequence[float], fast: Optional[int] = None, slow: Optional[int] = None,
         signal: Optional[int] = None) -> MACDResult:
    """Moving Average Convergence Divergence (12, 26, 9).

    ``fast > slow`` is normalised by swapping the two with a ``UserWarning``.
    """
    line, sig, hist = evaluate("macd", {"close": close},
                               {"fast": fast, "slow": slow, "signal": signal})
    return MACDResult(macd=line, signal=sig, histogram=hist)


def ppo(close: Sequence[float], fast: Optional[int] = None, slow: Optional[int] = None,
        signal: Optional[int] = None, scalar: Optional[float] = None) -> PPOResult:
    """Percentage Price Oscillator (12, 26, 9), scaled by ``scalar`` (100)."""
    line, sig, hist = evaluate("ppo", {"close": close},
                               {"fast": fast, "slow": slow, "signal": signal, "scalar": scalar})
    return PPOResult(ppo=line, signal=sig, histogram=hist)


def rsi(close: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Wilder's Relative Strength Index (default 14).

    A window without losses saturates to 100.
    """
    return evaluate("rsi", {"close": close}, {"length": length})[0]


def cci(high: Sequence[float], low: Sequence[float], close: Sequence[float],
        length: Optional[int] = None, c: Optional[float] = None) -> OptionalSeries:
    """Commodity Channel Index over the typical price (default 20, c=0.015)."""
    return evaluate("cci", {"high": high, "low": low, "close": close},
                    {"length": length, "c": c})[0]


def stoch(high: Sequence[float], low: Sequence[float], close: Sequence[float],
          k: Optional[int] = None, d: Optional[int] = None) -> StochResult:
    """Stochastic oscillator: %K over ``k`` bars (14), %D = SMA(%K, ``d``) (3)."""
    k_line, d_line = evaluate("stoch", {"high": high, "low": low, "close": close},
                              {"k": k, "d": d})
    return StochResult(k=k_line, d=d_line)


def willr(high: Sequence[float], low: Sequence[float], close: Sequence[float],
          length: Optional[int] = None) -> OptionalSeries:
    """Williams %R in [-100, 0] (default 14)."""
    return evaluate("willr", {"high": high, "low": low, "close": close},
                    {"length": length})[0]
