# -*- coding: utf-8 -*-
"""pandas-ta cascade – volatility indicators.

Registered kinds
----------------
atr, bbands, kc

Band outputs keep ``upper >= middle >= lower`` at every defined position.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import math

from ._base import (
    EMAState,
    OptionalSeries,
    _as_float,
    _as_period,
    _fmt_num,
    _param,
    Indicator,
    REGISTRY,
    ema_make,
    ema_update_raw,
    evaluate,
    replay,
    undefined,
)
from ._range import ATRState, atr_update_raw
from ._window import window_moments


# ===========================================================================
# ATR
# ===========================================================================
# Wilder average of the true range, SMA seeded.  First defined index: length.
# Default length=14

def _atr_init(params: Dict[str, Any]) -> ATRState:
    return ATRState(length=_as_period(params, "length", 14))


def _atr_update(
    state: ATRState,
    bar: Dict[str, float],
    params: Dict[str, Any],
) -> Tuple[List[Optional[float]], ATRState]:
    value, state = atr_update_raw(state, bar["high"], bar["low"], bar["close"])
    return [value], state


REGISTRY["atr"] = Indicator(
    kind="atr",
    inputs=("high", "low", "close"),
    outputs=("atr",),
    compute=replay(_atr_init, _atr_update, 1),
    output_names=lambda params: [f"ATRr_{_as_period(params, 'length', 14)}"],
)


# ===========================================================================
# BBANDS  (Bollinger Bands)
# ===========================================================================
# middle = SMA(close, length)
# upper  = middle + std * stdev(close, length)    population stdev
# lower  = middle - std * stdev(close, length)
# Defaults: length=20, std=2.0

@dataclass
class BBandsResult:
    upper: OptionalSeries
    middle: OptionalSeries
    lower: OptionalSeries


@dataclass
class BBandsState:
    length: int
    std: float
    buf: deque = field(default_factory=deque)


def _bbands_params(params: Dict[str, Any]) -> Tuple[int, float]:
    length = _as_period(params, "length", 20)
    std = _as_float(_param(params, "std", 2.0), 2.0)
    return length, std


def _bbands_init(params: Dict[str, Any]) -> BBandsState:
    length, std = _bbands_params(params)
    return BBandsState(length=length, std=std, buf=deque(maxlen=length))


def _bbands_update(
    state: BBandsState,
    bar: Dict[str, float],
    params: Dict[str, Any],
) -> Tuple[List[Optional[float]], BBandsState]:
    state.buf.append(bar["close"])
    if len(state.buf) < state.length:
        return [None, None, None], state
    mean, variance = window_moments(state.buf)
    width = state.std * math.sqrt(variance)
    return [mean + width, mean, mean - width], state


def _bbands_output_names(params: Dict[str, Any]) -> List[str]:
    length, std = _bbands_params(params)
    _props = f"_{length}_{_fmt_num(std)}"
    return [f"BBU{_props}", f"BBM{_props}", f"BBL{_props}"]


REGISTRY["bbands"] = Indicator(
    kind="bbands",
    inputs=("close",),
    outputs=("upper", "middle", "lower"),
    compute=replay(_bbands_init, _bbands_update, 3),
    output_names=_bbands_output_names,
)


# ===========================================================================
# KC  (Keltner Channel)
# ===========================================================================
# middle = EMA(close, length)                 first defined index: length - 1
# upper  = middle + scalar * ATR(length)      first defined index: length
# lower  = middle - scalar * ATR(length)
# Inputs shorter than length + 1 give all-None outputs (middle included).
# Defaults: length=20, scalar=2.0

@dataclass
class KCResult:
    upper: OptionalSeries
    middle: OptionalSeries
    lower: OptionalSeries


@dataclass
class KCState:
    scalar: float
    basis: EMAState
    atr: ATRState


def _kc_params(params: Dict[str, Any]) -> Tuple[int, float]:
    length = _as_period(params, "length", 20)
    scalar = _as_float(_param(params, "scalar", 2.0), 2.0)
    return length, scalar


def _kc_init(params: Dict[str, Any]) -> KCState:
    length, scalar = _kc_params(params)
    return KCState(scalar=scalar, basis=ema_make(length), atr=ATRState(length=length))


def _kc_update(
    state: KCState,
    bar: Dict[str, float],
    params: Dict[str, Any],
) -> Tuple[List[Optional[float]], KCState]:
    basis, state.basis = ema_update_raw(state.basis, bar["close"])
    band, state.atr = atr_update_raw(state.atr, bar["high"], bar["low"], bar["close"])
    if basis is None or band is None:
        return [None, basis, None], state
    return [basis + state.scalar * band, basis, basis - state.scalar * band], state


_kc_replay = replay(_kc_init, _kc_update, 3)


def _kc_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    length, _ = _kc_params(params)
    size = len(inputs["close"])
    if size < length + 1:
        return [undefined(size), undefined(size), undefined(size)]
    return _kc_replay(inputs, params)


def _kc_output_names(params: Dict[str, Any]) -> List[str]:
    length, scalar = _kc_params(params)
    _props = f"e_{length}_{_fmt_num(scalar)}"
    return [f"KCU{_props}", f"KCB{_props}", f"KCL{_props}"]


REGISTRY["kc"] = Indicator(
    kind="kc",
    inputs=("high", "low", "close"),
    outputs=("upper", "middle", "lower"),
    compute=_kc_compute,
    output_names=_kc_output_names,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def atr(high: Sequence[float], low: Sequence[float], close: Sequence[float],
        length: Optional[int] = None) -> OptionalSeries:
    """Average True Range, Wilder smoothed (default 14)."""
    return evaluate("atr", {"high": high, "low": low, "close": close},
                    {"length": length})[0]


def bbands(close: Sequence[float], length: Optional[int] = None,
           std: Optional[float] = None) -> BBandsResult:
    """Bollinger Bands (20, 2.0) around the simple moving average."""
    upper, middle, lower = evaluate("bbands", {"close": close},
                                    {"length": length, "std": std})
    return BBandsResult(upper=upper, middle=middle, lower=lower)


def kc(high: Sequence[float], low: Sequence[float], close: Sequence[float],
       length: Optional[int] = None, scalar: Optional[float] = None) -> KCResult:
    upper, middle, lower = evaluate("kc", {"high": high, "low": low, "close": close},
                                    {"length": length, "scalar": scalar})
    return KCResult(upper=upper, middle=middle, lower=lower)
