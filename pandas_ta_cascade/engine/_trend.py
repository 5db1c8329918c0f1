# -*- coding: utf-8 -*-
"""pandas-ta cascade -- trend indicators.

Registered kinds
----------------
adx          ADX, +DI, -DI         first defined index: length
aroon        up, down, oscillator  first defined index: length - 1
supertrend   value, direction, final upper / lower bands
             first defined index: length (first bar with a Wilder ATR)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
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
from ._range import ATRState, atr_update_raw, dm_raw, hl2_raw, tr_raw
from ._window import rolling


# ===========================================================================
# ADX
# ===========================================================================
# TR, +DM, -DM start at bar 1 and are kept as Wilder running sums:
#   S[length] = sum of the first `length` values, then S - S/length + x
# +DI = 100 * S(+DM) / S(TR)           0 when S(TR) == 0
# DX  = 100 * |+DI - -DI| / (+DI + -DI)  0 when +DI + -DI == 0
# ADX = Wilder average of DX, seeded with the first DX
# Default length=14

@dataclass
class ADXResult:
    adx: OptionalSeries
    plus_di: OptionalSeries
    minus_di: OptionalSeries


@dataclass
class ADXState:
    length: int
    tr_sum: EMAState
    pdm_sum: EMAState
    mdm_sum: EMAState
    adx: EMAState
    prev_high: Optional[float] = None
    prev_low: Optional[float] = None
    prev_close: Optional[float] = None


def _adx_init(params: Dict[str, Any]) -> ADXState:
    length = _as_period(params, "length", 14)
    return ADXState(
        length=length,
        tr_sum=rma_make(length, seed="sum"),
        pdm_sum=rma_make(length, seed="sum"),
        mdm_sum=rma_make(length, seed="sum"),
        adx=rma_make(length, seed="first"),
    )


def _adx_update(
    state: ADXState, bar: Dict[str, float], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], ADXState]:
    high, low, close = bar["high"], bar["low"], bar["close"]

    if state.prev_close is None:
        state.prev_high, state.prev_low, state.prev_close = high, low, close
        return [None, None, None], state

    tr = tr_raw(high, low, state.prev_close)
    pdm, mdm = dm_raw(high, low, state.prev_high, state.prev_low)
    state.prev_high, state.prev_low, state.prev_close = high, low, close

    tr_s, state.tr_sum = ema_update_raw(state.tr_sum, tr)
    pdm_s, state.pdm_sum = ema_update_raw(state.pdm_sum, pdm)
    mdm_s, state.mdm_sum = ema_update_raw(state.mdm_sum, mdm)
    if tr_s is None or pdm_s is None or mdm_s is None:
        return [None, None, None], state

    if tr_s == 0.0:
        pdi = mdi = 0.0
    else:
        pdi = 100.0 * pdm_s / tr_s
        mdi = 100.0 * mdm_s / tr_s

    di_sum = pdi + mdi
    dx = 100.0 * abs(pdi - mdi) / di_sum if di_sum != 0.0 else 0.0
    adx_val, state.adx = ema_update_raw(state.adx, dx)
    return [adx_val, pdi, mdi], state


def _adx_output_names(params: Dict[str, Any]) -> List[str]:
    length = _as_period(params, "length", 14)
    return [f"ADX_{length}", f"DMP_{length}", f"DMN_{length}"]


REGISTRY["adx"] = Indicator(
    kind="adx",
    inputs=("high", "low", "close"),
    outputs=("adx", "plus_di", "minus_di"),
    compute=replay(_adx_init, _adx_update, 3),
    output_names=_adx_output_names,
)


# ===========================================================================
# AROON
# ===========================================================================
# up   = 100 * (length - bars since the window high) / length
# down = 100 * (length - bars since the window low)  / length
# osc  = up - down
# The window holds `length` bars; ties resolve to the earliest bar.
# Default length=14

@dataclass
class AroonResult:
    up: OptionalSeries
    down: OptionalSeries
    oscillator: OptionalSeries


def _aroon_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    length = _as_period(params, "length", 14)
    since_high = rolling(inputs["high"], length, "argmax")
    since_low = rolling(inputs["low"], length, "argmin")

    up: OptionalSeries = []
    down: OptionalSeries = []
    osc: OptionalSeries = []
    for sh, sl in zip(since_high, since_low):
        if sh is None or sl is None:
            up.append(None)
            down.append(None)
            osc.append(None)
            continue
        u = 100.0 * (length - sh) / length
        d = 100.0 * (length - sl) / length
        up.append(u)
        down.append(d)
        osc.append(u - d)
    return [up, down, osc]


def _aroon_output_names(params: Dict[str, Any]) -> List[str]:
    length = _as_period(params, "length", 14)
    return [f"AROONU_{length}", f"AROOND_{length}", f"AROONOSC_{length}"]


REGISTRY["aroon"] = Indicator(
    kind="aroon",
    inputs=("high", "low"),
    outputs=("up", "down", "oscillator"),
    compute=_aroon_compute,
    output_names=_aroon_output_names,
)


# ===========================================================================
# SUPERTREND
# ===========================================================================
# basic bands = HL2 -/+ multiplier * ATR(length)
# final lower = basic lower if basic lower > prev final lower
#               or prev close <= prev final lower, else prev final lower
# final upper = basic upper if basic upper < prev final upper
#               or prev close >= prev final upper, else prev final upper
# first bar with an ATR: DOWN if close <= final upper else UP
# afterwards:  UP   -> DOWN when close <= final lower
#              DOWN -> UP   when close >= final upper
# value = final lower while UP, final upper while DOWN
# Defaults: length=10, multiplier=3.0

class Trend(IntEnum):
    UP = 1
    DOWN = -1


@dataclass
class SuperTrendResult:
    supertrend: OptionalSeries
    trend: List[Optional[int]]
    upper: OptionalSeries
    lower: OptionalSeries


@dataclass
class SuperTrendState:
    multiplier: float
    atr: ATRState
    direction: Optional[Trend] = None
    final_upper: Optional[float] = None
    final_lower: Optional[float] = None
    prev_close: Optional[float] = None


def _supertrend_params(params: Dict[str, Any]) -> Tuple[int, float]:
    length = _as_period(params, "length", 10)
    multiplier = _as_float(_param(params, "multiplier", 3.0), 3.0)
    return length, multiplier


def _supertrend_init(params: Dict[str, Any]) -> SuperTrendState:
    length, multiplier = _supertrend_params(params)
    return SuperTrendState(multiplier=multiplier, atr=ATRState(length=length))


def _supertrend_update(
    state: SuperTrendState, bar: Dict[str, float], params: Dict[str, Any]
) -> Tuple[List[Any], SuperTrendState]:
    high, low, close = bar["high"], bar["low"], bar["close"]
    atr, state.atr = atr_update_raw(state.atr, high, low, close)
    if atr is None:
        state.prev_close = close
        return [None, None, None, None], state

    mid = hl2_raw(high, low)
    basic_upper = mid + state.multiplier * atr
    basic_lower = mid - state.multiplier * atr

    if state.direction is None:
        upper, lower = basic_upper, basic_lower
        direction = Trend.DOWN if close <= upper else Trend.UP
    else:
        prev_upper, prev_lower = state.final_upper, state.final_lower
        if basic_lower > prev_lower or state.prev_close <= prev_lower:
            lower = basic_lower
        else:
            lower = prev_lower
        if basic_upper < prev_upper or state.prev_close >= prev_upper:
            upper = basic_upper
        else:
            upper = prev_upper

        direction = state.direction
        if direction is Trend.UP and close <= lower:
            direction = Trend.DOWN
        elif direction is Trend.DOWN and close >= upper:
            direction = Trend.UP

    state.direction = direction
    state.final_upper, state.final_lower = upper, lower
    state.prev_close = close

    value = lower if direction is Trend.UP else upper
    return [value, int(direction), upper, lower], state


def _supertrend_output_names(params: Dict[str, Any]) -> List[str]:
    length, multiplier = _supertrend_params(params)
    p = f"_{length}_{_fmt_num(multiplier)}"
    return [f"SUPERT{p}", f"SUPERTd{p}", f"SUPERTu{p}", f"SUPERTl{p}"]


REGISTRY["supertrend"] = Indicator(
    kind="supertrend",
    inputs=("high", "low", "close"),
    outputs=("supertrend", "trend", "upper", "lower"),
    compute=replay(_supertrend_init, _supertrend_update, 4),
    output_names=_supertrend_output_names,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def adx(high: Sequence[float], low: Sequence[float], close: Sequence[float],
        length: Optional[int] = None) -> ADXResult:
    """Average Directional Index with +DI / -DI (default 14).

    All three outputs are ``None`` for indices below ``length``.
    """
    line, pdi, mdi = evaluate("adx", {"high": high, "low": low, "close": close},
                              {"length": length})
    return ADXResult(adx=line, plus_di=pdi, minus_di=mdi)


def aroon(high: Sequence[float], low: Sequence[float], length: Optional[int] = None) -> AroonResult:
    up, down, osc = evaluate("aroon", {"high": high, "low": low}, {"length": length})
    return AroonResult(up=up, down=down, oscillator=osc)


def supertrend(high: Sequence[float], low: Sequence[float], close: Sequence[float],
               length: Optional[int] = None, multiplier: Optional[float] = None) -> SuperTrendResult:
    """SuperTrend (10, 3.0).

    ``trend`` holds ``1`` (up) or ``-1`` (down) once the ATR is defined.
    Inputs shorter than ``length + 1`` give an all-``None`` result.
    """
    value, direction, upper, lower = evaluate(
        "supertrend", {"high": high, "low": low, "close": close},
        {"length": length, "multiplier": multiplier},
    )
    return SuperTrendResult(supertrend=value, trend=direction, upper=upper, lower=lower)
