# -*- coding: utf-8 -*-
"""pandas-ta cascade – volume indicators.

Registered kinds
----------------
obv, vwap, intraday_vwap, mfi
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ._base import (
    OptionalSeries,
    _as_period,
    Indicator,
    REGISTRY,
    evaluate,
    replay,
)
from ._range import tp_raw
from ._window import WindowState, window_make, window_update_raw


# ===========================================================================
# OBV – On Balance Volume
# ===========================================================================
# +vol if close > prev_close, -vol if close < prev_close, unchanged if equal.
# First value = volume[0]; never undefined.
# ===========================================================================

@dataclass
class OBVState:
    cumsum_value: float = 0.0
    prev_close: Optional[float] = None


def _obv_init(params: Dict[str, Any]) -> OBVState:
    return OBVState()


def _obv_update(
    state: OBVState, bar: Dict[str, float], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], OBVState]:
    close = bar["close"]
    volume = bar["volume"]

    if state.prev_close is None:
        state.cumsum_value = volume
    elif close > state.prev_close:
        state.cumsum_value += volume
    elif close < state.prev_close:
        state.cumsum_value -= volume

    state.prev_close = close
    return [state.cumsum_value], state


REGISTRY["obv"] = Indicator(
    kind="obv",
    inputs=("close", "volume"),
    outputs=("obv",),
    compute=replay(_obv_init, _obv_update, 1),
    output_names=lambda params: ["OBV"],
)


# ===========================================================================
# VWAP – Volume Weighted Average Price
# ===========================================================================
# VWAP = sum(TP * volume) / sum(volume) over the last `length` bars.
# length = 0 accumulates from the first bar instead (intraday_vwap).
# None wherever the volume sum is 0.  Default length=20.
# ===========================================================================

@dataclass
class VWAPState:
    pv: Optional[WindowState] = None
    vol: Optional[WindowState] = None
    cum_pv: float = 0.0
    cum_vol: float = 0.0


def _vwap_init(params: Dict[str, Any]) -> VWAPState:
    length = _as_period(params, "length", 20, minimum=0)
    if length == 0:
        return VWAPState()
    return VWAPState(pv=window_make(length, "sum"), vol=window_make(length, "sum"))


def _vwap_update(
    state: VWAPState, bar: Dict[str, float], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], VWAPState]:
    tp = tp_raw(bar["high"], bar["low"], bar["close"])
    volume = bar["volume"]

    if state.pv is None:
        state.cum_pv += tp * volume
        state.cum_vol += volume
        pv_sum, vol_sum = state.cum_pv, state.cum_vol
    else:
        pv_sum, state.pv = window_update_raw(state.pv, tp * volume)
        vol_sum, state.vol = window_update_raw(state.vol, volume)
        if pv_sum is None or vol_sum is None:
            return [None], state

    if vol_sum == 0.0:
        return [None], state
    return [pv_sum / vol_sum], state


def _vwap_output_names(params: Dict[str, Any]) -> List[str]:
    length = _as_period(params, "length", 20, minimum=0)
    return ["VWAP"] if length == 0 else [f"VWAP_{length}"]


REGISTRY["vwap"] = Indicator(
    kind="vwap",
    inputs=("high", "low", "close", "volume"),
    outputs=("vwap",),
    compute=replay(_vwap_init, _vwap_update, 1),
    output_names=_vwap_output_names,
)

REGISTRY["intraday_vwap"] = Indicator(
    kind="intraday_vwap",
    inputs=("high", "low", "close", "volume"),
    outputs=("vwap",),
    compute=lambda inputs, params: REGISTRY["vwap"].compute(inputs, {"length": 0}),
    output_names=lambda params: ["VWAP"],
)


# ===========================================================================
# MFI – Money Flow Index
# ===========================================================================
# raw flow = TP * volume, positive when TP rose against the previous bar,
# negative when it fell, neither when unchanged.  Flows start at bar 1.
# MFI = 100 - 100 / (1 + sum(pos, n) / sum(neg, n));  100 when sum(neg) == 0
# First defined index: length.  Default length=14.
# ===========================================================================

@dataclass
class MFIState:
    pos: WindowState
    neg: WindowState
    prev_tp: Optional[float] = None


def _mfi_init(params: Dict[str, Any]) -> MFIState:
    length = _as_period(params, "length", 14)
    return MFIState(pos=window_make(length, "sum"), neg=window_make(length, "sum"))


def _mfi_update(
    state: MFIState, bar: Dict[str, float], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], MFIState]:
    tp = tp_raw(bar["high"], bar["low"], bar["close"])
    if state.prev_tp is None:
        state.prev_tp = tp
        return [None], state

    flow = tp * bar["volume"]
    pos_flow = flow if tp > state.prev_tp else 0.0
    neg_flow = flow if tp < state.prev_tp else 0.0
    state.prev_tp = tp

    pos_sum, state.pos = window_update_raw(state.pos, pos_flow)
    neg_sum, state.neg = window_update_raw(state.neg, neg_flow)
    if pos_sum is None or neg_sum is None:
        return [None], state
    if neg_sum == 0.0:
        return [100.0], state
    return [100.0 - 100.0 / (1.0 + pos_sum / neg_sum)], state


REGISTRY["mfi"] = Indicator(
    kind="mfi",
    inputs=("high", "low", "close", "volume"),
    outputs=("mfi",),
    compute=replay(_mfi_init, _mfi_update, 1),
    output_names=lambda params: [f"MFI_{_as_period(params, 'length', 14)}"],
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def obv(close: Sequence[float], volume: Sequence[float]) -> List[float]:
    """On Balance Volume, starting at ``volume[0]``."""
    return evaluate("obv", {"close": close, "volume": volume})[0]


def vwap(high: Sequence[float], low: Sequence[float], close: Sequence[float],
         volume: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Rolling VWAP over ``length`` bars (20); ``length=0`` accumulates from bar 0."""
    return evaluate("vwap", {"high": high, "low": low, "close": close, "volume": volume},
                    {"length": length})[0]


def intraday_vwap(high: Sequence[float], low: Sequence[float], close: Sequence[float],
                  volume: Sequence[float]) -> OptionalSeries:
    return evaluate("intraday_vwap",
                    {"high": high, "low": low, "close": close, "volume": volume})[0]


def mfi(high: Sequence[float], low: Sequence[float], close: Sequence[float],
        volume: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Money Flow Index (default 14); 100 when the window has no negative flow."""
    return evaluate("mfi", {"high": high, "low": low, "close": close, "volume": volume},
                    {"length": length})[0]
