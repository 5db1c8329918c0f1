# -*- coding: utf-8 -*-
"""pandas-ta cascade -- per-bar range extraction.

True range, directional movement, typical price and HL2, plus the Wilder
ATR state that consumes the true range.  Everything here looks at most one
bar back.

Registered kinds
----------------
true_range, dm, typical_price, hl2
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ._base import (
    OptionalSeries,
    Indicator,
    REGISTRY,
    evaluate,
    replay,
)


# ---------------------------------------------------------------------------
# Scalar helpers
# ---------------------------------------------------------------------------

def tr_raw(high: float, low: float, prev_close: float) -> float:
    return max(high - low, abs(high - prev_close), abs(low - prev_close))


def dm_raw(high: float, low: float, prev_high: float, prev_low: float) -> Tuple[float, float]:
    """(+DM, -DM).  At most one of the two is positive."""
    up = high - prev_high
    dn = prev_low - low
    pos = up if (up > dn and up > 0) else 0.0
    neg = dn if (dn > up and dn > 0) else 0.0
    return pos, neg


def tp_raw(high: float, low: float, close: float) -> float:
    return (high + low + close) / 3.0


def hl2_raw(high: float, low: float) -> float:
    return (high + low) / 2.0


# ===========================================================================
# ATR state  (Wilder, SMA seed)
# ===========================================================================
# Bar 0 only records the close.  TR starts at bar 1, so the SMA seed of the
# first ``length`` TRs lands on bar ``length``:
#   atr[length] = mean(TR[1..length])
#   atr[i]      = (atr[i-1] * (length - 1) + TR[i]) / length

@dataclass
class ATRState:
    length: int
    prev_close: Optional[float] = None
    atr: Optional[float] = None
    _tr_sum: float = 0.0
    _tr_count: int = 0


def atr_update_raw(state: ATRState, high: float, low: float, close: float) -> Tuple[Optional[float], ATRState]:
    """Single-step ATR (Wilder).  Returns (atr | None, state)."""
    if state.prev_close is None:
        state.prev_close = close
        return None, state
    tr = tr_raw(high, low, state.prev_close)
    state.prev_close = close

    if state.atr is None:
        state._tr_sum += tr
        state._tr_count += 1
        if state._tr_count < state.length:
            return None, state
        state.atr = state._tr_sum / state.length       # SMA seed
    else:
        state.atr = (state.atr * (state.length - 1) + tr) / state.length
    return state.atr, state


# ===========================================================================
# TRUE_RANGE / DM
# ===========================================================================

@dataclass
class PrevBarState:
    prev_high: Optional[float] = None
    prev_low: Optional[float] = None
    prev_close: Optional[float] = None


def _prev_init(params: Dict[str, Any]) -> PrevBarState:
    return PrevBarState()


def _tr_update(
    state: PrevBarState, bar: Dict[str, float], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], PrevBarState]:
    value = None
    if state.prev_close is not None:
        value = tr_raw(bar["high"], bar["low"], state.prev_close)
    state.prev_close = bar["close"]
    return [value], state


def _dm_update(
    state: PrevBarState, bar: Dict[str, float], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], PrevBarState]:
    high, low = bar["high"], bar["low"]
    if state.prev_high is None:
        state.prev_high, state.prev_low = high, low
        return [None, None], state
    pos, neg = dm_raw(high, low, state.prev_high, state.prev_low)
    state.prev_high, state.prev_low = high, low
    return [pos, neg], state


REGISTRY["true_range"] = Indicator(
    kind="true_range",
    inputs=("high", "low", "close"),
    outputs=("true_range",),
    compute=replay(_prev_init, _tr_update, 1),
    output_names=lambda params: ["TRUERANGE_1"],
)

REGISTRY["dm"] = Indicator(
    kind="dm",
    inputs=("high", "low"),
    outputs=("plus_dm", "minus_dm"),
    compute=replay(_prev_init, _dm_update, 2),
    output_names=lambda params: ["DMP_1", "DMN_1"],
)


# ===========================================================================
# TYPICAL_PRICE / HL2  (no look-back)
# ===========================================================================

def _tp_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    return [[tp_raw(h, l, c) for h, l, c in zip(inputs["high"], inputs["low"], inputs["close"])]]


def _hl2_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    return [[hl2_raw(h, l) for h, l in zip(inputs["high"], inputs["low"])]]


REGISTRY["typical_price"] = Indicator(
    kind="typical_price",
    inputs=("high", "low", "close"),
    outputs=("typical_price",),
    compute=_tp_compute,
    output_names=lambda params: ["HLC3"],
)

REGISTRY["hl2"] = Indicator(
    kind="hl2",
    inputs=("high", "low"),
    outputs=("hl2",),
    compute=_hl2_compute,
    output_names=lambda params: ["HL2"],
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def true_range(high: Sequence[float], low: Sequence[float], close: Sequence[float]) -> OptionalSeries:
    """True range per bar; ``None`` at index 0 (no previous close)."""
    return evaluate("true_range", {"high": high, "low": low, "close": close})[0]


def directional_movement(high: Sequence[float], low: Sequence[float]) -> Tuple[OptionalSeries, OptionalSeries]:
    """(+DM, -DM) per bar; ``None`` at index 0."""
    pos, neg = evaluate("dm", {"high": high, "low": low})
    return pos, neg


def typical_price(high: Sequence[float], low: Sequence[float], close: Sequence[float]) -> List[float]:
    return evaluate("typical_price", {"high": high, "low": low, "close": close})[0]


def hl2(high: Sequence[float], low: Sequence[float]) -> List[float]:
    return evaluate("hl2", {"high": high, "low": low})[0]
