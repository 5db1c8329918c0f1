# -*- coding: utf-8 -*-
"""pandas-ta cascade -- overlap indicators (moving averages).

Each section follows the pattern:
  1. State dataclass or cascade definition
  2. compute / output_names helpers
  3. REGISTRY["<kind>"] = Indicator(...)
  4. public function

Warm-up legend (index of the first defined sample):
  sma, ema, rma, wma   -- length - 1
  dema                 -- 2 * (length - 1)
  tema                 -- 3 * (length - 1)
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ._base import (
    OptionalSeries,
    _as_period,
    Indicator,
    REGISTRY,
    evaluate,
    replay,
    smooth,
)
from ._compose import Stage, cascade, combine
from ._window import rolling


# ===========================================================================
# SMA
# ===========================================================================
# Default length = 10.  Running-sum window mean.

def _sma_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    length = _as_period(params, "length", 10)
    return [rolling(inputs["close"], length, "mean")]


REGISTRY["sma"] = Indicator(
    kind="sma",
    inputs=("close",),
    outputs=("sma",),
    compute=_sma_compute,
    output_names=lambda params: [f"SMA_{_as_period(params, 'length', 10)}"],
)


# ===========================================================================
# EMA
# ===========================================================================
# alpha = 2/(length+1), SMA seed at index length-1.  Default length = 10.

def _ema_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    length = _as_period(params, "length", 10)
    return [smooth(inputs["close"], length, "ema")]


REGISTRY["ema"] = Indicator(
    kind="ema",
    inputs=("close",),
    outputs=("ema",),
    compute=_ema_compute,
    output_names=lambda params: [f"EMA_{_as_period(params, 'length', 10)}"],
)


# ===========================================================================
# RMA  -- Wilder's MA, alpha = 1/length, SMA seed
# ===========================================================================

def _rma_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    length = _as_period(params, "length", 10)
    return [smooth(inputs["close"], length, "rma")]


REGISTRY["rma"] = Indicator(
    kind="rma",
    inputs=("close",),
    outputs=("rma",),
    compute=_rma_compute,
    output_names=lambda params: [f"RMA_{_as_period(params, 'length', 10)}"],
)


# ===========================================================================
# WMA
# ===========================================================================
# wma = (n*x[i] + (n-1)*x[i-1] + ... + 1*x[i-n+1]) / (n(n+1)/2)
# State: deque of the last `length` closes.  Default length = 10.

@dataclass
class WMAState:
    length: int
    buf: deque = field(default_factory=deque)


def _wma_init(params: Dict[str, Any]) -> WMAState:
    length = _as_period(params, "length", 10)
    return WMAState(length=length, buf=deque(maxlen=length))


def _wma_update(
    state: WMAState, bar: Dict[str, float], params: Dict[str, Any]
) -> Tuple[List[Optional[float]], WMAState]:
    state.buf.append(bar["close"])
    n = state.length
    if len(state.buf) < n:
        return [None], state
    # buf[0] is the oldest sample -> weight 1
    weighted = sum((j + 1) * x for j, x in enumerate(state.buf))
    return [weighted / (n * (n + 1) / 2.0)], state


REGISTRY["wma"] = Indicator(
    kind="wma",
    inputs=("close",),
    outputs=("wma",),
    compute=replay(_wma_init, _wma_update, 1),
    output_names=lambda params: [f"WMA_{_as_period(params, 'length', 10)}"],
)


# ===========================================================================
# DEMA / TEMA  (EMA cascades)
# ===========================================================================
# DEMA = 2*EMA1 - EMA2                  Default length = 14
# TEMA = 3*EMA1 - 3*EMA2 + EMA3         Default length = 14

def _dema_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    length = _as_period(params, "length", 14)
    close = inputs["close"]
    e1, e2 = cascade(close, [Stage("ema", length)] * 2)
    return [combine((2.0, -1.0), (e1, e2)).expand(len(close))]


def _tema_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    length = _as_period(params, "length", 14)
    close = inputs["close"]
    e1, e2, e3 = cascade(close, [Stage("ema", length)] * 3)
    return [combine((3.0, -3.0, 1.0), (e1, e2, e3)).expand(len(close))]


REGISTRY["dema"] = Indicator(
    kind="dema",
    inputs=("close",),
    outputs=("dema",),
    compute=_dema_compute,
    output_names=lambda params: [f"DEMA_{_as_period(params, 'length', 14)}"],
)

REGISTRY["tema"] = Indicator(
    kind="tema",
    inputs=("close",),
    outputs=("tema",),
    compute=_tema_compute,
    output_names=lambda params: [f"TEMA_{_as_period(params, 'length', 14)}"],
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def sma(close: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Simple Moving Average over ``length`` bars (default 10)."""
    return evaluate("sma", {"close": close}, {"length": length})[0]


def ema(close: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Exponential Moving Average, alpha = 2/(length+1), SMA seeded (default 10).

    >>> ema([100, 102, 104, 106, 108], 3)
    [None, None, 102.0, 104.0, 106.0]
    """
    return evaluate("ema", {"close": close}, {"length": length})[0]


def rma(close: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Wilder's Moving Average, alpha = 1/length, SMA seeded (default 10)."""
    return evaluate("rma", {"close": close}, {"length": length})[0]


def wma(close: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Linearly Weighted Moving Average (default 10)."""
    return evaluate("wma", {"close": close}, {"length": length})[0]


def dema(close: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Double EMA: 2*EMA - EMA(EMA).  First value at index 2*(length-1)."""
    return evaluate("dema", {"close": close}, {"length": length})[0]


def tema(close: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Triple EMA: 3*EMA1 - 3*EMA2 + EMA3.  First value at index 3*(length-1)."""
    return evaluate("tema", {"close": close}, {"length": length})[0]
