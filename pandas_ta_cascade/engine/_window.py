# -*- coding: utf-8 -*-
"""pandas-ta cascade -- fixed-window reductions.

Reductions
----------
sum, mean          compensated running accumulator, O(1) per sample
min, max           monotonic deque, O(1) amortized
argmin, argmax     bars since the window extreme (0 = current bar)
variance, stdev    population moments, recomputed per window (O(length))
"""
from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ._base import OptionalSeries

REDUCTIONS = ("sum", "mean", "variance", "stdev", "min", "max", "argmin", "argmax")
_EXTREMES = ("min", "max", "argmin", "argmax")


def window_moments(buf: Sequence[float]) -> Tuple[float, float]:
    """Population (mean, variance) of *buf*.

    Deviations are taken around the first sample so that a constant
    window returns its value and a variance of exactly 0.
    """
    n = len(buf)
    k = buf[0]
    diffs = [x - k for x in buf]
    shift = sum(diffs) / n
    variance = sum((d - shift) ** 2 for d in diffs) / n
    return k + shift, variance


def window_mean_deviation(buf: Sequence[float], mean: float) -> float:
    return sum(abs(x - mean) for x in buf) / len(buf)


@dataclass
class WindowState:
    length: int
    how: str
    buf: deque = field(default_factory=deque)
    total: float = 0.0
    comp: float = 0.0                           # Neumaier compensation term
    nonzero: int = 0
    count: int = 0
    hi: deque = field(default_factory=deque)    # (index, value), decreasing
    lo: deque = field(default_factory=deque)    # (index, value), increasing


def window_make(length: int, how: str = "mean") -> WindowState:
    if how not in REDUCTIONS:
        raise ValueError(f"unknown reduction '{how}'")
    return WindowState(length=length, how=how, buf=deque(maxlen=length))


def _track_extremes(state: WindowState, i: int, x: float) -> None:
    # Strict comparisons keep the earliest of equal extremes at the front.
    while state.hi and state.hi[-1][1] < x:
        state.hi.pop()
    state.hi.append((i, x))
    if state.hi[0][0] <= i - state.length:
        state.hi.popleft()

    while state.lo and state.lo[-1][1] > x:
        state.lo.pop()
    state.lo.append((i, x))
    if state.lo[0][0] <= i - state.length:
        state.lo.popleft()


def _accumulate(state: WindowState, x: float) -> None:
    t = state.total + x
    if abs(state.total) >= abs(x):
        state.comp += (state.total - t) + x
    else:
        state.comp += (x - t) + state.total
    state.total = t


def window_update_raw(state: WindowState, x: float) -> Tuple[Optional[float], WindowState]:
    """Single-step window update.  Returns (value | None, state)."""
    i = state.count
    state.count += 1

    if len(state.buf) == state.length:
        old = state.buf[0]
        _accumulate(state, -old)
        if old != 0.0:
            state.nonzero -= 1
    state.buf.append(x)
    _accumulate(state, x)
    if x != 0.0:
        state.nonzero += 1

    if state.how in _EXTREMES:
        _track_extremes(state, i, x)

    if len(state.buf) < state.length:
        return None, state

    how = state.how
    if how == "sum":
        return (state.total + state.comp if state.nonzero else 0.0), state
    if how == "mean":
        return (state.total + state.comp if state.nonzero else 0.0) / state.length, state
    if how == "max":
        return state.hi[0][1], state
    if how == "min":
        return state.lo[0][1], state
    if how == "argmax":
        return float(i - state.hi[0][0]), state
    if how == "argmin":
        return float(i - state.lo[0][0]), state
    _, variance = window_moments(state.buf)
    if how == "stdev":
        return math.sqrt(variance), state
    return variance, state


def rolling(values: Sequence[float], length: int, how: str = "mean") -> OptionalSeries:
    """Reduce every full window of *length* samples; ``None`` before that.

    If *length* exceeds ``len(values)`` the whole output is ``None``.
    """
    state = window_make(length, how)
    out: List[Optional[float]] = []
    for x in values:
        val, state = window_update_raw(state, x)
        out.append(val)
    return out
