# -*- coding: utf-8 -*-
"""pandas-ta cascade -- statistics.

Registered kinds
----------------
variance, stdev   (population divisor, default length 20)
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ._base import OptionalSeries, _as_period, Indicator, REGISTRY, evaluate
from ._window import rolling


def _variance_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    return [rolling(inputs["close"], _as_period(params, "length", 20), "variance")]


def _stdev_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    return [rolling(inputs["close"], _as_period(params, "length", 20), "stdev")]


REGISTRY["variance"] = Indicator(
    kind="variance",
    inputs=("close",),
    outputs=("variance",),
    compute=_variance_compute,
    output_names=lambda params: [f"VAR_{_as_period(params, 'length', 20)}"],
)

REGISTRY["stdev"] = Indicator(
    kind="stdev",
    inputs=("close",),
    outputs=("stdev",),
    compute=_stdev_compute,
    output_names=lambda params: [f"STDEV_{_as_period(params, 'length', 20)}"],
)


def variance(close: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Rolling population variance (divisor ``length``)."""
    return evaluate("variance", {"close": close}, {"length": length})[0]


def stdev(close: Sequence[float], length: Optional[int] = None) -> OptionalSeries:
    """Rolling population standard deviation."""
    return evaluate("stdev", {"close": close}, {"length": length})[0]
