# -*- coding: utf-8 -*-
"""pandas-ta cascade -- forward-projected indicators.

ichimoku is the only kind whose outputs are longer than its inputs: the
leading spans are projected ``displacement`` bars past the last input bar
and the lagging span is moved ``displacement`` bars back, so every output
has ``len(input) + displacement`` positions.
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
    undefined,
)
from ._window import rolling


# ===========================================================================
# ICHIMOKU
# ===========================================================================
# tenkan (conversion) = midpoint of HH / LL over `tenkan` bars
# kijun  (base)       = midpoint of HH / LL over `kijun` bars
# span_a[i + disp]    = (tenkan[i] + kijun[i]) / 2
# span_b[i + disp]    = midpoint of HH / LL over `senkou` bars at i
# lagging[i - disp]   = close[i]
# Defaults: tenkan=9, kijun=26, senkou=52, displacement=26

@dataclass
class IchimokuResult:
    conversion: OptionalSeries
    base: OptionalSeries
    span_a: OptionalSeries
    span_b: OptionalSeries
    lagging: OptionalSeries


def _ichimoku_params(params: Dict[str, Any]) -> Tuple[int, int, int, int]:
    tenkan = _as_period(params, "tenkan", 9)
    kijun = _as_period(params, "kijun", 26)
    senkou = _as_period(params, "senkou", 52)
    displacement = _as_period(params, "displacement", 26, minimum=0)
    return tenkan, kijun, senkou, displacement


def _midpoint(high: List[float], low: List[float], length: int) -> OptionalSeries:
    highest = rolling(high, length, "max")
    lowest = rolling(low, length, "min")
    return [
        None if hh is None or ll is None else (hh + ll) / 2.0
        for hh, ll in zip(highest, lowest)
    ]


def _ichimoku_compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> List[list]:
    tenkan, kijun, senkou, disp = _ichimoku_params(params)
    high, low, close = inputs["high"], inputs["low"], inputs["close"]
    size = len(close)
    if size == 0:
        return [[], [], [], [], []]
    total = size + disp

    conversion = _midpoint(high, low, tenkan) + undefined(disp)
    base = _midpoint(high, low, kijun) + undefined(disp)

    span_a = undefined(total)
    for i in range(size):
        if conversion[i] is not None and base[i] is not None:
            span_a[i + disp] = (conversion[i] + base[i]) / 2.0

    span_b = undefined(disp) + _midpoint(high, low, senkou)

    lagging = undefined(total)
    for i in range(disp, size):
        lagging[i - disp] = close[i]

    return [conversion, base, span_a, span_b, lagging]


def _ichimoku_output_names(params: Dict[str, Any]) -> List[str]:
    tenkan, kijun, senkou, _ = _ichimoku_params(params)
    return [
        f"ITS_{tenkan}",      # Tenkan Sen
        f"IKS_{kijun}",       # Kijun Sen
        f"ISA_{tenkan}",      # Senkou Span A
        f"ISB_{kijun}",       # Senkou Span B
        f"ICS_{kijun}",       # Chikou Span
    ]


REGISTRY["ichimoku"] = Indicator(
    kind="ichimoku",
    inputs=("high", "low", "close"),
    outputs=("conversion", "base", "span_a", "span_b", "lagging"),
    compute=_ichimoku_compute,
    output_names=_ichimoku_output_names,
)


def ichimoku(high: Sequence[float], low: Sequence[float], close: Sequence[float],
             tenkan: Optional[int] = None, kijun: Optional[int] = None,
             senkou: Optional[int] = None, displacement: Optional[int] = None) -> IchimokuResult:
    """Ichimoku Kinko Hyo (9, 26, 52, 26).

    Every output list has ``len(close) + displacement`` entries; an empty
    input gives empty lists.
    """
    conv, base, span_a, span_b, lagging = evaluate(
        "ichimoku", {"high": high, "low": low, "close": close},
        {"tenkan": tenkan, "kijun": kijun, "senkou": senkou, "displacement": displacement},
    )
    return IchimokuResult(conversion=conv, base=base, span_a=span_a, span_b=span_b,
                          lagging=lagging)
