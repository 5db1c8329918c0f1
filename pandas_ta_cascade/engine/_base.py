# -*- coding: utf-8 -*-
"""pandas-ta cascade – shared base: smoother state, helpers, registry.

All category modules (``_overlap``, ``_momentum``, …) import from here
and populate ``REGISTRY`` at load time.

Undefined (warm-up) samples are ``None`` throughout the engine; NaN only
appears once results are handed to pandas.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import logging
import math

logger = logging.getLogger(__name__)

Sample = Optional[float]
OptionalSeries = List[Optional[float]]


class IndicatorInputError(ValueError):
    """Raised on a precondition violation (input lengths, periods)."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_nan(x: Any) -> bool:
    """True when *x* is None or a float NaN."""
    return x is None or (isinstance(x, float) and math.isnan(x))


def _param(params: Dict[str, Any], key: str, default: Any) -> Any:
    """Pull *key* from *params*; treat None as missing → default."""
    value = params.get(key, default)
    return default if value is None else value


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def _as_period(params: Dict[str, Any], key: str, default: int, minimum: int = 1) -> int:
    """Integer period parameter; anything below *minimum* is a precondition error."""
    value = _as_int(_param(params, key, default), default)
    if value < minimum:
        raise IndicatorInputError(f"'{key}' must be >= {minimum}, got {value}")
    return value


def _fmt_num(val: Any) -> Any:
    if isinstance(val, float) and float(val).is_integer():
        return int(val)
    return val


def _as_values(values: Sequence[float]) -> List[float]:
    """Private float copy of an input sequence; the caller's object is never touched."""
    return [float(v) for v in values]


def check_same_length(inputs: Dict[str, Sequence[float]]) -> int:
    """Return the common length of *inputs* or raise ``IndicatorInputError``."""
    if not inputs:
        return 0
    names = list(inputs.keys())
    length = len(inputs[names[0]])
    for name in names[1:]:
        if len(inputs[name]) != length:
            raise IndicatorInputError(
                f"input '{name}' has length {len(inputs[name])}, "
                f"expected {length} (length of '{names[0]}')"
            )
    return length


def undefined(size: int) -> OptionalSeries:
    return [None] * size


# ---------------------------------------------------------------------------
# Smoothing state  (Exponential / Wilder)
# ---------------------------------------------------------------------------

@dataclass
class EMAState:
    """Reusable for EMA / RMA (Wilder) / Wilder running sums.

    EMA  -> alpha = 2 / (length + 1)   via ``ema_make``
    RMA  -> alpha = 1 / length          via ``rma_make``

    seed="sma"   ->  first output = SMA(x[0:length])
    seed="first" ->  first output = x[0]
    seed="sum"   ->  first output = SUM(x[0:length]), then s - s/length + x
    """
    length: int
    alpha: float
    last: Optional[float] = None
    seed: str = "sma"
    _warmup_sum: float = 0.0
    _warmup_count: int = 0


SEED_MODES = ("sma", "first", "sum")


def ema_make(length: int, seed: str = "sma") -> EMAState:
    """EMA state – alpha = 2 / (length + 1)."""
    if seed not in SEED_MODES:
        raise ValueError(f"unknown seed mode '{seed}'")
    return EMAState(length=length, alpha=2.0 / (length + 1.0), seed=seed)


def rma_make(length: int, seed: str = "sma") -> EMAState:
    """RMA / Wilder state – alpha = 1 / length."""
    if seed not in SEED_MODES:
        raise ValueError(f"unknown seed mode '{seed}'")
    return EMAState(length=length, alpha=1.0 / length, seed=seed)


def ema_update_raw(state: EMAState, x: float) -> Tuple[Optional[float], EMAState]:
    """Single-step EMA / RMA update.  Returns (value | None, state).

    Returns None while warming up (fewer than *length* samples seen in
    the "sma" and "sum" seed modes).
    """
    if state.last is None:
        if state.seed == "first":
            state.last = x
            return state.last, state
        state._warmup_sum += x
        state._warmup_count += 1
        if state._warmup_count < state.length:
            return None, state
        if state.seed == "sum":
            state.last = state._warmup_sum
        else:
            state.last = state._warmup_sum / state.length   # SMA seed
        return state.last, state
    if state.seed == "sum":
        state.last = state.last - state.last / state.length + x
    else:
        state.last = state.alpha * x + (1.0 - state.alpha) * state.last
    return state.last, state


def smoother_make(kind: str, length: int, seed: str = "sma") -> EMAState:
    if kind == "ema":
        return ema_make(length, seed=seed)
    if kind == "rma":
        return rma_make(length, seed=seed)
    raise ValueError(f"unknown smoother '{kind}'")


def smooth(values: Sequence[float], length: int, kind: str = "ema",
           seed: str = "sma") -> OptionalSeries:
    """One full smoothing pass over *values*; the state dies with the call."""
    state = smoother_make(kind, length, seed=seed)
    out: OptionalSeries = []
    for x in values:
        val, state = ema_update_raw(state, x)
        out.append(val)
    return out


# ---------------------------------------------------------------------------
# Indicator descriptor & registry  (populated by category modules)
# ---------------------------------------------------------------------------

Columns = List[List[Any]]


@dataclass(frozen=True)
class Indicator:
    """Immutable descriptor for a single indicator kind."""
    kind:         str
    inputs:       Tuple[str, ...]
    outputs:      Tuple[str, ...]
    compute:      Callable[[Dict[str, List[float]], Dict[str, Any]], Columns]
    output_names: Callable[[Dict[str, Any]], List[str]]


# Populated by category modules at import time, read-only afterwards.
REGISTRY: Dict[str, Indicator] = {}


def replay(
    init: Callable[[Dict[str, Any]], Any],
    update: Callable[[Any, Dict[str, float], Dict[str, Any]], Tuple[List[Any], Any]],
    width: int,
) -> Callable[[Dict[str, List[float]], Dict[str, Any]], Columns]:
    """Build a ``compute`` callable that replays ``update`` over every bar.

    A fresh state is created per call from ``init(params)`` and dropped
    once the last bar has been processed.
    """
    def compute(inputs: Dict[str, List[float]], params: Dict[str, Any]) -> Columns:
        state = init(params)
        keys = list(inputs.keys())
        columns: Columns = [[] for _ in range(width)]
        n = len(inputs[keys[0]]) if keys else 0
        for i in range(n):
            bar = {k: inputs[k][i] for k in keys}
            values, state = update(state, bar, params)
            for col, v in zip(columns, values):
                col.append(v)
        return columns
    return compute


def evaluate(
    kind: str,
    inputs: Dict[str, Sequence[float]],
    params: Optional[Dict[str, Any]] = None,
) -> Columns:
    """Run indicator *kind* over *inputs*; returns its output columns in order.

    Every required input must be present and all inputs must share one
    length, otherwise ``IndicatorInputError`` is raised before any work.
    """
    indicator = REGISTRY.get(kind)
    if indicator is None:
        raise ValueError(f"Indicator '{kind}' not found in REGISTRY")
    params = dict(params or {})
    missing = [name for name in indicator.inputs if name not in inputs]
    if missing:
        raise IndicatorInputError(f"{kind}: missing input(s) {', '.join(missing)}")
    values = {name: _as_values(inputs[name]) for name in indicator.inputs}
    n = check_same_length(values)
    logger.debug("evaluate %s over %d bars with %s", kind, n, params)
    return indicator.compute(values, params)


# ---------------------------------------------------------------------------
# Output-name helpers
# ---------------------------------------------------------------------------

SPEC_EXCLUDES = frozenset({
    "kind", "append", "prefix", "suffix", "delimiter", "col_names",
})


def resolve_output_names(
        base_names: List[str], spec: Dict[str, Any]
) -> Tuple[Optional[List[str]], Optional[str]]:
    """Apply prefix / suffix / col_names overrides from *spec*."""
    names = list(base_names)
    delimiter = spec.get("delimiter", "_")
    prefix = spec.get("prefix") or ""
    suffix = spec.get("suffix") or ""
    if prefix:
        prefix = f"{prefix}{delimiter}"
    if suffix:
        suffix = f"{delimiter}{suffix}"
    if prefix or suffix:
        names = [f"{prefix}{n}{suffix}" for n in names]
    col_names = spec.get("col_names")
    if col_names is not None:
        if not isinstance(col_names, tuple):
            col_names = (col_names,)
        if len(col_names) < len(names):
            return None, f"[!] col_names too short: {len(col_names)} < {len(names)}"
        names = list(col_names[: len(names)])
    return names, None


def supported_kinds() -> List[str]:
    """Return sorted list of registered indicator kinds."""
    return sorted(REGISTRY.keys())
