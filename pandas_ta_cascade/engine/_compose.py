# -*- coding: utf-8 -*-
"""pandas-ta cascade -- multi-stage smoothing composition.

A cascade feeds the defined output of one smoother into the next.  Each
intermediate result is a ``DenseSeries``: the number of undefined leading
positions in the original index space (``offset``) plus the dense defined
values.  A stage of length ``n`` consumes the dense values of its input and
adds ``n - 1`` to the offset, so the bookkeeping never has to be redone per
indicator:

    EMA1 = ema(x)       offset n-1
    EMA2 = ema(EMA1)    offset 2n-2
    EMA3 = ema(EMA2)    offset 3n-3

``combine`` and ``ratio`` align several dense series on the largest offset
before doing arithmetic on them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ._base import OptionalSeries, _is_nan, smooth
from ._window import rolling

STAGE_KINDS = ("ema", "rma", "sma")


@dataclass(frozen=True)
class Stage:
    kind: str
    length: int

    def __post_init__(self) -> None:
        if self.kind not in STAGE_KINDS:
            raise ValueError(f"unknown stage kind '{self.kind}'")
        if self.length < 1:
            raise ValueError(f"stage length must be >= 1, got {self.length}")


@dataclass(frozen=True)
class DenseSeries:
    """``offset`` undefined positions followed by ``values``."""
    offset: int
    values: Tuple[float, ...]

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "DenseSeries":
        return cls(0, tuple(values))

    @classmethod
    def from_optional(cls, series: Sequence[Optional[float]]) -> "DenseSeries":
        """Strip the undefined prefix of *series*."""
        offset = 0
        while offset < len(series) and _is_nan(series[offset]):
            offset += 1
        values = tuple(series[offset:])
        if any(_is_nan(v) for v in values):
            raise ValueError("undefined sample after the warm-up boundary")
        return cls(offset, values)

    def __len__(self) -> int:
        return len(self.values)

    @property
    def end(self) -> int:
        return self.offset + len(self.values)

    def at(self, index: int) -> Optional[float]:
        j = index - self.offset
        if 0 <= j < len(self.values):
            return self.values[j]
        return None

    def expand(self, size: int) -> OptionalSeries:
        """Back to a full-length optional series of *size* positions."""
        head = min(self.offset, size)
        out: OptionalSeries = [None] * head
        out.extend(self.values[: max(size - head, 0)])
        out.extend([None] * (size - len(out)))
        return out


def apply_stage(dense: DenseSeries, stage: Stage) -> DenseSeries:
    """Smooth the defined values of *dense*; the offset grows by ``length - 1``."""
    if stage.kind == "sma":
        column = rolling(dense.values, stage.length, "mean")
    else:
        column = smooth(dense.values, stage.length, stage.kind)
    return DenseSeries(dense.offset + stage.length - 1, tuple(column[stage.length - 1:]))


def cascade(values: Sequence[float], stages: Sequence[Stage]) -> List[DenseSeries]:
    """Run *stages* in order, each on the previous stage's output."""
    current = DenseSeries.from_values(values)
    out: List[DenseSeries] = []
    for stage in stages:
        current = apply_stage(current, stage)
        out.append(current)
    return out


def align(series: Sequence[DenseSeries]) -> Tuple[int, List[Tuple[float, ...]]]:
    """Trim every series to the common defined span ``[max offset, min end)``."""
    offset = max(s.offset for s in series)
    end = max(min(s.end for s in series), offset)
    return offset, [s.values[offset - s.offset: end - s.offset] for s in series]


def combine(weights: Sequence[float], series: Sequence[DenseSeries]) -> DenseSeries:
    """Weighted sum of aligned dense series."""
    if len(weights) != len(series):
        raise ValueError("one weight per series is required")
    offset, columns = align(series)
    values = tuple(
        sum(w * col[j] for w, col in zip(weights, columns))
        for j in range(len(columns[0]))
    )
    return DenseSeries(offset, values)


def ratio(num: DenseSeries, den: DenseSeries, scalar: float = 1.0,
          zero: float = 0.0) -> DenseSeries:
    """``scalar * num / den`` on the aligned span; ``zero`` where ``den`` is 0."""
    offset, (a, b) = align((num, den))
    values = tuple(
        scalar * x / y if y != 0.0 else zero
        for x, y in zip(a, b)
    )
    return DenseSeries(offset, values)
