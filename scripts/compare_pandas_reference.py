#!/usr/bin/env python3
"""Compare cascade outputs against pandas rolling / ewm reference values.

The references are built directly with pandas: ``rolling`` for the window
kinds and ``ewm(adjust=False)`` started from an SMA seed for the recursive
smoothers.  Both sides are NaN before the warm-up boundary.
"""
from __future__ import annotations

import argparse
import os
import sys
from typing import Callable, Dict

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pandas as pd
import pandas_ta_cascade  # noqa: F401  registers df.ta
from pandas_ta_cascade.utils import sample_ohlcv


def seeded_ewm(close: pd.Series, length: int, alpha: float) -> pd.Series:
    """Recursive smoother seeded with the SMA of the first ``length`` values."""
    out = pd.Series(np.nan, index=close.index)
    if len(close) < length:
        return out
    tail = close.iloc[length - 1:].copy()
    tail.iloc[0] = close.iloc[:length].mean()
    out.iloc[length - 1:] = tail.ewm(alpha=alpha, adjust=False).mean().to_numpy()
    return out


def references(df: pd.DataFrame, length: int, std: float) -> Dict[str, Callable[[], pd.DataFrame]]:
    close = df["close"]

    def bbands() -> pd.DataFrame:
        mid = close.rolling(length).mean()
        dev = close.rolling(length).std(ddof=0)
        return pd.DataFrame({"upper": mid + std * dev, "middle": mid, "lower": mid - std * dev})

    return {
        "sma": lambda: close.rolling(length).mean().to_frame(),
        "ema": lambda: seeded_ewm(close, length, 2.0 / (length + 1.0)).to_frame(),
        "rma": lambda: seeded_ewm(close, length, 1.0 / length).to_frame(),
        "stdev": lambda: close.rolling(length).std(ddof=0).to_frame(),
        "bbands": bbands,
    }


def compare_frames(ref: pd.DataFrame, test: pd.DataFrame, eps: float) -> pd.Series:
    ref = ref.set_axis(test.columns, axis=1)
    diff = (test - ref).abs()
    rel = diff / (ref.abs() + eps)
    return pd.Series(
        {
            "nan_ref": int(ref.isna().sum().sum()),
            "nan_test": int(test.isna().sum().sum()),
            "max_abs": float(diff.max().max()),
            "mean_rel": float(rel.mean().mean()),
        }
    )


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--rows", type=int, default=2000)
    ap.add_argument("--length", type=int, default=20)
    ap.add_argument("--std", type=float, default=2.0)
    ap.add_argument("--seed", type=int, default=11)
    ap.add_argument("--eps", type=float, default=1e-12)
    args = ap.parse_args()

    df = sample_ohlcv(args.rows, args.seed)
    rows = {}
    for kind, build in references(df, args.length, args.std).items():
        params = {"length": args.length}
        if kind == "bbands":
            params["std"] = args.std
        test = df.ta(kind, **params)
        if isinstance(test, pd.Series):
            test = test.to_frame()
        rows[kind] = compare_frames(build(), test, args.eps)

    summary = pd.DataFrame(rows).T
    print("[i] rows:", args.rows)
    print("[i] length:", args.length)
    print(summary.sort_values("max_abs", ascending=False))


if __name__ == "__main__":
    main()
