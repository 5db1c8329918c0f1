#!/usr/bin/env python3
"""Benchmark full-replay evaluation speed per indicator kind.

Every kind is run through the ``df.ta`` accessor on random OHLCV frames of
growing size.  Each call replays the whole frame and discards its state, so
the time per row should stay roughly flat as the frame grows.
"""
from __future__ import annotations

import argparse
import os
import sys
from time import perf_counter
from typing import List

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pandas_ta_cascade as ta
from pandas_ta_cascade.utils import sample_ohlcv


def parse_list(value: str) -> List[int]:
    return [int(v.strip()) for v in value.split(",") if v.strip()]


def parse_kinds(value: str | None) -> List[str]:
    if not value:
        return ta.supported_kinds()
    return [v.strip() for v in value.split(",") if v.strip()]


def time_call(fn, runs: int) -> float:
    times = []
    for _ in range(max(runs, 1)):
        start = perf_counter()
        fn()
        times.append(perf_counter() - start)
    return sum(times) / len(times)


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--sizes",
        type=str,
        default="1000,10000,50000",
        help="comma-separated total row counts",
    )
    ap.add_argument("--kinds", type=str, default="", help="comma-separated kinds (default: all)")
    ap.add_argument("--seed", type=int, default=7)
    ap.add_argument("--warmup", type=int, default=1, help="warmup runs (not timed)")
    ap.add_argument("--runs", type=int, default=3, help="timed runs")
    args = ap.parse_args()

    sizes = parse_list(args.sizes)
    kinds = parse_kinds(args.kinds)

    print(f"[i] sizes: {sizes}")
    print(f"[i] kinds: {len(kinds)}")
    print(f"[i] runs: {args.runs} (warmup: {args.warmup})")

    for rows in sizes:
        df = sample_ohlcv(rows, args.seed)
        for kind in kinds:
            def run():
                df.ta(kind)

            for _ in range(max(args.warmup, 0)):
                run()
            avg = time_call(run, args.runs)
            print(
                f"[{kind}] rows={rows} avg_s={avg:.6f} "
                f"us_per_row={1e6 * avg / max(rows, 1):.3f}"
            )


if __name__ == "__main__":
    main()
