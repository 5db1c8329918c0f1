# -*- coding: utf-8 -*-
import numpy as np
import pandas as pd


def sample_ohlcv(rows: int, seed: int = 7, freq: str = "1min") -> pd.DataFrame:
    """Deterministic random-walk OHLCV frame for benchmarks and checks.

    ``high`` / ``low`` always bracket ``open`` and ``close``; volume is a
    float column of integer lots in [100, 1000).
    """
    rng = np.random.default_rng(seed)
    walk = 100 + rng.standard_normal(rows).cumsum()
    close = walk + rng.normal(0, 0.2, rows)
    open_ = walk + rng.normal(0, 0.2, rows)
    columns = {
        "open": open_,
        "high": np.maximum(open_, close) + rng.random(rows) * 0.5,
        "low": np.minimum(open_, close) - rng.random(rows) * 0.5,
        "close": close,
        "volume": rng.integers(100, 1000, rows).astype(float),
    }
    index = pd.date_range("2025-01-01", periods=rows, freq=freq)
    return pd.DataFrame(columns, index=index)
