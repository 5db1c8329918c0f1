# -*- coding: utf-8 -*-
import logging
from functools import partial
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from pandas_ta_cascade.maps import Category
from pandas_ta_cascade.engine import (
    REGISTRY,
    SPEC_EXCLUDES,
    evaluate,
    resolve_output_names,
    supported_kinds,
)

logger = logging.getLogger(__name__)


@pd.api.extensions.register_dataframe_accessor("ta")
class AnalysisIndicators(object):
    """
    This Pandas Extension is named 'ta' for Technical Analysis. In other words,
    it is a Numerical Time Series Feature Generator where the Time Series data
    is biased towards Financial Market data; typical data includes columns
    named :"open", "high", "low", "close", "volume".

    Column lookup is case-insensitive.  An input can be redirected to another
    column by name or replaced with a Series of the same length:

        df.ta.ema(length=10)
        df.ta("ema", close="Adj Close", length=10)
        df.ta.macd(append=True)
        df.ta.study("momentum")

    Undefined (warm-up) positions are NaN.  Indicators with several outputs
    return a DataFrame, the others a Series.  ``prefix``, ``suffix`` and
    ``col_names`` rename the result columns.
    """

    def __init__(self, pandas_obj: pd.DataFrame):
        self._validate(pandas_obj)
        self._df = pandas_obj

    @staticmethod
    def _validate(obj: Any):
        if not isinstance(obj, pd.DataFrame):
            raise AttributeError("[X] Must be a Pandas DataFrame.")

    def __call__(self, kind: Optional[str] = None, append: bool = False, **kwargs):
        if kind is None:
            return self.indicators()
        kind = kind.lower()
        if kind not in REGISTRY:
            raise ValueError(f"Indicator '{kind}' not found in REGISTRY")
        return self._compute(kind, append=append, **kwargs)

    def __getattr__(self, name: str):
        if not name.startswith("_") and name in REGISTRY:
            return partial(self.__call__, name)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    # -----------------------------------------------------------------------
    # Private DataFrame Methods
    # -----------------------------------------------------------------------

    def _get_column(self, series: Union[str, pd.Series]) -> pd.Series:
        """Return a column by (case-insensitive) name, or *series* itself."""
        if isinstance(series, pd.Series):
            return series
        columns = {str(c).lower(): c for c in self._df.columns}
        key = str(series).lower()
        if key not in columns:
            raise KeyError(f"[X] Column '{series}' not found in DataFrame columns {list(self._df.columns)}")
        return self._df[columns[key]]

    def _compute(self, kind: str, append: bool = False, **kwargs):
        indicator = REGISTRY[kind]
        inputs: Dict[str, np.ndarray] = {}
        for name in indicator.inputs:
            source = self._get_column(kwargs.pop(name, name))
            inputs[name] = source.to_numpy(dtype=float)

        spec = {k: kwargs.pop(k) for k in SPEC_EXCLUDES if k in kwargs}
        params = kwargs
        columns = evaluate(kind, inputs, params)

        names, error = resolve_output_names(indicator.output_names(params), spec)
        if error is not None:
            raise ValueError(error)

        size = len(columns[0]) if columns else 0
        index = self._df.index if size == len(self._df) else pd.RangeIndex(size)
        result = pd.DataFrame(
            {
                name: np.array([np.nan if v is None else v for v in col], dtype=float)
                for name, col in zip(names, columns)
            },
            index=index,
        )

        if append:
            self._append(result)

        if result.shape[1] == 1:
            series = result.iloc[:, 0]
            series.name = names[0]
            return series
        return result

    def _append(self, result: pd.DataFrame) -> None:
        """Add *result* columns to the frame, trimmed to the frame length."""
        size = len(self._df)
        for name in result.columns:
            self._df[name] = result[name].to_numpy()[:size]
        logger.debug("appended %s", list(result.columns))

    # -----------------------------------------------------------------------
    # Public DataFrame Methods
    # -----------------------------------------------------------------------

    def indicators(self) -> List[str]:
        """List of the registered indicator kinds."""
        return supported_kinds()

    def study(self, kinds: Optional[Union[str, Sequence[Any]]] = None,
              append: bool = True) -> pd.DataFrame:
        """Compute several kinds at once.

        *kinds* is a category name from ``Category``, a sequence of kind
        names or ``{"kind": ..., **params}`` dicts, or None for every
        registered kind.  Returns all result columns aligned to the frame
        index; with ``append=True`` they are also added to the frame.
        """
        if kinds is None:
            kinds = supported_kinds()
        elif isinstance(kinds, str):
            if kinds not in Category:
                raise ValueError(f"Unknown category '{kinds}'")
            kinds = Category[kinds]

        frames: List[pd.DataFrame] = []
        for item in kinds:
            if isinstance(item, dict):
                params = dict(item)
                kind = params.pop("kind")
            else:
                kind, params = item, {}
            result = self(kind, append=append, **params)
            frame = result.to_frame() if isinstance(result, pd.Series) else result
            frame = frame.iloc[: len(self._df)].copy()
            frame.index = self._df.index
            frames.append(frame)

        logger.debug("study computed %d kinds", len(frames))
        if not frames:
            return pd.DataFrame(index=self._df.index)
        return pd.concat(frames, axis=1)
