# -*- coding: utf-8 -*-
from importlib.metadata import PackageNotFoundError, version

try:
    version = version("pandas_ta_cascade")
except PackageNotFoundError:
    version = "0.0.0"

from pandas_ta_cascade.maps import Category
from pandas_ta_cascade.engine import *
from pandas_ta_cascade.engine import __all__ as engine_all

# Enable "ta" DataFrame Extension
from pandas_ta_cascade.core import AnalysisIndicators

__all__ = [
    # "name",
    "Category",
    "version",
    "AnalysisIndicators",
]

__all__ += engine_all
