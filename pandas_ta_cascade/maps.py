# -*- coding: utf-8 -*-
"""
Indicator Categories

Every registered kind belongs to exactly one category.  ``df.ta.study``
accepts a category name in place of a list of kinds.
"""
Category = {
    # Overlap: Moving averages
    "overlap": ["dema", "ema", "ichimoku", "rma", "sma", "tema", "wma"],
    # Momentum
    "momentum": ["cci", "macd", "ppo", "rsi", "stoch", "willr"],
    # Statistics: Population moments
    "statistics": ["stdev", "variance"],
    # Trend
    "trend": ["adx", "aroon", "supertrend"],
    # Volatility
    "volatility": ["atr", "bbands", "kc", "true_range"],
    # Volume
    "volume": ["intraday_vwap", "mfi", "obv", "vwap"],
    # Price transforms feeding the other categories
    "price": ["dm", "hl2", "typical_price"],
}
