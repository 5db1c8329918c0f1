import pytest

from pandas_ta_cascade.utils import sample_ohlcv


@pytest.fixture
def ohlcv():
    """Deterministic 60-bar random-walk OHLCV frame."""
    return sample_ohlcv(60, seed=7)


@pytest.fixture
def series(ohlcv):
    """The ohlcv fixture as plain float lists."""
    return {c: ohlcv[c].tolist() for c in ohlcv.columns}
