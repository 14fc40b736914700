"""
Pytest configuration and fixtures for Candlescan tests.
"""

import logging
import os
import random
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest
from unittest.mock import patch

from candlescan.config import Config, DEFAULT_INSTRUMENTS
from candlescan.data.simulator import simulate_candles
from candlescan.models.market_data import Candle, Timeframe


BASE_TIME = 1704067200  # 2024-01-01 00:00:00 UTC
H4 = 14400


def make_candle(open_price: float, high: float, low: float, close: float, time: int = BASE_TIME) -> Candle:
    """Create a test candle with specified OHLC values."""
    return Candle(time=time, open=open_price, high=high, low=low, close=close)


def make_series(*bars) -> List[Candle]:
    """Create an oldest-first series from (open, high, low, close) tuples spaced by H4."""
    return [
        make_candle(o, h, l, c, time=BASE_TIME + i * H4)
        for i, (o, h, l, c) in enumerate(bars)
    ]


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Drop handlers the CLI attaches so later tests do not log to closed streams."""
    yield
    package_logger = logging.getLogger("candlescan")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def mock_env_vars() -> Generator[dict, None, None]:
    """Mock environment variables for testing."""
    test_env = {
        "LOG_LEVEL": "DEBUG",
        "LOG_FILE_PATH": "",
        "DEFAULT_INSTRUMENTS": "EUR/USD,XAU/USD",
        "DEFAULT_TIMEFRAMES": "H4,D1",
        "HISTORY_LENGTH": "120",
        "NOTIFY_PATTERNS": "doji,bullish_engulfing",
        "CONFIDENCE_SEED": "7",
    }

    with patch.dict(os.environ, test_env, clear=False):
        yield test_env


@pytest.fixture
def test_config(mock_env_vars: dict) -> Config:
    """Create a test configuration instance."""
    return Config.load_from_env()


@pytest.fixture
def bullish_engulfing_series() -> List[Candle]:
    """Bearish bar engulfed by a larger bullish bar."""
    return make_series(
        (1.1000, 1.1005, 1.0945, 1.0950),
        (1.0940, 1.1015, 1.0935, 1.1010),
    )


@pytest.fixture
def bullish_hammer_series() -> List[Candle]:
    """Small bullish bar followed by a hammer (body .0005, lower wick .0015, upper .00005)."""
    return make_series(
        (1.0990, 1.1000, 1.0985, 1.0995),
        (1.1000, 1.10055, 1.0985, 1.1005),
    )


@pytest.fixture
def doji_series() -> List[Candle]:
    """Bullish bar followed by a doji (range .0035, body .0002)."""
    return make_series(
        (1.0980, 1.1005, 1.0975, 1.1000),
        (1.1000, 1.1020, 1.0985, 1.1002),
    )


@pytest.fixture
def trending_series() -> List[Candle]:
    """Two large-bodied bullish bars with no wick extremes."""
    return make_series(
        (1.1000, 1.1052, 1.0998, 1.1050),
        (1.1050, 1.1102, 1.1048, 1.1100),
    )


@pytest.fixture
def simulated_series() -> List[Candle]:
    """Seeded random-walk series long enough to contain every pattern type."""
    return simulate_candles(
        DEFAULT_INSTRUMENTS[0],
        Timeframe.FOUR_HOURS,
        length=500,
        end_time=BASE_TIME,
        rng=random.Random(42)
    )
