"""
Core Market Data Models

This module contains Pydantic models for the price data the pattern engine
consumes:
- Candle: one OHLC bar keyed by its open time in epoch seconds
- Timeframe: Enumeration of supported bar resolutions
- Instrument: Tradable symbol metadata used by the catalogue and simulator

Candles are immutable and deliberately lenient: OHLC relationships are
reported by ``is_well_formed`` but never enforced, so that a malformed bar
flows through classification instead of aborting a scan.
"""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Floor applied to a bar's high-low range so ratio tests never divide by zero
MIN_RANGE = 0.00001


class Timeframe(str, Enum):
    """Supported candlestick timeframes."""

    FOUR_HOURS = "H4"
    ONE_DAY = "D1"
    ONE_WEEK = "W1"

    @property
    def seconds(self) -> int:
        """Convert timeframe to seconds."""
        mapping = {
            "H4": 14400,
            "D1": 86400,
            "W1": 604800,
        }
        return mapping[self.value]

    @property
    def api_interval(self) -> str:
        """Interval name used by the market-data vendor."""
        mapping = {
            "H4": "4h",
            "D1": "1day",
            "W1": "1week",
        }
        return mapping[self.value]


class Candle(BaseModel):
    """
    OHLC candlestick bar.

    ``time`` is the bar's open time in epoch seconds; it is unique and
    increasing within a series. Series are ordered oldest to newest.
    """

    time: int = Field(
        ...,
        description="Bar open time in epoch seconds"
    )
    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="Highest price")
    low: float = Field(..., description="Lowest price")
    close: float = Field(..., description="Closing price")

    model_config = ConfigDict(frozen=True)

    @field_validator('open', 'high', 'low', 'close', mode='before')
    @classmethod
    def validate_price_fields(cls, v):
        """Accept vendor string prices."""
        if isinstance(v, str):
            return float(v.strip())
        return v

    @classmethod
    def from_twelve_data(cls, data: Dict[str, Any]) -> 'Candle':
        """
        Create a Candle from a Twelve Data time series row.

        Expected format: {'datetime': '2024-01-05 08:00:00', 'open': '1.0950', ...}
        Date-only rows ('2024-01-05') are used for daily and weekly series.
        """
        raw = str(data['datetime']).strip()
        if len(raw) == 10:
            opened = datetime.strptime(raw, "%Y-%m-%d")
        else:
            opened = datetime.strptime(raw, "%Y-%m-%d %H:%M:%S")

        return cls(
            time=int(opened.replace(tzinfo=timezone.utc).timestamp()),
            open=data['open'],
            high=data['high'],
            low=data['low'],
            close=data['close'],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain mapping."""
        return {
            'time': self.time,
            'open': self.open,
            'high': self.high,
            'low': self.low,
            'close': self.close,
        }

    @property
    def opened_at(self) -> datetime:
        """Bar open time as a UTC datetime."""
        return datetime.fromtimestamp(self.time, tz=timezone.utc)

    @property
    def body_size(self) -> float:
        """Absolute difference between open and close."""
        return abs(self.open - self.close)

    @property
    def total_range(self) -> float:
        """High-low range, floored at MIN_RANGE."""
        return max(MIN_RANGE, self.high - self.low)

    @property
    def upper_wick(self) -> float:
        """Distance from the top of the body to the high."""
        return self.high - max(self.open, self.close)

    @property
    def lower_wick(self) -> float:
        """Distance from the bottom of the body to the low."""
        return min(self.open, self.close) - self.low

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        return self.close < self.open

    @property
    def is_well_formed(self) -> bool:
        """Check OHLC relationships and finiteness without enforcing them."""
        prices = (self.open, self.high, self.low, self.close)
        if not all(math.isfinite(p) for p in prices):
            return False
        return self.high >= max(self.open, self.close) and self.low <= min(self.open, self.close)


class Instrument(BaseModel):
    """
    Tradable instrument metadata.

    ``base_price`` seeds simulated series; ``api_symbol`` overrides the symbol
    sent to the market-data vendor when it differs from the display symbol.
    """

    symbol: str = Field(
        ...,
        description="Display symbol (e.g., 'EUR/USD')",
        min_length=1,
        max_length=20
    )
    name: str = Field(..., description="Human readable name")
    base_price: float = Field(
        ...,
        description="Reference price used for simulated series",
        gt=0
    )
    api_symbol: Optional[str] = Field(
        None,
        description="Vendor symbol override"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator('symbol')
    @classmethod
    def validate_symbol(cls, v) -> str:
        """Normalize symbol format."""
        return v.upper().strip()

    @property
    def request_symbol(self) -> str:
        return self.api_symbol or self.symbol
