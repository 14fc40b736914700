"""
Pattern Detection Models

This module contains the classification vocabulary and its output record:
- PatternType: Closed set of candlestick patterns the engine recognizes
- PatternBias: Directional reading of a pattern
- Detection: One classified pattern occurrence on one bar

Detections are immutable. Their ``id`` is a composite of instrument, pattern
and bar time, so repeated scans of the same data yield the same identifiers.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


CONFIDENCE_FLOOR = 0.80
CONFIDENCE_CEILING = 0.95


class PatternBias(str, Enum):
    """Directional reading of a pattern."""
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class PatternType(str, Enum):
    """Candlestick pattern type enumeration."""
    # Two candle patterns
    BULLISH_ENGULFING = "bullish_engulfing"
    BEARISH_ENGULFING = "bearish_engulfing"

    # Single candle patterns
    DOJI = "doji"
    PINBAR = "pinbar"
    INVERTED_HAMMER = "inverted_hammer"
    BULLISH_HAMMER = "bullish_hammer"
    BEARISH_HAMMER = "bearish_hammer"

    @property
    def label(self) -> str:
        """Human readable pattern name."""
        return self.value.replace("_", " ").title()

    @property
    def bias(self) -> PatternBias:
        mapping = {
            "bullish_engulfing": PatternBias.BULLISH,
            "bearish_engulfing": PatternBias.BEARISH,
            "doji": PatternBias.NEUTRAL,
            "pinbar": PatternBias.NEUTRAL,
            "inverted_hammer": PatternBias.BULLISH,
            "bullish_hammer": PatternBias.BULLISH,
            "bearish_hammer": PatternBias.BEARISH,
        }
        return mapping[self.value]

    @property
    def candle_count(self) -> int:
        """Number of bars the pattern definition reads."""
        if self in (PatternType.BULLISH_ENGULFING, PatternType.BEARISH_ENGULFING):
            return 2
        return 1


class Detection(BaseModel):
    """
    Classified pattern occurrence.

    ``timestamp`` and ``price`` are the triggering bar's open time and close.
    ``confidence`` is a display score in [0.80, 0.95); it is not a probability.
    """

    id: str = Field(
        ...,
        description="Composite identifier: instrument, pattern and bar time"
    )
    pattern: PatternType = Field(
        ...,
        description="Detected pattern"
    )
    instrument: str = Field(
        ...,
        description="Instrument symbol the series belongs to"
    )
    timeframe: str = Field(
        ...,
        description="Timeframe label of the series"
    )
    timestamp: int = Field(
        ...,
        description="Open time of the triggering bar in epoch seconds"
    )
    price: float = Field(
        ...,
        description="Close of the triggering bar"
    )
    confidence: float = Field(
        ...,
        description="Display confidence score",
        ge=CONFIDENCE_FLOOR,
        lt=CONFIDENCE_CEILING
    )

    model_config = ConfigDict(frozen=True)

    @staticmethod
    def make_id(instrument: str, pattern: PatternType, time: int) -> str:
        return f"{instrument}-{pattern.value}-{time}"

    @property
    def detected_at(self) -> datetime:
        """Triggering bar open time as a UTC datetime."""
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    @property
    def bias(self) -> PatternBias:
        return self.pattern.bias
