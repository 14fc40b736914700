"""
Candlescan Data Models Package

Pydantic models for the pattern engine's inputs and outputs:

- Market data models (Candle, Timeframe, Instrument)
- Detection models (PatternType, PatternBias, Detection)
"""

from .market_data import (
    MIN_RANGE,
    Candle,
    Instrument,
    Timeframe,
)

from .detections import (
    CONFIDENCE_CEILING,
    CONFIDENCE_FLOOR,
    Detection,
    PatternBias,
    PatternType,
)

__all__ = [
    # Market data models
    "MIN_RANGE",
    "Candle",
    "Instrument",
    "Timeframe",

    # Detection models
    "CONFIDENCE_CEILING",
    "CONFIDENCE_FLOOR",
    "Detection",
    "PatternBias",
    "PatternType",
]
