"""
Candlestick Pattern Recognition Module

This module contains the geometry predicates and the priority-ordered
classifier for candlestick patterns.

Pattern Types:
- Two candle patterns (Bullish Engulfing, Bearish Engulfing)
- Single candle patterns (Bullish Hammer, Bearish Hammer, Pinbar,
  Inverted Hammer, Doji)
"""

from .classifier import PATTERN_PRIORITY, classify_at, classify_pair, priority_order
from .pattern_config import DEFAULT_PATTERN_CONFIG, PatternConfig

__all__ = [
    "PATTERN_PRIORITY",
    "classify_at",
    "classify_pair",
    "priority_order",
    "DEFAULT_PATTERN_CONFIG",
    "PatternConfig",
]
