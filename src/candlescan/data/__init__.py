"""
Candle data sources: local files and simulated series.
"""

from .loader import load_candles, parse_candles
from .simulator import simulate_candles

__all__ = ["load_candles", "parse_candles", "simulate_candles"]
