"""
Candlescan: Candlestick Pattern Classification Engine

Classifies OHLC price bars into a closed set of candlestick patterns
(engulfing, hammers, pinbar, inverted hammer, doji) and scans candle
series into ordered pattern detections.
"""

__version__ = "0.1.0"
__author__ = "Candlescan Team"
__description__ = "Candlestick Pattern Classification Engine"

# Package-level imports for convenience
from .config import Config
from .logger import get_scanner_logger
from .strategies.scanner import detect_latest, scan_history

__all__ = ["Config", "get_scanner_logger", "scan_history", "detect_latest", "__version__"]
