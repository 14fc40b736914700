"""
Candlescan Pattern Strategies Package

This package contains the pattern classification engine:

- Candle geometry predicates and pattern thresholds
- Priority-ordered single-bar classification
- History scanning into Detection records
- Detection filtering and feed helpers
"""

from .scanner import (
    PatternScanner,
    detect_latest,
    random_confidence,
    scan_history,
)

__all__ = [
    "PatternScanner",
    "detect_latest",
    "random_confidence",
    "scan_history",
]
