"""
Pattern Detection Configuration

This module defines the thresholds for candlestick pattern classification.
All ratios are centralized here so the predicates read as plain comparisons.

The defaults define the engine's market interpretation and are part of its
observable behavior; tests pin them.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DojiConfig:
    """Configuration for Doji pattern detection."""
    body_ratio: float = 0.15  # body relative to range


@dataclass(frozen=True)
class PinbarConfig:
    """Configuration for Pinbar pattern detection."""
    body_ratio: float = 0.4         # body relative to range
    long_wick_ratio: float = 0.6    # rejection wick relative to range
    short_wick_ratio: float = 0.2   # opposite wick relative to range


@dataclass(frozen=True)
class InvertedHammerConfig:
    """Configuration for Inverted Hammer pattern detection."""
    upper_wick_ratio: float = 2.0   # relative to body
    lower_wick_ratio: float = 0.5   # relative to body
    body_range_ratio: float = 0.4   # relative to range


@dataclass(frozen=True)
class HammerConfig:
    """Configuration for Bullish and Bearish Hammer pattern detection."""
    long_wick_ratio: float = 2.0    # relative to body
    short_wick_ratio: float = 0.25  # relative to body


@dataclass(frozen=True)
class PatternConfig:
    """Complete pattern detection configuration."""
    doji: DojiConfig = field(default_factory=DojiConfig)
    pinbar: PinbarConfig = field(default_factory=PinbarConfig)
    inverted_hammer: InvertedHammerConfig = field(default_factory=InvertedHammerConfig)
    hammer: HammerConfig = field(default_factory=HammerConfig)

    def to_dict(self) -> dict:
        """Convert configuration to a nested mapping."""
        return {
            'doji': self.doji.__dict__.copy(),
            'pinbar': self.pinbar.__dict__.copy(),
            'inverted_hammer': self.inverted_hammer.__dict__.copy(),
            'hammer': self.hammer.__dict__.copy(),
        }


DEFAULT_PATTERN_CONFIG = PatternConfig()
