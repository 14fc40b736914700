"""
Candlestick Geometry Predicates

One boolean test per pattern type, built on the measurement properties of
``Candle`` (body size, floored range, wicks, direction).

Single-bar predicates take the bar under test. Engulfing predicates take the
previous bar explicitly rather than looking back into a series, so every
predicate can be exercised on hand-built candles.

Hammer, Pinbar and Doji definitions overlap at the margins; which one a bar
is tagged with is decided by the classifier's priority order, not here.
"""

from typing import Optional

from ...models.market_data import Candle
from .pattern_config import DEFAULT_PATTERN_CONFIG, PatternConfig


def is_doji(candle: Candle, config: Optional[PatternConfig] = None) -> bool:
    """Small body relative to the bar's range."""
    config = config or DEFAULT_PATTERN_CONFIG
    return candle.body_size <= candle.total_range * config.doji.body_ratio


def is_pinbar(candle: Candle, config: Optional[PatternConfig] = None) -> bool:
    """
    Small body with one dominant rejection wick.

    Either the lower wick exceeds the long-wick share of the range while the
    upper wick stays under the short-wick share, or the mirror image.
    """
    cfg = (config or DEFAULT_PATTERN_CONFIG).pinbar
    body = candle.body_size
    total_range = candle.total_range
    upper = candle.upper_wick
    lower = candle.lower_wick

    if body > total_range * cfg.body_ratio:
        return False

    # Long lower wick
    if lower > total_range * cfg.long_wick_ratio and upper < total_range * cfg.short_wick_ratio:
        return True

    # Long upper wick
    if upper > total_range * cfg.long_wick_ratio and lower < total_range * cfg.short_wick_ratio:
        return True

    return False


def is_inverted_hammer(candle: Candle, config: Optional[PatternConfig] = None) -> bool:
    """Upper wick well beyond the body, short lower wick, body small in range."""
    cfg = (config or DEFAULT_PATTERN_CONFIG).inverted_hammer
    body = candle.body_size
    return (
        candle.upper_wick > body * cfg.upper_wick_ratio
        and candle.lower_wick < body * cfg.lower_wick_ratio
        and body < candle.total_range * cfg.body_range_ratio
    )


def is_bullish_hammer(candle: Candle, config: Optional[PatternConfig] = None) -> bool:
    """Lower wick at least twice the body, upper wick under a quarter of it."""
    cfg = (config or DEFAULT_PATTERN_CONFIG).hammer
    body = candle.body_size
    return (
        candle.lower_wick >= body * cfg.long_wick_ratio
        and candle.upper_wick < body * cfg.short_wick_ratio
    )


def is_bearish_hammer(candle: Candle, config: Optional[PatternConfig] = None) -> bool:
    """Shooting star: upper wick at least twice the body, lower wick under a quarter of it."""
    cfg = (config or DEFAULT_PATTERN_CONFIG).hammer
    body = candle.body_size
    return (
        candle.upper_wick >= body * cfg.long_wick_ratio
        and candle.lower_wick < body * cfg.short_wick_ratio
    )


def is_bullish_engulfing(previous: Candle, current: Candle) -> bool:
    """Bearish bar followed by a larger bullish bar whose body covers it."""
    return (
        previous.is_bearish
        and current.is_bullish
        and current.close >= previous.open
        and current.open <= previous.close
        and current.body_size > previous.body_size
    )


def is_bearish_engulfing(previous: Candle, current: Candle) -> bool:
    """Bullish bar followed by a larger bearish bar whose body covers it."""
    return (
        previous.is_bullish
        and current.is_bearish
        and current.close <= previous.open
        and current.open >= previous.close
        and current.body_size > previous.body_size
    )
