"""
Pattern Classifier

Applies the geometry predicates to one bar and its predecessor in a fixed
priority order. The first matching predicate wins, so a bar is tagged with
at most one pattern even where definitions overlap.

The priority policy is the ``PATTERN_PRIORITY`` table below. Reordering it
changes how ambiguous bars are classified.
"""

import logging
from typing import Callable, Optional, Sequence, Tuple

from ...models.detections import PatternType
from ...models.market_data import Candle
from .geometry import (
    is_bearish_engulfing,
    is_bearish_hammer,
    is_bullish_engulfing,
    is_bullish_hammer,
    is_doji,
    is_inverted_hammer,
    is_pinbar,
)
from .pattern_config import DEFAULT_PATTERN_CONFIG, PatternConfig


logger = logging.getLogger(__name__)

PairPredicate = Callable[[Candle, Candle, PatternConfig], bool]


def _single(predicate: Callable[[Candle, Optional[PatternConfig]], bool]) -> PairPredicate:
    """Adapt a single-bar predicate to the (previous, current, config) signature."""
    def check(previous: Candle, current: Candle, config: PatternConfig) -> bool:
        return predicate(current, config)
    check.__name__ = predicate.__name__
    return check


def _pair(predicate: Callable[[Candle, Candle], bool]) -> PairPredicate:
    def check(previous: Candle, current: Candle, config: PatternConfig) -> bool:
        return predicate(previous, current)
    check.__name__ = predicate.__name__
    return check


PATTERN_PRIORITY: Tuple[Tuple[PatternType, PairPredicate], ...] = (
    (PatternType.BULLISH_ENGULFING, _pair(is_bullish_engulfing)),
    (PatternType.BEARISH_ENGULFING, _pair(is_bearish_engulfing)),
    (PatternType.BULLISH_HAMMER, _single(is_bullish_hammer)),
    (PatternType.BEARISH_HAMMER, _single(is_bearish_hammer)),
    (PatternType.PINBAR, _single(is_pinbar)),
    (PatternType.INVERTED_HAMMER, _single(is_inverted_hammer)),
    (PatternType.DOJI, _single(is_doji)),
)


def priority_order() -> Tuple[PatternType, ...]:
    """Pattern types from highest to lowest precedence."""
    return tuple(pattern for pattern, _ in PATTERN_PRIORITY)


def classify_pair(
    previous: Candle,
    current: Candle,
    config: Optional[PatternConfig] = None
) -> Optional[PatternType]:
    """
    Classify ``current`` given the bar before it.

    Args:
        previous: Bar immediately preceding ``current``
        current: Bar to classify
        config: Threshold overrides, defaults to DEFAULT_PATTERN_CONFIG

    Returns:
        The highest-priority matching pattern, or None
    """
    config = config or DEFAULT_PATTERN_CONFIG

    for pattern, predicate in PATTERN_PRIORITY:
        if predicate(previous, current, config):
            return pattern

    return None


def classify_at(
    series: Sequence[Candle],
    index: int,
    config: Optional[PatternConfig] = None
) -> Optional[PatternType]:
    """
    Classify the bar at ``index`` of an oldest-first series.

    A previous bar must exist, so valid indices are ``1 <= index < len(series)``.
    Indices outside that range are a caller error and yield None.
    """
    if index < 1 or index >= len(series):
        logger.debug(f"Index {index} outside classifiable range [1, {len(series)})")
        return None

    return classify_pair(series[index - 1], series[index], config)
