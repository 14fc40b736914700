"""
History Scanner

Drives the pattern classifier across a candle series and turns matches into
Detection records.

Two entry points:
- scan_history: every classifiable bar, oldest first
- detect_latest: only the final bar, for incremental evaluation of the
  just-closed candle

Scans hold no state between calls. The only non-deterministic output is the
display confidence, drawn per detection from a ConfidenceSource.
"""

import logging
import math
import random
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from ..logger import get_scan_adapter
from ..models.detections import CONFIDENCE_CEILING, CONFIDENCE_FLOOR, Detection, PatternType
from ..models.market_data import Candle, Timeframe
from .patterns.classifier import classify_at
from .patterns.pattern_config import PatternConfig


logger = logging.getLogger(__name__)

ConfidenceSource = Callable[[], float]

TimeframeLabel = Union[Timeframe, str]


def random_confidence(rng: Optional[random.Random] = None) -> float:
    """
    Draw a display confidence in [CONFIDENCE_FLOOR, CONFIDENCE_CEILING).

    The value carries no statistical meaning.
    """
    draw = (rng or random).random()
    value = CONFIDENCE_FLOOR + draw * (CONFIDENCE_CEILING - CONFIDENCE_FLOOR)
    # Float rounding can land exactly on the ceiling
    if value >= CONFIDENCE_CEILING:
        value = math.nextafter(CONFIDENCE_CEILING, CONFIDENCE_FLOOR)
    return value


def _label(value: Union[Enum, str]) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class PatternScanner:
    """
    Candle series scanner.

    Wraps the classifier with Detection construction. The confidence source
    is injectable; pass ``seed`` for reproducible confidence values.
    """

    def __init__(
        self,
        confidence_source: Optional[ConfidenceSource] = None,
        seed: Optional[int] = None,
        pattern_config: Optional[PatternConfig] = None
    ):
        """
        Initialize scanner.

        Args:
            confidence_source: Callable returning a value in [0.80, 0.95)
            seed: Seed for the default confidence source, ignored when
                confidence_source is given
            pattern_config: Threshold overrides for the classifier
        """
        if confidence_source is None:
            rng = random.Random(seed) if seed is not None else None
            confidence_source = lambda: random_confidence(rng)

        self.confidence_source = confidence_source
        self.pattern_config = pattern_config

    def create_detection(
        self,
        pattern: PatternType,
        instrument: str,
        timeframe: TimeframeLabel,
        candle: Candle
    ) -> Detection:
        """Build the Detection for a classified bar."""
        return Detection(
            id=Detection.make_id(instrument, pattern, candle.time),
            pattern=pattern,
            instrument=instrument,
            timeframe=_label(timeframe),
            timestamp=candle.time,
            price=candle.close,
            confidence=self.confidence_source()
        )

    def detect_at(
        self,
        series: Sequence[Candle],
        index: int,
        instrument: str,
        timeframe: TimeframeLabel
    ) -> Optional[Detection]:
        """
        Classify one bar of the series.

        Returns None when the bar matches no pattern or when ``index`` is
        outside ``[1, len(series))``.
        """
        pattern = classify_at(series, index, self.pattern_config)
        if pattern is None:
            return None

        return self.create_detection(pattern, instrument, timeframe, series[index])

    def scan_history(
        self,
        series: Sequence[Candle],
        instrument: str,
        timeframe: TimeframeLabel
    ) -> List[Detection]:
        """
        Classify every bar that has a predecessor.

        Args:
            series: Candles ordered oldest to newest
            instrument: Instrument symbol stamped on each detection
            timeframe: Timeframe label stamped on each detection

        Returns:
            Detections in chronological order; reverse explicitly for a
            newest-first feed
        """
        detections = []

        for index in range(1, len(series)):
            detection = self.detect_at(series, index, instrument, timeframe)
            if detection is not None:
                detections.append(detection)

        scan_log = get_scan_adapter(logger, instrument, _label(timeframe))
        scan_log.debug(f"Scanned {max(0, len(series) - 1)} bars, {len(detections)} detections")
        return detections

    def detect_latest(
        self,
        series: Sequence[Candle],
        instrument: str,
        timeframe: TimeframeLabel
    ) -> Optional[Detection]:
        """Classify only the final bar of the series."""
        return self.detect_at(series, len(series) - 1, instrument, timeframe)


def scan_history(
    series: Sequence[Candle],
    instrument: str,
    timeframe: TimeframeLabel
) -> List[Detection]:
    """Scan a whole series with a default scanner."""
    return PatternScanner().scan_history(series, instrument, timeframe)


def detect_latest(
    series: Sequence[Candle],
    instrument: str,
    timeframe: TimeframeLabel
) -> Optional[Detection]:
    """Classify the final bar of a series with a default scanner."""
    return PatternScanner().detect_latest(series, instrument, timeframe)
