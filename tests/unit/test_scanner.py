"""
Unit tests for the history scanner.

Tests scan-all and scan-latest entry points, Detection construction,
chronological ordering and the confidence band.
"""

import math
import random
from typing import List

import pytest

from candlescan.models.detections import CONFIDENCE_CEILING, CONFIDENCE_FLOOR, PatternType
from candlescan.models.market_data import Candle, Timeframe
from candlescan.strategies.patterns.classifier import classify_at
from candlescan.strategies.scanner import (
    PatternScanner,
    detect_latest,
    random_confidence,
    scan_history,
)


class FixedRandom:
    """Random source returning a fixed draw."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class TestRandomConfidence:
    """Test confidence draws."""

    def test_floor(self):
        assert random_confidence(FixedRandom(0.0)) == CONFIDENCE_FLOOR

    def test_highest_draw_stays_below_ceiling(self):
        value = random_confidence(FixedRandom(math.nextafter(1.0, 0.0)))

        assert CONFIDENCE_FLOOR <= value < CONFIDENCE_CEILING

    def test_clamped_when_draw_reaches_ceiling(self):
        assert random_confidence(FixedRandom(1.0)) < CONFIDENCE_CEILING

    def test_unseeded_draws_in_band(self):
        for _ in range(1000):
            assert CONFIDENCE_FLOOR <= random_confidence() < CONFIDENCE_CEILING


class TestScanHistory:
    """Test scan-all entry point."""

    def test_bullish_engulfing_detection(self, bullish_engulfing_series: List[Candle]):
        detections = scan_history(bullish_engulfing_series, "EUR/USD", "H4")

        assert len(detections) == 1
        detection = detections[0]
        current = bullish_engulfing_series[1]
        assert detection.pattern == PatternType.BULLISH_ENGULFING
        assert detection.instrument == "EUR/USD"
        assert detection.timeframe == "H4"
        assert detection.timestamp == current.time
        assert detection.price == current.close
        assert detection.id == f"EUR/USD-bullish_engulfing-{current.time}"

    def test_no_detection(self, trending_series: List[Candle]):
        assert scan_history(trending_series, "EUR/USD", "H4") == []

    @pytest.mark.parametrize("length", [0, 1])
    def test_short_series(self, doji_series: List[Candle], length: int):
        assert scan_history(doji_series[:length], "EUR/USD", "H4") == []

    def test_first_bar_never_classified(self, doji_series: List[Candle]):
        """The oldest bar has no predecessor, even when it alone looks like a doji."""
        series = [doji_series[1]] + [
            Candle(time=doji_series[1].time + 14400, open=1.1002, high=1.1052, low=1.1000, close=1.1050)
        ]

        assert scan_history(series, "EUR/USD", "H4") == []

    def test_any_instrument_identifier(self, doji_series: List[Candle]):
        """An empty instrument id still yields every detection."""
        detections = scan_history(doji_series, "", "H4")

        assert [d.pattern for d in detections] == [PatternType.DOJI]
        assert detections[0].id == f"-doji-{doji_series[-1].time}"

    def test_timeframe_enum_label(self, doji_series: List[Candle]):
        detections = scan_history(doji_series, "EUR/USD", Timeframe.ONE_DAY)

        assert detections[0].timeframe == "D1"

    def test_chronological_order(self, simulated_series: List[Candle]):
        detections = scan_history(simulated_series, "EUR/USD", "H4")
        times = [d.timestamp for d in detections]

        assert len(detections) > 0
        assert times == sorted(times)
        assert len(set(times)) == len(times)

    def test_each_detection_matches_one_candle(self, simulated_series: List[Candle]):
        by_time = {candle.time: index for index, candle in enumerate(simulated_series)}

        for detection in scan_history(simulated_series, "EUR/USD", "H4"):
            index = by_time[detection.timestamp]
            assert index >= 1
            assert detection.price == simulated_series[index].close
            assert detection.pattern == classify_at(simulated_series, index)

    def test_matches_single_index_classifier(self, simulated_series: List[Candle]):
        expected = [
            simulated_series[i].time
            for i in range(1, len(simulated_series))
            if classify_at(simulated_series, i) is not None
        ]

        assert [d.timestamp for d in scan_history(simulated_series, "EUR/USD", "H4")] == expected

    def test_confidence_bound(self, simulated_series: List[Candle]):
        for detection in scan_history(simulated_series, "EUR/USD", "H4"):
            assert CONFIDENCE_FLOOR <= detection.confidence < CONFIDENCE_CEILING

    def test_repeated_scans_agree(self, simulated_series: List[Candle]):
        """Identity fields are stable across scans; only confidence may differ."""
        def keys(detections):
            return [(d.id, d.pattern, d.timestamp, d.price) for d in detections]

        first = scan_history(simulated_series, "EUR/USD", "H4")
        second = scan_history(simulated_series, "EUR/USD", "H4")

        assert keys(first) == keys(second)

    def test_does_not_modify_input(self, simulated_series: List[Candle]):
        snapshot = list(simulated_series)

        scan_history(simulated_series, "EUR/USD", "H4")

        assert simulated_series == snapshot


class TestDetectLatest:
    """Test scan-latest entry point."""

    def test_latest_bar(self, bullish_hammer_series: List[Candle]):
        detection = detect_latest(bullish_hammer_series, "EUR/USD", "H4")

        assert detection is not None
        assert detection.pattern == PatternType.BULLISH_HAMMER
        assert detection.timestamp == bullish_hammer_series[-1].time

    def test_only_final_bar_evaluated(self, bullish_engulfing_series: List[Candle], trending_series: List[Candle]):
        shift = bullish_engulfing_series[-1].time + 14400
        tail = [c.model_copy(update={"time": c.time + shift}) for c in trending_series]

        assert detect_latest(bullish_engulfing_series + tail, "EUR/USD", "H4") is None

    def test_no_pattern(self, trending_series: List[Candle]):
        assert detect_latest(trending_series, "EUR/USD", "H4") is None

    @pytest.mark.parametrize("length", [0, 1])
    def test_short_series(self, doji_series: List[Candle], length: int):
        assert detect_latest(doji_series[:length], "EUR/USD", "H4") is None

    def test_agrees_with_history_tail(self, simulated_series: List[Candle]):
        for end in range(2, 60):
            window = simulated_series[:end]
            latest = detect_latest(window, "EUR/USD", "H4")
            history = scan_history(window, "EUR/USD", "H4")

            if latest is None:
                assert not history or history[-1].timestamp != window[-1].time
            else:
                assert history[-1].id == latest.id


class TestPatternScanner:
    """Test scanner configuration."""

    def test_seeded_confidence_reproducible(self, simulated_series: List[Candle]):
        first = PatternScanner(seed=11).scan_history(simulated_series, "EUR/USD", "H4")
        second = PatternScanner(seed=11).scan_history(simulated_series, "EUR/USD", "H4")

        assert [d.confidence for d in first] == [d.confidence for d in second]
        assert first == second

    def test_custom_confidence_source(self, doji_series: List[Candle]):
        scanner = PatternScanner(confidence_source=lambda: 0.9)

        detection = scanner.detect_latest(doji_series, "EUR/USD", "H4")

        assert detection.confidence == 0.9

    def test_seeded_rng_isolated_from_global(self, doji_series: List[Candle]):
        scanner = PatternScanner(seed=3)
        expected = random_confidence(random.Random(3))

        random.seed(999)
        detection = scanner.detect_latest(doji_series, "EUR/USD", "H4")

        assert detection.confidence == expected

    @pytest.mark.parametrize("index", [-1, 0, 2])
    def test_detect_at_out_of_range(self, doji_series: List[Candle], index: int):
        assert PatternScanner().detect_at(doji_series, index, "EUR/USD", "H4") is None

    def test_detect_at(self, doji_series: List[Candle]):
        detection = PatternScanner().detect_at(doji_series, 1, "XAU/USD", "W1")

        assert detection.pattern == PatternType.DOJI
        assert detection.id == f"XAU/USD-doji-{doji_series[1].time}"
