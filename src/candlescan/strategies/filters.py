"""
Detection feed helpers.

Post-scan routing of detections: interest filtering, text search,
newest-first presentation and de-duplication across repeated scans. None of
these change what the classifier produced; they only select and order it.
"""

from typing import Dict, Iterable, List

from ..config import NotificationConfig
from ..models.detections import Detection


def filter_detections(
    detections: Iterable[Detection],
    notification_config: NotificationConfig
) -> List[Detection]:
    """Keep detections for instruments and patterns of interest, order preserved."""
    return [d for d in detections if notification_config.allows(d)]


def search_detections(detections: Iterable[Detection], query: str) -> List[Detection]:
    """
    Case-insensitive substring search on instrument and pattern.

    Pattern matches against both the display label and the enum value.
    An empty query returns every detection.
    """
    needle = query.strip().lower()
    if not needle:
        return list(detections)

    return [
        d for d in detections
        if needle in d.instrument.lower()
        or needle in d.pattern.label.lower()
        or needle in d.pattern.value
    ]


def newest_first(detections: Iterable[Detection]) -> List[Detection]:
    """Reverse a chronological detection list for feed display."""
    return list(reversed(list(detections)))


def merge_detections(
    existing: Iterable[Detection],
    incoming: Iterable[Detection]
) -> List[Detection]:
    """
    Merge two detection lists, de-duplicating by id.

    The first occurrence of an id wins, so confidence values already shown
    for a detection do not change when the same bar is scanned again.

    Returns:
        Merged detections in chronological order
    """
    merged: Dict[str, Detection] = {}

    for detection in list(existing) + list(incoming):
        if detection.id not in merged:
            merged[detection.id] = detection

    return sorted(merged.values(), key=lambda d: d.timestamp)
