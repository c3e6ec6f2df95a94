"""Display-time helpers for the summary and trend chart.

Nothing here recomputes server statistics; these only slice and bound the
readings that were fetched so a chart or list can be drawn.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from bp_tracker.models.classification import ColorTier
from bp_tracker.models.reading import Reading
from bp_tracker.models.stats import AveragePeriod

DEFAULT_BP_RANGE = (50, 200)
BP_RANGE_PADDING = 10
DATE_RANGE_PADDING = timedelta(days=1)
EMPTY_DATE_RANGE_SPAN = timedelta(days=3)


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def sort_by_timestamp(readings: Iterable[Reading]) -> List[Reading]:
    """Oldest first; the server's order is not guaranteed."""
    return sorted(readings, key=lambda r: r.timestamp)


def filter_readings(
    readings: Iterable[Reading], period: AveragePeriod, now: Optional[datetime] = None
) -> List[Reading]:
    """Readings inside the averaging window ending at `now`, original order kept."""
    readings = list(readings)
    if period.days is None:
        return readings
    end = _now(now)
    start = end - timedelta(days=period.days)
    return [r for r in readings if start <= r.timestamp <= end]


def date_range(readings: Iterable[Reading], now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """X axis bounds: one day of padding either side, or today +/- 3 days when empty."""
    ordered = sort_by_timestamp(readings)
    if not ordered:
        today = _now(now).replace(hour=0, minute=0, second=0, microsecond=0)
        return today - EMPTY_DATE_RANGE_SPAN, today + EMPTY_DATE_RANGE_SPAN
    return ordered[0].timestamp - DATE_RANGE_PADDING, ordered[-1].timestamp + DATE_RANGE_PADDING


def bp_range(readings: Iterable[Reading]) -> Tuple[int, int]:
    """Y axis bounds covering systolic and diastolic values with padding."""
    readings = list(readings)
    if not readings:
        return DEFAULT_BP_RANGE
    values = [r.systolic for r in readings] + [r.diastolic for r in readings]
    return max(0, min(values) - BP_RANGE_PADDING), max(values) + BP_RANGE_PADDING


def classification_counts(readings: Iterable[Reading]) -> Dict[ColorTier, int]:
    counts = Counter(r.tier for r in readings)
    return {tier: counts.get(tier, 0) for tier in ColorTier}
