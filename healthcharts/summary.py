"""
Summary statistics module.

Numbers shown on the dashboard's summary cards:
- Averages over daily series that ignore empty days
- Activity totals and average heart rate
- Activity type distribution
"""

import statistics
from typing import Iterable, Optional

from healthcharts.models import ActivitySummary, RawRecord, RecordKind


def average_nonzero(values: Iterable[Optional[float]]) -> int:
    """Rounded mean of the values that are present and above zero, else 0."""
    valid = [v for v in values if v is not None and v > 0]
    if not valid:
        return 0
    return round(statistics.mean(valid))


def activity_summary(records: Iterable[RawRecord]) -> ActivitySummary:
    """Totals and average heart rate over activity records."""
    activities = [r for r in records if r.kind is RecordKind.ACTIVITY]

    total_distance = sum(r.distance_km or 0 for r in activities)
    total_duration = sum(r.duration_min or 0 for r in activities)
    heart_rates = [r.heart_rate for r in activities if r.heart_rate is not None]

    return ActivitySummary(
        total_distance=round(total_distance, 1),
        total_duration=round(total_duration),
        avg_heart_rate=round(statistics.mean(heart_rates)) if heart_rates else 0,
        activity_count=len(activities),
    )


def activity_type_counts(records: Iterable[RawRecord]) -> dict[str, int]:
    """Number of activities per type, in first-seen order."""
    counts: dict[str, int] = {}
    for record in records:
        if record.kind is not RecordKind.ACTIVITY:
            continue
        activity_type = record.activity_type or 'Unknown'
        counts[activity_type] = counts.get(activity_type, 0) + 1
    return counts
